"""SQLAlchemy model for the invitations table."""

from datetime import datetime

from sqlalchemy import DateTime, Index, String, func
from sqlalchemy.orm import Mapped, mapped_column

from swimclub.infrastructure.persistence.database import Base


class InvitationModel(Base):
    """SQLAlchemy model for the invitations table.

    Attributes:
        id: Primary key (UUID string).
        email: Email address of the invited person.
        token: Current secret token.
        role: Role to grant on acceptance (nullable on legacy rows).
        status: pending or accepted.
        created_by: Issuing administrator.
        expires_at: Timestamp when the current token expires.
        created_at: Timestamp when the invitation was created.
        updated_at: Timestamp of the last token rotation.
        accepted_at: Timestamp when the invitation was accepted.
        accepted_by: ID of the user who accepted it.
    """

    __tablename__ = "invitations"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        comment="Invitation ID (UUID)",
    )
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        comment="Email address of the invited person",
    )
    token: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        index=True,
        comment="Secure random token for the registration link",
    )
    role: Mapped[str | None] = mapped_column(
        String(20),
        nullable=True,
        comment="Role granted on acceptance",
    )
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="pending",
        comment="pending or accepted",
    )
    created_by: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        comment="Administrator who issued the invitation",
    )
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    accepted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    accepted_by: Mapped[str | None] = mapped_column(
        String(36),
        nullable=True,
        comment="User ID that accepted the invitation",
    )

    __table_args__ = (
        Index("ix_invitations_email_status", "email", "status"),
    )

    def __repr__(self) -> str:
        return f"<Invitation(id={self.id}, email={self.email}, status={self.status})>"
