"""Invitation repository for database operations."""

from datetime import datetime, timezone

from sqlalchemy import and_, delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from swimclub.domain.entities import Invitation, InvitationRole, InvitationStatus
from swimclub.domain.exceptions import InvitationNotFoundError
from swimclub.domain.repositories import InvitationRepository
from swimclub.infrastructure.persistence.models import InvitationModel


def as_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive timestamps (SQLite drops the offset)."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def to_entity(model: InvitationModel) -> Invitation:
    """Map a database row to an Invitation entity."""
    return Invitation(
        id=model.id,
        email=model.email,
        token=model.token,
        role=InvitationRole(model.role) if model.role else None,
        status=InvitationStatus(model.status),
        created_by=model.created_by,
        expires_at=as_utc(model.expires_at),
        created_at=as_utc(model.created_at),
        updated_at=as_utc(model.updated_at),
        accepted_at=as_utc(model.accepted_at),
        accepted_by=model.accepted_by,
    )


def apply_entity(model: InvitationModel, invitation: Invitation) -> InvitationModel:
    """Copy the mutable entity fields onto a database row."""
    model.email = invitation.email
    model.token = invitation.token
    model.role = invitation.role.value if invitation.role else None
    model.status = invitation.status.value
    model.created_by = invitation.created_by
    model.expires_at = invitation.expires_at
    model.created_at = invitation.created_at
    model.updated_at = invitation.updated_at
    model.accepted_at = invitation.accepted_at
    model.accepted_by = invitation.accepted_by
    return model


class SQLAlchemyInvitationRepository(InvitationRepository):
    """Invitation store backed by the invitations table.

    Every write is committed immediately, so a record persisted before an
    email dispatch survives a dispatch failure.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def _get_model(self, invitation_id: str) -> InvitationModel | None:
        result = await self.session.execute(
            select(InvitationModel).where(InvitationModel.id == invitation_id)
        )
        return result.scalar_one_or_none()

    async def get(self, invitation_id: str) -> Invitation | None:
        model = await self._get_model(invitation_id)
        return to_entity(model) if model else None

    async def create(self, invitation: Invitation) -> Invitation:
        model = apply_entity(InvitationModel(id=invitation.id), invitation)
        self.session.add(model)
        await self.session.commit()
        return invitation

    async def update(self, invitation: Invitation) -> Invitation:
        model = await self._get_model(invitation.id)
        if model is None:
            raise InvitationNotFoundError(invitation.id)
        apply_entity(model, invitation)
        await self.session.commit()
        return invitation

    async def delete(self, invitation_id: str) -> bool:
        result = await self.session.execute(
            delete(InvitationModel).where(InvitationModel.id == invitation_id)
        )
        await self.session.commit()
        return result.rowcount > 0

    async def find_pending_by_email(self, email: str) -> Invitation | None:
        result = await self.session.execute(
            select(InvitationModel)
            .where(
                and_(
                    InvitationModel.email == email,
                    InvitationModel.status == InvitationStatus.PENDING.value,
                )
            )
            .limit(1)
        )
        model = result.scalar_one_or_none()
        return to_entity(model) if model else None

    async def find_pending_by_email_and_token(
        self, email: str, token: str
    ) -> Invitation | None:
        result = await self.session.execute(
            select(InvitationModel)
            .where(
                and_(
                    InvitationModel.email == email,
                    InvitationModel.token == token,
                    InvitationModel.status == InvitationStatus.PENDING.value,
                )
            )
            .limit(1)
        )
        model = result.scalar_one_or_none()
        return to_entity(model) if model else None

    async def list_all(self) -> list[Invitation]:
        result = await self.session.execute(
            select(InvitationModel).order_by(InvitationModel.created_at.desc())
        )
        return [to_entity(model) for model in result.scalars().all()]
