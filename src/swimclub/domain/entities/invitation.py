"""Invitation entity for club member onboarding.

Invitations allow club administrators to invite athletes and supporters by
email. The invitation carries a secure token that stays valid for a fixed
period; expiry is evaluated lazily when the token is checked.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum

INVITATION_TTL = timedelta(days=7)


class InvitationStatus(str, Enum):
    """Persisted lifecycle states of an invitation."""

    PENDING = "pending"
    ACCEPTED = "accepted"


class InvitationRole(str, Enum):
    """Roles that can be granted through an invitation.

    Administrators are never invited; they are created out of band.
    """

    ATHLETE = "athlete"
    SUPPORTER = "supporter"


DEFAULT_INVITATION_ROLE = InvitationRole.SUPPORTER


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes (as returned by SQLite) as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


@dataclass
class Invitation:
    """Invitation entity.

    Attributes:
        id: Unique identifier (UUID string).
        email: Email address of the invited person.
        token: Secret token embedded in the registration link.
        role: Role granted on acceptance. None on legacy records.
        status: Lifecycle state, pending or accepted.
        created_by: Identity of the administrator who issued the invitation.
        expires_at: Timestamp after which the token is no longer accepted.
        created_at: Timestamp when the invitation was created.
        updated_at: Timestamp of the last token rotation (nullable).
        accepted_at: Timestamp when the invitation was accepted (nullable).
        accepted_by: ID of the user who accepted the invitation (nullable).
    """

    id: str
    email: str
    token: str
    expires_at: datetime
    role: InvitationRole | None = DEFAULT_INVITATION_ROLE
    status: InvitationStatus = InvitationStatus.PENDING
    created_by: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime | None = None
    accepted_at: datetime | None = None
    accepted_by: str | None = None

    def __post_init__(self) -> None:
        """Validate invitation data after initialization."""
        if not self.id:
            raise ValueError("Invitation ID is required")
        if not self.email:
            raise ValueError("Email is required")
        if not self.token:
            raise ValueError("Token is required")
        self.expires_at = ensure_utc(self.expires_at)
        self.created_at = ensure_utc(self.created_at)

    @property
    def is_pending(self) -> bool:
        """Check if the invitation is still waiting to be accepted."""
        return self.status == InvitationStatus.PENDING

    @property
    def effective_role(self) -> InvitationRole:
        """Role to grant, falling back to supporter for records without one."""
        return self.role or DEFAULT_INVITATION_ROLE

    def is_expired_at(self, now: datetime) -> bool:
        """Check if the invitation has expired at the given instant."""
        return ensure_utc(self.expires_at) <= ensure_utc(now)

    def rotate_token(self, token: str, now: datetime, ttl: timedelta = INVITATION_TTL) -> None:
        """Replace the token and restart the validity window."""
        self.token = token
        self.expires_at = now + ttl
        self.updated_at = now

    def mark_accepted(self, user_id: str, now: datetime) -> None:
        """Transition the invitation to accepted."""
        self.status = InvitationStatus.ACCEPTED
        self.accepted_at = now
        self.accepted_by = user_id


@dataclass(frozen=True)
class VerifiedInvitation:
    """Public view of an invitation returned by a successful verification."""

    id: str
    email: str
    role: InvitationRole


@dataclass
class FailedInvitation:
    """A single email that could not be invited, with the reason."""

    email: str
    reason: str


@dataclass
class BatchInvitationResult:
    """Outcome of a batch invitation request.

    Each email ends up in exactly one of the two lists.
    """

    succeeded: list[str] = field(default_factory=list)
    failed: list[FailedInvitation] = field(default_factory=list)
