"""Domain entities for SwimClub."""

from swimclub.domain.entities.invitation import (
    DEFAULT_INVITATION_ROLE,
    INVITATION_TTL,
    BatchInvitationResult,
    FailedInvitation,
    Invitation,
    InvitationRole,
    InvitationStatus,
    VerifiedInvitation,
    ensure_utc,
)
from swimclub.domain.entities.user import Caller, UserRole

__all__ = [
    "BatchInvitationResult",
    "Caller",
    "DEFAULT_INVITATION_ROLE",
    "FailedInvitation",
    "INVITATION_TTL",
    "Invitation",
    "InvitationRole",
    "InvitationStatus",
    "UserRole",
    "VerifiedInvitation",
    "ensure_utc",
]
