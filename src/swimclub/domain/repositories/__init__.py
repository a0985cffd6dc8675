"""Repository interfaces used by the domain services."""

from swimclub.domain.repositories.invitation_repository import InvitationRepository
from swimclub.domain.repositories.user_directory import UserDirectory

__all__ = [
    "InvitationRepository",
    "UserDirectory",
]
