"""Persistence repositories for database operations."""

from swimclub.infrastructure.persistence.repositories.invitation_repository import (
    SQLAlchemyInvitationRepository,
)
from swimclub.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)

__all__ = [
    "SQLAlchemyInvitationRepository",
    "UserRepository",
]
