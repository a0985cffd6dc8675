"""Administrator checks for invitation management."""

from abc import ABC, abstractmethod
from typing import Any

from swimclub.core.logging import get_logger
from swimclub.domain.entities import UserRole
from swimclub.domain.repositories import UserDirectory

logger = get_logger(__name__)


class AuthorizationOracle(ABC):
    """Decides whether a caller may perform administrator operations."""

    @abstractmethod
    async def is_admin(self, caller_id: str | None, claims: dict[str, Any]) -> bool:
        """Return True if the caller is an administrator."""
        ...


class ClaimsAuthorizationOracle(AuthorizationOracle):
    """Trusts an admin role claim, otherwise consults the stored profile.

    Claims are issued at login and may lag behind a role change, so a
    non-admin claim is re-checked against the user directory.
    """

    def __init__(self, users: UserDirectory) -> None:
        self.users = users

    async def is_admin(self, caller_id: str | None, claims: dict[str, Any]) -> bool:
        if not caller_id:
            return False

        if claims.get("role") == UserRole.ADMIN.value:
            return True

        stored_role = await self.users.get_role(caller_id)
        if stored_role == UserRole.ADMIN:
            logger.debug("Admin role found in profile, claim is stale", user_id=caller_id)
            return True
        return False
