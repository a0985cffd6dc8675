"""Lookup and provisioning of registered club accounts."""

from abc import ABC, abstractmethod

from swimclub.domain.entities import UserRole


class UserDirectory(ABC):
    """Abstract view of the user-profile store used by the invitation flow."""

    @abstractmethod
    async def email_exists(self, email: str) -> bool:
        """Check whether an account is already registered for the email."""
        ...

    @abstractmethod
    async def get_role(self, user_id: str) -> UserRole | None:
        """Get the stored role of a user, or None if the user is unknown."""
        ...

    @abstractmethod
    async def create_account(
        self,
        email: str,
        password: str,
        role: UserRole,
        display_name: str | None = None,
    ) -> str:
        """Create an account and return the new user's ID."""
        ...
