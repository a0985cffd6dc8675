"""Storage abstraction for invitations."""

from abc import ABC, abstractmethod

from swimclub.domain.entities import Invitation


class InvitationRepository(ABC):
    """Abstract store for invitation records.

    Implementations are plain document stores: they do not enforce the
    one-pending-invitation-per-email rule, the lifecycle service does.
    """

    @abstractmethod
    async def get(self, invitation_id: str) -> Invitation | None:
        """Get an invitation by ID, or None if it does not exist."""
        ...

    @abstractmethod
    async def create(self, invitation: Invitation) -> Invitation:
        """Persist a new invitation."""
        ...

    @abstractmethod
    async def update(self, invitation: Invitation) -> Invitation:
        """Overwrite the stored fields of an existing invitation."""
        ...

    @abstractmethod
    async def delete(self, invitation_id: str) -> bool:
        """Delete an invitation.

        Returns:
            True if a record was removed, False if none existed.
        """
        ...

    @abstractmethod
    async def find_pending_by_email(self, email: str) -> Invitation | None:
        """Find a pending invitation for the exact email address."""
        ...

    @abstractmethod
    async def find_pending_by_email_and_token(
        self, email: str, token: str
    ) -> Invitation | None:
        """Find a pending invitation matching both email and token exactly."""
        ...

    @abstractmethod
    async def list_all(self) -> list[Invitation]:
        """List all invitations, newest first by creation time."""
        ...
