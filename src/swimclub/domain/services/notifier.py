"""Interface for delivering invitation notifications."""

from abc import ABC, abstractmethod

from swimclub.domain.entities import Invitation


class InvitationNotifier(ABC):
    """Delivers the invitation message carrying the registration link."""

    @abstractmethod
    async def send_invitation(self, invitation: Invitation, resent: bool = False) -> None:
        """Send the invitation email.

        Args:
            invitation: The persisted invitation, with its current token.
            resent: Whether this is a resend of an earlier invitation.

        Raises:
            DispatchFailureError: If the message could not be delivered.
        """
        ...
