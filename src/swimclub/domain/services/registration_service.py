"""Registration flow driven by an invitation link.

The link carries a token and email. Opening it verifies the pair; completing
it creates the account with the invited role and accepts the invitation.
"""

from dataclasses import dataclass

from swimclub.core.logging import get_logger
from swimclub.domain.entities import UserRole, VerifiedInvitation
from swimclub.domain.exceptions import AccountExistsError
from swimclub.domain.repositories import UserDirectory
from swimclub.domain.services.invitation_service import InvitationService

logger = get_logger(__name__)


@dataclass(frozen=True)
class RegistrationContext:
    """What the registration page needs to decide how to proceed.

    Attributes:
        invitation: The verified invitation.
        signed_in_as: Email of the currently signed-in user, if any.
    """

    invitation: VerifiedInvitation
    signed_in_as: str | None = None

    @property
    def requires_sign_out(self) -> bool:
        """True when someone else is signed in on this browser."""
        return self.signed_in_as is not None and self.signed_in_as != self.invitation.email


@dataclass(frozen=True)
class RegisteredAccount:
    """Result of a completed registration."""

    user_id: str
    email: str
    role: UserRole


class RegistrationService:
    """Consumes invitations to create club accounts."""

    def __init__(self, invitation_service: InvitationService, users: UserDirectory) -> None:
        self.invitation_service = invitation_service
        self.users = users

    async def open(
        self,
        token: str,
        email: str,
        current_user_email: str | None = None,
    ) -> RegistrationContext:
        """Verify an invitation link before showing the registration form.

        Raises:
            ValidationError, InvalidInvitationError, InvitationExpiredError:
                Propagated from verification.
        """
        invitation = await self.invitation_service.verify_invitation(token, email)
        return RegistrationContext(invitation=invitation, signed_in_as=current_user_email)

    async def complete(
        self,
        token: str,
        email: str,
        password: str,
        display_name: str | None = None,
    ) -> RegisteredAccount:
        """Create the invited account and accept the invitation.

        Raises:
            AccountExistsError: If the email already has an account.
            ValidationError, InvalidInvitationError, InvitationExpiredError,
            InvalidInvitationStateError: Propagated from the lifecycle service.
        """
        invitation = await self.invitation_service.verify_invitation(token, email)

        if await self.users.email_exists(invitation.email):
            logger.info("Registration failed: account exists", email=invitation.email)
            raise AccountExistsError(invitation.email)

        role = UserRole(invitation.role.value)
        user_id = await self.users.create_account(
            email=invitation.email,
            password=password,
            role=role,
            display_name=display_name,
        )
        await self.invitation_service.accept_invitation(invitation.id, user_id)

        logger.info(
            "Registration completed",
            invitation_id=invitation.id,
            user_id=user_id,
            role=role.value,
        )
        return RegisteredAccount(user_id=user_id, email=invitation.email, role=role)
