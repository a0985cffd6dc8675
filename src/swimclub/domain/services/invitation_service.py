"""Invitation lifecycle service.

Orchestrates creating, resending, deleting, listing, verifying and accepting
invitations. State is read from and written to an injected
InvitationRepository; no step runs inside a transaction, so two concurrent
creates for one email can both succeed and a concurrent resend and accept on
the same invitation resolve as last write wins.
"""

import uuid
from collections.abc import Callable, Iterable
from datetime import datetime, timedelta, timezone

from email_validator import EmailNotValidError, validate_email

from swimclub.core.logging import get_logger, mask_token
from swimclub.domain.entities import (
    DEFAULT_INVITATION_ROLE,
    INVITATION_TTL,
    BatchInvitationResult,
    Caller,
    FailedInvitation,
    Invitation,
    InvitationRole,
    InvitationStatus,
    VerifiedInvitation,
)
from swimclub.domain.exceptions import (
    DispatchFailureError,
    InvalidInvitationError,
    InvalidInvitationStateError,
    InvitationExpiredError,
    InvitationNotFoundError,
    UnauthorizedError,
    ValidationError,
)
from swimclub.domain.repositories import InvitationRepository, UserDirectory
from swimclub.domain.services.authorization import AuthorizationOracle
from swimclub.domain.services.notifier import InvitationNotifier
from swimclub.infrastructure.services.token_service import TokenService, token_service

logger = get_logger(__name__)

REASON_INVALID_EMAIL = "Invalid email address"
REASON_USER_EXISTS = "User already exists"
REASON_ALREADY_INVITED = "Invitation already sent"


def utc_now() -> datetime:
    """Default clock."""
    return datetime.now(timezone.utc)


class InvitationService:
    """Service for the invitation lifecycle business logic."""

    def __init__(
        self,
        invitations: InvitationRepository,
        users: UserDirectory,
        authorization: AuthorizationOracle,
        notifier: InvitationNotifier,
        tokens: TokenService = token_service,
        clock: Callable[[], datetime] = utc_now,
        ttl: timedelta = INVITATION_TTL,
    ) -> None:
        """Initialize the invitation service.

        Args:
            invitations: Store for invitation records.
            users: Directory of registered accounts.
            authorization: Oracle deciding whether a caller is an administrator.
            notifier: Sends invitation emails.
            tokens: Generator for invitation tokens.
            clock: Callable returning the current UTC time.
            ttl: How long an issued or resent token stays valid.
        """
        self.invitations = invitations
        self.users = users
        self.authorization = authorization
        self.notifier = notifier
        self.tokens = tokens
        self.clock = clock
        self.ttl = ttl

    async def _require_admin(self, caller: Caller | None, action: str) -> Caller:
        if caller is None:
            raise UnauthorizedError(f"You must be logged in to {action}")
        if not await self.authorization.is_admin(caller.user_id, caller.claims):
            logger.info("Admin check failed", user_id=caller.user_id, action=action)
            raise UnauthorizedError(f"Only admins can {action}")
        return caller

    async def create_invitations(
        self,
        caller: Caller | None,
        emails: Iterable[str] | None,
        invited_by: str | None = None,
        role: InvitationRole = DEFAULT_INVITATION_ROLE,
    ) -> BatchInvitationResult:
        """Create and send invitations for a batch of email addresses.

        Emails are processed one at a time, in order. A failure for one
        email is recorded in the result and the batch carries on.

        Args:
            caller: The authenticated administrator.
            emails: Email addresses to invite.
            invited_by: Optional issuer label; defaults to the caller's email.
            role: Role granted to every invitee of this batch.

        Returns:
            BatchInvitationResult listing succeeded and failed emails.

        Raises:
            UnauthorizedError: If the caller is not an administrator.
            ValidationError: If no emails were given.
        """
        caller = await self._require_admin(caller, "send invitations")

        email_list = list(emails or [])
        if not email_list:
            raise ValidationError("Invalid input: emails must be a non-empty array")

        issuer = invited_by or caller.email
        result = BatchInvitationResult()

        for raw_email in email_list:
            email = raw_email.strip() if isinstance(raw_email, str) else ""
            try:
                reason = await self._create_one(email, issuer, role)
            except DispatchFailureError as e:
                reason = e.reason
            except Exception as e:
                logger.error("Error creating invitation", email=email, error=str(e))
                reason = str(e) or "Unknown error"

            if reason is None:
                result.succeeded.append(email)
            else:
                result.failed.append(FailedInvitation(email=email or str(raw_email), reason=reason))

        logger.info(
            "Invitation batch processed",
            invited_by=issuer,
            succeeded=len(result.succeeded),
            failed=len(result.failed),
        )
        return result

    async def _create_one(
        self, email: str, issuer: str, role: InvitationRole
    ) -> str | None:
        """Create a single invitation; return a failure reason or None."""
        try:
            validate_email(email, check_deliverability=False)
        except EmailNotValidError:
            return REASON_INVALID_EMAIL

        if await self.users.email_exists(email):
            logger.info("Invitation skipped: user already exists", email=email)
            return REASON_USER_EXISTS

        if await self.invitations.find_pending_by_email(email) is not None:
            logger.info("Invitation skipped: pending invitation exists", email=email)
            return REASON_ALREADY_INVITED

        now = self.clock()
        invitation = Invitation(
            id=str(uuid.uuid4()),
            email=email,
            token=self.tokens.generate_token(),
            role=role,
            status=InvitationStatus.PENDING,
            created_by=issuer,
            created_at=now,
            expires_at=now + self.ttl,
        )
        await self.invitations.create(invitation)

        logger.info(
            "Invitation created",
            invitation_id=invitation.id,
            email=email,
            role=invitation.effective_role.value,
            created_by=issuer,
        )

        # The record stays even if the email cannot be sent
        await self.notifier.send_invitation(invitation)
        return None

    async def resend_invitation(self, caller: Caller | None, invitation_id: str) -> Invitation:
        """Issue a new token for a pending invitation and email it again.

        Raises:
            UnauthorizedError: If the caller is not an administrator.
            InvitationNotFoundError: If the invitation does not exist.
            InvalidInvitationStateError: If the invitation was already accepted.
            DispatchFailureError: If the email could not be sent. The new token
                is already stored at that point.
        """
        await self._require_admin(caller, "resend invitations")

        invitation = await self._get_or_raise(invitation_id)
        if not invitation.is_pending:
            raise InvalidInvitationStateError(
                "Cannot resend an invitation that has already been accepted"
            )

        invitation.rotate_token(self.tokens.generate_token(), self.clock(), self.ttl)
        await self.invitations.update(invitation)

        logger.info(
            "Invitation token rotated",
            invitation_id=invitation.id,
            email=invitation.email,
            expires_at=invitation.expires_at.isoformat(),
        )

        await self.notifier.send_invitation(invitation, resent=True)
        logger.info("Invitation resent", invitation_id=invitation.id, email=invitation.email)
        return invitation

    async def delete_invitation(self, caller: Caller | None, invitation_id: str) -> None:
        """Delete an invitation regardless of its status.

        Raises:
            UnauthorizedError: If the caller is not an administrator.
            InvitationNotFoundError: If no invitation has this ID.
        """
        await self._require_admin(caller, "delete invitations")

        if not await self.invitations.delete(invitation_id):
            logger.info("Invitation deletion failed: not found", invitation_id=invitation_id)
            raise InvitationNotFoundError(invitation_id)

        logger.info("Invitation deleted", invitation_id=invitation_id)

    async def list_invitations(self, caller: Caller | None) -> list[Invitation]:
        """List all invitations, newest first.

        Raises:
            UnauthorizedError: If the caller is not an administrator.
        """
        await self._require_admin(caller, "view invitations")
        invitations = await self.invitations.list_all()
        logger.info("Listed invitations", count=len(invitations))
        return invitations

    async def verify_invitation(self, token: str | None, email: str | None) -> VerifiedInvitation:
        """Check a token and email pair from a registration link.

        Requires no authentication and never modifies the stored record.

        Raises:
            ValidationError: If token or email is missing.
            InvalidInvitationError: If no pending invitation matches exactly.
            InvitationExpiredError: If the matching invitation has expired.
        """
        if not token or not email:
            raise ValidationError("Invalid request: token and email are required")

        invitation = await self.invitations.find_pending_by_email_and_token(email, token)
        if invitation is None:
            logger.info("Invitation verification failed: no match", email=email, token=mask_token(token))
            raise InvalidInvitationError()

        if invitation.is_expired_at(self.clock()):
            logger.info(
                "Invitation verification failed: expired",
                invitation_id=invitation.id,
                expired_at=invitation.expires_at.isoformat(),
            )
            raise InvitationExpiredError()

        return VerifiedInvitation(
            id=invitation.id,
            email=invitation.email,
            role=invitation.effective_role,
        )

    async def accept_invitation(self, invitation_id: str | None, user_id: str | None) -> Invitation:
        """Mark a pending invitation as accepted by a newly registered user.

        Raises:
            ValidationError: If invitation_id or user_id is missing.
            InvitationNotFoundError: If the invitation does not exist.
            InvalidInvitationStateError: If the invitation was already accepted.
            InvitationExpiredError: If the invitation has expired.
        """
        if not invitation_id or not user_id:
            raise ValidationError("Invalid request: invitationId and userId are required")

        invitation = await self._get_or_raise(invitation_id)
        if not invitation.is_pending:
            raise InvalidInvitationStateError("Invitation has already been used")

        now = self.clock()
        if invitation.is_expired_at(now):
            raise InvitationExpiredError()

        invitation.mark_accepted(user_id, now)
        await self.invitations.update(invitation)

        logger.info("Invitation accepted", invitation_id=invitation.id, user_id=user_id)
        return invitation

    async def _get_or_raise(self, invitation_id: str) -> Invitation:
        invitation = await self.invitations.get(invitation_id)
        if invitation is None:
            raise InvitationNotFoundError(invitation_id)
        return invitation
