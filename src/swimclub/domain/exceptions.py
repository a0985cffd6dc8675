"""Exceptions raised by the invitation lifecycle.

Authorization failures are a separate branch from the request/state errors
so callers can tell "you may not do this" apart from "this request is
malformed or stale".
"""


class InvitationError(Exception):
    """Base class for all invitation lifecycle errors."""

    label = "Invitation error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class UnauthorizedError(InvitationError):
    """Raised when the caller lacks the role required for an operation."""

    label = "Unauthorized"


class ValidationError(InvitationError):
    """Raised when request input is missing or malformed."""

    label = "Validation error"


class InvitationNotFoundError(InvitationError):
    """Raised when a referenced invitation id does not exist."""

    label = "Not found"

    def __init__(self, invitation_id: str) -> None:
        self.invitation_id = invitation_id
        super().__init__("Invitation not found")


class InvalidInvitationError(InvitationError):
    """Raised when no pending invitation matches a token and email pair."""

    label = "Invalid invitation"

    def __init__(self, message: str = "Invalid or expired invitation") -> None:
        super().__init__(message)


class InvalidInvitationStateError(InvitationError):
    """Raised when an operation is not valid for the invitation's status."""

    label = "Invalid state"


class InvitationExpiredError(InvitationError):
    """Raised when an invitation is used after its expiry time."""

    label = "Expired"

    def __init__(self, message: str = "Invitation has expired") -> None:
        super().__init__(message)


class DispatchFailureError(InvitationError):
    """Raised when the invitation email could not be delivered.

    The invitation record is kept; resending recovers from this.
    """

    label = "Dispatch failure"

    def __init__(self, email: str, reason: str) -> None:
        self.email = email
        self.reason = reason
        super().__init__(f"Failed to send invitation email: {reason}")


class AccountExistsError(InvitationError):
    """Raised when registering an email that already has an account."""

    label = "Conflict"

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__("User already exists")
