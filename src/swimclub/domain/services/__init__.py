"""Domain services for SwimClub.

Services contain the invitation and registration business logic. Storage,
identity and email delivery are reached through injected interfaces.
"""

from swimclub.domain.services.authorization import (
    AuthorizationOracle,
    ClaimsAuthorizationOracle,
)
from swimclub.domain.services.invitation_service import InvitationService
from swimclub.domain.services.notifier import InvitationNotifier
from swimclub.domain.services.registration_service import (
    RegisteredAccount,
    RegistrationContext,
    RegistrationService,
)

__all__ = [
    "AuthorizationOracle",
    "ClaimsAuthorizationOracle",
    "InvitationNotifier",
    "InvitationService",
    "RegisteredAccount",
    "RegistrationContext",
    "RegistrationService",
]
