"""API request and response schemas."""

from swimclub.infrastructure.api.schemas.auth_schemas import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    UserResponse,
)
from swimclub.infrastructure.api.schemas.invitation_schemas import (
    AcceptInvitationRequest,
    CamelModel,
    CreateInvitationsRequest,
    CreateInvitationsResponse,
    FailedInvitationResponse,
    InvitationResponse,
    SuccessResponse,
    VerifiedInvitationResponse,
    VerifyInvitationRequest,
    VerifyInvitationResponse,
)

__all__ = [
    "AcceptInvitationRequest",
    "CamelModel",
    "CreateInvitationsRequest",
    "CreateInvitationsResponse",
    "FailedInvitationResponse",
    "InvitationResponse",
    "LoginRequest",
    "LoginResponse",
    "RegisterRequest",
    "RegisterResponse",
    "SuccessResponse",
    "UserResponse",
    "VerifiedInvitationResponse",
    "VerifyInvitationRequest",
    "VerifyInvitationResponse",
]
