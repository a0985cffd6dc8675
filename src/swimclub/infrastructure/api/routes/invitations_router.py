"""Invitation API routes.

Provides endpoints for creating, resending, deleting, listing, verifying and
accepting club invitations. Domain errors raised by the service are turned
into HTTP responses by the exception handler registered on the app.
"""

from fastapi import APIRouter, status

from swimclub.core.logging import get_logger
from swimclub.domain.entities import Invitation
from swimclub.domain.exceptions import InvalidInvitationError, InvitationExpiredError
from swimclub.infrastructure.api.dependencies import AuthenticatedCaller, InvitationServiceDep
from swimclub.infrastructure.api.schemas import (
    AcceptInvitationRequest,
    CreateInvitationsRequest,
    CreateInvitationsResponse,
    FailedInvitationResponse,
    InvitationResponse,
    SuccessResponse,
    VerifiedInvitationResponse,
    VerifyInvitationRequest,
    VerifyInvitationResponse,
)

logger = get_logger(__name__)

router = APIRouter()


def to_invitation_response(invitation: Invitation) -> InvitationResponse:
    """Convert an invitation entity to its API representation."""
    return InvitationResponse(
        id=invitation.id,
        email=invitation.email,
        token=invitation.token,
        role=invitation.role,
        status=invitation.status,
        created_at=invitation.created_at,
        created_by=invitation.created_by,
        expires_at=invitation.expires_at,
        updated_at=invitation.updated_at,
        accepted_at=invitation.accepted_at,
        accepted_by=invitation.accepted_by,
    )


@router.post(
    "",
    status_code=status.HTTP_200_OK,
    response_model=CreateInvitationsResponse,
    responses={
        400: {"description": "Empty email list"},
        401: {"description": "Missing or invalid access token"},
        403: {"description": "Caller is not an administrator"},
    },
)
async def create_invitations(
    request: CreateInvitationsRequest,
    caller: AuthenticatedCaller,
    service: InvitationServiceDep,
) -> CreateInvitationsResponse:
    """Invite a batch of email addresses.

    Each address is handled independently; the response lists the addresses
    that were invited and the ones that failed with a reason.
    """
    result = await service.create_invitations(
        caller,
        request.emails,
        invited_by=request.invited_by,
        role=request.role,
    )
    return CreateInvitationsResponse(
        success=result.succeeded,
        failed=[
            FailedInvitationResponse(email=item.email, reason=item.reason)
            for item in result.failed
        ],
    )


@router.get(
    "",
    response_model=list[InvitationResponse],
    responses={
        401: {"description": "Missing or invalid access token"},
        403: {"description": "Caller is not an administrator"},
    },
)
async def list_invitations(
    caller: AuthenticatedCaller,
    service: InvitationServiceDep,
) -> list[InvitationResponse]:
    """List every invitation, newest first."""
    invitations = await service.list_invitations(caller)
    return [to_invitation_response(invitation) for invitation in invitations]


@router.post(
    "/verify",
    response_model=VerifyInvitationResponse,
    response_model_exclude_none=True,
    responses={400: {"description": "Token or email missing"}},
)
async def verify_invitation(
    request: VerifyInvitationRequest,
    service: InvitationServiceDep,
) -> VerifyInvitationResponse:
    """Check a token and email pair from a registration link.

    Unknown, used and expired invitations produce ``valid: false`` with the
    reason rather than an error status.
    """
    try:
        verified = await service.verify_invitation(request.token, request.email)
    except (InvalidInvitationError, InvitationExpiredError) as e:
        return VerifyInvitationResponse(valid=False, error=e.message)

    return VerifyInvitationResponse(
        valid=True,
        invitation=VerifiedInvitationResponse(
            id=verified.id,
            email=verified.email,
            role=verified.role,
        ),
    )


@router.post(
    "/{invitation_id}/resend",
    response_model=SuccessResponse,
    responses={
        401: {"description": "Missing or invalid access token"},
        403: {"description": "Caller is not an administrator"},
        404: {"description": "Invitation not found"},
        409: {"description": "Invitation already accepted"},
        502: {"description": "Invitation email could not be sent"},
    },
)
async def resend_invitation(
    invitation_id: str,
    caller: AuthenticatedCaller,
    service: InvitationServiceDep,
) -> SuccessResponse:
    """Rotate the token of a pending invitation and email it again."""
    await service.resend_invitation(caller, invitation_id)
    return SuccessResponse()


@router.post(
    "/{invitation_id}/accept",
    response_model=SuccessResponse,
    responses={
        400: {"description": "User ID missing"},
        404: {"description": "Invitation not found"},
        409: {"description": "Invitation already used"},
        410: {"description": "Invitation expired"},
    },
)
async def accept_invitation(
    invitation_id: str,
    request: AcceptInvitationRequest,
    service: InvitationServiceDep,
) -> SuccessResponse:
    """Mark an invitation as accepted by a newly registered user."""
    await service.accept_invitation(invitation_id, request.user_id)
    return SuccessResponse()


@router.delete(
    "/{invitation_id}",
    response_model=SuccessResponse,
    responses={
        401: {"description": "Missing or invalid access token"},
        403: {"description": "Caller is not an administrator"},
        404: {"description": "Invitation not found"},
    },
)
async def delete_invitation(
    invitation_id: str,
    caller: AuthenticatedCaller,
    service: InvitationServiceDep,
) -> SuccessResponse:
    """Delete an invitation regardless of its status."""
    await service.delete_invitation(caller, invitation_id)
    return SuccessResponse()
