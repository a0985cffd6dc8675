"""Registration route.

Creates a club account from an invitation link and signs the new member in.
"""

from fastapi import APIRouter, status

from swimclub.core.logging import get_logger
from swimclub.infrastructure.api.dependencies import RegistrationServiceDep
from swimclub.infrastructure.api.schemas import RegisterRequest, RegisterResponse
from swimclub.infrastructure.auth import jwt_service

logger = get_logger(__name__)

router = APIRouter()


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=RegisterResponse,
    responses={
        400: {"description": "Validation error"},
        404: {"description": "Invalid invitation"},
        409: {"description": "Account already exists or invitation already used"},
        410: {"description": "Invitation expired"},
    },
)
async def register(
    request: RegisterRequest,
    service: RegistrationServiceDep,
) -> RegisterResponse:
    """Register a new member using an invitation token.

    Flow:
    1. Verify the token and email pair
    2. Create the account with the invited role
    3. Accept the invitation
    4. Issue an access token
    """
    account = await service.complete(
        token=request.token,
        email=request.email.strip(),
        password=request.password,
        display_name=request.display_name,
    )

    token = jwt_service.create_access_token(
        user_id=account.user_id,
        email=account.email,
        role=account.role.value,
    )

    logger.info("Member registered", user_id=account.user_id, role=account.role.value)

    return RegisterResponse(
        user_id=account.user_id,
        email=account.email,
        role=account.role,
        token=token,
        expires_in=jwt_service.get_expires_in(),
    )
