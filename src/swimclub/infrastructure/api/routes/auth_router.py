"""Authentication API routes."""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from swimclub.core.logging import get_logger
from swimclub.domain.entities import UserRole
from swimclub.infrastructure.api.schemas import LoginRequest, LoginResponse, UserResponse
from swimclub.infrastructure.auth import DUMMY_PASSWORD_HASH, jwt_service, verify_password
from swimclub.infrastructure.persistence.database import get_db_session
from swimclub.infrastructure.persistence.repositories import UserRepository

logger = get_logger(__name__)

router = APIRouter()


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={401: {"description": "Invalid credentials"}},
)
async def login(
    request: LoginRequest,
    session: AsyncSession = Depends(get_db_session),
) -> LoginResponse | JSONResponse:
    """Authenticate a member and return an access token.

    All authentication failures return the same generic 401 message, and the
    password is always checked against a hash so unknown emails take as long
    as wrong passwords.
    """
    auth_error = JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={
            "error": "Authentication failed",
            "message": "Invalid credentials",
        },
    )

    user = await UserRepository(session).get_by_email(request.email.strip())

    if user is None:
        logger.info("Login failed: user not found", email=request.email)
        verify_password(request.password, DUMMY_PASSWORD_HASH)
        return auth_error

    if not verify_password(request.password, user.password_hash):
        logger.info("Login failed: invalid password", user_id=user.id)
        return auth_error

    token = jwt_service.create_access_token(
        user_id=user.id,
        email=user.email,
        role=user.role,
    )

    logger.info("User logged in", user_id=user.id, role=user.role)

    return LoginResponse(
        token=token,
        expires_in=jwt_service.get_expires_in(),
        user=UserResponse(
            id=user.id,
            email=user.email,
            role=UserRole(user.role),
            display_name=user.display_name,
        ),
    )
