"""FastAPI dependencies for authentication and service wiring.

Extracts the caller from the bearer token and assembles the invitation
and registration services for each request.
"""

from datetime import timedelta
from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from swimclub.core.config import get_settings
from swimclub.core.logging import get_logger
from swimclub.domain.entities import Caller
from swimclub.domain.services import (
    ClaimsAuthorizationOracle,
    InvitationService,
    RegistrationService,
)
from swimclub.infrastructure.auth import InvalidTokenError, TokenExpiredError, jwt_service
from swimclub.infrastructure.persistence.database import get_db_session
from swimclub.infrastructure.persistence.repositories import (
    SQLAlchemyInvitationRepository,
    UserRepository,
)
from swimclub.infrastructure.services.email import EmailProvider, build_email_provider
from swimclub.infrastructure.services.invitation_mailer import InvitationMailer

logger = get_logger(__name__)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_caller(
    authorization: Annotated[str | None, Header()] = None,
) -> Caller:
    """Extract and validate the caller from the Authorization header.

    Raises:
        HTTPException: 401 if the token is missing, invalid, or expired.
    """
    if authorization is None:
        logger.info("Authentication failed: missing Authorization header")
        raise _unauthorized("Missing Authorization header")

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        logger.info("Authentication failed: invalid Authorization header format")
        raise _unauthorized("Could not validate credentials")

    try:
        payload = jwt_service.validate_access_token(parts[1])
        return Caller(
            user_id=payload["user_id"],
            email=payload["email"],
            claims={"role": payload.get("role")},
        )
    except TokenExpiredError:
        logger.info("Authentication failed: token expired")
        raise _unauthorized("Token has expired")
    except InvalidTokenError as e:
        logger.info("Authentication failed: invalid token", error=str(e))
        raise _unauthorized(f"Invalid token: {str(e)}")
    except KeyError as e:
        logger.warning("Authentication failed: missing claim in token", missing_claim=str(e))
        raise _unauthorized(f"Missing claim: {str(e)}")


# Type alias for dependency injection
AuthenticatedCaller = Annotated[Caller, Depends(get_current_caller)]


def get_email_provider(request: Request) -> EmailProvider:
    """Get the email provider from app state, creating it on first use."""
    if not hasattr(request.app.state, "email_provider"):
        request.app.state.email_provider = build_email_provider(get_settings())
    return request.app.state.email_provider


def get_invitation_service(
    session: Annotated[AsyncSession, Depends(get_db_session)],
    email_provider: Annotated[EmailProvider, Depends(get_email_provider)],
) -> InvitationService:
    """Assemble the invitation service for the current request."""
    settings = get_settings()
    users = UserRepository(session)
    return InvitationService(
        invitations=SQLAlchemyInvitationRepository(session),
        users=users,
        authorization=ClaimsAuthorizationOracle(users),
        notifier=InvitationMailer(email_provider, settings),
        ttl=timedelta(days=settings.invitation_ttl_days),
    )


def get_registration_service(
    session: Annotated[AsyncSession, Depends(get_db_session)],
    invitation_service: Annotated[InvitationService, Depends(get_invitation_service)],
) -> RegistrationService:
    """Assemble the registration service for the current request."""
    return RegistrationService(invitation_service, UserRepository(session))


InvitationServiceDep = Annotated[InvitationService, Depends(get_invitation_service)]
RegistrationServiceDep = Annotated[RegistrationService, Depends(get_registration_service)]
