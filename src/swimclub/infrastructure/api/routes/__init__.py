"""API Routes for SwimClub."""

from swimclub.infrastructure.api.routes.auth_router import router as auth_router
from .invitations_router import router as invitations_router
from .registration_router import router as registration_router

__all__ = [
    "auth_router",
    "invitations_router",
    "registration_router",
]
