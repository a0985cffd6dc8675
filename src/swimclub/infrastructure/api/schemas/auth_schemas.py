"""Pydantic schemas for login and registration endpoints."""

from pydantic import Field

from swimclub.domain.entities import UserRole
from swimclub.infrastructure.api.schemas.invitation_schemas import CamelModel


class LoginRequest(CamelModel):
    """Request schema for password login."""

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserResponse(CamelModel):
    """Public user details."""

    id: str
    email: str
    role: UserRole
    display_name: str | None = None


class LoginResponse(CamelModel):
    """Access token issued on successful login."""

    token: str
    expires_in: int
    user: UserResponse


class RegisterRequest(CamelModel):
    """Request schema for registering through an invitation link."""

    token: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=8, description="Password for the new account")
    display_name: str | None = None


class RegisterResponse(CamelModel):
    """The created account and an access token for it."""

    user_id: str
    email: str
    role: UserRole
    token: str
    expires_in: int
