"""Pydantic schemas for invitation API endpoints.

Field names are exposed in camelCase to match the callable interface used
by the web front end.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from swimclub.domain.entities import InvitationRole, InvitationStatus


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase field names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class CreateInvitationsRequest(CamelModel):
    """Request schema for inviting a batch of email addresses."""

    emails: list[str] | None = Field(None, description="Email addresses to invite")
    invited_by: str | None = Field(
        None, description="Issuer label; defaults to the caller's email"
    )
    role: InvitationRole = Field(
        InvitationRole.SUPPORTER, description="Role granted on acceptance"
    )


class FailedInvitationResponse(CamelModel):
    """An email that could not be invited."""

    email: str
    reason: str


class CreateInvitationsResponse(CamelModel):
    """Per-email outcome of a batch invitation."""

    success: list[str] = Field(default_factory=list)
    failed: list[FailedInvitationResponse] = Field(default_factory=list)


class SuccessResponse(CamelModel):
    """Acknowledgement for single-item operations."""

    success: bool = True


class InvitationResponse(CamelModel):
    """Full invitation record as shown to administrators."""

    id: str
    email: str
    token: str
    role: InvitationRole | None = None
    status: InvitationStatus
    created_at: datetime
    created_by: str | None = None
    expires_at: datetime
    updated_at: datetime | None = None
    accepted_at: datetime | None = None
    accepted_by: str | None = None


class VerifyInvitationRequest(CamelModel):
    """Token and email pair taken from a registration link."""

    token: str | None = None
    email: str | None = None


class VerifiedInvitationResponse(CamelModel):
    """Public fields of a verified invitation."""

    id: str
    email: str
    role: InvitationRole


class VerifyInvitationResponse(CamelModel):
    """Verification outcome. Exactly one of invitation or error is set."""

    valid: bool
    invitation: VerifiedInvitationResponse | None = None
    error: str | None = None


class AcceptInvitationRequest(CamelModel):
    """Request schema for accepting an invitation."""

    user_id: str | None = Field(None, description="ID of the newly registered user")
