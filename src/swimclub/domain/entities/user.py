"""User roles and the caller identity seen by domain services."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class UserRole(str, Enum):
    """Roles a registered club member can hold."""

    ADMIN = "admin"
    ATHLETE = "athlete"
    SUPPORTER = "supporter"


@dataclass(frozen=True)
class Caller:
    """The authenticated identity behind a request.

    Attributes:
        user_id: ID of the authenticated user.
        email: Email address from the access token.
        claims: Claims presented with the request. May be stale relative to
            the stored user profile.
    """

    user_id: str
    email: str
    claims: dict[str, Any] = field(default_factory=dict)

    @property
    def role_claim(self) -> str | None:
        """Role claim carried by the access token, if any."""
        return self.claims.get("role")
