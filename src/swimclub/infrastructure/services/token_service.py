"""Token generation service.

Provides cryptographically secure random tokens for invitation links.
"""

import secrets

INVITATION_TOKEN_BYTES = 32


class TokenService:
    """Service for generating secure random tokens."""

    @staticmethod
    def generate_token(length: int = INVITATION_TOKEN_BYTES) -> str:
        """Generate a cryptographically secure random token.

        Args:
            length: Number of random bytes. Default is 32 bytes (64 hex chars,
                256 bits of entropy).

        Returns:
            Lowercase hexadecimal token string.
        """
        return secrets.token_hex(length)


# Default token service instance
token_service = TokenService()
