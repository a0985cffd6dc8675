"""SwimClub - invitation and registration service for a swim club.

Administrators invite people by email; invitees follow a tokenized link to
register an account with the role their invitation grants.
"""

__version__ = "0.1.0"

from swimclub.infrastructure.api.app import app

__all__ = ["app", "__version__"]
