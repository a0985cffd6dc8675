"""SQLAlchemy models for SwimClub tables.

All models inherit from the Base class defined in database.py and are
created on application startup in development mode.
"""

from swimclub.infrastructure.persistence.models.invitation import InvitationModel
from swimclub.infrastructure.persistence.models.user import UserModel

__all__ = [
    "InvitationModel",
    "UserModel",
]
