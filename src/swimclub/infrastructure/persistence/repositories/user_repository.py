"""User repository for database operations."""

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from swimclub.domain.entities import UserRole
from swimclub.domain.repositories import UserDirectory
from swimclub.infrastructure.auth.password_hasher import hash_password
from swimclub.infrastructure.persistence.models import UserModel


class UserRepository(UserDirectory):
    """Repository for user database operations.

    Writes are flushed, not committed; the caller owns the transaction.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, user: UserModel) -> UserModel:
        """Create a new user row."""
        self.session.add(user)
        await self.session.flush()
        return user

    async def get_by_id(self, user_id: str) -> UserModel | None:
        """Get a user by ID."""
        result = await self.session.execute(
            select(UserModel).where(UserModel.id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> UserModel | None:
        """Get a user by exact email address."""
        result = await self.session.execute(
            select(UserModel).where(UserModel.email == email)
        )
        return result.scalar_one_or_none()

    async def email_exists(self, email: str) -> bool:
        result = await self.session.execute(
            select(UserModel.id).where(UserModel.email == email).limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def get_role(self, user_id: str) -> UserRole | None:
        user = await self.get_by_id(user_id)
        if user is None:
            return None
        return UserRole(user.role)

    async def create_account(
        self,
        email: str,
        password: str,
        role: UserRole,
        display_name: str | None = None,
    ) -> str:
        user = UserModel(
            id=str(uuid.uuid4()),
            email=email,
            password_hash=hash_password(password),
            role=role.value,
            display_name=display_name,
        )
        await self.create(user)
        return user.id

    async def set_role(self, user: UserModel, role: UserRole) -> UserModel:
        """Change a user's role."""
        user.role = role.value
        self.session.add(user)
        await self.session.flush()
        return user
