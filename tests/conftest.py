"""Pytest configuration for all tests."""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from swimclub.domain.entities import UserRole
from swimclub.infrastructure.auth.jwt_service import jwt_service
from swimclub.infrastructure.persistence.database import Base
from swimclub.infrastructure.persistence.models import UserModel
from swimclub.infrastructure.services.email import EmailProvider


class CapturingEmailProvider(EmailProvider):
    """Email provider that records messages instead of sending them."""

    def __init__(self) -> None:
        self.sent: list[dict] = []
        self.fail_with: Exception | None = None

    async def send_email(
        self,
        to: str,
        subject: str,
        html_body: str,
        text_body: str,
        from_email: str,
        from_name: str,
        reply_to: str | None = None,
    ) -> bool:
        if self.fail_with is not None:
            raise self.fail_with
        self.sent.append(
            {
                "to": to,
                "subject": subject,
                "html_body": html_body,
                "text_body": text_body,
                "from_email": from_email,
                "from_name": from_name,
            }
        )
        return True


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session.

    Uses an in-memory SQLite database for testing.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with session_maker() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def email_provider() -> CapturingEmailProvider:
    """Email provider that captures outgoing invitations."""
    return CapturingEmailProvider()


@pytest_asyncio.fixture
async def client(
    db_session: AsyncSession, email_provider: CapturingEmailProvider
) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with overridden database and email dependencies."""
    from swimclub.infrastructure.api.app import app
    from swimclub.infrastructure.api.dependencies import get_email_provider
    from swimclub.infrastructure.persistence.database import get_db_session

    app.dependency_overrides[get_db_session] = lambda: db_session
    app.dependency_overrides[get_email_provider] = lambda: email_provider

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides = {}


async def _create_user(
    session: AsyncSession, user_id: str, email: str, role: UserRole
) -> UserModel:
    user = UserModel(
        id=user_id,
        email=email,
        password_hash="hashed_secret",
        role=role.value,
    )
    session.add(user)
    await session.commit()
    return user


@pytest_asyncio.fixture
async def admin_token(db_session: AsyncSession) -> str:
    """Create an administrator and return their access token."""
    user = await _create_user(db_session, "admin-1", "coach@digbydolphins.com", UserRole.ADMIN)
    return jwt_service.create_access_token(
        user_id=user.id,
        email=user.email,
        role=UserRole.ADMIN.value,
    )


@pytest_asyncio.fixture
async def supporter_token(db_session: AsyncSession) -> str:
    """Create a supporter and return their access token."""
    user = await _create_user(
        db_session, "supporter-1", "parent@example.com", UserRole.SUPPORTER
    )
    return jwt_service.create_access_token(
        user_id=user.id,
        email=user.email,
        role=UserRole.SUPPORTER.value,
    )
