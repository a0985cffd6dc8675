"""Pytest configuration for unit tests.

Provides in-memory stand-ins for the invitation store, user directory and
notifier so lifecycle rules can be exercised without a database.
"""

from copy import deepcopy
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

from swimclub.domain.entities import Caller, Invitation, InvitationStatus, UserRole
from swimclub.domain.exceptions import DispatchFailureError, InvitationNotFoundError
from swimclub.domain.repositories import InvitationRepository, UserDirectory
from swimclub.domain.services import (
    ClaimsAuthorizationOracle,
    InvitationNotifier,
    InvitationService,
    RegistrationService,
)

START = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


class InMemoryInvitationRepository(InvitationRepository):
    """Dictionary-backed invitation store.

    Stores copies so callers cannot mutate records without calling update.
    """

    def __init__(self) -> None:
        self.records: dict[str, Invitation] = {}

    async def get(self, invitation_id: str) -> Invitation | None:
        record = self.records.get(invitation_id)
        return deepcopy(record) if record else None

    async def create(self, invitation: Invitation) -> Invitation:
        self.records[invitation.id] = deepcopy(invitation)
        return invitation

    async def update(self, invitation: Invitation) -> Invitation:
        if invitation.id not in self.records:
            raise InvitationNotFoundError(invitation.id)
        self.records[invitation.id] = deepcopy(invitation)
        return invitation

    async def delete(self, invitation_id: str) -> bool:
        return self.records.pop(invitation_id, None) is not None

    async def find_pending_by_email(self, email: str) -> Invitation | None:
        for record in self.records.values():
            if record.email == email and record.status == InvitationStatus.PENDING:
                return deepcopy(record)
        return None

    async def find_pending_by_email_and_token(
        self, email: str, token: str
    ) -> Invitation | None:
        for record in self.records.values():
            if (
                record.email == email
                and record.token == token
                and record.status == InvitationStatus.PENDING
            ):
                return deepcopy(record)
        return None

    async def list_all(self) -> list[Invitation]:
        ordered = sorted(self.records.values(), key=lambda r: r.created_at, reverse=True)
        return [deepcopy(record) for record in ordered]


class FakeUserDirectory(UserDirectory):
    """User directory holding accounts in memory."""

    def __init__(self) -> None:
        self.users: dict[str, dict[str, Any]] = {}

    def add(self, user_id: str, email: str, role: UserRole) -> None:
        self.users[user_id] = {"email": email, "role": role, "display_name": None}

    async def email_exists(self, email: str) -> bool:
        return any(user["email"] == email for user in self.users.values())

    async def get_role(self, user_id: str) -> UserRole | None:
        user = self.users.get(user_id)
        return user["role"] if user else None

    async def create_account(
        self,
        email: str,
        password: str,
        role: UserRole,
        display_name: str | None = None,
    ) -> str:
        user_id = f"user-{len(self.users) + 1}"
        self.users[user_id] = {"email": email, "role": role, "display_name": display_name}
        return user_id


class RecordingNotifier(InvitationNotifier):
    """Notifier that records what would have been emailed."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, str, bool]] = []
        self.failing_emails: set[str] = set()

    async def send_invitation(self, invitation: Invitation, resent: bool = False) -> None:
        if invitation.email in self.failing_emails:
            raise DispatchFailureError(invitation.email, "SMTP connection refused")
        self.sent.append((invitation.email, invitation.token, resent))


class FakeClock:
    """Controllable clock."""

    def __init__(self, now: datetime = START) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


class SequentialTokens:
    """Token generator producing predictable, distinct tokens."""

    def __init__(self) -> None:
        self.count = 0

    def generate_token(self, length: int = 32) -> str:
        self.count += 1
        return f"token-{self.count:04d}"


@pytest.fixture
def invitation_repo() -> InMemoryInvitationRepository:
    return InMemoryInvitationRepository()


@pytest.fixture
def users() -> FakeUserDirectory:
    directory = FakeUserDirectory()
    directory.add("admin-1", "coach@digbydolphins.com", UserRole.ADMIN)
    directory.add("supporter-1", "parent@example.com", UserRole.SUPPORTER)
    return directory


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def tokens() -> SequentialTokens:
    return SequentialTokens()


@pytest.fixture
def service(invitation_repo, users, notifier, clock, tokens) -> InvitationService:
    return InvitationService(
        invitations=invitation_repo,
        users=users,
        authorization=ClaimsAuthorizationOracle(users),
        notifier=notifier,
        tokens=tokens,
        clock=clock,
    )


@pytest.fixture
def registration(service, users) -> RegistrationService:
    return RegistrationService(service, users)


@pytest.fixture
def admin() -> Caller:
    return Caller(
        user_id="admin-1",
        email="coach@digbydolphins.com",
        claims={"role": "admin"},
    )


@pytest.fixture
def supporter() -> Caller:
    return Caller(
        user_id="supporter-1",
        email="parent@example.com",
        claims={"role": "supporter"},
    )
