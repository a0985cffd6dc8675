"""Unit tests for the invitation mailer."""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest

from swimclub.core.config import Settings
from swimclub.domain.entities import Invitation
from swimclub.domain.exceptions import DispatchFailureError
from swimclub.infrastructure.services.invitation_mailer import (
    InvitationMailer,
    build_registration_url,
)

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def settings() -> Settings:
    return Settings(site_url="https://digbydolphins.com/")


@pytest.fixture
def provider() -> AsyncMock:
    mock_provider = AsyncMock()
    mock_provider.send_email.return_value = True
    return mock_provider


@pytest.fixture
def invitation() -> Invitation:
    return Invitation(
        id="inv-1",
        email="swimmer+kid@example.com",
        token="f" * 64,
        created_at=NOW,
        expires_at=NOW + timedelta(days=7),
    )


def test_build_registration_url_encodes_email():
    url = build_registration_url("https://digbydolphins.com/", "abc123", "swimmer+kid@example.com")

    assert url == "https://digbydolphins.com/register?token=abc123&email=swimmer%2Bkid%40example.com"


@pytest.mark.asyncio
async def test_send_invitation(provider, settings, invitation):
    mailer = InvitationMailer(provider, settings)

    await mailer.send_invitation(invitation)

    provider.send_email.assert_awaited_once()
    kwargs = provider.send_email.call_args.kwargs
    assert kwargs["to"] == "swimmer+kid@example.com"
    assert kwargs["subject"] == "Invitation to join Digby Dolphins Swim Team"
    assert kwargs["from_email"] == "noreply@digbydolphins.com"
    assert kwargs["from_name"] == "Digby Dolphins Swim Team"

    link = f"https://digbydolphins.com/register?token={'f' * 64}&email=swimmer%2Bkid%40example.com"
    assert link in kwargs["text_body"]
    assert link.replace("&", "&amp;") in kwargs["html_body"]
    assert "expire in 7 days" in kwargs["text_body"]
    assert "reminder" not in kwargs["text_body"]


@pytest.mark.asyncio
async def test_resent_invitation_is_marked(provider, settings, invitation):
    mailer = InvitationMailer(provider, settings)

    await mailer.send_invitation(invitation, resent=True)

    kwargs = provider.send_email.call_args.kwargs
    assert kwargs["subject"] == "Invitation to join Digby Dolphins Swim Team (Resent)"
    assert "This is a reminder" in kwargs["text_body"]
    assert "This is a reminder" in kwargs["html_body"]


@pytest.mark.asyncio
async def test_provider_error_becomes_dispatch_failure(provider, settings, invitation):
    provider.send_email.side_effect = ConnectionRefusedError("Connection refused")
    mailer = InvitationMailer(provider, settings)

    with pytest.raises(DispatchFailureError) as exc_info:
        await mailer.send_invitation(invitation)

    assert exc_info.value.reason == "Connection refused"
    assert exc_info.value.label == "Dispatch failure"


@pytest.mark.asyncio
async def test_provider_rejection_becomes_dispatch_failure(provider, settings, invitation):
    provider.send_email.return_value = False
    mailer = InvitationMailer(provider, settings)

    with pytest.raises(DispatchFailureError) as exc_info:
        await mailer.send_invitation(invitation)

    assert exc_info.value.reason == "Email provider rejected the message"
