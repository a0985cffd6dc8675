"""Unit tests for email provider selection and the console provider."""

import pytest
from structlog.testing import capture_logs

from swimclub.core.config import Settings
from swimclub.infrastructure.services.email import (
    ConsoleEmailProvider,
    SMTPProvider,
    build_email_provider,
)
from swimclub.infrastructure.services.email.console_provider import redact_link


def _smtp_settings(**overrides) -> Settings:
    values = {
        "smtp_host": "smtp.example.com",
        "smtp_port": 465,
        "smtp_username": "club",
        "smtp_password": "secret",
        "smtp_use_ssl": True,
    }
    values.update(overrides)
    return Settings(**values)


def test_production_with_smtp_uses_smtp():
    provider = build_email_provider(_smtp_settings(environment="production"))

    assert isinstance(provider, SMTPProvider)
    assert provider.settings.host == "smtp.example.com"
    assert provider.settings.port == 465
    assert provider.settings.use_ssl is True
    assert provider.settings.from_email == "noreply@digbydolphins.com"


def test_development_logs_even_with_smtp():
    provider = build_email_provider(_smtp_settings(environment="development"))

    assert isinstance(provider, ConsoleEmailProvider)


def test_production_without_smtp_falls_back_to_console():
    provider = build_email_provider(Settings(environment="production"))

    assert isinstance(provider, ConsoleEmailProvider)


@pytest.mark.asyncio
async def test_console_provider_counts_messages():
    provider = ConsoleEmailProvider()

    sent = await provider.send_email(
        to="swimmer@example.com",
        subject="Invitation",
        html_body='<a href="https://digbydolphins.com/register?token=abc&amp;email=x">Join</a>',
        text_body="Join",
        from_email="noreply@digbydolphins.com",
        from_name="Digby Dolphins Swim Team",
    )

    assert sent is True
    assert provider.sent_count == 1


@pytest.mark.asyncio
async def test_console_provider_masks_registration_token():
    provider = ConsoleEmailProvider()
    token = "f" * 64
    link = f"https://digbydolphins.com/register?token={token}&amp;email=swimmer%40example.com"

    with capture_logs() as logs:
        await provider.send_email(
            to="swimmer@example.com",
            subject="Invitation",
            html_body=f'<a href="{link}">Join</a>',
            text_body=f"Join: {link}",
            from_email="noreply@digbydolphins.com",
            from_name="Digby Dolphins Swim Team",
        )

    assert len(logs) == 1
    logged_link = logs[0]["link"]
    assert token not in logged_link
    assert logged_link == (
        "https://digbydolphins.com/register?token=ffffffff...&email=swimmer%40example.com"
    )


def test_redact_link_without_token_is_unchanged():
    assert redact_link("https://digbydolphins.com/register?email=a%40b.com") == (
        "https://digbydolphins.com/register?email=a%40b.com"
    )
