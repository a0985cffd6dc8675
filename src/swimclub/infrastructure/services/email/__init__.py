"""Email providers and template rendering."""

from swimclub.core.config import Settings, get_settings
from swimclub.core.logging import get_logger
from swimclub.infrastructure.services.email.console_provider import ConsoleEmailProvider
from swimclub.infrastructure.services.email.email_provider import EmailProvider
from swimclub.infrastructure.services.email.smtp_provider import SMTPProvider, SMTPSettings
from swimclub.infrastructure.services.email.template_renderer import TemplateRenderer

logger = get_logger(__name__)


def build_email_provider(settings: Settings | None = None) -> EmailProvider:
    """Select the email provider for the current environment.

    Real delivery happens only in production with SMTP credentials set;
    every other configuration logs the message instead.
    """
    settings = settings or get_settings()

    if settings.is_production and settings.smtp_configured:
        return SMTPProvider(
            SMTPSettings(
                host=settings.smtp_host,
                port=settings.smtp_port,
                username=settings.smtp_username,
                password=settings.smtp_password,
                use_tls=settings.smtp_use_tls,
                use_ssl=settings.smtp_use_ssl,
                from_email=settings.email_from_address,
                from_name=settings.email_from_name,
                timeout=settings.smtp_timeout,
            )
        )

    if settings.is_production:
        logger.warning("SMTP is not configured, invitation emails will only be logged")
    return ConsoleEmailProvider()


__all__ = [
    "ConsoleEmailProvider",
    "EmailProvider",
    "SMTPProvider",
    "SMTPSettings",
    "TemplateRenderer",
    "build_email_provider",
]
