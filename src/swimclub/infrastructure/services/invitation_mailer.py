"""Invitation email dispatch.

Builds the registration link for an invitation, renders the message and
hands it to the configured email provider.
"""

from datetime import datetime, timezone
from urllib.parse import quote

from swimclub.core.config import Settings, get_settings
from swimclub.core.logging import get_logger
from swimclub.domain.entities import Invitation
from swimclub.domain.exceptions import DispatchFailureError
from swimclub.domain.services.notifier import InvitationNotifier
from swimclub.infrastructure.services.email import EmailProvider, TemplateRenderer

logger = get_logger(__name__)

INVITATION_SUBJECT = "Invitation to join {{ club_name }}"
RESENT_SUBJECT = "Invitation to join {{ club_name }} (Resent)"

INVITATION_HTML = """
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <div style="background-color: #f0f0f0; padding: 20px; text-align: center;">
    <h1 style="color: #333;">You're Invited!</h1>
  </div>
  <div style="padding: 20px; border: 1px solid #ddd; background-color: #fff;">
    <p>Hello,</p>
    {% if resent %}
    <p>This is a reminder that you've been invited to join the {{ club_name }}.</p>
    {% else %}
    <p>You've been invited to join the {{ club_name }}.</p>
    {% endif %}
    <p>Click the button below to create your account and access team resources:</p>
    <div style="text-align: center; margin: 30px 0;">
      <a href="{{ registration_url }}" style="background-color: #ffd700; color: #333; padding: 12px 24px; text-decoration: none; border-radius: 4px; font-weight: bold; display: inline-block;">
        Accept Invitation
      </a>
    </div>
    <p style="font-size: 0.9em; color: #666;">This invitation will expire in {{ ttl_days }} days.</p>
    <p style="font-size: 0.9em; color: #666;">If you didn't expect this invitation, please ignore this email.</p>
  </div>
  <div style="background-color: #333; color: #fff; padding: 15px; text-align: center; font-size: 0.8em;">
    <p>&copy; {{ year }} {{ club_name }}. All rights reserved.</p>
  </div>
</div>
"""

INVITATION_TEXT = """
Hello,

{% if resent %}
This is a reminder that you've been invited to join the {{ club_name }}.
{% else %}
You've been invited to join the {{ club_name }}.
{% endif %}

Create your account here:
{{ registration_url }}

This invitation will expire in {{ ttl_days }} days.

If you didn't expect this invitation, please ignore this email.
"""


def build_registration_url(base_url: str, token: str, email: str) -> str:
    """Build the link consumed by the registration page.

    Format: {base_url}/register?token={token}&email={url-encoded email}
    """
    return f"{base_url.rstrip('/')}/register?token={token}&email={quote(email, safe='')}"


class InvitationMailer(InvitationNotifier):
    """Sends invitation emails through an EmailProvider."""

    def __init__(self, provider: EmailProvider, settings: Settings | None = None) -> None:
        """Initialize the mailer.

        Args:
            provider: Delivers the rendered message.
            settings: Application settings; loaded from the environment if omitted.
        """
        self.provider = provider
        self.settings = settings or get_settings()
        self.html_renderer = TemplateRenderer(autoescape=True)
        self.text_renderer = TemplateRenderer(autoescape=False)

    async def send_invitation(self, invitation: Invitation, resent: bool = False) -> None:
        registration_url = build_registration_url(
            self.settings.site_url, invitation.token, invitation.email
        )
        variables = {
            "club_name": self.settings.club_name,
            "registration_url": registration_url,
            "ttl_days": self.settings.invitation_ttl_days,
            "resent": resent,
            "year": datetime.now(timezone.utc).year,
        }

        subject = self.text_renderer.render(
            RESENT_SUBJECT if resent else INVITATION_SUBJECT, variables
        )
        html_body = self.html_renderer.render(INVITATION_HTML, variables)
        text_body = self.text_renderer.render(INVITATION_TEXT, variables)

        try:
            sent = await self.provider.send_email(
                to=invitation.email,
                subject=subject,
                html_body=html_body,
                text_body=text_body,
                from_email=self.settings.email_from_address,
                from_name=self.settings.email_from_name,
            )
        except Exception as e:
            logger.error(
                "Failed to send invitation email",
                invitation_id=invitation.id,
                email=invitation.email,
                error=str(e),
            )
            raise DispatchFailureError(invitation.email, str(e) or type(e).__name__) from e

        if not sent:
            raise DispatchFailureError(invitation.email, "Email provider rejected the message")

        logger.info(
            "Invitation email sent",
            invitation_id=invitation.id,
            email=invitation.email,
            resent=resent,
        )
