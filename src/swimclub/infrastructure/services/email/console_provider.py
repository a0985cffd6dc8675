"""Email provider that logs messages instead of delivering them.

Used outside production, or whenever SMTP credentials are not configured.
"""

import html
import re
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from swimclub.core.logging import get_logger, mask_token
from swimclub.infrastructure.services.email.email_provider import EmailProvider

logger = get_logger(__name__)

_HREF_RE = re.compile(r'href="([^"]+)"')


def redact_link(link: str) -> str:
    """Mask the ``token`` query parameter of a registration link."""
    parts = urlsplit(link)
    query = [
        (key, mask_token(value) if key == "token" else value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
    ]
    return urlunsplit(parts._replace(query=urlencode(query, safe=".")))


class ConsoleEmailProvider(EmailProvider):
    """Writes outgoing emails to the structured log.

    The registration token is masked; administrators can read the full
    token from the invitation listing.
    """

    def __init__(self) -> None:
        self.sent_count = 0

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
        link = _HREF_RE.search(html_body)
        self.sent_count += 1
        logger.info(
            "Email would be sent",
            sender=f"{from_name} <{from_email}>",
            to=to,
            subject=subject,
            link=redact_link(html.unescape(link.group(1))) if link else None,
        )
        return True
