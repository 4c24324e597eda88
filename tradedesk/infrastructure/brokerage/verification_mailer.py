"""
Adapters: Verification email delivery.

Implement VerificationMailer port.

- LoggingVerificationMailer: development default, keeps links in memory.
- SendGridVerificationMailer: posts to the SendGrid v3 mail API.
"""

import logging
from collections import deque

import httpx

from tradedesk.domain.brokerage.ports import VerificationMailer

logger = logging.getLogger(__name__)

SENDGRID_SEND_URL = "https://api.sendgrid.com/v3/mail/send"
SUBJECT = "Verify your email address"
OUTBOX_SIZE = 100


def verification_link(base_url: str, token: str) -> str:
    """Build the link a user follows to confirm their email."""
    return f"{base_url.rstrip('/')}/verify-email?token={token}"


def _html_body(link: str, ttl_hours: int) -> str:
    return (
        "<p>Welcome! Please confirm your email address to activate your account.</p>"
        f'<p><a href="{link}">Verify email</a></p>'
        f"<p>The link expires in {ttl_hours} hours. "
        "If you did not sign up, ignore this email.</p>"
    )


class LoggingVerificationMailer(VerificationMailer):
    """Keeps verification links in memory instead of sending mail.

    Development default. Links are only written to the log at DEBUG level.
    """

    def __init__(self, base_url: str) -> None:
        self._base_url = base_url
        self.outbox: deque[tuple[str, str]] = deque(maxlen=OUTBOX_SIZE)

    def send_verification(self, email: str, token: str) -> None:
        link = verification_link(self._base_url, token)
        self.outbox.append((email, link))
        logger.info("Verification email queued for %s (not sent)", email)
        logger.debug("Verification link: %s", link)


class SendGridVerificationMailer(VerificationMailer):
    """Sends verification emails through SendGrid.

    Delivery problems are logged and swallowed: a failed email must not
    undo a registration.
    """

    def __init__(
        self,
        api_key: str,
        sender: str,
        base_url: str,
        token_ttl_hours: int = 24,
        client: httpx.Client | None = None,
    ) -> None:
        self._api_key = api_key
        self._sender = sender
        self._base_url = base_url
        self._token_ttl_hours = token_ttl_hours
        self._client = client or httpx.Client(timeout=10.0)

    def send_verification(self, email: str, token: str) -> None:
        link = verification_link(self._base_url, token)
        payload = {
            "personalizations": [{"to": [{"email": email}]}],
            "from": {"email": self._sender},
            "subject": SUBJECT,
            "content": [
                {"type": "text/plain", "value": f"Verify your email: {link}"},
                {"type": "text/html", "value": _html_body(link, self._token_ttl_hours)},
            ],
        }
        try:
            response = self._client.post(
                SENDGRID_SEND_URL,
                json=payload,
                headers={"Authorization": f"Bearer {self._api_key}"},
            )
            response.raise_for_status()
        except httpx.HTTPError:
            logger.error("Verification email to %s failed", email, exc_info=True)
            return
        logger.info("Verification email sent to %s", email)
