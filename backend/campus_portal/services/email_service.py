from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

import httpx
from jinja2 import Environment, FileSystemLoader, select_autoescape

from campus_portal.core.config import settings
from campus_portal.utils.logging import get_logger

logger = get_logger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates" / "email"

# Autoescaping renders & < > " ' in user-supplied values as entities.
template_env = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=select_autoescape(["html"]),
)


class EmailDeliveryError(Exception):
    pass


@dataclass
class OutgoingEmail:
    to: list[str]
    subject: str
    html: str
    sender: str = field(default_factory=lambda: settings.email_from)


class Mailer(Protocol):
    async def send(self, email: OutgoingEmail) -> None: ...


def render_template(name: str, **context) -> str:
    return template_env.get_template(name).render(**context)


class ResendMailer:
    """Deliver through the Resend REST API."""

    def __init__(self, api_key: str, api_url: str, timeout: float = 10.0, transport: httpx.AsyncBaseTransport | None = None):
        self.api_key = api_key
        self.api_url = api_url
        self.timeout = timeout
        self._transport = transport

    async def send(self, email: OutgoingEmail) -> None:
        payload = {"from": email.sender, "to": email.to, "subject": email.subject, "html": email.html}
        headers = {"Authorization": f"Bearer {self.api_key}", "Content-Type": "application/json"}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.post(self.api_url, json=payload, headers=headers)
                resp.raise_for_status()
        except httpx.HTTPError as exc:
            raise EmailDeliveryError(f"Resend delivery failed: {exc}") from exc
        logger.info("Email sent to %d recipient(s): %s", len(email.to), email.subject)


class LogMailer:
    """Used when no provider key is configured; the email is only logged."""

    async def send(self, email: OutgoingEmail) -> None:
        logger.warning("RESEND_API_KEY not set; email to %s not delivered: %s", email.to, email.subject)


def get_mailer() -> Mailer:
    if not settings.resend_api_key:
        return LogMailer()
    return ResendMailer(settings.resend_api_key, settings.resend_api_url, timeout=settings.email_timeout_seconds)
