"""
Outgoing mail for position events.

Messages are composed with Jinja2 templates and handed to a transport:
SMTP in production, an in-memory outbox in tests, or the log.
"""

import asyncio
import logging
import smtplib
from email.message import EmailMessage
from pathlib import Path
from typing import List, Optional, Protocol

from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape

from recruit.core.config import Settings, settings
from recruit.models.position_application import PositionApplication

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates" / "mail"

APPLICATION_RECEIVED_SUBJECT = "New Position Application Received"

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html"]),
    keep_trailing_newline=True,
)


class MailTransport(Protocol):
    def send(self, message: EmailMessage) -> None: ...


class SmtpTransport:
    """Delivers through an SMTP relay."""

    def __init__(
        self,
        host: str,
        port: int,
        username: Optional[str] = None,
        password: Optional[str] = None,
        starttls: bool = False,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.starttls = starttls

    def send(self, message: EmailMessage) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=30) as smtp:
            if self.starttls:
                smtp.starttls()
            if self.username:
                smtp.login(self.username, self.password or "")
            smtp.send_message(message)


class MemoryTransport:
    """Keeps delivered messages in ``outbox``."""

    def __init__(self):
        self.outbox: List[EmailMessage] = []

    def send(self, message: EmailMessage) -> None:
        self.outbox.append(message)


class LogTransport:
    """Writes messages to the log instead of sending them."""

    def send(self, message: EmailMessage) -> None:
        logger.info("Mail to %s: %s\n%s", message["To"], message["Subject"], message.get_body(("plain",)).get_content())


def build_transport(config: Settings = settings) -> MailTransport:
    """Transport selected by ``MAIL_DELIVERY_METHOD``."""
    if config.MAIL_DELIVERY_METHOD == "smtp":
        return SmtpTransport(
            config.SMTP_HOST,
            config.SMTP_PORT,
            config.SMTP_USERNAME,
            config.SMTP_PASSWORD,
            config.SMTP_STARTTLS,
        )
    if config.MAIL_DELIVERY_METHOD == "memory":
        return MemoryTransport()
    return LogTransport()


class PositionNotifier:
    """Composes and delivers position notifications."""

    def __init__(
        self,
        transport: MailTransport,
        from_address: str = settings.MAILER_FROM,
        base_url: str = settings.ADMIN_BASE_URL,
    ):
        self.transport = transport
        self.from_address = from_address
        self.base_url = base_url.rstrip("/")

    def position_url(self, position) -> str:
        return f"{self.base_url}/admin/positions/{position.slug}"

    def team_url(self, team) -> str:
        return f"{self.base_url}/admin/teams/{team.id}"

    def application_received(self, application: PositionApplication) -> EmailMessage:
        """
        Message telling a position's contacts that an application arrived.
        
        ``application.position`` must have its team and contact emails loaded.
        """
        position = application.position
        team = position.team
        context = {
            "application": application,
            "position": position,
            "team": team,
            "position_url": self.position_url(position),
            "team_url": self.team_url(team),
        }
        
        message = EmailMessage()
        message["Subject"] = APPLICATION_RECEIVED_SUBJECT
        message["From"] = self.from_address
        message["To"] = ", ".join(str(e) for e in position.contact_emails)
        message.set_content(_env.get_template("application_received.txt").render(**context))
        message.add_alternative(
            _env.get_template("application_received.html").render(**context),
            subtype="html",
        )
        return message

    async def deliver(self, message: EmailMessage) -> bool:
        """Send ``message`` off the event loop. Returns False when delivery failed."""
        if not message["To"]:
            logger.warning("Not sending %r: no recipients", message["Subject"])
            return False
        try:
            await asyncio.to_thread(self.transport.send, message)
        except (smtplib.SMTPException, OSError):
            logger.exception("Failed to deliver %r to %s", message["Subject"], message["To"])
            return False
        logger.info("Delivered %r to %s", message["Subject"], message["To"])
        return True

    async def notify_application_received(self, application: PositionApplication) -> bool:
        try:
            message = self.application_received(application)
        except (TemplateError, ValueError):
            logger.exception("Failed to compose application mail for %s", application.id)
            return False
        return await self.deliver(message)
