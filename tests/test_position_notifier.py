"""
Unit tests for the "application received" notification.
"""

import smtplib
import uuid

import pytest

from recruit.core.config import Settings
from recruit.models.contact_email import ContactEmail
from recruit.models.position import Position
from recruit.models.position_application import PositionApplication
from recruit.models.team import Team
from recruit.services.notification_service import (
    APPLICATION_RECEIVED_SUBJECT,
    LogTransport,
    MemoryTransport,
    PositionNotifier,
    SmtpTransport,
    build_transport,
)

pytestmark = pytest.mark.unit


def build_application():
    team = Team(id=uuid.uuid4(), name="Outreach")
    position = Position(title="Marketing Monkey", slug="marketing-monkey", team=team)
    position.contact_emails = [
        ContactEmail(email="jobs@example.com"),
        ContactEmail(email="boss@example.com"),
    ]
    return PositionApplication(
        position=position,
        full_name="Jane Applicant",
        email="jane@example.com",
        phone="555-0100",
    )


@pytest.fixture
def notifier():
    return PositionNotifier(MemoryTransport(), from_address="noreply@example.com", base_url="http://admin.test/")


def test_headers(notifier):
    message = notifier.application_received(build_application())

    assert message["Subject"] == APPLICATION_RECEIVED_SUBJECT
    assert message["From"] == "noreply@example.com"
    assert message["To"] == "jobs@example.com, boss@example.com"


def test_bodies_link_position_and_team(notifier):
    application = build_application()
    team_url = f"http://admin.test/admin/teams/{application.position.team.id}"

    message = notifier.application_received(application)
    text = message.get_body(("plain",)).get_content()
    html = message.get_body(("html",)).get_content()

    for body in (text, html):
        assert "Jane Applicant" in body
        assert "Marketing Monkey" in body
        assert "http://admin.test/admin/positions/marketing-monkey" in body
        assert team_url in body
        assert "Outreach" in body


def test_html_body_escapes_applicant_input(notifier):
    application = build_application()
    application.full_name = "<script>alert(1)</script>"

    html = notifier.application_received(application).get_body(("html",)).get_content()

    assert "<script>" not in html
    assert "&lt;script&gt;" in html


@pytest.mark.asyncio
async def test_notify_delivers_through_transport(notifier):
    assert await notifier.notify_application_received(build_application()) is True

    [message] = notifier.transport.outbox
    assert message["Subject"] == APPLICATION_RECEIVED_SUBJECT


@pytest.mark.asyncio
async def test_no_recipients_is_not_delivered(notifier):
    application = build_application()
    application.position.contact_emails = []

    assert await notifier.notify_application_received(application) is False
    assert notifier.transport.outbox == []


class FailingTransport:
    def send(self, message):
        raise smtplib.SMTPServerDisconnected("gone")


@pytest.mark.asyncio
async def test_delivery_failure_is_logged_not_raised(caplog):
    notifier = PositionNotifier(FailingTransport(), from_address="noreply@example.com", base_url="http://admin.test")

    assert await notifier.notify_application_received(build_application()) is False
    assert "Failed to deliver" in caplog.text


def test_build_transport():
    assert isinstance(build_transport(Settings(MAIL_DELIVERY_METHOD="memory")), MemoryTransport)
    assert isinstance(build_transport(Settings(MAIL_DELIVERY_METHOD="log")), LogTransport)

    smtp = build_transport(Settings(MAIL_DELIVERY_METHOD="smtp", SMTP_HOST="mail.test", SMTP_PORT=2525))
    assert isinstance(smtp, SmtpTransport)
    assert (smtp.host, smtp.port) == ("mail.test", 2525)


@pytest.mark.asyncio
async def test_unbuildable_message_is_logged_not_raised(caplog):
    notifier = PositionNotifier(
        MemoryTransport(),
        from_address="noreply@example.com\nBcc: everyone@example.com",
        base_url="http://admin.test",
    )

    assert await notifier.notify_application_received(build_application()) is False
    assert notifier.transport.outbox == []
    assert "Failed to compose" in caplog.text
