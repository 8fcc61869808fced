"""
Tests for the registration confirmation email helpers.
"""
import smtplib

import pytest

from clinic_programs.auth import utils
from clinic_programs.config import settings


class RecordingSMTP:
    """Stand-in for smtplib.SMTP that records what would be sent."""
    sent = []

    def __init__(self, host, port, timeout=None):
        self.host = host
        self.port = port

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def ehlo(self):
        pass

    def starttls(self, context=None):
        pass

    def login(self, username, password):
        pass

    def send_message(self, msg):
        RecordingSMTP.sent.append(msg)


class FailingSMTP(RecordingSMTP):
    attempts = 0

    def __init__(self, host, port, timeout=None):
        FailingSMTP.attempts += 1
        raise smtplib.SMTPConnectError(421, "service not available")


@pytest.fixture
def mail_settings(monkeypatch):
    monkeypatch.setattr(settings, "mail_username", "clinic")
    monkeypatch.setattr(settings, "mail_password", "app-password")
    monkeypatch.setattr(settings, "mail_from", "no-reply@example.com")
    monkeypatch.setattr(settings, "mail_server", "smtp.example.com")
    monkeypatch.setattr(utils, "RETRY_DELAY", 0)


def test_email_not_configured_by_default():
    assert utils.email_configured() is False


def test_send_without_configuration_raises():
    with pytest.raises(RuntimeError):
        utils.send_registration_confirmation_email("a@example.com", "A", "DOCTOR")


def test_registration_message_content(mail_settings):
    msg = utils.build_registration_message("ada@example.com", "Ada Lovelace", "DOCTOR")
    assert msg["To"] == "ada@example.com"
    assert msg["From"] == "no-reply@example.com"
    assert msg["Subject"] == "Registration Confirmation"
    assert "Ada Lovelace" in msg.get_payload()[0].get_payload()


def test_notify_registration_sends(mail_settings, monkeypatch):
    RecordingSMTP.sent = []
    monkeypatch.setattr(utils.smtplib, "SMTP", RecordingSMTP)

    assert utils.notify_registration("ada@example.com", "Ada", "DOCTOR") is True
    assert len(RecordingSMTP.sent) == 1


def test_notify_registration_swallows_failures_after_retries(mail_settings, monkeypatch):
    FailingSMTP.attempts = 0
    monkeypatch.setattr(utils.smtplib, "SMTP", FailingSMTP)

    assert utils.notify_registration("ada@example.com", "Ada", "DOCTOR") is False
    assert FailingSMTP.attempts == utils.MAX_RETRIES
