"""Tests for the SendGrid email helpers."""

from __future__ import annotations

from datetime import datetime
from types import SimpleNamespace

import pytest

from librarium.infrastructure import email as email_module


class _RecordingClient:
    sent: list = []

    def __init__(self, api_key: str) -> None:
        self.api_key = api_key

    def send(self, message):
        _RecordingClient.sent.append((self.api_key, message))
        return SimpleNamespace(status_code=202, body=b"")


class _RejectingClient(_RecordingClient):
    def send(self, message):
        return SimpleNamespace(
            status_code=400,
            body=b'{"errors": [{"message": "Invalid sender", "help": "https://sendgrid.com"}]}',
        )


@pytest.fixture()
def configured(monkeypatch):
    monkeypatch.setattr(
        email_module,
        "get_settings",
        lambda: SimpleNamespace(sendgrid_api_key="SG.key", sendgrid_sender="biblioteca@example.com"),
    )
    monkeypatch.setattr(email_module, "Mail", lambda **kwargs: kwargs)
    _RecordingClient.sent = []


def test_send_email_skips_without_configuration(monkeypatch) -> None:
    monkeypatch.setattr(
        email_module,
        "get_settings",
        lambda: SimpleNamespace(sendgrid_api_key=None, sendgrid_sender=None),
    )

    assert email_module.send_email("Asunto", "<p>Hola</p>", "socio@example.com") is False


def test_send_email_uses_sendgrid(configured, monkeypatch) -> None:
    monkeypatch.setattr(email_module, "SendGridAPIClient", _RecordingClient)

    assert email_module.send_email("Asunto", "<p>Hola</p>", "socio@example.com") is True

    api_key, message = _RecordingClient.sent[0]
    assert api_key == "SG.key"
    assert message["from_email"] == "biblioteca@example.com"
    assert message["to_emails"] == "socio@example.com"


def test_send_email_logs_rejected_requests(configured, monkeypatch, caplog) -> None:
    monkeypatch.setattr(email_module, "SendGridAPIClient", _RejectingClient)

    with caplog.at_level("ERROR"):
        assert email_module.send_email("Asunto", "<p>Hola</p>", "socio@example.com") is False

    assert "Invalid sender (help: https://sendgrid.com)" in caplog.text


def test_reservation_ready_email_escapes_content(configured, monkeypatch) -> None:
    monkeypatch.setattr(email_module, "SendGridAPIClient", _RecordingClient)

    sent = email_module.send_reservation_ready_email(
        "socio@example.com",
        name="Ana <b>",
        book_title="Rayuela & otros",
        expires_at=datetime(2024, 5, 3, 18, 30),
    )

    assert sent is True
    html = _RecordingClient.sent[0][1]["html_content"]
    assert "Ana &lt;b&gt;" in html
    assert "Rayuela &amp; otros" in html
    assert "03/05/2024 18:30" in html


def test_overdue_reminder_email_pluralizes_days(configured, monkeypatch) -> None:
    monkeypatch.setattr(email_module, "SendGridAPIClient", _RecordingClient)

    email_module.send_overdue_reminder_email(
        "socio@example.com", name="Ana", book_title="Rayuela", days_overdue=1
    )
    email_module.send_overdue_reminder_email(
        "socio@example.com", name="Ana", book_title="Rayuela", days_overdue=4
    )

    first, second = (message["html_content"] for _, message in _RecordingClient.sent)
    assert "1 día de retraso" in first
    assert "4 días de retraso" in second
