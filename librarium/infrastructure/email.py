"""Utility helpers for sending transactional email notifications via SendGrid."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from html import escape
from typing import Any

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from librarium.config import get_settings

logger = logging.getLogger(__name__)


def _describe_sendgrid_errors(body: Any) -> str | None:
    """Return a human readable description for a SendGrid error payload."""

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            body = json.loads(body)
        except json.JSONDecodeError:
            return body

    if isinstance(body, dict):
        messages: list[str] = []
        for item in body.get("errors") or []:
            if not isinstance(item, dict) or not item.get("message"):
                continue
            help_link = item.get("help")
            if help_link:
                messages.append(f"{item['message']} (help: {help_link})")
            else:
                messages.append(str(item["message"]))
        if messages:
            return "; ".join(messages)
        return json.dumps(body, default=str)

    if isinstance(body, list):
        return "; ".join(str(item) for item in body)

    return None


def _log_sendgrid_failure(status_code: Any, body: Any) -> None:
    details = _describe_sendgrid_errors(body)
    if details:
        logger.error("SendGrid API request failed with status %s: %s", status_code, details)
    else:
        logger.error("SendGrid API request failed with status %s", status_code)


def send_email(subject: str, html_content: str, recipient: str) -> bool:
    """Send an email using the configured SendGrid credentials."""

    settings = get_settings()
    if not (settings.sendgrid_api_key and settings.sendgrid_sender):
        logger.info("SendGrid configuration incomplete; skipping email delivery")
        return False

    message = Mail(
        from_email=settings.sendgrid_sender,
        to_emails=recipient,
        subject=subject,
        html_content=html_content,
    )

    try:
        client = SendGridAPIClient(settings.sendgrid_api_key)
        response = client.send(message)
    except Exception as exc:  # pragma: no cover - network failures depend on environment
        status_code = getattr(exc, "status_code", None)
        if status_code is None:
            logger.exception("Error sending email via SendGrid: %s", exc)
        else:
            _log_sendgrid_failure(status_code, getattr(exc, "body", None))
        return False

    status_code = getattr(response, "status_code", None)
    if not isinstance(status_code, int) or not 200 <= status_code < 300:
        _log_sendgrid_failure(status_code, getattr(response, "body", None))
        return False

    return True


def send_reservation_ready_email(
    email: str,
    *,
    name: str,
    book_title: str,
    expires_at: datetime,
) -> bool:
    """Tell a member that the book they reserved is waiting at the desk."""

    subject = "Tu libro reservado está listo para recoger"
    html_content = "".join(
        (
            f"<p>Hola {escape(name)},</p>",
            f"<p>El libro <strong>{escape(book_title)}</strong> ya está disponible.</p>",
            "<p>Recógelo en el mostrador antes del "
            f"<strong>{expires_at:%d/%m/%Y %H:%M}</strong>; después la reserva expira.</p>",
        )
    )
    return send_email(subject, html_content, email)


def send_overdue_reminder_email(
    email: str,
    *,
    name: str,
    book_title: str,
    days_overdue: int,
) -> bool:
    """Remind a member that a borrowed book is past its due date."""

    subject = "Recordatorio de libro vencido"
    plural = "día" if days_overdue == 1 else "días"
    html_content = "".join(
        (
            f"<p>Hola {escape(name)},</p>",
            f"<p>El libro <strong>{escape(book_title)}</strong> tiene "
            f"{days_overdue} {plural} de retraso.</p>",
            "<p>Devuélvelo lo antes posible para evitar multas adicionales.</p>",
        )
    )
    return send_email(subject, html_content, email)


__all__ = [
    "send_email",
    "send_overdue_reminder_email",
    "send_reservation_ready_email",
]
