"""SendGrid e-mail channel for notification broadcasts."""

from __future__ import annotations

import html
import json
import logging
from collections.abc import Sequence
from typing import Any

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from app.config import get_settings

logger = logging.getLogger(__name__)


def _describe_sendgrid_body(body: Any) -> str | None:
    """Return a readable summary of a SendGrid error payload."""

    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            body = json.loads(body)
        except json.JSONDecodeError:
            return body
    if not body:
        return None

    if isinstance(body, dict) and isinstance(body.get("errors"), list):
        messages = [
            str(item["message"])
            for item in body["errors"]
            if isinstance(item, dict) and item.get("message")
        ]
        if messages:
            return "; ".join(messages)
    try:
        return json.dumps(body)
    except (TypeError, ValueError):
        return None


def _log_sendgrid_failure(status_code: Any, body: Any) -> None:
    details = _describe_sendgrid_body(body)
    if details:
        logger.error("SendGrid request failed with status %s: %s", status_code, details)
    else:
        logger.error("SendGrid request failed with status %s", status_code)


def send_email(subject: str, html_content: str, recipients: Sequence[str]) -> bool:
    """Send one message to ``recipients`` using the configured SendGrid account."""

    settings = get_settings()
    if not (settings.sendgrid_api_key and settings.sendgrid_sender):
        logger.info("SendGrid configuration incomplete; skipping email delivery")
        return False
    if not recipients:
        return False

    message = Mail(
        from_email=settings.sendgrid_sender,
        to_emails=list(recipients),
        subject=subject,
        html_content=html_content,
        is_multiple=True,
    )

    try:
        response = SendGridAPIClient(settings.sendgrid_api_key).send(message)
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


def send_notification_email(
    *,
    title: str,
    message: str,
    recipients: Sequence[str],
    action_url: str | None = None,
    action_text: str | None = None,
) -> bool:
    """Render a notification as HTML and e-mail it to ``recipients``."""

    body = f"<h2>{html.escape(title)}</h2><p>{html.escape(message)}</p>"
    if action_url:
        label = html.escape(action_text or "Open")
        body += f'<p><a href="{html.escape(action_url, quote=True)}">{label}</a></p>'
    return send_email(title, body, recipients)


__all__ = ["send_email", "send_notification_email"]
