# =============================================================================
# workers/tasks.py - Celery Task Definitions
# =============================================================================
# Tasks:
# - send_email: Deliver one HTML email over SMTP (welcome emails etc.)
#
# Email tasks are not retried. A failed delivery is logged and dropped.
# =============================================================================

import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr
from typing import Any

from celery import shared_task

from app.config import settings

logger = logging.getLogger(__name__)


def build_message(
    to: str,
    subject: str,
    html: str,
    options: dict[str, str] | None = None,
) -> MIMEMultipart:
    """
    Build a MIME message for an HTML email.

    Args:
        to: Recipient address
        subject: Subject line
        html: HTML body
        options: Optional from_email / from_name overrides
    """
    options = options or {}
    from_email = options.get("from_email") or settings.SENDER_EMAIL
    from_name = options.get("from_name") or settings.SENDER_NAME

    msg = MIMEMultipart("alternative")
    msg["From"] = formataddr((from_name, from_email))
    msg["To"] = to
    msg["Subject"] = subject
    msg.attach(MIMEText(html, "html", "utf-8"))
    return msg


@shared_task(bind=True, name="workers.tasks.send_email", max_retries=0, ignore_result=True)
def send_email(
    self,
    to: str,
    subject: str,
    html: str,
    options: dict[str, str] | None = None,
) -> dict[str, Any]:
    """
    Deliver a single email over SMTP.

    Returns:
        Dict with:
        - success: bool
        - to: Recipient
        - error: Error message (if delivery failed)
    """
    msg = build_message(to, subject, html, options)

    try:
        with smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT, timeout=30) as server:
            if settings.SMTP_USERNAME:
                server.starttls()
                server.login(settings.SMTP_USERNAME, settings.SMTP_PASSWORD or "")
            server.send_message(msg)

    except (smtplib.SMTPException, OSError) as e:
        logger.error(f"Email delivery to {to} failed: {e}")
        return {"success": False, "to": to, "error": str(e)}

    logger.info(f"Email '{subject}' delivered to {to}")
    return {"success": True, "to": to}
