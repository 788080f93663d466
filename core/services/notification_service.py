# =============================================================================
# core/services/notification_service.py - Outbound Notifications
# =============================================================================
# Fire-and-forget email dispatch through the Celery `notifications` queue.
#
# Contract: callers never see a dispatch failure. Enqueue errors are logged
# and dropped (at most once, no acknowledgement). Do not make these methods
# raise; user creation must succeed even when the broker is down.
# =============================================================================

import logging
from typing import Any

from app.config import settings
from core.templates import WELCOME_EMAIL_SUBJECT, welcome_email_html

logger = logging.getLogger(__name__)


class NotificationService:
    """
    Sends notification messages to the background worker.
    """

    def __init__(self, sender: Any | None = None):
        # Anything with a Celery-style .delay(**payload); defaults to the email task
        self._sender = sender

    @property
    def options(self) -> dict[str, str]:
        return {
            "from_email": settings.SENDER_EMAIL,
            "from_name": settings.SENDER_NAME,
        }

    def send_welcome_email(self, email: str, user_name: str) -> bool:
        """
        Queue the welcome email for a new user.

        Returns:
            True if the message was handed to the broker, False otherwise
        """
        return self.send_one_email(
            to=email,
            subject=WELCOME_EMAIL_SUBJECT,
            html=welcome_email_html(user_name),
        )

    def send_one_email(self, to: str, subject: str, html: str) -> bool:
        """
        Queue a single email.

        Returns:
            True if the message was handed to the broker, False otherwise
        """
        payload = {
            "to": to,
            "subject": subject,
            "html": html,
            "options": self.options,
        }

        try:
            sender = self._sender
            if sender is None:
                from workers.tasks import send_email
                sender = send_email

            result = sender.delay(**payload)
            logger.info(f"Queued email '{subject}' to {to} [{getattr(result, 'id', None)}]")
            return True

        except Exception as e:
            logger.error(f"Failed to queue email '{subject}' to {to}: {e}")
            return False
