# =============================================================================
# tests/test_tasks.py - Celery Task Tests
# =============================================================================
# Tasks are called directly (no broker); SMTP is mocked.
# =============================================================================

import smtplib
from unittest.mock import MagicMock, patch

from workers.tasks import build_message, send_email


class TestBuildMessage:
    """Tests for MIME message construction."""

    def test_headers_from_options(self):
        msg = build_message(
            "jane@example.com",
            "Hi",
            "<p>Hello</p>",
            {"from_email": "team@example.com", "from_name": "Team"},
        )

        assert msg["To"] == "jane@example.com"
        assert msg["Subject"] == "Hi"
        assert msg["From"] == "Team <team@example.com>"

    def test_defaults_to_settings_sender(self):
        msg = build_message("jane@example.com", "Hi", "<p>Hello</p>")

        assert "no-reply@userbase.local" in msg["From"]


class TestSendEmail:
    """Tests for the send_email task."""

    def test_delivers_over_smtp(self):
        with patch("workers.tasks.smtplib.SMTP") as mock_smtp:
            server = MagicMock()
            mock_smtp.return_value.__enter__.return_value = server

            result = send_email.run("jane@example.com", "Hi", "<p>Hello</p>")

        assert result == {"success": True, "to": "jane@example.com"}
        server.send_message.assert_called_once()

    def test_smtp_failure_is_reported_not_raised(self):
        with patch("workers.tasks.smtplib.SMTP") as mock_smtp:
            mock_smtp.return_value.__enter__.return_value.send_message.side_effect = (
                smtplib.SMTPRecipientsRefused({})
            )

            result = send_email.run("jane@example.com", "Hi", "<p>Hello</p>")

        assert result["success"] is False
        assert "error" in result
