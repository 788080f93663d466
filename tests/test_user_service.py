# =============================================================================
# tests/test_user_service.py - User Service and Notification Tests
# =============================================================================
# This module contains tests for:
# - User creation (duplicate email, welcome email dispatch)
# - Directory lookups
# - Fire-and-forget notification contract
#
# Tests use mocked Supabase responses to avoid database calls.
# =============================================================================

from unittest.mock import MagicMock, patch

import httpx
import pytest

from app.exceptions import (
    OriginUnavailableError,
    StorageError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from core.models.user import UserCreate
from core.services.notification_service import NotificationService
from core.services.origin_fetcher import OriginFetcher
from core.services.user_service import UserService
from lib.supabase_client import SupabaseClientError


@pytest.fixture
def new_user():
    return UserCreate(first_name="John", last_name="Doe", email="Hello@Gmail.com")


@pytest.fixture
def notifications():
    return MagicMock(spec=NotificationService)


# =============================================================================
# User Creation
# =============================================================================

class TestCreateUser:
    """Tests for UserService.create_user."""

    @pytest.fixture
    def mock_supabase(self):
        with patch("core.services.user_service.SupabaseClient") as mock:
            mock.fetch_user_by_email.return_value = None
            mock.insert_user.return_value = {
                "id": "user-1",
                "email": "hello@gmail.com",
                "first_name": "John",
                "last_name": "Doe",
            }
            yield mock

    def test_creates_user_and_sends_welcome(self, mock_supabase, new_user, notifications):
        service = UserService(fetcher=MagicMock(), notifications=notifications)

        user = service.create_user(new_user)

        assert user["id"] == "user-1"
        mock_supabase.insert_user.assert_called_once_with({
            "email": "hello@gmail.com",
            "first_name": "John",
            "last_name": "Doe",
        })
        notifications.send_welcome_email.assert_called_once_with("hello@gmail.com", "John Doe")

    def test_existing_email_conflicts(self, mock_supabase, new_user, notifications):
        mock_supabase.fetch_user_by_email.return_value = {"id": "user-0"}
        service = UserService(fetcher=MagicMock(), notifications=notifications)

        with pytest.raises(UserAlreadyExistsError):
            service.create_user(new_user)

        mock_supabase.insert_user.assert_not_called()
        notifications.send_welcome_email.assert_not_called()

    def test_insert_race_conflicts(self, mock_supabase, new_user, notifications):
        mock_supabase.insert_user.side_effect = SupabaseClientError("exists", code="USER_EXISTS")
        service = UserService(fetcher=MagicMock(), notifications=notifications)

        with pytest.raises(UserAlreadyExistsError):
            service.create_user(new_user)

    def test_database_failure_is_storage_error(self, mock_supabase, new_user, notifications):
        mock_supabase.fetch_user_by_email.side_effect = SupabaseClientError("down")
        service = UserService(fetcher=MagicMock(), notifications=notifications)

        with pytest.raises(StorageError):
            service.create_user(new_user)

    def test_notification_failure_does_not_fail_creation(self, mock_supabase, new_user):
        """A broken broker never fails user creation."""
        sender = MagicMock()
        sender.delay.side_effect = ConnectionError("broker unreachable")
        service = UserService(
            fetcher=MagicMock(),
            notifications=NotificationService(sender=sender),
        )

        user = service.create_user(new_user)

        assert user["id"] == "user-1"
        sender.delay.assert_called_once()


# =============================================================================
# Directory Lookups
# =============================================================================

def _directory(handler) -> OriginFetcher:
    return OriginFetcher(client=httpx.Client(transport=httpx.MockTransport(handler)))


class TestGetUser:
    """Tests for UserService.get_user."""

    def test_returns_directory_user(self, notifications):
        fetcher = _directory(lambda request: httpx.Response(
            200, json={"data": {"id": 2, "email": "janet@reqres.in"}}
        ))
        service = UserService(fetcher=fetcher, notifications=notifications)

        assert service.get_user("2") == {"id": 2, "email": "janet@reqres.in"}

    def test_directory_404_is_user_not_found(self, notifications):
        fetcher = _directory(lambda request: httpx.Response(404, json={}))
        service = UserService(fetcher=fetcher, notifications=notifications)

        with pytest.raises(UserNotFoundError):
            service.get_user("23")

    def test_empty_body_is_user_not_found(self, notifications):
        fetcher = _directory(lambda request: httpx.Response(200, json={}))
        service = UserService(fetcher=fetcher, notifications=notifications)

        with pytest.raises(UserNotFoundError):
            service.ensure_user_exists("23")

    def test_directory_outage_is_origin_unavailable(self, notifications):
        fetcher = _directory(lambda request: httpx.Response(500))
        service = UserService(fetcher=fetcher, notifications=notifications)

        with pytest.raises(OriginUnavailableError):
            service.get_user("2")


# =============================================================================
# Notifications
# =============================================================================

class TestNotificationService:
    """Tests for the fire-and-forget email dispatch."""

    def test_welcome_email_is_queued(self):
        sender = MagicMock()
        service = NotificationService(sender=sender)

        assert service.send_welcome_email("jane@example.com", "Jane Doe") is True

        payload = sender.delay.call_args.kwargs
        assert payload["to"] == "jane@example.com"
        assert payload["subject"] == "Welcome to Userbase!"
        assert "Jane Doe" in payload["html"]
        assert set(payload["options"]) == {"from_email", "from_name"}

    def test_enqueue_failure_is_swallowed(self):
        sender = MagicMock()
        sender.delay.side_effect = RuntimeError("no broker")

        assert NotificationService(sender=sender).send_welcome_email("a@b.co", "A B") is False

    def test_welcome_email_escapes_name(self):
        sender = MagicMock()

        NotificationService(sender=sender).send_welcome_email("a@b.co", "<script>")

        assert "<script>" not in sender.delay.call_args.kwargs["html"]
