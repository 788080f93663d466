# =============================================================================
# core/services/user_service.py - User Business Logic
# =============================================================================
# Handles user creation and the user-directory existence check that guards
# the avatar endpoints.
# =============================================================================

import logging
from typing import Any

from lib.supabase_client import SupabaseClient, SupabaseClientError
from core.models.user import UserCreate
from core.services.notification_service import NotificationService
from core.services.origin_fetcher import OriginFetcher
from app.config import settings
from app.exceptions import (
    OriginUnavailableError,
    StorageError,
    UserAlreadyExistsError,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)


class UserService:
    """
    Service for user management operations.
    """

    def __init__(
        self,
        fetcher: OriginFetcher | None = None,
        notifications: NotificationService | None = None,
    ):
        self.fetcher = fetcher or OriginFetcher()
        self.notifications = notifications or NotificationService()

    def create_user(self, data: UserCreate) -> dict[str, Any]:
        """
        Create a user and queue their welcome email.

        The welcome email is best effort; a dispatch failure is logged by
        NotificationService and never fails the creation.

        Args:
            data: Validated user fields

        Returns:
            Created user dict

        Raises:
            UserAlreadyExistsError: If the email is already registered
            StorageError: If the users table can't be read or written
        """
        try:
            if SupabaseClient.fetch_user_by_email(data.email):
                raise UserAlreadyExistsError(data.email)

            user = SupabaseClient.insert_user({
                "email": data.email,
                "first_name": data.first_name,
                "last_name": data.last_name,
            })
        except SupabaseClientError as e:
            if e.code == "USER_EXISTS":
                raise UserAlreadyExistsError(data.email)
            raise StorageError("write", "users", e.message)

        self.notifications.send_welcome_email(user["email"], data.full_name)
        return user

    def get_user(self, user_id: str) -> dict[str, Any]:
        """
        Look up a user in the user directory.

        Args:
            user_id: Directory user id

        Returns:
            User dict from the directory

        Raises:
            UserNotFoundError: If the directory has no such user
            OriginUnavailableError: If the directory can't be reached
        """
        url = settings.user_directory_url(user_id)

        try:
            body = self.fetcher.fetch_json(url)
        except OriginUnavailableError as e:
            if e.details.get("upstream_status") == 404:
                raise UserNotFoundError(user_id)
            raise

        user = body.get("data") if isinstance(body, dict) else None
        if not user:
            raise UserNotFoundError(user_id)
        return user

    def ensure_user_exists(self, user_id: str) -> None:
        """Raise UserNotFoundError unless the directory knows the user."""
        self.get_user(user_id)
