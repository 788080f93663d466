# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for Supabase database operations.
# It implements the singleton pattern to reuse a single client connection
# and provides specialized methods for the `users` table.
#
# Avatar rows live in `user_avatars` and are accessed through
# core.services.avatar_repository, which builds on get_client().
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   user = SupabaseClient.fetch_user_by_email("jane@example.com")
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from supabase import create_client, Client

from app.config import settings

# Set up logging for this module
logger = logging.getLogger(__name__)

# PostgreSQL unique_violation
UNIQUE_VIOLATION_CODE = "23505"


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Carries a code and an actionable suggestion, like the API exceptions.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


def is_unique_violation(error: Exception) -> bool:
    """Check whether a PostgREST error is a unique-constraint violation."""
    return getattr(error, "code", None) == UNIQUE_VIOLATION_CODE


class SupabaseClient:
    """
    Typed wrapper for Supabase database operations.

    Implements singleton pattern - one client instance is shared across
    the application. All methods are class methods for easy access without
    instantiation.

    Example:
        client = SupabaseClient.get_client()
        client.table("user_avatars").select("*").execute()
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS).
        This is appropriate for server-side operations.

        Returns:
            Client: Supabase client instance

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    # -------------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_user_by_email(cls, email: str) -> dict[str, Any] | None:
        """
        Fetch a user by (lowercased) email.

        Args:
            email: Email address to look up

        Returns:
            User dict, or None if no user has that email

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            response = (
                client.table("users")
                .select("*")
                .eq("email", email.lower())
                .limit(1)
                .execute()
            )
            rows = response.data or []
            return rows[0] if rows else None

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch user: {e}",
                code="FETCH_USER_FAILED",
                suggestion="Check that the users table is accessible",
                details={"email": email}
            )

    @classmethod
    def insert_user(cls, data: dict[str, Any]) -> dict[str, Any]:
        """
        Insert a user row.

        Args:
            data: Column values (email, first_name, last_name)

        Returns:
            The inserted row

        Raises:
            SupabaseClientError: If insert fails. A duplicate email surfaces
                with code USER_EXISTS.
        """
        client = cls.get_client()

        try:
            response = client.table("users").insert(data).execute()
        except Exception as e:
            if is_unique_violation(e):
                raise SupabaseClientError(
                    message="User with email already exists",
                    code="USER_EXISTS",
                    details={"email": data.get("email")}
                )
            raise SupabaseClientError(
                message=f"Failed to create user: {e}",
                code="INSERT_USER_FAILED",
                suggestion="Check that the users table is accessible",
                details={"email": data.get("email")}
            )

        if not response.data:
            raise SupabaseClientError(
                message="Insert returned no data",
                code="INSERT_USER_FAILED",
                details={"email": data.get("email")}
            )

        user = response.data[0]
        logger.info(f"Created user: {user.get('id')}")
        return user
