# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.SUPABASE_URL)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings are accessed via the global `settings` instance.
    """

    # -------------------------------------------------------------------------
    # Supabase Configuration
    # -------------------------------------------------------------------------
    # Used for the users / user_avatars tables and for avatar blob storage

    SUPABASE_URL: str = Field(
        ...,
        description="Supabase project URL (e.g., https://xxx.supabase.co)"
    )

    SUPABASE_ANON_KEY: str = Field(
        ...,
        description="Supabase anon/public API key"
    )

    SUPABASE_SERVICE_KEY: str = Field(
        ...,
        description="Supabase service_role key (bypasses RLS)"
    )

    # -------------------------------------------------------------------------
    # Redis Configuration (for Celery)
    # -------------------------------------------------------------------------

    REDIS_URL: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL for Celery broker"
    )

    # -------------------------------------------------------------------------
    # Avatar Origin / User Directory
    # -------------------------------------------------------------------------
    # Templates are formatted with the subject / user id

    AVATAR_ORIGIN_URL_TEMPLATE: str = Field(
        default="https://reqres.in/img/faces/{subject_id}-image.jpg",
        description="URL of the default avatar for a subject ({subject_id} placeholder)"
    )

    USER_DIRECTORY_URL_TEMPLATE: str = Field(
        default="https://reqres.in/api/users/{user_id}",
        description="User directory lookup URL ({user_id} placeholder)"
    )

    ORIGIN_TIMEOUT_SECONDS: float = Field(
        default=40.0,
        gt=0,
        le=300,
        description="Timeout for a single origin request"
    )

    # -------------------------------------------------------------------------
    # Avatar Storage
    # -------------------------------------------------------------------------

    BLOB_BACKEND: Literal["local", "supabase"] = Field(
        default="local",
        description="Where raw avatar bytes are stored"
    )

    BLOB_LOCAL_ROOT: str = Field(
        default="uploads",
        description="Root directory for the local blob backend"
    )

    AVATAR_BUCKET: str = Field(
        default="avatars",
        description="Supabase Storage bucket for the supabase blob backend"
    )

    MAX_AVATAR_SIZE_MB: int = Field(
        default=5,
        ge=1,
        le=50,
        description="Maximum size of a directly uploaded avatar in MB"
    )

    ALLOWED_AVATAR_TYPES: str = Field(
        default="image/png,image/jpeg,image/gif,image/webp",
        description="Allowed avatar content types (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Notifications (welcome email)
    # -------------------------------------------------------------------------

    SENDER_EMAIL: str = Field(
        default="no-reply@userbase.local",
        description="From address for outbound email"
    )

    SENDER_NAME: str = Field(
        default="Userbase",
        description="From display name for outbound email"
    )

    SMTP_HOST: str = Field(
        default="localhost",
        description="SMTP server used by the notification worker"
    )

    SMTP_PORT: int = Field(
        default=587,
        ge=1,
        le=65535,
        description="SMTP server port"
    )

    SMTP_USERNAME: str | None = Field(
        default=None,
        description="SMTP login (STARTTLS + login is skipped when unset)"
    )

    SMTP_PASSWORD: str | None = Field(
        default=None,
        description="SMTP password"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging, auto-reload)"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    API_PORT: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000",
        description="Allowed CORS origins (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "http://localhost:3000, https://myapp.com" -> ["http://localhost:3000", "https://myapp.com"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def allowed_avatar_types_list(self) -> list[str]:
        """
        Parse ALLOWED_AVATAR_TYPES string into a list.

        Example: "image/png, image/jpeg" -> ["image/png", "image/jpeg"]
        """
        return [t.strip().lower() for t in self.ALLOWED_AVATAR_TYPES.split(",")]

    @property
    def max_avatar_size_bytes(self) -> int:
        """Convert MB to bytes for upload size validation."""
        return self.MAX_AVATAR_SIZE_MB * 1024 * 1024

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"

    def avatar_origin_url(self, subject_id: str) -> str:
        """Build the origin URL for a subject's default avatar."""
        return self.AVATAR_ORIGIN_URL_TEMPLATE.format(subject_id=subject_id)

    def user_directory_url(self, user_id: str) -> str:
        """Build the user directory lookup URL."""
        return self.USER_DIRECTORY_URL_TEMPLATE.format(user_id=user_id)


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once,
    not on every access.

    Returns:
        Settings: The application settings instance
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()
