# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
#
# Services are built once per process and reused; tests replace them with
# app.dependency_overrides.
# =============================================================================

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from core.services.avatar_service import AvatarCacheService
from core.services.user_service import UserService


@lru_cache
def get_avatar_service() -> AvatarCacheService:
    """
    Get the avatar cache service.

    Uses the blob backend selected by settings.BLOB_BACKEND.
    """
    return AvatarCacheService()


@lru_cache
def get_user_service() -> UserService:
    """Get the user service."""
    return UserService()


# Type aliases for dependency injection
AvatarServiceDep = Annotated[AvatarCacheService, Depends(get_avatar_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
