# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .avatar_repository import AvatarRepository
from .avatar_service import AvatarCacheService
from .notification_service import NotificationService
from .origin_fetcher import FetchedImage, OriginFetcher
from .storage_service import (
    BlobStore,
    LocalBlobStore,
    SupabaseBlobStore,
    avatar_locator,
    create_blob_store,
)
from .user_service import UserService

__all__ = [
    "AvatarRepository",
    "AvatarCacheService",
    "NotificationService",
    "FetchedImage",
    "OriginFetcher",
    "BlobStore",
    "LocalBlobStore",
    "SupabaseBlobStore",
    "avatar_locator",
    "create_blob_store",
    "UserService",
]
