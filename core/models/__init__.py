# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - avatar.py: Cached avatar record and avatar API responses
# - user.py: User creation schema
#
# These models define the "contract" between API and clients.
# =============================================================================

# -----------------------------------------------------------------------------
# Avatar Models - Cached avatar records
# -----------------------------------------------------------------------------
from .avatar import (
    AvatarPayloadResponse,
    AvatarRecord,
    AvatarRecordResponse,
    AvatarSource,
)

# -----------------------------------------------------------------------------
# User Models
# -----------------------------------------------------------------------------
from .user import (
    UserCreate,
)

__all__ = [
    # Avatar
    "AvatarPayloadResponse",
    "AvatarRecord",
    "AvatarRecordResponse",
    "AvatarSource",
    # User
    "UserCreate",
]
