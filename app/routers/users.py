# =============================================================================
# app/routers/users.py - User and Avatar Endpoints
# =============================================================================
# Handles user creation, directory lookups and the cached user avatar.
#
# Handlers are plain `def` functions: FastAPI runs them in its threadpool, so
# a slow origin fetch or storage round-trip for one user doesn't block
# requests for another.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, File, Path, UploadFile, status

from app.config import settings
from app.dependencies import AvatarServiceDep, UserServiceDep
from app.exceptions import FileTooLargeError, InvalidFileTypeError
from core.models.avatar import AvatarPayloadResponse, AvatarRecordResponse
from core.models.user import UserCreate

logger = logging.getLogger(__name__)

router = APIRouter()

# Subject ids become blob locators, so keep them path-safe
USER_ID_PATTERN = r"^[A-Za-z0-9_-]{1,64}$"

UserIdPath = Annotated[str, Path(pattern=USER_ID_PATTERN, description="User identifier")]


# =============================================================================
# Users
# =============================================================================

@router.post("", status_code=status.HTTP_201_CREATED)
def create_user(request: UserCreate, users: UserServiceDep):
    """
    Create a user.

    Queues a welcome email. Email delivery problems never fail this call.
    """
    user = users.create_user(request)
    return {"message": "User created", "response": {"user": user}}


@router.get("/{user_id}")
def get_user(user_id: UserIdPath, users: UserServiceDep):
    """
    Fetch a user from the user directory.
    """
    user = users.get_user(user_id)
    return {"message": "User fetched successfully", "response": user}


# =============================================================================
# Avatar
# =============================================================================

@router.get("/{user_id}/avatar")
def get_user_avatar(
    user_id: UserIdPath,
    users: UserServiceDep,
    avatars: AvatarServiceDep,
):
    """
    Get a user's avatar as base64.

    The first request fetches the default avatar from the origin and caches
    it; later requests are served from the cache.
    Returns 502 if the avatar isn't cached and the origin is unavailable.
    """
    users.ensure_user_exists(user_id)
    payload = avatars.get_avatar(user_id)
    return {
        "message": "User avatar fetched",
        "response": AvatarPayloadResponse(file_base64=payload),
    }


@router.post("/{user_id}/avatar", status_code=status.HTTP_201_CREATED)
def upload_user_avatar(
    user_id: UserIdPath,
    file: Annotated[UploadFile, File(description="Avatar image")],
    users: UserServiceDep,
    avatars: AvatarServiceDep,
):
    """
    Upload an avatar for a user.

    Returns 409 if the user already has an avatar; delete it first.
    """
    content_type = (file.content_type or "").lower()
    allowed = settings.allowed_avatar_types_list
    if content_type not in allowed:
        raise InvalidFileTypeError(content_type or "unknown", allowed)

    content = file.file.read()
    if len(content) > settings.max_avatar_size_bytes:
        raise FileTooLargeError(len(content) / (1024 * 1024), settings.MAX_AVATAR_SIZE_MB)

    users.ensure_user_exists(user_id)
    record = avatars.save_avatar(user_id, content, content_type)

    return {
        "message": "User avatar uploaded",
        "response": {
            "avatar": AvatarRecordResponse.from_record(record),
            "file_base64": record.encoded_payload,
        },
    }


@router.delete("/{user_id}/avatar")
def delete_user_avatar(
    user_id: UserIdPath,
    users: UserServiceDep,
    avatars: AvatarServiceDep,
):
    """
    Delete a user's avatar from blob storage and the cache.

    Returns the deleted record, payload included. Returns 404 if the user
    has no avatar.
    """
    users.ensure_user_exists(user_id)
    record = avatars.delete_avatar(user_id)
    return {
        "message": "User avatar deleted",
        "response": record,
    }
