# =============================================================================
# core/models/avatar.py - Avatar Schemas
# =============================================================================
# These models define the stored shape of a cached avatar and the API
# contract for avatar operations:
# - AvatarRecord: One row of the user_avatars table (one per subject)
# - AvatarSource: Where the avatar bytes came from
# - AvatarPayloadResponse / AvatarRecordResponse: API outputs
#
# An AvatarRecord is created once and deleted once. It is never updated.
# =============================================================================

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class AvatarSource(str, Enum):
    """
    How an avatar entered the cache.

    - origin: fetched from the external origin on a cache miss
    - upload: supplied directly by the caller
    """
    ORIGIN = "origin"
    UPLOAD = "upload"


class AvatarRecord(BaseModel):
    """
    A cached avatar.

    The encoded payload duplicates the blob so reads never touch blob
    storage. While the record exists, blob_locator should reference a
    live blob; deletes tolerate the blob already being gone.

    Example:
        {
            "subject_id": "42",
            "identifier_tag": "042918273645510",
            "blob_locator": "avatars/42",
            "encoded_payload": "iVBORw0KGgo...",
            "content_type": "image/png",
            "size_bytes": 5120,
            "source": "origin",
            "created_at": "2024-01-15T10:30:00Z"
        }
    """

    subject_id: str = Field(
        ...,
        min_length=1,
        description="Identifier of the owning subject (unique)"
    )

    identifier_tag: str = Field(
        ...,
        pattern=r"^[0-9]+$",
        description="Opaque numeric version tag"
    )

    blob_locator: str = Field(
        ...,
        min_length=1,
        description="Key of the raw bytes in blob storage"
    )

    encoded_payload: str = Field(
        ...,
        description="Base64 encoding of the image bytes"
    )

    content_type: str = Field(
        default="application/octet-stream",
        description="MIME type reported by the origin or uploader"
    )

    size_bytes: int = Field(
        default=0,
        ge=0,
        description="Size of the raw image in bytes"
    )

    source: AvatarSource = Field(
        default=AvatarSource.ORIGIN,
        description="How the avatar was obtained"
    )

    created_at: datetime = Field(
        ...,
        description="Timestamp when the record was created"
    )

    model_config = {"frozen": True}

    @classmethod
    def from_db_row(cls, row: dict[str, Any]) -> "AvatarRecord":
        """Build a record from a user_avatars row, ignoring extra columns."""
        return cls.model_validate(
            {name: row[name] for name in cls.model_fields if name in row}
        )

    def to_db_row(self) -> dict[str, Any]:
        """Serialize for insertion (JSON-safe values)."""
        return self.model_dump(mode="json")


class AvatarPayloadResponse(BaseModel):
    """Encoded avatar returned by GET /users/{id}/avatar."""
    file_base64: str = Field(..., description="Base64 encoded avatar bytes")


class AvatarRecordResponse(BaseModel):
    """Record metadata returned by avatar upload (payload sent separately)."""
    subject_id: str
    identifier_tag: str
    blob_locator: str
    content_type: str
    size_bytes: int
    source: AvatarSource
    created_at: datetime

    @classmethod
    def from_record(cls, record: AvatarRecord) -> "AvatarRecordResponse":
        return cls(
            subject_id=record.subject_id,
            identifier_tag=record.identifier_tag,
            blob_locator=record.blob_locator,
            content_type=record.content_type,
            size_bytes=record.size_bytes,
            source=record.source,
            created_at=record.created_at,
        )
