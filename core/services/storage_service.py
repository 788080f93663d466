# =============================================================================
# core/services/storage_service.py - Avatar Blob Storage
# =============================================================================
# Writes and deletes raw avatar bytes at subject-keyed locators.
#
# Two backends share the BlobStore interface:
# - SupabaseBlobStore: Supabase Storage bucket (upsert on write)
# - LocalBlobStore: a directory on the local filesystem
#
# Both overwrite on write and treat deleting a missing blob as success.
# =============================================================================

import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

from lib.supabase_client import SupabaseClient
from app.config import settings
from app.exceptions import StorageError

logger = logging.getLogger(__name__)

# Prefix for all avatar locators
AVATAR_PREFIX = "avatars"


def avatar_locator(subject_id: str) -> str:
    """
    Build the blob locator for a subject.

    The same subject always maps to the same locator, so rewriting an
    avatar overwrites the previous blob instead of adding a new one.
    """
    return f"{AVATAR_PREFIX}/{subject_id}"


class BlobStore(Protocol):
    """Durable storage for raw avatar bytes."""

    def write(self, locator: str, content: bytes, content_type: str) -> str:
        ...

    def delete(self, locator: str) -> None:
        ...


class SupabaseBlobStore:
    """
    Blob storage backed by a Supabase Storage bucket.
    """

    def __init__(self, bucket: str | None = None):
        self.bucket = bucket or settings.AVATAR_BUCKET

    def write(self, locator: str, content: bytes, content_type: str) -> str:
        """
        Upload bytes, replacing any existing object at the locator.

        Returns:
            The locator written

        Raises:
            StorageError: If the upload fails
        """
        client = SupabaseClient.get_client()

        try:
            client.storage.from_(self.bucket).upload(
                path=locator,
                file=content,
                file_options={"content-type": content_type, "upsert": "true"}
            )
        except Exception as e:
            logger.error(f"Storage upload failed: {e}")
            raise StorageError("write", locator, str(e))

        logger.info(f"Uploaded avatar to storage: {self.bucket}/{locator}")
        return locator

    def delete(self, locator: str) -> None:
        """
        Remove an object from the bucket.

        Supabase reports a missing object as an empty result, not an error.

        Raises:
            StorageError: If the removal fails
        """
        client = SupabaseClient.get_client()

        try:
            removed = client.storage.from_(self.bucket).remove([locator])
        except Exception as e:
            logger.error(f"Failed to delete file: {e}")
            raise StorageError("delete", locator, str(e))

        if removed:
            logger.info(f"Deleted avatar from storage: {self.bucket}/{locator}")
        else:
            logger.info(f"Avatar blob already absent: {self.bucket}/{locator}")


class LocalBlobStore:
    """
    Blob storage in a local directory.

    Writes go to a temporary file in the target directory and are moved
    into place with os.replace, so readers never see a partial blob.
    """

    def __init__(self, root: str | Path | None = None):
        self.root = Path(root or settings.BLOB_LOCAL_ROOT).resolve()
        self.root.mkdir(parents=True, exist_ok=True)

    def path_for(self, locator: str) -> Path:
        """
        Resolve a locator to a path under the root.

        Raises:
            StorageError: If the locator escapes the root directory
        """
        path = (self.root / locator).resolve()
        if path == self.root or self.root not in path.parents:
            raise StorageError("resolve", locator, "locator escapes storage root")
        return path

    def write(self, locator: str, content: bytes, content_type: str) -> str:
        path = self.path_for(locator)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.")
            try:
                with os.fdopen(fd, "wb") as tmp:
                    tmp.write(content)
                    tmp.flush()
                    os.fsync(tmp.fileno())
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            logger.error(f"Local blob write failed: {e}")
            raise StorageError("write", locator, str(e))

        logger.info(f"Wrote avatar blob: {path} ({len(content)} bytes)")
        return locator

    def delete(self, locator: str) -> None:
        path = self.path_for(locator)

        try:
            path.unlink()
        except FileNotFoundError:
            logger.info(f"Avatar blob already absent: {path}")
            return
        except OSError as e:
            logger.error(f"Local blob delete failed: {e}")
            raise StorageError("delete", locator, str(e))

        logger.info(f"Deleted avatar blob: {path}")


def create_blob_store() -> BlobStore:
    """Build the blob store selected by settings.BLOB_BACKEND."""
    if settings.BLOB_BACKEND == "supabase":
        return SupabaseBlobStore()
    return LocalBlobStore()
