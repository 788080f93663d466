# =============================================================================
# core/services/avatar_service.py - Avatar Acquisition and Cache
# =============================================================================
# Returns a subject's avatar, fetching it from the origin on first access and
# serving every later request from the cached metadata record.
#
# Write order on a miss:   fetch -> blob write -> tag -> encode -> insert
# Delete order:            lookup -> blob delete -> record delete
#
# A record is only ever inserted after its blob is written, and only ever
# removed after its blob is gone. Blob locators are fixed per subject, so a
# blob left behind by a crash is overwritten on the next successful write.
#
# Concurrent writers for one subject are not locked. Each writes the blob,
# the unique constraint on user_avatars lets exactly one insert through, and
# the loser re-reads the winner's record and rewrites the blob from it so the
# blob and the record hold the same bytes.
# =============================================================================

import logging
from datetime import datetime, timezone
from typing import Callable

from app.config import settings
from app.exceptions import AvatarConflictError, AvatarNotFoundError
from core.models.avatar import AvatarRecord, AvatarSource
from core.services.avatar_repository import AvatarRepository
from core.services.origin_fetcher import OriginFetcher
from core.services.storage_service import BlobStore, avatar_locator, create_blob_store
from lib.utils import from_base64, generate_numeric_tag, to_base64

logger = logging.getLogger(__name__)


class AvatarCacheService:
    """
    Orchestrates the origin fetcher, blob store and metadata store.

    This service is the only writer of avatar records and avatar blobs.
    It trusts the subject_id it is given; existence checks belong to the
    caller.
    """

    def __init__(
        self,
        fetcher: OriginFetcher | None = None,
        blob_store: BlobStore | None = None,
        repository: AvatarRepository | None = None,
        tag_generator: Callable[[], str] = generate_numeric_tag,
        origin_url: Callable[[str], str] | None = None,
        fetch_timeout: float | None = None,
    ):
        self.fetcher = fetcher or OriginFetcher()
        self.blob_store = blob_store or create_blob_store()
        self.repository = repository or AvatarRepository()
        self.tag_generator = tag_generator
        self.origin_url = origin_url or settings.avatar_origin_url
        self.fetch_timeout = fetch_timeout if fetch_timeout is not None else settings.ORIGIN_TIMEOUT_SECONDS

    # -------------------------------------------------------------------------
    # Read (fetch on miss)
    # -------------------------------------------------------------------------

    def get_avatar(self, subject_id: str) -> str:
        """
        Get the encoded avatar for a subject.

        Args:
            subject_id: Subject whose avatar to return

        Returns:
            Base64 encoded image bytes

        Raises:
            OriginUnavailableError: If the avatar isn't cached and the origin fails
            StorageError: If blob or metadata storage fails
        """
        return self.get_avatar_record(subject_id).encoded_payload

    def get_avatar_record(self, subject_id: str) -> AvatarRecord:
        """
        Get the cached record for a subject, populating it on a miss.

        A conflict on insert means another caller populated the cache first;
        their record is returned instead of raising.
        """
        record = self.repository.find(subject_id)
        if record is not None:
            logger.debug(f"Avatar cache hit for subject {subject_id}")
            return record

        logger.info(f"Avatar cache miss for subject {subject_id}, fetching from origin")
        image = self.fetcher.fetch(self.origin_url(subject_id), timeout=self.fetch_timeout)

        record = self._store(subject_id, image.content, image.content_type, AvatarSource.ORIGIN)

        try:
            return self.repository.insert(record)
        except AvatarConflictError:
            existing = self.repository.find(subject_id)
            if existing is None:
                # Winner was deleted between its insert and our re-read.
                logger.warning(f"Avatar for subject {subject_id} vanished after insert conflict")
                return record
            logger.info(f"Avatar for subject {subject_id} was cached concurrently, using existing record")
            self._restore_blob(existing, record)
            return existing

    # -------------------------------------------------------------------------
    # Direct creation
    # -------------------------------------------------------------------------

    def save_avatar(
        self,
        subject_id: str,
        content: bytes,
        content_type: str,
    ) -> AvatarRecord:
        """
        Store an avatar supplied by the caller.

        Unlike the fetch-on-miss path, an existing record is an error here.

        Raises:
            AvatarConflictError: If the subject already has an avatar
            StorageError: If blob or metadata storage fails
        """
        if self.repository.find(subject_id) is not None:
            raise AvatarConflictError(subject_id)

        record = self._store(subject_id, content, content_type, AvatarSource.UPLOAD)

        try:
            return self.repository.insert(record)
        except AvatarConflictError:
            existing = self.repository.find(subject_id)
            if existing is not None:
                self._restore_blob(existing, record)
            raise

    # -------------------------------------------------------------------------
    # Delete
    # -------------------------------------------------------------------------

    def delete_avatar(self, subject_id: str) -> AvatarRecord:
        """
        Delete a subject's avatar from both stores.

        The blob goes first. If that fails for any reason other than the
        blob already being gone, the record is left in place.

        Returns:
            Snapshot of the record as it was before deletion

        Raises:
            AvatarNotFoundError: If the subject has no avatar record
            StorageError: If the blob or record can't be deleted
        """
        record = self.repository.find(subject_id)
        if record is None:
            raise AvatarNotFoundError(subject_id)

        self.blob_store.delete(record.blob_locator)
        self.repository.delete(subject_id)

        logger.info(f"Deleted avatar for subject {subject_id} (tag {record.identifier_tag})")
        return record

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _store(
        self,
        subject_id: str,
        content: bytes,
        content_type: str,
        source: AvatarSource,
    ) -> AvatarRecord:
        """Write the blob and build (but don't insert) its record."""
        locator = self.blob_store.write(avatar_locator(subject_id), content, content_type)

        return AvatarRecord(
            subject_id=subject_id,
            identifier_tag=self.tag_generator(),
            blob_locator=locator,
            encoded_payload=to_base64(content),
            content_type=content_type,
            size_bytes=len(content),
            source=source,
            created_at=datetime.now(timezone.utc),
        )

    def _restore_blob(self, existing: AvatarRecord, written: AvatarRecord) -> None:
        """Put the winning record's bytes back after a losing write overwrote its blob."""
        if existing.encoded_payload == written.encoded_payload:
            return
        logger.info(f"Restoring avatar blob for subject {existing.subject_id} from its record")
        self.blob_store.write(
            existing.blob_locator,
            from_base64(existing.encoded_payload),
            existing.content_type,
        )
