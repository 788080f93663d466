# =============================================================================
# core/services/avatar_repository.py - Avatar Metadata Store
# =============================================================================
# Create / read / delete access to the `user_avatars` table.
#
# The table carries a UNIQUE constraint on subject_id, so at most one record
# exists per subject no matter how many callers race to insert. A unique
# violation is reported as AvatarConflictError; the caller decides whether
# that is an error.
#
#   create table user_avatars (
#       id uuid primary key default gen_random_uuid(),
#       subject_id text not null unique,
#       identifier_tag text not null,
#       blob_locator text not null,
#       encoded_payload text not null,
#       content_type text not null default 'application/octet-stream',
#       size_bytes integer not null default 0,
#       source text not null default 'origin',
#       created_at timestamptz not null default now()
#   );
# =============================================================================

import logging

from lib.supabase_client import SupabaseClient, is_unique_violation
from core.models.avatar import AvatarRecord
from app.exceptions import AvatarConflictError, StorageError

logger = logging.getLogger(__name__)

TABLE_NAME = "user_avatars"


class AvatarRepository:
    """
    Metadata store for cached avatars, keyed by subject_id.
    """

    def __init__(self, table: str = TABLE_NAME):
        self.table = table

    def find(self, subject_id: str) -> AvatarRecord | None:
        """
        Look up the record for a subject.

        Returns:
            AvatarRecord, or None if the subject has no cached avatar

        Raises:
            StorageError: If the query fails
        """
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(self.table)
                .select("*")
                .eq("subject_id", subject_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to fetch avatar record: {e}")
            raise StorageError("read", f"{self.table}:{subject_id}", str(e))

        rows = response.data or []
        if not rows:
            return None
        return AvatarRecord.from_db_row(rows[0])

    def insert(self, record: AvatarRecord) -> AvatarRecord:
        """
        Insert a new record.

        Raises:
            AvatarConflictError: If a record already exists for the subject
            StorageError: If the insert fails for any other reason
        """
        client = SupabaseClient.get_client()

        try:
            response = client.table(self.table).insert(record.to_db_row()).execute()
        except Exception as e:
            if is_unique_violation(e):
                logger.info(f"Avatar record already exists for subject {record.subject_id}")
                raise AvatarConflictError(record.subject_id)
            logger.error(f"Failed to insert avatar record: {e}")
            raise StorageError("insert", f"{self.table}:{record.subject_id}", str(e))

        logger.info(f"Created avatar record for subject {record.subject_id} (tag {record.identifier_tag})")
        if response.data:
            return AvatarRecord.from_db_row(response.data[0])
        return record

    def delete(self, subject_id: str) -> AvatarRecord | None:
        """
        Delete the record for a subject.

        Returns:
            The deleted record, or None if nothing matched

        Raises:
            StorageError: If the delete fails
        """
        client = SupabaseClient.get_client()

        try:
            response = (
                client.table(self.table)
                .delete()
                .eq("subject_id", subject_id)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to delete avatar record: {e}")
            raise StorageError("delete", f"{self.table}:{subject_id}", str(e))

        rows = response.data or []
        if not rows:
            logger.info(f"No avatar record to delete for subject {subject_id}")
            return None

        logger.info(f"Deleted avatar record for subject {subject_id}")
        return AvatarRecord.from_db_row(rows[0])
