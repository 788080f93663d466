# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - In-memory avatar metadata store that enforces the subject_id unique
#   constraint like the real table
# - Origin stubbed with httpx.MockTransport, counting requests
# =============================================================================

import os
import threading

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import httpx
import pytest

from app.exceptions import AvatarConflictError
from core.models.avatar import AvatarRecord
from core.services.avatar_service import AvatarCacheService
from core.services.origin_fetcher import OriginFetcher
from core.services.storage_service import LocalBlobStore

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00\x00\x00\rIHDR" + b"avatar-pixels" * 8


# =============================================================================
# Test Doubles
# =============================================================================

class InMemoryAvatarRepository:
    """
    Dict-backed stand-in for AvatarRepository.

    insert() enforces one record per subject_id, raising AvatarConflictError
    exactly like the unique constraint on user_avatars.
    """

    def __init__(self):
        self.rows: dict[str, AvatarRecord] = {}
        self._lock = threading.Lock()
        self.insert_calls = 0
        self.delete_calls = 0

    def find(self, subject_id: str) -> AvatarRecord | None:
        return self.rows.get(subject_id)

    def insert(self, record: AvatarRecord) -> AvatarRecord:
        with self._lock:
            self.insert_calls += 1
            if record.subject_id in self.rows:
                raise AvatarConflictError(record.subject_id)
            self.rows[record.subject_id] = record
            return record

    def delete(self, subject_id: str) -> AvatarRecord | None:
        with self._lock:
            self.delete_calls += 1
            return self.rows.pop(subject_id, None)


class CountingOrigin:
    """httpx.MockTransport handler serving fixed bytes and counting requests."""

    def __init__(self, content: bytes = PNG_BYTES, status_code: int = 200,
                 content_type: str = "image/png"):
        self.content = content
        self.status_code = status_code
        self.content_type = content_type
        self.requests: list[httpx.Request] = []

    @property
    def calls(self) -> int:
        return len(self.requests)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(
            self.status_code,
            content=self.content,
            headers={"content-type": self.content_type},
        )


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def png_bytes():
    """Raw bytes returned by the stub origin."""
    return PNG_BYTES


@pytest.fixture
def origin():
    """Stub origin returning PNG bytes."""
    return CountingOrigin()


@pytest.fixture
def fetcher(origin):
    """OriginFetcher wired to the stub origin."""
    client = httpx.Client(transport=httpx.MockTransport(origin))
    yield OriginFetcher(client=client, timeout=5)
    client.close()


@pytest.fixture
def repository():
    """In-memory avatar metadata store."""
    return InMemoryAvatarRepository()


@pytest.fixture
def blob_store(tmp_path):
    """Local blob store rooted in a temp directory."""
    return LocalBlobStore(tmp_path / "uploads")


@pytest.fixture
def avatar_service(fetcher, blob_store, repository):
    """AvatarCacheService wired to test doubles."""
    return AvatarCacheService(
        fetcher=fetcher,
        blob_store=blob_store,
        repository=repository,
        tag_generator=lambda: "123456789012345",
        origin_url=lambda subject_id: f"https://origin.test/faces/{subject_id}.png",
        fetch_timeout=5,
    )


@pytest.fixture
def sample_avatar_row():
    """Sample user_avatars row as returned by Supabase."""
    return {
        "id": "6f1c0e2a-0000-4000-8000-000000000042",
        "subject_id": "42",
        "identifier_tag": "123456789012345",
        "blob_locator": "avatars/42",
        "encoded_payload": "iVBORw0KGgo=",
        "content_type": "image/png",
        "size_bytes": 8,
        "source": "origin",
        "created_at": "2024-01-15T10:30:00+00:00",
    }
