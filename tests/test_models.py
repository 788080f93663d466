# =============================================================================
# tests/test_models.py - Pydantic Model Tests
# =============================================================================
# Unit tests for the models to ensure:
# - Valid data is accepted and parsed correctly
# - Invalid data raises ValidationError
# - Records serialize to JSON-safe rows
# =============================================================================

from datetime import datetime

import pytest
from pydantic import ValidationError

from core.models import AvatarRecord, AvatarRecordResponse, AvatarSource, UserCreate


class TestAvatarRecord:
    """Tests for AvatarRecord."""

    def test_from_db_row_ignores_extra_columns(self, sample_avatar_row):
        record = AvatarRecord.from_db_row(sample_avatar_row)

        assert record.subject_id == "42"
        assert record.source == AvatarSource.ORIGIN
        assert isinstance(record.created_at, datetime)

    def test_to_db_row_is_json_safe(self, sample_avatar_row):
        row = AvatarRecord.from_db_row(sample_avatar_row).to_db_row()

        assert row["source"] == "origin"
        assert isinstance(row["created_at"], str)
        assert "id" not in row

    def test_tag_must_be_numeric(self, sample_avatar_row):
        sample_avatar_row["identifier_tag"] = "abc123"

        with pytest.raises(ValidationError):
            AvatarRecord.from_db_row(sample_avatar_row)

    def test_record_is_immutable(self, sample_avatar_row):
        """Records are never updated in place."""
        record = AvatarRecord.from_db_row(sample_avatar_row)

        with pytest.raises(ValidationError):
            record.encoded_payload = "other"

    def test_response_omits_payload(self, sample_avatar_row):
        response = AvatarRecordResponse.from_record(AvatarRecord.from_db_row(sample_avatar_row))

        assert "encoded_payload" not in response.model_dump()
        assert response.identifier_tag == "123456789012345"


class TestUserCreate:
    """Tests for UserCreate."""

    def test_email_is_lowercased(self):
        user = UserCreate(first_name="John", last_name="Doe", email="John.Doe@Example.COM")

        assert user.email == "john.doe@example.com"
        assert user.full_name == "John Doe"

    def test_invalid_email_rejected(self):
        with pytest.raises(ValidationError):
            UserCreate(first_name="John", last_name="Doe", email="not-an-email")

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            UserCreate(first_name="   ", last_name="Doe", email="a@example.com")
