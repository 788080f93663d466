# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Userbase API:
# - test_avatar_service.py: Cache hit/miss, conflicts, delete ordering
# - test_storage_service.py: Local and Supabase blob stores
# - test_avatar_repository.py: user_avatars table access (mocked Supabase)
# - test_origin_fetcher.py: Origin error classification
# - test_api.py: HTTP endpoints via TestClient
#
# Run tests with: pytest
# =============================================================================
