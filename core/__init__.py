# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the business logic behind the API:
# - models/: Pydantic schemas for avatars and users
# - services/: Avatar cache, blob/metadata stores, origin fetcher, users,
#   notifications
# - templates/: Outbound email bodies
#
# Code in this package should NOT import from FastAPI routers or Celery
# workers at module level. This keeps the logic testable and reusable.
# =============================================================================
