# =============================================================================
# workers/ - Celery Background Task Workers
# =============================================================================
# This package contains the Celery configuration and task definitions for
# outbound notifications.
#
# Components:
# - celery_app.py: Celery application configuration
# - tasks.py: Task definitions (email delivery)
# - config.py: Worker-specific settings
#
# Usage:
#   # Start worker
#   celery -A workers.celery_app worker -Q notifications --loglevel=info
#
#   # Submit task (from the API)
#   from workers.tasks import send_email
#   send_email.delay(to=..., subject=..., html=...)
# =============================================================================

from .celery_app import celery_app
from . import tasks

__all__ = [
    "celery_app",
    "tasks",
]
