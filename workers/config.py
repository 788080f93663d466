# =============================================================================
# workers/config.py - Celery Worker Configuration
# =============================================================================
# Settings specific to Celery workers.
# =============================================================================

from app.config import settings

# Queue consumed by the notification worker
NOTIFICATION_QUEUE = "notifications"


class CeleryConfig:
    """
    Celery configuration settings.

    These are applied to the Celery app via app.config_from_object().
    """

    # -------------------------------------------------------------------------
    # Broker Settings (Redis)
    # -------------------------------------------------------------------------

    broker_url = settings.REDIS_URL
    result_backend = settings.REDIS_URL

    # Fail fast when the broker is down so .delay() callers aren't held up
    broker_connection_retry_on_startup = True
    broker_transport_options = {
        "max_retries": 1,
        "interval_start": 0,
        "interval_step": 0.5,
        "interval_max": 1,
    }

    # -------------------------------------------------------------------------
    # Task Settings
    # -------------------------------------------------------------------------

    # Notifications are at-most-once: acknowledge on receipt, never redeliver
    task_acks_late = False

    worker_prefetch_multiplier = 1

    # Nobody reads email task results
    task_ignore_result = True
    result_expires = 3600

    # Default task timeout (2 minutes)
    task_time_limit = 120
    task_soft_time_limit = 90

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    task_serializer = "json"
    result_serializer = "json"
    accept_content = ["json"]

    # -------------------------------------------------------------------------
    # Task Routing
    # -------------------------------------------------------------------------

    task_queues = {
        "default": {
            "exchange": "default",
            "routing_key": "default",
        },
        NOTIFICATION_QUEUE: {
            "exchange": NOTIFICATION_QUEUE,
            "routing_key": NOTIFICATION_QUEUE,
        },
    }

    task_routes = {
        "workers.tasks.send_email": {"queue": NOTIFICATION_QUEUE},
    }

    task_default_queue = "default"

    # -------------------------------------------------------------------------
    # Monitoring
    # -------------------------------------------------------------------------

    worker_send_task_events = True
    task_send_sent_event = True

    # -------------------------------------------------------------------------
    # Timezone
    # -------------------------------------------------------------------------

    timezone = "UTC"
    enable_utc = True
