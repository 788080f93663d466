# =============================================================================
# workers/celery_app.py - Notification Worker Application
# =============================================================================
# Celery app that delivers outbound email queued by NotificationService.
# Broker, queues and routing come from workers.config (which reads
# app.config.settings), so the API and the worker share one REDIS_URL.
#
# Usage:
#   celery -A workers.celery_app worker -Q notifications --loglevel=info
# =============================================================================

import logging

from celery import Celery
from celery.signals import task_failure, task_postrun, task_prerun

from app.config import settings
from workers.config import NOTIFICATION_QUEUE

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def redact_broker_url(url: str) -> str:
    """Drop credentials from a broker URL before it is logged."""
    return url.split("@")[-1] if "@" in url else url


def create_celery_app() -> Celery:
    """
    Create the notification worker app.

    Returns:
        Celery app configured from workers.config:CeleryConfig
    """
    app = Celery("userbase_worker", include=["workers.tasks"])
    app.config_from_object("workers.config:CeleryConfig")

    logger.info(
        f"Celery app created for queue '{NOTIFICATION_QUEUE}' "
        f"with broker: {redact_broker_url(settings.REDIS_URL)}"
    )
    return app


celery_app = create_celery_app()


# =============================================================================
# Notification Task Signals
# =============================================================================
# Only tasks routed to the notification queue are logged, with the recipient
# instead of the full payload (which carries the rendered HTML body).

def is_notification_task(task) -> bool:
    route = celery_app.conf.task_routes.get(getattr(task, "name", None), {})
    return route.get("queue") == NOTIFICATION_QUEUE


@task_prerun.connect
def log_notification_started(sender=None, task_id=None, task=None, kwargs=None, **extra):
    if task is None or not is_notification_task(task):
        return
    recipient = (kwargs or {}).get("to")
    logger.info(f"Sending notification to {recipient} [{task_id}]")


@task_postrun.connect
def log_notification_finished(sender=None, task_id=None, task=None, kwargs=None, retval=None, **extra):
    if task is None or not is_notification_task(task):
        return
    recipient = (kwargs or {}).get("to")
    if isinstance(retval, dict) and not retval.get("success", False):
        logger.warning(f"Notification to {recipient} not delivered [{task_id}]: {retval.get('error')}")
    else:
        logger.info(f"Notification to {recipient} delivered [{task_id}]")


@task_failure.connect
def log_notification_failed(sender=None, task_id=None, exception=None, kwargs=None, **extra):
    if sender is None or not is_notification_task(sender):
        return
    recipient = (kwargs or {}).get("to")
    logger.error(f"Notification task to {recipient} crashed [{task_id}]: {exception}")
