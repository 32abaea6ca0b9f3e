"""
Celery tasks for the Islamic Prayer Tools API.
These tasks run in the background and handle periodic jobs.
"""
from .celery_utils import celery, DISPATCH_TASK_NAME
from flask import current_app
from .metrics import BACKGROUND_TASK_RUNS_TOTAL, BACKGROUND_TASK_DURATION_SECONDS


@celery.task(name=DISPATCH_TASK_NAME)
def dispatch_due_notifications_task(limit=None):
    """
    Celery Beat task that delivers every notification whose scheduled time
    has passed and marks each one sent.
    """
    with BACKGROUND_TASK_DURATION_SECONDS.labels(task_name='dispatch_due_notifications').time():
        current_app.logger.info("[CELERY TASK] Starting notification dispatch.")
        try:
            # Imported here to avoid circular imports at worker start-up.
            from .services.notification_service import dispatch_due_notifications

            summary = dispatch_due_notifications(limit=limit)
            BACKGROUND_TASK_RUNS_TOTAL.labels(task_name='dispatch_due_notifications', status='success').inc()
            return summary
        except Exception as e:
            current_app.logger.error(f"[CELERY TASK] Notification dispatch failed: {e}", exc_info=True)
            BACKGROUND_TASK_RUNS_TOTAL.labels(task_name='dispatch_due_notifications', status='failure').inc()
            raise
