"""
Entry point for the Celery worker and beat scheduler.

    celery -A celery_worker.celery worker --loglevel=info
    celery -A celery_worker.celery beat --loglevel=info
"""
import os
from prayertools import create_app
from prayertools.celery_utils import celery  # noqa: F401  used by the celery CLI

app = create_app(os.environ.get('FLASK_CONFIG') or 'default')
