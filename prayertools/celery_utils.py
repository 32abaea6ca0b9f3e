# prayertools/celery_utils.py

from celery import Celery

# Broker and backend are filled in from the Flask config by init_celery().
celery = Celery('prayertools')

DISPATCH_TASK_NAME = 'tasks.dispatch_due_notifications'


def build_beat_schedule(app):
    """Periodic jobs run by `celery beat`."""
    interval = float(app.config.get('NOTIFICATION_DISPATCH_INTERVAL', 60))
    return {
        'dispatch-due-notifications': {
            'task': DISPATCH_TASK_NAME,
            'schedule': interval,
            # A run that waits longer than one interval is superseded by the next one.
            'options': {'expires': interval},
        },
    }


def init_celery(app):
    """
    Binds the module-level Celery instance to a Flask app.

    Broker and result backend come from CELERY_BROKER_URL and
    CELERY_RESULT_BACKEND. Every task body executes inside `app.app_context()`
    so services can use current_app and db.session.

    Args:
        app (Flask): The configured Flask application instance.

    Returns:
        Celery: The configured Celery instance.
    """
    celery.conf.update(
        broker_url=app.config['CELERY_BROKER_URL'],
        result_backend=app.config['CELERY_RESULT_BACKEND'],
        timezone='UTC',
        enable_utc=True,
        beat_schedule=build_beat_schedule(app),
    )

    class ContextTask(celery.Task):
        def __call__(self, *args, **kwargs):
            with app.app_context():
                return self.run(*args, **kwargs)

    celery.Task = ContextTask
    return celery
