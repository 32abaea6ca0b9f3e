# prayertools/services/notification_service.py

import datetime

from flask import current_app
from marshmallow import ValidationError as SchemaValidationError

from ..extensions import db
from ..errors import ValidationError, NotFoundError
from ..metrics import NOTIFICATIONS_DISPATCHED_TOTAL
from ..models import Notification
from ..schemas import NotificationCreateSchema
from ..utils.time_utils import utcnow


def _to_naive_utc(value):
    if value.tzinfo is not None:
        value = value.astimezone(datetime.timezone.utc).replace(tzinfo=None)
    return value


def validate_notification(payload):
    """
    Validates a notification before it is constructed.

    Fills in the defaults: scheduledFor is now (naive UTC) and targetUsers is
    an empty list. Raises ValidationError with per-field messages.
    """
    try:
        data = NotificationCreateSchema().load(payload if payload is not None else {})
    except SchemaValidationError as err:
        raise ValidationError("Invalid notification data", errors=err.messages)

    data['scheduled_for'] = _to_naive_utc(data['scheduled_for']) if data.get('scheduled_for') else utcnow()
    return data


def create_notification(payload, created_by):
    """Validates and stores a notification. It starts unsent."""
    data = validate_notification(payload)
    notification = Notification(
        title=data['title'],
        message=data['message'],
        type=data['type'],
        target_audience=data['target_audience'],
        target_users=list(data['target_users']),
        scheduled_for=data['scheduled_for'],
        sent=False,
        sent_at=None,
        created_by=created_by,
    )
    db.session.add(notification)
    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        current_app.logger.error(f"Error saving notification '{notification.title}'", exc_info=True)
        raise
    current_app.logger.info(
        f"Notification {notification.id} ({notification.type}) for '{notification.target_audience}' "
        f"scheduled at {notification.scheduled_for} by user {created_by}."
    )
    return notification


def get_notification(notification_id):
    notification = db.session.get(Notification, notification_id)
    if notification is None:
        raise NotFoundError("Notification not found.")
    return notification


def list_notifications(sent=None, notification_type=None, target_audience=None):
    query = Notification.query
    if sent is not None:
        query = query.filter(Notification.sent.is_(sent))
    if notification_type:
        query = query.filter(Notification.type == notification_type)
    if target_audience:
        query = query.filter(Notification.target_audience == target_audience)
    return query.order_by(Notification.scheduled_for.desc(), Notification.id.desc()).all()


def get_due_notifications(now=None, limit=None):
    """Unsent notifications whose scheduled time has passed, oldest first."""
    now = now or utcnow()
    query = Notification.query.filter(
        Notification.sent.is_(False),
        Notification.scheduled_for <= now,
    ).order_by(Notification.scheduled_for, Notification.id)
    if limit:
        query = query.limit(limit)
    return query.all()


def mark_notification_sent(notification_id, sent_at=None):
    """
    Sets sent=True and sent_at together in one conditional UPDATE.

    Only an unsent row is changed, so when two dispatchers race for the same
    notification exactly one of them gets True back.
    """
    sent_at = sent_at or utcnow()
    updated = Notification.query.filter(
        Notification.id == notification_id,
        Notification.sent.is_(False),
    ).update({Notification.sent: True, Notification.sent_at: sent_at}, synchronize_session='fetch')
    db.session.commit()
    return updated == 1


def log_delivery(notification):
    """Default delivery: writes the notification to the application log."""
    current_app.logger.info(
        f"Delivering notification {notification.id} '{notification.title}' "
        f"to audience '{notification.target_audience}'"
        + (f" users={notification.target_users}" if notification.target_users else "")
    )


def dispatch_due_notifications(deliver=log_delivery, now=None, limit=None):
    """
    Delivers every due notification and marks each one sent.

    Each sent_at is the moment that delivery finished. A delivery that raises
    leaves its notification unsent for the next run.

    Returns:
        dict: counts of 'sent', 'failed' and 'skipped' (already sent by another worker).
    """
    now = now or utcnow()
    summary = {"sent": 0, "failed": 0, "skipped": 0}

    for notification in get_due_notifications(now, limit):
        try:
            deliver(notification)
        except Exception as e:
            current_app.logger.error(f"Delivery failed for notification {notification.id}: {e}", exc_info=True)
            NOTIFICATIONS_DISPATCHED_TOTAL.labels(type=notification.type, status='failed').inc()
            summary["failed"] += 1
            continue

        if mark_notification_sent(notification.id, utcnow()):
            NOTIFICATIONS_DISPATCHED_TOTAL.labels(type=notification.type, status='sent').inc()
            summary["sent"] += 1
        else:
            current_app.logger.info(f"Notification {notification.id} was already marked sent by another worker.")
            summary["skipped"] += 1

    current_app.logger.info(f"Notification dispatch finished: {summary}")
    return summary
