# tests/test_notifications.py

import datetime

import pytest

from prayertools.errors import ValidationError, NotFoundError
from prayertools.models import Notification
from prayertools.services import notification_service
from prayertools.tasks import dispatch_due_notifications_task

NOW = datetime.datetime(2025, 3, 1, 12, 0, 0)


def notification_payload(**overrides):
    payload = {
        "title": " Jumu'ah reminder ",
        "message": "Khutbah starts at 1:15 PM.",
        "type": "prayer_reminder",
        "targetAudience": "all",
    }
    payload.update(overrides)
    return payload


def make_notification(minutes_from_now=0, **overrides):
    scheduled = NOW + datetime.timedelta(minutes=minutes_from_now)
    return notification_service.create_notification(
        notification_payload(scheduledFor=scheduled.isoformat(), **overrides), created_by=1
    )

# --- Validation ---

def test_validate_notification_defaults(app):
    with app.app_context():
        before = datetime.datetime.utcnow()
        data = notification_service.validate_notification(notification_payload())
        after = datetime.datetime.utcnow()

    assert data['title'] == "Jumu'ah reminder"
    assert data['target_users'] == []
    assert before <= data['scheduled_for'] <= after

@pytest.mark.parametrize("field, value", [
    ("type", "spam"),
    ("targetAudience", "everyone"),
    ("title", "   "),
    ("message", ""),
])
def test_validate_notification_rejects_bad_fields(field, value):
    with pytest.raises(ValidationError) as excinfo:
        notification_service.validate_notification(notification_payload(**{field: value}))
    assert field in excinfo.value.errors

def test_specific_audience_accepts_empty_target_users():
    data = notification_service.validate_notification(
        {"title": "t", "message": "m", "type": "general", "targetAudience": "specific"}
    )
    assert data['target_audience'] == "specific"
    assert data['target_users'] == []

    data = notification_service.validate_notification(
        notification_payload(targetAudience="specific", targetUsers=[3, 1, 2])
    )
    assert data['target_users'] == [3, 1, 2]

def test_aware_schedule_is_stored_as_utc():
    data = notification_service.validate_notification(
        notification_payload(scheduledFor="2025-03-01T15:00:00+03:00")
    )
    assert data['scheduled_for'] == datetime.datetime(2025, 3, 1, 12, 0, 0)
    assert data['scheduled_for'].tzinfo is None

# --- Storage and delivery ---

def test_create_notification_starts_unsent(db):
    notification = make_notification()
    assert notification.sent is False
    assert notification.sent_at is None
    assert notification.created_by == 1

def test_get_due_notifications(db):
    overdue = make_notification(-30)
    due_now = make_notification(0)
    make_notification(30)

    due = notification_service.get_due_notifications(now=NOW)
    assert [n.id for n in due] == [overdue.id, due_now.id]

def test_mark_notification_sent_only_once(db):
    notification = make_notification(-5)
    sent_at = NOW + datetime.timedelta(seconds=1)

    assert notification_service.mark_notification_sent(notification.id, sent_at) is True
    assert notification_service.mark_notification_sent(notification.id, NOW + datetime.timedelta(hours=1)) is False

    db.session.expire_all()
    stored = db.session.get(Notification, notification.id)
    assert stored.sent is True
    assert stored.sent_at == sent_at
    assert notification_service.get_due_notifications(now=NOW) == []

def test_dispatch_leaves_failed_deliveries_unsent(db):
    ok = make_notification(-10, title="Delivered")
    broken = make_notification(-5, title="Broken")

    def deliver(notification):
        if notification.title == "Broken":
            raise RuntimeError("push service down")

    summary = notification_service.dispatch_due_notifications(deliver=deliver, now=NOW)
    assert summary == {"sent": 1, "failed": 1, "skipped": 0}

    db.session.expire_all()
    assert db.session.get(Notification, ok.id).sent is True
    assert db.session.get(Notification, broken.id).sent is False
    assert [n.id for n in notification_service.get_due_notifications(now=NOW)] == [broken.id]

def test_dispatch_records_delivery_time_not_batch_start(db):
    notification = make_notification(-10)
    before = datetime.datetime.utcnow()

    notification_service.dispatch_due_notifications(deliver=lambda n: None, now=NOW)

    db.session.expire_all()
    stored = db.session.get(Notification, notification.id)
    assert stored.sent is True
    assert stored.sent_at >= before > NOW

def test_dispatch_skips_notifications_sent_by_another_worker(db, mocker):
    make_notification(-1)
    mocker.patch.object(notification_service, 'mark_notification_sent', return_value=False)
    deliver = mocker.Mock()

    summary = notification_service.dispatch_due_notifications(deliver=deliver, now=NOW)
    assert summary == {"sent": 0, "failed": 0, "skipped": 1}
    deliver.assert_called_once()

def test_dispatch_task_delivers_due_notifications(db):
    make_notification(-60)
    summary = dispatch_due_notifications_task.run()
    assert summary["sent"] == 1

def test_get_missing_notification(db):
    with pytest.raises(NotFoundError):
        notification_service.get_notification(12345)

# --- Routes ---

def test_create_notification_route(test_client, auth_headers_for_admin):
    response = test_client.post('/api/notifications/', json=notification_payload(), headers=auth_headers_for_admin)
    assert response.status_code == 201
    data = response.get_json()
    assert data['title'] == "Jumu'ah reminder"
    assert data['sent'] is False
    assert data['sentAt'] is None
    assert data['targetUsers'] == []
    assert data['createdBy'] == 1

def test_create_notification_route_validation(test_client, auth_headers_for_admin):
    response = test_client.post('/api/notifications/', json=notification_payload(type="spam"),
                                headers=auth_headers_for_admin)
    assert response.status_code == 400
    assert 'type' in response.get_json()['errors']

def test_create_notification_route_rejects_staff(test_client, auth_headers_for_staff):
    response = test_client.post('/api/notifications/', json=notification_payload(), headers=auth_headers_for_staff)
    assert response.status_code == 403
    assert Notification.query.count() == 0

def test_list_notifications_route(test_client, auth_headers_for_admin):
    first = make_notification(-10)
    make_notification(10, type="event")
    notification_service.mark_notification_sent(first.id, NOW)

    response = test_client.get('/api/notifications/', headers=auth_headers_for_admin)
    assert response.status_code == 200
    assert len(response.get_json()) == 2

    response = test_client.get('/api/notifications/?sent=false', headers=auth_headers_for_admin)
    assert [n['type'] for n in response.get_json()] == ["event"]

def test_list_notifications_route_rejects_bad_filter(test_client, auth_headers_for_admin):
    response = test_client.get('/api/notifications/?type=spam', headers=auth_headers_for_admin)
    assert response.status_code == 400
    body = response.get_json()
    assert body['error'] == "Invalid notification filter"
    assert 'type' in body['errors']

def test_get_notification_route(test_client, auth_headers_for_admin):
    notification = make_notification()
    response = test_client.get(f'/api/notifications/{notification.id}', headers=auth_headers_for_admin)
    assert response.status_code == 200
    assert response.get_json()['id'] == notification.id

    response = test_client.get('/api/notifications/999', headers=auth_headers_for_admin)
    assert response.status_code == 404

def test_dispatcher_is_on_the_beat_schedule(app):
    from prayertools.celery_utils import celery
    entry = celery.conf.beat_schedule['dispatch-due-notifications']
    assert entry['task'] == dispatch_due_notifications_task.name
    assert entry['schedule'] == float(app.config['NOTIFICATION_DISPATCH_INTERVAL'])
