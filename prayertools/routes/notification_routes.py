# prayertools/routes/notification_routes.py

from flask import request, g
from flask_smorest import Blueprint
from marshmallow import ValidationError as SchemaValidationError

from ..errors import ValidationError
from ..schemas import NotificationSchema, NotificationListQuerySchema, ApiErrorSchema
from ..services import notification_service
from ..utils.auth import role_required
from ..utils.constants import Roles

notification_bp = Blueprint(
    'Notifications',
    __name__,
    url_prefix='/api/notifications',
    description="Admin management of scheduled notifications."
)


@notification_bp.route('/', methods=['POST'])
@role_required(Roles.ADMIN)
@notification_bp.response(201, NotificationSchema, description="Notification scheduled.")
@notification_bp.alt_response(400, schema=ApiErrorSchema, description="Invalid notification data.")
@notification_bp.alt_response(403, schema=ApiErrorSchema, description="Admin role required.")
@notification_bp.doc(security=[{"Bearer": []}])
def create_notification():
    """Schedule a notification. `scheduledFor` defaults to now."""
    return notification_service.create_notification(request.get_json(silent=True), created_by=g.user['id'])


@notification_bp.route('/', methods=['GET'])
@role_required(Roles.ADMIN)
@notification_bp.response(200, NotificationSchema(many=True))
@notification_bp.alt_response(400, schema=ApiErrorSchema, description="Invalid filter.")
@notification_bp.doc(security=[{"Bearer": []}])
def list_notifications():
    """
    List notifications, newest schedule first.

    Optional filters: `sent`, `type` and `targetAudience`.
    """
    try:
        args = NotificationListQuerySchema().load(request.args)
    except SchemaValidationError as err:
        raise ValidationError("Invalid notification filter", errors=err.messages)

    return notification_service.list_notifications(
        sent=args.get('sent'),
        notification_type=args.get('type'),
        target_audience=args.get('target_audience'),
    )


@notification_bp.route('/<int:notification_id>')
@role_required(Roles.ADMIN)
@notification_bp.response(200, NotificationSchema)
@notification_bp.alt_response(404, schema=ApiErrorSchema, description="Notification not found.")
@notification_bp.doc(security=[{"Bearer": []}])
def get_notification(notification_id):
    return notification_service.get_notification(notification_id)
