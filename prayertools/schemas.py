# prayertools/schemas.py

from marshmallow import Schema, fields, validate, validates_schema, ValidationError, EXCLUDE

from .utils.constants import NotificationTypes, TargetAudience, POINT


class TrimmedString(fields.String):
    """String field that strips surrounding whitespace before validators run."""

    def _deserialize(self, value, attr, data, **kwargs):
        value = super()._deserialize(value, attr, data, **kwargs)
        return value.strip()


class MessageSchema(Schema):
    message = fields.Str(required=True)

class ApiErrorSchema(Schema):
    error = fields.Str(required=True)
    errors = fields.Dict(required=False)

class HealthSchema(Schema):
    status = fields.Str(required=True)
    message = fields.Str()
    timestamp = fields.Str(required=True)

# --- Auth ---

class LoginSchema(Schema):
    """Schema for validating the login payload."""
    class Meta:
        unknown = EXCLUDE

    email = fields.Str(required=True, validate=validate.Length(min=1))
    password = fields.Str(required=True, validate=validate.Length(min=1))

class UserSummarySchema(Schema):
    """Public view of a credential. The password hash is never part of it."""
    id = fields.Int(dump_only=True)
    email = fields.Str(dump_only=True)
    role = fields.Str(dump_only=True)
    name = fields.Str(dump_only=True)

class LoginResponseSchema(Schema):
    success = fields.Bool(required=True)
    token = fields.Str(required=True)
    user = fields.Nested(UserSummarySchema, required=True)

# --- Mosques ---

class LocationSchema(Schema):
    """GeoJSON point. Coordinates are [longitude, latitude]."""
    type = fields.Str(required=True, validate=validate.OneOf([POINT]))
    coordinates = fields.List(
        fields.Float(),
        required=True,
        validate=validate.Length(equal=2, error="Coordinates must be [longitude, latitude]"),
    )

    @validates_schema
    def validate_ranges(self, data, **kwargs):
        longitude, latitude = data['coordinates']
        if not -180 <= longitude <= 180:
            raise ValidationError("Longitude must be between -180 and 180.", field_name='coordinates')
        if not -90 <= latitude <= 90:
            raise ValidationError("Latitude must be between -90 and 90.", field_name='coordinates')

class ContactSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    phone = TrimmedString(allow_none=True, load_default=None)
    website = TrimmedString(allow_none=True, load_default=None)

class MosqueCreateSchema(Schema):
    """Schema for submitting and validating a new mosque."""
    class Meta:
        unknown = EXCLUDE

    name = TrimmedString(required=True, validate=validate.Length(min=1, max=200))
    address = TrimmedString(required=True, validate=validate.Length(min=1, max=500))
    location = fields.Nested(LocationSchema, required=True)
    contact = fields.Nested(ContactSchema, load_default=dict)

class MosqueSchema(Schema):
    """Schema for serializing mosque data."""
    id = fields.Int(dump_only=True)
    name = fields.Str(dump_only=True)
    address = fields.Str(dump_only=True)
    location = fields.Nested(LocationSchema, dump_only=True)
    contact = fields.Nested(ContactSchema, dump_only=True)
    verified = fields.Bool(dump_only=True)
    addedBy = fields.Int(dump_only=True, attribute='added_by')
    createdAt = fields.DateTime(dump_only=True, attribute='created_at')
    updatedAt = fields.DateTime(dump_only=True, attribute='updated_at')
    # Only present on proximity search results
    distanceKm = fields.Float(dump_only=True, attribute='distance_km')

class MosqueSearchQuerySchema(Schema):
    """Query parameters for the mosque directory."""
    class Meta:
        unknown = EXCLUDE

    lat = fields.Float(validate=validate.Range(min=-90, max=90))
    lon = fields.Float(validate=validate.Range(min=-180, max=180))
    radius = fields.Float(validate=validate.Range(min=0, min_inclusive=False))
    q = fields.Str()
    verified = fields.Bool()

class VerifyMosqueSchema(Schema):
    verified = fields.Bool(load_default=True)

# --- Notifications ---

class NotificationCreateSchema(Schema):
    """Schema for validating a new notification."""
    class Meta:
        unknown = EXCLUDE

    title = TrimmedString(required=True, validate=validate.Length(min=1, max=200))
    message = fields.Str(required=True, validate=validate.Length(min=1))
    type = fields.Str(required=True, validate=validate.OneOf(NotificationTypes.ALL))
    target_audience = fields.Str(required=True, data_key='targetAudience',
                                 validate=validate.OneOf(TargetAudience.ALL))
    target_users = fields.List(fields.Int(), data_key='targetUsers', load_default=list)
    scheduled_for = fields.DateTime(data_key='scheduledFor', load_default=None)

class NotificationSchema(Schema):
    """Schema for serializing notification data."""
    id = fields.Int(dump_only=True)
    title = fields.Str(dump_only=True)
    message = fields.Str(dump_only=True)
    type = fields.Str(dump_only=True)
    targetAudience = fields.Str(dump_only=True, attribute='target_audience')
    targetUsers = fields.List(fields.Int(), dump_only=True, attribute='target_users')
    scheduledFor = fields.DateTime(dump_only=True, attribute='scheduled_for')
    sent = fields.Bool(dump_only=True)
    sentAt = fields.DateTime(dump_only=True, attribute='sent_at', allow_none=True)
    createdBy = fields.Int(dump_only=True, attribute='created_by')
    createdAt = fields.DateTime(dump_only=True, attribute='created_at')

class NotificationListQuerySchema(Schema):
    class Meta:
        unknown = EXCLUDE

    sent = fields.Bool()
    type = fields.Str(validate=validate.OneOf(NotificationTypes.ALL))
    target_audience = fields.Str(data_key='targetAudience', validate=validate.OneOf(TargetAudience.ALL))
