# prayertools/models.py

from datetime import datetime
from .extensions import db
from .utils.constants import POINT

# --- Mosque Directory ---

class Mosque(db.Model):
    """
    A mosque in the public directory.

    The location is stored as a GeoJSON point split into two indexed columns.
    Coordinates are always [longitude, latitude] when exposed through `location`.
    """
    __tablename__ = 'mosque'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    address = db.Column(db.String(500), nullable=False)

    # --- Location (GeoJSON Point) ---
    location_type = db.Column(db.String(10), nullable=False, default=POINT)
    longitude = db.Column(db.Float, nullable=False)
    latitude = db.Column(db.Float, nullable=False)

    # --- Contact ---
    phone = db.Column(db.String(50), nullable=True)
    website = db.Column(db.String(255), nullable=True)

    # Only changed by an admin after review.
    verified = db.Column(db.Boolean, default=False, nullable=False, index=True)

    # Id of the credential that submitted the mosque. Users are not persisted, so no foreign key.
    added_by = db.Column(db.Integer, nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    __table_args__ = (
        # Proximity lookups prefilter on a bounding box over these two columns.
        db.Index('ix_mosque_location', 'longitude', 'latitude'),
        # Text lookups over name and address.
        db.Index('ix_mosque_name_address', 'name', 'address'),
    )

    @property
    def location(self):
        return {"type": self.location_type, "coordinates": [self.longitude, self.latitude]}

    @property
    def contact(self):
        return {"phone": self.phone, "website": self.website}

    def __repr__(self):
        return f'<Mosque ID:{self.id} Name:{self.name} Verified:{self.verified}>'


# --- Notifications ---

class Notification(db.Model):
    """
    A notification created by an admin and delivered by the background dispatcher.

    `sent` and `sent_at` change together, once, through
    notification_service.mark_notification_sent.
    """
    __tablename__ = 'notification'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    message = db.Column(db.Text, nullable=False)

    # One of NotificationTypes.ALL
    type = db.Column(db.String(30), nullable=False, index=True)
    # One of TargetAudience.ALL
    target_audience = db.Column(db.String(20), nullable=False, index=True)
    # Ordered list of user ids, only used when target_audience == 'specific'
    target_users = db.Column(db.JSON, nullable=False, default=list)

    scheduled_for = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    sent = db.Column(db.Boolean, default=False, nullable=False)
    sent_at = db.Column(db.DateTime, nullable=True)

    created_by = db.Column(db.Integer, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (db.Index('ix_notification_scheduled_for_sent', 'scheduled_for', 'sent'),)

    def __repr__(self):
        return f'<Notification ID:{self.id} Type:{self.type} Sent:{self.sent}>'
