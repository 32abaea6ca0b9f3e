import math

from flask import current_app
from geopy.distance import geodesic
from marshmallow import ValidationError as SchemaValidationError
from sqlalchemy import or_

from ..extensions import db
from ..errors import ValidationError, NotFoundError
from ..models import Mosque
from ..schemas import MosqueCreateSchema

KM_PER_DEGREE_LATITUDE = 111.32


def validate_mosque(payload):
    """
    Validates a mosque submission before anything is constructed.

    Returns the cleaned data (trimmed strings, float coordinates).
    Raises ValidationError with per-field messages otherwise.
    """
    try:
        return MosqueCreateSchema().load(payload if payload is not None else {})
    except SchemaValidationError as err:
        raise ValidationError("Invalid mosque data", errors=err.messages)


def create_mosque(payload, added_by):
    """Validates and stores a new, unverified mosque submitted by `added_by`."""
    data = validate_mosque(payload)
    longitude, latitude = data['location']['coordinates']
    contact = data.get('contact') or {}

    mosque = Mosque(
        name=data['name'],
        address=data['address'],
        location_type=data['location']['type'],
        longitude=longitude,
        latitude=latitude,
        phone=contact.get('phone') or None,
        website=contact.get('website') or None,
        verified=False,
        added_by=added_by,
    )
    db.session.add(mosque)
    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        current_app.logger.error(f"Error saving mosque '{mosque.name}' submitted by {added_by}", exc_info=True)
        raise
    current_app.logger.info(f"Mosque {mosque.id} '{mosque.name}' added by user {added_by}.")
    return mosque


def get_mosque(mosque_id):
    mosque = db.session.get(Mosque, mosque_id)
    if mosque is None:
        raise NotFoundError("Mosque not found.")
    return mosque


def set_mosque_verified(mosque_id, verified=True):
    """Marks a mosque as verified (or not). Callers must check the admin role."""
    mosque = get_mosque(mosque_id)
    mosque.verified = bool(verified)
    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        current_app.logger.error(f"Error updating verification for mosque {mosque_id}", exc_info=True)
        raise
    current_app.logger.info(f"Mosque {mosque_id} verified flag set to {mosque.verified}.")
    return mosque


def _base_query(verified_only):
    query = Mosque.query
    if verified_only:
        query = query.filter(Mosque.verified.is_(True))
    return query


def find_nearby_mosques(latitude, longitude, radius_km, verified_only=False, text=None):
    """
    Finds mosques within `radius_km` of a point, nearest first.
    When `text` is given, only mosques matching it (see search_mosques) are kept.

    A bounding box over the indexed longitude/latitude columns narrows the
    candidates; geodesic distance decides the final list. Each returned mosque
    carries a `distance_km` attribute.
    """
    lat_delta = radius_km / KM_PER_DEGREE_LATITUDE
    query = _filter_text(_base_query(verified_only), text).filter(
        Mosque.latitude.between(latitude - lat_delta, latitude + lat_delta)
    )

    cos_lat = math.cos(math.radians(latitude))
    if cos_lat > 0.01:
        lon_delta = radius_km / (KM_PER_DEGREE_LATITUDE * cos_lat)
        # Boxes that cross the antimeridian are left unfiltered on longitude.
        if lon_delta < 180 and -180 <= longitude - lon_delta and longitude + lon_delta <= 180:
            query = query.filter(Mosque.longitude.between(longitude - lon_delta, longitude + lon_delta))

    center_point = (latitude, longitude)
    nearby_mosques = []
    for mosque in query.all():
        distance = geodesic(center_point, (mosque.latitude, mosque.longitude)).km
        if distance <= radius_km:
            mosque.distance_km = round(distance, 3)
            nearby_mosques.append(mosque)

    nearby_mosques.sort(key=lambda m: m.distance_km)
    current_app.logger.debug(f"Found {len(nearby_mosques)} mosques within {radius_km} km of ({latitude}, {longitude})")
    return nearby_mosques


def _escape_like(term):
    return term.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')


def _filter_text(query, text):
    """Every word of `text` must appear, case-insensitively, in the name or the address."""
    for term in (text or '').split():
        pattern = f"%{_escape_like(term)}%"
        query = query.filter(or_(
            Mosque.name.ilike(pattern, escape='\\'),
            Mosque.address.ilike(pattern, escape='\\'),
        ))
    return query


def search_mosques(text, verified_only=False):
    """Case-insensitive search; every word must appear in the name or the address."""
    return _filter_text(_base_query(verified_only), text).order_by(Mosque.name).all()


def list_mosques(verified_only=False):
    return _base_query(verified_only).order_by(Mosque.created_at.desc(), Mosque.id.desc()).all()
