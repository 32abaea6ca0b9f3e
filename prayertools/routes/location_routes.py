# prayertools/routes/location_routes.py
from flask import request
from flask_smorest import Blueprint

from ..schemas import ApiErrorSchema
from ..services import location_service

location_bp = Blueprint(
    'Location',
    __name__,
    url_prefix='/api/location',
    description="IP location and reverse geocoding, relayed from external services."
)


@location_bp.route('/ip-location')
@location_bp.alt_response(500, schema=ApiErrorSchema, description="The IP location service failed.")
def ip_location():
    """Approximate location of the server's public IP."""
    return location_service.get_ip_location()


@location_bp.route('/geocode')
@location_bp.alt_response(400, schema=ApiErrorSchema, description="lat and lng are required.")
@location_bp.alt_response(500, schema=ApiErrorSchema, description="The geocoding service failed.")
def geocode():
    """Turn `lat`/`lng` into an address."""
    return location_service.reverse_geocode(request.args.get('lat'), request.args.get('lng'))
