# prayertools/services/location_service.py

from flask import current_app

from ..errors import ValidationError
from .geocoding_adapters.google_adapter import GoogleGeolocationAdapter


def get_selected_geolocation_adapter():
    return GoogleGeolocationAdapter(
        ip_location_url=current_app.config['IP_LOCATION_API_URL'],
        geocode_url=current_app.config['GEOCODING_API_URL'],
        api_key=current_app.config.get('GOOGLE_MAPS_API_KEY'),
        timeout=current_app.config.get('LOCATION_API_TIMEOUT', 10),
    )


def get_ip_location():
    """Approximate location from the IP lookup service."""
    return get_selected_geolocation_adapter().locate_ip()


def reverse_geocode(lat, lng):
    """
    Address lookup for a coordinate. Both values must be non-empty;
    the check happens before any outbound call.
    """
    if not lat or not lng:
        raise ValidationError("Latitude and longitude are required")
    return get_selected_geolocation_adapter().reverse_geocode(lat, lng)
