# prayertools/services/geocoding_adapters/google_adapter.py

from flask import current_app
from .base_adapter import BaseGeolocationAdapter
from ..upstream import get_json

ADAPTER_NAME = 'GoogleGeolocationAdapter'


class GoogleGeolocationAdapter(BaseGeolocationAdapter):
    """
    IP lookup through ipapi.co and reverse geocoding through the Google Maps
    Geocoding API. Both bodies are relayed as-is.
    """

    def __init__(self, ip_location_url, geocode_url, api_key=None, timeout=10):
        super().__init__(timeout)
        self.ip_location_url = ip_location_url
        self.geocode_url = geocode_url
        self.api_key = api_key

    def locate_ip(self):
        return get_json(
            ADAPTER_NAME, 'ip-location', self.ip_location_url,
            timeout=self.timeout, failure_message="Failed to fetch location",
        )

    def reverse_geocode(self, lat, lng):
        if not self.api_key:
            current_app.logger.warning("Reverse geocoding: GOOGLE_MAPS_API_KEY is not configured.")
        params = {"latlng": f"{lat},{lng}", "key": self.api_key}
        return get_json(
            ADAPTER_NAME, 'geocode', self.geocode_url, params=params,
            timeout=self.timeout, failure_message="Failed to geocode location",
        )
