# prayertools/services/api_adapters/aladhan_adapter.py

from flask import current_app # To access app.logger
from .base_adapter import BasePrayerTimeAdapter
from ..upstream import get_json

ADAPTER_NAME = 'AlAdhanAdapter'


class AlAdhanAdapter(BasePrayerTimeAdapter):
    """
    API Adapter for AlAdhan.com Prayer Times API.

    Responses are relayed as-is. Any transport error, timeout or non-2xx
    status becomes an UpstreamError. Nothing is retried or cached.
    """

    def _get(self, endpoint_name, path, params=None):
        data = get_json(ADAPTER_NAME, endpoint_name, f"{self.base_url}/{path}", params=params, timeout=self.timeout)
        current_app.logger.debug(f"{ADAPTER_NAME}: {endpoint_name} answered with code {data.get('code') if isinstance(data, dict) else None}")
        return data

    def fetch_timings(self, latitude, longitude, method):
        params = {"latitude": latitude, "longitude": longitude, "method": method}
        return self._get('timings', 'timings', params)

    def fetch_timings_by_city(self, city, country, method):
        params = {"city": city, "country": country, "method": method}
        return self._get('timingsByCity', 'timingsByCity', params)

    def fetch_hijri_date(self, date_str):
        return self._get('gToH', f"gToH/{date_str}")
