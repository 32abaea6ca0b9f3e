# prayertools/services/prayer_service.py

import datetime
from flask import current_app

from ..errors import ValidationError
from ..utils.time_utils import format_hijri_request_date
from .api_adapters.aladhan_adapter import AlAdhanAdapter

DEFAULT_METHOD = 2 # ISNA, the upstream API's usual default


def get_selected_api_adapter():
    """Builds the adapter for the configured upstream base URL."""
    return AlAdhanAdapter(
        base_url=current_app.config['PRAYER_API_BASE_URL'],
        timeout=current_app.config.get('PRAYER_API_TIMEOUT', 10),
    )


def _is_missing(value):
    return value is None or (isinstance(value, str) and not value.strip())


def get_times_by_coordinates(latitude, longitude, method=DEFAULT_METHOD):
    """
    Prayer times for a coordinate. Both latitude and longitude must be given;
    the check happens before any outbound call.
    """
    if _is_missing(latitude) or _is_missing(longitude):
        raise ValidationError("Latitude and longitude are required")
    return get_selected_api_adapter().fetch_timings(latitude, longitude, method)


def get_times_by_city(city, country='', method=DEFAULT_METHOD):
    """Prayer times for a city, optionally narrowed by country."""
    if _is_missing(city):
        raise ValidationError("City is required")
    return get_selected_api_adapter().fetch_timings_by_city(city, country or '', method)


def get_hijri_date(date=None, today=None):
    """
    Converts a Gregorian date (D-M-YYYY) to Hijri.

    When `date` is absent, today's date on the local clock is used. `today`
    exists so tests can pin the clock.
    """
    if _is_missing(date):
        date = format_hijri_request_date(today or datetime.date.today())
        current_app.logger.debug(f"No date supplied for Hijri conversion, using today: {date}")
    return get_selected_api_adapter().fetch_hijri_date(date)
