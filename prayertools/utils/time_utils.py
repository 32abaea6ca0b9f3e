import datetime
import re

_DURATION_PATTERN = re.compile(r'^\s*(\d+)\s*([dhms]?)\s*$', re.IGNORECASE)
_UNIT_SECONDS = {'d': 86400, 'h': 3600, 'm': 60, 's': 1, '': 1}


def parse_duration(value):
    """
    Parses a token lifetime such as "7d", "12h", "30m", "45s" or "3600".

    A bare number is read as seconds. Returns a datetime.timedelta.
    Raises ValueError if the value cannot be parsed.
    """
    if isinstance(value, datetime.timedelta):
        return value
    if isinstance(value, (int, float)):
        return datetime.timedelta(seconds=value)

    match = _DURATION_PATTERN.match(value or '')
    if not match:
        raise ValueError(f"Invalid duration: {value!r}")
    amount, unit = match.groups()
    return datetime.timedelta(seconds=int(amount) * _UNIT_SECONDS[unit.lower()])


def format_hijri_request_date(date_obj):
    """
    Formats a date the way the Gregorian-to-Hijri endpoint expects it:
    day-month-year without zero padding, e.g. 5-3-2025.
    """
    return f"{date_obj.day}-{date_obj.month}-{date_obj.year}"


def utcnow():
    """Naive UTC timestamp, matching what the models store."""
    return datetime.datetime.utcnow()
