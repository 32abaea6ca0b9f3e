# This module defines the base interface for all prayer time API adapters.
from abc import ABC, abstractmethod

class BasePrayerTimeAdapter(ABC):
    """
    Abstract base class for prayer time API adapters. Each method returns the
    provider's JSON body unchanged, or raises UpstreamError.
    """

    def __init__(self, base_url, timeout=10):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout

    @abstractmethod
    def fetch_timings(self, latitude, longitude, method):
        """Prayer times for today at a coordinate."""
        pass

    @abstractmethod
    def fetch_timings_by_city(self, city, country, method):
        """Prayer times for today in a named city."""
        pass

    @abstractmethod
    def fetch_hijri_date(self, date_str):
        """Converts a D-M-YYYY Gregorian date to the Hijri calendar."""
        pass
