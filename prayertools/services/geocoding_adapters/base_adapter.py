from abc import ABC, abstractmethod

class BaseGeolocationAdapter(ABC):
    """
    Abstract base class for a geolocation adapter.
    Each method returns the provider's JSON body unchanged, or raises UpstreamError.
    """

    def __init__(self, timeout=10):
        self.timeout = timeout

    @abstractmethod
    def locate_ip(self):
        """Approximate location of the calling server's public IP."""
        pass

    @abstractmethod
    def reverse_geocode(self, lat, lng):
        """
        Converts coordinates to a human-readable address.
        """
        pass
