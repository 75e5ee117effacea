from .pinballmap import PinballMapClient, Location, haversine_km
from .exceptions import VenueLookupError

__all__ = ["PinballMapClient", "Location", "haversine_km", "VenueLookupError"]
