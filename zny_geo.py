import math
from dataclasses import dataclass

EARTH_RADIUS_M = 6371000.0
M_TO_NM = 0.000539957


@dataclass(frozen=True)
class GeoPoint:
    longitude: float
    latitude: float


def nm_distance(a: GeoPoint, b: GeoPoint) -> float:
    """Haversine distance in nautical miles."""
    lat1 = math.radians(float(a.latitude))
    lon1 = math.radians(float(a.longitude))
    lat2 = math.radians(float(b.latitude))
    lon2 = math.radians(float(b.longitude))
    dlat = lat2 - lat1
    dlon = lon2 - lon1

    x = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    x = min(x, 1.0)  # rounding near antipodes
    c = 2 * math.atan2(math.sqrt(x), math.sqrt(1 - x))
    return EARTH_RADIUS_M * c * M_TO_NM
