import pytest

from zny_airports import Airport, AirportRegistry, MajorAirport
from zny_geo import GeoPoint


def make_major(code, lon, lat, *sats):
    return MajorAirport(
        Airport(code, GeoPoint(lon, lat)),
        tuple(Airport(s, GeoPoint(slon, slat)) for s, slon, slat in sats),
    )


@pytest.fixture
def small_registry():
    # KBBB is ~0.6NM north of KAAA
    return AirportRegistry([make_major("KAAA", 0.0, 0.0, ("KBBB", 0.0, 0.01))])
