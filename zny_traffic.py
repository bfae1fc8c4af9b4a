from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional

from zny_airports import AirportRegistry, MajorAirport
from zny_geo import GeoPoint, nm_distance

# =========================
# THRESHOLDS
# =========================
REGION_CUTOFF_NM = 500.0
DEPARTURE_RADIUS_NM = 30.0
ARRIVAL_RADIUS_NM = 300.0
GROUND_RADIUS_NM = 3.0
STATIONARY_MAX_GS_KT = 20   # below: parked / taxiing
MOVING_MIN_GS_KT = 20       # above: arrival still inbound


@dataclass(frozen=True)
class AircraftState:
    position: GeoPoint
    groundspeed: int = 0
    departure: str = ""
    arrival: str = ""


@dataclass
class TrafficCounts:
    departures: Dict[str, int] = field(default_factory=dict)
    arrivals: Dict[str, int] = field(default_factory=dict)
    total: int = 0


def _ground_departure(ac: AircraftState, registry: AirportRegistry) -> Optional[MajorAirport]:
    """Major owning the first field (major first, then its sats) within GROUND_RADIUS_NM."""
    for major, ap in registry.candidates():
        if nm_distance(ap.location, ac.position) < GROUND_RADIUS_NM:
            return major
    return None


def count_traffic(aircraft: Iterable[AircraftState], registry: AirportRegistry) -> TrafficCounts:
    counts = TrafficCounts(
        departures={code: 0 for code in registry.codes()},
        arrivals={code: 0 for code in registry.codes()},
    )
    anchor = registry.first.location

    for ac in aircraft:
        # Coarse region filter, measured from the first major only.
        if nm_distance(anchor, ac.position) > REGION_CUTOFF_NM:
            continue

        dep = registry.find_major(ac.departure)
        if dep is not None and nm_distance(dep.location, ac.position) < DEPARTURE_RADIUS_NM:
            counts.departures[dep.code] += 1
            counts.total += 1
        elif not ac.departure and ac.groundspeed < STATIONARY_MAX_GS_KT:
            # No flight plan yet: sitting on a ramp somewhere in the area?
            major = _ground_departure(ac, registry)
            if major is not None:
                counts.departures[major.code] += 1
                counts.total += 1

        arr = registry.find_major(ac.arrival)
        if (
            arr is not None
            and nm_distance(arr.location, ac.position) < ARRIVAL_RADIUS_NM
            and ac.groundspeed > MOVING_MIN_GS_KT
        ):
            counts.arrivals[arr.code] += 1
            counts.total += 1

    return counts
