from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple

from zny_geo import GeoPoint


@dataclass(frozen=True)
class Airport:
    code: str
    location: GeoPoint


@dataclass(frozen=True)
class MajorAirport:
    """A primary airport plus the satellite fields whose traffic it owns."""
    airport: Airport
    satellites: Tuple[Airport, ...] = ()

    @property
    def code(self) -> str:
        return self.airport.code

    @property
    def location(self) -> GeoPoint:
        return self.airport.location


class AirportRegistry:
    """
    Ordered, immutable set of majors. Registration order is significant:
    the first major anchors the global cutoff and ties in the ground
    fallback go to whichever candidate comes first.
    """

    def __init__(self, majors: Iterable[MajorAirport]):
        self._majors: Tuple[MajorAirport, ...] = tuple(majors)
        if not self._majors:
            raise ValueError("airport registry needs at least one major")

        seen = set()
        for major in self._majors:
            for ap in (major.airport,) + tuple(major.satellites):
                if ap.code in seen:
                    raise ValueError(f"duplicate airport code in registry: {ap.code}")
                seen.add(ap.code)

    def __iter__(self) -> Iterator[MajorAirport]:
        return iter(self._majors)

    def __len__(self) -> int:
        return len(self._majors)

    @property
    def first(self) -> MajorAirport:
        return self._majors[0]

    def codes(self) -> List[str]:
        return [m.code for m in self._majors]

    def find_major(self, code: str) -> Optional[Airport]:
        """Return the major that owns `code` (itself or a satellite), else None."""
        if not code:
            return None
        for major in self._majors:
            if major.code == code:
                return major.airport
            for sat in major.satellites:
                if sat.code == code:
                    return major.airport
        return None

    def candidates(self) -> Iterator[Tuple[MajorAirport, Airport]]:
        """(major, field) pairs: each major's own field first, then its satellites."""
        for major in self._majors:
            yield major, major.airport
            for sat in major.satellites:
                yield major, sat
