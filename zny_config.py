import json
import os
from dataclasses import dataclass
from importlib import resources
from typing import Any, List, Optional, Tuple

from dotenv import load_dotenv

from zny_airports import Airport, AirportRegistry, MajorAirport
from zny_controllers import WatchedPosition
from zny_geo import GeoPoint

# =========================
# CONFIG
# =========================
VATSIM_STATUS_URL = "https://status.vatsim.net/status.json"
HTTP_TIMEOUT = 15

# bundled with the zny_data package, so it installs alongside the modules
POSITIONS_PACKAGE = "zny_data"
POSITIONS_RESOURCE = "positions.json"

# N90 majors in registration order, (lon, lat).
# The first one anchors the 500NM region filter.
N90_MAJORS = [
    ("KJFK", (-73.780968, 40.641766)),
    ("KLGA", (-73.87261, 40.77724)),
    ("KEWR", (-74.174538, 40.689491)),
]

N90_SATELLITES = {
    "KJFK": [
        ("KFRG", (-73.413399, 40.728802)),   # Republic
        ("KISP", (-73.100197, 40.795200)),   # Islip
        ("KOXC", (-73.135200, 41.478600)),   # Oxford
        ("KFOK", (-72.631798, 40.843700)),   # Gabreski
        ("KBDR", (-73.126198, 41.163502)),   # Bridgeport
        ("KHVN", (-72.886803, 41.263699)),   # New Haven
    ],
    "KLGA": [
        ("KDXR", (-73.482201, 41.371498)),   # Danbury
        ("KHPN", (-73.707603, 41.067001)),   # Westchester
    ],
    "KEWR": [
        ("KTEB", (-74.060799, 40.850101)),   # Teterboro
        ("KCDW", (-74.281403, 40.875198)),   # Caldwell
        ("KMMU", (-74.414902, 40.799400)),   # Morristown
    ],
}


@dataclass(frozen=True)
class Settings:
    registry: AirportRegistry
    positions: Tuple[WatchedPosition, ...]
    status_url: str = VATSIM_STATUS_URL
    timeout: float = HTTP_TIMEOUT
    icon_path: Optional[str] = None


def build_registry(majors=N90_MAJORS, satellites=N90_SATELLITES) -> AirportRegistry:
    def airport(code: str, lonlat: Tuple[float, float]) -> Airport:
        return Airport(code, GeoPoint(lonlat[0], lonlat[1]))

    return AirportRegistry(
        MajorAirport(
            airport(code, loc),
            tuple(airport(s, sloc) for s, sloc in satellites.get(code, [])),
        )
        for code, loc in majors
    )


def _read_positions(path: Optional[str]) -> Tuple[str, Any]:
    if path is None:
        res = resources.files(POSITIONS_PACKAGE).joinpath(POSITIONS_RESOURCE)
        if not res.is_file():
            raise FileNotFoundError(f"Missing bundled positions file: {POSITIONS_PACKAGE}/{POSITIONS_RESOURCE}")
        return str(res), json.loads(res.read_text(encoding="utf-8"))

    if not os.path.exists(path):
        raise FileNotFoundError(f"Missing positions file: {path}")
    with open(path, "r", encoding="utf-8") as f:
        return path, json.load(f)


def load_positions(path: Optional[str] = None) -> List[WatchedPosition]:
    """
    Facility positions file (the bundled zny_data/positions.json unless a
    path is given): a JSON list of
      { "callsign": "JFK_TWR", "name": "...", "radioName": "Kennedy Tower", "frequency": 119.1, ... }
    Only the callsign matters here.
    """
    where, data = _read_positions(path)
    if not isinstance(data, list):
        raise ValueError(f"{where}: expected a list of positions")

    out: List[WatchedPosition] = []
    for i, p in enumerate(data):
        cs = p.get("callsign") if isinstance(p, dict) else None
        if not isinstance(cs, str) or not cs.strip():
            raise ValueError(f"{where}: position #{i} has no callsign")
        out.append(WatchedPosition(cs.strip()))
    return out


def load_settings(
    status_url: Optional[str] = None,
    positions_path: Optional[str] = None,
    icon_path: Optional[str] = None,
    timeout: Optional[float] = None,
) -> Settings:
    """Explicit arguments win over the environment (.env is honoured)."""
    load_dotenv()

    timeout_env = os.getenv("ZNY_HTTP_TIMEOUT")
    if timeout is None and timeout_env:
        try:
            timeout = float(timeout_env)
        except ValueError:
            raise ValueError(f"ZNY_HTTP_TIMEOUT is not a number: {timeout_env!r}")

    return Settings(
        registry=build_registry(),
        positions=tuple(load_positions(positions_path or os.getenv("ZNY_POSITIONS_FILE") or None)),
        status_url=status_url or os.getenv("VATSIM_STATUS_URL") or VATSIM_STATUS_URL,
        timeout=timeout if timeout is not None else HTTP_TIMEOUT,
        icon_path=icon_path or os.getenv("ZNY_ICON") or None,
    )
