"""
VATSIM live-state snapshot: status bootstrap, v3 feed fetch, decoding into
AircraftState / ControllerSession.
"""
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

import httpx

from zny_config import HTTP_TIMEOUT, VATSIM_STATUS_URL
from zny_controllers import ControllerSession
from zny_geo import GeoPoint
from zny_traffic import AircraftState

_TS_RE = re.compile(r"^(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})(?:\.(\d+))?(Z|[+-]\d{2}:\d{2})?$")


class SnapshotError(RuntimeError):
    """The feed answered, but not with something we can use."""


@dataclass
class Snapshot:
    pilots: List[AircraftState] = field(default_factory=list)
    controllers: List[ControllerSession] = field(default_factory=list)
    updated: Optional[datetime] = None


# =========================
# DECODING
# =========================
def parse_timestamp(raw: Any) -> Optional[datetime]:
    """
    VATSIM stamps look like 2024-05-01T18:03:27.1234567Z (7 fractional
    digits), which datetime.fromisoformat does not take everywhere.
    """
    if not raw or not isinstance(raw, str):
        return None
    m = _TS_RE.match(raw.strip())
    if not m:
        return None
    base, frac, tz = m.groups()
    dt = datetime.strptime(base, "%Y-%m-%dT%H:%M:%S")
    if frac:
        dt = dt.replace(microsecond=int(frac[:6].ljust(6, "0")))
    if tz and tz != "Z":
        sign = 1 if tz[0] == "+" else -1
        offset = timedelta(hours=int(tz[1:3]), minutes=int(tz[4:6])) * sign
        return dt.replace(tzinfo=timezone(offset)).astimezone(timezone.utc)
    return dt.replace(tzinfo=timezone.utc)


def _obj(v: Any, what: str) -> Dict[str, Any]:
    if v is None:
        return {}
    if not isinstance(v, dict):
        raise SnapshotError(f"{what}: expected an object, got {type(v).__name__}")
    return v


def _text(v: Any, what: str) -> str:
    if v is None:
        return ""
    if not isinstance(v, str):
        raise SnapshotError(f"{what}: expected a string, got {type(v).__name__}")
    return v.strip()


def _list(v: Any, what: str) -> List[Any]:
    if not isinstance(v, list):
        raise SnapshotError(f"{what}: expected a list, got {type(v).__name__}")
    return v


def _int(v: Any) -> int:
    try:
        return int(v)
    except (TypeError, ValueError):
        return 0


def decode_pilot(p: Any) -> Optional[AircraftState]:
    p = _obj(p, "pilot")
    lat = p.get("latitude")
    lon = p.get("longitude")
    if lat is None or lon is None:
        return None
    try:
        pos = GeoPoint(float(lon), float(lat))
    except (TypeError, ValueError):
        return None

    fp = _obj(p.get("flight_plan"), "pilot.flight_plan")
    return AircraftState(
        position=pos,
        groundspeed=_int(p.get("groundspeed")),
        departure=_text(fp.get("departure"), "flight_plan.departure").upper(),
        arrival=_text(fp.get("arrival"), "flight_plan.arrival").upper(),
    )


def decode_controller(c: Any) -> Optional[ControllerSession]:
    c = _obj(c, "controller")
    cs = _text(c.get("callsign"), "controller.callsign")
    if not cs:
        return None
    return ControllerSession(
        callsign=cs,
        name=_text(c.get("name"), "controller.name"),
        cid=_int(c.get("cid")),
        logon_time=parse_timestamp(c.get("logon_time")),
    )


def decode_snapshot(data: Any) -> Snapshot:
    if not isinstance(data, dict):
        raise SnapshotError(f"unexpected snapshot type: {type(data).__name__}")

    pilots = data.get("pilots")
    controllers = data.get("controllers")
    if not isinstance(pilots, list) or not isinstance(controllers, list):
        raise SnapshotError("snapshot is missing the pilots/controllers arrays")

    general = _obj(data.get("general"), "general")
    snap = Snapshot(updated=parse_timestamp(general.get("update_timestamp")))
    for p in pilots:
        ac = decode_pilot(p)
        if ac is not None:
            snap.pilots.append(ac)
    for c in controllers:
        s = decode_controller(c)
        if s is not None:
            snap.controllers.append(s)
    return snap


# =========================
# FETCH
# =========================
def _get_json(client: httpx.Client, url: str) -> Any:
    r = client.get(url)
    r.raise_for_status()
    try:
        return r.json()
    except ValueError as e:
        raise SnapshotError(f"invalid JSON from {url}: {e}") from e


def resolve_data_url(client: httpx.Client, status_url: str = VATSIM_STATUS_URL) -> str:
    """Pick the v3 data feed URL out of the network status document."""
    status = _obj(_get_json(client, status_url), "status")
    v3 = _list(_obj(status.get("data"), "status.data").get("v3") or [], "status.data.v3")
    metar = _list(status.get("metar") or [], "status.metar")
    if len(v3) != 1 or len(metar) != 1 or not isinstance(v3[0], str):
        raise SnapshotError(f"unexpected status response format: {status!r}")
    return v3[0]


def fetch_snapshot(
    status_url: str = VATSIM_STATUS_URL,
    timeout: float = HTTP_TIMEOUT,
    client: Optional[httpx.Client] = None,
) -> Snapshot:
    """
    One synchronous fetch of the live state. httpx.HTTPError and
    SnapshotError propagate; the caller decides that both are fatal.
    """
    own = client is None
    if own:
        client = httpx.Client(timeout=timeout, follow_redirects=True)
    try:
        data_url = resolve_data_url(client, status_url)
        return decode_snapshot(_get_json(client, data_url))
    finally:
        if own:
            client.close()
