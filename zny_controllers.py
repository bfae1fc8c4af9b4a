from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, List, Optional

CENTER_SUFFIX = "_CTR"


@dataclass(frozen=True)
class ControllerSession:
    callsign: str
    name: str = ""
    cid: int = 0
    logon_time: Optional[datetime] = None


@dataclass(frozen=True)
class WatchedPosition:
    """A facility position by callsign, e.g. JFK_TWR."""
    callsign: str


def active_controllers(
    sessions: Iterable[ControllerSession],
    watched: Iterable[WatchedPosition],
) -> List[ControllerSession]:
    """Sessions staffing one of the watched positions, sorted by callsign."""
    names = {p.callsign for p in watched}
    online = [s for s in sessions if s.callsign in names]
    online.sort(key=lambda s: s.callsign)
    return online


def has_center(online: Iterable[ControllerSession]) -> bool:
    return any(s.callsign.endswith(CENTER_SUFFIX) for s in online)


def time_online(session: ControllerSession, now: Optional[datetime] = None) -> str:
    """H:MM since logon ("0:00" if the logon time is unknown)."""
    if session.logon_time is None:
        return "0:00"
    now = now or datetime.now(timezone.utc)
    secs = max(0, int((now - session.logon_time).total_seconds()))
    hours, rem = divmod(secs, 3600)
    return f"{hours}:{rem // 60:02d}"
