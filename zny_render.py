"""
xbar / SwiftBar output, per
https://github.com/matryer/xbar-plugins/blob/main/CONTRIBUTING.md
"""
import base64
import os
from datetime import datetime
from typing import List, Optional, Sequence

from zny_controllers import ControllerSession, time_online
from zny_traffic import TrafficCounts

CONTROLLER_URL = "https://nyartcc.org/controller/{cid}"
AIRPORT_URL = "https://vatsim-radar.com/airport/{icao}"


def icon_b64(path: Optional[str]) -> str:
    if not path or not os.path.exists(path):
        return ""
    with open(path, "rb") as f:
        return base64.b64encode(f.read()).decode("ascii")


def build_header(n_online: int, center: bool, total: int, icon: str = "") -> str:
    line = f"{n_online}{'*' if center else ''}:headphones: {total} :airplane:"
    if icon:
        line += f" | templateImage={icon}"
    return line


def build_controller_line(ctrl: ControllerSession, now: Optional[datetime] = None) -> str:
    return (
        f"{ctrl.callsign} - {ctrl.name} ({time_online(ctrl, now)}) | font=Monaco"
        f" | href={CONTROLLER_URL.format(cid=ctrl.cid)}"
    )


def build_airport_line(icao: str, dep: int, arr: int) -> str:
    return f"{icao} {dep:2d}🛫 {arr:2d}🛬 | font=Monaco | href={AIRPORT_URL.format(icao=icao)}"


def render(
    online: Sequence[ControllerSession],
    center: bool,
    traffic: TrafficCounts,
    icon: str = "",
    now: Optional[datetime] = None,
) -> str:
    lines: List[str] = [build_header(len(online), center, traffic.total, icon)]

    if online:
        lines.append("---")
        lines.extend(build_controller_line(c, now) for c in online)

    lines.append("---")
    for icao in sorted(set(traffic.departures) | set(traffic.arrivals)):
        lines.append(build_airport_line(icao, traffic.departures.get(icao, 0), traffic.arrivals.get(icao, 0)))

    return "\n".join(lines) + "\n"
