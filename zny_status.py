"""
ZNY status-bar plugin: staffed positions + N90 traffic, one block per run.

Usage:
    python zny_status.py [--status-url URL] [--positions FILE] [--icon PNG] [-v]
"""
import argparse
import sys
from typing import List, Optional

import httpx

from zny_config import load_settings
from zny_controllers import active_controllers, has_center
from zny_render import icon_b64, render
from zny_traffic import count_traffic
from zny_vatsim import SnapshotError, fetch_snapshot

EXIT_FETCH = 1
EXIT_CONFIG = 2


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="VATSIM ZNY status for xbar")
    parser.add_argument("--status-url", help="VATSIM status.json URL")
    parser.add_argument("--positions", help="facility positions JSON")
    parser.add_argument("--icon", help="menu bar icon (PNG)")
    parser.add_argument("--timeout", type=float, help="HTTP timeout in seconds")
    parser.add_argument("-v", "--verbose", action="store_true", help="diagnostics on stderr")
    args = parser.parse_args(argv)

    try:
        settings = load_settings(args.status_url, args.positions, args.icon, args.timeout)
    except (OSError, ValueError) as e:
        print(f"[CONFIG] error: {e}", file=sys.stderr)
        return EXIT_CONFIG

    # nothing reaches stdout unless the whole snapshot came through
    try:
        snap = fetch_snapshot(settings.status_url, settings.timeout)
    except (httpx.HTTPError, SnapshotError) as e:
        print(f"[VATSIM] error: {e}", file=sys.stderr)
        return EXIT_FETCH

    traffic = count_traffic(snap.pilots, settings.registry)
    online = active_controllers(snap.controllers, settings.positions)

    if args.verbose:
        print(
            f"[VATSIM] {len(snap.pilots)} pilots, {len(snap.controllers)} controllers"
            f" (updated {snap.updated.isoformat() if snap.updated else '?'})",
            file=sys.stderr,
        )
        print(f"[N90] dep={traffic.departures} arr={traffic.arrivals} total={traffic.total}", file=sys.stderr)

    sys.stdout.write(render(online, has_center(online), traffic, icon_b64(settings.icon_path)))
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
