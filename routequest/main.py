from __future__ import annotations

import argparse
import logging
import os
import sys
from dataclasses import dataclass
from typing import Optional

import yaml

from .challenge import InstantChallenge
from .core.errors import RouteError
from .core.state_machine import RouteSession
from .mission.route_loader import load_route, route_path
from .sensors.location import TrackReplayLocation
from .utils.geo import path_length_m
from .utils.logging_setup import configure_logging


@dataclass
class AppConfig:
    default_cfg_path: str


def load_yaml(path: str) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def replay(session: RouteSession, track: TrackReplayLocation, auto_start: bool, logger: logging.Logger) -> None:
    """Feed every recorded fix to the session, attempting the next stop's challenge."""
    last_idx = session.store.current_index
    while not track.exhausted():
        fix = track.read()
        if fix is None:
            session.position_lost("no fix in track")
        else:
            session.update_position(fix)

        nxt = session.store.next_waypoint()
        if (
            auto_start
            and nxt is not None
            and not session.store.is_completed(session.store.current_index)
            and session.can_start_challenge(nxt)
        ):
            session.start_challenge(nxt)

        status = session.status()
        if status.current_index != last_idx:
            logger.info("Next stop: %s (%d%% done)", status.next_waypoint, status.progress_percent)
            last_idx = status.current_index
        elif status.distance_to_next_m is not None:
            logger.debug(
                "%.0f m to %s, bearing %.0f deg", status.distance_to_next_m, status.next_waypoint, status.bearing_to_next_deg
            )
        if session.store.is_finished():
            logger.info("All %d stops completed", status.total)
            break


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="routequest")
    sub = parser.add_subparsers(dest="cmd", required=True)
    runp = sub.add_parser("replay", help="Replay a recorded track against a route")
    runp.add_argument("--route", required=True, help="Path to route JSON file")
    runp.add_argument("--track", required=True, help="Path to lat,lon track file")
    runp.add_argument("--threshold", type=float, default=None, help="Proximity threshold in meters")
    runp.add_argument("--config", type=str, default=None, help="Path to default.yaml override")
    runp.add_argument("--log-level", type=str, default=os.getenv("LOG_LEVEL", None))
    runp.add_argument("--no-auto-challenge", action="store_true", help="Only track position, never start challenges")

    args = parser.parse_args(argv)

    app_cfg = AppConfig(
        default_cfg_path=args.config or os.path.join(os.path.dirname(__file__), "config", "default.yaml"),
    )
    cfg = load_yaml(app_cfg.default_cfg_path)
    configure_logging(cfg, level_override=args.log_level)
    logger = logging.getLogger(__name__)

    if args.threshold is not None:
        cfg["proximity_threshold_m"] = args.threshold

    try:
        route = load_route(args.route)
        track = TrackReplayLocation.from_file(args.track)
    except (OSError, UnicodeDecodeError, RouteError) as exc:
        logger.error("Cannot load input: %s", exc)
        return 2

    logger.info(
        "Loaded route %s: %d stops, %.0f m walk, %d fixes to replay",
        route.name or args.route,
        route.total_places,
        path_length_m(route_path(route)),
        len(track),
    )

    challenge = InstantChallenge()
    session = RouteSession(cfg=cfg, challenge=challenge)
    challenge.report = session.on_challenge_completed
    session.select_route(route)

    auto_start = bool((cfg.get("challenge") or {}).get("auto_start", True)) and not args.no_auto_challenge
    replay(session, track, auto_start, logger)

    print(session.status().model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
