from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional, Tuple

from ..challenge.api_interface import ChallengeAPI
from ..mission.progress_store import RouteProgressStore
from ..mission.proximity import DEFAULT_PROXIMITY_M, is_near
from ..utils.geo import bearing_deg, haversine_m, is_known
from .errors import UnresolvedWaypoint
from .types import ChallengeResult, Coordinate, PendingChallenge, Route, RouteStatus, Waypoint

log = logging.getLogger(__name__)


class SessionState(Enum):
    NO_ROUTE = 0
    ROUTE_ACTIVE = 1


class RouteSession:
    """Binds route selection, proximity-gated challenges and completion reports.

    The latest user position is handed in by whoever listens to the location
    source; the session never polls for it.
    """

    def __init__(
        self,
        cfg: Optional[dict] = None,
        challenge: Optional[ChallengeAPI] = None,
        store: Optional[RouteProgressStore] = None,
    ):
        self.cfg = cfg or {}
        self.challenge = challenge
        self.store = store or RouteProgressStore()
        self.state = SessionState.NO_ROUTE
        self.route: Optional[Route] = None
        self.position: Optional[Coordinate] = None
        self.selected_waypoint: Optional[Waypoint] = None
        self.pending: Optional[PendingChallenge] = None

        self.threshold_m = float(self.cfg.get("proximity_threshold_m", DEFAULT_PROXIMITY_M))
        ages = (self.cfg.get("challenge") or {}).get("age_range", (5, 8))
        self.age_range: Tuple[int, int] = (int(ages[0]), int(ages[1]))

    # Route lifecycle

    def select_route(self, route: Route) -> None:
        self.route = route
        self.store.reset(route.waypoints)
        self.selected_waypoint = None
        self.pending = None
        self.state = SessionState.ROUTE_ACTIVE
        log.info("Route selected: %s (%d waypoints)", route.name or route.route_id, route.total_places)

    def update_position(self, position: Optional[Coordinate]) -> None:
        self.position = position if is_known(position) else None

    def position_lost(self, reason: str = "") -> None:
        if self.position is not None:
            log.info("Position lost%s", f": {reason}" if reason else "")
        self.position = None

    def select_waypoint(self, waypoint: Optional[Waypoint]) -> None:
        self.selected_waypoint = waypoint

    # Waypoint lookup

    def index_of(self, waypoint: Waypoint) -> int:
        if self.route is None:
            raise UnresolvedWaypoint(f"no active route for waypoint {waypoint.name!r}")
        # Positional ids repeat across routes, so the whole waypoint must match
        for i, wp in enumerate(self.route.waypoints):
            if wp is waypoint or wp == waypoint:
                return i
        raise UnresolvedWaypoint(f"waypoint {waypoint.name!r} is not part of the active route")

    def resolve(self, result: ChallengeResult) -> int:
        """Map a completion report to a route index, by id first and then by name."""
        if self.route is None:
            raise UnresolvedWaypoint("no active route")
        wps = self.route.waypoints
        if result.waypoint_id is not None:
            for i, wp in enumerate(wps):
                if wp.id == result.waypoint_id:
                    return i
        if result.waypoint_name is not None:
            for i, wp in enumerate(wps):
                if wp.name == result.waypoint_name:
                    return i
        raise UnresolvedWaypoint(
            f"no waypoint matches id={result.waypoint_id!r} name={result.waypoint_name!r}",
            details={"waypoint_id": result.waypoint_id, "waypoint_name": result.waypoint_name},
        )

    # Challenges

    def can_start_challenge(self, waypoint: Waypoint) -> bool:
        if self.state != SessionState.ROUTE_ACTIVE:
            return False
        try:
            idx = self.index_of(waypoint)
        except UnresolvedWaypoint:
            return False
        # The first stop is always open so a hunt can begin off-site
        if idx == 0:
            return True
        return is_near(self.position, self.route.waypoints[idx], self.threshold_m)

    def start_challenge(self, waypoint: Waypoint) -> Optional[PendingChallenge]:
        if not self.can_start_challenge(waypoint):
            log.debug("Challenge at %s rejected: not in range", waypoint.name)
            return None
        idx = self.index_of(waypoint)
        pending = PendingChallenge(waypoint=self.route.waypoints[idx], index=idx, age_range=self.age_range)
        self.pending = pending
        log.info("Challenge started at %s", pending.waypoint.name)
        if self.challenge is not None:
            self.challenge.request(pending)
        return pending

    def on_challenge_completed(self, result: ChallengeResult) -> None:
        try:
            idx = self.resolve(result)
        except UnresolvedWaypoint as exc:
            log.warning("Dropping challenge completion: %s", exc)
            return
        advanced = self.store.complete(idx)
        self.pending = None
        log.info(
            "Challenge completed at %s (%d%%)%s",
            self.route.waypoints[idx].name,
            self.store.progress_percent(),
            ", advancing" if advanced else "",
        )

    def eligible_indices(self) -> List[int]:
        if self.route is None:
            return []
        return [i for i, wp in enumerate(self.route.waypoints) if self.can_start_challenge(wp)]

    # Manual progress

    def complete_waypoint(self, index: int) -> bool:
        advanced = self.store.complete(index)
        log.info("Waypoint %d marked complete (%d%%)", index, self.store.progress_percent())
        return advanced

    def uncomplete_waypoint(self, index: int) -> None:
        self.store.uncomplete(index)
        log.info("Waypoint %d marked incomplete (%d%%)", index, self.store.progress_percent())

    def status(self) -> RouteStatus:
        nxt = self.store.next_waypoint()
        dist = None
        brng = None
        if nxt is not None and is_known(self.position) and is_known(nxt):
            dist = haversine_m(self.position, nxt)
            brng = bearing_deg(self.position, nxt)
        return RouteStatus(
            route_name=self.route.name if self.route else None,
            total=len(self.store.waypoints()),
            completed=self.store.completed_count(),
            progress_percent=self.store.progress_percent(),
            current_index=self.store.current_index,
            next_waypoint=nxt.name if nxt is not None else None,
            distance_to_next_m=dist,
            bearing_to_next_deg=brng,
            next_is_near=nxt is not None and is_near(self.position, nxt, self.threshold_m),
            pending_challenge=self.pending.waypoint.name if self.pending else None,
        )
