from __future__ import annotations

from typing import Optional

from ..core.types import Coordinate, Waypoint
from ..utils.geo import haversine_m, is_known

DEFAULT_PROXIMITY_M = 100.0


def is_near(
    position: Optional[Coordinate], waypoint: Waypoint, threshold_m: float = DEFAULT_PROXIMITY_M
) -> bool:
    """True when ``position`` lies within ``threshold_m`` of the waypoint.

    Fails closed: an unknown position or a waypoint without coordinates is never near.
    """
    if not is_known(position) or not is_known(waypoint):
        return False
    return haversine_m(position, waypoint) <= threshold_m


class ProximityGate:
    """Stateless proximity predicate bound to a threshold."""

    def __init__(self, threshold_m: float = DEFAULT_PROXIMITY_M):
        self.threshold_m = float(threshold_m)

    def __call__(self, position: Optional[Coordinate], waypoint: Waypoint) -> bool:
        return is_near(position, waypoint, self.threshold_m)
