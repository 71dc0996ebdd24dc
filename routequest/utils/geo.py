from __future__ import annotations

import math
from math import atan2, cos, degrees, radians, sin, sqrt
from typing import Iterable, Optional, Tuple, Union

from geographiclib.geodesic import Geodesic

from ..core.types import Coordinate, Waypoint

EARTH_RADIUS_M = 6_371_000.0

LatLon = Tuple[float, float]
PointLike = Union[LatLon, Coordinate, Waypoint]


def _latlon(p: PointLike) -> LatLon:
    if isinstance(p, Coordinate):
        return p.lat, p.lon
    if isinstance(p, Waypoint):
        coord = p.coordinate
        if coord is None:
            raise ValueError(f"waypoint {p.name!r} has no coordinate")
        return coord.lat, coord.lon
    return float(p[0]), float(p[1])


def is_known(p: Optional[PointLike]) -> bool:
    """True when ``p`` is a usable position (not None, both components finite)."""
    if p is None:
        return False
    if isinstance(p, Waypoint):
        p = p.coordinate
        if p is None:
            return False
    lat, lon = _latlon(p)
    return math.isfinite(lat) and math.isfinite(lon)


def haversine_m(p0: PointLike, p1: PointLike) -> float:
    """Great-circle distance in meters on a sphere of mean Earth radius.

    Args:
        p0: origin as (lat, lon), Coordinate or Waypoint.
        p1: destination, same accepted forms.

    Returns:
        Non-negative distance in meters. Identical points yield 0.0.
    """
    lat1, lon1 = _latlon(p0)
    lat2, lon2 = _latlon(p1)
    phi1 = radians(lat1)
    phi2 = radians(lat2)
    d_phi = radians(lat2 - lat1)
    d_lambda = radians(lon2 - lon1)
    a = sin(d_phi / 2) ** 2 + cos(phi1) * cos(phi2) * sin(d_lambda / 2) ** 2
    # float residue can push a slightly outside [0, 1]
    a = min(1.0, max(0.0, a))
    c = 2 * atan2(sqrt(a), sqrt(1 - a))
    return EARTH_RADIUS_M * c


def bearing_deg(p0: PointLike, p1: PointLike) -> float:
    """Initial bearing from p0 to p1 in degrees [0,360)."""
    lat1, lon1 = map(radians, _latlon(p0))
    lat2, lon2 = map(radians, _latlon(p1))
    dlon = lon2 - lon1
    x = sin(dlon) * cos(lat2)
    y = cos(lat1) * sin(lat2) - sin(lat1) * cos(lat2) * cos(dlon)
    brng = degrees(atan2(x, y))
    return (brng + 360.0) % 360.0


def geodesic_distance_m(p0: PointLike, p1: PointLike) -> float:
    """Ellipsoidal (WGS84) distance in meters using GeographicLib."""
    lat1, lon1 = _latlon(p0)
    lat2, lon2 = _latlon(p1)
    g = Geodesic.WGS84.Inverse(lat1, lon1, lat2, lon2)
    return float(g["s12"])


def path_length_m(points: Iterable[PointLike]) -> float:
    """Sum of geodesic legs along ``points``. Points without a position are skipped."""
    total = 0.0
    prev: Optional[PointLike] = None
    for p in points:
        if not is_known(p):
            continue
        if prev is not None:
            total += geodesic_distance_m(prev, p)
        prev = p
    return total
