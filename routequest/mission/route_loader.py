from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from ..core.errors import RouteFormatError
from ..core.types import Connection, Route, Waypoint

log = logging.getLogger(__name__)


def _first(d: Dict[str, Any], *keys: str) -> Any:
    for k in keys:
        if d.get(k) is not None:
            return d[k]
    return None


def _float_or_none(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    return float(value)


def _parse_waypoint(i: int, it: Any) -> Waypoint:
    if not isinstance(it, dict):
        raise RouteFormatError(f"place #{i} is not an object")
    name = _first(it, "name", "title")
    if name is None:
        raise RouteFormatError(f"place #{i} has no name")
    try:
        lat = _float_or_none(_first(it, "latitude", "lat"))
        lon = _float_or_none(_first(it, "longitude", "lon", "lng"))
    except (TypeError, ValueError) as exc:
        raise RouteFormatError(f"place #{i} ({name}) has a bad coordinate") from exc
    wp_id = it.get("id")
    try:
        return Waypoint(
            id=str(wp_id) if wp_id is not None else None,
            name=str(name),
            description=it.get("description"),
            lat=lat,
            lon=lon,
            challenge=it.get("challenge"),
            reward=it.get("reward"),
        )
    except ValidationError as exc:
        raise RouteFormatError(f"place #{i} ({name}): {exc.error_count()} invalid field(s)") from exc


def _resolve_ref(ref: Any, waypoints: List[Waypoint]) -> Optional[str]:
    """Turn a connection endpoint (id, name or index) into a waypoint id."""
    if isinstance(ref, dict):
        ref = _first(ref, "id", "name")
    if ref is None:
        return None
    if isinstance(ref, int) and not isinstance(ref, bool):
        return waypoints[ref].id if 0 <= ref < len(waypoints) else None
    ref = str(ref)
    for wp in waypoints:
        if wp.id == ref:
            return wp.id
    for wp in waypoints:
        if wp.name == ref:
            return wp.id
    return None


def route_from_dict(data: Dict[str, Any]) -> Route:
    """Build a Route from a provider document.

    Accepts ``places`` or ``waypoints`` for the stops and ``routes`` or
    ``connections`` for the display links. Links that cannot be resolved are ignored.
    """
    if not isinstance(data, dict):
        raise RouteFormatError("route document must be an object")
    items = _first(data, "places", "waypoints") or []
    if not isinstance(items, list):
        raise RouteFormatError("places must be a list")
    waypoints = [_parse_waypoint(i, it) for i, it in enumerate(items)]
    try:
        route = Route(
            route_id=str(data["route_id"]) if data.get("route_id") is not None else None,
            name=data.get("name") or "",
            description=data.get("description") or "",
            estimated_duration=data.get("estimated_duration"),
            difficulty=data.get("difficulty"),
            waypoints=waypoints,
            source=data.get("source"),
        )
    except ValidationError as exc:
        raise RouteFormatError(f"route metadata: {exc.error_count()} invalid field(s)") from exc

    conns: List[Connection] = []
    for link in _first(data, "routes", "connections") or []:
        if not isinstance(link, dict):
            continue
        src = _resolve_ref(_first(link, "from", "source"), route.waypoints)
        dst = _resolve_ref(_first(link, "to", "target"), route.waypoints)
        if src is None or dst is None:
            log.debug("Skipping unresolved connection %s", link)
            continue
        conns.append(Connection(source=src, target=dst))
    if conns:
        route = route.model_copy(update={"connections": conns})

    total = data.get("total_places")
    if total is not None and total != route.total_places:
        log.warning("Route %s declares %s places but lists %d", route.name, total, route.total_places)
    return route


def load_route(path: str) -> Route:
    """Load a route JSON document from ``path``."""
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as exc:
            raise RouteFormatError(f"{path}: invalid JSON ({exc.msg})") from exc
        except UnicodeDecodeError as exc:
            raise RouteFormatError(f"{path}: not UTF-8 text") from exc
    return route_from_dict(data)


def route_path(route: Route) -> List[Waypoint]:
    """Waypoints in walking order: along the connections when they form a chain, else route order."""
    if not route.connections:
        return list(route.waypoints)
    by_id = {wp.id: wp for wp in route.waypoints}
    chain = [by_id[route.connections[0].source]]
    for conn in route.connections:
        if conn.source != chain[-1].id:
            return list(route.waypoints)
        chain.append(by_id[conn.target])
    return chain
