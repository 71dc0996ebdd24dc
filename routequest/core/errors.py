"""Domain errors for route progress tracking."""

from __future__ import annotations

from typing import Any, Dict, Optional


class RouteError(Exception):
    """Base exception for all route engine failures."""

    code: str = "ROUTE_ERROR"

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class OutOfRange(RouteError, IndexError):
    """Waypoint index outside the active route."""

    code = "OUT_OF_RANGE"

    def __init__(self, index: Any, size: int):
        super().__init__(
            f"waypoint index {index!r} outside route of {size} waypoints",
            details={"index": index, "size": size},
        )
        self.index = index
        self.size = size


class UnresolvedWaypoint(RouteError, LookupError):
    """A reported waypoint that does not belong to the active route."""

    code = "UNRESOLVED_WAYPOINT"


class RouteFormatError(RouteError, ValueError):
    code = "ROUTE_FORMAT"
