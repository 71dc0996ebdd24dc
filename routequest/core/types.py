from __future__ import annotations

import math
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, field_validator


class Coordinate(BaseModel):
    """Geographic position in decimal degrees."""

    model_config = ConfigDict(frozen=True)

    lat: float
    lon: float

    def as_tuple(self) -> Tuple[float, float]:
        return (self.lat, self.lon)

    def is_known(self) -> bool:
        return math.isfinite(self.lat) and math.isfinite(self.lon)


class Waypoint(BaseModel):
    """A place along a scavenger-hunt route."""

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    name: str
    description: Optional[str] = None
    lat: Optional[float] = None
    lon: Optional[float] = None
    challenge: Optional[Dict[str, Any]] = None
    reward: Optional[Dict[str, Any]] = None

    @property
    def coordinate(self) -> Optional[Coordinate]:
        if self.lat is None or self.lon is None:
            return None
        return Coordinate(lat=self.lat, lon=self.lon)


class Connection(BaseModel):
    """Display-only link between two waypoints, referenced by id."""

    model_config = ConfigDict(frozen=True)

    source: str
    target: str


class Route(BaseModel):
    model_config = ConfigDict(frozen=True)

    route_id: Optional[str] = None
    name: str = ""
    description: str = ""
    estimated_duration: Optional[str] = None
    difficulty: Optional[str] = None
    waypoints: List[Waypoint] = []
    connections: List[Connection] = []
    source: Optional[str] = None

    @field_validator("waypoints")
    @classmethod
    def _assign_positional_ids(cls, wps: List[Waypoint]) -> List[Waypoint]:
        # Waypoints without a provider id are identified by their position
        return [wp if wp.id is not None else wp.model_copy(update={"id": str(i)}) for i, wp in enumerate(wps)]

    @property
    def total_places(self) -> int:
        return len(self.waypoints)


class ChallengeResult(BaseModel):
    """Completion report sent back by the challenge collaborator."""

    waypoint_id: Optional[str] = None
    waypoint_name: Optional[str] = None
    score: Optional[float] = None
    details: Dict[str, Any] = {}


class PendingChallenge(BaseModel):
    waypoint: Waypoint
    index: int
    age_range: Tuple[int, int] = (5, 8)


class RouteStatus(BaseModel):
    """Snapshot of session progress for presentation layers."""

    route_name: Optional[str] = None
    total: int = 0
    completed: int = 0
    progress_percent: int = 0
    current_index: int = 0
    next_waypoint: Optional[str] = None
    distance_to_next_m: Optional[float] = None
    bearing_to_next_deg: Optional[float] = None
    next_is_near: bool = False
    pending_challenge: Optional[str] = None
