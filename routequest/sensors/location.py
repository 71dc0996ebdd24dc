from __future__ import annotations

import logging
from typing import List, Optional, Protocol

from ..core.types import Coordinate

log = logging.getLogger(__name__)

_UNKNOWN_TOKENS = {"", "-", "nan", "none", "unknown", "unavailable"}


class LocationSource(Protocol):
    """Latest user position, or None while the position is unavailable."""

    def read(self) -> Optional[Coordinate]: ...


class StaticLocation:
    """Fixed position source; ``StaticLocation()`` never has a fix."""

    def __init__(self, lat: Optional[float] = None, lon: Optional[float] = None) -> None:
        self._coord = Coordinate(lat=lat, lon=lon) if lat is not None and lon is not None else None

    def set_position(self, lat: float, lon: float) -> None:
        self._coord = Coordinate(lat=lat, lon=lon)

    def clear(self) -> None:
        self._coord = None

    def read(self) -> Optional[Coordinate]:
        return self._coord


def parse_fix(line: str) -> Optional[Coordinate]:
    """Parse one ``lat,lon`` track line. Unavailable markers give None."""
    parts = [p.strip() for p in line.replace("\t", ",").split(",")]
    if len(parts) < 2 or parts[0].lower() in _UNKNOWN_TOKENS or parts[1].lower() in _UNKNOWN_TOKENS:
        return None
    coord = Coordinate(lat=float(parts[0]), lon=float(parts[1]))
    return coord if coord.is_known() else None


class TrackReplayLocation:
    """Replays a recorded track file one fix per ``read()``.

    Format: one ``lat,lon`` per line; ``#`` starts a comment; a line holding
    ``-``, ``nan`` or ``unknown`` marks a period without position.
    """

    def __init__(self, fixes: List[Optional[Coordinate]]) -> None:
        self._fixes = list(fixes)
        self._idx = 0

    @classmethod
    def from_file(cls, path: str) -> "TrackReplayLocation":
        fixes: List[Optional[Coordinate]] = []
        with open(path, "r", encoding="utf-8") as f:
            for lineno, line in enumerate(f, start=1):
                line = line.split("#", 1)[0].strip()
                if not line:
                    continue
                try:
                    fixes.append(parse_fix(line))
                except ValueError:
                    log.warning("%s:%d: unreadable fix %r treated as unavailable", path, lineno, line)
                    fixes.append(None)
        return cls(fixes)

    def __len__(self) -> int:
        return len(self._fixes)

    def exhausted(self) -> bool:
        return self._idx >= len(self._fixes)

    def read(self) -> Optional[Coordinate]:
        if self.exhausted():
            return None
        fix = self._fixes[self._idx]
        self._idx += 1
        return fix
