from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence, Set

from ..core.errors import OutOfRange
from ..core.types import Waypoint

log = logging.getLogger(__name__)


class RouteProgressStore:
    """Completion set and next-stop cursor over a fixed waypoint list.

    The cursor only advances when the waypoint it points at is completed, and
    never moves backward on uncompletion.
    """

    def __init__(self, waypoints: Sequence[Waypoint] = ()):
        self._wps: List[Waypoint] = list(waypoints)
        self._completed: Set[int] = set()
        self._idx = 0

    @property
    def current_index(self) -> int:
        return self._idx

    def waypoints(self) -> List[Waypoint]:
        return list(self._wps)

    def reset(self, waypoints: Sequence[Waypoint]) -> None:
        self._wps = list(waypoints)
        self._completed = set()
        self._idx = 0

    def _check(self, index: int) -> int:
        if isinstance(index, bool) or not isinstance(index, int):
            raise OutOfRange(index, len(self._wps))
        if not 0 <= index < len(self._wps):
            raise OutOfRange(index, len(self._wps))
        return index

    def complete(self, index: int) -> bool:
        """Mark ``index`` completed. Returns True if the cursor advanced."""
        self._check(index)
        self._completed.add(index)
        if index == self._idx and self._idx < len(self._wps) - 1:
            self._idx += 1
            log.debug("Cursor advanced to %d", self._idx)
            return True
        return False

    def uncomplete(self, index: int) -> None:
        self._check(index)
        self._completed.discard(index)

    def is_completed(self, index: int) -> bool:
        return index in self._completed

    def completed_count(self) -> int:
        return len(self._completed)

    def remaining(self) -> int:
        return len(self._wps) - len(self._completed)

    def is_finished(self) -> bool:
        return bool(self._wps) and len(self._completed) == len(self._wps)

    def progress_percent(self) -> int:
        if not self._wps:
            return 0
        # halves round up
        return int(math.floor(100 * len(self._completed) / len(self._wps) + 0.5))

    def next_waypoint(self) -> Optional[Waypoint]:
        return self._wps[self._idx] if self._wps else None

    def completed_waypoints(self) -> List[Waypoint]:
        return [wp for i, wp in enumerate(self._wps) if i in self._completed]
