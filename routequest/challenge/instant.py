from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from ..core.types import ChallengeResult, PendingChallenge
from .api_interface import ChallengeAPI

log = logging.getLogger(__name__)


@dataclass
class InstantChallenge(ChallengeAPI):
    """Challenge that finishes as soon as it is requested.

    Used for track replays and tests. ``report`` is normally bound to
    ``RouteSession.on_challenge_completed``; when unset, requests are only recorded.
    """

    report: Optional[Callable[[ChallengeResult], None]] = None
    score: float = 1.0
    history: List[PendingChallenge] = field(default_factory=list)

    def request(self, pending: PendingChallenge) -> None:
        self.history.append(pending)
        log.info(
            "Challenge at %s (ages %d-%d) finished instantly",
            pending.waypoint.name,
            pending.age_range[0],
            pending.age_range[1],
        )
        if self.report is not None:
            self.report(
                ChallengeResult(
                    waypoint_id=pending.waypoint.id,
                    waypoint_name=pending.waypoint.name,
                    score=self.score,
                )
            )
