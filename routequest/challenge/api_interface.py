from __future__ import annotations

from abc import ABC, abstractmethod

from ..core.types import PendingChallenge


class ChallengeAPI(ABC):
    """Interface to the challenge mini-game.

    Implementations receive a request when a challenge is allowed to start and
    later report back through ``RouteSession.on_challenge_completed``.
    """

    @abstractmethod
    def request(self, pending: PendingChallenge) -> None: ...
