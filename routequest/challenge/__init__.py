from .api_interface import ChallengeAPI
from .instant import InstantChallenge

__all__ = ["ChallengeAPI", "InstantChallenge"]
