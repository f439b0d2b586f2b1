"""Database models for the cricket league system."""

from .base import Base
from .leagues import League
from .teams import Team, Membership
from .players import Player
from .matches import Match, MatchStatus, TossDecision
from .scorecards import Scorecard
from .users import User

__all__ = [
    "Base",
    "League",
    "Team",
    "Membership",
    "Player",
    "Match",
    "MatchStatus",
    "TossDecision",
    "Scorecard",
    "User",
]
