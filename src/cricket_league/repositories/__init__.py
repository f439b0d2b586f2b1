"""Entity repositories bound to an explicit ``Store``."""

from .base import Repository
from .leagues import LeagueRepository
from .teams import TeamRepository
from .players import PlayerRepository
from .matches import MatchRepository
from .scorecards import ScorecardRepository
from .users import UserRepository

__all__ = [
    "Repository",
    "LeagueRepository",
    "TeamRepository",
    "PlayerRepository",
    "MatchRepository",
    "ScorecardRepository",
    "UserRepository",
]
