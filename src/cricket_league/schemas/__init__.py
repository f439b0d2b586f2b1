"""Pydantic schemas for data validation."""

from .common import CamelModel, parse
from .leagues import LeagueCreate, LeagueUpdate, LeagueResponse, TeamSummary
from .teams import TeamCreate, TeamUpdate, TeamResponse
from .players import PlayerCreate, PlayerFields, PlayerUpdate, PlayerResponse
from .matches import MatchCreate, MatchUpdate, MatchResponse
from .scorecards import ScorecardUpsert, ScorecardResponse
from .users import LoginRequest, UserResponse

__all__ = [
    "CamelModel",
    "parse",
    "LeagueCreate",
    "LeagueUpdate",
    "LeagueResponse",
    "TeamSummary",
    "TeamCreate",
    "TeamUpdate",
    "TeamResponse",
    "PlayerCreate",
    "PlayerFields",
    "PlayerUpdate",
    "PlayerResponse",
    "MatchCreate",
    "MatchUpdate",
    "MatchResponse",
    "ScorecardUpsert",
    "ScorecardResponse",
    "LoginRequest",
    "UserResponse",
]
