"""Pydantic schemas for league data validation."""

from datetime import datetime
from typing import List

from pydantic import Field

from .common import CamelModel, OptionalText


class LeagueBase(CamelModel):
    """Base league schema with common fields."""

    name: str = Field(..., min_length=1, description="League name, unique")
    location: OptionalText = Field(None, description="Where the league is played")
    start_date: datetime = Field(..., description="League start")
    end_date: datetime = Field(..., description="League end")


class LeagueCreate(LeagueBase):
    """Schema for creating a new league."""
    pass


class LeagueUpdate(LeagueBase):
    """Whole-row replacement; every mutable field must be supplied."""
    pass


class TeamSummary(CamelModel):
    """Team as nested in a league listing."""

    id: str
    name: str
    league_id: str


class LeagueResponse(LeagueBase):
    """Schema for league response data."""

    id: str = Field(..., description="League ID")
    teams: List[TeamSummary] = Field(default_factory=list)
