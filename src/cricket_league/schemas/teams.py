"""Pydantic schemas for team data validation."""

from typing import List

from pydantic import Field

from .common import CamelModel, OptionalText


class TeamBase(CamelModel):
    """Base team schema with common fields."""

    name: str = Field(..., min_length=1, description="Team name, unique within its league")
    league_id: str = Field(..., min_length=1, description="Owning league ID")
    captain_id: OptionalText = Field(None, description="Captain player ID")
    logo_url: OptionalText = Field(None, description="Team logo URL")


class TeamCreate(TeamBase):
    """Schema for creating a new team."""
    pass


class TeamUpdate(TeamBase):
    """Whole-row replacement; every mutable field must be supplied."""
    pass


class TeamResponse(TeamBase):
    """Schema for team response data."""

    id: str = Field(..., description="Team ID")
    player_ids: List[str] = Field(default_factory=list, description="Member player IDs")
