"""Pydantic schemas for player data validation."""

from typing import List, Optional

from pydantic import Field, field_validator

from .common import CamelModel, OptionalText


class PlayerBase(CamelModel):
    """Base player schema with common fields."""

    first_name: str = Field(..., min_length=1, description="First name")
    last_name: str = Field(..., min_length=1, description="Last name")
    email: OptionalText = Field(None, description="Email, unique when present")
    profile_picture_url: OptionalText = Field(None, description="Profile picture URL")


class PlayerFields(PlayerBase):
    """Non-roster player fields, applied as a whole-row replacement."""
    pass


class PlayerCreate(PlayerBase):
    """Schema for creating a new player, optionally on one team."""

    team_id: OptionalText = Field(None, description="Initial team ID")


class PlayerUpdate(PlayerBase):
    """Player fields plus the complete replacement roster."""

    team_ids: List[Optional[str]] = Field(default_factory=list, description="Every team the player belongs to")

    @field_validator("team_ids", mode="before")
    @classmethod
    def null_roster_is_empty(cls, v):
        return [] if v is None else v

    def fields(self) -> PlayerFields:
        return PlayerFields(
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
            profile_picture_url=self.profile_picture_url,
        )


class PlayerResponse(PlayerBase):
    """Schema for player response data."""

    id: str = Field(..., description="Player ID")
    team_ids: List[str] = Field(default_factory=list, description="Team IDs the player belongs to")
