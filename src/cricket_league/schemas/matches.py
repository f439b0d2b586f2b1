"""Pydantic schemas for match data validation."""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import Field, field_validator, model_validator

from ..models.matches import MatchStatus, TossDecision
from .common import CamelModel, OptionalText, blank_to_none


class MatchCreate(CamelModel):
    """Schema for creating a new match."""

    league_id: str = Field(..., min_length=1, description="League ID")
    team_a_id: str = Field(..., min_length=1, description="Team A ID")
    team_b_id: str = Field(..., min_length=1, description="Team B ID")
    date_time: datetime = Field(..., description="Scheduled start")
    venue: OptionalText = Field(None, description="Match venue")
    overs: int = Field(15, ge=1, description="Overs per innings")
    status: MatchStatus = Field(MatchStatus.SCHEDULED, description="Match status")

    @field_validator("overs", "status", mode="before")
    @classmethod
    def blank_means_default(cls, v, info):
        if blank_to_none(v) is None:
            return cls.model_fields[info.field_name].default
        return v


# Columns that may be cleared with null or ""
NULLABLE_MATCH_FIELDS = ("venue", "toss_won_by_team_id", "chose_to", "umpire1", "umpire2", "result", "scorecard_id")


class MatchUpdate(CamelModel):
    """Sparse update: only the fields present in the request are applied."""

    league_id: Optional[str] = None
    team_a_id: Optional[str] = None
    team_b_id: Optional[str] = None
    date_time: Optional[datetime] = None
    venue: OptionalText = None
    overs: Optional[int] = Field(None, ge=1)
    status: Optional[MatchStatus] = None
    toss_won_by_team_id: OptionalText = None
    chose_to: Optional[TossDecision] = None
    umpire1: OptionalText = None
    umpire2: OptionalText = None
    result: OptionalText = None
    scorecard_id: OptionalText = None

    @field_validator("chose_to", mode="before")
    @classmethod
    def blank_choice(cls, v):
        return blank_to_none(v)

    @model_validator(mode="after")
    def required_columns_not_cleared(self):
        for name in self.model_fields_set:
            if name not in NULLABLE_MATCH_FIELDS and getattr(self, name) in (None, ""):
                raise ValueError(f"{name} cannot be empty")
        return self

    def changes(self) -> Dict[str, Any]:
        """Fields explicitly present in the request, keyed by column name."""
        return {name: getattr(self, name) for name in self.model_fields_set}


class MatchResponse(CamelModel):
    """Schema for match response data."""

    id: str = Field(..., description="Match ID")
    league_id: str
    team_a_id: str
    team_b_id: str
    date_time: datetime
    venue: Optional[str] = None
    overs: int
    status: MatchStatus
    toss_won_by_team_id: Optional[str] = None
    chose_to: Optional[TossDecision] = None
    umpire1: Optional[str] = None
    umpire2: Optional[str] = None
    result: Optional[str] = None
    scorecard_id: Optional[str] = None
