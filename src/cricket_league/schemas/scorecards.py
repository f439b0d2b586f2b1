"""Pydantic schemas for scorecard data validation."""

from typing import Any, Optional

from pydantic import Field

from .common import CamelModel, OptionalText


class ScorecardUpsert(CamelModel):
    """Body of a scorecard create-or-update; the id comes from the path.

    Innings are stored and returned unchanged, never interpreted.
    """

    match_id: OptionalText = Field(None, description="Match the scorecard belongs to")
    innings1: Optional[Any] = Field(None, description="First innings")
    innings2: Optional[Any] = Field(None, description="Second innings")


class ScorecardResponse(CamelModel):
    """Schema for scorecard response data."""

    id: str = Field(..., description="Scorecard ID")
    match_id: str
    innings1: Optional[Any] = None
    innings2: Optional[Any] = None
