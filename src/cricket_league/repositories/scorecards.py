"""Scorecard reads. Writes go through ``ScorecardService``."""

from typing import Optional

from sqlalchemy import select

from ..errors import NotFoundError
from ..models import Scorecard
from ..schemas import ScorecardResponse
from .base import Repository


class ScorecardRepository(Repository):

    def get_by_match(self, match_id: str) -> Optional[ScorecardResponse]:
        """Return the match's scorecard, or ``None`` when it has none yet."""
        with self.store.session() as session:
            scorecard = session.scalars(select(Scorecard).where(Scorecard.match_id == match_id)).first()
            return ScorecardResponse.model_validate(scorecard) if scorecard else None

    def get(self, scorecard_id: str) -> ScorecardResponse:
        with self.store.session() as session:
            scorecard = session.get(Scorecard, scorecard_id)
            if scorecard is None:
                raise NotFoundError("Scorecard not found")
            return ScorecardResponse.model_validate(scorecard)
