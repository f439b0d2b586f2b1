"""Match repository."""

import logging
from typing import List, Optional

from sqlalchemy import delete, select

from ..errors import NotFoundError, SAME_TEAMS_MESSAGE, ValidationError
from ..models import Match
from ..schemas import MatchCreate, MatchResponse, MatchUpdate
from .base import Repository


logger = logging.getLogger(__name__)


class MatchRepository(Repository):
    """CRUD for matches. Updates are sparse; status changes are unrestricted."""

    def list(self, league_id: Optional[str] = None) -> List[MatchResponse]:
        query = select(Match).order_by(Match.date_time.desc())
        if league_id:
            query = query.where(Match.league_id == league_id)
        with self.store.session() as session:
            return [MatchResponse.model_validate(row) for row in session.scalars(query).all()]

    def get(self, match_id: str) -> MatchResponse:
        with self.store.session() as session:
            match = session.get(Match, match_id)
            if match is None:
                raise NotFoundError("Match not found")
            return MatchResponse.model_validate(match)

    def create(self, data: MatchCreate) -> MatchResponse:
        if data.team_a_id == data.team_b_id:
            raise ValidationError(SAME_TEAMS_MESSAGE)
        with self.store.session() as session:
            match = self._insert_with_fresh_id(
                session, lambda new_id: Match(id=new_id, **data.model_dump())
            )
            logger.info("Created match %s: %s vs %s", match.id, match.team_a_id, match.team_b_id)
            return MatchResponse.model_validate(match)

    def update(self, match_id: str, data: MatchUpdate) -> MatchResponse:
        """Apply only the fields present in ``data``.

        Explicit nulls (or empty strings) clear the nullable columns. The
        resulting team pair is re-checked before anything is written.
        """
        changes = data.changes()
        with self.store.session() as session:
            match = session.get(Match, match_id)
            if match is None:
                raise NotFoundError("Match not found")
            if not changes:
                raise ValidationError("No update fields provided")

            team_a_id = changes.get("team_a_id", match.team_a_id)
            team_b_id = changes.get("team_b_id", match.team_b_id)
            if team_a_id == team_b_id:
                raise ValidationError(SAME_TEAMS_MESSAGE)

            for field, value in changes.items():
                setattr(match, field, value)
            session.flush()
            session.refresh(match)
            logger.debug("Updated match %s fields: %s", match_id, sorted(changes))
            return MatchResponse.model_validate(match)

    def delete(self, match_id: str) -> None:
        """Delete the match and its scorecard."""
        with self.store.session() as session:
            result = session.execute(delete(Match).where(Match.id == match_id))
            if result.rowcount == 0:
                raise NotFoundError("Match not found")
        logger.info("Deleted match %s", match_id)
