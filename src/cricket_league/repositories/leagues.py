"""League repository."""

import logging
from typing import List

from sqlalchemy import delete, select
from sqlalchemy.orm import selectinload

from ..errors import NotFoundError
from ..models import League
from ..schemas import LeagueCreate, LeagueResponse, LeagueUpdate
from .base import Repository


logger = logging.getLogger(__name__)


class LeagueRepository(Repository):
    """CRUD for leagues. Listings carry each league's teams."""

    def list(self) -> List[LeagueResponse]:
        with self.store.session() as session:
            rows = session.scalars(
                select(League)
                .options(selectinload(League.teams))
                .order_by(League.start_date.desc())
            ).all()
            return [LeagueResponse.model_validate(row) for row in rows]

    def get(self, league_id: str) -> LeagueResponse:
        with self.store.session() as session:
            league = session.get(League, league_id, options=[selectinload(League.teams)])
            if league is None:
                raise NotFoundError("League not found")
            return LeagueResponse.model_validate(league)

    def create(self, data: LeagueCreate) -> LeagueResponse:
        with self.store.session() as session:
            league = self._insert_with_fresh_id(
                session, lambda new_id: League(id=new_id, **data.model_dump())
            )
            logger.info("Created league %s (%s)", league.id, league.name)
            return LeagueResponse.model_validate(league)

    def update(self, league_id: str, data: LeagueUpdate) -> LeagueResponse:
        """Replace every mutable field of the league."""
        with self.store.session() as session:
            league = session.get(League, league_id)
            if league is None:
                raise NotFoundError("League not found")
            for field, value in data.model_dump().items():
                setattr(league, field, value)
            session.flush()
            session.refresh(league)
            return LeagueResponse.model_validate(league)

    def delete(self, league_id: str) -> None:
        """Delete the league; its teams and matches go with it."""
        with self.store.session() as session:
            result = session.execute(delete(League).where(League.id == league_id))
            if result.rowcount == 0:
                raise NotFoundError("League not found")
        logger.info("Deleted league %s", league_id)
