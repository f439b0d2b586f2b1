"""Team repository."""

import logging
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import selectinload

from ..errors import NotFoundError
from ..models import Team
from ..schemas import TeamCreate, TeamResponse, TeamUpdate
from .base import Repository


logger = logging.getLogger(__name__)


class TeamRepository(Repository):
    """CRUD for teams. Projections carry the member player ids."""

    def list(self, league_id: Optional[str] = None) -> List[TeamResponse]:
        query = select(Team).options(selectinload(Team.memberships)).order_by(Team.name)
        if league_id:
            query = query.where(Team.league_id == league_id)
        with self.store.session() as session:
            return [TeamResponse.model_validate(row) for row in session.scalars(query).all()]

    def get(self, team_id: str) -> TeamResponse:
        with self.store.session() as session:
            team = session.get(Team, team_id, options=[selectinload(Team.memberships)])
            if team is None:
                raise NotFoundError("Team not found")
            return TeamResponse.model_validate(team)

    def create(self, data: TeamCreate) -> TeamResponse:
        with self.store.session() as session:
            team = self._insert_with_fresh_id(
                session, lambda new_id: Team(id=new_id, **data.model_dump())
            )
            logger.info("Created team %s (%s) in league %s", team.id, team.name, team.league_id)
            return TeamResponse.model_validate(team)

    def update(self, team_id: str, data: TeamUpdate) -> TeamResponse:
        """Replace every mutable field of the team, including its league."""
        with self.store.session() as session:
            team = session.get(Team, team_id)
            if team is None:
                raise NotFoundError("Team not found")
            for field, value in data.model_dump().items():
                setattr(team, field, value)
            session.flush()
            session.refresh(team)
            return TeamResponse.model_validate(team)

    def delete(self, team_id: str) -> None:
        """Delete the team with its matches and memberships."""
        with self.store.session() as session:
            result = session.execute(delete(Team).where(Team.id == team_id))
            if result.rowcount == 0:
                raise NotFoundError("Team not found")
        logger.info("Deleted team %s", team_id)
