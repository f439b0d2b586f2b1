"""Player repository. Full player updates go through ``RosterService``."""

import logging
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import selectinload

from ..errors import NotFoundError
from ..models import Membership, Player
from ..schemas import PlayerCreate, PlayerResponse
from .base import Repository


logger = logging.getLogger(__name__)


class PlayerRepository(Repository):

    def list(self, team_id: Optional[str] = None) -> List[PlayerResponse]:
        """List players by name; filtered players still report all their teams."""
        query = (
            select(Player)
            .options(selectinload(Player.memberships))
            .order_by(Player.last_name, Player.first_name)
        )
        if team_id:
            query = query.join(Membership, Membership.player_id == Player.id).where(Membership.team_id == team_id)
        with self.store.session() as session:
            return [PlayerResponse.model_validate(row) for row in session.scalars(query).all()]

    def get(self, player_id: str) -> PlayerResponse:
        with self.store.session() as session:
            player = session.get(Player, player_id, options=[selectinload(Player.memberships)])
            if player is None:
                raise NotFoundError("Player not found")
            return PlayerResponse.model_validate(player)

    def create(self, data: PlayerCreate) -> PlayerResponse:
        """Insert the player and, when given, its first membership atomically."""
        fields = data.model_dump(exclude={"team_id"})
        with self.store.session() as session:
            player = self._insert_with_fresh_id(session, lambda new_id: Player(id=new_id, **fields))
            if data.team_id:
                player.memberships.append(Membership(player_id=player.id, team_id=data.team_id))
                session.flush()
            logger.info("Created player %s (%s %s)", player.id, player.first_name, player.last_name)
            return PlayerResponse.model_validate(player)

    def delete(self, player_id: str) -> None:
        """Delete the player; memberships go with it and captaincies are cleared."""
        with self.store.session() as session:
            result = session.execute(delete(Player).where(Player.id == player_id))
            if result.rowcount == 0:
                raise NotFoundError("Player not found")
        logger.info("Deleted player %s", player_id)
