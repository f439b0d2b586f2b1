"""Replace-all roster update for a player.

The player's fields and its complete set of team memberships are written in
one transaction: any failure (unknown player, unknown team, duplicate email)
leaves the previous fields and roster untouched.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from loguru import logger
from sqlalchemy import delete
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

from ..database import Store
from ..errors import NotFoundError
from ..models import Membership, Player
from ..schemas import PlayerFields, PlayerResponse


def _clean_team_ids(team_ids: Iterable[Optional[str]]) -> List[str]:
    """Drop null/empty entries and duplicates, keeping request order."""
    return list(dict.fromkeys(t for t in team_ids if t))


def _insert_memberships(session: Session, player_id: str, team_ids: List[str]) -> None:
    if not team_ids:
        return
    rows = [{"player_id": player_id, "team_id": team_id} for team_id in team_ids]
    insert = pg_insert if session.get_bind().dialect.name == "postgresql" else sqlite_insert
    # Concurrent writers may insert the same pair; a duplicate is a no-op
    session.execute(insert(Membership).values(rows).on_conflict_do_nothing())


class RosterService:
    """Atomic player update with full roster replacement."""

    def __init__(self, store: Store):
        self.store = store

    def set_player_roster(
        self,
        player_id: str,
        fields: PlayerFields,
        team_ids: Iterable[Optional[str]],
    ) -> PlayerResponse:
        wanted = _clean_team_ids(team_ids)

        with self.store.session() as session:
            player = session.get(Player, player_id)
            if player is None:
                raise NotFoundError("Player not found")

            for field, value in fields.model_dump().items():
                setattr(player, field, value)
            session.flush()

            session.execute(delete(Membership).where(Membership.player_id == player_id))
            _insert_memberships(session, player_id, wanted)

            logger.info("Player {} roster set to {} team(s)", player_id, len(wanted))
            return PlayerResponse(id=player.id, team_ids=wanted, **fields.model_dump())
