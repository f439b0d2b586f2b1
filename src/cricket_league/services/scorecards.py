"""Create-or-update of a match scorecard with repair of the match back-reference.

A new scorecard is inserted and the owning match's ``scorecard_id`` is pointed
at it. With ``strict_backref`` (the default) both writes share one transaction.
Otherwise the back-reference write runs in a savepoint and a failure there is
only logged, leaving the scorecard saved without the link.

Updating an existing scorecard may move it to another match; the back-reference
is not touched in that case and ``qa.integrity`` reports the mismatch.
"""

from __future__ import annotations

from typing import Any, Tuple

from loguru import logger
from sqlalchemy import update
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.orm import Session

from ..database import Store
from ..errors import ConflictError, ReferentialError, ValidationError, translate_store_error
from ..models import Match, Scorecard
from ..schemas import ScorecardResponse


class ScorecardService:
    """Scorecard upsert as one unit of work."""

    def __init__(self, store: Store, strict_backref: bool = True):
        self.store = store
        self.strict_backref = strict_backref

    def upsert_scorecard(
        self,
        scorecard_id: str,
        match_id: str,
        innings1: Any = None,
        innings2: Any = None,
    ) -> Tuple[ScorecardResponse, bool]:
        """Returns the stored scorecard and whether it was newly created."""
        with self.store.session() as session:
            return self.upsert_in_session(session, scorecard_id, match_id, innings1, innings2)

    def upsert_in_session(
        self,
        session: Session,
        scorecard_id: str,
        match_id: str,
        innings1: Any = None,
        innings2: Any = None,
    ) -> Tuple[ScorecardResponse, bool]:
        """Same as ``upsert_scorecard`` inside a caller-owned transaction."""
        if not match_id:
            raise ValidationError("Match ID is required for scorecard")
        if not scorecard_id:
            raise ValidationError("Scorecard ID is required")

        scorecard = session.get(Scorecard, scorecard_id)
        created = scorecard is None
        if created:
            scorecard = Scorecard(id=scorecard_id, match_id=match_id, innings1=innings1, innings2=innings2)
            session.add(scorecard)
        else:
            scorecard.match_id = match_id
            scorecard.innings1 = innings1
            scorecard.innings2 = innings2
        self._flush(session, match_id)

        if created:
            self._link_match(session, match_id, scorecard_id)

        logger.info(
            "Scorecard {} for match {} {}",
            scorecard_id, match_id, "created" if created else "updated",
        )
        return ScorecardResponse.model_validate(scorecard), created

    @staticmethod
    def _flush(session: Session, match_id: str) -> None:
        try:
            session.flush()
        except IntegrityError as exc:
            logger.error("Store error: {}", exc.orig)
            error = translate_store_error(exc)
            if isinstance(error, ReferentialError):
                raise ReferentialError(f"Match with ID {match_id} does not exist.") from exc
            if isinstance(error, ConflictError):
                # One scorecard per match; reported as a bad request
                raise ValidationError(error.message) from exc
            raise error from exc

    def _link_match(self, session: Session, match_id: str, scorecard_id: str) -> None:
        stmt = update(Match).where(Match.id == match_id).values(scorecard_id=scorecard_id)
        if self.strict_backref:
            session.execute(stmt)
            return
        try:
            with session.begin_nested():
                session.execute(stmt)
        except DBAPIError as exc:
            logger.warning(
                "Scorecard {} saved but match {} back-reference not updated: {}",
                scorecard_id, match_id, exc.orig,
            )
