"""Error taxonomy for the cricket league core and translation of store errors.

Repositories and services raise only ``LeagueError`` subclasses. Raw database
error text is logged but never carried in ``message``, which is the stable,
caller-facing text.
"""

from __future__ import annotations

import re
from typing import Optional

from sqlalchemy.exc import DBAPIError, IntegrityError, InterfaceError, OperationalError


class LeagueError(Exception):
    """Base class for all typed failures raised by the core."""

    status_code = 500
    default_message = "Internal error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(LeagueError):
    """A required field is missing or malformed."""

    status_code = 400
    default_message = "Invalid request"


class NotFoundError(LeagueError):
    """A lookup returned nothing or a mutation affected zero rows."""

    status_code = 404
    default_message = "Not found"


class ConflictError(LeagueError):
    """A unique constraint (league name, team name in league, player email) was violated."""

    status_code = 409
    default_message = "Conflict"


class ReferentialError(LeagueError):
    """A foreign key points at a row that does not exist."""

    status_code = 400
    default_message = "Referenced entity does not exist"


class InvalidCredentialsError(LeagueError):
    status_code = 401
    default_message = "Invalid credentials"


class StoreError(LeagueError):
    """Unclassified failure of the backing store."""

    status_code = 500
    default_message = "Database error"


class StoreUnavailableError(StoreError):
    """Connection or transport failure against the backing store."""

    status_code = 503
    default_message = "Database unavailable"


class IdCollisionError(StoreError):
    """Primary-key violation on insert; retry with a freshly allocated id."""

    default_message = "Identifier collision"


# Unique constraints that are real domain conflicts, keyed by table
_CONFLICT_MESSAGES = {
    "leagues": "League name already exists.",
    "teams": "Team name already exists in this league.",
    "players": "Email already exists for another player.",
    "users": "Username already exists.",
    "matches": "Scorecard is already linked to another match.",
    "scorecards": "A scorecard already exists for this match.",
}

_SQLITE_UNIQUE = re.compile(r"UNIQUE constraint failed: ([\w., ]+)")

TEAM_NAME_CONSTRAINT = "uq_teams_name_league"
DISTINCT_TEAMS_CONSTRAINT = "ck_matches_distinct_teams"
SAME_TEAMS_MESSAGE = "Team A and Team B cannot be the same."


def _sqlstate(exc: DBAPIError) -> Optional[str]:
    orig = exc.orig
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def _constraint_name(exc: DBAPIError) -> Optional[str]:
    diag = getattr(exc.orig, "diag", None)
    return getattr(diag, "constraint_name", None)


def _translate_unique(exc: IntegrityError) -> LeagueError:
    # PostgreSQL reports the constraint name, SQLite only the columns
    constraint = _constraint_name(exc)
    if constraint:
        if constraint.endswith("_pkey"):
            return IdCollisionError()
        if constraint == TEAM_NAME_CONSTRAINT:
            return ConflictError(_CONFLICT_MESSAGES["teams"])
        return ConflictError(_CONFLICT_MESSAGES.get(constraint.split("_", 1)[0]))

    found = _SQLITE_UNIQUE.search(str(exc.orig))
    columns = [c.strip() for c in found.group(1).split(",")] if found else []
    if len(columns) == 1 and columns[0].endswith(".id"):
        return IdCollisionError()
    table = columns[0].split(".", 1)[0] if columns else ""
    return ConflictError(_CONFLICT_MESSAGES.get(table))


def translate_store_error(exc: DBAPIError) -> LeagueError:
    """Map a SQLAlchemy/DBAPI error onto the error taxonomy."""
    text = str(exc.orig)
    state = _sqlstate(exc) or ""

    if isinstance(exc, IntegrityError):
        if state == "23505" or "UNIQUE constraint failed" in text:
            return _translate_unique(exc)
        if state == "23503" or "FOREIGN KEY constraint failed" in text:
            return ReferentialError()
        if state == "23514" or "CHECK constraint failed" in text:
            if DISTINCT_TEAMS_CONSTRAINT in text or _constraint_name(exc) == DISTINCT_TEAMS_CONSTRAINT:
                return ValidationError(SAME_TEAMS_MESSAGE)
            return ValidationError()
        if state == "23502" or "NOT NULL constraint failed" in text:
            return ValidationError("Missing required fields")
        return StoreError()

    if exc.connection_invalidated or isinstance(exc, (OperationalError, InterfaceError)):
        return StoreUnavailableError()
    return StoreError()
