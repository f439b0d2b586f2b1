"""Shared fixtures: a fresh SQLite store per test and repositories bound to it."""
from __future__ import annotations

from datetime import datetime, timezone

import pytest

from cricket_league.config import DatabaseSettings
from cricket_league.database import Store
from cricket_league.repositories import (
    LeagueRepository,
    MatchRepository,
    PlayerRepository,
    ScorecardRepository,
    TeamRepository,
    UserRepository,
)
from cricket_league.schemas import LeagueCreate, MatchCreate, PlayerCreate, TeamCreate
from cricket_league.services import RosterService, ScorecardService


def utc(year: int, month: int, day: int, hour: int = 0) -> datetime:
    return datetime(year, month, day, hour, tzinfo=timezone.utc)


@pytest.fixture
def store(tmp_path):
    """Temporary SQLite database with the schema created."""
    s = Store(DatabaseSettings(url=f"sqlite:///{tmp_path / 'league.db'}"))
    s.ensure_schema()
    try:
        yield s
    finally:
        s.dispose()


@pytest.fixture
def leagues(store):
    return LeagueRepository(store)


@pytest.fixture
def teams(store):
    return TeamRepository(store)


@pytest.fixture
def players(store):
    return PlayerRepository(store)


@pytest.fixture
def matches(store):
    return MatchRepository(store)


@pytest.fixture
def scorecards(store):
    return ScorecardRepository(store)


@pytest.fixture
def users(store):
    return UserRepository(store)


@pytest.fixture
def roster(store):
    return RosterService(store)


@pytest.fixture
def upserts(store):
    return ScorecardService(store)


@pytest.fixture
def league(leagues):
    return leagues.create(LeagueCreate(name="L1", start_date=utc(2024, 1, 1), end_date=utc(2024, 2, 1)))


@pytest.fixture
def two_teams(teams, league):
    tigers = teams.create(TeamCreate(name="Tigers", league_id=league.id))
    lions = teams.create(TeamCreate(name="Lions", league_id=league.id))
    return tigers, lions


@pytest.fixture
def player(players):
    return players.create(PlayerCreate(first_name="A", last_name="B"))


@pytest.fixture
def match(matches, league, two_teams):
    tigers, lions = two_teams
    return matches.create(
        MatchCreate(league_id=league.id, team_a_id=tigers.id, team_b_id=lions.id, date_time=utc(2024, 1, 10, 14))
    )
