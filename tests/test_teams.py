"""Tests for the team repository."""
from __future__ import annotations

import pytest

from conftest import utc
from cricket_league.errors import ConflictError, NotFoundError, ReferentialError
from cricket_league.schemas import LeagueCreate, MatchCreate, PlayerCreate, TeamCreate, TeamUpdate, parse


def test_duplicate_team_name_in_league_conflicts(teams, league):
    first = teams.create(TeamCreate(name="X", league_id=league.id))

    with pytest.raises(ConflictError) as exc:
        teams.create(TeamCreate(name="X", league_id=league.id))

    assert exc.value.message == "Team name already exists in this league."
    assert [t.id for t in teams.list(league.id) if t.name == "X"] == [first.id]


def test_same_team_name_allowed_in_other_league(teams, leagues, league):
    other = leagues.create(LeagueCreate(name="L2", start_date=utc(2024, 1, 1), end_date=utc(2024, 2, 1)))
    teams.create(TeamCreate(name="X", league_id=league.id))
    teams.create(TeamCreate(name="X", league_id=other.id))
    assert len(teams.list()) == 2
    assert len(teams.list(other.id)) == 1


def test_unknown_league_is_referential_error(teams):
    with pytest.raises(ReferentialError):
        teams.create(TeamCreate(name="X", league_id="missing"))


def test_team_projection_lists_members(teams, players, league):
    team = teams.create(TeamCreate(name="Tigers", league_id=league.id))
    assert team.player_ids == []
    a = players.create(PlayerCreate(first_name="A", last_name="B", team_id=team.id))
    c = players.create(PlayerCreate(first_name="C", last_name="D", team_id=team.id))

    assert sorted(teams.get(team.id).player_ids) == sorted([a.id, c.id])


def test_update_is_whole_row_and_blanks_clear(teams, player, league):
    team = teams.create(TeamCreate(name="Tigers", league_id=league.id, captain_id=player.id, logo_url="http://logo"))
    updated = teams.update(team.id, parse(TeamUpdate, {
        "name": "Tigers II", "leagueId": league.id, "captainId": "", "logoUrl": "",
    }))
    assert updated.name == "Tigers II"
    assert updated.captain_id is None
    assert updated.logo_url is None


def test_update_unknown_team(teams, league):
    with pytest.raises(NotFoundError):
        teams.update("missing", TeamUpdate(name="X", league_id=league.id))


def test_deleting_captain_clears_captaincy(teams, players, player, league):
    team = teams.create(TeamCreate(name="Tigers", league_id=league.id, captain_id=player.id))
    players.delete(player.id)
    assert teams.get(team.id).captain_id is None


def test_delete_team_cascades_matches_and_memberships(teams, players, matches, league, two_teams):
    tigers, lions = two_teams
    matches.create(MatchCreate(league_id=league.id, team_a_id=tigers.id, team_b_id=lions.id, date_time=utc(2024, 1, 5)))
    member = players.create(PlayerCreate(first_name="A", last_name="B", team_id=tigers.id))

    teams.delete(tigers.id)

    assert matches.list() == []
    assert players.get(member.id).team_ids == []
    with pytest.raises(NotFoundError):
        teams.delete(tigers.id)
