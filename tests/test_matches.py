"""Tests for the match repository, including sparse updates."""
from __future__ import annotations

import pytest

from conftest import utc
from cricket_league.errors import NotFoundError, ReferentialError, ValidationError
from cricket_league.models import MatchStatus, TossDecision
from cricket_league.schemas import MatchCreate, MatchUpdate, TeamCreate, parse


def test_create_applies_defaults(match):
    assert match.overs == 15
    assert match.status == MatchStatus.SCHEDULED
    assert match.venue is None
    assert match.scorecard_id is None
    assert match.date_time == utc(2024, 1, 10, 14)


def test_create_parses_wire_format(matches, league, two_teams):
    tigers, lions = two_teams
    created = matches.create(parse(MatchCreate, {
        "leagueId": league.id, "teamAId": tigers.id, "teamBId": lions.id,
        "dateTime": "2024-01-12T09:30:00+05:30", "venue": "Oval", "overs": "20", "status": "",
    }))
    assert created.overs == 20
    assert created.status == MatchStatus.SCHEDULED
    assert created.date_time == utc(2024, 1, 12, 4)
    assert matches.get(created.id) == created


def test_same_teams_rejected_and_nothing_persisted(matches, league, two_teams):
    tigers, _ = two_teams
    with pytest.raises(ValidationError) as exc:
        matches.create(MatchCreate(league_id=league.id, team_a_id=tigers.id, team_b_id=tigers.id, date_time=utc(2024, 1, 1)))
    assert exc.value.message == "Team A and Team B cannot be the same."
    assert matches.list() == []


def test_unknown_team_is_referential_error(matches, league, two_teams):
    tigers, _ = two_teams
    with pytest.raises(ReferentialError):
        matches.create(MatchCreate(league_id=league.id, team_a_id=tigers.id, team_b_id="missing", date_time=utc(2024, 1, 1)))


def test_list_orders_by_date_desc_and_filters_by_league(matches, teams, leagues, league, two_teams, match):
    tigers, lions = two_teams
    later = matches.create(MatchCreate(league_id=league.id, team_a_id=lions.id, team_b_id=tigers.id, date_time=utc(2024, 1, 20)))
    assert [m.id for m in matches.list()] == [later.id, match.id]
    assert matches.list("other-league") == []
    assert len(matches.list(league.id)) == 2


def test_sparse_update_changes_only_given_fields(matches, match):
    updated = matches.update(match.id, parse(MatchUpdate, {"venue": "Lord's", "umpire1": "Dar"}))
    assert updated.venue == "Lord's"
    assert updated.umpire1 == "Dar"
    assert updated.overs == match.overs
    assert updated.team_a_id == match.team_a_id
    assert updated.date_time == match.date_time


def test_empty_string_clears_nullable_fields(matches, match, two_teams):
    tigers, _ = two_teams
    matches.update(match.id, parse(MatchUpdate, {
        "tossWonByTeamId": tigers.id, "choseTo": "Bowl", "umpire2": "Taufel", "result": "Tigers won",
    }))
    updated = matches.update(match.id, parse(MatchUpdate, {
        "tossWonByTeamId": "", "choseTo": "", "umpire2": "", "result": None,
    }))
    assert updated.toss_won_by_team_id is None
    assert updated.chose_to is None
    assert updated.umpire2 is None
    assert updated.result is None


def test_status_accepts_any_transition(matches, match):
    done = matches.update(match.id, MatchUpdate(status=MatchStatus.COMPLETED, chose_to=TossDecision.BAT))
    assert done.status == MatchStatus.COMPLETED
    back = matches.update(match.id, MatchUpdate(status=MatchStatus.SCHEDULED))
    assert back.status == MatchStatus.SCHEDULED
    assert back.chose_to == TossDecision.BAT


def test_update_without_fields_fails(matches, match):
    with pytest.raises(ValidationError) as exc:
        matches.update(match.id, MatchUpdate())
    assert exc.value.message == "No update fields provided"


def test_update_rechecks_merged_team_pair(matches, match):
    with pytest.raises(ValidationError):
        matches.update(match.id, MatchUpdate(team_b_id=match.team_a_id))
    assert matches.get(match.id).team_b_id == match.team_b_id


def test_required_fields_cannot_be_cleared():
    with pytest.raises(ValidationError):
        parse(MatchUpdate, {"dateTime": None})


def test_update_and_delete_unknown_match(matches):
    with pytest.raises(NotFoundError):
        matches.update("missing", MatchUpdate(venue="x"))
    with pytest.raises(NotFoundError):
        matches.delete("missing")
    with pytest.raises(NotFoundError):
        matches.get("missing")


def test_toss_winner_need_not_be_playing(matches, teams, league, match):
    outsider = teams.create(TeamCreate(name="Outsiders", league_id=league.id))
    updated = matches.update(match.id, MatchUpdate(toss_won_by_team_id=outsider.id))
    assert updated.toss_won_by_team_id == outsider.id
