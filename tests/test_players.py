"""Tests for the player repository."""
from __future__ import annotations

import pytest

from cricket_league.errors import ConflictError, NotFoundError, ReferentialError, ValidationError
from cricket_league.schemas import PlayerCreate, PlayerFields, parse


def test_create_player_without_team(players):
    created = players.create(PlayerCreate(first_name="Rohit", last_name="Sharma", email=""))
    assert created.team_ids == []
    assert created.email is None
    assert players.get(created.id) == created


def test_create_player_with_initial_team(players, teams, two_teams):
    tigers, _ = two_teams
    created = players.create(PlayerCreate(first_name="A", last_name="B", team_id=tigers.id))
    assert created.team_ids == [tigers.id]
    assert teams.get(tigers.id).player_ids == [created.id]


def test_unknown_initial_team_rolls_back_player(players):
    with pytest.raises(ReferentialError):
        players.create(PlayerCreate(first_name="A", last_name="B", team_id="missing"))
    assert players.list() == []


def test_duplicate_email_conflicts(players):
    players.create(PlayerCreate(first_name="A", last_name="B", email="a@example.com"))
    with pytest.raises(ConflictError) as exc:
        players.create(PlayerCreate(first_name="C", last_name="D", email="a@example.com"))
    assert exc.value.message == "Email already exists for another player."


def test_players_without_email_do_not_conflict(players):
    players.create(PlayerCreate(first_name="A", last_name="B"))
    players.create(PlayerCreate(first_name="C", last_name="D"))
    assert len(players.list()) == 2


def test_names_are_required():
    with pytest.raises(ValidationError) as exc:
        parse(PlayerFields, {"firstName": "A"})
    assert "lastName" in exc.value.message


def test_list_orders_by_last_then_first_name(players):
    players.create(PlayerCreate(first_name="Zed", last_name="Adams"))
    players.create(PlayerCreate(first_name="Amy", last_name="Adams"))
    players.create(PlayerCreate(first_name="Bob", last_name="Brown"))
    assert [(p.first_name, p.last_name) for p in players.list()] == [
        ("Amy", "Adams"), ("Zed", "Adams"), ("Bob", "Brown"),
    ]


def test_team_filter_reports_all_teams_of_each_player(players, roster, two_teams):
    tigers, lions = two_teams
    both = players.create(PlayerCreate(first_name="A", last_name="Both", team_id=tigers.id))
    roster.set_player_roster(both.id, PlayerFields(first_name="A", last_name="Both"), [tigers.id, lions.id])
    players.create(PlayerCreate(first_name="L", last_name="Lion", team_id=lions.id))

    filtered = players.list(tigers.id)

    assert [p.id for p in filtered] == [both.id]
    assert sorted(filtered[0].team_ids) == sorted([tigers.id, lions.id])


def test_delete_unknown_player(players):
    with pytest.raises(NotFoundError):
        players.delete("missing")
