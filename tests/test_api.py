"""
API integration tests.
Uses TestClient to avoid starting a server.
Requires: pip install httpx (for TestClient)
"""
from __future__ import annotations

import pytest

try:
    from fastapi.testclient import TestClient
    HAS_HTTPX = True
except (ImportError, RuntimeError):
    HAS_HTTPX = False

pytestmark = pytest.mark.skipif(not HAS_HTTPX, reason="httpx required for TestClient")

from cricket_league.api import create_app
from cricket_league.config import Settings
from cricket_league.errors import StoreUnavailableError

INNINGS = {"battingTeamId": "a", "bowlingTeamId": "b", "score": 99, "wickets": 3, "oversPlayed": 10.2, "balls": []}


@pytest.fixture
def client(store):
    app = create_app(store=store, settings=Settings(seed_sample_data=False))
    with TestClient(app) as c:
        yield c


@pytest.fixture
def league_id(client):
    resp = client.post("/api/leagues", json={
        "name": "L1", "startDate": "2024-01-01T00:00:00Z", "endDate": "2024-02-01T00:00:00Z",
    })
    assert resp.status_code == 201
    return resp.json()["id"]


@pytest.fixture
def team_ids(client, league_id):
    ids = []
    for name in ("Tigers", "Lions"):
        resp = client.post("/api/teams", json={"name": name, "leagueId": league_id})
        assert resp.status_code == 201
        ids.append(resp.json()["id"])
    return ids


@pytest.fixture
def match_id(client, league_id, team_ids):
    resp = client.post("/api/matches", json={
        "leagueId": league_id, "teamAId": team_ids[0], "teamBId": team_ids[1], "dateTime": "2024-01-10T14:00:00Z",
    })
    assert resp.status_code == 201
    return resp.json()["id"]


def test_login_with_default_admin(client):
    resp = client.post("/api/login", json={"username": "admin", "password": "password"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["username"] == "admin"
    assert data["role"] == "ADMIN"
    assert "profilePictureUrl" in data
    assert "password" not in data
    assert client.get(f"/api/users/{data['id']}").json() == data


def test_login_with_bad_credentials(client):
    resp = client.post("/api/login", json={"username": "admin", "password": "nope"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Invalid credentials"}


def test_unknown_user_is_404(client):
    resp = client.get("/api/users/missing")
    assert resp.status_code == 404
    assert resp.json() == {"error": "User not found"}


def test_create_league_uses_camel_case(client):
    resp = client.post("/api/leagues", json={
        "name": "Cup", "location": "Oval", "startDate": "2024-01-01T00:00:00Z", "endDate": "2024-02-01T00:00:00Z",
    })
    assert resp.status_code == 201
    data = resp.json()
    assert data["teams"] == []
    assert data["startDate"].startswith("2024-01-01T00:00:00")
    assert set(data) == {"id", "name", "location", "startDate", "endDate", "teams"}


def test_create_league_missing_fields_is_400(client):
    resp = client.post("/api/leagues", json={"name": "Cup"})
    assert resp.status_code == 400
    assert resp.json()["error"].startswith("Missing required fields")


def test_duplicate_league_is_409(client, league_id):
    resp = client.post("/api/leagues", json={
        "name": "L1", "startDate": "2024-01-01T00:00:00Z", "endDate": "2024-02-01T00:00:00Z",
    })
    assert resp.status_code == 409
    assert resp.json() == {"error": "League name already exists."}


def test_list_leagues_nests_teams(client, league_id, team_ids):
    leagues = client.get("/api/leagues").json()
    assert [l["id"] for l in leagues] == [league_id]
    assert [t["name"] for t in leagues[0]["teams"]] == ["Lions", "Tigers"]
    assert leagues[0]["teams"][0]["leagueId"] == league_id


def test_update_and_delete_league(client, league_id):
    resp = client.put(f"/api/leagues/{league_id}", json={
        "name": "L1b", "startDate": "2024-01-01T00:00:00Z", "endDate": "2024-03-01T00:00:00Z",
    })
    assert resp.status_code == 200
    assert resp.json()["name"] == "L1b"
    assert client.delete(f"/api/leagues/{league_id}").status_code == 204
    assert client.delete(f"/api/leagues/{league_id}").status_code == 404


def test_duplicate_team_is_409(client, league_id, team_ids):
    resp = client.post("/api/teams", json={"name": "Tigers", "leagueId": league_id})
    assert resp.status_code == 409
    assert len(client.get(f"/api/teams?leagueId={league_id}").json()) == 2


def test_roster_scenario(client, league_id, team_ids):
    tigers = team_ids[0]
    resp = client.post("/api/players", json={"firstName": "A", "lastName": "B"})
    assert resp.status_code == 201
    player_id = resp.json()["id"]

    resp = client.put(f"/api/players/{player_id}", json={"firstName": "A", "lastName": "B", "teamIds": [tigers, ""]})
    assert resp.status_code == 200
    assert resp.json()["teamIds"] == [tigers]

    listed = client.get(f"/api/players?teamId={tigers}").json()
    assert [(p["id"], p["firstName"], p["lastName"], p["teamIds"]) for p in listed] == [(player_id, "A", "B", [tigers])]
    assert client.get(f"/api/teams?leagueId={league_id}").json()[1]["playerIds"] == [player_id]


def test_player_errors(client):
    assert client.put("/api/players/missing", json={"firstName": "A", "lastName": "B", "teamIds": []}).status_code == 404
    assert client.post("/api/players", json={"firstName": "A"}).status_code == 400
    client.post("/api/players", json={"firstName": "A", "lastName": "B", "email": "a@example.com"})
    resp = client.post("/api/players", json={"firstName": "C", "lastName": "D", "email": "a@example.com"})
    assert resp.status_code == 409
    assert resp.json() == {"error": "Email already exists for another player."}
    assert client.delete("/api/players/missing").status_code == 404


def test_same_team_match_is_400(client, league_id, team_ids):
    resp = client.post("/api/matches", json={
        "leagueId": league_id, "teamAId": team_ids[0], "teamBId": team_ids[0], "dateTime": "2024-01-10T14:00:00Z",
    })
    assert resp.status_code == 400
    assert resp.json() == {"error": "Team A and Team B cannot be the same."}
    assert client.get("/api/matches").json() == []


def test_match_sparse_update(client, match_id):
    resp = client.put(f"/api/matches/{match_id}", json={"status": "Live", "umpire1": ""})
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "Live"
    assert data["umpire1"] is None
    assert data["overs"] == 15

    resp = client.put(f"/api/matches/{match_id}", json={})
    assert resp.status_code == 400
    assert resp.json() == {"error": "No update fields provided"}

    assert client.put("/api/matches/missing", json={"status": "Live"}).status_code == 404
    assert client.get(f"/api/matches/{match_id}").json()["status"] == "Live"


def test_scorecard_upsert_statuses(client, match_id):
    assert client.get(f"/api/scorecards/{match_id}").json() is None

    resp = client.put("/api/scorecards/sc1", json={"matchId": match_id, "innings1": INNINGS, "innings2": None})
    assert resp.status_code == 201
    assert resp.json()["innings1"] == INNINGS
    assert client.get(f"/api/matches/{match_id}").json()["scorecardId"] == "sc1"

    resp = client.put("/api/scorecards/sc1", json={"matchId": match_id, "innings1": INNINGS, "innings2": INNINGS})
    assert resp.status_code == 200
    assert client.get(f"/api/scorecards/{match_id}").json()["innings2"] == INNINGS


def test_scorecard_upsert_errors(client):
    resp = client.put("/api/scorecards/sc1", json={"innings1": INNINGS})
    assert resp.status_code == 400
    resp = client.put("/api/scorecards/sc1", json={"matchId": "nope"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Match with ID nope does not exist."}


def test_second_scorecard_for_match_is_bad_request(client, match_id):
    assert client.put("/api/scorecards/sc1", json={"matchId": match_id, "innings1": INNINGS}).status_code == 201
    resp = client.put("/api/scorecards/sc2", json={"matchId": match_id, "innings1": INNINGS})
    assert resp.status_code == 400
    assert resp.json() == {"error": "A scorecard already exists for this match."}


def test_unavailable_store_returns_503_with_retry_after(client, monkeypatch):
    def unavailable():
        raise StoreUnavailableError()

    monkeypatch.setattr(client.app.state.registry.leagues, "list", unavailable)
    resp = client.get("/api/leagues")
    assert resp.status_code == 503
    assert resp.headers["Retry-After"] == "1"
    assert "error" in resp.json()


def test_delete_match(client, match_id):
    assert client.delete(f"/api/matches/{match_id}").status_code == 204
    assert client.get(f"/api/matches/{match_id}").status_code == 404


def test_cors_headers(client):
    resp = client.get("/api/leagues", headers={"Origin": "http://example.com"})
    assert resp.headers["access-control-allow-origin"] == "*"
