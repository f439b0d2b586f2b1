"""Default admin account and sample fixture data.

Sample data is written in one transaction and skipped entirely when the
sample league already exists, so repeated runs are no-ops.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

from loguru import logger

from .config import AuthSettings
from .database import Store
from .models import League, Match, MatchStatus, Membership, Player, Team, TossDecision
from .repositories import UserRepository
from .services import ScorecardService


SAMPLE_LEAGUE_ID = "l1_sample_ipl"

LEAGUES = [
    {"id": SAMPLE_LEAGUE_ID, "name": "Sample Premier League", "location": "India",
     "start_date": datetime(2024, 3, 22, tzinfo=timezone.utc), "end_date": datetime(2024, 5, 26, tzinfo=timezone.utc)},
    {"id": "l2_sample_local", "name": "Sample Community Cup", "location": "Local Park",
     "start_date": datetime(2024, 6, 1, tzinfo=timezone.utc), "end_date": datetime(2024, 8, 31, tzinfo=timezone.utc)},
]

PLAYERS = [
    {"id": "p_sample_rohit", "first_name": "Rohit", "last_name": "Sharma (Sample)",
     "email": "rohit.sample@example.com", "profile_picture_url": "https://via.placeholder.com/150"},
    {"id": "p_sample_virat", "first_name": "Virat", "last_name": "Kohli (Sample)", "email": "virat.sample@example.com"},
    {"id": "p_sample_bumrah", "first_name": "Jasprit", "last_name": "Bumrah (Sample)", "email": "jasprit.sample@example.com"},
    {"id": "p_sample_local1", "first_name": "Alex", "last_name": "Local (Sample)", "email": "alex.local.sample@example.com"},
    {"id": "p_sample_local2", "first_name": "Sarah", "last_name": "Club (Sample)", "email": "sarah.club.sample@example.com"},
]

TEAMS = [
    {"id": "t_sample_mi", "name": "Mumbai Champions (Sample)", "league_id": SAMPLE_LEAGUE_ID,
     "captain_id": "p_sample_rohit", "logo_url": "https://via.placeholder.com/100?text=MI"},
    {"id": "t_sample_rcb", "name": "Bengaluru Royals (Sample)", "league_id": SAMPLE_LEAGUE_ID,
     "captain_id": "p_sample_virat", "logo_url": "https://via.placeholder.com/100?text=RCB"},
    {"id": "t_sample_lions", "name": "Community Lions (Sample)", "league_id": "l2_sample_local", "captain_id": "p_sample_local1"},
    {"id": "t_sample_tigers", "name": "Park Tigers (Sample)", "league_id": "l2_sample_local", "captain_id": "p_sample_local2"},
]

MEMBERSHIPS = [
    ("p_sample_rohit", "t_sample_mi"),
    ("p_sample_bumrah", "t_sample_mi"),
    ("p_sample_virat", "t_sample_rcb"),
    ("p_sample_local1", "t_sample_lions"),
    ("p_sample_local2", "t_sample_tigers"),
    ("p_sample_local2", "t_sample_lions"),
]

SAMPLE_SCORECARD = {
    "scorecard_id": "sc_m_sample_1",
    "match_id": "m_sample_1",
    "innings1": {
        "battingTeamId": "t_sample_mi", "bowlingTeamId": "t_sample_rcb", "score": 180, "wickets": 5, "oversPlayed": 20.0,
        "balls": [{"over": 0, "ballInOver": 1, "bowlerId": "p_sample_virat", "batsmanId": "p_sample_rohit",
                   "runsScored": 4, "extras": {}}],
    },
    "innings2": {
        "battingTeamId": "t_sample_rcb", "bowlingTeamId": "t_sample_mi", "score": 170, "wickets": 7, "oversPlayed": 20.0,
        "balls": [],
    },
}


def _sample_matches(now: datetime):
    return [
        {"id": "m_sample_1", "league_id": SAMPLE_LEAGUE_ID, "team_a_id": "t_sample_mi", "team_b_id": "t_sample_rcb",
         "date_time": now - timedelta(days=10), "venue": "Wankhede Stadium (Sample)", "overs": 20,
         "status": MatchStatus.COMPLETED, "result": "Mumbai Champions (Sample) won by 10 runs",
         "toss_won_by_team_id": "t_sample_mi", "chose_to": TossDecision.BAT},
        {"id": "m_sample_2", "league_id": SAMPLE_LEAGUE_ID, "team_a_id": "t_sample_mi", "team_b_id": "t_sample_rcb",
         "date_time": now + timedelta(days=7), "venue": "Chinnaswamy Stadium (Sample)", "overs": 20,
         "status": MatchStatus.SCHEDULED},
        {"id": "m_sample_3", "league_id": "l2_sample_local", "team_a_id": "t_sample_lions", "team_b_id": "t_sample_tigers",
         "date_time": now + timedelta(days=3), "venue": "Local Park A (Sample)", "overs": 15,
         "status": MatchStatus.SCHEDULED},
    ]


def ensure_default_admin(store: Store, auth: Optional[AuthSettings] = None) -> bool:
    """Create the default admin account if missing."""
    return UserRepository(store).ensure_default_admin(auth)


def seed_sample_data(store: Store, now: Optional[datetime] = None) -> bool:
    """Insert the sample leagues, teams, players, matches and scorecard.

    Returns False without writing anything when the sample league is present.
    """
    now = now or datetime.now(timezone.utc)
    with store.session() as session:
        if session.get(League, SAMPLE_LEAGUE_ID) is not None:
            logger.info("Sample data already present, skipping")
            return False

        session.add_all(League(**row) for row in LEAGUES)
        session.add_all(Player(**row) for row in PLAYERS)
        session.flush()
        session.add_all(Team(**row) for row in TEAMS)
        session.flush()
        session.add_all(Membership(player_id=p, team_id=t) for p, t in MEMBERSHIPS)
        session.add_all(Match(**row) for row in _sample_matches(now))
        session.flush()

        # Through the upsert so the match back-reference is set
        ScorecardService(store).upsert_in_session(session, **SAMPLE_SCORECARD)

    logger.info("Sample data seeded: {} leagues, {} teams, {} players", len(LEAGUES), len(TEAMS), len(PLAYERS))
    return True
