"""
REST API for the cricket league.
Thin wrappers around the repositories and the two transactional services.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, List, Optional

from fastapi import Depends, FastAPI, Query, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import Settings, get_settings
from .database import Store
from .errors import LeagueError, StoreUnavailableError
from .repositories import (
    LeagueRepository,
    MatchRepository,
    PlayerRepository,
    ScorecardRepository,
    TeamRepository,
    UserRepository,
)
from .schemas import (
    LeagueCreate,
    LeagueResponse,
    LeagueUpdate,
    LoginRequest,
    MatchCreate,
    MatchResponse,
    MatchUpdate,
    PlayerCreate,
    PlayerResponse,
    PlayerUpdate,
    ScorecardResponse,
    ScorecardUpsert,
    TeamCreate,
    TeamResponse,
    TeamUpdate,
    UserResponse,
)
from .schemas.common import describe_errors
from .seed import seed_sample_data
from .services import RosterService, ScorecardService


logger = logging.getLogger(__name__)

# Seconds a client should wait before retrying a 503
RETRY_AFTER_SECONDS = 1


class Registry:
    """Repositories and services bound to one store, shared by all requests."""

    def __init__(self, store: Store, settings: Settings):
        attempts = settings.ids.max_attempts
        self.users = UserRepository(store, max_attempts=attempts)
        self.leagues = LeagueRepository(store, max_attempts=attempts)
        self.teams = TeamRepository(store, max_attempts=attempts)
        self.players = PlayerRepository(store, max_attempts=attempts)
        self.matches = MatchRepository(store, max_attempts=attempts)
        self.scorecards = ScorecardRepository(store)
        self.roster = RosterService(store)
        self.scorecard_upserts = ScorecardService(store, strict_backref=settings.scorecards.strict_backref)


def get_registry(request: Request) -> Registry:
    return request.app.state.registry


def create_app(store: Optional[Store] = None, settings: Optional[Settings] = None) -> FastAPI:
    """Build the application. A store passed in is used as-is and not disposed."""
    settings = settings or get_settings()

    # ---------- Lifespan ----------
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        owned = store is None
        active = store or Store.from_settings(settings.database)
        # Schema failures abort startup
        active.ensure_schema()
        registry = Registry(active, settings)
        active.retrying()(registry.users.ensure_default_admin, settings.auth)
        if settings.seed_sample_data:
            seed_sample_data(active)
        app.state.store = active
        app.state.registry = registry
        try:
            yield
        finally:
            if owned:
                active.dispose()

    app = FastAPI(
        title="Cricket League API",
        description="Leagues, teams, players, matches and scorecards",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        response = await call_next(request)
        logger.info("%s %s -> %s", request.method, request.url.path, response.status_code)
        return response

    # ---------- Errors ----------
    @app.exception_handler(LeagueError)
    async def league_error_handler(request: Request, exc: LeagueError) -> JSONResponse:
        headers = None
        if isinstance(exc, StoreUnavailableError):
            headers = {"Retry-After": str(RETRY_AFTER_SECONDS)}
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message}, headers=headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": describe_errors(exc)})

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    _register_routes(app)
    return app


def _no_content() -> Response:
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def _register_routes(app: FastAPI) -> None:

    # ---------- Users ----------
    @app.post("/api/login", response_model=UserResponse)
    def login(payload: LoginRequest, reg: Registry = Depends(get_registry)):
        return reg.users.authenticate(payload.username, payload.password)

    @app.get("/api/users/{user_id}", response_model=UserResponse)
    def get_user(user_id: str, reg: Registry = Depends(get_registry)):
        return reg.users.get(user_id)

    # ---------- Leagues ----------
    @app.get("/api/leagues", response_model=List[LeagueResponse])
    def list_leagues(reg: Registry = Depends(get_registry)):
        return reg.leagues.list()

    @app.post("/api/leagues", response_model=LeagueResponse, status_code=status.HTTP_201_CREATED)
    def create_league(payload: LeagueCreate, reg: Registry = Depends(get_registry)):
        return reg.leagues.create(payload)

    @app.put("/api/leagues/{league_id}", response_model=LeagueResponse)
    def update_league(league_id: str, payload: LeagueUpdate, reg: Registry = Depends(get_registry)):
        return reg.leagues.update(league_id, payload)

    @app.delete("/api/leagues/{league_id}", status_code=status.HTTP_204_NO_CONTENT)
    def delete_league(league_id: str, reg: Registry = Depends(get_registry)):
        reg.leagues.delete(league_id)
        return _no_content()

    # ---------- Teams ----------
    @app.get("/api/teams", response_model=List[TeamResponse])
    def list_teams(
        league_id: Optional[str] = Query(None, alias="leagueId"),
        reg: Registry = Depends(get_registry),
    ):
        return reg.teams.list(league_id)

    @app.post("/api/teams", response_model=TeamResponse, status_code=status.HTTP_201_CREATED)
    def create_team(payload: TeamCreate, reg: Registry = Depends(get_registry)):
        return reg.teams.create(payload)

    @app.put("/api/teams/{team_id}", response_model=TeamResponse)
    def update_team(team_id: str, payload: TeamUpdate, reg: Registry = Depends(get_registry)):
        return reg.teams.update(team_id, payload)

    @app.delete("/api/teams/{team_id}", status_code=status.HTTP_204_NO_CONTENT)
    def delete_team(team_id: str, reg: Registry = Depends(get_registry)):
        reg.teams.delete(team_id)
        return _no_content()

    # ---------- Players ----------
    @app.get("/api/players", response_model=List[PlayerResponse])
    def list_players(
        team_id: Optional[str] = Query(None, alias="teamId"),
        reg: Registry = Depends(get_registry),
    ):
        return reg.players.list(team_id)

    @app.post("/api/players", response_model=PlayerResponse, status_code=status.HTTP_201_CREATED)
    def create_player(payload: PlayerCreate, reg: Registry = Depends(get_registry)):
        return reg.players.create(payload)

    @app.put("/api/players/{player_id}", response_model=PlayerResponse)
    def update_player(player_id: str, payload: PlayerUpdate, reg: Registry = Depends(get_registry)):
        return reg.roster.set_player_roster(player_id, payload.fields(), payload.team_ids)

    @app.delete("/api/players/{player_id}", status_code=status.HTTP_204_NO_CONTENT)
    def delete_player(player_id: str, reg: Registry = Depends(get_registry)):
        reg.players.delete(player_id)
        return _no_content()

    # ---------- Matches ----------
    @app.get("/api/matches", response_model=List[MatchResponse])
    def list_matches(
        league_id: Optional[str] = Query(None, alias="leagueId"),
        reg: Registry = Depends(get_registry),
    ):
        return reg.matches.list(league_id)

    @app.get("/api/matches/{match_id}", response_model=MatchResponse)
    def get_match(match_id: str, reg: Registry = Depends(get_registry)):
        return reg.matches.get(match_id)

    @app.post("/api/matches", response_model=MatchResponse, status_code=status.HTTP_201_CREATED)
    def create_match(payload: MatchCreate, reg: Registry = Depends(get_registry)):
        return reg.matches.create(payload)

    @app.put("/api/matches/{match_id}", response_model=MatchResponse)
    def update_match(match_id: str, payload: MatchUpdate, reg: Registry = Depends(get_registry)):
        return reg.matches.update(match_id, payload)

    @app.delete("/api/matches/{match_id}", status_code=status.HTTP_204_NO_CONTENT)
    def delete_match(match_id: str, reg: Registry = Depends(get_registry)):
        reg.matches.delete(match_id)
        return _no_content()

    # ---------- Scorecards ----------
    @app.get("/api/scorecards/{match_id}", response_model=Optional[ScorecardResponse])
    def get_scorecard(match_id: str, reg: Registry = Depends(get_registry)):
        return reg.scorecards.get_by_match(match_id)

    @app.put("/api/scorecards/{scorecard_id}", response_model=ScorecardResponse)
    def upsert_scorecard(
        scorecard_id: str,
        payload: ScorecardUpsert,
        response: Response,
        reg: Registry = Depends(get_registry),
    ):
        scorecard, created = reg.scorecard_upserts.upsert_scorecard(
            scorecard_id, payload.match_id, payload.innings1, payload.innings2
        )
        response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
        return scorecard
