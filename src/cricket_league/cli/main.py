"""Main CLI interface for the cricket league system."""

import logging
from typing import Optional

import typer
from loguru import logger as loguru_logger
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..config import get_settings
from ..database import Store
from ..errors import LeagueError
from ..qa.integrity import display_results, run_integrity_checks
from ..repositories import LeagueRepository, TeamRepository
from ..seed import ensure_default_admin, seed_sample_data

# Initialize rich console
console = Console()


class _PropagateHandler(logging.Handler):
    """Hand loguru records to the stdlib logger of the same name."""

    def emit(self, record: logging.LogRecord) -> None:
        logging.getLogger(record.name).handle(record)


# Configure logging
def setup_logging(level: str = "INFO", log_file: Optional[str] = None):
    """Setup logging configuration."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    # Create formatter
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    # Setup console handler with rich
    console_handler = RichHandler(console=console, show_time=True, show_path=False)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)

    # Setup file handler if specified
    handlers = [console_handler]
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    # Configure root logger
    logging.basicConfig(
        level=log_level,
        handlers=handlers,
        force=True
    )

    # Services log through loguru; send them to the same handlers
    loguru_logger.remove()
    loguru_logger.add(_PropagateHandler(), level=log_level, format="{message}")


app = typer.Typer(
    name="cricket-league",
    help="Cricket League - leagues, teams, players, matches and scorecards",
    no_args_is_help=True
)


def _store() -> Store:
    return Store.from_settings(get_settings().database)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Log file path"),
):
    """Cricket League - leagues, teams, players, matches and scorecards."""
    settings = get_settings()
    log_level = "DEBUG" if verbose else settings.logging.level
    setup_logging(log_level, log_file or settings.logging.file)


@app.command()
def setup_db(force: bool = typer.Option(False, "--force", help="Force recreation of tables")):
    """Initialize database schema and the default admin account."""
    console.print("[bold]Setting up database schema...[/bold]")
    store = _store()
    try:
        if force:
            console.print("Dropping existing tables...")
            store.drop_schema()

        console.print("Creating database tables...")
        store.ensure_schema()
        if ensure_default_admin(store, get_settings().auth):
            console.print("Default admin user created.")

        console.print("[green]✅ Database schema initialized successfully![/green]")

    except LeagueError as e:
        console.print(f"[red]❌ Database setup failed: {e.message}[/red]")
        raise typer.Exit(1)
    finally:
        store.dispose()


@app.command()
def seed():
    """Load the sample leagues, teams, players, matches and scorecard."""
    store = _store()
    try:
        store.ensure_schema()
        if seed_sample_data(store):
            console.print("[green]✅ Sample data seeded[/green]")
        else:
            console.print("[yellow]Sample data already present, nothing to do[/yellow]")
    except LeagueError as e:
        console.print(f"[red]❌ Seeding failed: {e.message}[/red]")
        raise typer.Exit(1)
    finally:
        store.dispose()


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address"),
    port: Optional[int] = typer.Option(None, "--port", help="Port to listen on"),
):
    """Run the HTTP API."""
    import uvicorn

    from ..api import create_app

    settings = get_settings()
    uvicorn.run(
        create_app(settings=settings),
        host=host or settings.api.host,
        port=port or settings.api.port,
        log_config=None,
    )


@app.command("check-integrity")
def check_integrity(
    strict: bool = typer.Option(False, "--strict", help="Exit non-zero when issues are found"),
):
    """Report match/scorecard back-reference and roster inconsistencies."""
    console.print("[bold]Running Integrity Checks...[/bold]")
    store = _store()
    try:
        total = display_results(run_integrity_checks(store))
    except LeagueError as e:
        console.print(f"[red]Error running integrity checks: {e.message}[/red]")
        raise typer.Exit(1)
    finally:
        store.dispose()
    if strict and total:
        raise typer.Exit(2)


@app.command("list-leagues")
def list_leagues():
    """List leagues with their team counts."""
    store = _store()
    try:
        leagues = LeagueRepository(store).list()
    finally:
        store.dispose()

    table = Table(title="Leagues")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="magenta")
    table.add_column("Location", style="white")
    table.add_column("Dates", style="green")
    table.add_column("Teams", style="yellow", justify="right")
    for league in leagues:
        dates = f"{league.start_date:%Y-%m-%d} → {league.end_date:%Y-%m-%d}"
        table.add_row(league.id, league.name, league.location or "", dates, str(len(league.teams)))
    console.print(table)


@app.command("list-teams")
def list_teams(league_id: Optional[str] = typer.Option(None, "--league-id", help="Only teams in this league")):
    """List teams with captain and roster size."""
    store = _store()
    try:
        teams = TeamRepository(store).list(league_id)
    finally:
        store.dispose()

    table = Table(title="Teams")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="magenta")
    table.add_column("League", style="white")
    table.add_column("Captain", style="green")
    table.add_column("Players", style="yellow", justify="right")
    for team in teams:
        table.add_row(team.id, team.name, team.league_id, team.captain_id or "", str(len(team.player_ids)))
    console.print(table)


if __name__ == "__main__":
    app()
