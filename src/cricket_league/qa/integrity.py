"""Referential consistency report.

Read-only checks for relationships the schema cannot enforce on its own,
chiefly the match <-> scorecard back-reference. Results are presented in a
summary table by ``cli check-integrity``.
"""

from __future__ import annotations

from typing import List, Tuple

from rich.console import Console
from rich.table import Table
from sqlalchemy import and_, exists, func, or_, select

from ..database import Store
from ..models import Match, Membership, Scorecard, Team

console = Console()

CheckResult = Tuple[str, int, str]


def _checks():
    yield (
        "scorecard_backref_mismatch",
        select(func.count())
        .select_from(Match)
        .join(Scorecard, Scorecard.id == Match.scorecard_id)
        .where(Scorecard.match_id != Match.id),
        "Matches whose scorecardId points at another match's scorecard",
    )
    yield (
        "scorecard_missing_backref",
        select(func.count())
        .select_from(Scorecard)
        .join(Match, Match.id == Scorecard.match_id)
        .where(or_(Match.scorecard_id.is_(None), Match.scorecard_id != Scorecard.id)),
        "Scorecards whose match does not point back to them",
    )
    yield (
        "toss_winner_not_playing",
        select(func.count())
        .select_from(Match)
        .where(
            and_(
                Match.toss_won_by_team_id.is_not(None),
                Match.toss_won_by_team_id != Match.team_a_id,
                Match.toss_won_by_team_id != Match.team_b_id,
            )
        ),
        "Matches whose toss winner is neither team A nor team B",
    )
    yield (
        "captain_not_member",
        select(func.count())
        .select_from(Team)
        .where(
            Team.captain_id.is_not(None),
            ~exists().where(Membership.team_id == Team.id, Membership.player_id == Team.captain_id),
        ),
        "Teams whose captain is not on the roster",
    )


def run_integrity_checks(store: Store) -> List[CheckResult]:
    """Run all integrity checks and return (check name, issue count, description) rows."""
    results = []
    with store.session() as session:
        for name, query, description in _checks():
            results.append((name, int(session.scalar(query) or 0), description))
    return results


def display_results(results: List[CheckResult]) -> int:
    """Display integrity check results in a formatted table; returns the issue total."""
    if not results:
        console.print("[yellow]No integrity check results found.[/yellow]")
        return 0

    table = Table(title="Integrity Check Results")
    table.add_column("Check Name", style="cyan", no_wrap=True)
    table.add_column("Issue Count", style="red", justify="right")
    table.add_column("Description", style="white")

    total_issues = 0
    for check_name, issue_count, description in results:
        total_issues += issue_count
        # Back-reference mismatches break scorecard lookups by match
        if issue_count > 0 and check_name.startswith("scorecard_"):
            style = "red"
        elif issue_count > 0:
            style = "yellow"
        else:
            style = "green"
        table.add_row(check_name, str(issue_count), description, style=style)

    console.print(table)
    console.print(f"\n[bold]Summary:[/bold]")
    console.print(f"Total issues found: [red]{total_issues}[/red]")
    if total_issues == 0:
        console.print("[green]✅ No integrity issues found![/green]")
    else:
        console.print(f"[red]⚠️ {total_issues} issues require attention[/red]")
    return total_issues
