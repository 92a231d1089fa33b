"""History commands for fragstats CLI.

Shows daily totals per metric and the individual entries of one day.
"""

from datetime import date, datetime
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from fragstats.cli.common import DATE_TYPE, METRIC_CHOICE, get_tracker, print_error
from fragstats.models import MetricType
from fragstats.tracker.view import HistoryView, build_history_view, format_value

console = Console()


def render_history(view: HistoryView, limit: Optional[int] = None) -> None:
    """Render a history view as a table with an overall summary."""
    if not view.rows:
        console.print(Panel(
            f"[dim]No {view.label} logged yet.[/dim]",
            title=f"[bold]{view.label} History[/bold]",
            border_style="dim",
        ))
        return

    rows = view.rows[:limit] if limit else view.rows

    table = Table(
        title=f"{view.label} History",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Date", style="bold")
    table.add_column("Score")
    table.add_column("Value", justify="right")
    table.add_column("Games", justify="right", style="dim")

    for row in rows:
        date_text = row.date.isoformat()
        if row.is_future:
            date_text += " [yellow](future)[/yellow]"
        table.add_row(date_text, row.score, row.value, str(row.entry_count))

    console.print(table)
    console.print(Panel(
        f"Overall: [bold yellow]{view.overall}[/bold yellow]\n"
        f"Trend:   [cyan]{view.sparkline}[/cyan]",
        title=f"[bold]{view.label}[/bold]",
        border_style="cyan",
    ))
    if limit and len(view.rows) > limit:
        console.print(f"[dim]Showing {limit} of {len(view.rows)} days[/dim]")


@click.command()
@click.argument("metric", type=METRIC_CHOICE)
@click.option("--limit", "-n", type=click.IntRange(min=1), default=None, help="Show only the newest N days.")
def history(metric: str, limit: Optional[int]) -> None:
    """Show daily history for a metric.

    METRIC is one of kda, hsr or adr. Future-dated days are listed but
    do not count toward the rating.

    \b
    Examples:
      fragstats history kda
      fragstats history hsr --limit 14
    """
    try:
        tracker = get_tracker()
        series = tracker.get_history(metric)
        render_history(build_history_view(series, metric, today=tracker.today()), limit)

    except Exception as e:
        print_error(console, "Failed to load history:", e)
        raise SystemExit(1)


@click.command()
@click.argument("metric", type=METRIC_CHOICE)
@click.argument("day", type=DATE_TYPE)
def show(metric: str, day: datetime) -> None:
    """Show the individual games logged on one day.

    Entry ids shown here are used by the edit and delete commands.

    \b
    Examples:
      fragstats show kda 2025-01-02
    """
    metric_type = MetricType(metric.lower())
    game_date: date = day.date()

    try:
        tracker = get_tracker()
        aggregate = tracker.get_day(metric_type, game_date)

        if aggregate is None:
            console.print(f"[yellow]No {metric_type.value} data logged for {game_date.isoformat()}[/yellow]")
            return

        table = Table(
            title=f"{metric_type.value.upper()} entries for {game_date.isoformat()}",
            show_header=True,
            header_style="bold cyan",
        )
        table.add_column("#", style="dim", width=4)
        table.add_column("Entry ID", style="bold")
        table.add_column("Logged At", style="dim")
        if metric_type == MetricType.KDA:
            table.add_column("K/D/A", justify="right")
        else:
            table.add_column("Value", justify="right")

        for i, entry in enumerate(aggregate.effective_entries(), 1):
            logged_at = entry.timestamp.strftime("%H:%M:%S") if entry.timestamp else "-"
            if metric_type == MetricType.KDA:
                score = f"{entry.kills}/{entry.deaths}/{entry.assists}"
            else:
                score = format_value(metric_type, entry.value)
            table.add_row(str(i), entry.entry_id, logged_at, score)

        console.print(table)
        if metric_type == MetricType.KDA:
            summary = f"{aggregate.kills}/{aggregate.deaths}/{aggregate.assists}  KDA {aggregate.ratio:.2f}"
        else:
            summary = format_value(metric_type, aggregate.value)
        console.print(f"[dim]Day total: {summary} ({aggregate.entry_count} games)[/dim]")

    except Exception as e:
        print_error(console, "Failed to load day:", e)
        raise SystemExit(1)
