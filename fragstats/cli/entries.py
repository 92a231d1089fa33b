"""Entry management commands for fragstats CLI.

Handles editing and deleting individual games, replacing a day's
totals and removing whole days. Every change recomputes the day's
totals and the metric's rating.
"""

from datetime import datetime
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel

from fragstats.cli.common import DATE_TYPE, METRIC_CHOICE, get_tracker, print_error
from fragstats.models import DailyAggregate, MetricType, get_profile
from fragstats.tracker.view import format_score

console = Console()

value_options = [
    click.option("--kills", "-k", type=click.IntRange(min=0), default=None, help="Kills (kda)."),
    click.option("--deaths", "-D", type=click.IntRange(min=0), default=None, help="Deaths (kda)."),
    click.option("--assists", "-a", type=click.IntRange(min=0), default=None, help="Assists (kda)."),
    click.option("--value", "-V", type=click.FloatRange(min=0), default=None, help="Rate or ADR value (hsr/adr)."),
]


def with_value_options(func):
    """Attach the --kills/--deaths/--assists/--value options."""
    for option in reversed(value_options):
        func = option(func)
    return func


def _check_values(
    metric: MetricType,
    kills: Optional[int],
    deaths: Optional[int],
    assists: Optional[int],
    value: Optional[float],
) -> None:
    """Reject option combinations that do not fit the metric."""
    if metric == MetricType.KDA:
        if value is not None:
            raise click.UsageError("--value does not apply to kda; use --kills/--deaths/--assists.")
        if kills is None and deaths is None and assists is None:
            raise click.UsageError("Provide at least one of --kills, --deaths or --assists.")
    else:
        if kills is not None or deaths is not None or assists is not None:
            raise click.UsageError(f"{metric.value} takes --value only.")
        if value is None:
            raise click.UsageError("Provide --value.")
        profile = get_profile(metric)
        if profile.max_value is not None and value > profile.max_value:
            raise click.UsageError(f"{profile.label} must be between 0 and {profile.max_value:g}.")


def _print_day(aggregate: DailyAggregate, action: str) -> None:
    console.print(
        f"[green]✓ {action} {aggregate.metric.value} for {aggregate.date.isoformat()}: "
        f"{format_score(aggregate)} ({aggregate.entry_count} games)[/green]"
    )


@click.command()
@click.argument("metric", type=METRIC_CHOICE)
@click.argument("day", type=DATE_TYPE)
@click.argument("entry_id")
@with_value_options
def edit(
    metric: str,
    day: datetime,
    entry_id: str,
    kills: Optional[int],
    deaths: Optional[int],
    assists: Optional[int],
    value: Optional[float],
) -> None:
    """Edit one logged game.

    ENTRY_ID comes from 'fragstats show'. Days logged before per-game
    tracking expose a single entry named 'legacy'.

    \b
    Examples:
      fragstats edit kda 2025-01-02 3f9c... --deaths 7
      fragstats edit hsr 2025-01-02 legacy --value 31.5
    """
    metric_type = MetricType(metric.lower())
    _check_values(metric_type, kills, deaths, assists, value)

    try:
        tracker = get_tracker()
        aggregate = tracker.edit_entry(
            metric_type, day.date(), entry_id,
            kills=kills, deaths=deaths, assists=assists, value=value,
        )
        _print_day(aggregate, "Updated")

    except Exception as e:
        print_error(console, "Failed to edit entry:", e)
        raise SystemExit(1)


@click.command()
@click.argument("metric", type=METRIC_CHOICE)
@click.argument("day", type=DATE_TYPE)
@click.argument("entry_id")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation.")
def delete(metric: str, day: datetime, entry_id: str, yes: bool) -> None:
    """Delete one logged game.

    Deleting the last game of a day keeps the day with zero totals;
    use 'fragstats drop' to remove the day itself.
    """
    metric_type = MetricType(metric.lower())

    if not yes:
        click.confirm("Are you sure you want to delete this specific game log?", abort=True)

    try:
        tracker = get_tracker()
        aggregate = tracker.delete_entry(metric_type, day.date(), entry_id)
        _print_day(aggregate, "Deleted entry;")

    except Exception as e:
        print_error(console, "Failed to delete entry:", e)
        raise SystemExit(1)


@click.command("set-day")
@click.argument("metric", type=METRIC_CHOICE)
@click.argument("day", type=DATE_TYPE)
@with_value_options
def set_day(
    metric: str,
    day: datetime,
    kills: Optional[int],
    deaths: Optional[int],
    assists: Optional[int],
    value: Optional[float],
) -> None:
    """Replace a day's totals.

    All games logged for the day are replaced by a single entry with
    the given values.

    \b
    Examples:
      fragstats set-day kda 2025-01-02 -k 40 -D 20 -a 10
      fragstats set-day adr 2025-01-02 --value 91.0
    """
    metric_type = MetricType(metric.lower())
    _check_values(metric_type, kills, deaths, assists, value)

    try:
        tracker = get_tracker()
        aggregate = tracker.replace_day(
            metric_type, day.date(),
            kills=kills or 0, deaths=deaths or 0, assists=assists or 0, value=value or 0.0,
        )
        _print_day(aggregate, "Replaced daily totals of")

    except Exception as e:
        print_error(console, "Failed to replace daily totals:", e)
        raise SystemExit(1)


@click.command()
@click.argument("metric", type=METRIC_CHOICE)
@click.argument("day", type=DATE_TYPE)
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation.")
def drop(metric: str, day: datetime, yes: bool) -> None:
    """Delete a whole day for a metric."""
    metric_type = MetricType(metric.lower())
    game_date = day.date()

    if not yes:
        click.confirm(
            f"Are you sure you want to delete the daily {metric_type.value.upper()} total "
            f"for {game_date.isoformat()}?",
            abort=True,
        )

    try:
        tracker = get_tracker()
        tracker.delete_day(metric_type, game_date)
        console.print(Panel(
            f"[green]✓[/green] Deleted {metric_type.value.upper()} data for {game_date.isoformat()}",
            title="[bold green]Day Removed[/bold green]",
            border_style="green",
        ))

    except Exception as e:
        print_error(console, "Failed to delete day:", e)
        raise SystemExit(1)
