"""Logging commands for fragstats CLI.

Each command appends one game to the day's entries. Daily totals are
recomputed from the entries and the metric's rating is refreshed.
"""

from datetime import datetime
from typing import Optional

import click
from rich.console import Console

from fragstats.cli.common import DATE_TYPE, get_tracker, print_error, to_date
from fragstats.models import MetricType, get_profile
from fragstats.tracker.view import format_value

console = Console()

date_option = click.option(
    "--date", "-d", "day",
    type=DATE_TYPE,
    default=None,
    help="Date of the game (YYYY-MM-DD). Defaults to today.",
)


def _print_rating_line(tracker, metric: MetricType) -> None:
    snapshot = tracker.get_cached_rating(metric)
    console.print(
        f"[dim]Rating: [bold]{snapshot.rating}[/bold]  "
        f"Momentum: {snapshot.momentum:+.1f}%  Risk: {snapshot.risk:.0f}% ({snapshot.risk_level})[/dim]"
    )


@click.group()
def log() -> None:
    """Log a game.

    \b
    Examples:
      fragstats log kda 18 9 4
      fragstats log kda 12 14 2 --date 2025-01-02
      fragstats log hsr 27.5
      fragstats log adr 84.2
    """
    pass


@log.command("kda")
@click.argument("kills", type=click.IntRange(min=0))
@click.argument("deaths", type=click.IntRange(min=0))
@click.argument("assists", type=click.IntRange(min=0))
@date_option
def log_kda(kills: int, deaths: int, assists: int, day: Optional[datetime]) -> None:
    """Log kills, deaths and assists for one game.

    The game is added to the day's running totals.
    """
    game_date = to_date(day)

    try:
        tracker = get_tracker()
        aggregate = tracker.log_entry(
            MetricType.KDA, game_date, kills=kills, deaths=deaths, assists=assists
        )
        console.print(
            f"[green]✓ Game logged! Score: {kills}/{deaths}/{assists}. "
            f"Daily KDA for {game_date.isoformat()} is now {aggregate.ratio:.2f}[/green]"
        )
        _print_rating_line(tracker, MetricType.KDA)

    except Exception as e:
        print_error(console, "Could not log KDA game:", e)
        raise SystemExit(1)


@log.command("hsr")
@click.argument("rate", type=click.FloatRange(min=0, max=get_profile(MetricType.HSR).max_value))
@date_option
def log_hsr(rate: float, day: Optional[datetime]) -> None:
    """Log a headshot rate (0-100%) for one game.

    The day's rate is the average of its logged games.
    """
    game_date = to_date(day)

    try:
        tracker = get_tracker()
        aggregate = tracker.log_entry(MetricType.HSR, game_date, value=rate)
        console.print(
            f"[green]✓ Headshot rate logged! Rate for {game_date.isoformat()}: "
            f"{format_value(MetricType.HSR, aggregate.value)} "
            f"over {aggregate.entry_count} game(s)[/green]"
        )
        _print_rating_line(tracker, MetricType.HSR)

    except Exception as e:
        print_error(console, "Could not log headshot rate:", e)
        raise SystemExit(1)


@log.command("adr")
@click.argument("value", type=click.FloatRange(min=0))
@date_option
def log_adr(value: float, day: Optional[datetime]) -> None:
    """Log average damage per round for one game.

    The day's ADR is the average of its logged games.
    """
    game_date = to_date(day)

    try:
        tracker = get_tracker()
        aggregate = tracker.log_entry(MetricType.ADR, game_date, value=value)
        console.print(
            f"[green]✓ ADR logged! ADR for {game_date.isoformat()}: "
            f"{format_value(MetricType.ADR, aggregate.value)} "
            f"over {aggregate.entry_count} game(s)[/green]"
        )
        _print_rating_line(tracker, MetricType.ADR)

    except Exception as e:
        print_error(console, "Could not log ADR:", e)
        raise SystemExit(1)
