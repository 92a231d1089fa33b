"""Rating commands for fragstats CLI.

Shows the skill rating, momentum, target and risk for each metric and
manages the global target multiplier.
"""

from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from fragstats.cli.common import METRIC_CHOICE, get_tracker, print_error
from fragstats.models import MetricType
from fragstats.tracker.view import RatingView, build_rating_view

console = Console()

RISK_STYLES = {"low": "green", "medium": "yellow", "high": "red"}


def render_rating(view: RatingView) -> None:
    """Render one metric's rating panel."""
    risk_style = RISK_STYLES.get(view.risk_level, "white")
    momentum_style = "red" if view.momentum.startswith("-") else "green"

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Field", style="dim")
    table.add_column("Value")
    table.add_row("Rating", f"[bold yellow]{view.rating}[/bold yellow]")
    table.add_row("Today", view.current)
    table.add_row("Baseline", view.baseline)
    table.add_row("Target", f"{view.target} [dim]({view.multiplier})[/dim]")
    table.add_row("Momentum", f"[{momentum_style}]{view.momentum}[/{momentum_style}]")
    table.add_row("Risk", f"[{risk_style}]{view.risk} ({view.risk_level})[/{risk_style}]")
    table.add_row("Games", f"{view.games} over {view.days} days")
    table.add_row("Time invested", view.time_invested)

    console.print(Panel(
        table,
        title=f"[bold]{view.label}[/bold]",
        border_style=risk_style,
    ))


@click.command()
@click.argument("metric", type=METRIC_CHOICE, required=False)
def rating(metric: Optional[str]) -> None:
    """Show the skill rating for one metric or all of them.

    The rating is replayed from the full history every time it is shown.

    \b
    Examples:
      fragstats rating
      fragstats rating kda
    """
    metrics = [MetricType(metric.lower())] if metric else list(MetricType)

    try:
        tracker = get_tracker()
        for metric_type in metrics:
            snapshot = tracker.refresh_rating(metric_type)
            render_rating(build_rating_view(snapshot, tracker.settings.minutes_per_game))

    except Exception as e:
        print_error(console, "Failed to compute rating:", e)
        raise SystemExit(1)


@click.command()
@click.argument("multiplier", type=float, required=False)
def target(multiplier: Optional[float]) -> None:
    """Show or set the target multiplier.

    The target for each metric is its baseline times MULTIPLIER
    (at least 1.0). The setting is shared by all metrics.

    \b
    Examples:
      fragstats target        # Show current multiplier
      fragstats target 1.25   # Aim for 25% above baseline
    """
    try:
        tracker = get_tracker()

        if multiplier is None:
            console.print(f"Target multiplier: [bold yellow]x{tracker.get_multiplier():.2f}[/bold yellow]")
            return

        if multiplier < 1.0:
            console.print("[yellow]Multiplier below 1.0 is raised to 1.0[/yellow]")

        stored = tracker.set_multiplier(multiplier)

        table = Table(
            title=f"Targets at x{stored:.2f}",
            show_header=True,
            header_style="bold cyan",
        )
        table.add_column("Metric", style="bold")
        table.add_column("Baseline", justify="right")
        table.add_column("Target", justify="right")

        for metric_type in MetricType:
            view = build_rating_view(tracker.get_cached_rating(metric_type), tracker.settings.minutes_per_game)
            table.add_row(view.label, view.baseline, view.target)

        console.print(table)

    except Exception as e:
        print_error(console, "Failed to update target multiplier:", e)
        raise SystemExit(1)
