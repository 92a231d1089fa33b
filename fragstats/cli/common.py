"""Helpers shared by the fragstats command modules."""

from datetime import date, datetime
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel

from fragstats.models import MetricType

METRIC_CHOICE = click.Choice([metric.value for metric in MetricType], case_sensitive=False)

DATE_TYPE = click.DateTime(formats=["%Y-%m-%d"])


def get_tracker():
    """Build a StatsTracker from the user's configuration."""
    from fragstats.config import get_db_path, get_rating_settings, load_config
    from fragstats.db.store import DataStore
    from fragstats.tracker.service import StatsTracker

    config = load_config()
    store = DataStore(get_db_path(config))
    return StatsTracker(store, settings=get_rating_settings(config))


def to_date(value: Optional[datetime]) -> date:
    """Convert a click DateTime value to a date, defaulting to today."""
    if value is None:
        return date.today()
    return value.date()


def print_error(console: Console, message: str, error: Exception) -> None:
    """Render a failure panel."""
    console.print(Panel(
        f"[red]{message}[/red]\n\n{str(error)}",
        title="[bold red]Error[/bold red]",
        border_style="red",
    ))
