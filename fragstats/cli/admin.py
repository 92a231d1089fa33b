"""Setup and status commands for fragstats CLI."""

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from fragstats.cli.common import print_error

console = Console()


@click.command()
@click.option("--force", is_flag=True, help="Overwrite an existing config file.")
def setup(force: bool) -> None:
    """Create the configuration file.

    Writes a template config.toml with the default rating constants.
    Set FRAGSTATS_HOME to keep config and data somewhere other than
    ~/.config/fragstats.
    """
    from fragstats.config import create_template_config, get_config_path

    config_path = get_config_path()

    if config_path.exists() and not force:
        console.print(Panel(
            f"[yellow]Configuration already exists at:[/yellow]\n"
            f"[cyan]{config_path}[/cyan]\n\n"
            f"[dim]Use --force to overwrite it with the template.[/dim]",
            title="[bold]Configuration[/bold]",
            border_style="yellow",
        ))
        return

    try:
        written = create_template_config(config_path)
    except Exception as e:
        print_error(console, "Could not write configuration:", e)
        raise SystemExit(1)

    console.print(Panel(
        f"[green]✓[/green] Configuration file created at:\n"
        f"[cyan]{written}[/cyan]\n\n"
        f"[dim]Edit [rating] to tune the rating constants.[/dim]",
        title="[bold green]Setup Complete[/bold green]",
        border_style="green",
    ))


@click.command()
def status() -> None:
    """Show where data is stored and how much has been logged."""
    from fragstats.config import get_config_path, get_db_path, load_config
    from fragstats.db.store import DataStore

    try:
        config = load_config()
        db_path = get_db_path(config)
        stats = DataStore(db_path).get_stats()
    except Exception as e:
        print_error(console, "Could not read the database:", e)
        raise SystemExit(1)

    config_path = get_config_path()
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Field", style="dim")
    table.add_column("Value")
    table.add_row("Config", f"{config_path}" + ("" if config_path.exists() else " [dim](defaults)[/dim]"))
    table.add_row("Database", str(db_path))
    for name, count in stats.items():
        table.add_row(name, str(count))

    console.print(Panel(table, title="[bold]fragstats status[/bold]", border_style="cyan"))
