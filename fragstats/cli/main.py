"""Main CLI entry point for fragstats.

This module provides the main click group and lazy loading
of command modules to keep startup fast.
"""

import importlib
import logging

import click


class LazyGroup(click.Group):
    """A click Group whose subcommands are imported on first use.

    Each lazy subcommand is registered as a ``"module:attribute"`` import
    path, so ``fragstats --help`` never imports the tracker or the store.
    """

    def __init__(self, *args, lazy_subcommands: dict[str, str] | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self._lazy_subcommands = dict(lazy_subcommands or {})

    def list_commands(self, ctx: click.Context) -> list[str]:
        return sorted(set(super().list_commands(ctx)) | set(self._lazy_subcommands))

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        command = super().get_command(ctx, cmd_name)
        if command is None and cmd_name in self._lazy_subcommands:
            command = self._resolve(cmd_name)
            self.add_command(command, cmd_name)
        return command

    def _resolve(self, cmd_name: str) -> click.Command:
        """Import the command object behind a lazy import path."""
        module_path, _, attr_name = self._lazy_subcommands[cmd_name].partition(":")
        command = getattr(importlib.import_module(module_path), attr_name, None)
        if not isinstance(command, click.Command):
            raise click.ClickException(
                f"'{cmd_name}' does not resolve to a command ({self._lazy_subcommands[cmd_name]})"
            )
        return command


LAZY_SUBCOMMANDS = {
    "setup": "fragstats.cli.admin:setup",
    "status": "fragstats.cli.admin:status",
    "log": "fragstats.cli.log:log",
    "history": "fragstats.cli.history:history",
    "show": "fragstats.cli.history:show",
    "edit": "fragstats.cli.entries:edit",
    "delete": "fragstats.cli.entries:delete",
    "set-day": "fragstats.cli.entries:set_day",
    "drop": "fragstats.cli.entries:drop",
    "rating": "fragstats.cli.rating:rating",
    "target": "fragstats.cli.rating:target",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="fragstats")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """fragstats - track daily KDA, headshot rate and ADR.

    Log games per day, review your history and follow a skill
    rating with momentum, target and risk figures.

    \b
    Quick Start:
      fragstats log kda 18 9 4   # Log one game's kills/deaths/assists
      fragstats log hsr 27.5     # Log a headshot rate
      fragstats history kda      # Daily KDA history
      fragstats rating           # Rating for every metric
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
