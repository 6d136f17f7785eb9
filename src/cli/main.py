"""CLI entry point for moodlog."""

import sys

import click
from rich.console import Console

from cli.commands import add, dashboard, delete, insights, list_entries
from cli.config import load_config_model, setup_logging

console = Console()


@click.group()
@click.version_option(version="0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """moodlog - daily mood journal with weekly insights."""
    try:
        config = load_config_model()
    except ValueError as e:
        console.print(f"[red]Config error:[/] {e}")
        sys.exit(1)
    setup_logging(config, verbose=verbose)


cli.add_command(add)
cli.add_command(list_entries)
cli.add_command(delete)
cli.add_command(dashboard)
cli.add_command(insights)


if __name__ == "__main__":
    cli()
