"""
Command-line interface for deconsole.
"""

import logging

import click
from rich.table import Table

from .. import __version__, setup_logging
from ..languages import EXTENSIONS
from .helpers import console
from .strip import strip

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(__version__, prog_name="deconsole")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option("--debug", "-d", is_flag=True, help="Enable debug logging")
def cli(verbose, debug):
    """Remove or comment console statements throughout your project files."""
    if debug:
        setup_logging(logging.DEBUG)
    elif verbose:
        setup_logging(logging.INFO)
    else:
        setup_logging(logging.WARNING)


# Register commands
cli.add_command(strip)


@cli.command()
def languages():
    """List the file extensions deconsole can parse."""
    table = Table(title="Supported File Types")
    table.add_column("Extension", style="cyan")
    table.add_column("Grammar", style="green")

    for suffix, grammar in EXTENSIONS.items():
        table.add_row(suffix, grammar)

    console.print(table)


def main():
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
