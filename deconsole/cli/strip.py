"""
Strip command - remove or comment out console statements.
"""

import sys
from pathlib import Path

import click

from ..config import RunOptions
from ..core.runner import run
from .helpers import console, print_file_result, print_summary


@click.command()
@click.option("--comment", "-c", is_flag=True, help="Comment out console statements instead of deleting them")
@click.option("--backup", "-b", is_flag=True, help="Create a .bak file before overwriting each changed file")
@click.option("--dry-run", is_flag=True, help="Preview files and statements without writing changes")
@click.option(
    "--pattern",
    "-p",
    "patterns",
    multiple=True,
    metavar="GLOB",
    help="Glob pattern(s) of files to process (repeatable or comma-separated)",
)
@click.option(
    "--ignore",
    "-i",
    "ignore",
    multiple=True,
    metavar="GLOB",
    help="Glob pattern(s) to ignore (repeatable or comma-separated)",
)
@click.option(
    "--cwd",
    type=click.Path(path_type=Path),
    default=None,
    help="Working directory for glob resolution (default: current directory)",
)
@click.option("--target", "-t", default="console", show_default=True, help="Name of the global object to strip")
@click.option("--jobs", "-j", type=int, default=1, show_default=True, help="Number of files to process in parallel")
@click.option("--verbose", is_flag=True, help="Report every file that is changed")
def strip(comment, backup, dry_run, patterns, ignore, cwd, target, jobs, verbose):
    """
    Remove or comment out console statements throughout your project files.

    Only calls that form a complete statement are rewritten. Calls whose value
    is used (assigned, passed, returned, tested) are counted as skipped and
    left alone. Files that fail to parse are skipped with a warning.

    Examples:
        deconsole strip                          # Remove console calls under the current directory
        deconsole strip --comment --backup       # Comment them out, keeping .bak copies
        deconsole strip --dry-run -p "src/**/*.ts"
        deconsole strip -t logger -i "**/vendor/**"
    """
    try:
        options = RunOptions.create(
            cwd=cwd,
            patterns=patterns,
            ignore=ignore,
            comment=comment,
            backup=backup,
            dry_run=dry_run,
            verbose=verbose,
            target=target,
            jobs=jobs,
        )
    except ValueError as e:
        raise click.BadParameter(str(e))

    report = run(options)

    if not report.results:
        console.print("No files matched the provided patterns.")
        return

    for result in report.results:
        if result.failed or options.verbose or options.dry_run:
            print_file_result(result, options)

    print_summary(report, options)

    if not report.ok:
        sys.exit(1)
