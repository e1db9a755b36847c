"""
Shared helpers for CLI commands.
"""

from pathlib import Path

from rich.console import Console
from rich.markup import escape

from ..config import RunOptions
from ..core.runner import FileResult, RunReport

# Shared console instance
console = Console()


def display_path(path: Path, cwd: Path) -> str:
    """Path relative to ``cwd`` when possible, escaped for rich markup."""
    try:
        shown = Path(path).relative_to(cwd)
    except ValueError:
        shown = Path(path)
    return escape(str(shown))


def print_file_result(result: FileResult, options: RunOptions) -> None:
    """Print one line for a changed or failed file."""
    path = display_path(result.path, options.cwd)

    if result.failed:
        console.print(f"[red]✗ {path}: {escape(result.error)}[/red]", soft_wrap=True)
        return

    if not result.changed:
        return

    prefix = escape("[dry-run]") if options.dry_run else "updated"
    console.print(
        f"{prefix}: {path} ({result.statements} {options.target} statement(s) {options.action})",
        soft_wrap=True,
    )


def print_summary(report: RunReport, options: RunOptions) -> None:
    """Print the end-of-run summary."""
    summary = report.summary
    target = options.target

    console.print(
        f"\nProcessed {summary.files_processed} file(s). "
        f"{summary.statements_changed} {target} statement(s) {options.action} "
        f"across {summary.files_changed} file(s).",
        soft_wrap=True,
    )

    if summary.skipped > 0:
        console.print(
            f"[yellow]Skipped {summary.skipped} {target} call(s) that were not standalone statements.[/yellow]",
            soft_wrap=True,
        )

    if summary.failed > 0:
        console.print(f"[red]✗ {summary.failed} file(s) could not be processed.[/red]", soft_wrap=True)

    if options.dry_run:
        console.print("No files were modified (dry run).", soft_wrap=True)
