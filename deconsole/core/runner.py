"""
Run orchestration: discover files, transform each one, write results back.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from ..config import RunOptions
from .discovery import discover_files
from .persistence import read_source, write_backup, write_source
from .transform import transform_source

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileResult:
    """What happened to a single file."""

    path: Path
    statements: int = 0
    skipped: int = 0
    changed: bool = False
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass(frozen=True)
class RunSummary:
    """Aggregate counters. Summaries combine with ``+`` in any order."""

    files_processed: int = 0
    files_changed: int = 0
    statements_changed: int = 0
    skipped: int = 0
    failed: int = 0

    @classmethod
    def from_result(cls, result: FileResult) -> "RunSummary":
        return cls(
            files_processed=1,
            files_changed=1 if result.changed else 0,
            statements_changed=result.statements,
            skipped=result.skipped,
            failed=1 if result.failed else 0,
        )

    def __add__(self, other: "RunSummary") -> "RunSummary":
        return RunSummary(
            files_processed=self.files_processed + other.files_processed,
            files_changed=self.files_changed + other.files_changed,
            statements_changed=self.statements_changed + other.statements_changed,
            skipped=self.skipped + other.skipped,
            failed=self.failed + other.failed,
        )


@dataclass
class RunReport:
    """Per-file results, in discovery order, plus their summary."""

    results: List[FileResult] = field(default_factory=list)
    summary: RunSummary = field(default_factory=RunSummary)

    @property
    def ok(self) -> bool:
        return self.summary.failed == 0


def process_file(path: Path, options: RunOptions) -> FileResult:
    """
    Transform one file and, unless this is a dry run, write it back.

    Errors are captured in the result instead of raised so one bad file
    never stops the run.
    """
    try:
        source = read_source(path)
        transformation = transform_source(source, str(path), comment=options.comment, target=options.target)

        if not transformation.changed:
            return FileResult(path, skipped=transformation.skipped_count)

        if not options.dry_run:
            if options.backup:
                write_backup(path, source)
            write_source(path, transformation.code)

        return FileResult(
            path,
            statements=transformation.statements_changed,
            skipped=transformation.skipped_count,
            changed=True,
        )

    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Failed to process {path}: {e}")
        return FileResult(path, error=str(e))
    except Exception as e:
        logger.exception(f"Unexpected error while processing {path}")
        return FileResult(path, error=f"{type(e).__name__}: {e}")


def run(options: RunOptions, files: Optional[List[Path]] = None) -> RunReport:
    """
    Process every matching file.

    Args:
        options: Validated run options
        files: Explicit file list; discovered from the options when None

    Returns:
        RunReport with one FileResult per file
    """
    if files is None:
        files = discover_files(options.cwd, options.patterns, options.ignore)

    if not files:
        return RunReport()

    logger.info(f"Processing {len(files)} file(s) with {options.jobs} worker(s)")

    if options.jobs > 1:
        with ThreadPoolExecutor(max_workers=options.jobs) as executor:
            results = list(executor.map(lambda path: process_file(path, options), files))
    else:
        results = [process_file(path, options) for path in files]

    summary = RunSummary()
    for result in results:
        summary = summary + RunSummary.from_result(result)

    return RunReport(results=results, summary=summary)
