"""
Run configuration.

Built once by the command line and passed explicitly to the runner.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, Tuple, Union

from .core.invocation import DEFAULT_TARGET, IDENTIFIER_RE

DEFAULT_PATTERNS = ("**/*.{js,jsx,ts,tsx,cjs,mjs,cts,mts}",)
DEFAULT_IGNORES = (
    "**/node_modules/**",
    "**/dist/**",
    "**/build/**",
    "**/.git/**",
    "**/.next/**",
    "**/coverage/**",
)


def normalize_list(value: Optional[Union[str, Iterable[str]]], fallback: Tuple[str, ...]) -> Tuple[str, ...]:
    """
    Flatten repeated and comma-separated option values.

    Falls back to ``fallback`` when nothing usable is left.
    """
    if not value:
        return fallback

    items = [value] if isinstance(value, str) else list(value)
    expanded = [part.strip() for item in items for part in item.split(",")]
    expanded = [item for item in expanded if item]
    return tuple(expanded) if expanded else fallback


@dataclass(frozen=True)
class RunOptions:
    """Immutable options for one run over a set of files."""

    cwd: Path = field(default_factory=Path.cwd)
    comment: bool = False
    backup: bool = False
    dry_run: bool = False
    verbose: bool = False
    patterns: Tuple[str, ...] = DEFAULT_PATTERNS
    ignore: Tuple[str, ...] = DEFAULT_IGNORES
    target: str = DEFAULT_TARGET
    jobs: int = 1

    @classmethod
    def create(cls, cwd=None, patterns=None, ignore=None, **kwargs) -> "RunOptions":
        """
        Build validated options from raw values.

        Raises:
            ValueError: If the base directory does not exist, the target is not
                a valid identifier, or jobs is below 1
        """
        base = Path(cwd) if cwd is not None else Path.cwd()
        resolved = base.resolve()
        if not resolved.is_dir():
            raise ValueError(f"Working directory does not exist: {base}")

        options = cls(
            cwd=resolved,
            patterns=normalize_list(patterns, DEFAULT_PATTERNS),
            ignore=normalize_list(ignore, DEFAULT_IGNORES),
            **kwargs,
        )
        options.validate()
        return options

    def validate(self) -> None:
        if not IDENTIFIER_RE.match(self.target):
            raise ValueError(f"Target must be a plain identifier, got {self.target!r}")
        if self.jobs < 1:
            raise ValueError(f"Jobs must be at least 1, got {self.jobs}")

    @property
    def action(self) -> str:
        return "commented" if self.comment else "removed"
