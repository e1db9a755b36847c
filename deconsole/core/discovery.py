"""
File discovery with include / ignore glob patterns.

Patterns are matched against paths relative to the base directory, using
forward slashes. ``*`` and ``?`` stay within one path segment, ``**/`` may
match zero directories and ``{a,b}`` expands to alternatives, so
``**/*.{js,ts}`` matches ``index.js`` as well as ``src/lib/util.ts`` while
``src/*.js`` does not match ``src/lib/util.js``.
"""

import logging
import os
import re
from fnmatch import fnmatch
from pathlib import Path
from typing import Iterable, List, Set

logger = logging.getLogger(__name__)

BRACE_RE = re.compile(r"\{([^{}]*)\}")


def expand_braces(pattern: str) -> List[str]:
    """Expand ``{a,b}`` alternatives into separate patterns."""
    match = BRACE_RE.search(pattern)
    if not match:
        return [pattern]

    head, tail = pattern[: match.start()], pattern[match.end() :]
    expanded = []
    for option in match.group(1).split(","):
        expanded.extend(expand_braces(head + option + tail))
    return expanded


def _globstar_variants(pattern: str) -> Set[str]:
    """Every variant of ``pattern`` with some ``**/`` segments matching nothing."""
    index = pattern.find("**/")
    if index == -1:
        return {pattern}

    head, tail = pattern[:index], pattern[index + 3 :]
    variants = set()
    for rest in _globstar_variants(tail):
        variants.add(head + "**/" + rest)
        variants.add(head + rest)
    return variants


def _segment_wildcards(pattern: str) -> str:
    """
    Rewrite a glob so only ``**`` crosses directory separators.

    fnmatch lets ``*`` and ``?`` match ``/``; they become ``[!/]*`` and
    ``[!/]``, while ``**`` becomes a plain ``*``. Character classes are kept.
    """
    out = []
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if ch == "*":
            if pattern.startswith("**", i):
                out.append("*")
                while i < len(pattern) and pattern[i] == "*":
                    i += 1
                continue
            out.append("[!/]*")
        elif ch == "?":
            out.append("[!/]")
        elif ch == "[":
            close = pattern.find("]", i + 2)
            if close != -1:
                out.append(pattern[i : close + 1])
                i = close + 1
                continue
            out.append("[[]")
        else:
            out.append(ch)
        i += 1
    return "".join(out)


def compile_patterns(patterns: Iterable[str]) -> List[str]:
    """Expand braces and globstars into plain fnmatch patterns."""
    compiled: Set[str] = set()
    for pattern in patterns:
        pattern = pattern.replace("\\", "/")
        if pattern.startswith("./"):
            pattern = pattern[2:]
        for expanded in expand_braces(pattern):
            compiled.update(_segment_wildcards(variant) for variant in _globstar_variants(expanded))
    return sorted(compiled)


def matches_any(relative_path: str, patterns: Iterable[str]) -> bool:
    """Check a forward-slashed relative path against compiled patterns."""
    return any(fnmatch(relative_path, pattern) for pattern in patterns)


def discover_files(cwd: Path, patterns: Iterable[str], ignore: Iterable[str] = ()) -> List[Path]:
    """
    List files under ``cwd`` matching any include pattern and no ignore pattern.

    Ignored directories are pruned without being walked.

    Args:
        cwd: Base directory for relative matching
        patterns: Include globs
        ignore: Ignore globs

    Returns:
        Sorted, unique absolute paths of regular files
    """
    base = Path(cwd).resolve()
    include = compile_patterns(patterns)
    exclude = compile_patterns(ignore)
    found: Set[Path] = set()

    for dirpath, dirnames, filenames in os.walk(base):
        relative_dir = Path(dirpath).relative_to(base).as_posix()
        prefix = "" if relative_dir == "." else relative_dir + "/"

        # Prune in place so os.walk never descends into ignored directories
        dirnames[:] = sorted(name for name in dirnames if not matches_any(prefix + name + "/", exclude))

        for name in filenames:
            relative = prefix + name
            if matches_any(relative, include) and not matches_any(relative, exclude):
                found.add(Path(dirpath) / name)

    logger.debug(f"Discovered {len(found)} file(s) under {base}")
    return sorted(found)
