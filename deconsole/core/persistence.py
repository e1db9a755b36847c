"""
Reading and writing source files without touching their line endings.
"""

import logging
import os
import shutil
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)

BACKUP_SUFFIX = ".bak"


def read_source(path: Path) -> str:
    """Read a file as UTF-8, keeping ``\\r\\n`` line endings intact."""
    return Path(path).read_bytes().decode("utf8")


def backup_path(path: Path) -> Path:
    """Sibling path the original content is saved to (``app.js`` -> ``app.js.bak``)."""
    path = Path(path)
    return path.with_name(path.name + BACKUP_SUFFIX)


def write_source(path: Path, text: str) -> None:
    """
    Replace a file's content.

    The text goes to a temporary file in the same directory first, which is
    then renamed over the original, so a crash never leaves a half-written file.
    """
    path = Path(path)
    fd, temp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(text.encode("utf8"))
        if path.exists():
            shutil.copymode(path, temp_name)
        os.replace(temp_name, path)
    except BaseException:
        if os.path.exists(temp_name):
            os.unlink(temp_name)
        raise
    logger.debug(f"Wrote {path}")


def write_backup(path: Path, original: str) -> Path:
    """Save the original content next to ``path`` and return the backup path."""
    target = backup_path(path)
    write_source(target, original)
    shutil.copymode(path, target)
    logger.debug(f"Backed up {path} to {target}")
    return target
