"""
deconsole: Remove or comment out console statements in JavaScript and TypeScript sources.
"""

import logging

from rich.logging import RichHandler

__version__ = "0.1.0"

# Package-level logger
logger = logging.getLogger(__name__)


def setup_logging(level=logging.WARNING, use_rich=True):
    """
    Send deconsole's log records to a single handler at ``level``.

    Submodule loggers are left unset and inherit the level from the package
    logger. Calling this again replaces the previous handler.
    """
    if use_rich:
        handler = RichHandler(rich_tracebacks=True, show_path=False, markup=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))

    logger.handlers = [handler]
    logger.setLevel(level)
