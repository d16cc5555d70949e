"""Logging configuration for githerd.

Log records always go to stderr so that stdout only carries command output,
which keeps ``githerd scan | githerd exec`` pipelines clean.

Example:
    ```python
    from githerd.core.logging import setup_logging

    # Warnings only
    setup_logging()

    # Debug output plus a log file
    setup_logging(verbosity=2, log_file="~/logs/githerd.log")

    import logging
    logger = logging.getLogger(__name__)
    logger.debug("Debug message")
    ```
"""

import logging
import sys
from pathlib import Path
from types import TracebackType
from typing import Optional, Type

from rich.console import Console
from rich.logging import RichHandler

# Create console for rich log output
console = Console(stderr=True)

LEVELS = {
    0: logging.WARNING,
    1: logging.INFO,
}


def verbosity_to_level(verbosity: int) -> int:
    """Map a ``-v`` count to a logging level.

    0 shows warnings, 1 adds info and 2 or more adds debug output.
    """
    return LEVELS.get(verbosity, logging.DEBUG)


def setup_logging(
    verbosity: int = 0,
    log_file: Optional[str] = None,
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
) -> None:
    """Set up logging configuration.

    Args:
        verbosity: Number of ``-v`` flags given on the command line.
        log_file: Optional path to log file. If provided, logs will be
                 written to this file in addition to console output.
                 The path is expanded to handle ~ for home directory.
        log_format: Format string for file log messages.
    """
    level = verbosity_to_level(verbosity)
    debug = level == logging.DEBUG

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if log_file else level)

    # Remove existing handlers
    root_logger.handlers.clear()

    console_handler = RichHandler(
        console=console,
        show_path=debug,
        enable_link_path=debug,
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=debug,
    )
    console_handler.setLevel(level)
    root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)  # Always log debug to file
        file_handler.setFormatter(logging.Formatter(log_format))
        root_logger.addHandler(file_handler)

    logger = logging.getLogger(__name__)
    logger.debug("Logging initialized (verbosity=%s)", verbosity)
    if log_file:
        logger.debug("Log file: %s", log_file)

    def handle_exception(
        exc_type: Type[BaseException],
        exc_value: BaseException,
        exc_traceback: Optional[TracebackType],
    ) -> None:
        """Handle uncaught exceptions by logging them."""
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_traceback)
            return

        logger.critical(
            "Uncaught exception",
            exc_info=(exc_type, exc_value, exc_traceback),
        )

    sys.excepthook = handle_exception
