"""
Logging configuration for renovate-reporting.

Provides rich terminal output plus the process-wide problem collector that
feeds report finalization.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from .problems import ProblemCollector

_problem_collector = ProblemCollector()


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Configure logging with rich handler for colored output.

    Args:
        verbose: Enable DEBUG level logging
        quiet: Suppress all but ERROR level logging
        log_file: Optional file path to write logs to

    Returns:
        Configured logger instance for renovate_reporting
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    console = Console(stderr=True)

    rich_handler = RichHandler(
        console=console,
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        markup=False,
        show_time=True,
        show_path=verbose,
    )
    rich_handler.setLevel(level)
    handlers: list[logging.Handler] = [rich_handler]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
        )
        file_handler.setLevel(level)
        handlers.append(file_handler)

    # Warnings always reach the problem collector, even when the console is quiet
    logger_level = min(level, logging.WARNING)
    logging.basicConfig(level=logger_level, format="%(message)s", datefmt="[%X]", handlers=handlers)

    root = logging.getLogger()
    if _problem_collector not in root.handlers:
        root.addHandler(_problem_collector)

    logger = logging.getLogger("renovate_reporting")
    logger.setLevel(logger_level)

    return logger


def get_problem_collector() -> ProblemCollector:
    """Return the process-wide problem collector installed by setup_logging."""
    return _problem_collector


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance for a specific module.

    Args:
        name: Module name (e.g., 'renovate_reporting.export')
              If None, returns the root renovate_reporting logger

    Returns:
        Logger instance
    """
    if name is None:
        return logging.getLogger("renovate_reporting")

    if not name.startswith("renovate_reporting"):
        name = f"renovate_reporting.{name}"

    return logging.getLogger(name)
