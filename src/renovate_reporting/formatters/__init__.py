"""Report formatters."""

from .base import BaseFormatter
from .json_formatter import JsonFormatter, report_to_json
from .mailing_list import MailingListFormatter, render_mailing_list_report


def get_formatter(name: str) -> BaseFormatter:
    """Get a formatter instance by name.

    Args:
        name: One of "json", "mailing-list"

    Returns:
        Formatter instance

    Raises:
        ValueError: If name is not recognized
    """
    formatters = {
        "json": JsonFormatter,
        "mailing-list": MailingListFormatter,
    }
    cls = formatters.get(name)
    if cls is None:
        raise ValueError(f"Unknown formatter: {name!r}. Choose from: {', '.join(sorted(formatters))}")
    return cls()


__all__ = [
    "BaseFormatter",
    "JsonFormatter",
    "MailingListFormatter",
    "get_formatter",
    "render_mailing_list_report",
    "report_to_json",
]
