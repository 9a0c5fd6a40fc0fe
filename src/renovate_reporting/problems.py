"""Collect warning-level log records as report problems.

The collector is an ordinary ``logging.Handler``: any record at WARNING or
above that reaches it is kept as a :class:`~renovate_reporting.models.Problem`.
A ``repository`` passed through ``extra=`` becomes the problem's routing key,
every other extra field becomes problem context.

Usage:
    collector = ProblemCollector()
    logging.getLogger().addHandler(collector)

    logger.warning("Lookup failed", extra={"repository": "org/repo", "dep": "lodash"})

    problems = collector.get_problems()  # drains
"""

from __future__ import annotations

import logging
from typing import Any

from .models import Problem

# Attributes every LogRecord carries; anything else arrived through ``extra=``
_RESERVED = frozenset(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {
    "message",
    "asctime",
    "taskName",
}


def _jsonable(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if isinstance(value, dict):
        return {str(k): _jsonable(v) for k, v in value.items()}
    return str(value)


class ProblemCollector(logging.Handler):
    """Logging handler that buffers problems until they are drained."""

    def __init__(self, level: int = logging.WARNING) -> None:
        super().__init__(level)
        self._problems: list[Problem] = []

    def emit(self, record: logging.LogRecord) -> None:
        context = {
            key: _jsonable(value)
            for key, value in record.__dict__.items()
            if key not in _RESERVED and key != "repository"
        }
        repository = getattr(record, "repository", None)
        self._problems.append(
            Problem(
                level=record.levelno,
                msg=record.getMessage(),
                repository=str(repository) if repository else None,
                context=context,
            )
        )

    def get_problems(self) -> list[Problem]:
        """Return every problem collected since the previous call and forget them."""
        with self.lock:
            problems, self._problems = self._problems, []
        return problems

    @property
    def pending(self) -> int:
        return len(self._problems)
