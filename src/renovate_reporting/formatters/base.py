"""Base formatter interface for report rendering."""

from abc import ABC, abstractmethod

from ..config import ReportConfig
from ..models import Report


class BaseFormatter(ABC):
    """Abstract base class for report formatters."""

    @abstractmethod
    def render(self, report: Report, config: ReportConfig) -> None:
        """Render the report to stdout."""

    @abstractmethod
    def format(self, report: Report, config: ReportConfig) -> str:
        """Return formatted string representation of the report."""
