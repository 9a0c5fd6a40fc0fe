"""Exception hierarchy for renovate-reporting."""

from .base import ReportingError
from .config import (
    ConfigurationError,
    InvalidConfigError,
)
from .export import (
    CommandError,
    ExportError,
    FileAccessError,
    GitPublishError,
    StorageError,
)

__all__ = [
    "ReportingError",
    "ConfigurationError",
    "InvalidConfigError",
    "ExportError",
    "FileAccessError",
    "CommandError",
    "StorageError",
    "GitPublishError",
]
