"""
renovate-reporting - run statistics and report publishing for dependency updates

Collects per-repository branch outcomes, extracted package files, lib-year
metrics and logged problems during a run, then exports the report to a log,
a file, a mailing-list email (optionally committed to a Git branch) or S3.
"""

__version__ = "0.1.0"

from .aggregator import StatsAggregator
from .config import ReportConfig, load_config
from .export import ExportDispatcher, ExportOutcome, ExportResult, export_stats
from .models import (
    BranchSummary,
    ExtractResult,
    LibYearsWithStatus,
    Problem,
    Report,
    RepositoryReport,
    UpgradeSummary,
)

__all__ = [
    "StatsAggregator",
    "ReportConfig",
    "load_config",
    "ExportDispatcher",
    "ExportOutcome",
    "ExportResult",
    "export_stats",
    "BranchSummary",
    "ExtractResult",
    "LibYearsWithStatus",
    "Problem",
    "Report",
    "RepositoryReport",
    "UpgradeSummary",
]
