"""Collect per-run statistics into a single report.

One aggregator belongs to one run: construct it when the run starts, feed it
from wherever stats are produced, finalize it, then hand it to the exporter.

Usage:
    aggregator = StatsAggregator(problem_source=get_problem_collector().get_problems)
    aggregator.add_branch_stats(config, branches)
    aggregator.add_extraction_stats(config, extract_result)
    aggregator.finalize_report()
    report = aggregator.get_report()
"""

from __future__ import annotations

import copy
import dataclasses
from typing import Any, Callable, Iterable, Mapping, Optional, Union

from .config import ReportConfig
from .logging_config import get_logger
from .models import (
    BranchSummary,
    ExtractResult,
    LibYearsWithStatus,
    Problem,
    Report,
    RepositoryReport,
)

logger = get_logger(__name__)

ProblemSource = Callable[[], Iterable[Problem]]


class StatsAggregator:
    """Mutable report store for a single run.

    Attributes:
        problem_source: Callable draining the problems logged during the run,
            consulted by :meth:`finalize_report` when no explicit list is given.
    """

    def __init__(self, problem_source: Optional[ProblemSource] = None) -> None:
        self.problem_source = problem_source
        self._report = Report()

    @classmethod
    def from_report(cls, report: Report, problem_source: Optional[ProblemSource] = None) -> StatsAggregator:
        """Seed an aggregator with a previously saved report."""
        aggregator = cls(problem_source=problem_source)
        aggregator._report = copy.deepcopy(report)
        return aggregator

    def add_branch_stats(
        self,
        config: ReportConfig,
        branches: Iterable[Union[BranchSummary, Mapping[str, Any]]],
    ) -> None:
        """Replace the repository's branch list."""
        repo = self._repository_for(config)
        if repo is None:
            return
        repo.branches = [_as_branch(b) for b in branches]
        logger.debug(
            "Recorded branch stats",
            extra={"repository": config.repository, "branches": len(repo.branches)},
        )

    def add_extraction_stats(self, config: ReportConfig, extract_result: ExtractResult) -> None:
        """Replace the repository's package files with the extraction result."""
        repo = self._repository_for(config)
        if repo is None:
            return
        repo.package_files = copy.deepcopy(extract_result.package_files)

    def add_lib_years(self, config: ReportConfig, lib_years: LibYearsWithStatus) -> None:
        repo = self._repository_for(config)
        if repo is None:
            return
        repo.lib_years_with_status = copy.deepcopy(lib_years)

    def finalize_report(self, problems: Optional[Iterable[Problem]] = None) -> int:
        """Route the run's problems into the report.

        Problems attributed to a repository go to that repository (created if
        needed), the rest to the root list. The attribution is cleared once
        routed.

        Args:
            problems: Problems to route; defaults to draining ``problem_source``

        Returns:
            Number of problems routed.
        """
        if problems is None:
            problems = self.problem_source() if self.problem_source is not None else []

        routed = 0
        for problem in problems:
            repository = problem.repository
            stored = dataclasses.replace(
                problem, repository=None, context=copy.deepcopy(problem.context)
            )
            if repository:
                self._coerce_repo(repository).problems.append(stored)
            else:
                self._report.problems.append(stored)
            routed += 1

        logger.debug("Finalized report", extra={"problems": routed})
        return routed

    def get_report(self) -> Report:
        """Return an independent copy of the current report."""
        return copy.deepcopy(self._report)

    def reset(self) -> None:
        """Drop all collected stats. Intended for test isolation."""
        self._report = Report()

    def _repository_for(self, config: ReportConfig) -> Optional[RepositoryReport]:
        if not config.enabled:
            return None
        if not config.repository:
            logger.warning(
                "Skipping report stats without a repository name",
                extra={"reportType": config.report_type},
            )
            return None
        return self._coerce_repo(config.repository)

    def _coerce_repo(self, repository: str) -> RepositoryReport:
        repo = self._report.repositories.get(repository)
        if repo is None:
            repo = RepositoryReport()
            self._report.repositories[repository] = repo
        return repo


def _as_branch(branch: Union[BranchSummary, Mapping[str, Any]]) -> BranchSummary:
    if isinstance(branch, BranchSummary):
        return copy.deepcopy(branch)
    return BranchSummary.from_dict(dict(branch))
