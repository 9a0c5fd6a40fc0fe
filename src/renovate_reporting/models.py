"""Report data model.

The wire form (``to_dict``) uses the camelCase keys of the JSON report that
downstream consumers read; optional fields are omitted when unset. Attribute
names stay snake_case.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


def _compact(data: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in data.items() if v is not None}


@dataclass
class Problem:
    """A warning or error emitted during the run.

    ``repository`` is only used to route the problem during finalization and is
    cleared once routed.
    """

    level: int
    msg: str
    repository: Optional[str] = None
    context: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = dict(self.context)
        if self.repository is not None:
            data["repository"] = self.repository
        data["level"] = self.level
        data["msg"] = self.msg
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Problem:
        context = {k: v for k, v in data.items() if k not in ("level", "msg", "repository")}
        return cls(
            level=int(data.get("level", 0)),
            msg=str(data.get("msg", "")),
            repository=data.get("repository"),
            context=context,
        )


@dataclass
class UpgradeSummary:
    """One dependency upgrade inside a branch."""

    package_name: Optional[str] = None
    dep_name: Optional[str] = None
    current_version: Optional[str] = None
    current_value: Optional[str] = None
    current_digest: Optional[str] = None
    new_version: Optional[str] = None
    new_value: Optional[str] = None
    new_digest: Optional[str] = None
    update_type: Optional[str] = None
    package_file: Optional[str] = None

    @property
    def dependency_name(self) -> Optional[str]:
        return self.package_name if self.package_name is not None else self.dep_name

    @property
    def current(self) -> Optional[str]:
        """Current version, falling back to the raw value then the digest."""
        for value in (self.current_version, self.current_value, self.current_digest):
            if value is not None:
                return value
        return None

    @property
    def next(self) -> Optional[str]:
        for value in (self.new_version, self.new_value, self.new_digest):
            if value is not None:
                return value
        return None

    def to_dict(self) -> dict[str, Any]:
        return _compact(
            {
                "packageName": self.package_name,
                "depName": self.dep_name,
                "currentVersion": self.current_version,
                "currentValue": self.current_value,
                "currentDigest": self.current_digest,
                "newVersion": self.new_version,
                "newValue": self.new_value,
                "newDigest": self.new_digest,
                "updateType": self.update_type,
                "packageFile": self.package_file,
            }
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> UpgradeSummary:
        return cls(
            package_name=data.get("packageName"),
            dep_name=data.get("depName"),
            current_version=data.get("currentVersion"),
            current_value=data.get("currentValue"),
            current_digest=data.get("currentDigest"),
            new_version=data.get("newVersion"),
            new_value=data.get("newValue"),
            new_digest=data.get("newDigest"),
            update_type=data.get("updateType"),
            package_file=data.get("packageFile"),
        )


@dataclass
class BranchSummary:
    """Outcome of processing one update branch."""

    branch_name: Optional[str] = None
    result: Optional[str] = None
    pr_no: Optional[int] = None
    pr_blocked_by: Optional[str] = None
    upgrades: list[UpgradeSummary] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data = _compact(
            {
                "branchName": self.branch_name,
                "result": self.result,
                "prNo": self.pr_no,
                "prBlockedBy": self.pr_blocked_by,
            }
        )
        data["upgrades"] = [u.to_dict() for u in self.upgrades]
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BranchSummary:
        return cls(
            branch_name=data.get("branchName"),
            result=data.get("result"),
            pr_no=data.get("prNo"),
            pr_blocked_by=data.get("prBlockedBy"),
            upgrades=[UpgradeSummary.from_dict(u) for u in data.get("upgrades") or []],
        )


@dataclass
class LibYears:
    managers: dict[str, float] = field(default_factory=dict)
    total: float = 0


@dataclass
class DependencyStatus:
    outdated: int = 0
    total: int = 0


@dataclass
class LibYearsWithStatus:
    """Lib-year debt per manager plus the outdated/total dependency counts."""

    lib_years: LibYears = field(default_factory=LibYears)
    dependency_status: DependencyStatus = field(default_factory=DependencyStatus)

    def to_dict(self) -> dict[str, Any]:
        return {
            "libYears": {
                "managers": dict(self.lib_years.managers),
                "total": self.lib_years.total,
            },
            "dependencyStatus": {
                "outdated": self.dependency_status.outdated,
                "total": self.dependency_status.total,
            },
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LibYearsWithStatus:
        lib_years = data.get("libYears") or {}
        status = data.get("dependencyStatus") or {}
        return cls(
            lib_years=LibYears(
                managers=dict(lib_years.get("managers") or {}),
                total=lib_years.get("total", 0),
            ),
            dependency_status=DependencyStatus(
                outdated=status.get("outdated", 0),
                total=status.get("total", 0),
            ),
        )


@dataclass
class ExtractResult:
    """Output of dependency extraction; only ``package_files`` is reported."""

    branch_list: list[str] = field(default_factory=list)
    branches: list[dict[str, Any]] = field(default_factory=list)
    package_files: dict[str, list[dict[str, Any]]] = field(default_factory=dict)


@dataclass
class RepositoryReport:
    problems: list[Problem] = field(default_factory=list)
    branches: list[BranchSummary] = field(default_factory=list)
    package_files: dict[str, list[dict[str, Any]]] = field(default_factory=dict)
    lib_years_with_status: Optional[LibYearsWithStatus] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "problems": [p.to_dict() for p in self.problems],
            "branches": [b.to_dict() for b in self.branches],
            "packageFiles": self.package_files,
        }
        if self.lib_years_with_status is not None:
            data["libYearsWithStatus"] = self.lib_years_with_status.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RepositoryReport:
        lib_years = data.get("libYearsWithStatus")
        return cls(
            problems=[Problem.from_dict(p) for p in data.get("problems") or []],
            branches=[BranchSummary.from_dict(b) for b in data.get("branches") or []],
            package_files=dict(data.get("packageFiles") or {}),
            lib_years_with_status=(
                LibYearsWithStatus.from_dict(lib_years) if lib_years is not None else None
            ),
        )


@dataclass
class Report:
    """Aggregated statistics of one run, keyed by repository name."""

    problems: list[Problem] = field(default_factory=list)
    repositories: dict[str, RepositoryReport] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "problems": [p.to_dict() for p in self.problems],
            "repositories": {name: repo.to_dict() for name, repo in self.repositories.items()},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Report:
        return cls(
            problems=[Problem.from_dict(p) for p in data.get("problems") or []],
            repositories={
                name: RepositoryReport.from_dict(repo)
                for name, repo in (data.get("repositories") or {}).items()
            },
        )
