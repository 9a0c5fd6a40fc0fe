"""Configuration loading and management for renovate-reporting.

Configuration sources are merged in priority order:
    1. Defaults (defined in ReportConfig)
    2. Global config (~/.renovate-reporting.toml)
    3. Project config (./renovate-reporting.toml)
    4. Explicit config file
    5. Environment variables (RENOVATE_REPORT_* prefix)
    6. Keyword overrides (typically from CLI flags)

Example:
    >>> config = load_config(report_type="file", report_path="report.json")
    >>> config.enabled
    True
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError


REPORT_TYPES = ("logging", "file", "mailing-list", "s3")

ENV_PREFIX = "RENOVATE_REPORT_"

DEFAULT_MAILING_LIST_FROM = "renovate@localhost"
DEFAULT_GIT_BRANCH = "renovate/mailing-list-report"
DEFAULT_GIT_FILE = "reports/renovate-summary.eml"
DEFAULT_GIT_COMMIT_MESSAGE = "chore(mailing-list): update renovate summary"


@dataclass(frozen=True)
class ReportConfig:
    """Settings consumed by the aggregator and the export sinks.

    Attributes:
        Run identity:
            repository: Repository the current stats belong to ("org/repo")

        Sink selection:
            report_type: One of logging/file/mailing-list/s3; None disables reporting
            report_path: File path, mailing-list output path or s3:// URL

        Object storage:
            s3_endpoint: Custom S3 endpoint URL
            s3_path_style: Use path-style bucket addressing

        Mailing list addressing:
            mailing_list_from: From header
            mailing_list_to: To recipients
            mailing_list_cc: Cc recipients (header omitted when empty)
            mailing_list_subject: Subject override

        Git publication of the mailing-list document:
            mailing_list_git_repo: Remote to clone and push to; None disables publishing
            mailing_list_git_branch: Fixed branch name, also the template fallback
            mailing_list_git_branch_template: Branch template with {{date}}, {{timestamp}}, {{epoch}}
            mailing_list_git_file: Path of the document inside the repository
            mailing_list_git_commit_message: Commit message
            git_author: Commit identity as "Name <email>"
    """

    repository: Optional[str] = None

    report_type: Optional[str] = None
    report_path: Optional[str] = None

    s3_endpoint: Optional[str] = None
    s3_path_style: bool = False

    mailing_list_from: Optional[str] = None
    mailing_list_to: list[str] = field(default_factory=list)
    mailing_list_cc: list[str] = field(default_factory=list)
    mailing_list_subject: Optional[str] = None

    mailing_list_git_repo: Optional[str] = None
    mailing_list_git_branch: Optional[str] = None
    mailing_list_git_branch_template: Optional[str] = None
    mailing_list_git_file: Optional[str] = None
    mailing_list_git_commit_message: Optional[str] = None
    git_author: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.report_type is not None and self.report_type not in REPORT_TYPES:
            raise InvalidConfigError(
                "report_type",
                self.report_type,
                f"expected one of {', '.join(REPORT_TYPES)}",
            )

        # file and s3 sinks have nowhere to go without a path
        if self.report_type in ("file", "s3") and not self.report_path:
            raise InvalidConfigError(
                "report_path", self.report_path, f"required when report_type is {self.report_type}"
            )

        for list_field in ("mailing_list_to", "mailing_list_cc"):
            value = getattr(self, list_field)
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise InvalidConfigError(list_field, value, "expected a list of strings")

    @property
    def enabled(self) -> bool:
        """Whether any report sink is configured."""
        return self.report_type is not None

    @property
    def git_branch_fallback(self) -> str:
        return self.mailing_list_git_branch or DEFAULT_GIT_BRANCH

    @property
    def git_file(self) -> str:
        return self.mailing_list_git_file or DEFAULT_GIT_FILE

    @property
    def git_commit_message(self) -> str:
        return self.mailing_list_git_commit_message or DEFAULT_GIT_COMMIT_MESSAGE


def load_config(config_file: Optional[Path] = None, **overrides: Any) -> ReportConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides; ``None`` values are ignored

    Returns:
        Validated ReportConfig instance

    Raises:
        ConfigurationError: If a config file is invalid or missing
        InvalidConfigError: If a merged value fails validation
    """
    merged: dict[str, Any] = {}

    global_config = Path.home() / ".renovate-reporting.toml"
    if global_config.exists():
        try:
            merged.update(_load_toml_file(global_config))
        except Exception as e:
            raise ConfigurationError(f"Invalid global config '{global_config}': {e}")

    project_config = Path.cwd() / "renovate-reporting.toml"
    if project_config.exists():
        try:
            merged.update(_load_toml_file(project_config))
        except Exception as e:
            raise ConfigurationError(f"Invalid project config '{project_config}': {e}")

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        try:
            merged.update(_load_toml_file(config_file))
        except Exception as e:
            raise ConfigurationError(f"Invalid config file '{config_file}': {e}")

    merged.update(_load_env_vars())
    merged.update({k: v for k, v in overrides.items() if v is not None})

    # TOML keys may use dashes ("report-type") like the CLI flags
    normalized = {key.replace("-", "_"): value for key, value in merged.items()}

    try:
        return ReportConfig(**normalized)
    except TypeError as e:
        raise ConfigurationError(f"Invalid configuration: {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from RENOVATE_REPORT_* environment variables.

    Examples:
        RENOVATE_REPORT_REPORT_TYPE=mailing-list
        RENOVATE_REPORT_MAILING_LIST_TO=deps@example.com,ops@example.com
        RENOVATE_REPORT_S3_PATH_STYLE=true

    Returns:
        Dict of field_name -> parsed_value for any variables found.
    """
    type_hints = get_type_hints(ReportConfig)
    result: dict[str, Any] = {}

    for f in fields(ReportConfig):
        env_key = f"{ENV_PREFIX}{f.name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue

        try:
            result[f.name] = _parse_env_value(env_value, type_hints[f.name])
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type."""
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]

    origin = getattr(type_hint, "__origin__", None)

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        if lower in ("false", "0", "no", "off"):
            return False
        raise ValueError(f"expected true/false, got '{value}'")

    if origin is list:
        return [item.strip() for item in value.split(",") if item.strip()]

    return value


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict."""
    try:
        import tomllib
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore

    with open(path, "rb") as f:
        return tomllib.load(f)
