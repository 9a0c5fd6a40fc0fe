"""Shared CLI helpers."""

import json
from pathlib import Path
from typing import Optional

from rich.console import Console

from ..config import ReportConfig, load_config
from ..exceptions import ReportingError
from ..models import Report

console = Console()


def resolve_config(
    config: Optional[Path] = None,
    report_type: Optional[str] = None,
    report_path: Optional[str] = None,
) -> ReportConfig:
    """Build the report config from CLI options."""
    overrides = {}
    if report_type is not None:
        overrides["report_type"] = report_type
    if report_path is not None:
        overrides["report_path"] = report_path
    return load_config(config_file=config, **overrides)


def load_report(path: Path) -> Report:
    """Read a JSON report previously written by the file sink."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ReportingError(f"Cannot read report: {path}", details={"reason": f"OS error: {e}"})
    except json.JSONDecodeError as e:
        raise ReportingError(f"Cannot read report: {path}", details={"reason": f"not valid JSON: {e}"})
    if not isinstance(data, dict):
        raise ReportingError(
            f"Cannot read report: {path}", details={"reason": "expected a JSON object at the top level"}
        )
    return Report.from_dict(data)
