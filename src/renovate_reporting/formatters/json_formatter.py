"""JSON formatter: the compact report document of the file and s3 sinks."""

import json

from ..config import ReportConfig
from ..models import Report
from .base import BaseFormatter


def report_to_json(report: Report) -> str:
    return json.dumps(report.to_dict(), separators=(",", ":"), ensure_ascii=False)


class JsonFormatter(BaseFormatter):
    """Render the report as compact JSON."""

    def render(self, report: Report, config: ReportConfig) -> None:
        print(self.format(report, config))

    def format(self, report: Report, config: ReportConfig) -> str:
        return report_to_json(report)
