"""Export the aggregated report through the configured sink.

Sinks:
    logging       log the report
    file          write compact JSON to ``report_path``
    mailing-list  render an email document, write or log it, and optionally
                  publish it to a Git branch
    s3            upload compact JSON to the ``s3://bucket/key`` in ``report_path``

Exporting never fails the run: every error ends as a logged warning and an
``ExportOutcome.FAILED`` result.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Union

from .aggregator import StatsAggregator
from .config import ReportConfig
from .file_ops import write_system_file
from .formatters import render_mailing_list_report, report_to_json
from .git.publisher import GitPublisher, PublishResult
from .logging_config import get_logger
from .models import Report
from .storage import S3Client, S3Location, get_s3_client, parse_s3_url

logger = get_logger(__name__)

JSON_CONTENT_TYPE = "application/json"


class ExportOutcome(Enum):
    DISABLED = "disabled"
    LOGGED = "logged"
    WRITTEN = "written"
    UPLOADED = "uploaded"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class ExportResult:
    """What an export did.

    ``publish`` is set when the mailing-list sink attempted a Git publish; a
    failed publish does not turn the export itself into a failure.
    """

    sink: Optional[str]
    outcome: ExportOutcome
    detail: Optional[str] = None
    publish: Optional[PublishResult] = None

    @property
    def ok(self) -> bool:
        return self.outcome is not ExportOutcome.FAILED


class ExportDispatcher:
    """Send the report of ``aggregator`` to the sink selected by the config.

    The filesystem, object storage and Git collaborators are injectable so
    that callers (and tests) can substitute their own.
    """

    def __init__(
        self,
        aggregator: StatsAggregator,
        write_file: Callable[[Union[str, Path], str], object] = write_system_file,
        parse_destination: Callable[[Optional[str]], Optional[S3Location]] = parse_s3_url,
        get_client: Callable[[Optional[str], bool], S3Client] = get_s3_client,
        publisher: Optional[GitPublisher] = None,
        now: Optional[datetime] = None,
    ):
        self.aggregator = aggregator
        self.write_file = write_file
        self.parse_destination = parse_destination
        self.get_client = get_client
        self.publisher = publisher or GitPublisher(now=now)
        self.now = now

    def export_stats(self, config: ReportConfig) -> ExportResult:
        if not config.enabled:
            return ExportResult(sink=None, outcome=ExportOutcome.DISABLED)

        sinks = {
            "logging": self._export_logging,
            "file": self._export_file,
            "mailing-list": self._export_mailing_list,
            "s3": self._export_s3,
        }
        try:
            report = self.aggregator.get_report()
            return sinks[config.report_type](config, report)
        except Exception as err:
            logger.warning("Report export failed: %s", err, extra={"err": str(err)})
            return ExportResult(sink=config.report_type, outcome=ExportOutcome.FAILED, detail=str(err))

    def _export_logging(self, config: ReportConfig, report: Report) -> ExportResult:
        report_json = report_to_json(report)
        logger.info("Printing report: %s", report_json, extra={"report": report.to_dict()})
        return ExportResult(sink="logging", outcome=ExportOutcome.LOGGED)

    def _export_file(self, config: ReportConfig, report: Report) -> ExportResult:
        path = config.report_path
        self.write_file(path, report_to_json(report))
        logger.debug("Writing report", extra={"path": path})
        return ExportResult(sink="file", outcome=ExportOutcome.WRITTEN, detail=path)

    def _export_mailing_list(self, config: ReportConfig, report: Report) -> ExportResult:
        mail_report = render_mailing_list_report(config, report, now=self.now)
        if config.report_path is not None:
            self.write_file(config.report_path, mail_report)
            logger.debug("Writing mailing list report", extra={"path": config.report_path})
            outcome, detail = ExportOutcome.WRITTEN, config.report_path
        else:
            logger.info(
                "Printing mailing list report:\n%s", mail_report, extra={"mailReport": mail_report}
            )
            outcome, detail = ExportOutcome.LOGGED, None

        publish = None
        if config.mailing_list_git_repo:
            publish = self.publisher.publish(config, mail_report)

        return ExportResult(sink="mailing-list", outcome=outcome, detail=detail, publish=publish)

    def _export_s3(self, config: ReportConfig, report: Report) -> ExportResult:
        location = self.parse_destination(config.report_path)
        if location is None:
            logger.warning("Failed to parse s3 URL", extra={"reportPath": config.report_path})
            return ExportResult(sink="s3", outcome=ExportOutcome.SKIPPED, detail=config.report_path)

        client = self.get_client(config.s3_endpoint, config.s3_path_style)
        client.put(location.bucket, location.key, report_to_json(report), JSON_CONTENT_TYPE)
        logger.debug("Uploaded report", extra={"bucket": location.bucket, "key": location.key})
        return ExportResult(
            sink="s3",
            outcome=ExportOutcome.UPLOADED,
            detail=f"s3://{location.bucket}/{location.key}",
        )


def export_stats(
    config: ReportConfig,
    aggregator: StatsAggregator,
    now: Optional[datetime] = None,
) -> ExportResult:
    """Export ``aggregator``'s report with the default collaborators."""
    return ExportDispatcher(aggregator, now=now).export_stats(config)
