"""Mailing-list formatter: the report as an RFC-822 style plain-text email.

Output is a pure function of the config, the report and the clock, so two
renders of the same report at the same instant are byte-identical:

    From: renovate@example.com
    To: deps@example.com
    Subject: Renovate dependency update summary (1 repositories)
    Date: Sun, 08 Feb 2026 00:00:00 GMT
    MIME-Version: 1.0
    Content-Type: text/plain; charset=utf-8
    Content-Transfer-Encoding: 8bit

    Renovate mailing list summary
    Generated: 2026-02-08T00:00:00.000Z
    ...
"""

from __future__ import annotations

from datetime import datetime
from email.utils import format_datetime
from typing import Optional

from ..clock import utc_now
from ..config import DEFAULT_MAILING_LIST_FROM, ReportConfig
from ..models import BranchSummary, Report, UpgradeSummary
from .base import BaseFormatter

UNDISCLOSED_RECIPIENTS = "undisclosed-recipients:;"


def _iso_timestamp(now: datetime) -> str:
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def render_branch_summary(branch: BranchSummary) -> str:
    details: list[str] = []
    if branch.result:
        details.append(f"result={branch.result}")
    if branch.pr_no is not None:
        details.append(f"pr={branch.pr_no}")
    if branch.pr_blocked_by:
        details.append(f"blocked={branch.pr_blocked_by}")

    suffix = f" ({', '.join(details)})" if details else ""
    name = branch.branch_name if branch.branch_name is not None else "unknown"
    return f"- Branch: {name}{suffix}"


def render_upgrade_summary(upgrade: UpgradeSummary) -> str:
    name = upgrade.dependency_name
    current = upgrade.current
    nxt = upgrade.next
    update_type = f" ({upgrade.update_type})" if upgrade.update_type else ""
    file_info = f" [{upgrade.package_file}]" if upgrade.package_file else ""
    return (
        f"- {name if name is not None else 'unknown'}: "
        f"{current if current is not None else '?'} -> {nxt if nxt is not None else '?'}"
        f"{update_type}{file_info}"
    )


def render_mailing_list_report(
    config: ReportConfig,
    report: Report,
    now: Optional[datetime] = None,
) -> str:
    """Render the report as an email document.

    Args:
        config: Supplies From/To/Cc/Subject
        report: Aggregated report
        now: Clock for the Date header and the generation timestamp

    Returns:
        Headers, a blank line, then the body, ending in exactly one newline.
    """
    now = utc_now(now)
    repository_names = sorted(report.repositories)
    recipients = ", ".join(config.mailing_list_to)
    subject = config.mailing_list_subject
    if subject is None:
        subject = f"Renovate dependency update summary ({len(repository_names)} repositories)"

    headers = [
        f"From: {config.mailing_list_from if config.mailing_list_from is not None else DEFAULT_MAILING_LIST_FROM}",
        f"To: {recipients or UNDISCLOSED_RECIPIENTS}",
    ]
    if config.mailing_list_cc:
        headers.append(f"Cc: {', '.join(config.mailing_list_cc)}")
    headers.extend(
        [
            f"Subject: {subject}",
            f"Date: {format_datetime(now, usegmt=True)}",
            "MIME-Version: 1.0",
            "Content-Type: text/plain; charset=utf-8",
            "Content-Transfer-Encoding: 8bit",
        ]
    )

    body = [
        "Renovate mailing list summary",
        f"Generated: {_iso_timestamp(now)}",
        f"Repositories: {len(repository_names)}",
        f"Global problems: {len(report.problems)}",
        "",
    ]

    for repository_name in repository_names:
        repo_report = report.repositories[repository_name]
        body.append(f"Repository: {repository_name}")
        body.append(f"Repository problems: {len(repo_report.problems)}")
        body.append(f"Tracked branches: {len(repo_report.branches)}")

        if not repo_report.branches:
            body.append("- No branch updates in this run.")
            body.append("")
            continue

        for branch in repo_report.branches:
            body.append(render_branch_summary(branch))
            if not branch.upgrades:
                body.append("  - No upgrades listed.")
                continue
            for upgrade in branch.upgrades:
                body.append(f"  {render_upgrade_summary(upgrade)}")
        body.append("")

    return "\n".join(headers) + "\n\n" + "\n".join(body).rstrip() + "\n"


class MailingListFormatter(BaseFormatter):
    """Render the report as a plain-text email."""

    def __init__(self, now: Optional[datetime] = None):
        self.now = now

    def render(self, report: Report, config: ReportConfig) -> None:
        print(self.format(report, config), end="")

    def format(self, report: Report, config: ReportConfig) -> str:
        return render_mailing_list_report(config, report, now=self.now)
