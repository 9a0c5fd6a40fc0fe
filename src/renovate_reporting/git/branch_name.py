"""Branch names for the mailing-list report branch.

Templates may contain run-time tokens, replaced at every occurrence:

    {{date}}       2026-02-08           (UTC calendar date)
    {{timestamp}}  20260208-000000      (UTC, second resolution)
    {{epoch}}      1770508800000        (milliseconds since the Unix epoch)

The result is always cleaned into a usable Git ref name. Neither function
raises for any input string.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Optional

from ..clock import utc_now
from ..config import DEFAULT_GIT_BRANCH


def format_date(now: datetime) -> str:
    return utc_now(now).strftime("%Y-%m-%d")


def format_timestamp(now: datetime) -> str:
    return utc_now(now).strftime("%Y%m%d-%H%M%S")


def format_epoch(now: datetime) -> str:
    now = utc_now(now)
    return str(int(now.timestamp()) * 1000 + now.microsecond // 1000)


def _clean_git_ref(value: str) -> str:
    """Apply the common git-ref cleaning rules (``git check-ref-format`` subset)."""
    value = value.replace("./", "/")
    value = value.replace("..", ".")
    value = value.replace(" ", "-")
    value = re.sub(r"^[~^:?*\\\-]", "", value)
    value = re.sub(r"[~^:?*\\]", "-", value)
    value = re.sub(r"[~^:?*\\\-]$", "", value)
    value = value.replace("@{", "-")
    value = re.sub(r"\.$", "", value)
    value = re.sub(r"/$", "", value)
    value = re.sub(r"\.lock$", "", value)
    return value


def clean_branch_name(name: str) -> str:
    """Turn an arbitrary string into a Git branch name; may return ''."""
    value = _clean_git_ref(name)
    value = re.sub(r"^\.+|\.+$", "", value)
    value = value.replace("/.", "/")
    value = re.sub(r"\s", "", value)
    value = re.sub(r"[\[\]?:\\^~]", "-", value)
    value = re.sub(r"(^|/)-+", r"\1", value)
    value = re.sub(r"-+(/|$)", r"\1", value)
    # empty segments ("a//b", leading "/") left behind by substitutions
    value = re.sub(r"/{2,}", "/", value).strip("/")
    value = re.sub(r"--+", "-", value)
    return value


def resolve_branch_name(
    template: Optional[str],
    fallback: Optional[str] = None,
    now: Optional[datetime] = None,
) -> str:
    """Expand ``template`` and clean it, falling back to ``fallback``.

    Args:
        template: Branch template; blank or None selects the fallback
        fallback: Fixed branch name used when the template is unusable
        now: Clock for the tokens (defaults to the current UTC time)

    Returns:
        A non-empty cleaned branch name.
    """
    fallback = fallback or DEFAULT_GIT_BRANCH
    template = (template or "").strip()
    if not template:
        return _cleaned_or_default(fallback, fallback)

    now = utc_now(now)
    replacements = {
        "{{date}}": format_date(now),
        "{{timestamp}}": format_timestamp(now),
        "{{epoch}}": format_epoch(now),
    }

    branch = template
    for token, value in replacements.items():
        branch = branch.replace(token, value)

    if not branch.strip():
        branch = fallback

    return _cleaned_or_default(branch, fallback)


def _cleaned_or_default(branch: str, fallback: str) -> str:
    return clean_branch_name(branch) or clean_branch_name(fallback) or DEFAULT_GIT_BRANCH
