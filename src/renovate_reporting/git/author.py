"""Commit identity for the mailing-list report commits."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

DEFAULT_AUTHOR_NAME = "Renovate Bot"
DEFAULT_AUTHOR_EMAIL = "renovate@localhost"

_AUTHOR_RE = re.compile(r"^(?P<name>[^<]+?)\s*<(?P<email>[^>]+)>$")


@dataclass(frozen=True)
class GitAuthor:
    name: str
    email: str

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"


DEFAULT_AUTHOR = GitAuthor(DEFAULT_AUTHOR_NAME, DEFAULT_AUTHOR_EMAIL)


def parse_git_author(value: Optional[str]) -> GitAuthor:
    """Parse ``"Name <email>"``.

    Anything that does not parse yields the default bot identity instead of an
    error.
    """
    if value is None:
        return DEFAULT_AUTHOR

    match = _AUTHOR_RE.match(value.strip())
    if match is None:
        return DEFAULT_AUTHOR

    name = match.group("name").strip()
    email = match.group("email").strip()
    if name and email:
        return GitAuthor(name, email)
    return DEFAULT_AUTHOR
