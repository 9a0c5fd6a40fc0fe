"""Git publication of the mailing-list report."""

from .author import DEFAULT_AUTHOR, GitAuthor, parse_git_author
from .branch_name import clean_branch_name, resolve_branch_name
from .publisher import (
    GitPublishContext,
    GitPublisher,
    GitStep,
    PublishOutcome,
    PublishResult,
    publish_mailing_list_report,
)

__all__ = [
    "DEFAULT_AUTHOR",
    "GitAuthor",
    "GitPublishContext",
    "GitPublisher",
    "GitStep",
    "PublishOutcome",
    "PublishResult",
    "clean_branch_name",
    "parse_git_author",
    "publish_mailing_list_report",
    "resolve_branch_name",
]
