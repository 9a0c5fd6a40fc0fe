"""Publish the mailing-list document to a branch of a reporting repository.

Each publish is one attempt in a fresh scratch directory:

    clone --depth 1 -> ls-remote <branch> -> fetch --depth 1 <branch>
    -> checkout -B <branch> [FETCH_HEAD] -> write file -> add -> status
        (nothing staged: stop, the document is already committed)
    -> config user.name -> config user.email -> commit
    -> push --force-with-lease=<branch>:<lookup sha> origin HEAD:<branch>

The fetch runs only when the lookup found the branch on the remote; the
checkout then starts from its tip so the status check compares against
what is already published. A branch that does not exist yet is created
from the clone's default branch and leased against an empty ref.

The scratch directory is removed on every exit path. Failures never
propagate: they are logged and reported on the returned PublishResult,
together with the step that failed.
"""

from __future__ import annotations

import shutil
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

from ..commands import CommandResult, CommandRunner, run_command
from ..config import ReportConfig
from ..exceptions import GitPublishError
from ..file_ops import write_system_file
from ..logging_config import get_logger
from ..security import redact_credentials
from .author import DEFAULT_AUTHOR, GitAuthor, parse_git_author
from .branch_name import resolve_branch_name

logger = get_logger(__name__)

SCRATCH_PREFIX = "renovate-mailing-list-"


class GitStep(Enum):
    """Named steps of the publish pipeline, in execution order."""

    RESOLVE = "resolve"
    SCRATCH = "scratch"
    CLONE = "clone"
    LOOKUP = "lookup"
    FETCH = "fetch"
    CHECKOUT = "checkout"
    WRITE = "write"
    ADD = "add"
    STATUS = "status"
    CONFIG_NAME = "config-name"
    CONFIG_EMAIL = "config-email"
    COMMIT = "commit"
    PUSH = "push"


PREPARE_STEPS = (
    GitStep.CLONE,
    GitStep.LOOKUP,
    GitStep.FETCH,
    GitStep.CHECKOUT,
    GitStep.WRITE,
    GitStep.ADD,
)
COMMIT_STEPS = (GitStep.CONFIG_NAME, GitStep.CONFIG_EMAIL, GitStep.COMMIT, GitStep.PUSH)


class PublishOutcome(Enum):
    PUSHED = "pushed"
    UNCHANGED = "unchanged"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class GitPublishContext:
    """State of one publish attempt."""

    repo_url: str
    scratch_dir: Path
    branch: str
    file_name: str
    commit_message: str
    document: str
    author: GitAuthor = DEFAULT_AUTHOR
    # Tip of the branch on the remote; None while the branch does not exist.
    remote_sha: Optional[str] = None
    completed: list[GitStep] = field(default_factory=list)


@dataclass(frozen=True)
class PublishResult:
    outcome: PublishOutcome
    branch: Optional[str] = None
    file_name: Optional[str] = None
    failed_step: Optional[GitStep] = None
    error: Optional[str] = None
    completed_steps: tuple[GitStep, ...] = ()
    scratch_dir: Optional[Path] = None

    @property
    def ok(self) -> bool:
        return self.outcome is not PublishOutcome.FAILED


class GitPublisher:
    """Commit and push a rendered document to a dedicated branch.

    Args:
        run: Command runner used for every git invocation
        now: Fixed clock for branch templates (defaults to the current time)
        scratch_root: Parent directory for scratch clones (system temp by default)
    """

    def __init__(
        self,
        run: CommandRunner = run_command,
        now: Optional[datetime] = None,
        scratch_root: Optional[Path] = None,
    ):
        self.run = run
        self.now = now
        self.scratch_root = scratch_root
        self._actions: dict[GitStep, Callable[[GitPublishContext], Optional[CommandResult]]] = {
            GitStep.CLONE: self._clone,
            GitStep.LOOKUP: self._lookup,
            GitStep.FETCH: self._fetch,
            GitStep.CHECKOUT: self._checkout,
            GitStep.WRITE: self._write,
            GitStep.ADD: self._add,
            GitStep.STATUS: self._status,
            GitStep.CONFIG_NAME: self._config_name,
            GitStep.CONFIG_EMAIL: self._config_email,
            GitStep.COMMIT: self._commit,
            GitStep.PUSH: self._push,
        }

    def publish(self, config: ReportConfig, document: str) -> PublishResult:
        """Publish ``document``; never raises."""
        repo_url = config.mailing_list_git_repo
        if not repo_url:
            return PublishResult(outcome=PublishOutcome.SKIPPED)

        ctx: Optional[GitPublishContext] = None
        scratch_dir: Optional[Path] = None
        try:
            try:
                branch = resolve_branch_name(
                    config.mailing_list_git_branch_template,
                    config.git_branch_fallback,
                    now=self.now,
                )
            except Exception as e:
                raise GitPublishError(GitStep.RESOLVE, str(e)) from e

            with self._scratch_dir() as scratch_dir:
                ctx = GitPublishContext(
                    repo_url=repo_url,
                    scratch_dir=scratch_dir,
                    branch=branch,
                    file_name=config.git_file,
                    commit_message=config.git_commit_message,
                    document=document,
                )
                return self._publish(ctx, config)
        except GitPublishError as e:
            logger.warning(
                "Failed to push mailing list report to git",
                extra={"err": str(e), "step": e.step.value},
            )
            return PublishResult(
                outcome=PublishOutcome.FAILED,
                branch=ctx.branch if ctx else None,
                file_name=ctx.file_name if ctx else None,
                failed_step=e.step,
                error=e.reason,
                completed_steps=tuple(ctx.completed) if ctx else (),
                scratch_dir=scratch_dir,
            )
        except Exception as e:
            err = redact_credentials(str(e))
            logger.warning("Failed to push mailing list report to git", extra={"err": err})
            return PublishResult(outcome=PublishOutcome.FAILED, error=err, scratch_dir=scratch_dir)

    def _publish(self, ctx: GitPublishContext, config: ReportConfig) -> PublishResult:
        for step in PREPARE_STEPS:
            if step is GitStep.FETCH and ctx.remote_sha is None:
                continue
            self._execute(step, ctx)

        status = self._execute(GitStep.STATUS, ctx)
        if status is None or not status.stdout.strip():
            logger.debug("No mailing list Git changes to commit")
            return self._result(PublishOutcome.UNCHANGED, ctx)

        ctx.author = parse_git_author(config.git_author)
        for step in COMMIT_STEPS:
            self._execute(step, ctx)

        logger.info(
            "Pushed mailing list report to git repository",
            extra={"branch": ctx.branch, "fileName": ctx.file_name},
        )
        return self._result(PublishOutcome.PUSHED, ctx)

    def _execute(self, step: GitStep, ctx: GitPublishContext) -> Optional[CommandResult]:
        try:
            result = self._actions[step](ctx)
        except Exception as e:
            raise GitPublishError(step, redact_credentials(str(e))) from e
        ctx.completed.append(step)
        return result

    @contextmanager
    def _scratch_dir(self) -> Iterator[Path]:
        try:
            path = Path(tempfile.mkdtemp(prefix=SCRATCH_PREFIX, dir=self.scratch_root))
        except OSError as e:
            raise GitPublishError(GitStep.SCRATCH, str(e)) from e
        try:
            yield path
        finally:
            shutil.rmtree(path, ignore_errors=True)

    @staticmethod
    def _result(outcome: PublishOutcome, ctx: GitPublishContext) -> PublishResult:
        return PublishResult(
            outcome=outcome,
            branch=ctx.branch,
            file_name=ctx.file_name,
            completed_steps=tuple(ctx.completed),
            scratch_dir=ctx.scratch_dir,
        )

    # ── Steps ─────────────────────────────────────────────────────

    def _git(self, ctx: GitPublishContext, *args: str) -> CommandResult:
        return self.run(["git", *args], cwd=ctx.scratch_dir)

    def _clone(self, ctx: GitPublishContext) -> CommandResult:
        return self.run(["git", "clone", "--depth", "1", ctx.repo_url, str(ctx.scratch_dir)])

    def _lookup(self, ctx: GitPublishContext) -> CommandResult:
        result = self._git(ctx, "ls-remote", "origin", f"refs/heads/{ctx.branch}")
        ctx.remote_sha = parse_ls_remote(result.stdout, ctx.branch)
        return result

    def _fetch(self, ctx: GitPublishContext) -> CommandResult:
        return self._git(ctx, "fetch", "--depth", "1", "origin", f"refs/heads/{ctx.branch}")

    def _checkout(self, ctx: GitPublishContext) -> CommandResult:
        if ctx.remote_sha is None:
            return self._git(ctx, "checkout", "-B", ctx.branch)
        return self._git(ctx, "checkout", "-B", ctx.branch, "FETCH_HEAD")

    def _write(self, ctx: GitPublishContext) -> None:
        target = (ctx.scratch_dir / ctx.file_name).resolve()
        if not target.is_relative_to(ctx.scratch_dir.resolve()):
            raise ValueError(f"report file escapes the repository: {ctx.file_name}")
        write_system_file(target, ctx.document)

    def _add(self, ctx: GitPublishContext) -> CommandResult:
        return self._git(ctx, "add", ctx.file_name)

    def _status(self, ctx: GitPublishContext) -> CommandResult:
        return self._git(ctx, "status", "--porcelain")

    def _config_name(self, ctx: GitPublishContext) -> CommandResult:
        return self._git(ctx, "config", "user.name", ctx.author.name)

    def _config_email(self, ctx: GitPublishContext) -> CommandResult:
        return self._git(ctx, "config", "user.email", ctx.author.email)

    def _commit(self, ctx: GitPublishContext) -> CommandResult:
        return self._git(ctx, "commit", "-m", ctx.commit_message)

    def _push(self, ctx: GitPublishContext) -> CommandResult:
        lease = f"--force-with-lease=refs/heads/{ctx.branch}:{ctx.remote_sha or ''}"
        return self._git(ctx, "push", lease, "origin", f"HEAD:refs/heads/{ctx.branch}")


def parse_ls_remote(output: str, branch: str) -> Optional[str]:
    """Return the sha ``git ls-remote`` lists for ``refs/heads/<branch>``, if any."""
    ref = f"refs/heads/{branch}"
    for line in output.splitlines():
        parts = line.split()
        if len(parts) == 2 and parts[1] == ref:
            return parts[0]
    return None


def publish_mailing_list_report(
    config: ReportConfig,
    document: str,
    run: CommandRunner = run_command,
    now: Optional[datetime] = None,
) -> PublishResult:
    """Convenience wrapper around :class:`GitPublisher`."""
    return GitPublisher(run=run, now=now).publish(config, document)
