"""Run external commands via subprocess."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol, Sequence, Union

from .exceptions import CommandError
from .logging_config import get_logger
from .security import redact_command

logger = get_logger(__name__)


@dataclass(frozen=True)
class CommandResult:
    stdout: str
    stderr: str


class CommandRunner(Protocol):
    """Callable that runs one command and returns its captured output."""

    def __call__(
        self, args: Sequence[str], cwd: Optional[Union[str, Path]] = None
    ) -> CommandResult: ...


def run_command(
    args: Sequence[str],
    cwd: Optional[Union[str, Path]] = None,
    timeout: Optional[float] = None,
) -> CommandResult:
    """Run ``args`` in ``cwd`` and capture stdout/stderr.

    Raises:
        CommandError: If the executable is missing, the command times out or
            exits with a nonzero status.
    """
    logger.debug("Running command: %s", redact_command(args), extra={"cwd": str(cwd) if cwd else None})
    try:
        proc = subprocess.run(
            list(args),
            cwd=str(cwd) if cwd is not None else None,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except FileNotFoundError as e:
        raise CommandError(args, f"executable not found: {e}")
    except subprocess.TimeoutExpired:
        raise CommandError(args, f"timed out after {timeout}s")

    if proc.returncode != 0:
        raise CommandError(
            args,
            proc.stderr.strip() or "nonzero exit",
            returncode=proc.returncode,
            stdout=proc.stdout,
            stderr=proc.stderr,
        )
    return CommandResult(stdout=proc.stdout, stderr=proc.stderr)
