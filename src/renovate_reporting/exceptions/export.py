"""Export-time exceptions: filesystem, external commands, storage, git."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Optional, Sequence

from ..security import redact_command, redact_credentials
from .base import ReportingError

if TYPE_CHECKING:
    from ..git.publisher import GitStep


class ExportError(ReportingError):
    """Base class for failures while publishing a report."""

    pass


class FileAccessError(ExportError):
    """Raised when a report file cannot be written."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(
            f"Cannot write file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class CommandError(ExportError):
    """Raised when an external command fails to start, times out or exits nonzero."""

    def __init__(
        self,
        args: Sequence[str],
        reason: str,
        returncode: Optional[int] = None,
        stdout: str = "",
        stderr: str = "",
    ):
        reason = redact_credentials(reason)
        details = {"command": redact_command(args), "reason": reason}
        if returncode is not None:
            details["returncode"] = str(returncode)
        super().__init__(f"Command failed: {args[0] if args else '<empty>'}", details=details)
        self.args_list = list(args)
        self.reason = reason
        self.returncode = returncode
        self.stdout = redact_credentials(stdout)
        self.stderr = redact_credentials(stderr)


class StorageError(ExportError):
    """Raised when an object storage upload fails."""

    def __init__(self, bucket: str, key: str, reason: str):
        super().__init__(
            f"Failed to upload s3://{bucket}/{key}",
            details={"bucket": bucket, "key": key, "reason": reason},
        )
        self.bucket = bucket
        self.key = key
        self.reason = reason


class GitPublishError(ExportError):
    """Raised inside the publish pipeline; carries the step that failed."""

    def __init__(self, step: GitStep, reason: str):
        super().__init__(
            f"Git publish failed at step {step.value}",
            details={"step": step.value, "reason": reason},
        )
        self.step = step
        self.reason = reason
