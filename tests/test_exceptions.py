"""Tests for the exception hierarchy."""

import pytest

from renovate_reporting.exceptions import (
    CommandError,
    ConfigurationError,
    ExportError,
    FileAccessError,
    GitPublishError,
    InvalidConfigError,
    ReportingError,
    StorageError,
)
from renovate_reporting.git import GitStep


class TestHierarchy:
    @pytest.mark.parametrize(
        "error, parent",
        [
            (InvalidConfigError("report_type", "x", "bad"), ConfigurationError),
            (FileAccessError("/x", "denied"), ExportError),
            (CommandError(["git", "push"], "rejected"), ExportError),
            (StorageError("b", "k", "denied"), ExportError),
            (GitPublishError(GitStep.PUSH, "rejected"), ExportError),
        ],
    )
    def test_parents(self, error, parent):
        assert isinstance(error, parent)
        assert isinstance(error, ReportingError)


class TestMessages:
    def test_details_rendered(self):
        err = InvalidConfigError("report_type", "email", "expected one of logging")
        assert str(err) == (
            "Invalid configuration for report_type: email "
            "(key=report_type, value=email, reason=expected one of logging)"
        )

    def test_no_details(self):
        assert str(ConfigurationError("Config file not found: x.toml")) == "Config file not found: x.toml"

    def test_command_error(self):
        err = CommandError(["git", "push", "origin"], "rejected", returncode=1)
        assert str(err) == "Command failed: git (command=git push origin, reason=rejected, returncode=1)"

    def test_git_publish_error_step(self):
        err = GitPublishError(GitStep.STATUS, "boom")
        assert err.step is GitStep.STATUS
        assert err.details["step"] == "status"
