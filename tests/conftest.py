"""Shared test fixtures for renovate-reporting tests."""

import logging
import os
from datetime import datetime, timezone
from pathlib import Path

import pytest

from renovate_reporting.commands import CommandResult
from renovate_reporting.config import ReportConfig
from renovate_reporting.exceptions import CommandError
from renovate_reporting.logging_config import get_problem_collector


@pytest.fixture(autouse=True)
def _isolated_config_env(monkeypatch, tmp_path):
    """Keep user/project TOML files and RENOVATE_REPORT_* variables out of tests."""
    for key in list(os.environ):
        if key.startswith("RENOVATE_REPORT_"):
            monkeypatch.delenv(key)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: home))
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _reset_logging():
    """Undo setup_logging side effects between tests."""
    yield
    logging.getLogger("renovate_reporting").setLevel(logging.NOTSET)
    collector = get_problem_collector()
    logging.getLogger().removeHandler(collector)
    collector.get_problems()


@pytest.fixture
def fixed_now():
    """Sunday 2026-02-08 00:00:00 UTC."""
    return datetime(2026, 2, 8, 0, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_config():
    """Factory for ReportConfig with a repository and the logging sink."""

    def _make(**kwargs):
        values = {"repository": "myOrg/myRepo", "report_type": "logging"}
        values.update(kwargs)
        return ReportConfig(**values)

    return _make


@pytest.fixture
def sample_branches():
    """One branch in wire form, with a single major upgrade."""
    return [
        {
            "branchName": "a-branch-name",
            "prNo": 20,
            "result": "done",
            "upgrades": [
                {
                    "currentVersion": "21.1.1",
                    "currentValue": "v21.1.1",
                    "newVersion": "22.0.0",
                    "newValue": "v22.0.0",
                    "packageFile": "package.json",
                    "updateType": "major",
                    "packageName": "a",
                },
            ],
        },
    ]


@pytest.fixture
def sample_package_files():
    """Terraform extraction output keyed by manager."""
    return {
        "terraform": [
            {
                "packageFile": "terraform/versions.tf",
                "deps": [
                    {
                        "currentValue": "v0.0.0",
                        "datasource": "github-tags",
                        "depName": "justcarlux/terraform-aws",
                        "depType": "module",
                    },
                ],
            },
        ],
    }


class FakeGitRunner:
    """Scripted command runner recording every git invocation.

    ``responses`` maps a git subcommand ("clone", "status", ...) to the stdout
    it returns; ``failures`` maps a subcommand to the reason it fails with.
    Each call also records whether its working directory existed at the time.
    """

    def __init__(self, responses=None, failures=None):
        self.responses = dict(responses or {})
        self.failures = dict(failures or {})
        self.calls = []
        self.cwd_existed = []

    def __call__(self, args, cwd=None):
        args = list(args)
        self.calls.append((args, cwd))
        self.cwd_existed.append(cwd is None or Path(cwd).is_dir())
        subcommand = args[1]
        if subcommand in self.failures:
            raise CommandError(args, self.failures[subcommand], returncode=128)
        if subcommand == "clone":
            Path(args[-1]).mkdir(parents=True, exist_ok=True)
        return CommandResult(stdout=self.responses.get(subcommand, ""), stderr="")

    @property
    def commands(self):
        return [args for args, _ in self.calls]

    @property
    def subcommands(self):
        return [args[1] for args, _ in self.calls]


@pytest.fixture
def fake_git():
    """Factory for FakeGitRunner instances."""
    return FakeGitRunner
