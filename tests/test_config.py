"""Tests for configuration loading and validation."""

import dataclasses
from pathlib import Path

import pytest

from renovate_reporting.config import (
    DEFAULT_GIT_BRANCH,
    DEFAULT_GIT_COMMIT_MESSAGE,
    DEFAULT_GIT_FILE,
    ReportConfig,
    load_config,
)
from renovate_reporting.exceptions import ConfigurationError, InvalidConfigError


class TestReportConfig:
    def test_defaults_disable_reporting(self):
        config = ReportConfig()
        assert not config.enabled
        assert config.mailing_list_to == []
        assert config.git_branch_fallback == DEFAULT_GIT_BRANCH
        assert config.git_file == DEFAULT_GIT_FILE
        assert config.git_commit_message == DEFAULT_GIT_COMMIT_MESSAGE

    def test_unknown_report_type(self):
        with pytest.raises(InvalidConfigError) as exc_info:
            ReportConfig(report_type="email")
        assert exc_info.value.key == "report_type"
        assert "logging" in exc_info.value.reason

    @pytest.mark.parametrize("report_type", ["file", "s3"])
    def test_path_required(self, report_type):
        with pytest.raises(InvalidConfigError, match="report_path"):
            ReportConfig(report_type=report_type)

    @pytest.mark.parametrize("report_type", ["logging", "mailing-list"])
    def test_path_optional(self, report_type):
        assert ReportConfig(report_type=report_type).enabled

    def test_recipients_must_be_list(self):
        with pytest.raises(InvalidConfigError) as exc_info:
            ReportConfig(mailing_list_to="deps@example.com")
        assert exc_info.value.key == "mailing_list_to"

    def test_frozen(self):
        config = ReportConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.report_type = "file"

    def test_git_overrides(self):
        config = ReportConfig(
            mailing_list_git_branch="reports/main",
            mailing_list_git_file="a.eml",
            mailing_list_git_commit_message="msg",
        )
        assert config.git_branch_fallback == "reports/main"
        assert config.git_file == "a.eml"
        assert config.git_commit_message == "msg"


class TestLoadConfig:
    def test_no_sources(self):
        assert load_config() == ReportConfig()

    def test_overrides(self):
        config = load_config(report_type="file", report_path="r.json", repository=None)
        assert config.report_type == "file"
        assert config.report_path == "r.json"
        assert config.repository is None

    def test_explicit_file(self, tmp_path):
        config_file = tmp_path / "custom.toml"
        config_file.write_text(
            'report-type = "mailing-list"\n'
            'mailing_list_to = ["a@example.com", "b@example.com"]\n'
            's3_path_style = true\n',
            encoding="utf-8",
        )
        config = load_config(config_file=config_file)
        assert config.report_type == "mailing-list"
        assert config.mailing_list_to == ["a@example.com", "b@example.com"]
        assert config.s3_path_style is True

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(config_file=tmp_path / "missing.toml")

    def test_invalid_toml(self, tmp_path):
        config_file = tmp_path / "bad.toml"
        config_file.write_text("report_type = \n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="Invalid config file"):
            load_config(config_file=config_file)

    def test_unknown_key(self, tmp_path):
        config_file = tmp_path / "extra.toml"
        config_file.write_text('colour = "blue"\n', encoding="utf-8")
        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            load_config(config_file=config_file)

    def test_project_and_global_files(self, tmp_path):
        (Path.home() / ".renovate-reporting.toml").write_text(
            'report_type = "logging"\nmailing_list_from = "global@example.com"\n', encoding="utf-8"
        )
        (tmp_path / "renovate-reporting.toml").write_text(
            'mailing_list_from = "project@example.com"\n', encoding="utf-8"
        )
        config = load_config()
        assert config.report_type == "logging"
        assert config.mailing_list_from == "project@example.com"

    def test_env_beats_file(self, tmp_path, monkeypatch):
        config_file = tmp_path / "c.toml"
        config_file.write_text('report_type = "logging"\n', encoding="utf-8")
        monkeypatch.setenv("RENOVATE_REPORT_REPORT_TYPE", "mailing-list")
        monkeypatch.setenv("RENOVATE_REPORT_MAILING_LIST_TO", "a@example.com, b@example.com,")
        monkeypatch.setenv("RENOVATE_REPORT_S3_PATH_STYLE", "yes")

        config = load_config(config_file=config_file)
        assert config.report_type == "mailing-list"
        assert config.mailing_list_to == ["a@example.com", "b@example.com"]
        assert config.s3_path_style is True

    def test_override_beats_env(self, monkeypatch):
        monkeypatch.setenv("RENOVATE_REPORT_REPORT_TYPE", "mailing-list")
        assert load_config(report_type="logging").report_type == "logging"

    def test_bad_env_bool(self, monkeypatch):
        monkeypatch.setenv("RENOVATE_REPORT_S3_PATH_STYLE", "maybe")
        with pytest.raises(InvalidConfigError) as exc_info:
            load_config()
        assert exc_info.value.key == "RENOVATE_REPORT_S3_PATH_STYLE"
