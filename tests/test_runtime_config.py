"""Tests for mediaflow.config.runtime_config."""

from pathlib import Path

import pytest

from mediaflow.config import runtime_config
from mediaflow.config.runtime_config import (
    get_default,
    get_engine_mode,
    get_execute_timeout_seconds,
    get_job_timeout_seconds,
    get_job_workers,
    get_workspace_root,
    is_rollback_on_relocation_failure,
    is_stub_mode,
    reset_config,
)


class TestShippedDefaults:
    """Values from the bundled runtime.yaml."""

    def test_engine_mode_defaults_to_stub(self):
        assert get_engine_mode() == "stub"
        assert is_stub_mode()

    def test_defaults(self):
        assert get_job_workers() == 2
        assert get_job_timeout_seconds() is None
        assert is_rollback_on_relocation_failure() is True
        assert get_execute_timeout_seconds() == 3600
        assert get_workspace_root() == Path(".mediaflow/workspace")

    def test_get_default_fallback(self):
        assert get_default("no_such_key", "fallback") == "fallback"


class TestEnvironmentOverrides:
    """MEDIAFLOW_* variables take precedence over runtime.yaml."""

    def test_engine_mode(self, monkeypatch):
        monkeypatch.setenv("MEDIAFLOW_ENGINE_MODE", "LOCAL")
        assert get_engine_mode() == "local"

    def test_invalid_engine_mode_falls_back(self, monkeypatch, caplog):
        monkeypatch.setenv("MEDIAFLOW_ENGINE_MODE", "cloud")
        assert get_engine_mode() == "stub"
        assert "Invalid engine mode" in caplog.text

    def test_workspace_root(self, monkeypatch, tmp_path):
        monkeypatch.setenv("MEDIAFLOW_WORKSPACE_ROOT", str(tmp_path))
        assert get_workspace_root() == tmp_path

    @pytest.mark.parametrize("raw,expected", [("4", 4), ("0", 1), ("many", 2)])
    def test_job_workers(self, monkeypatch, raw, expected):
        monkeypatch.setenv("MEDIAFLOW_JOB_WORKERS", raw)
        assert get_job_workers() == expected

    @pytest.mark.parametrize("raw,expected", [("2.5", 2.5), ("0", None), ("soon", None)])
    def test_job_timeout(self, monkeypatch, raw, expected):
        monkeypatch.setenv("MEDIAFLOW_JOB_TIMEOUT", raw)
        assert get_job_timeout_seconds() == expected


class TestConfigFile:
    """Loading and caching of the YAML file."""

    def test_custom_file(self, monkeypatch, tmp_path):
        config_path = tmp_path / "runtime.yaml"
        config_path.write_text(
            "engines:\n"
            "  execute:\n"
            "    mode: local\n"
            "defaults:\n"
            "  job_workers: 5\n"
            "  rollback_on_relocation_failure: false\n"
        )
        monkeypatch.setattr(runtime_config, "_CONFIG_PATH", config_path)
        reset_config()
        assert get_engine_mode() == "local"
        assert get_job_workers() == 5
        assert is_rollback_on_relocation_failure() is False
        assert get_execute_timeout_seconds() is None

    def test_missing_file_uses_builtin_defaults(self, monkeypatch, tmp_path):
        monkeypatch.setattr(runtime_config, "_CONFIG_PATH", tmp_path / "absent.yaml")
        reset_config()
        assert get_engine_mode() == "stub"
        assert get_job_workers() == 2

    def test_config_is_cached(self, monkeypatch, tmp_path):
        config_path = tmp_path / "runtime.yaml"
        config_path.write_text("defaults:\n  job_workers: 3\n")
        monkeypatch.setattr(runtime_config, "_CONFIG_PATH", config_path)
        reset_config()
        assert get_job_workers() == 3
        config_path.write_text("defaults:\n  job_workers: 7\n")
        assert get_job_workers() == 3
        reset_config()
        assert get_job_workers() == 7
