"""Tests for facade config."""

from __future__ import annotations

from pathlib import Path

import pytest

from ksenv.config import KsenvConfig, load_config


def test_defaults() -> None:
    cfg = KsenvConfig()
    assert cfg.ks_binary == "ks"
    assert cfg.log_level == "WARNING"
    assert cfg.search_path == Path.cwd()


def test_load_config_from_env_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    for name in ("KSENV_KS_BINARY", "KSENV_LOG_LEVEL", "KSENV_APP_DIR"):
        monkeypatch.setenv(name, "unset")
        monkeypatch.delenv(name)
    env_file = tmp_path / ".env"
    env_file.write_text(
        f"KSENV_KS_BINARY=/opt/ks\nKSENV_LOG_LEVEL=debug\nKSENV_APP_DIR={tmp_path}\n",
        encoding="utf-8",
    )
    cfg = load_config(env_file)
    assert cfg.ks_binary == "/opt/ks"
    assert cfg.log_level == "DEBUG"
    assert cfg.search_path == tmp_path


def test_environment_wins_over_env_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("KSENV_KS_BINARY", "ks-from-env")
    monkeypatch.setenv("KSENV_LOG_LEVEL", "INFO")
    env_file = tmp_path / ".env"
    env_file.write_text("KSENV_KS_BINARY=ks-from-file\n", encoding="utf-8")
    assert load_config(env_file).ks_binary == "ks-from-env"
