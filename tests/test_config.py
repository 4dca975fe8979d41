from __future__ import annotations

import logging
from pathlib import Path

import pytest

from qr_pro_studio.config import AppConfig
from qr_pro_studio.logging_setup import configure_logging

_ENV_VARS = (
    "GEMINI_API_KEY",
    "API_KEY",
    "GEMINI_MODEL",
    "QR_STUDIO_EXPORT_DIR",
    "QR_STUDIO_LOG_LEVEL",
    "QR_STUDIO_DISCARD_STALE",
)


@pytest.fixture()
def clean_env(monkeypatch, tmp_path):
    for name in _ENV_VARS:
        # setenv first so teardown also removes values written by load_dotenv.
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    # Keep a developer's own .env out of the tests.
    monkeypatch.chdir(tmp_path)
    return monkeypatch


def test_defaults():
    config = AppConfig()

    assert config.analysis_debounce_ms == 1_500
    assert config.analysis_min_length == 5
    assert config.copy_feedback_ms == 2_000
    assert config.default_size == 256
    assert config.discard_stale_results is False
    assert config.api_key is None


def test_from_env_without_key(clean_env, tmp_path):
    config = AppConfig.from_env(tmp_path / "missing.env")
    assert config.api_key is None


def test_from_env_reads_variables(clean_env, tmp_path):
    clean_env.setenv("GEMINI_API_KEY", "secret")
    clean_env.setenv("GEMINI_MODEL", "gemini-test")
    clean_env.setenv("QR_STUDIO_EXPORT_DIR", str(tmp_path / "out"))
    clean_env.setenv("QR_STUDIO_LOG_LEVEL", "debug")
    clean_env.setenv("QR_STUDIO_DISCARD_STALE", "yes")

    config = AppConfig.from_env(tmp_path / "missing.env")

    assert config.api_key == "secret"
    assert config.gemini_model == "gemini-test"
    assert config.export_dir == Path(tmp_path / "out")
    assert config.log_level == "DEBUG"
    assert config.discard_stale_results is True


def test_from_env_falls_back_to_api_key(clean_env, tmp_path):
    clean_env.setenv("API_KEY", "legacy")
    assert AppConfig.from_env(tmp_path / "missing.env").api_key == "legacy"


def test_from_env_loads_dotenv_file(clean_env, tmp_path):
    env_file = tmp_path / "studio.env"
    env_file.write_text("GEMINI_API_KEY=from-file\n", encoding="utf-8")

    assert AppConfig.from_env(env_file).api_key == "from-file"


def test_api_key_hidden_from_repr():
    assert "secret" not in repr(AppConfig(api_key="secret"))


def test_configure_logging_accepts_unknown_level(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

    configure_logging("nonsense")
    configure_logging("debug")

    assert calls[0]["level"] == logging.INFO
    assert calls[1]["level"] == logging.DEBUG
