from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

# Garante que o pacote clinic seja importável durante os testes locais
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from clinic.core import config as core_config  # noqa: E402
from clinic.core.logging import configure_logging  # noqa: E402


@pytest.fixture()
def fresh_settings():
    core_config.get_settings.cache_clear()
    yield
    core_config.get_settings.cache_clear()


def test_defaults(fresh_settings, monkeypatch):
    for name in ("APP_ENV", "CLINIC_STORAGE_BACKEND", "CLINIC_DATA_FILE", "DATABASE_URL", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    settings = core_config.get_settings()
    assert settings.app_env == "dev"
    assert settings.storage_backend == "json"
    assert settings.data_file == core_config.DEFAULT_DATA_FILE
    assert settings.database_url == ""
    assert settings.log_level == "INFO"


def test_env_overrides(fresh_settings, monkeypatch, tmp_path):
    monkeypatch.setenv("APP_ENV", "PROD")
    monkeypatch.setenv("CLINIC_STORAGE_BACKEND", " Memory ")
    monkeypatch.setenv("CLINIC_DATA_FILE", str(tmp_path / "x.json"))
    monkeypatch.setenv("LOG_LEVEL", "debug")
    settings = core_config.get_settings()
    assert settings.app_env == "prod"
    assert settings.storage_backend == "memory"
    assert settings.data_file == tmp_path / "x.json"
    assert settings.log_level == "DEBUG"


def test_configure_logging_is_idempotent(fresh_settings, monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    logger = logging.getLogger("clinic")
    before = list(logger.handlers)
    try:
        configure_logging()
        configure_logging("DEBUG")
        added = [h for h in logger.handlers if h not in before]
        assert len(added) == 1
        assert logger.level == logging.DEBUG
    finally:
        for handler in logger.handlers[:]:
            if handler not in before:
                logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)
