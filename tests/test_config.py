"""
Environment-driven settings and the logger tree.
"""

import logging

import pytest

from core.config import DEFAULT_COOLDOWN_SECONDS, load_settings
from core.logging_config import ROOT_LOGGER_NAME, get_logger, setup_logging

ENV_VARS = ("NDT_DB_PATH", "NDT_COOLDOWN_SECONDS", "NDT_DAY_FILTERING", "NDT_LOG_DIR", "LOG_LEVEL")


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestSettings:
    def test_defaults(self, clean_env):
        settings = load_settings()
        assert settings.cooldown_seconds == DEFAULT_COOLDOWN_SECONDS == 10
        assert settings.day_filtering is True
        assert settings.db_path.name == "nodrunktext.db"
        assert settings.log_level == "INFO"

    def test_overrides(self, clean_env, tmp_path):
        clean_env.setenv("NDT_DB_PATH", str(tmp_path / "x.db"))
        clean_env.setenv("NDT_COOLDOWN_SECONDS", "25")
        clean_env.setenv("NDT_DAY_FILTERING", "no")
        clean_env.setenv("LOG_LEVEL", "debug")

        settings = load_settings()
        assert settings.db_path == tmp_path / "x.db"
        assert settings.cooldown_seconds == 25
        assert settings.day_filtering is False
        assert settings.log_level == "DEBUG"

    @pytest.mark.parametrize("value", ["0", "-3", "ten"])
    def test_bad_cooldown(self, clean_env, value):
        clean_env.setenv("NDT_COOLDOWN_SECONDS", value)
        with pytest.raises(ValueError):
            load_settings()


class TestLogging:
    def test_get_logger_prefixes(self):
        assert get_logger("policy.gate").name == "nodrunktext.policy.gate"
        assert get_logger("nodrunktext.store").name == "nodrunktext.store"

    def test_setup_writes_log_file(self, clean_env, tmp_path):
        clean_env.setenv("NDT_LOG_DIR", str(tmp_path / "logs"))
        logger = setup_logging(load_settings())
        try:
            get_logger("test").info("hello")
            for handler in logger.handlers:
                handler.flush()
            assert (tmp_path / "logs" / "nodrunktext.log").exists()
            assert logger.name == ROOT_LOGGER_NAME
        finally:
            for handler in list(logger.handlers):
                logger.removeHandler(handler)
                handler.close()
            logger.setLevel(logging.NOTSET)
