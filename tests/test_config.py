import logging

import pytest

from adaptive_engine.config import CONFIG_ENV_VAR, EngineConfig, load_config
from adaptive_engine.logger import LOGGER_NAME, setup_logging


def test_defaults_without_config(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    assert load_config() == EngineConfig()


def test_missing_file_uses_defaults(tmp_path):
    assert load_config(str(tmp_path / "absent.yaml")) == EngineConfig()


def test_load_yaml(tmp_path, caplog):
    path = tmp_path / "engine.yaml"
    path.write_text("recommendation_cap: 5\ninsight_cap: 2\nlog_level: debug\ncolour: blue\n", encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="adaptive_engine.config"):
        config = load_config(str(path))
    assert config.recommendation_cap == 5
    assert config.insight_cap == 2
    assert config.analytics_limit == 3
    assert config.log_level == "DEBUG"
    assert "colour" in caplog.text


def test_env_var_points_to_config(tmp_path, monkeypatch):
    path = tmp_path / "engine.yaml"
    path.write_text("analytics_limit: 7\n", encoding="utf-8")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
    assert load_config().analytics_limit == 7


def test_invalid_config(tmp_path):
    path = tmp_path / "engine.yaml"
    path.write_text("- not\n- a mapping\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(str(path))

    path.write_text("recommendation_cap: -1\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(str(path))

    with pytest.raises(ValueError):
        EngineConfig(log_level="chatty")


def test_setup_logging_replaces_handlers():
    logger = setup_logging("info")
    setup_logging(logging.DEBUG)
    assert logger.name == LOGGER_NAME
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
