"""
PURPOSE: Tests for settings and logging setup.
"""

import logging

import pytest

from decision_engine.config.settings import Settings, settings
from decision_engine.utils.logging import setup_logger


class TestSettings:
    """Tests for Settings defaults and environment overrides."""

    def test_defaults(self, monkeypatch):
        for name in ("N_ITERATIONS", "SENSITIVITY_ITERATIONS", "RANDOM_SEED", "LOG_FILE"):
            monkeypatch.delenv(name, raising=False)
        config = Settings()
        assert config.n_iterations == 1000
        assert config.sensitivity_iterations == 100
        assert config.perturbation_pct == 20.0
        assert config.top_influencers == 3
        assert config.random_seed is None
        assert config.log_file is None

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("N_ITERATIONS", "250")
        monkeypatch.setenv("random_seed", "7")
        monkeypatch.setenv("LOG_FILE", "engine.log")
        config = Settings()
        assert config.n_iterations == 250
        assert config.random_seed == 7
        assert config.log_file == "engine.log"


@pytest.fixture
def fresh_logger():
    """Named logger whose handlers are closed and removed afterwards."""
    name = "decision_engine.tests.logging"
    yield name
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


class TestSetupLogger:
    """Tests for setup_logger."""

    def test_no_duplicate_handlers(self, fresh_logger):
        logger = setup_logger(fresh_logger, level="debug")
        again = setup_logger(fresh_logger, level="debug")
        assert logger is again
        assert len(logger.handlers) == 1
        assert logger.level == logging.DEBUG

    def test_repeat_call_updates_level(self, fresh_logger):
        setup_logger(fresh_logger, level="debug")
        logger = setup_logger(fresh_logger, level=logging.WARNING)
        assert logger.level == logging.WARNING

    def test_unknown_level_rejected(self, fresh_logger):
        with pytest.raises(ValueError):
            setup_logger(fresh_logger, level="chatty")

    def test_log_file_receives_records(self, fresh_logger, tmp_path):
        path = tmp_path / "engine.log"
        logger = setup_logger(fresh_logger, level="info", log_file=str(path))
        setup_logger(fresh_logger, level="info", log_file=str(path))

        file_handlers = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
        assert len(file_handlers) == 1

        logger.info("simulated option A")
        file_handlers[0].flush()
        assert "INFO - simulated option A" in path.read_text(encoding="utf-8")

    def test_log_file_from_settings(self, fresh_logger, tmp_path, monkeypatch):
        path = tmp_path / "from_settings.log"
        monkeypatch.setattr(settings, "log_file", str(path))
        logger = setup_logger(fresh_logger)
        assert any(
            isinstance(h, logging.FileHandler) and h.baseFilename == str(path)
            for h in logger.handlers
        )
