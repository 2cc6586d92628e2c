"""Logging setup tests"""

import logging
from unittest.mock import patch

from phasehook.config import Config
from phasehook.logging_config import setup_logging


class TestSetupLogging:
    def test_creates_log_dir_and_returns_logger(self, tmp_path, monkeypatch):
        log_dir = tmp_path / "logs"
        monkeypatch.setenv("PHASEHOOK_LOG_PATH", str(log_dir))

        with patch("phasehook.logging_config.logging.basicConfig") as basic_config:
            logger = setup_logging()

        assert log_dir.is_dir()
        assert logger.name == "phasehook"
        kwargs = basic_config.call_args.kwargs
        assert kwargs["level"] == logging.INFO
        assert len(kwargs["handlers"]) == 2
        for handler in kwargs["handlers"]:
            handler.close()

    def test_debug_level(self, tmp_path, monkeypatch):
        monkeypatch.setenv("PHASEHOOK_LOG_PATH", str(tmp_path))
        monkeypatch.setattr(Config, "DEBUG", True)

        with patch("phasehook.logging_config.logging.basicConfig") as basic_config:
            setup_logging()

        assert basic_config.call_args.kwargs["level"] == logging.DEBUG
        for handler in basic_config.call_args.kwargs["handlers"]:
            handler.close()

    def test_configured_level(self, tmp_path, monkeypatch):
        monkeypatch.setenv("PHASEHOOK_LOG_PATH", str(tmp_path))
        monkeypatch.setattr(Config, "DEBUG", False)
        monkeypatch.setattr(Config, "LOG_LEVEL", "WARNING")

        with patch("phasehook.logging_config.logging.basicConfig") as basic_config:
            setup_logging()

        assert basic_config.call_args.kwargs["level"] == logging.WARNING
        for handler in basic_config.call_args.kwargs["handlers"]:
            handler.close()
