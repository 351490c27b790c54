"""Tests for logger configuration."""

import logging

from dupecheck.logging import get_logger


class TestGetLogger:
    def test_library_default_is_warning(self, monkeypatch):
        monkeypatch.delenv('DUPECHECK_LOG_LEVEL', raising=False)
        logger = get_logger("dupecheck.tests.library")
        assert logger.level == logging.WARNING

    def test_cli_default_is_info(self, monkeypatch):
        monkeypatch.delenv('DUPECHECK_LOG_LEVEL', raising=False)
        logger = get_logger("dupecheck.tests.cli")
        assert logger.level == logging.INFO

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv('DUPECHECK_LOG_LEVEL', 'debug')
        logger = get_logger("dupecheck.tests.override")
        assert logger.level == logging.DEBUG

    def test_unknown_level_falls_back(self, monkeypatch):
        monkeypatch.setenv('DUPECHECK_LOG_LEVEL', 'chatty')
        logger = get_logger("dupecheck.tests.unknown")
        assert logger.level == logging.WARNING

    def test_non_level_attribute_falls_back(self, monkeypatch):
        """Names of other logging module attributes are not levels."""
        monkeypatch.setenv('DUPECHECK_LOG_LEVEL', 'basic_format')
        logger = get_logger("dupecheck.tests.attribute")
        assert logger.level == logging.WARNING

    def test_handler_added_once(self):
        first = get_logger("dupecheck.tests.once")
        second = get_logger("dupecheck.tests.once")
        assert first is second
        assert len(second.handlers) == 1
