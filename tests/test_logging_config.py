"""
Tests for the root logger configuration.
"""

import logging

import pytest

from config.logging_config import LOG_FORMAT, configure_logging


@pytest.fixture()
def restore_root():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


class TestConfigureLogging:
    def test_file_handler_uses_log_format(self, restore_root, tmp_path):
        log_file = tmp_path / "viewer.log"
        configure_logging("debug", str(log_file))

        logging.getLogger("viewer.test").debug("Réseau reconstruit")
        for handler in restore_root.handlers:
            handler.flush()

        assert len(restore_root.handlers) == 2
        assert all(handler.formatter._fmt == LOG_FORMAT for handler in restore_root.handlers)
        line = log_file.read_text(encoding="utf-8").strip()
        assert line.endswith("[DEBUG] viewer.test: Réseau reconstruit")

    def test_unknown_level_falls_back_to_info(self, restore_root):
        configure_logging("chatty")
        assert restore_root.level == logging.INFO
        assert len(restore_root.handlers) == 1

    def test_quiet_loggers_stay_at_info(self, restore_root):
        configure_logging("DEBUG")
        assert logging.getLogger("vispy").level == logging.INFO
