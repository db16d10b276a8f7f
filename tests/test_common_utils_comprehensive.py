#!/usr/bin/env python3
"""
Test suite for common utilities.

Exercises the real logging setup and argument helpers with minimal mocking.
"""

import argparse
import logging

import pytest

from src.utils.common import add_common_args, setup_logging


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSetupLogging:
    """Test logging setup utility function."""

    def test_setup_logging_default_level(self):
        setup_logging()
        assert logging.getLogger().level == logging.INFO

    @pytest.mark.parametrize("level_str", ["debug", "DEBUG", "Debug"])
    def test_setup_logging_case_insensitive_level(self, level_str):
        setup_logging(level_str)
        assert logging.getLogger().level == logging.DEBUG

    def test_setup_logging_with_integer_level(self):
        setup_logging(logging.WARNING)
        assert logging.getLogger().level == logging.WARNING

    def test_setup_logging_invalid_level_falls_back_to_info(self):
        setup_logging("NOT_A_LEVEL")
        assert logging.getLogger().level == logging.INFO

    def test_setup_logging_with_file_handler(self, tmp_path):
        log_file = tmp_path / "nested" / "apexdoc.log"
        setup_logging("INFO", str(log_file))

        logging.getLogger("apexdoc.test").info("Extracted %d comments", 3)
        for handler in logging.getLogger().handlers:
            handler.flush()

        text = log_file.read_text(encoding="utf-8")
        assert "[INFO] Extracted 3 comments" in text

    def test_setup_logging_console_only_by_default(self):
        setup_logging("INFO")
        handlers = logging.getLogger().handlers
        assert not any(isinstance(h, logging.FileHandler) for h in handlers)

    def test_setup_logging_writes_to_stderr_not_stdout(self, capsys):
        setup_logging("INFO")
        logging.getLogger("apexdoc.test").info("Found %d Apex files", 2)
        captured = capsys.readouterr()
        assert "Found 2 Apex files" in captured.err
        assert captured.out == ""


class TestAddCommonArgs:
    """Test common argument parser utility."""

    def test_add_common_args_default_values(self):
        parser = argparse.ArgumentParser()
        add_common_args(parser)
        args = parser.parse_args([])
        assert args.log_level == "INFO"
        assert args.log_file is None

    def test_add_common_args_custom_default_level(self):
        parser = argparse.ArgumentParser()
        add_common_args(parser, log_level="DEBUG")
        assert parser.parse_args([]).log_level == "DEBUG"

    def test_add_common_args_override_values(self):
        parser = argparse.ArgumentParser()
        add_common_args(parser)
        args = parser.parse_args(["--log-level", "WARNING", "--log-file", "custom.log"])
        assert args.log_level == "WARNING"
        assert args.log_file == "custom.log"

    def test_add_common_args_with_existing_args(self):
        parser = argparse.ArgumentParser()
        parser.add_argument("path")
        add_common_args(parser)
        args = parser.parse_args(["classes", "--log-level", "ERROR"])
        assert args.path == "classes"
        assert args.log_level == "ERROR"
