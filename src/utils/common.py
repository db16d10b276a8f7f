#!/usr/bin/env python3
"""
Common utilities shared across apexdoc entry points.
"""

import argparse
import logging
import sys
from pathlib import Path

from src.constants import DEFAULT_LOG_LEVEL


def setup_logging(log_level: str | int = DEFAULT_LOG_LEVEL, log_file: str | None = None) -> None:
    """Setup logging configuration consistently across entry points.

    Args:
        log_level: Logging level as string ("INFO", "DEBUG") or integer constant
        log_file: Optional path to log file for file output
    """
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        try:
            Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        except OSError:
            # Keep console logging only if the directory can't be created
            pass
        else:
            handlers.append(logging.FileHandler(log_file))

    # Handle both string levels ("INFO") and integer levels (logging.INFO)
    if isinstance(log_level, int):
        level = log_level
    else:
        level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=handlers,
        force=True,
    )


def add_common_args(parser: argparse.ArgumentParser, log_level: str = DEFAULT_LOG_LEVEL) -> None:
    """Add common command-line arguments to an ArgumentParser.

    Args:
        parser: ArgumentParser instance to add arguments to
        log_level: Default for --log-level, usually taken from the environment
    """
    parser.add_argument("--log-level", default=log_level, help="Logging level")
    parser.add_argument("--log-file", help="Optional log file")
