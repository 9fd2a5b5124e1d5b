"""Verbose logging configuration for debug output."""

from __future__ import annotations

import logging
import sys
from pathlib import Path


def setup_logger(
    debug_file: Path, verbose: bool = False, logger_name: str = "bddrun"
) -> logging.Logger:
    """
    Configure and return a logger for debug output.

    Always writes to debug_file. Optionally also writes to stderr if verbose=True.

    Args:
        debug_file: Path to debug log file (always created)
        verbose: If True, also log to stderr. If False, only log to file.
        logger_name: Name of the logger instance. Must be unique per run/spec so
            that two debug logs never share handlers.

    Returns:
        Configured logger instance.

    Raises:
        RuntimeError: if a logger with this name already has handlers.
    """
    logger = logging.getLogger(logger_name)
    if logger.handlers:
        raise RuntimeError(
            f"Logger '{logger_name}' already exists with handlers attached; "
            "use a unique logger name per run"
        )

    logger.disabled = False
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    formatter = logging.Formatter(
        fmt="[%(asctime)s] %(message)s", datefmt="%Y-%m-%dT%H:%M:%S"
    )

    debug_file.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(debug_file, mode="a")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    if verbose:
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setLevel(logging.DEBUG)
        stderr_handler.setFormatter(formatter)
        logger.addHandler(stderr_handler)

    return logger
