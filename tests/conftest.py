"""Pytest configuration and fixtures."""

import logging
import textwrap
from pathlib import Path

import pytest

from bddrun.context import RunContext
from bddrun.reporting.collector import ResultCollector


@pytest.fixture(autouse=True)
def cleanup_loggers():
    """Clean up bddrun run loggers after each test to prevent name collisions."""
    yield

    loggers_to_remove = [
        name
        for name in logging.Logger.manager.loggerDict.keys()
        if name.startswith("bddrun_")
    ]

    for name in loggers_to_remove:
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()
        del logging.Logger.manager.loggerDict[name]


@pytest.fixture
def ctx() -> RunContext:
    return RunContext()


@pytest.fixture
def collector() -> ResultCollector:
    return ResultCollector()


@pytest.fixture
def write_spec(tmp_path):
    """Helper that writes a spec module to a temp file and returns its path."""

    def _write(content: str, name: str = "example_spec.py") -> Path:
        p = tmp_path / "specs" / name
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(textwrap.dedent(content))
        return p

    return _write
