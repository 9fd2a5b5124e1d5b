"""Assertion helpers for spec bodies."""

from bddrun.assertions.base import AssertionFailure
from bddrun.assertions.checks import equal, ok

__all__ = ["AssertionFailure", "equal", "ok"]
