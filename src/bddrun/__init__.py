"""Minimal describe/it/before registration and execution engine."""

from bddrun.context import HookDescriptor, HookShape, RunContext, SuiteNode, TestNode
from bddrun.executor import run, run_suites
from bddrun.hooks import run_hooks
from bddrun.results import (
    MISSING_CALLABLE_MESSAGE,
    Failure,
    ResultEvent,
    Success,
    attempt,
)

__all__ = [
    "MISSING_CALLABLE_MESSAGE",
    "Failure",
    "HookDescriptor",
    "HookShape",
    "ResultEvent",
    "RunContext",
    "Success",
    "SuiteNode",
    "TestNode",
    "attempt",
    "run",
    "run_hooks",
    "run_suites",
]
