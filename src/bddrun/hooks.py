"""Run the global ``before`` hooks of a run."""

from __future__ import annotations

import logging
from typing import Iterator

from bddrun.context import HookDescriptor, RunContext
from bddrun.results import Failure, ResultEvent, attempt, failure_events

logger = logging.getLogger("bddrun.hooks")


def run_hook(hook: HookDescriptor, *, logger: logging.Logger = logger) -> list[ResultEvent]:
    """Run one hook. Success is silent; a failure yields the name and message events."""
    logger.debug(f"Running hook '{hook.display_name}' ({hook.shape.value})")
    outcome = attempt(hook.body)
    if isinstance(outcome, Failure):
        logger.info(f"Hook '{hook.display_name}' failed: {outcome.message}")
        return failure_events(hook.display_name, outcome)
    return []


def run_hooks(ctx: RunContext, *, logger: logging.Logger = logger) -> Iterator[ResultEvent]:
    """Run every hook once, in registration order.

    A failing or missing hook never stops the hooks after it. Registering
    during the run raises RuntimeError, which fails the calling hook.
    """
    with ctx.execution():
        for hook in ctx.hooks:
            yield from run_hook(hook, logger=logger)
