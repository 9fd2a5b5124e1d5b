"""Execute the suite tree of a run and deliver result events."""

from __future__ import annotations

import logging
from typing import Iterator

from bddrun.context import RunContext, SuiteNode, TestNode
from bddrun.hooks import run_hooks
from bddrun.results import Failure, Reporter, ResultEvent, attempt, failure_events

logger = logging.getLogger("bddrun.executor")


def run_test(test: TestNode, *, logger: logging.Logger = logger) -> list[ResultEvent]:
    """Run one test: one passing event, or the name and message as two failing events."""
    name = test.qualified_name
    logger.debug(f"Running test '{name}'")
    outcome = attempt(test.body)
    if isinstance(outcome, Failure):
        logger.info(f"Test '{name}' failed: {outcome.message}")
        return failure_events(name, outcome)
    return [ResultEvent(name, True)]


def _walk(suite: SuiteNode, logger: logging.Logger) -> Iterator[ResultEvent]:
    for child in suite.children:
        if isinstance(child, TestNode):
            yield from run_test(child, logger=logger)
        else:
            yield from _walk(child, logger)


def run_suites(ctx: RunContext, *, logger: logging.Logger = logger) -> Iterator[ResultEvent]:
    """Depth-first, pre-order traversal of the suite tree in registration order.

    Suites emit nothing of their own; a failing test never stops the tests after it.
    """
    with ctx.execution():
        yield from _walk(ctx.root, logger)


def run(
    ctx: RunContext,
    reporter: Reporter | None = None,
    *,
    logger: logging.Logger = logger,
) -> list[ResultEvent]:
    """Run all hooks, then all suites, and return the ordered event stream.

    Each event is also passed to *reporter* as soon as it is produced.
    """
    events: list[ResultEvent] = []
    with ctx.execution():
        # Hooks are drained completely before the first test body runs.
        for event in run_hooks(ctx, logger=logger):
            events.append(event)
            if reporter is not None:
                reporter.report(event)
        for event in run_suites(ctx, logger=logger):
            events.append(event)
            if reporter is not None:
                reporter.report(event)
    logger.debug(
        f"Run finished: {len(ctx.hooks)} hook(s), {len(ctx.tests())} test(s), {len(events)} event(s)"
    )
    return events
