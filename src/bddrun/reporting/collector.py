"""In-memory reporter that keeps the event stream of a run."""

from __future__ import annotations

from bddrun.results import ResultEvent, RunSummary, summarize


class ResultCollector:
    """Collects events in arrival order.

    ``tests`` maps each event name to its ``passed`` flag; a repeated name keeps
    the last value.
    """

    def __init__(self) -> None:
        self.events: list[ResultEvent] = []

    def report(self, event: ResultEvent) -> None:
        self.events.append(event)

    @property
    def tests(self) -> dict[str, bool]:
        return {e.name: e.passed for e in self.events}

    def summary(self) -> RunSummary:
        return summarize(self.events)
