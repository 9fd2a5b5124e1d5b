"""Result events and the fallible-call wrapper shared by hooks and tests."""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Callable, Iterable, Protocol

MISSING_CALLABLE_MESSAGE = "this.fn is not a function"


@dataclass(frozen=True)
class ResultEvent:
    """One ``(name, passed)`` pair handed to the reporter."""

    name: str
    passed: bool

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Success:
    pass


@dataclass(frozen=True)
class Failure:
    message: str


Outcome = Success | Failure


class Reporter(Protocol):
    def report(self, event: ResultEvent) -> None: ...


def failure_message(exc: BaseException) -> str:
    """Human-readable message of a raised failure.

    Prefers a string ``message`` attribute (assertion libraries set one), then
    ``str(exc)``, then the exception class name for message-less exceptions.
    """
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message:
        return message
    text = str(exc)
    if text:
        return text
    return type(exc).__name__


def attempt(body: Callable[[], Any] | None) -> Outcome:
    """Invoke *body* and convert the outcome into a ``Success`` or ``Failure``.

    A missing body is itself a failure.
    """
    if body is None:
        return Failure(MISSING_CALLABLE_MESSAGE)
    try:
        body()
    except Exception as e:
        return Failure(failure_message(e))
    return Success()


def failure_events(name: str, failure: Failure) -> list[ResultEvent]:
    """The two failing events every failed unit emits: its name, then the message."""
    return [ResultEvent(name, False), ResultEvent(failure.message, False)]


@dataclass
class RunSummary:
    """Event counts for a finished run."""

    total: int
    passed: int
    failed: int

    @property
    def all_passed(self) -> bool:
        return self.failed == 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def summarize(events: Iterable[ResultEvent]) -> RunSummary:
    total = 0
    passed = 0
    for event in events:
        total += 1
        if event.passed:
            passed += 1
    return RunSummary(total=total, passed=passed, failed=total - passed)
