"""Truthiness and equality checks with literal-style failure messages."""

from __future__ import annotations

from typing import Any

from bddrun.assertions.base import AssertionFailure


def render(value: Any) -> str:
    """Render *value* the way failure messages quote it."""
    if value is True:
        return "true"
    if value is False:
        return "false"
    if value is None:
        return "null"
    if isinstance(value, str):
        return "'" + value.replace("'", "\\'") + "'"
    if isinstance(value, (list, tuple)):
        if not value:
            return "[]"
        return "[ " + ", ".join(render(v) for v in value) + " ]"
    if isinstance(value, dict):
        if not value:
            return "{}"
        items = ", ".join(f"{k}: {render(v)}" for k, v in value.items())
        return "{ " + items + " }"
    return repr(value)


def ok(value: Any, message: str | None = None) -> None:
    if not value:
        raise AssertionFailure(message or f"expected {render(value)} to be truthy")


def equal(actual: Any, expected: Any, message: str | None = None) -> None:
    if actual != expected:
        raise AssertionFailure(
            message or f"expected {render(actual)} to equal {render(expected)}"
        )
