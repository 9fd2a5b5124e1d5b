"""Display names for suites, hooks and tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bddrun.context import TestNode

ANONYMOUS_SUITE_PREFIX = "describe #"
ANONYMOUS_HOOK_PREFIX = "before #"


def resolve_suite_name(explicit: str | None, counter: int) -> str:
    """Return *explicit* if given, else ``describe #<counter>``."""
    if explicit is not None:
        return explicit
    return f"{ANONYMOUS_SUITE_PREFIX}{counter}"


def resolve_hook_name(explicit: str | None, counter: int) -> str:
    """Return *explicit* if given, else ``before #<counter>``."""
    if explicit is not None:
        return explicit
    return f"{ANONYMOUS_HOOK_PREFIX}{counter}"


def qualified_name(test: TestNode) -> str:
    """Join ancestor suite names (root first) and the test's own name with spaces.

    The implicit root suite of a run has no name and is not part of the path.
    """
    parts: list[str] = []
    suite = test.parent
    while suite is not None and not suite.is_root:
        parts.append(suite.display_name)
        suite = suite.parent
    parts.reverse()
    parts.append(test.name)
    return " ".join(parts)
