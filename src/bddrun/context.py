"""Run-scoped registration state: the suite tree, the hook list and the counters."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterator

from bddrun.naming import qualified_name, resolve_hook_name, resolve_suite_name

Body = Callable[[], object]


class HookShape(str, Enum):
    """How a ``before`` call was made, fixed at registration."""

    NO_NAME_NO_BODY = "no-name-no-body"
    NAME_NO_BODY = "name-no-body"
    NO_NAME_BODY = "no-name-body"
    NAME_BODY = "name-body"


@dataclass(eq=False)
class TestNode:
    name: str
    body: Body | None
    parent: SuiteNode | None = field(default=None, repr=False)

    __test__ = False  # not a pytest test class

    @property
    def qualified_name(self) -> str:
        return qualified_name(self)


@dataclass(eq=False)
class SuiteNode:
    """A ``describe`` block. The root suite of a run has ``is_root`` set and no name."""

    display_name: str
    explicit_name: str | None = None
    counter: int = 0
    children: list[SuiteNode | TestNode] = field(default_factory=list)
    parent: SuiteNode | None = field(default=None, repr=False)
    is_root: bool = False

    @property
    def is_anonymous(self) -> bool:
        return self.explicit_name is None

    def tests(self) -> list[TestNode]:
        """All tests under this suite, depth-first in registration order."""
        found: list[TestNode] = []
        for child in self.children:
            if isinstance(child, TestNode):
                found.append(child)
            else:
                found.extend(child.tests())
        return found


@dataclass(frozen=True)
class HookDescriptor:
    display_name: str
    shape: HookShape
    counter: int
    body: Body | None = None


def _check_name(name: object, what: str) -> None:
    if name is not None and not isinstance(name, str):
        raise TypeError(f"{what} name must be a string, got {type(name).__name__}")


def _split_args(name: object, body: object, what: str) -> tuple[str | None, Body | None]:
    """Resolve ``(name, body)``, ``(body,)`` and ``(name,)`` call shapes."""
    if body is None and callable(name):
        return None, name  # type: ignore[return-value]
    _check_name(name, what)
    if body is not None and not callable(body):
        raise TypeError(f"{what} body must be callable, got {type(body).__name__}")
    return name, body  # type: ignore[return-value]


class RunContext:
    """Isolated state for one run.

    Registration (``describe``/``it``/``before``) mutates the context; the hook
    runner and suite executor only read it. One run per context at a time.
    """

    def __init__(self) -> None:
        self.suite_counter = 0
        self.hook_counter = 0
        self.root = SuiteNode(display_name="", is_root=True)
        self.hooks: list[HookDescriptor] = []
        self._scopes: list[SuiteNode] = []
        self._executing = False

    @property
    def executing(self) -> bool:
        return self._executing

    @contextmanager
    def execution(self) -> Iterator[None]:
        """Mark the context read-only while hooks and tests run."""
        previous = self._executing
        self._executing = True
        try:
            yield
        finally:
            self._executing = previous

    def _check_registration(self, what: str) -> None:
        if self._executing:
            raise RuntimeError(f"{what} cannot be called while the run is executing")

    @property
    def active_scope(self) -> SuiteNode:
        return self._scopes[-1] if self._scopes else self.root

    def describe(self, name: str | Body | None = None, body: Body | None = None) -> SuiteNode:
        """Register a suite under the active scope and run *body* to fill it.

        The suite counter advances for every suite, named or not, so anonymous
        suites are numbered by their position among all suites in the run.
        """
        self._check_registration("describe")
        explicit, body = _split_args(name, body, "describe")
        self.suite_counter += 1
        scope = self.active_scope
        suite = SuiteNode(
            display_name=resolve_suite_name(explicit, self.suite_counter),
            explicit_name=explicit,
            counter=self.suite_counter,
            parent=scope,
        )
        scope.children.append(suite)
        if body is not None:
            self._scopes.append(suite)
            try:
                body()
            finally:
                self._scopes.pop()
        return suite

    def it(self, name: str, body: Body | None = None) -> TestNode:
        self._check_registration("it")
        if not isinstance(name, str):
            raise TypeError(f"it name must be a string, got {type(name).__name__}")
        if body is not None and not callable(body):
            raise TypeError(f"it body must be callable, got {type(body).__name__}")
        scope = self.active_scope
        test = TestNode(name=name, body=body, parent=scope)
        scope.children.append(test)
        return test

    def before(self, name: str | Body | None = None, body: Body | None = None) -> HookDescriptor:
        """Register a global hook that runs once before every suite of the run."""
        self._check_registration("before")
        explicit, body = _split_args(name, body, "before")
        if explicit is None:
            shape = HookShape.NO_NAME_NO_BODY if body is None else HookShape.NO_NAME_BODY
        else:
            shape = HookShape.NAME_NO_BODY if body is None else HookShape.NAME_BODY
        self.hook_counter += 1
        hook = HookDescriptor(
            display_name=resolve_hook_name(explicit, self.hook_counter),
            shape=shape,
            counter=self.hook_counter,
            body=body,
        )
        self.hooks.append(hook)
        return hook

    def tests(self) -> list[TestNode]:
        return self.root.tests()
