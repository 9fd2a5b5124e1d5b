"""Tests for suite tree and hook list registration."""

import pytest

from bddrun.context import HookShape, RunContext, SuiteNode, TestNode


def test_describe_appends_suite_to_root(ctx):
    suite = ctx.describe("my test suite", lambda: None)
    assert ctx.root.children == [suite]
    assert suite.display_name == "my test suite"
    assert suite.parent is ctx.root
    assert not suite.is_anonymous


def test_describe_without_body_is_childless(ctx):
    suite = ctx.describe("empty")
    assert suite.children == []
    assert ctx.active_scope is ctx.root


def test_describe_with_only_a_body_is_anonymous(ctx):
    suite = ctx.describe(lambda: ctx.it("t", lambda: None))
    assert suite.is_anonymous
    assert suite.display_name == "describe #1"
    assert [c.name for c in suite.children] == ["t"]


def test_nested_children_keep_registration_order(ctx):
    def body():
        ctx.it("first", lambda: None)
        ctx.describe("nested", lambda: ctx.it("inner", lambda: None))
        ctx.it("second", lambda: None)

    suite = ctx.describe("outer", body)

    kinds = [(type(c).__name__, getattr(c, "name", None) or c.display_name) for c in suite.children]
    assert kinds == [
        ("TestNode", "first"),
        ("SuiteNode", "nested"),
        ("TestNode", "second"),
    ]
    assert [t.name for t in ctx.tests()] == ["first", "inner", "second"]


def test_suite_counter_advances_for_named_and_anonymous_suites(ctx):
    def body():
        ctx.describe(lambda: ctx.describe())

    ctx.describe("named", body)
    ctx.describe()

    suites: list[SuiteNode] = []

    def collect(suite):
        for child in suite.children:
            if isinstance(child, SuiteNode):
                suites.append(child)
                collect(child)

    collect(ctx.root)
    assert [s.counter for s in suites] == [1, 2, 3, 4]
    assert [s.display_name for s in suites] == [
        "named",
        "describe #2",
        "describe #3",
        "describe #4",
    ]
    assert ctx.suite_counter == 4


def test_it_registers_under_active_scope(ctx):
    found = {}
    ctx.describe("s", lambda: found.setdefault("t", ctx.it("t", lambda: None)))
    test = found["t"]
    assert isinstance(test, TestNode)
    assert test.parent is ctx.root.children[0]


def test_it_requires_a_string_name(ctx):
    with pytest.raises(TypeError):
        ctx.it(None, lambda: None)


def test_it_rejects_non_callable_body(ctx):
    with pytest.raises(TypeError):
        ctx.it("t", "not callable")


def test_describe_rejects_non_string_name(ctx):
    with pytest.raises(TypeError):
        ctx.describe(42, lambda: None)


def test_scope_is_restored_when_describe_body_raises(ctx):
    def body():
        raise RuntimeError("registration broke")

    with pytest.raises(RuntimeError):
        ctx.describe("broken", body)

    assert ctx.active_scope is ctx.root
    after = ctx.describe("after")
    assert after.parent is ctx.root


@pytest.mark.parametrize(
    "args,shape,display_name,has_body",
    [
        ((), HookShape.NO_NAME_NO_BODY, "before #1", False),
        (("my hook",), HookShape.NAME_NO_BODY, "my hook", False),
        ((lambda: None,), HookShape.NO_NAME_BODY, "before #1", True),
        (("my hook", lambda: None), HookShape.NAME_BODY, "my hook", True),
    ],
)
def test_before_call_shapes(ctx, args, shape, display_name, has_body):
    hook = ctx.before(*args)
    assert hook.shape == shape
    assert hook.display_name == display_name
    assert (hook.body is not None) == has_body
    assert ctx.hooks == [hook]


def test_hook_counter_advances_for_named_hooks(ctx):
    ctx.before("first", lambda: None)
    ctx.before()
    third = ctx.before(lambda: None)
    assert [h.counter for h in ctx.hooks] == [1, 2, 3]
    assert ctx.hooks[1].display_name == "before #2"
    assert third.display_name == "before #3"


def test_suite_and_hook_counters_are_independent(ctx):
    ctx.describe()
    ctx.describe()
    hook = ctx.before()
    suite = ctx.describe()
    assert hook.display_name == "before #1"
    assert suite.display_name == "describe #3"


def test_hooks_are_not_attached_to_suites(ctx):
    def body():
        ctx.before("inside", lambda: None)

    suite = ctx.describe("s", body)
    assert suite.children == []
    assert [h.display_name for h in ctx.hooks] == ["inside"]


def test_contexts_are_isolated():
    first = RunContext()
    second = RunContext()
    first.describe()
    first.before()
    assert second.describe().display_name == "describe #1"
    assert second.before().display_name == "before #1"


@pytest.mark.parametrize(
    "register",
    [
        lambda ctx: ctx.describe("late"),
        lambda ctx: ctx.it("late", lambda: None),
        lambda ctx: ctx.before("late", lambda: None),
    ],
    ids=["describe", "it", "before"],
)
def test_registration_is_rejected_while_executing(ctx, register):
    with ctx.execution():
        assert ctx.executing
        with pytest.raises(RuntimeError, match="while the run is executing"):
            register(ctx)
    assert not ctx.executing
    register(ctx)
