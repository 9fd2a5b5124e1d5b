import pytest

from bddrun.context import RunContext
from bddrun.loader import load_spec


def test_load_spec_calls_register(write_spec):
    path = write_spec("""\
        def register(ctx):
            ctx.before("hook", lambda: None)
            ctx.describe("suite", lambda: ctx.it("test", lambda: None))
    """)
    ctx = RunContext()
    load_spec(path, ctx)
    assert [h.display_name for h in ctx.hooks] == ["hook"]
    assert [t.qualified_name for t in ctx.tests()] == ["suite test"]


def test_load_spec_missing_file(tmp_path):
    with pytest.raises(ValueError, match="not found"):
        load_spec(tmp_path / "nope.py", RunContext())


def test_load_spec_without_register(write_spec):
    path = write_spec("VALUE = 1\n")
    with pytest.raises(ValueError, match="register"):
        load_spec(path, RunContext())


def test_registration_errors_propagate(write_spec):
    path = write_spec("""\
        def register(ctx):
            def body():
                raise RuntimeError("bad spec")
            ctx.describe("suite", body)
    """)
    with pytest.raises(RuntimeError, match="bad spec"):
        load_spec(path, RunContext())


def test_spec_module_is_not_left_in_sys_modules(write_spec):
    import sys

    ok_path = write_spec("def register(ctx):\n    pass\n", name="clean_spec.py")
    broken_path = write_spec("raise RuntimeError('import broke')\n", name="broken_spec.py")

    load_spec(ok_path, RunContext())
    with pytest.raises(RuntimeError, match="import broke"):
        load_spec(broken_path, RunContext())

    assert not [name for name in sys.modules if name.startswith("bddrun_spec_")]
