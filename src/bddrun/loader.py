"""Import spec files and let them register into a run context."""

from __future__ import annotations

import importlib.util
import sys
from pathlib import Path

from bddrun.context import RunContext

REGISTER_FUNCTION = "register"


def load_spec(path: Path, ctx: RunContext) -> None:
    """Import the module at *path* and call its ``register(ctx)``.

    Raises ValueError if the file does not exist or defines no ``register``.
    Exceptions raised while registering propagate unchanged.
    """
    if not path.is_file():
        raise ValueError(f"Spec file not found: {path}")

    module_name = f"bddrun_spec_{path.stem}_{abs(hash(str(path.resolve())))}"
    module_spec = importlib.util.spec_from_file_location(module_name, path)
    if module_spec is None or module_spec.loader is None:
        raise ValueError(f"Cannot import spec file: {path}")
    module = importlib.util.module_from_spec(module_spec)
    sys.modules[module_name] = module
    try:
        module_spec.loader.exec_module(module)

        register = getattr(module, REGISTER_FUNCTION, None)
        if not callable(register):
            raise ValueError(f"Spec file {path} does not define {REGISTER_FUNCTION}(ctx)")
        register(ctx)
    finally:
        sys.modules.pop(module_name, None)
