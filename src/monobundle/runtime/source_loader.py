"""
Source Loaders

Turns bundled Python source text into loader thunks. Each unit runs in a
fresh module object whose globals carry a require function bound to the
unit's own ModulePath.
"""

import types
from typing import Any, Dict, Iterable, Mapping

from .module_info import ExecutionContext, Loader
from .module_loader import ModuleRegistry

DEFAULT_REQUIRE_FUNCTION = "require"
EXPORTS_NAME = "exports"
BUNDLE_FILE_PREFIX = "<bundle>"


def unit_filename(key: str) -> str:
    """Pseudo filename used in tracebacks for a bundled unit"""
    return f"{BUNDLE_FILE_PREFIX}/{key}.py"


def source_loader(key: str, source: str, require_function: str = DEFAULT_REQUIRE_FUNCTION) -> Loader:
    """
    Build a loader thunk for one unit.

    Compilation is deferred to the first load, so a syntax error in a unit that
    is never required does not abort the bundle. The export is the unit's
    'exports' global when it defines one, else the module object itself.
    """
    filename = unit_filename(key)

    def load(context: ExecutionContext) -> Any:
        module = types.ModuleType(key)
        module.__file__ = filename
        setattr(module, require_function, context.bound_require())
        code = compile(source, filename, "exec")
        exec(code, module.__dict__)
        return module.__dict__.get(EXPORTS_NAME, module)

    return load


def build_namespace(sources: Mapping[str, str], require_function: str = DEFAULT_REQUIRE_FUNCTION) -> Dict[str, Loader]:
    return {key: source_loader(key, source, require_function) for key, source in sources.items()}


def run(
    sources: Mapping[str, str],
    entry: str,
    roots: Iterable[str] = ("",),
    require_function: str = DEFAULT_REQUIRE_FUNCTION,
) -> Any:
    """Load the entry unit of a set of bundled sources and return its export"""
    registry = ModuleRegistry(build_namespace(sources, require_function), roots)
    return registry.load_entry(entry)
