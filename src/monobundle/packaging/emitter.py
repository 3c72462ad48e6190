"""
Bundle Emitter

Serializes the embedded runtime and a {ModulePath: source} mapping into one
self-contained Python script. The runtime modules are concatenated in
dependency order with their intra-package imports removed, so the script
only needs the standard library.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Mapping

from .. import runtime
from ..runtime.path_resolver import normalize
from ..utils.config import BUNDLE_HEADER, BUNDLE_SHEBANG, DEFAULT_REQUIRE_FUNCTION, DEFAULT_ROOTS
from ..utils.io_utils import read_source_file

logger = logging.getLogger(__name__)

RUNTIME_DIR = Path(runtime.__file__).parent

_MAIN_TEMPLATE = '''
if __name__ == "__main__":
    import sys
    try:
        run(_SOURCES, _ENTRY, _ROOTS, _REQUIRE_FUNCTION)
    except BundleError as e:
        sys.stderr.write(f"error: {e}\\n")
        sys.exit(1)
'''


def _strip_package_imports(source: str) -> str:
    # Runtime modules keep each intra-package import on one line.
    return "\n".join(line for line in source.splitlines() if not line.startswith("from ."))


def runtime_source() -> str:
    """Text of the embedded runtime, one section per runtime module"""
    sections: List[str] = []
    for name in runtime.RUNTIME_MODULES:
        text = _strip_package_imports(read_source_file(RUNTIME_DIR / f"{name}.py"))
        sections.append(f"# ---- runtime/{name}.py ----\n{text.strip()}\n")
    return "\n\n".join(sections)


def _sources_literal(sources: Mapping[str, str]) -> str:
    lines = ["_SOURCES = {"]
    for key, source in sources.items():
        lines.append(f"    {key!r}: {source!r},")
    lines.append("}")
    return "\n".join(lines)


def emit_bundle(
    sources: Mapping[str, str],
    entry: str,
    roots: Iterable[str] = DEFAULT_ROOTS,
    require_function: str = DEFAULT_REQUIRE_FUNCTION,
) -> str:
    """
    Render the bundle script.

    Args:
        sources: ModulePath -> unit source text
        entry: Specifier loaded when the script runs
        roots: Search roots baked into the script
        require_function: Global name under which units see require()
    """
    entry = normalize(entry)
    roots = tuple(roots)
    parts = [
        BUNDLE_SHEBANG,
        BUNDLE_HEADER,
        f"# entry: {entry}",
        "",
        runtime_source(),
        "",
        _sources_literal(sources),
        f"_ENTRY = {entry!r}",
        f"_ROOTS = {roots!r}",
        f"_REQUIRE_FUNCTION = {require_function!r}",
        _MAIN_TEMPLATE,
    ]
    logger.debug(f"Emitted bundle for {entry}: {len(sources)} units")
    return "\n".join(parts)
