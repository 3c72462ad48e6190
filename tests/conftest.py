"""
Pytest configuration and shared fixtures for all monobundle tests.

Provides a recording namespace factory for exercising the runtime with plain
Python thunks, and a project builder that lays out source trees and
manifests under tmp_path.
"""

import sys
import textwrap
from collections import Counter
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
from monobundle.runtime.module_info import ExecutionContext


# =============================================================================
# Recording namespace
# =============================================================================

class NamespaceRecorder:
    """
    Builds loader thunks that record when they run.

    Each thunk appends its key to `events`, bumps `calls[key]`, requires its
    specifiers in order and returns a dict export (or None when asked to).
    """

    def __init__(self):
        self.events: List[str] = []
        self.calls: Counter = Counter()
        self.contexts: Dict[str, ExecutionContext] = {}

    def unit(
        self,
        key: str,
        *requires: str,
        returns_none: bool = False,
        body: Optional[Callable[[ExecutionContext], Any]] = None,
    ):
        def load(context: ExecutionContext):
            self.events.append(key)
            self.calls[key] += 1
            self.contexts[key] = context
            deps = [context.require(specifier) for specifier in requires]
            if body is not None:
                return body(context)
            if returns_none:
                return None
            return {"key": key, "deps": deps}
        return load

    def build(self, layout: Dict[str, tuple]) -> Dict[str, Callable]:
        """{'src/main': ('./util',)} -> namespace of recording thunks"""
        return {key: self.unit(key, *requires) for key, requires in layout.items()}


@pytest.fixture
def recorder():
    return NamespaceRecorder()


# =============================================================================
# Project builder
# =============================================================================

class ProjectBuilder:
    """Writes source files and manifests below a temporary directory"""

    def __init__(self, root: Path):
        self.root = root

    def write(self, relative: str, text: str) -> Path:
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(text).lstrip("\n"), encoding="utf-8")
        return path

    def manifest(self, text: str, name: str = "build.toml") -> Path:
        return self.write(name, text)


@pytest.fixture
def project(tmp_path):
    return ProjectBuilder(tmp_path)


# =============================================================================
# Markers
# =============================================================================

def pytest_configure(config):
    """Register custom markers for test organization."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
