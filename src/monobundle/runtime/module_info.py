"""
Module Runtime Types

Per-unit bookkeeping shared between the registry and loader thunks.
These types are plain data structures with no resolution logic.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional


class ModuleState(Enum):
    """Lifecycle of one ModulePath: UNLOADED -> LOADING -> LOADED (or FAILED)"""
    UNLOADED = "unloaded"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass
class ModuleRecord:
    """
    Memo table entry for one resolved ModulePath.

    value is only meaningful once state is LOADED; a unit that exports None
    is still LOADED and is never executed again. error holds the exception a
    FAILED unit raised.
    """
    key: str
    state: ModuleState = ModuleState.UNLOADED
    value: Any = None
    error: Optional[BaseException] = None

    def __repr__(self) -> str:
        return f"ModuleRecord(key={self.key!r}, state={self.state.value})"


@dataclass(frozen=True)
class ExecutionContext:
    """
    Handed to a loader thunk while its unit executes.

    require() resolves specifiers relative to current_path, so nested
    requires inside the unit body behave like filesystem-relative imports.
    """
    current_path: str
    registry: Any  # ModuleRegistry

    def require(self, specifier: str) -> Any:
        return self.registry.load(specifier, self.current_path)

    def bound_require(self) -> Callable[[str], Any]:
        """Plain one-argument require function for injection into unit globals"""
        def require(specifier: str) -> Any:
            return self.require(specifier)
        return require


Loader = Callable[[ExecutionContext], Any]
