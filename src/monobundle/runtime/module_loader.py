"""
Module Registry

Owns the flattened namespace and the memo table, and executes loader thunks.

This class handles:
- Resolving specifiers through ModuleResolver
- Executing each resolved unit exactly once, lazily, depth-first
- Memoizing exports by resolved ModulePath
- Rejecting circular requires with the full chain
"""

import logging
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .errors import CyclicModuleError, UnresolvedModuleError
from .module_info import ExecutionContext, Loader, ModuleRecord, ModuleState
from .path_resolver import ModuleResolver, Resolution, normalize

logger = logging.getLogger("monobundle.runtime")


class ModuleRegistry:
    """
    Load modules by specifier relative to a caller.

    Args:
        namespace: Mapping of ModulePath -> loader thunk. Keys are normalized
                   on the way in; the registry keeps its own read-only copy.
        roots: Ordered search root prefixes for non-relative resolution
    """

    def __init__(self, namespace: Mapping[str, Loader], roots: Iterable[str] = ("",)):
        self.namespace: Mapping[str, Loader] = MappingProxyType(
            {normalize(key): loader for key, loader in namespace.items()}
        )
        self.resolver = ModuleResolver(self.namespace, roots)
        self.records: Dict[str, ModuleRecord] = {}
        self.loading_stack: List[str] = []
        self.load_order: List[str] = []

    def resolve(self, specifier: str, caller: Optional[str] = None) -> Resolution:
        return self.resolver.resolve(specifier, caller)

    def load(self, specifier: str, caller: Optional[str] = None) -> Any:
        """
        Load a module by specifier.

        Args:
            specifier: Raw specifier, e.g. './util' or 'vendor/zero'
            caller: ModulePath of the requesting unit (None for the entry load)

        Returns:
            The unit's export (memoized after the first load)

        Raises:
            UnresolvedModuleError: If no relative or root candidate matches
            CyclicModuleError: If the unit is still loading further up the stack
        """
        resolution = self.resolver.resolve(specifier, caller)
        if not resolution.is_found():
            raise UnresolvedModuleError(
                specifier,
                caller=caller,
                chain=self.loading_stack,
                attempts=resolution.attempts,
            )

        return self.load_key(resolution.unwrap())

    def load_entry(self, entry: str) -> Any:
        """
        Load the entry unit.

        The entry is already a root-relative ModulePath, so its exact key is
        tried before the search roots; a roots list without "" still finds it.
        """
        key = normalize(entry)
        if key in self.namespace:
            return self.load_key(key)
        return self.load(entry)

    def load_key(self, key: str) -> Any:
        """Return the memoized export of a resolved key, executing it on first use"""
        record = self.records.get(key)
        if record is None:
            return self.execute(key)

        if record.state is ModuleState.LOADED:
            return record.value
        if record.state is ModuleState.LOADING:
            start = self.loading_stack.index(key)
            raise CyclicModuleError(self.loading_stack[start:] + [key])
        if record.state is ModuleState.FAILED:
            raise record.error
        return self.execute(key)

    def execute(self, key: str) -> Any:
        """Run the loader thunk for key once and memoize its export"""
        record = self.records.setdefault(key, ModuleRecord(key))
        loader = self.namespace[key]

        record.state = ModuleState.LOADING
        self.loading_stack.append(key)
        self.load_order.append(key)
        logger.debug(f"Loading {key}")
        try:
            value = loader(ExecutionContext(current_path=key, registry=self))
        except BaseException as e:
            record.state = ModuleState.FAILED
            record.error = e
            raise
        finally:
            self.loading_stack.pop()

        record.value = value
        record.state = ModuleState.LOADED
        logger.debug(f"Loaded {key}")
        return value

    def state_of(self, key: str) -> ModuleState:
        record = self.records.get(normalize(key))
        return record.state if record else ModuleState.UNLOADED

    def is_loaded(self, key: str) -> bool:
        """Check if a module has finished loading"""
        return self.state_of(key) is ModuleState.LOADED

    def loaded_modules(self) -> List[str]:
        """Loaded ModulePaths in the order they started executing"""
        return [key for key in self.load_order if self.records[key].state is ModuleState.LOADED]

    def keys(self) -> List[str]:
        return list(self.namespace.keys())
