"""Embedded module runtime: path resolution, registry, source loaders."""

from .errors import BundleError, CyclicModuleError, UnresolvedModuleError
from .module_info import ExecutionContext, Loader, ModuleRecord, ModuleState
from .module_loader import ModuleRegistry
from .path_resolver import ModuleResolver, Resolution, ResolutionTag, normalize
from .source_loader import build_namespace, run, source_loader

# Dependency order; the emitter concatenates these files into each bundle.
# Their relative imports must each fit on a single "from ." line.
RUNTIME_MODULES = (
    "errors",
    "path_resolver",
    "module_info",
    "module_loader",
    "source_loader",
)

__all__ = [
    'BundleError',
    'CyclicModuleError',
    'UnresolvedModuleError',
    'ExecutionContext',
    'Loader',
    'ModuleRecord',
    'ModuleState',
    'ModuleRegistry',
    'ModuleResolver',
    'Resolution',
    'ResolutionTag',
    'normalize',
    'build_namespace',
    'run',
    'source_loader',
    'RUNTIME_MODULES',
]
