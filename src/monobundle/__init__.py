"""
monobundle: flatten a tree of Python sources into one self-contained script.
"""

from .driver import BuildResult, BundleDriver, run_bundle
from .packaging.manifest import Manifest, Project, load_manifest
from .runtime import (
    BundleError,
    CyclicModuleError,
    ModuleRegistry,
    ModuleResolver,
    UnresolvedModuleError,
    normalize,
)
from .shared.errors import ManifestError, MonobundleError, SourceError

__version__ = "0.1.0"

__all__ = [
    "BuildResult",
    "BundleDriver",
    "run_bundle",
    "Manifest",
    "Project",
    "load_manifest",
    "BundleError",
    "CyclicModuleError",
    "ModuleRegistry",
    "ModuleResolver",
    "UnresolvedModuleError",
    "normalize",
    "ManifestError",
    "MonobundleError",
    "SourceError",
]
