"""Packaging: manifest loading, source discovery, bundle emission."""

from .discovery import collect_sources, entry_key, files_from_path, module_key
from .emitter import emit_bundle, runtime_source
from .manifest import Manifest, Project, load_manifest, parse_project

__all__ = [
    'collect_sources',
    'entry_key',
    'files_from_path',
    'module_key',
    'emit_bundle',
    'runtime_source',
    'Manifest',
    'Project',
    'load_manifest',
    'parse_project',
]
