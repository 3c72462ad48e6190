"""
Bundle Driver

Orchestrates one build: collect sources, emit the bundle, write it out.
"""

import logging
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional

from .packaging.discovery import collect_sources, entry_key
from .packaging.emitter import emit_bundle
from .packaging.manifest import Manifest, Project
from .runtime.module_loader import ModuleRegistry
from .runtime.source_loader import build_namespace
from .utils.config import DEFAULT_REQUIRE_FUNCTION, DEFAULT_ROOTS
from .utils.io_utils import write_output_file

logger = logging.getLogger(__name__)


class BuildResult:
    """Build result"""
    def __init__(
        self,
        project: Project,
        output_path: Path,
        entry: str,
        modules: List[str],
        text: str,
    ):
        self.project = project
        self.output_path = output_path
        self.entry = entry
        self.modules = modules
        self.text = text

    def __repr__(self) -> str:
        return f"BuildResult(project={self.project.name!r}, output_path={self.output_path}, modules={len(self.modules)})"


class BundleDriver:
    """
    Bundle driver.

    Stateless apart from the require function name; safe to reuse across
    projects and manifests.
    """

    def __init__(self, require_function: str = DEFAULT_REQUIRE_FUNCTION):
        self.require_function = require_function

    def build(self, project: Project, write: bool = True) -> BuildResult:
        """
        Bundle one project.

        Raises:
            SourceError: If a source cannot be read or two files share a key
        """
        sources = collect_sources(project)
        entry = entry_key(project)
        text = emit_bundle(sources, entry, project.roots, self.require_function)

        output_path = project.output_file
        if write:
            write_output_file(output_path, text)
            logger.info(f"Wrote {output_path} ({len(sources)} modules, entry {entry})")

        return BuildResult(
            project=project,
            output_path=output_path,
            entry=entry,
            modules=list(sources.keys()),
            text=text,
        )

    def build_all(self, manifest: Manifest, names: Optional[Iterable[str]] = None) -> List[BuildResult]:
        """Build every project of a manifest, or only the named ones"""
        selected = set(names) if names is not None else None
        results = []
        for project in manifest.projects:
            if selected is not None and project.name not in selected:
                continue
            results.append(self.build(project))
        return results

    def check(self, project: Project) -> Any:
        """Load a project's entry in-process without writing a bundle"""
        sources = collect_sources(project)
        return run_bundle(sources, entry_key(project), project.roots, self.require_function)


def run_bundle(
    sources: Mapping[str, str],
    entry: str,
    roots: Iterable[str] = DEFAULT_ROOTS,
    require_function: str = DEFAULT_REQUIRE_FUNCTION,
) -> Any:
    """Build an in-memory registry from sources and return the entry's export"""
    registry = ModuleRegistry(build_namespace(sources, require_function), roots)
    export = registry.load_entry(entry)
    logger.debug(f"Ran {entry}: loaded {registry.loaded_modules()}")
    return export
