"""
Source Discovery

Walks a project's `files` entries and computes the flattened ModulePath of
every source file:

    src/main.py          -> src/main
    src/pkg/__init__.py  -> src/pkg/init
    vendor/zero/init.py  -> vendor/zero/init
"""

import logging
from pathlib import Path
from typing import Dict, List

from ..runtime.path_resolver import normalize
from ..shared.errors import SourceError
from ..utils.config import (
    IGNORED_DIRECTORIES,
    INIT_MODULE_NAME,
    PACKAGE_INIT_STEMS,
    SOURCE_EXTENSIONS,
)
from ..utils.io_utils import read_source_file
from .manifest import Project

logger = logging.getLogger(__name__)


def is_source_file(path: Path) -> bool:
    return path.is_file() and path.suffix in SOURCE_EXTENSIONS


def files_from_path(path: Path) -> List[Path]:
    """Source files under path (the path itself if it is a file), in sorted order"""
    if path.is_file():
        return [path]

    files: List[Path] = []
    if path.is_dir():
        for entry in sorted(path.iterdir()):
            if entry.name.startswith(".") or entry.name in IGNORED_DIRECTORIES:
                continue
            if entry.is_dir():
                files.extend(files_from_path(entry))
            elif is_source_file(entry):
                files.append(entry)
    return files


def module_key(path: Path, base_dir: Path) -> str:
    """
    ModulePath for a source file relative to base_dir.

    Raises:
        SourceError: If the file lies outside base_dir
    """
    try:
        relative = path.resolve().relative_to(base_dir.resolve())
    except ValueError:
        raise SourceError(f"source file is outside the project directory {base_dir}", str(path))

    stem = relative.stem
    if stem in PACKAGE_INIT_STEMS:
        stem = INIT_MODULE_NAME
    parts = list(relative.parent.parts) + [stem]
    return normalize("/".join(parts))


def collect_sources(project: Project) -> Dict[str, str]:
    """
    Read every file of a project keyed by ModulePath.

    The entry point is always included. Two files mapping to the same key
    (e.g. pkg/__init__.py and pkg/init.py) raise SourceError.
    """
    paths: List[Path] = []
    for entry in project.files:
        paths.extend(files_from_path(entry))
    paths.append(project.entry_point)

    sources: Dict[str, str] = {}
    origins: Dict[str, Path] = {}
    for path in paths:
        key = module_key(path, project.base_dir)
        previous = origins.get(key)
        if previous is not None:
            if previous.resolve() == path.resolve():
                continue
            raise SourceError(
                f"`{path}` and `{previous}` both map to module `{key}`",
                str(path),
                help="rename one of the files so every unit has a distinct module path",
            )
        try:
            sources[key] = read_source_file(path)
        except (OSError, UnicodeDecodeError) as e:
            raise SourceError(f"could not read source file: {e}", str(path))
        origins[key] = path
        logger.debug(f"Collected {path} as {key}")

    return sources


def entry_key(project: Project) -> str:
    return module_key(project.entry_point, project.base_dir)
