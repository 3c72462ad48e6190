"""
Build Manifest

Reads build.toml (or build.yaml) describing one or more projects to bundle:

    require_function = "require"

    [[project]]
    name = "app"
    output = "build"
    entry_point = "src/main.py"
    files = ["src", "vendor"]
    roots = ["", "vendor"]

Paths are relative to the manifest's directory. An invalid project entry is
reported and skipped; a missing or unreadable manifest is fatal.
"""

import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml

from ..shared.errors import ManifestError
from ..utils.config import (
    BUILD_FILE,
    BUNDLE_SUFFIX,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_PROJECT_NAME,
    DEFAULT_REQUIRE_FUNCTION,
    DEFAULT_ROOTS,
    MANIFEST_SUFFIXES,
)
from ..utils.io_utils import read_source_file

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Project:
    """One [[project]] entry with paths already resolved against the base directory"""
    name: str
    output: Path
    entry_point: Path
    files: Tuple[Path, ...]
    base_dir: Path
    roots: Tuple[str, ...] = DEFAULT_ROOTS

    @property
    def output_file(self) -> Path:
        return self.output / f"{self.name}{BUNDLE_SUFFIX}"


@dataclass(frozen=True)
class Manifest:
    path: Path
    projects: Tuple[Project, ...]
    require_function: str = DEFAULT_REQUIRE_FUNCTION

    def get_project(self, name: str) -> Optional[Project]:
        for project in self.projects:
            if project.name == name:
                return project
        return None


def _parse_document(path: Path) -> Dict[str, Any]:
    text = read_source_file(path)
    if path.suffix in (".yaml", ".yml"):
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError as e:
            raise ManifestError(f"could not parse `{path.name}`: {e}", str(path))
    else:
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as e:
            raise ManifestError(f"could not parse `{path.name}`: {e}", str(path))
    if not isinstance(data, dict):
        raise ManifestError(f"`{path.name}` must contain a table at the top level", str(path))
    return data


def _string_list(value: Any) -> Optional[List[str]]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return list(value)
    return None


def parse_project(table: Dict[str, Any], base_dir: Path) -> Optional[Project]:
    """Build a Project from one manifest entry, or None (logged) if it is invalid"""
    if not isinstance(table, dict):
        logger.error("a project entry must be a table")
        return None

    name = str(table.get("name", DEFAULT_PROJECT_NAME))
    output = base_dir / str(table.get("output", DEFAULT_OUTPUT_DIR))

    if "entry_point" not in table:
        logger.error(f"project `{name}` is missing an `entry_point` file")
        return None
    entry_point = base_dir / str(table["entry_point"])
    if not entry_point.is_file():
        logger.error(f"project `{name}` has an invalid file in the `entry_point`: {entry_point}")
        return None

    if "files" not in table:
        logger.error(f"project `{name}` is missing a `files` list")
        return None
    file_entries = _string_list(table["files"])
    if file_entries is None:
        logger.error(f"project `{name}` has a `files` value that is not a list of paths")
        return None
    files = []
    for entry in file_entries:
        path = base_dir / entry
        if not path.exists():
            logger.error(f"project `{name}` contains an invalid file in the `files` list: {path}")
            return None
        files.append(path)

    roots = _string_list(table.get("roots", list(DEFAULT_ROOTS)))
    if roots is None:
        logger.error(f"project `{name}` has a `roots` value that is not a list of strings")
        return None

    return Project(
        name=name,
        output=output,
        entry_point=entry_point,
        files=tuple(files),
        base_dir=base_dir,
        roots=tuple(roots),
    )


def load_manifest(path: Union[Path, str, None] = None) -> Manifest:
    """
    Load and validate a manifest.

    Args:
        path: Manifest file (defaults to ./build.toml)

    Raises:
        ManifestError: If the file is missing, unparseable or has no [[project]] list
    """
    path = Path(path) if path is not None else Path(BUILD_FILE)
    if not path.is_file():
        raise ManifestError(f"could not find `{path.name}` file", str(path))
    if path.suffix not in MANIFEST_SUFFIXES:
        raise ManifestError(
            f"unsupported manifest format `{path.suffix}`",
            str(path),
            help=f"use one of: {', '.join(MANIFEST_SUFFIXES)}",
        )

    data = _parse_document(path)
    base_dir = path.resolve().parent

    require_function = data.get("require_function", DEFAULT_REQUIRE_FUNCTION)
    if not isinstance(require_function, str) or not require_function.isidentifier():
        raise ManifestError(f"`require_function` must be a valid identifier, got {require_function!r}", str(path))

    entries = data.get("project")
    if entries is None:
        raise ManifestError(f"missing [[project]] field in `{path.name}`", str(path))
    if isinstance(entries, dict):
        entries = [entries]
    if not isinstance(entries, list):
        raise ManifestError("`project` must be a list of tables", str(path))

    projects = []
    for table in entries:
        project = parse_project(table, base_dir)
        if project is None:
            continue
        projects.append(project)

    logger.debug(f"Loaded manifest {path}: {len(projects)} of {len(entries)} projects valid")
    return Manifest(path=path, projects=tuple(projects), require_function=require_function)
