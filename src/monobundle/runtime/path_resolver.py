"""
Module Path Resolution

Pure path resolution for bundled units. Specifiers are resolved against a
flat, path-keyed namespace instead of a filesystem:

- ./util from src/main        -> src/util
- ../vendor/zero from src/main -> vendor/zero
- pkg (no 'pkg' key)          -> pkg/init

Relative resolution always runs first, then each search root in order.
This class is stateless apart from its configuration and can be shared.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Collection, Iterable, List, Optional, Tuple

logger = logging.getLogger("monobundle.runtime")

PATH_SEPARATOR = "/"
INIT_MODULE_NAME = "init"
CURRENT_SEGMENT = "."
PARENT_SEGMENT = ".."


def normalize(path: str) -> str:
    """
    Collapse '.' and '..' segments of a slash-delimited path.

    Purely textual: '..' past the start is dropped, empty segments vanish, so
    leading/trailing/double slashes never survive.
    """
    result: List[str] = []
    for segment in path.split(PATH_SEPARATOR):
        if segment == PARENT_SEGMENT:
            if result:
                result.pop()
        elif segment and segment != CURRENT_SEGMENT:
            result.append(segment)
    return PATH_SEPARATOR.join(result)


def join_path(*parts: str) -> str:
    """Join path fragments with '/' and normalize the result"""
    return normalize(PATH_SEPARATOR.join(parts))


def parent_directory(module_path: Optional[str]) -> str:
    """Directory of a ModulePath (empty for root-level units and no caller)"""
    if not module_path:
        return ""
    head, _, _ = module_path.rpartition(PATH_SEPARATOR)
    return head


class ResolutionTag(Enum):
    """Resolution discriminant"""
    FOUND = "found"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class Resolution:
    """Found(key) | NotFound, plus the candidates tried on the way"""
    tag: ResolutionTag
    specifier: str
    key: Optional[str] = None
    phase: Optional[str] = None  # 'relative' or 'root' when found
    attempts: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def found(cls, specifier: str, key: str, phase: str, attempts: Iterable[str]) -> "Resolution":
        return cls(ResolutionTag.FOUND, specifier, key, phase, tuple(attempts))

    @classmethod
    def not_found(cls, specifier: str, attempts: Iterable[str]) -> "Resolution":
        return cls(ResolutionTag.NOT_FOUND, specifier, None, None, tuple(attempts))

    def is_found(self) -> bool:
        return self.tag == ResolutionTag.FOUND

    def unwrap(self) -> str:
        """Extract the resolved key (throws if not found)"""
        if not self.is_found():
            raise ValueError(f"Called unwrap() on unresolved specifier: {self.specifier!r}")
        return self.key

    def __str__(self) -> str:
        if self.is_found():
            return f"Found({self.key})"
        return f"NotFound({self.specifier})"


class ModuleResolver:
    """
    Resolve specifiers to namespace keys.

    Args:
        keys: The namespace's ModulePaths (anything supporting 'in')
        roots: Ordered search root prefixes; ("",) is the project root
    """

    def __init__(self, keys: Collection[str], roots: Iterable[str] = ("",)):
        self.keys = keys
        self.roots: Tuple[str, ...] = tuple(normalize(root) for root in roots)

    def match(self, candidate: str) -> Optional[str]:
        """Namespace match: the candidate itself, else its package init unit"""
        if candidate and candidate in self.keys:
            return candidate
        package_init = join_path(candidate, INIT_MODULE_NAME)
        if package_init in self.keys:
            return package_init
        return None

    def candidates(self, specifier: str, caller: Optional[str] = None) -> List[Tuple[str, str]]:
        """Ordered (phase, normalized candidate) pairs for a specifier"""
        result: List[Tuple[str, str]] = []
        if caller is not None:
            result.append(("relative", join_path(parent_directory(caller), specifier)))
        for root in self.roots:
            result.append(("root", join_path(root, specifier)))
        return result

    def resolve(self, specifier: str, caller: Optional[str] = None) -> Resolution:
        """
        Resolve a specifier requested by caller.

        Returns:
            Resolution.found with the canonical key, or Resolution.not_found
            listing every candidate that was tried.
        """
        attempts: List[str] = []
        for phase, candidate in self.candidates(specifier, caller):
            attempts.append(candidate)
            key = self.match(candidate)
            if key is not None:
                logger.debug(f"Resolved {specifier!r} from {caller or '<entry>'} to {key} ({phase})")
                return Resolution.found(specifier, key, phase, attempts)
        logger.debug(f"Could not resolve {specifier!r} from {caller or '<entry>'}; tried {attempts}")
        return Resolution.not_found(specifier, attempts)
