"""
Error Reporting

Packaging-time exceptions and the diagnostic formatter used by the CLI.
Runtime conditions (unresolved and circular requires) are defined in
runtime/errors.py because they ship inside every bundle.
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional

from ..runtime.errors import BundleError, CyclicModuleError, UnresolvedModuleError


# ---------------------------------------------------------------------------
# ANSI color helpers (disabled when NO_COLOR is set)
# ---------------------------------------------------------------------------

def _use_color() -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    explicit = os.environ.get("MONOBUNDLE_COLOR", "").lower()
    if explicit in ("0", "false", "no", "never"):
        return False
    return True

_BOLD   = "\033[1m"
_RED    = "\033[31m"
_BLUE   = "\033[34m"
_CYAN   = "\033[36m"
_RESET  = "\033[0m"

def _style(text: str, *codes: str, color: bool = True) -> str:
    if not color:
        return text
    prefix = "".join(codes)
    return f"{prefix}{text}{_RESET}" if prefix else text


# ============================================================================
# Exception Classes
# ============================================================================

class MonobundleError(Exception):
    """Base exception for packaging errors"""
    error_code = "E0001"

    def __init__(self, message: str, path: Optional[str] = None, help: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.path = path
        self.help_text = help

    def __str__(self):
        if self.path:
            return f"{self.message} ({self.path})"
        return self.message


class ManifestError(MonobundleError):
    """Missing or malformed build manifest"""
    error_code = "E0001"


class SourceError(MonobundleError):
    """A source file cannot be read or collides with another unit's key"""
    error_code = "E0002"


# ---------------------------------------------------------------------------
# Diagnostics
# ---------------------------------------------------------------------------

@dataclass
class Diagnostic:
    """
    One user-facing error.

    Rendered as::

        error[E0432]: could not load module: b, module was not found
         --> a
          = note: searched: 'b'
          = help: check the specifier against the bundled module paths
    """
    message: str
    code: Optional[str] = None
    location: Optional[str] = None
    notes: List[str] = field(default_factory=list)
    help: Optional[str] = None


def diagnostic_from_exception(error: Exception) -> Diagnostic:
    """Map packaging and runtime errors onto a Diagnostic"""
    if isinstance(error, UnresolvedModuleError):
        notes = [f"required by {path}" for path in reversed(error.chain[:-1])]
        if error.attempts:
            notes.append(f"searched: {', '.join(repr(a) for a in error.attempts)}")
        return Diagnostic(
            message=error.message,
            code="E0432",
            location=error.caller or "<entry>",
            notes=notes,
            help="check the specifier against the bundled module paths and search roots",
        )
    if isinstance(error, CyclicModuleError):
        return Diagnostic(
            message=error.message,
            code="E0391",
            location=error.chain[0] if error.chain else None,
            help="move the shared code into a unit that neither side requires",
        )
    if isinstance(error, BundleError):
        return Diagnostic(message=error.message)
    if isinstance(error, MonobundleError):
        return Diagnostic(
            message=error.message,
            code=error.error_code,
            location=error.path,
            help=error.help_text,
        )
    return Diagnostic(message=f"{type(error).__name__}: {error}")


def format_diagnostic(diagnostic: Diagnostic, color: Optional[bool] = None) -> str:
    use_color = color if color is not None else _use_color()
    code_str = f"[{diagnostic.code}]" if diagnostic.code else ""
    out = [
        _style(f"error{code_str}", _BOLD, _RED, color=use_color)
        + _style(f": {diagnostic.message}", _BOLD, color=use_color)
    ]
    if diagnostic.location:
        out.append(_style(" --> ", _BOLD, _BLUE, color=use_color) + diagnostic.location)
    for note in diagnostic.notes:
        out.append(_style("  = ", _BOLD, _CYAN, color=use_color) + _style("note: ", _BOLD, color=use_color) + note)
    if diagnostic.help:
        out.append(_style("  = ", _BOLD, _CYAN, color=use_color) + _style("help: ", _BOLD, color=use_color) + diagnostic.help)
    return "\n".join(out)


def format_exception(error: Exception, color: Optional[bool] = None) -> str:
    return format_diagnostic(diagnostic_from_exception(error), color=color)
