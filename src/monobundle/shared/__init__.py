"""Shared types used across packaging and the CLI."""

from .errors import (
    Diagnostic,
    ManifestError,
    MonobundleError,
    SourceError,
    diagnostic_from_exception,
    format_diagnostic,
    format_exception,
)

__all__ = [
    "Diagnostic",
    "ManifestError",
    "MonobundleError",
    "SourceError",
    "diagnostic_from_exception",
    "format_diagnostic",
    "format_exception",
]
