"""
Runtime Errors

Conditions raised by the embedded module runtime. This module is copied
verbatim into every bundle, so it must only depend on the standard library.
"""

from typing import List, Optional, Sequence


class BundleError(Exception):
    """Base exception for all runtime module errors"""
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnresolvedModuleError(BundleError):
    """
    Raised when a specifier matches no namespace key.

    Carries the raw specifier, the ModulePath of the requesting unit (None for
    the entry load), the chain of units being loaded when the request was made,
    and the candidates that were tried.
    """
    def __init__(
        self,
        specifier: str,
        caller: Optional[str] = None,
        chain: Sequence[str] = (),
        attempts: Sequence[str] = (),
    ):
        self.specifier = specifier
        self.caller = caller
        self.chain: List[str] = list(chain)
        self.attempts: List[str] = list(attempts)
        super().__init__(f"could not load module: {specifier}, module was not found")

    def __str__(self):
        lines = [self.message]
        for path in reversed(self.chain):
            lines.append(f"  required by {path}")
        if self.attempts:
            lines.append(f"  searched: {', '.join(repr(a) for a in self.attempts)}")
        return "\n".join(lines)


class CyclicModuleError(BundleError):
    """Raised when a unit is required again while it is still loading"""
    def __init__(self, chain: Sequence[str]):
        self.chain: List[str] = list(chain)
        super().__init__(f"circular require detected: {' -> '.join(self.chain)}")
