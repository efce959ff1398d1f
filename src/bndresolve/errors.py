"""Error taxonomy for the resolve context.

Every error raised by this package derives from ``ResolveContextError`` and
also from the closest builtin, so callers can catch either.
"""
from __future__ import annotations

from dataclasses import dataclass


class ResolveContextError(Exception):
    """Base class for all resolve context errors."""


class InvalidConfigurationError(ResolveContextError, ValueError):
    """Run configuration cannot be interpreted (framework clause, range, filter, descriptor)."""


class TypeConversionError(ResolveContextError, TypeError):
    """A capability attribute has a representation that cannot be converted."""


class NotFoundError(ResolveContextError, LookupError):
    """A required resource could not be located in any repository."""


class NotSupportedError(ResolveContextError, NotImplementedError):
    """An operation is deliberately not implemented by this resolve context."""


@dataclass(frozen=True)
class NotSupported:
    """Result value returned by operations this context does not implement.

    Callers can test for it with ``isinstance`` or structural pattern
    matching instead of catching an exception.
    """

    operation: str
    reason: str = "not supported by this resolve context"

    def __bool__(self) -> bool:
        return False

    def raise_error(self):
        """Convert this result into a ``NotSupportedError``."""
        raise NotSupportedError(f"{self.operation}: {self.reason}")
