"""bndresolve: candidate capability supply for OSGi-style resolvers."""

from .errors import (
    InvalidConfigurationError,
    NotFoundError,
    NotSupported,
    NotSupportedError,
    ResolveContextError,
    TypeConversionError,
)
from .repository import IndexedRepository, InMemoryRepository, Registry, Repository
from .resolve import BndrunResolveContext
from .run_spec import RunSpec, load_run_spec

__version__ = "0.1.0"

__all__ = [
    "BndrunResolveContext",
    "IndexedRepository",
    "InMemoryRepository",
    "InvalidConfigurationError",
    "NotFoundError",
    "NotSupported",
    "NotSupportedError",
    "Registry",
    "Repository",
    "ResolveContextError",
    "RunSpec",
    "TypeConversionError",
    "load_run_spec",
]
