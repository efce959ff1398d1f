"""OSGi version and version range handling."""

from .version import EMPTY_VERSION, FOREIGN_VERSION_TYPES, Version, to_version
from .version_range import VersionRange

__all__ = [
    "EMPTY_VERSION",
    "FOREIGN_VERSION_TYPES",
    "Version",
    "VersionRange",
    "to_version",
]
