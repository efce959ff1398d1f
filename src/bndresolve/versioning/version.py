"""OSGi version model: major.minor.micro.qualifier.

Numeric segments compare numerically, the qualifier compares lexically and
an empty qualifier sorts before any non-empty one, so ``1.0.0 < 1.0.0.a``.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Optional

import semantic_version
from packaging import version as pep440

from ..errors import InvalidConfigurationError, TypeConversionError

_QUALIFIER_RE = re.compile(r"^[A-Za-z0-9_-]*$")
_QUALIFIER_SANITIZE_RE = re.compile(r"[^A-Za-z0-9_-]")


@dataclass(frozen=True, order=True)
class Version:
    """Immutable OSGi version; field order defines the comparison order."""

    major: int = 0
    minor: int = 0
    micro: int = 0
    qualifier: str = ""

    def __post_init__(self):
        if min(self.major, self.minor, self.micro) < 0:
            raise InvalidConfigurationError(f"Negative version segment in {self!r}")
        if not _QUALIFIER_RE.match(self.qualifier):
            raise InvalidConfigurationError(f"Invalid version qualifier: {self.qualifier!r}")

    @classmethod
    def parse(cls, text: str) -> "Version":
        """Parse ``1``, ``1.2``, ``1.2.3`` or ``1.2.3.qualifier``.

        Blank input yields ``0.0.0``. Anything else raises
        InvalidConfigurationError.
        """
        text = (text or "").strip()
        if not text:
            return EMPTY_VERSION

        parts = text.split(".", 3)
        numbers = []
        for part in parts[:3]:
            if not (part.isascii() and part.isdigit()):
                raise InvalidConfigurationError(f"Invalid version: {text!r}")
            numbers.append(int(part))
        while len(numbers) < 3:
            numbers.append(0)

        qualifier = parts[3] if len(parts) == 4 else ""
        if len(parts) == 4 and not qualifier:
            raise InvalidConfigurationError(f"Invalid version: {text!r}")
        return cls(numbers[0], numbers[1], numbers[2], qualifier)

    def __str__(self) -> str:
        base = f"{self.major}.{self.minor}.{self.micro}"
        return f"{base}.{self.qualifier}" if self.qualifier else base


EMPTY_VERSION = Version()

# Parsed version objects from other libraries that to_version understands
FOREIGN_VERSION_TYPES = (pep440.Version, semantic_version.Version)


def _from_pep440(value: pep440.Version) -> Version:
    """Map a PEP 440 version onto OSGi; pre/post/dev/local segments become the qualifier."""
    pieces = []
    if value.pre:
        pieces.append(f"{value.pre[0]}{value.pre[1]}")
    if value.post is not None:
        pieces.append(f"post{value.post}")
    if value.dev is not None:
        pieces.append(f"dev{value.dev}")
    if value.local:
        pieces.append(value.local)
    qualifier = _QUALIFIER_SANITIZE_RE.sub("-", "-".join(pieces))
    return Version(value.major, value.minor, value.micro, qualifier)


def _from_semver(value: semantic_version.Version) -> Version:
    pieces = list(value.prerelease or ()) + list(value.build or ())
    qualifier = _QUALIFIER_SANITIZE_RE.sub("-", "-".join(pieces))
    return Version(value.major, value.minor or 0, value.patch or 0, qualifier)


def to_version(value: Any) -> Optional[Version]:
    """Normalize a capability version attribute.

    Accepts None (returned as None), Version, str, and the parsed version
    objects of ``packaging`` and ``semantic_version``. Any other type raises
    TypeConversionError.
    """
    if value is None:
        return None
    if isinstance(value, Version):
        return value
    if isinstance(value, str):
        return Version.parse(value)
    if isinstance(value, pep440.Version):
        return _from_pep440(value)
    if isinstance(value, semantic_version.Version):
        return _from_semver(value)
    raise TypeConversionError(f"Cannot convert type {type(value).__name__} to Version.")
