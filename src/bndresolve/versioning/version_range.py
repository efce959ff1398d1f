"""OSGi version ranges.

Accepted forms:
    ``1.2``          at least 1.2.0, no upper bound
    ``[1.2,2.0)``    1.2.0 inclusive to 2.0.0 exclusive
    ``(1.2,2.0]``    1.2.0 exclusive to 2.0.0 inclusive
    ``[1.2,1.2]``    exactly 1.2.0
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..errors import InvalidConfigurationError
from .version import Version, to_version


@dataclass(frozen=True)
class VersionRange:
    """Interval over OSGi versions; ``high`` is None for an unbounded range."""

    low: Version
    high: Optional[Version] = None
    low_inclusive: bool = True
    high_inclusive: bool = False

    @classmethod
    def parse(cls, text: str) -> "VersionRange":
        """Parse a range string, raising InvalidConfigurationError when malformed."""
        spec = (text or "").strip()
        if not spec:
            raise InvalidConfigurationError("Empty version range")

        if spec[0] not in "[(":
            if any(ch in spec for ch in "[](),"):
                raise InvalidConfigurationError(f"Invalid version range: {text!r}")
            return cls(low=Version.parse(spec))

        if spec[-1] not in "])" or len(spec) < 2:
            raise InvalidConfigurationError(f"Invalid version range: {text!r}")

        inner = spec[1:-1]
        bounds = inner.split(",")
        if len(bounds) != 2 or not bounds[0].strip() or not bounds[1].strip():
            raise InvalidConfigurationError(f"Invalid version range: {text!r}")

        low = Version.parse(bounds[0])
        high = Version.parse(bounds[1])
        if high < low:
            raise InvalidConfigurationError(f"Version range upper bound below lower bound: {text!r}")
        return cls(
            low=low,
            high=high,
            low_inclusive=spec[0] == "[",
            high_inclusive=spec[-1] == "]",
        )

    @property
    def is_range(self) -> bool:
        """False for the single-version "at least" form."""
        return self.high is not None

    def includes(self, value) -> bool:
        """Return True when ``value`` (Version or version string) lies in the range."""
        ver = to_version(value)
        if ver is None:
            return False
        if self.low_inclusive:
            if ver < self.low:
                return False
        elif ver <= self.low:
            return False
        if self.high is None:
            return True
        if self.high_inclusive:
            return ver <= self.high
        return ver < self.high

    def __str__(self) -> str:
        if self.high is None:
            return str(self.low)
        left = "[" if self.low_inclusive else "("
        right = "]" if self.high_inclusive else ")"
        return f"{left}{self.low},{self.high}{right}"
