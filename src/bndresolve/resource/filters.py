"""LDAP-style filter expressions used by requirement ``filter`` directives.

Filters can be built programmatically (``SimpleFilter``, ``AndFilter``, ...),
rendered with ``str()`` and parsed back with ``parse_filter``. Matching
follows the OSGi rules closely enough for capability selection: keys are
case-insensitive, multi-valued attributes match when any element matches,
and operands are coerced to the attribute's type (Version, int, float, bool)
before comparing. Version objects from ``packaging`` or ``semantic_version``,
and strings under ``>=`` or ``<=``, are compared as OSGi versions whenever
both sides parse as one.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Any, Iterable, List, Mapping, Optional

from ..errors import InvalidConfigurationError, TypeConversionError
from ..versioning import FOREIGN_VERSION_TYPES, Version, VersionRange, to_version

_SPECIAL = "\\()*"


def _escape(value: str) -> str:
    return "".join("\\" + ch if ch in _SPECIAL else ch for ch in value)


def _lookup(attributes: Mapping[str, Any], key: str):
    """Case-insensitive attribute lookup; returns (found, value)."""
    if key in attributes:
        return True, attributes[key]
    lowered = key.lower()
    for name, value in attributes.items():
        if name.lower() == lowered:
            return True, value
    return False, None


def _values(value: Any) -> List[Any]:
    if isinstance(value, (list, tuple, set, frozenset)):
        return list(value)
    return [value]


def _coerce(operand: str, like: Any):
    """Convert a filter operand to the type of the attribute value, or None."""
    try:
        if isinstance(like, Version):
            return Version.parse(operand)
        if isinstance(like, bool):
            return operand.strip().lower() == "true"
        if isinstance(like, int):
            return int(operand.strip())
        if isinstance(like, float):
            return float(operand.strip())
    except (ValueError, InvalidConfigurationError):
        return None
    return operand


class Filter(ABC):
    """A node in a filter expression."""

    @abstractmethod
    def matches(self, attributes: Mapping[str, Any]) -> bool:
        """Evaluate the filter against an attribute mapping."""

    def __eq__(self, other) -> bool:
        return isinstance(other, Filter) and str(self) == str(other)

    def __hash__(self) -> int:
        return hash(str(self))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r})"


class SimpleFilter(Filter):
    """``(name op value)`` with op one of ``=``, ``>=``, ``<=``, ``~=``."""

    OPERATORS = ("=", ">=", "<=", "~=")

    def __init__(self, name: str, value: Any, op: str = "="):
        if op not in self.OPERATORS:
            raise InvalidConfigurationError(f"Unsupported filter operator: {op!r}")
        self.name = name
        self.value = str(value)
        self.op = op

    def _version_order(self, actual: Any) -> Optional[bool]:
        try:
            left = to_version(actual)
            right = Version.parse(self.value)
        except (InvalidConfigurationError, TypeConversionError):
            return None
        if self.op in ("=", "~="):
            return left == right
        if self.op == ">=":
            return left >= right
        return left <= right

    def _compare(self, actual: Any) -> bool:
        if isinstance(actual, FOREIGN_VERSION_TYPES) or (
            isinstance(actual, str) and self.op in (">=", "<=")
        ):
            ordered = self._version_order(actual)
            if ordered is not None:
                return ordered
        operand = _coerce(self.value, actual)
        if operand is None:
            return False
        if isinstance(actual, str) and self.op == "~=":
            return "".join(actual.split()).lower() == "".join(operand.split()).lower()
        if not isinstance(actual, str) and not isinstance(actual, (Version, int, float, bool)):
            actual = str(actual)
        try:
            if self.op in ("=", "~="):
                return actual == operand
            if self.op == ">=":
                return actual >= operand
            return actual <= operand
        except TypeError:
            return False

    def matches(self, attributes):
        found, value = _lookup(attributes, self.name)
        if not found:
            return False
        return any(self._compare(item) for item in _values(value))

    def __str__(self):
        return f"({self.name}{self.op}{_escape(self.value)})"


class PresentFilter(Filter):
    """``(name=*)``: the attribute is set."""

    def __init__(self, name: str):
        self.name = name

    def matches(self, attributes):
        return _lookup(attributes, self.name)[0]

    def __str__(self):
        return f"({self.name}=*)"


class SubstringFilter(Filter):
    """``(name=a*b*c)``: wildcard match on string values."""

    def __init__(self, name: str, parts: Iterable[str]):
        self.name = name
        self.parts = list(parts)

    def _match_string(self, text: str) -> bool:
        first, *middle, last = self.parts
        if not text.startswith(first):
            return False
        pos = len(first)
        for piece in middle:
            idx = text.find(piece, pos)
            if idx < 0:
                return False
            pos = idx + len(piece)
        return text.endswith(last) and len(text) - len(last) >= pos

    def matches(self, attributes):
        found, value = _lookup(attributes, self.name)
        if not found:
            return False
        return any(self._match_string(str(item)) for item in _values(value))

    def __str__(self):
        return f"({self.name}=" + "*".join(_escape(p) for p in self.parts) + ")"


class AndFilter(Filter):
    """Conjunction; an empty AndFilter matches everything."""

    def __init__(self, children: Optional[Iterable[Filter]] = None):
        self.children: List[Filter] = list(children or [])

    def add_child(self, child: Filter) -> "AndFilter":
        self.children.append(child)
        return self

    def matches(self, attributes):
        return all(child.matches(attributes) for child in self.children)

    def __str__(self):
        return "(&" + "".join(str(c) for c in self.children) + ")"


class OrFilter(Filter):
    """Disjunction; an empty OrFilter matches nothing."""

    def __init__(self, children: Optional[Iterable[Filter]] = None):
        self.children: List[Filter] = list(children or [])

    def add_child(self, child: Filter) -> "OrFilter":
        self.children.append(child)
        return self

    def matches(self, attributes):
        return any(child.matches(attributes) for child in self.children)

    def __str__(self):
        return "(|" + "".join(str(c) for c in self.children) + ")"


class NotFilter(Filter):
    """Negation of a single child."""

    def __init__(self, child: Filter):
        self.child = child

    def matches(self, attributes):
        return not self.child.matches(attributes)

    def __str__(self):
        return f"(!{self.child})"


def filter_from_version_range(version_range: VersionRange, attribute: str = "version") -> Filter:
    """Build the filter that selects versions inside ``version_range``."""
    if version_range.low_inclusive:
        low: Filter = SimpleFilter(attribute, version_range.low, ">=")
    else:
        low = NotFilter(SimpleFilter(attribute, version_range.low, "<="))
    if version_range.high is None:
        return low
    if version_range.high_inclusive:
        high: Filter = SimpleFilter(attribute, version_range.high, "<=")
    else:
        high = NotFilter(SimpleFilter(attribute, version_range.high, ">="))
    return AndFilter([low, high])


class _Parser:
    """Recursive-descent parser over an RFC 1960 style filter string."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def error(self, message: str) -> InvalidConfigurationError:
        return InvalidConfigurationError(f"{message} at position {self.pos} in filter {self.text!r}")

    def skip_ws(self):
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def expect(self, ch: str):
        self.skip_ws()
        if self.pos >= len(self.text) or self.text[self.pos] != ch:
            raise self.error(f"Expected {ch!r}")
        self.pos += 1

    def parse(self) -> Filter:
        result = self.parse_filter()
        self.skip_ws()
        if self.pos != len(self.text):
            raise self.error("Trailing characters")
        return result

    def parse_filter(self) -> Filter:
        self.expect("(")
        self.skip_ws()
        if self.pos >= len(self.text):
            raise self.error("Unexpected end")
        ch = self.text[self.pos]
        if ch == "&":
            self.pos += 1
            result: Filter = AndFilter(self.parse_list())
        elif ch == "|":
            self.pos += 1
            result = OrFilter(self.parse_list())
        elif ch == "!":
            self.pos += 1
            result = NotFilter(self.parse_filter())
        else:
            result = self.parse_item()
        self.expect(")")
        return result

    def parse_list(self) -> List[Filter]:
        children = []
        self.skip_ws()
        while self.pos < len(self.text) and self.text[self.pos] == "(":
            children.append(self.parse_filter())
            self.skip_ws()
        if not children:
            raise self.error("Empty filter list")
        return children

    def parse_item(self) -> Filter:
        start = self.pos
        while self.pos < len(self.text) and self.text[self.pos] not in "=<>~()":
            self.pos += 1
        name = self.text[start:self.pos].strip()
        if not name:
            raise self.error("Missing attribute name")

        rest = self.text[self.pos:self.pos + 2]
        if rest in (">=", "<=", "~="):
            op = rest
            self.pos += 2
        elif rest[:1] == "=":
            op = "="
            self.pos += 1
        else:
            raise self.error("Missing operator")

        parts = [""]
        while self.pos < len(self.text) and self.text[self.pos] != ")":
            ch = self.text[self.pos]
            if ch == "\\":
                self.pos += 1
                if self.pos >= len(self.text):
                    raise self.error("Dangling escape")
                parts[-1] += self.text[self.pos]
            elif ch == "*" and op == "=":
                parts.append("")
            elif ch == "(":
                raise self.error("Unescaped '('")
            else:
                parts[-1] += ch
            self.pos += 1

        if len(parts) == 1:
            return SimpleFilter(name, parts[0], op)
        if parts == ["", ""]:
            return PresentFilter(name)
        return SubstringFilter(name, parts)


@lru_cache(maxsize=1024)
def parse_filter(text: str) -> Filter:
    """Parse a filter string; raises InvalidConfigurationError when malformed."""
    if not text or not text.strip():
        raise InvalidConfigurationError("Empty filter")
    return _Parser(text.strip()).parse()
