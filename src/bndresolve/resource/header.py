"""Parser for manifest-style parameter headers.

A header is a comma separated list of clauses; each clause is one or more
names followed by ``;attr=value`` and ``;directive:=value`` parameters::

    org.apache.felix.framework;version='[4,5)', org.example;resolution:=optional

Quoted values may contain commas and semicolons.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from ..errors import InvalidConfigurationError


@dataclass
class Clause:
    """One parsed clause: its name plus attributes and directives."""

    name: str
    attributes: Dict[str, str] = field(default_factory=dict)
    directives: Dict[str, str] = field(default_factory=dict)


def _split_top_level(text: str, separator: str) -> List[str]:
    """Split on ``separator`` outside quotes and outside unquoted version ranges."""
    pieces: List[str] = []
    current = []
    quote = None
    depth = 0
    for ch in text:
        if quote:
            current.append(ch)
            if ch == quote:
                quote = None
        elif ch in "\"'":
            quote = ch
            current.append(ch)
        elif ch == separator and depth == 0:
            pieces.append("".join(current))
            current = []
        else:
            if ch in "[(":
                depth += 1
            elif ch in "])" and depth:
                depth -= 1
            current.append(ch)
    if quote:
        raise InvalidConfigurationError(f"Unbalanced quote in header: {text!r}")
    pieces.append("".join(current))
    return pieces


def _unquote(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


def parse_parameters(header: str) -> List[Clause]:
    """Parse a header into clauses, in declaration order.

    A clause with several names (``a;b;version=1``) yields one Clause per
    name sharing the same parameters. Typed attributes (``version:Version=1``)
    keep only the attribute name.
    """
    clauses: List[Clause] = []
    if header is None or not header.strip():
        return clauses

    for raw_clause in _split_top_level(header, ","):
        if not raw_clause.strip():
            continue
        names: List[str] = []
        attributes: Dict[str, str] = {}
        directives: Dict[str, str] = {}
        for raw_param in _split_top_level(raw_clause, ";"):
            param = raw_param.strip()
            if not param:
                continue
            if ":=" in param:
                key, value = param.split(":=", 1)
                directives[key.strip()] = _unquote(value)
            elif "=" in param:
                key, value = param.split("=", 1)
                key = key.split(":", 1)[0].strip()
                attributes[key] = _unquote(value)
            else:
                if attributes or directives:
                    raise InvalidConfigurationError(
                        f"Name {param!r} follows parameters in clause {raw_clause.strip()!r}"
                    )
                names.append(param)
        if not names:
            raise InvalidConfigurationError(f"Clause without a name: {raw_clause.strip()!r}")
        for name in names:
            clauses.append(Clause(name=name, attributes=dict(attributes), directives=dict(directives)))
    return clauses
