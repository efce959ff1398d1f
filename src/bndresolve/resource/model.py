"""Resource, capability and requirement model plus builders.

Capabilities and requirements are immutable once built and compare by
identity, so a requirement can key the result mapping a repository returns
for it.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

from ..constants import Constants, Namespaces
from ..versioning import Version, to_version
from .filters import Filter, parse_filter


def _freeze(mapping: Optional[Mapping[str, Any]]) -> Mapping[str, Any]:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True, eq=False)
class Capability:
    """An offer made by a resource in some namespace."""

    namespace: str
    attributes: Mapping[str, Any] = field(default_factory=dict)
    directives: Mapping[str, str] = field(default_factory=dict)
    resource: Optional["Resource"] = field(default=None, repr=False)

    def __repr__(self) -> str:
        return f"Capability({self.namespace}, {dict(self.attributes)!r})"


@dataclass(frozen=True, eq=False)
class Requirement:
    """A query for capabilities: namespace, filter directive and other directives."""

    namespace: str
    attributes: Mapping[str, Any] = field(default_factory=dict)
    directives: Mapping[str, str] = field(default_factory=dict)
    resource: Optional["Resource"] = field(default=None, repr=False)

    @property
    def filter(self) -> Optional[Filter]:
        """The parsed ``filter`` directive, or None when unfiltered."""
        text = self.directives.get(Constants.FILTER_DIRECTIVE)
        return parse_filter(text) if text else None

    def matches(self, capability: Capability) -> bool:
        """True when ``capability`` is in this namespace and satisfies the filter."""
        if capability.namespace != self.namespace:
            return False
        flt = self.filter
        return flt is None or flt.matches(capability.attributes)

    def __repr__(self) -> str:
        return f"Requirement({self.namespace}, {dict(self.directives)!r})"


class Resource:
    """An artifact description aggregating capabilities and requirements."""

    def __init__(self):
        self._capabilities: List[Capability] = []
        self._requirements: List[Requirement] = []

    def get_capabilities(self, namespace: Optional[str] = None) -> List[Capability]:
        """Capabilities in declaration order, optionally restricted to one namespace."""
        return [c for c in self._capabilities if namespace is None or c.namespace == namespace]

    def get_requirements(self, namespace: Optional[str] = None) -> List[Requirement]:
        return [r for r in self._requirements if namespace is None or r.namespace == namespace]

    @property
    def identity(self) -> Optional[str]:
        caps = self.get_capabilities(Namespaces.IDENTITY.value)
        return caps[0].attributes.get(Namespaces.IDENTITY.value) if caps else None

    @property
    def version(self) -> Optional[Version]:
        caps = self.get_capabilities(Namespaces.IDENTITY.value)
        if not caps:
            return None
        return to_version(caps[0].attributes.get(Constants.VERSION_ATTRIBUTE))

    def __repr__(self) -> str:
        caps = self.get_capabilities(Namespaces.IDENTITY.value)
        raw_version = caps[0].attributes.get(Constants.VERSION_ATTRIBUTE) if caps else None
        return f"Resource({self.identity};version={raw_version})"


@dataclass(frozen=True)
class Wire:
    """A satisfied requirement-to-capability link."""

    requirement: Requirement
    capability: Capability


@dataclass
class Wiring:
    """Existing wiring state of a resource from an earlier resolution."""

    resource: Resource
    required_wires: List[Wire] = field(default_factory=list)


@dataclass(frozen=True, eq=False)
class HostedCapability:
    """A capability declared by one resource but hosted by another (fragments)."""

    resource: Resource
    declared_capability: Capability


class CapReqBuilder:
    """Fluent builder for a single capability or requirement."""

    def __init__(self, namespace: str):
        self.namespace = namespace
        self.attributes: Dict[str, Any] = {}
        self.directives: Dict[str, str] = {}
        self.resource: Optional[Resource] = None

    def add_attribute(self, name: str, value: Any) -> "CapReqBuilder":
        self.attributes[name] = value
        return self

    def add_attributes(self, attributes: Mapping[str, Any]) -> "CapReqBuilder":
        self.attributes.update(attributes)
        return self

    def add_directive(self, name: str, value: str) -> "CapReqBuilder":
        self.directives[name] = value
        return self

    def add_directives(self, directives: Mapping[str, str]) -> "CapReqBuilder":
        self.directives.update(directives)
        return self

    def set_resource(self, resource: Resource) -> "CapReqBuilder":
        self.resource = resource
        return self

    def build_capability(self) -> Capability:
        return Capability(self.namespace, _freeze(self.attributes), _freeze(self.directives), self.resource)

    def build_requirement(self) -> Requirement:
        return Requirement(self.namespace, _freeze(self.attributes), _freeze(self.directives), self.resource)

    def build_synthetic_requirement(self) -> Requirement:
        """A requirement not declared by any resource, e.g. for ad-hoc queries."""
        return Requirement(self.namespace, _freeze(self.attributes), _freeze(self.directives), None)


class ResourceBuilder:
    """Assembles a Resource whose capabilities point back at it."""

    def __init__(self):
        self._resource = Resource()
        self._built = False

    def _check(self):
        if self._built:
            raise RuntimeError("ResourceBuilder already built")

    def add_capability(self, builder: CapReqBuilder) -> "ResourceBuilder":
        self._check()
        self._resource._capabilities.append(builder.set_resource(self._resource).build_capability())
        return self

    def add_requirement(self, builder: CapReqBuilder) -> "ResourceBuilder":
        self._check()
        self._resource._requirements.append(builder.set_resource(self._resource).build_requirement())
        return self

    def add_identity(self, name: str, version: Any, type_: str = "osgi.bundle") -> "ResourceBuilder":
        """Shortcut for the ``osgi.identity`` capability."""
        return self.add_capability(
            CapReqBuilder(Namespaces.IDENTITY.value)
            .add_attribute(Namespaces.IDENTITY.value, name)
            .add_attribute(Constants.VERSION_ATTRIBUTE, version)
            .add_attribute("type", type_)
        )

    def add_contract(self, contract: str, version: Any = None) -> "ResourceBuilder":
        """Shortcut for an ``osgi.contract`` capability."""
        builder = CapReqBuilder(Namespaces.CONTRACT.value).add_attribute(Namespaces.CONTRACT.value, contract)
        if version is not None:
            builder.add_attribute(Constants.VERSION_ATTRIBUTE, version)
        return self.add_capability(builder)

    def build(self) -> Resource:
        self._check()
        self._built = True
        return self._resource
