"""Repository contract and the plugin registry that supplies repositories.

A repository is an external, read-only capability source. The resolve
context never mutates one; it only asks it for providers and uses
``str(repo)`` as the repository name when applying a run-repo list.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional, Protocol, Type, TypeVar

from ..resource.model import Capability, Requirement, Resource

T = TypeVar("T")


class Repository(ABC):
    """Base class for capability sources."""

    def __init__(self, name: str):
        self.name = name

    @abstractmethod
    def find_providers(self, requirements: Iterable[Requirement]) -> Dict[Requirement, List[Capability]]:
        """Map each requirement to the capabilities satisfying it.

        Requirements without matches may be absent from the result or map to
        an empty list.
        """

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class PluginRegistry(Protocol):
    """Anything able to list registered plugins of a given kind."""

    def get_plugins(self, kind: Type[T]) -> List[T]: ...


class Registry:
    """Plain ordered plugin registry; registration order is the natural order."""

    def __init__(self, plugins: Optional[Iterable[object]] = None):
        self._plugins: List[object] = list(plugins or [])

    def add_plugin(self, plugin: object) -> None:
        self._plugins.append(plugin)

    def get_plugins(self, kind: Type[T]) -> List[T]:
        return [p for p in self._plugins if isinstance(p, kind)]


def match_resources(
    resources: Iterable[Resource],
    requirements: Iterable[Requirement],
) -> Dict[Requirement, List[Capability]]:
    """Match requirements against every capability of ``resources``.

    Capabilities appear in resource order, then declaration order.
    """
    resources = list(resources)
    result: Dict[Requirement, List[Capability]] = {}
    for requirement in requirements:
        result[requirement] = [
            capability
            for resource in resources
            for capability in resource.get_capabilities(requirement.namespace)
            if requirement.matches(capability)
        ]
    return result
