"""Single-resource repository view used for the selected framework."""
from __future__ import annotations

from ..resource.model import Resource
from .memory import InMemoryRepository


class SingletonResourceRepository(InMemoryRepository):
    """Repository exposing exactly one resource."""

    def __init__(self, resource: Resource):
        super().__init__(f"singleton:{resource.identity}", [resource])
        self.resource = resource
