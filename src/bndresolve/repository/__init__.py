"""Capability repositories and the plugin registry."""

from .base import PluginRegistry, Registry, Repository, match_resources
from .indexed import IndexedRepository, parse_index
from .memory import InMemoryRepository
from .singleton import SingletonResourceRepository

__all__ = [
    "IndexedRepository",
    "InMemoryRepository",
    "PluginRegistry",
    "Registry",
    "Repository",
    "SingletonResourceRepository",
    "match_resources",
    "parse_index",
]
