"""Repository selection, framework location and the resolve context."""

from .context import BndrunResolveContext, InitState
from .effective import is_effective
from .framework import (
    FrameworkSelection,
    find_framework_contract_capability,
    framework_requirement,
    is_framework_resource,
    locate_framework,
)
from .selector import select_repositories

__all__ = [
    "BndrunResolveContext",
    "FrameworkSelection",
    "InitState",
    "find_framework_contract_capability",
    "framework_requirement",
    "is_effective",
    "is_framework_resource",
    "locate_framework",
    "select_repositories",
]
