"""Repository over a fixed, in-process list of resources."""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from ..common.logging_utils import extra_context, is_debug_enabled
from ..resource.model import Capability, Requirement, Resource
from .base import Repository, match_resources

logger = logging.getLogger(__name__)


class InMemoryRepository(Repository):
    """Serves capabilities from resources held in memory."""

    def __init__(self, name: str, resources: Optional[Iterable[Resource]] = None):
        super().__init__(name)
        self._resources: List[Resource] = list(resources or [])

    @property
    def resources(self) -> List[Resource]:
        return list(self._resources)

    def find_providers(self, requirements: Iterable[Requirement]) -> Dict[Requirement, List[Capability]]:
        result = match_resources(self._resources, requirements)
        if is_debug_enabled(logger):
            logger.debug(
                "Repository query",
                extra=extra_context(
                    event="repository_query",
                    component="repository",
                    action="find_providers",
                    target=self.name,
                    requirement_count=len(result),
                    match_count=sum(len(caps) for caps in result.values()),
                ),
            )
        return result
