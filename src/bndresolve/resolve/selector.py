"""Working repository set for one resolution run."""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from ..common.logging_utils import extra_context, is_debug_enabled
from ..repository.base import Repository

logger = logging.getLogger(__name__)


def select_repositories(
    available: Iterable[Repository],
    run_repos: Optional[Iterable[str]] = None,
) -> List[Repository]:
    """Order and filter ``available`` by the run-repo name list.

    With no list, every repository is used in its natural order. With a
    list, repositories come back in the list's order; unknown names are
    dropped and unnamed repositories are excluded. Names compare against
    ``str(repo)``; when two repositories share a name the later one wins.
    """
    available = list(available)
    if run_repos is None:
        return available

    by_name: Dict[str, Repository] = {str(repo): repo for repo in available}
    selected: List[Repository] = []
    for name in run_repos:
        repo = by_name.get(name)
        if repo is None:
            if is_debug_enabled(logger):
                logger.debug(
                    "Run repository not registered",
                    extra=extra_context(
                        event="anomaly", component="selector", action="select_repositories",
                        outcome="unknown_repository", target=name,
                    ),
                )
            continue
        selected.append(repo)
    return selected
