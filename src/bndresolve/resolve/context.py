"""Resolve context handed to the resolution engine for one run.

The context answers the engine's questions (which capabilities could
satisfy this requirement, which resources must be part of the result, ...)
from the repositories a run is configured with. Repository selection and the
framework search happen lazily on the first question, exactly once, no
matter how many threads ask at the same time. From then on the state is
read-only.
"""
from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Dict, List, Optional

from ..common.logging_utils import Timer, extra_context, is_debug_enabled
from ..errors import InvalidConfigurationError, NotFoundError, NotSupported
from ..repository.base import PluginRegistry, Repository
from ..resource.model import Capability, HostedCapability, Requirement, Resource, Wiring
from .effective import is_effective as _is_effective
from .framework import FrameworkSelection, is_framework_resource, locate_framework
from .selector import select_repositories

logger = logging.getLogger(__name__)


class InitState(Enum):
    """Lifecycle of the lazily initialized resolution state."""

    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"
    FAILED = "failed"


class BndrunResolveContext:
    """Candidate supplier for a resolver, configured by a run spec.

    Args:
        run_spec: object exposing ``get_run_repos()`` and ``get_run_framework()``.
        registry: plugin registry supplying the available repositories.
    """

    def __init__(self, run_spec, registry: PluginRegistry):
        self.run_spec = run_spec
        self.registry = registry

        self._cond = threading.Condition()
        self._state = InitState.UNINITIALIZED
        self._init_error: Optional[Exception] = None
        self._extra_repos: List[Repository] = []
        self._repos: List[Repository] = []
        self._framework: Optional[FrameworkSelection] = None
        self._framework_spec: Optional[str] = None

    # -- initialization -------------------------------------------------

    @property
    def state(self) -> InitState:
        with self._cond:
            return self._state

    def add_repository(self, repo: Repository) -> None:
        """Append a repository after the selected ones; only before initialization."""
        with self._cond:
            if self._state is not InitState.UNINITIALIZED:
                raise InvalidConfigurationError(
                    f"Cannot add repository {repo} once the resolve context is {self._state.value}"
                )
            self._extra_repos.append(repo)

    def ensure_ready(self) -> None:
        """Run initialization once; block until it has finished.

        If initialization failed, every caller receives the original error.
        """
        with self._cond:
            while self._state is InitState.INITIALIZING:
                self._cond.wait()
            if self._state is InitState.READY:
                return
            if self._state is InitState.FAILED:
                raise self._init_error
            self._state = InitState.INITIALIZING

        try:
            repos, framework_spec, framework = self._initialize()
        except Exception as exc:
            with self._cond:
                self._init_error = exc
                self._state = InitState.FAILED
                self._cond.notify_all()
            raise
        except BaseException:
            # interrupted; a later call starts over
            with self._cond:
                self._state = InitState.UNINITIALIZED
                self._cond.notify_all()
            raise

        with self._cond:
            self._repos = repos
            self._framework_spec = framework_spec
            self._framework = framework
            self._state = InitState.READY
            self._cond.notify_all()

    def _load_repositories(self) -> List[Repository]:
        available = self.registry.get_plugins(Repository)
        repos = select_repositories(available, self.run_spec.get_run_repos())
        return repos + list(self._extra_repos)

    def _initialize(self):
        with Timer() as t:
            repos = self._load_repositories()
            framework_spec = self.run_spec.get_run_framework()
            framework = locate_framework(repos, framework_spec)
        if is_debug_enabled(logger):
            logger.debug(
                "Resolve context initialized",
                extra=extra_context(
                    event="function_exit", component="resolve_context", action="init",
                    outcome="ready", repository_count=len(repos),
                    framework=repr(framework.resource) if framework else None,
                    duration_ms=t.duration_ms(),
                ),
            )
        return repos, framework_spec, framework

    @property
    def repositories(self) -> List[Repository]:
        """The selected repositories, in query order."""
        self.ensure_ready()
        return list(self._repos)

    @property
    def framework(self) -> Optional[FrameworkSelection]:
        self.ensure_ready()
        return self._framework

    # -- resolver-facing operations ------------------------------------

    def get_mandatory_resources(self) -> List[Resource]:
        """The framework resource when one was requested; empty otherwise.

        Raises NotFoundError if a framework was requested but none matched.
        """
        self.ensure_ready()
        if self._framework_spec is None:
            return []
        if self._framework is None:
            raise NotFoundError(f"Could not find OSGi framework matching {self._framework_spec}.")
        return [self._framework.resource]

    def get_optional_resources(self) -> NotSupported:
        return NotSupported("get_optional_resources")

    def find_providers(self, requirement: Requirement) -> List[Capability]:
        """Capabilities that could satisfy ``requirement``, in preference order.

        The selected framework answers first and unconditionally. Every
        configured repository follows in order, with framework resources
        filtered out so a second copy of a framework never provides anything.
        """
        self.ensure_ready()
        result: List[Capability] = []

        if self._framework is not None:
            providers = self._framework.repository.find_providers([requirement])
            result.extend(providers.get(requirement) or [])

        for repo in self._repos:
            providers = repo.find_providers([requirement])
            for capability in providers.get(requirement) or []:
                if not is_framework_resource(capability.resource):
                    result.append(capability)

        if is_debug_enabled(logger):
            logger.debug(
                "Providers found",
                extra=extra_context(
                    event="function_exit", component="resolve_context", action="find_providers",
                    namespace=requirement.namespace, match_count=len(result),
                ),
            )
        return result

    def insert_hosted_capability(
        self,
        capabilities: List[Capability],
        hosted_capability: HostedCapability,
    ) -> NotSupported:
        return NotSupported("insert_hosted_capability")

    def is_effective(self, requirement: Requirement) -> bool:
        return _is_effective(requirement)

    def get_wirings(self) -> Dict[Resource, Wiring]:
        """No prior wiring: every run starts from scratch."""
        return {}
