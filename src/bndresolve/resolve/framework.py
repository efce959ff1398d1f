"""Selection of the framework resource a run executes inside.

The framework is requested with a single header clause such as
``org.apache.felix.framework;version='[7,8)'``. Only resources tagged with
the ``osgi.contract=OSGiFramework`` capability qualify, and the highest
version among them wins.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from ..common.logging_utils import Timer, extra_context, is_debug_enabled
from ..constants import Constants, Namespaces
from ..errors import InvalidConfigurationError
from ..repository.base import Repository
from ..repository.singleton import SingletonResourceRepository
from ..resource.filters import AndFilter, Filter, SimpleFilter, filter_from_version_range
from ..resource.header import parse_parameters
from ..resource.model import Capability, CapReqBuilder, Requirement, Resource
from ..versioning import Version, VersionRange, to_version

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrameworkSelection:
    """The chosen framework resource, its version and a repository wrapping it."""

    resource: Resource
    version: Version
    repository: SingletonResourceRepository


def find_framework_contract_capability(resource: Resource) -> Optional[Capability]:
    """Return the resource's OSGiFramework contract capability, if it declares one."""
    for cap in resource.get_capabilities(Namespaces.CONTRACT.value):
        if cap.attributes.get(Namespaces.CONTRACT.value) == Constants.CONTRACT_OSGI_FRAMEWORK:
            return cap
    return None


def is_framework_resource(resource: Optional[Resource]) -> bool:
    """True when ``resource`` implements the framework contract."""
    return resource is not None and find_framework_contract_capability(resource) is not None


def framework_requirement(framework_spec: str) -> Requirement:
    """Build the identity requirement for a ``name;version=range`` clause.

    Raises InvalidConfigurationError for anything other than exactly one
    clause, or for a malformed version range.
    """
    clauses = parse_parameters(framework_spec)
    if len(clauses) > 1:
        raise InvalidConfigurationError("Cannot specify more than one OSGi Framework.")
    if not clauses:
        raise InvalidConfigurationError(f"No framework named in {framework_spec!r}")
    clause = clauses[0]

    flt: Filter = SimpleFilter(Namespaces.IDENTITY.value, clause.name)
    version_str = clause.attributes.get(Constants.VERSION_ATTRIBUTE)
    if version_str is not None:
        version_range = VersionRange.parse(version_str)
        flt = AndFilter().add_child(flt).add_child(filter_from_version_range(version_range))

    return (
        CapReqBuilder(Namespaces.IDENTITY.value)
        .add_directive(Constants.FILTER_DIRECTIVE, str(flt))
        .build_synthetic_requirement()
    )


def locate_framework(
    repositories: Iterable[Repository],
    framework_spec: Optional[str],
) -> Optional[FrameworkSelection]:
    """Search ``repositories`` in order for the best framework resource.

    Returns None when no framework is requested or none qualifies. Ties on
    version keep the first candidate seen.
    """
    if framework_spec is None:
        return None

    requirement = framework_requirement(framework_spec)
    best_resource: Optional[Resource] = None
    best_version: Optional[Version] = None

    with Timer() as t:
        for repo in repositories:
            providers = repo.find_providers([requirement])
            for capability in providers.get(requirement) or []:
                resource = capability.resource
                if not is_framework_resource(resource):
                    continue
                found = to_version(capability.attributes.get(Constants.VERSION_ATTRIBUTE))
                if found is None:
                    continue
                if best_version is None or found > best_version:
                    best_resource, best_version = resource, found
                    if is_debug_enabled(logger):
                        logger.debug(
                            "Framework candidate",
                            extra=extra_context(
                                event="candidate", component="framework", action="locate_framework",
                                target=str(repo), version=str(found),
                            ),
                        )

    if best_resource is None:
        logger.warning("No OSGi framework matching %s found in any repository", framework_spec)
        return None

    logger.info("Selected OSGi framework %r", best_resource)
    if is_debug_enabled(logger):
        logger.debug(
            "Framework search complete",
            extra=extra_context(
                event="function_exit", component="framework", action="locate_framework",
                outcome="found", version=str(best_version), duration_ms=t.duration_ms(),
            ),
        )
    return FrameworkSelection(best_resource, best_version, SingletonResourceRepository(best_resource))
