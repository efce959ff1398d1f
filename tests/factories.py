"""Resource, repository and registry factories shared by the tests."""

from typing import Dict, Iterable, List

from bndresolve.constants import Constants
from bndresolve.repository.base import Repository
from bndresolve.repository.memory import InMemoryRepository
from bndresolve.resource.model import Capability, CapReqBuilder, Requirement, ResourceBuilder
from bndresolve.versioning import Version

FELIX = "org.apache.felix.framework"


def make_bundle(name: str, version: str = "1.0.0", packages: Iterable[str] = (), framework: bool = False):
    """Resource with an identity capability, exported packages and optional framework contract."""
    builder = ResourceBuilder().add_identity(name, Version.parse(version))
    for pkg in packages:
        builder.add_capability(
            CapReqBuilder("osgi.wiring.package")
            .add_attribute("osgi.wiring.package", pkg)
            .add_attribute(Constants.VERSION_ATTRIBUTE, Version.parse(version))
        )
    if framework:
        builder.add_contract(Constants.CONTRACT_OSGI_FRAMEWORK)
    return builder.build()


def package_requirement(pkg: str, **directives) -> Requirement:
    builder = CapReqBuilder("osgi.wiring.package").add_directive(
        Constants.FILTER_DIRECTIVE, f"(osgi.wiring.package={pkg})"
    )
    for key, value in directives.items():
        builder.add_directive(key, value)
    return builder.build_synthetic_requirement()


class CountingRepository(InMemoryRepository):
    """In-memory repository recording every query it receives."""

    def __init__(self, name, resources=None):
        super().__init__(name, resources)
        self.queries: List[Requirement] = []

    def find_providers(self, requirements) -> Dict[Requirement, List[Capability]]:
        requirements = list(requirements)
        self.queries.extend(requirements)
        return super().find_providers(requirements)


class CountingRegistry:
    """Plugin registry counting how often repositories are loaded."""

    def __init__(self, repos: Iterable[Repository]):
        self.repos = list(repos)
        self.load_count = 0

    def get_plugins(self, kind):
        self.load_count += 1
        return [r for r in self.repos if isinstance(r, kind)]

