"""Tests for framework location."""

import pytest
import semantic_version
from packaging import version as pep440

from bndresolve.constants import Constants
from bndresolve.errors import InvalidConfigurationError, TypeConversionError
from bndresolve.repository.memory import InMemoryRepository
from bndresolve.repository.singleton import SingletonResourceRepository
from bndresolve.resolve.framework import (
    find_framework_contract_capability,
    framework_requirement,
    is_framework_resource,
    locate_framework,
)
from bndresolve.resource.model import ResourceBuilder
from bndresolve.versioning import Version

from factories import FELIX, make_bundle


def _framework_with_raw_version(value):
    return (
        ResourceBuilder()
        .add_identity(FELIX, value)
        .add_contract(Constants.CONTRACT_OSGI_FRAMEWORK)
        .build()
    )


class TestFrameworkPredicate:
    def test_contract_tagged_resource(self):
        resource = make_bundle(FELIX, framework=True)
        assert is_framework_resource(resource)
        assert find_framework_contract_capability(resource).attributes["osgi.contract"] == "OSGiFramework"

    def test_other_contracts_do_not_count(self):
        resource = ResourceBuilder().add_identity("servlet", "3.1.0").add_contract("JavaServlet").build()
        assert not is_framework_resource(resource)
        assert find_framework_contract_capability(resource) is None

    def test_none_is_not_a_framework(self):
        assert not is_framework_resource(None)


class TestFrameworkRequirement:
    """Synthetic identity requirement built from the framework clause."""

    def test_identity_only(self):
        req = framework_requirement(FELIX)
        assert req.namespace == "osgi.identity"
        assert req.directives["filter"] == f"(osgi.identity={FELIX})"
        assert req.resource is None

    def test_with_range(self):
        req = framework_requirement(f"{FELIX};version='[7,8)'")
        assert req.directives["filter"] == (
            f"(&(osgi.identity={FELIX})(&(version>=7.0.0)(!(version>=8.0.0))))"
        )

    def test_more_than_one_framework(self):
        with pytest.raises(InvalidConfigurationError, match="more than one"):
            framework_requirement(f"{FELIX}, org.eclipse.osgi")

    def test_malformed_range(self):
        with pytest.raises(InvalidConfigurationError):
            framework_requirement(f"{FELIX};version='[8,7)'")


class TestLocateFramework:
    """Highest-version selection across repositories."""

    def test_no_spec_means_no_selection(self, felix_repos):
        assert locate_framework(felix_repos, None) is None
        assert all(not repo.queries for repo in felix_repos)

    def test_highest_version_across_repositories(self, felix_repos):
        selection = locate_framework(felix_repos, f"{FELIX};version='[1,2)'")
        assert selection.version == Version(1, 2, 0)
        assert selection.resource.version == Version(1, 2, 0)
        assert isinstance(selection.repository, SingletonResourceRepository)
        assert selection.repository.resource is selection.resource

    def test_range_excludes_newer_versions(self, felix_repos):
        selection = locate_framework(felix_repos, f"{FELIX};version='[1.0,1.1)'")
        assert selection.version == Version(1, 0, 0)

    def test_no_match_returns_none(self, felix_repos):
        assert locate_framework(felix_repos, f"{FELIX};version='[5,6)'") is None

    def test_untagged_resources_are_ignored(self):
        plain = make_bundle(FELIX, "9.0.0")
        tagged = make_bundle(FELIX, "1.0.0", framework=True)
        selection = locate_framework([InMemoryRepository("r", [plain, tagged])], FELIX)
        assert selection.resource is tagged

    def test_tie_keeps_first_seen(self):
        first = make_bundle(FELIX, "1.0.0", framework=True)
        second = make_bundle(FELIX, "1.0.0", framework=True)
        repos = [InMemoryRepository("one", [first]), InMemoryRepository("two", [second])]
        assert locate_framework(repos, FELIX).resource is first

    def test_qualifier_breaks_tie(self):
        plain = make_bundle(FELIX, "1.0.0", framework=True)
        snapshot = make_bundle(FELIX, "1.0.0.SNAPSHOT", framework=True)
        selection = locate_framework([InMemoryRepository("r", [plain, snapshot])], FELIX)
        assert selection.resource is snapshot

    def test_string_versions_are_normalized(self):
        resource = _framework_with_raw_version("2.0.0")
        selection = locate_framework([InMemoryRepository("r", [resource])], FELIX)
        assert selection.version == Version(2, 0, 0)

    def test_string_version_inside_range(self):
        resource = _framework_with_raw_version("1.10.0")
        selection = locate_framework([InMemoryRepository("r", [resource])], f"{FELIX};version='[1.2,2)'")
        assert selection is not None
        assert selection.version == Version(1, 10, 0)

    def test_packaging_version_inside_range(self):
        resource = _framework_with_raw_version(pep440.Version("10.0.0"))
        selection = locate_framework([InMemoryRepository("r", [resource])], f"{FELIX};version='[9,11)'")
        assert selection is not None
        assert selection.version == Version(10, 0, 0)

    def test_semantic_version_inside_range(self):
        resource = _framework_with_raw_version(semantic_version.Version("10.1.0"))
        repo = InMemoryRepository("r", [resource])
        assert locate_framework([repo], f"{FELIX};version='[9,11)'").version == Version(10, 1, 0)
        assert locate_framework([repo], f"{FELIX};version='[11,12)'") is None

    def test_unknown_version_type_raises(self):
        resource = _framework_with_raw_version(2.0)
        with pytest.raises(TypeConversionError):
            locate_framework([InMemoryRepository("r", [resource])], FELIX)

    def test_missing_version_is_skipped(self):
        resource = _framework_with_raw_version(None)
        assert locate_framework([InMemoryRepository("r", [resource])], FELIX) is None
