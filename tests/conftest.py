"""Shared fixtures for the test suite."""

import pytest

from factories import FELIX, CountingRepository, make_bundle


@pytest.fixture
def felix_repos():
    """Three repositories: A and B each carry a Felix build, C carries a plain bundle."""
    repo_a = CountingRepository("A", [
        make_bundle(FELIX, "1.0.0", packages=["org.osgi.framework"], framework=True),
        make_bundle("org.example.api", "1.0.0", packages=["org.example.api"]),
    ])
    repo_b = CountingRepository("B", [
        make_bundle(FELIX, "1.2.0", packages=["org.osgi.framework"], framework=True),
        make_bundle("org.example.impl", "2.0.0", packages=["org.example.api"]),
    ])
    repo_c = CountingRepository("C", [
        make_bundle("org.example.other", "3.0.0", packages=["org.example.api"]),
    ])
    return repo_a, repo_b, repo_c
