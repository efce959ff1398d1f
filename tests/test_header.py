"""Tests for manifest-style header parsing."""

import pytest

from bndresolve.errors import InvalidConfigurationError
from bndresolve.resource.header import parse_parameters


class TestParseParameters:
    """Clause splitting, quoting and parameter kinds."""

    def test_single_clause_with_quoted_range(self):
        clauses = parse_parameters("org.apache.felix.framework;version='[7,8)'")
        assert len(clauses) == 1
        assert clauses[0].name == "org.apache.felix.framework"
        assert clauses[0].attributes == {"version": "[7,8)"}

    def test_unquoted_range_is_not_split(self):
        clauses = parse_parameters("org.apache.felix.framework;version=[7,8)")
        assert len(clauses) == 1
        assert clauses[0].attributes["version"] == "[7,8)"

    def test_multiple_clauses_and_directives(self):
        clauses = parse_parameters('a;version="1.0", b;resolution:=optional')
        assert [c.name for c in clauses] == ["a", "b"]
        assert clauses[0].attributes == {"version": "1.0"}
        assert clauses[1].directives == {"resolution": "optional"}

    def test_shared_parameters_for_several_names(self):
        clauses = parse_parameters("a;b;version=2")
        assert [(c.name, c.attributes["version"]) for c in clauses] == [("a", "2"), ("b", "2")]

    def test_typed_attribute_keeps_name(self):
        clauses = parse_parameters("a;version:Version=1.2")
        assert clauses[0].attributes == {"version": "1.2"}

    def test_blank_header(self):
        assert parse_parameters("") == []
        assert parse_parameters("  ") == []

    @pytest.mark.parametrize("header", ["a;version='1.0", ";version=1", "a;version=1;b"])
    def test_malformed(self, header):
        with pytest.raises(InvalidConfigurationError):
            parse_parameters(header)
