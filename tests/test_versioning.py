"""Tests for OSGi versions and version ranges."""

import pytest
import semantic_version
from packaging import version as pep440

from bndresolve.errors import InvalidConfigurationError, TypeConversionError
from bndresolve.versioning import EMPTY_VERSION, Version, VersionRange, to_version


class TestVersion:
    """Parsing and ordering of OSGi versions."""

    @pytest.mark.parametrize("text,expected", [
        ("1", Version(1, 0, 0)),
        ("1.2", Version(1, 2, 0)),
        ("1.2.3", Version(1, 2, 3)),
        ("1.2.3.RC1", Version(1, 2, 3, "RC1")),
        (" 4.0.0 ", Version(4, 0, 0)),
        ("", EMPTY_VERSION),
    ])
    def test_parse(self, text, expected):
        assert Version.parse(text) == expected

    @pytest.mark.parametrize("text", ["1.x", "1..2", "1.2.3.", "1.2.3.a.b", "-1", "v1.0"])
    def test_parse_rejects_malformed(self, text):
        with pytest.raises(InvalidConfigurationError):
            Version.parse(text)

    def test_numeric_segments_compare_numerically(self):
        assert Version.parse("1.10.0") > Version.parse("1.9.0")
        assert Version.parse("10.0.0") > Version.parse("9.9.9")

    def test_qualifier_compares_lexically_and_empty_sorts_first(self):
        assert Version.parse("1.0.0") < Version.parse("1.0.0.a")
        assert Version.parse("1.0.0.b") > Version.parse("1.0.0.a")
        assert Version.parse("1.0.0.20230101") < Version.parse("1.0.0.20240101")

    def test_str(self):
        assert str(Version.parse("1")) == "1.0.0"
        assert str(Version.parse("1.2.3.qual")) == "1.2.3.qual"


class TestToVersion:
    """Normalization of version attribute values."""

    def test_none_passes_through(self):
        assert to_version(None) is None

    def test_version_returned_as_is(self):
        v = Version(1, 2, 3)
        assert to_version(v) is v

    def test_string_is_parsed(self):
        assert to_version("2.1") == Version(2, 1, 0)

    def test_packaging_version(self):
        assert to_version(pep440.Version("1.4.2")) == Version(1, 4, 2)
        assert to_version(pep440.Version("1.4.2rc1")) == Version(1, 4, 2, "rc1")

    def test_semantic_version(self):
        assert to_version(semantic_version.Version("3.0.1")) == Version(3, 0, 1)
        assert to_version(semantic_version.Version("3.0.1-beta.2")) == Version(3, 0, 1, "beta-2")

    @pytest.mark.parametrize("value", [1, 1.5, ["1.0"], {"major": 1}])
    def test_unknown_type_raises(self, value):
        with pytest.raises(TypeConversionError, match="Cannot convert type"):
            to_version(value)


class TestVersionRange:
    """Range parsing and membership."""

    def test_at_least_form(self):
        rng = VersionRange.parse("1.2")
        assert not rng.is_range
        assert rng.includes("1.2.0")
        assert rng.includes("99.0.0")
        assert not rng.includes("1.1.9")

    def test_half_open(self):
        rng = VersionRange.parse("[1.0,2.0)")
        assert rng.includes("1.0.0")
        assert rng.includes("1.9.9.zzz")
        assert not rng.includes("2.0.0")

    def test_exclusive_low_inclusive_high(self):
        rng = VersionRange.parse("(1.0,2.0]")
        assert not rng.includes("1.0.0")
        assert rng.includes("1.0.0.a")
        assert rng.includes("2.0.0")

    def test_exact(self):
        rng = VersionRange.parse("[1.2.3,1.2.3]")
        assert rng.includes(Version(1, 2, 3))
        assert not rng.includes(Version(1, 2, 4))

    def test_str_round_trip(self):
        assert str(VersionRange.parse("[1,2)")) == "[1.0.0,2.0.0)"
        assert str(VersionRange.parse("1.5")) == "1.5.0"

    @pytest.mark.parametrize("text", ["", "[1.0", "[1.0)", "[,2.0)", "[2.0,1.0]", "1.0,2.0", "[a,b]"])
    def test_malformed_raises(self, text):
        with pytest.raises(InvalidConfigurationError):
            VersionRange.parse(text)
