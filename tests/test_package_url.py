"""Tests for the PackageURL model: serialization and normalization."""

import dataclasses

import pytest

from purlkit.core.errors import (
    InvalidStructureError,
    InvalidSubpathSegmentError,
    InvalidTypeError,
    MissingNameError,
)
from purlkit.models.package_url import PackageURL
from purlkit.models.qualifiers import Qualifiers
from purlkit.parsers.purl import parse


@pytest.fixture
def sample_purl():
    return PackageURL(
        type="maven",
        namespace="org.apache.commons",
        name="commons-lang3",
        version="3.12.0",
        qualifiers={"type": "jar"},
        subpath="com/example/Util.class",
    )


# ═══════════════════════════════════════════
# Construction
# ═══════════════════════════════════════════


class TestConstruction:
    def test_mapping_qualifiers_converted(self, sample_purl):
        assert isinstance(sample_purl.qualifiers, Qualifiers)
        assert sample_purl.qualifiers.get("type") == "jar"

    def test_pair_qualifiers_converted(self):
        p = PackageURL(type="deb", name="curl", qualifiers=[("distro", "jessie"), ("arch", "i386")])
        assert [q.key for q in p.qualifiers] == ["distro", "arch"]

    def test_default_qualifiers_empty(self):
        assert len(PackageURL(type="npm", name="foo").qualifiers) == 0

    def test_frozen(self, sample_purl):
        with pytest.raises(dataclasses.FrozenInstanceError):
            sample_purl.name = "other"

    def test_hashable(self, sample_purl):
        copy = PackageURL.from_dict(sample_purl.to_dict())
        assert len({sample_purl, copy}) == 1


# ═══════════════════════════════════════════
# Serialization
# ═══════════════════════════════════════════


class TestToString:
    def test_full(self, sample_purl):
        assert sample_purl.to_string() == (
            "pkg:maven/org.apache.commons/commons-lang3@3.12.0?type=jar#com/example/Util.class"
        )

    def test_str(self, sample_purl):
        assert str(sample_purl) == sample_purl.to_string()

    def test_name_slash_escaped(self):
        assert PackageURL(type="deb", name="ab/c").to_string() == "pkg:deb/ab%2Fc"

    def test_namespace_segments_escaped(self):
        p = PackageURL(type="npm", namespace="@angular", name="core")
        assert p.to_string() == "pkg:npm/%40angular/core"

    def test_version_escaped(self):
        p = PackageURL(type="deb", namespace="debian", name="curl", version="1:7.50.3-1")
        assert p.to_string() == "pkg:deb/debian/curl@1%3A7.50.3-1"

    def test_subpath_segments_escaped(self):
        p = PackageURL(type="generic", name="bundle", subpath="dir name/file.txt")
        assert p.to_string() == "pkg:generic/bundle#dir%20name/file.txt"

    def test_optional_parts_omitted(self):
        assert PackageURL(type="npm", name="foo").to_string() == "pkg:npm/foo"

    def test_qualifiers_sorted_and_empty_dropped(self):
        p = PackageURL(type="npm", name="foo", qualifiers={"os": "linux", "arch": "x64", "libc": ""})
        assert p.to_string() == "pkg:npm/foo?arch=x64&os=linux"

    def test_only_empty_qualifiers_omit_query(self):
        assert PackageURL(type="npm", name="foo", qualifiers={"arch": ""}).to_string() == "pkg:npm/foo"


# ═══════════════════════════════════════════
# Normalization
# ═══════════════════════════════════════════


class TestNormalize:
    def test_adjustments_applied(self):
        p = PackageURL(type="NPM", namespace="/@Angular/", name="Core", version="").normalize()
        assert p == PackageURL(type="npm", namespace="@angular", name="core")

    def test_pypi(self):
        assert PackageURL(type="pypi", name="My_Pkg").normalize().name == "my-pkg"

    def test_empty_qualifier_removed(self):
        p = PackageURL(type="npm", name="foo", qualifiers={"arch": "", "os": "linux"}).normalize()
        assert p.qualifiers.to_map() == {"os": "linux"}

    def test_qualifiers_sorted(self):
        p = PackageURL(type="npm", name="foo", qualifiers=[("os", "linux"), ("arch", "x64")]).normalize()
        assert [q.key for q in p.qualifiers] == ["arch", "os"]

    def test_subpath_trimmed(self):
        p = PackageURL(type="npm", name="foo", subpath="/sub/path/").normalize()
        assert p.subpath == "sub/path"

    def test_traversal_rejected(self):
        with pytest.raises(InvalidSubpathSegmentError):
            PackageURL(type="npm", name="foo", subpath="sub/../path").normalize()

    def test_leading_dot_accepted(self):
        p = PackageURL(type="npm", name="foo", subpath="./sub/path").normalize()
        assert p.subpath == "./sub/path"

    def test_missing_name(self):
        with pytest.raises(MissingNameError):
            PackageURL(type="npm", name="").normalize()

    def test_invalid_type(self):
        with pytest.raises(InvalidTypeError):
            PackageURL(type="np/m", name="foo").normalize()

    def test_trailing_newline_in_type_rejected(self):
        with pytest.raises(InvalidTypeError):
            PackageURL(type="npm\n", name="foo").normalize()

    def test_lone_dot_subpath_rejected(self):
        with pytest.raises(InvalidSubpathSegmentError):
            PackageURL(type="npm", name="foo", subpath="/./").normalize()

    def test_structure_enforced(self):
        with pytest.raises(InvalidStructureError):
            PackageURL(type="cran", name="A3").normalize()

    def test_idempotent(self, sample_purl):
        once = sample_purl.normalize()
        assert once.normalize() == once

    def test_original_untouched(self):
        p = PackageURL(type="NPM", name="Foo")
        p.normalize()
        assert (p.type, p.name) == ("NPM", "Foo")


# ═══════════════════════════════════════════
# Dict Interop & Round Trips
# ═══════════════════════════════════════════


class TestDictInterop:
    def test_to_dict(self, sample_purl):
        d = sample_purl.to_dict()
        assert d == {
            "type": "maven",
            "namespace": "org.apache.commons",
            "name": "commons-lang3",
            "version": "3.12.0",
            "qualifiers": {"type": "jar"},
            "subpath": "com/example/Util.class",
        }

    def test_from_dict(self, sample_purl):
        assert PackageURL.from_dict(sample_purl.to_dict()) == sample_purl

    def test_from_dict_minimal(self):
        p = PackageURL.from_dict({"type": "npm", "name": "foo"})
        assert p.namespace is None
        assert len(p.qualifiers) == 0


class TestRoundTrip:
    @pytest.mark.parametrize(
        "record",
        [
            PackageURL(type="npm", namespace="@angular", name="animation", version="12.3.1"),
            PackageURL(type="deb", name="ab/c"),
            PackageURL(type="generic", name="a b", version="1.0+build", subpath="x y/z"),
            PackageURL(
                type="docker",
                namespace="customer",
                name="dockerimage",
                version="sha256:244fd47e07d10",
                qualifiers={"repository_url": "gcr.io/team"},
            ),
            PackageURL(type="swift", namespace="github.com/Alamofire", name="Alamofire", version="5.4.3"),
        ],
    )
    def test_parse_of_serialized_record(self, record):
        assert parse(record.to_string()) == record
