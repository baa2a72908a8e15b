"""
PackageURL Model - the structured form of a purl.

A ``PackageURL`` is an immutable value. It is created by ``parse`` or built
directly by the caller; ``normalize`` applies the per-type adjustments and
validation to a caller-built record, and ``to_string`` renders the canonical
string.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace

from purlkit.core.escaping import encode_path, encode_segment
from purlkit.core.types import adjust_name, adjust_namespace, adjust_version
from purlkit.core.validation import validate
from purlkit.models.qualifiers import Qualifiers

SCHEME = "pkg"


def _coerce_qualifiers(value: Qualifiers | Mapping[str, str] | Iterable[tuple[str, str]] | None) -> Qualifiers:
    if value is None:
        return Qualifiers()
    if isinstance(value, Qualifiers):
        return value
    if isinstance(value, Mapping):
        return Qualifiers.from_map(value)
    return Qualifiers.from_pairs(value)


@dataclass(frozen=True, kw_only=True)
class PackageURL:
    """
    A package URL: ``pkg:type/namespace/name@version?qualifiers#subpath``.

    ``qualifiers`` accepts a ``Qualifiers`` set, a plain mapping or an iterable
    of ``(key, value)`` pairs; the latter two are converted on construction.
    Serialization assumes the record already holds canonical values, so build
    records through ``parse`` or call ``normalize`` first.
    """

    type: str
    namespace: str | None = None
    name: str
    version: str | None = None
    qualifiers: Qualifiers = field(default_factory=Qualifiers)
    subpath: str | None = None

    def __post_init__(self):
        object.__setattr__(self, "qualifiers", _coerce_qualifiers(self.qualifiers))

    @classmethod
    def from_string(cls, purl: str) -> PackageURL:
        """Parse a purl string. See ``purlkit.parsers.purl.parse``."""
        from purlkit.parsers.purl import parse

        return parse(purl)

    def to_string(self) -> str:
        """Render the canonical purl string."""
        unit = encode_segment(self.name)
        if self.version:
            unit = f"{unit}@{encode_segment(self.version)}"

        parts = [self.type]
        if self.namespace:
            parts.append(encode_path(self.namespace))
        parts.append(unit)
        purl = f"{SCHEME}:{'/'.join(parts)}"

        query = self.qualifiers.to_query()
        if query:
            purl = f"{purl}?{query}"
        if self.subpath:
            purl = f"{purl}#{encode_path(self.subpath)}"
        return purl

    def normalize(self) -> PackageURL:
        """
        Return the canonical, validated form of this record.

        Lowercases the type, trims ``/`` from namespace and subpath, maps empty
        optional fields to None, applies the per-type adjustments, validates,
        and drops empty-valued qualifiers.

        Raises:
            PurlError: The first failing check's error kind.
        """
        purl_type = self.type.lower()
        name = self.name or ""
        candidate = replace(
            self,
            type=purl_type,
            namespace=adjust_namespace(purl_type, (self.namespace or "").strip("/")) or None,
            name=adjust_name(purl_type, name, self.qualifiers),
            version=adjust_version(purl_type, self.version) or None,
            subpath=(self.subpath or "").strip("/") or None,
        )
        # Structural rules see empty-valued qualifiers before they are dropped
        validate(candidate)
        return replace(candidate, qualifiers=self.qualifiers.canonical())

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dictionary."""
        return {
            "type": self.type,
            "namespace": self.namespace,
            "name": self.name,
            "version": self.version,
            "qualifiers": self.qualifiers.to_map(),
            "subpath": self.subpath,
        }

    @classmethod
    def from_dict(cls, data: dict) -> PackageURL:
        """Deserialize from dictionary. The result is not normalized."""
        return cls(
            type=data["type"],
            namespace=data.get("namespace"),
            name=data["name"],
            version=data.get("version"),
            qualifiers=data.get("qualifiers") or {},
            subpath=data.get("subpath"),
        )

    def __str__(self) -> str:
        return self.to_string()
