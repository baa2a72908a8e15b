"""
Structural validation of purl records.

Generic checks (type charset, name presence, subpath segments) apply to every
type. Per-type mandatory-field rules live in ``STRUCTURE_RULES``; uncatalogued
types have no extra rule.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import TYPE_CHECKING

from purlkit.core.errors import (
    InvalidStructureError,
    InvalidSubpathSegmentError,
    InvalidTypeError,
    MissingNameError,
)
from purlkit.core.types import PackageType

if TYPE_CHECKING:
    from purlkit.models.package_url import PackageURL

TYPE_PATTERN = re.compile(r"^[0-9A-Za-z.+\-]+$")


def validate_type(purl_type: str) -> None:
    if not TYPE_PATTERN.fullmatch(purl_type):
        raise InvalidTypeError(f"Invalid purl type: {purl_type!r}", purl_type)


def validate_name(name: str) -> None:
    if not name:
        raise MissingNameError("purl is missing name", name)


def validate_subpath(subpath: str | None) -> None:
    """
    Reject traversal segments.

    ``..`` is invalid anywhere. A single ``.`` is only allowed as the leading
    segment of a longer path (``./sub/path``), where it is a literal prefix;
    a subpath that is just ``.`` is rejected.
    """
    if not subpath:
        return
    segments = subpath.split("/")
    for index, segment in enumerate(segments):
        if segment == ".." or (segment == "." and (index > 0 or len(segments) == 1)):
            raise InvalidSubpathSegmentError(
                f"Invalid subpath segment {segment!r} in {subpath!r}", segment
            )


def _conan_rule(purl: PackageURL) -> None:
    channel = purl.qualifiers.get("channel")
    if purl.namespace:
        if channel is None:
            raise InvalidStructureError("conan purl with a namespace requires a channel qualifier", "channel")
        if not channel:
            raise InvalidStructureError("the channel qualifier must not be empty if namespace is present", "channel")
    elif channel:
        raise InvalidStructureError("namespace is required if channel is non-empty", channel)


def _swift_rule(purl: PackageURL) -> None:
    if not purl.namespace:
        raise InvalidStructureError("swift purl requires a namespace", purl.name)
    if not purl.version:
        raise InvalidStructureError("swift purl requires a version", purl.name)


def _cran_rule(purl: PackageURL) -> None:
    if not purl.version:
        raise InvalidStructureError("cran purl requires a version", purl.name)


STRUCTURE_RULES: dict[PackageType, Callable[[PackageURL], None]] = {
    PackageType.CONAN: _conan_rule,
    PackageType.SWIFT: _swift_rule,
    PackageType.CRAN: _cran_rule,
}


def validate_structure(purl: PackageURL) -> None:
    """Run the mandatory-field rule for ``purl.type``, if it has one."""
    rule = STRUCTURE_RULES.get(PackageType.lookup(purl.type))
    if rule:
        rule(purl)


def validate(purl: PackageURL) -> None:
    """
    Run every check against a record whose components are already adjusted.

    Raises:
        PurlError: The first failing check's error kind.
    """
    validate_type(purl.type)
    validate_name(purl.name)
    validate_subpath(purl.subpath)
    validate_structure(purl)
