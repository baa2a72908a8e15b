"""
Known purl types and per-type component adjustments.

Each axis (namespace, name, version) is a lookup table keyed by
``PackageType``. Types missing from a table, and types that are not catalogued
at all, pass through unchanged: the purl format is open to any ecosystem.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum

from purlkit.models.qualifiers import Qualifiers

logger = logging.getLogger(__name__)


class PackageType(str, Enum):
    """Catalogued purl types."""

    ALPM = "alpm"
    APK = "apk"
    BITBUCKET = "bitbucket"
    CARGO = "cargo"
    COCOAPODS = "cocoapods"
    COMPOSER = "composer"
    CONAN = "conan"
    CONDA = "conda"
    CRAN = "cran"
    DEB = "deb"
    DOCKER = "docker"
    GEM = "gem"
    GENERIC = "generic"
    GITHUB = "github"
    GOLANG = "golang"
    HACKAGE = "hackage"
    HEX = "hex"
    HUGGINGFACE = "huggingface"
    JULIA = "julia"
    MAVEN = "maven"
    MLFLOW = "mlflow"
    NPM = "npm"
    NUGET = "nuget"
    OCI = "oci"
    PYPI = "pypi"
    QPKG = "qpkg"
    RPM = "rpm"
    SWID = "swid"
    SWIFT = "swift"

    @classmethod
    def lookup(cls, value: str) -> PackageType | None:
        """Return the member for ``value`` (case-insensitive), or None if uncatalogued."""
        try:
            return cls(value.lower())
        except ValueError:
            return None


def _lower(value: str) -> str:
    return value.lower()


def _lower_name(name: str, qualifiers: Qualifiers) -> str:
    return name.lower()


def _pypi_name(name: str, qualifiers: Qualifiers) -> str:
    return name.lower().replace("_", "-")


def _mlflow_name(name: str, qualifiers: Qualifiers) -> str:
    """Lowercase only for Databricks-hosted registries; Azure ML is case-sensitive."""
    repository_url = qualifiers.get("repository_url")
    if repository_url is None:
        return name
    if "azureml" in repository_url:
        return name
    if "databricks" in repository_url:
        return name.lower()
    logger.debug(f"Unknown mlflow repository {repository_url!r}, keeping name {name!r}")
    return name


# Ecosystems whose scope identifiers are case-insensitive
_LOWERCASE_NAMESPACE = frozenset(
    {
        PackageType.ALPM,
        PackageType.APK,
        PackageType.BITBUCKET,
        PackageType.COMPOSER,
        PackageType.DEB,
        PackageType.GITHUB,
        PackageType.GOLANG,
        PackageType.NPM,
        PackageType.RPM,
        PackageType.QPKG,
    }
)

_LOWERCASE_NAME = frozenset(
    {
        PackageType.ALPM,
        PackageType.APK,
        PackageType.BITBUCKET,
        PackageType.COMPOSER,
        PackageType.DEB,
        PackageType.GITHUB,
        PackageType.GOLANG,
        PackageType.NPM,
    }
)

NAMESPACE_ADJUSTERS: dict[PackageType, Callable[[str], str]] = {
    ptype: _lower for ptype in _LOWERCASE_NAMESPACE
}

NAME_ADJUSTERS: dict[PackageType, Callable[[str, Qualifiers], str]] = {
    **{ptype: _lower_name for ptype in _LOWERCASE_NAME},
    PackageType.PYPI: _pypi_name,
    PackageType.MLFLOW: _mlflow_name,
}

VERSION_ADJUSTERS: dict[PackageType, Callable[[str], str]] = {
    PackageType.HUGGINGFACE: _lower,
}


def adjust_namespace(purl_type: str, namespace: str | None) -> str | None:
    """Apply the namespace rule for ``purl_type``."""
    if not namespace:
        return namespace
    adjuster = NAMESPACE_ADJUSTERS.get(PackageType.lookup(purl_type))
    return adjuster(namespace) if adjuster else namespace


def adjust_name(purl_type: str, name: str, qualifiers: Qualifiers) -> str:
    """Apply the name rule for ``purl_type``; mlflow also reads ``qualifiers``."""
    adjuster = NAME_ADJUSTERS.get(PackageType.lookup(purl_type))
    return adjuster(name, qualifiers) if adjuster else name


def adjust_version(purl_type: str, version: str | None) -> str | None:
    """Apply the version rule for ``purl_type``."""
    if not version:
        return version
    adjuster = VERSION_ADJUSTERS.get(PackageType.lookup(purl_type))
    return adjuster(version) if adjuster else version
