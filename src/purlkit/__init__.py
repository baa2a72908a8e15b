"""
purlkit - Package URL (purl) codec.

Parses ``pkg:`` strings into canonical, validated records and renders records
back into bit-exact canonical strings, applying per-ecosystem normalization.
"""

__version__ = "1.0.0"


def __getattr__(name: str):
    """Lazy import of the public API."""
    if name == "PackageURL":
        from purlkit.models.package_url import PackageURL

        return PackageURL
    if name == "Qualifiers":
        from purlkit.models.qualifiers import Qualifiers

        return Qualifiers
    if name == "parse":
        from purlkit.parsers.purl import parse

        return parse
    if name == "PurlError":
        from purlkit.core.errors import PurlError

        return PurlError
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["PackageURL", "Qualifiers", "parse", "PurlError", "__version__"]
