"""
Package URL Parser.

Decomposes a ``pkg:`` string into a validated, canonical ``PackageURL``:

1. Check the scheme and split the string with generic URI rules
   (``urllib.parse.urlsplit``), so query and fragment never leak into the path.
2. Split the path into type and ``[namespace/]name[@version]``.
3. Percent-decode every component and parse the qualifiers.
4. Hand the raw record to ``PackageURL.normalize`` for per-type adjustment
   and validation.
"""

import logging
import posixpath
import re
from urllib.parse import urlsplit

from purlkit.core.errors import (
    InvalidCharacterError,
    InvalidSchemeError,
    MissingTypeOrNameError,
    PurlError,
)
from purlkit.core.escaping import decode
from purlkit.models.package_url import SCHEME, PackageURL
from purlkit.models.qualifiers import Qualifiers

logger = logging.getLogger(__name__)

# urlsplit silently strips tab, CR and LF; reject them up front
CONTROL_CHARACTERS = re.compile(r"[\x00-\x1f\x7f]")


def parse(purl: str) -> PackageURL:
    """
    Parse a purl string into a canonical PackageURL.

    Args:
        purl: A string such as ``pkg:maven/org.apache.commons/commons-lang3@3.12.0``.

    Returns:
        The normalized record; it serializes back to the canonical string.

    Raises:
        PurlError: A subclass naming what is wrong with the string.
    """
    try:
        return _parse(purl)
    except PurlError as e:
        logger.debug(f"Rejected purl {purl!r}: {e}")
        raise


def _parse(purl: str) -> PackageURL:
    scheme, sep, _ = purl.partition(":")
    if not sep or scheme != SCHEME:
        raise InvalidSchemeError(f'purl scheme is not "{SCHEME}": {scheme!r}', scheme)

    control = CONTROL_CHARACTERS.search(purl)
    if control:
        raise InvalidCharacterError(
            f"purl contains control character {control.group()!r} at offset {control.start()}", control.group()
        )

    try:
        parts = urlsplit(purl)
    except ValueError as e:
        raise InvalidSchemeError(f"Failed to parse {purl!r} as a URL: {e}", purl) from e

    remainder = _path_remainder(parts.netloc, parts.path)
    purl_type, sep, rest = remainder.partition("/")
    if not sep:
        raise MissingTypeOrNameError(f"purl is missing type or name: {purl!r}", remainder)

    qualifiers = Qualifiers.from_query(parts.query)
    namespace, name, version = _split_namespace_name_version(rest)

    raw = PackageURL(
        type=purl_type,
        namespace=namespace,
        name=name,
        version=version,
        qualifiers=qualifiers,
        subpath=decode(parts.fragment),
    )
    return raw.normalize()


def _path_remainder(netloc: str, path: str) -> str:
    """
    Return ``type/...`` from the split URL.

    ``pkg:type/...`` keeps everything in ``path``. The ``pkg:/type/...`` and
    ``pkg://type/...`` spellings are rebuilt from netloc + path and cleaned.
    """
    if not netloc and not path.startswith("/"):
        return path
    joined = "/".join(p for p in (netloc, path) if p)
    return posixpath.normpath(joined).lstrip("/") if joined else ""


def _split_namespace_name_version(rest: str) -> tuple[str, str, str]:
    """
    Split ``[namespace/]name[@version]``.

    The namespace is decoded as a whole, so an encoded ``/`` never adds a
    hierarchy level. Name and version are split on the last ``@``.
    """
    raw_namespace, _, unit = rest.strip("/").rpartition("/")
    raw_name, at, raw_version = unit.rpartition("@")
    if not at:
        raw_name, raw_version = unit, ""
    return decode(raw_namespace), decode(raw_name), decode(raw_version)
