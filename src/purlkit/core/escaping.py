"""
Percent-encoding policy for purl components.

Thin adapter over ``urllib.parse``. Only ASCII letters, digits and ``-._~``
survive unescaped inside a segment; path-like values (namespace, subpath) are
split on ``/`` first so their separators are never escaped.
"""

import re
from urllib.parse import quote, unquote

from purlkit.core.errors import MalformedEscapeError

# A '%' not followed by exactly two hex digits
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def encode_segment(value: str) -> str:
    """Escape a single segment. ``/`` is escaped too."""
    return quote(value, safe="")


def encode_path(value: str) -> str:
    """Escape each ``/``-separated segment, keeping the separators literal."""
    return "/".join(encode_segment(segment) for segment in value.split("/"))


def encode_value(value: str) -> str:
    """Escape a qualifier value. ``/`` stays literal."""
    return quote(value, safe="/")


def decode(value: str) -> str:
    """
    Strictly percent-decode a component.

    Raises:
        MalformedEscapeError: On a truncated or non-hex escape, or when the
            decoded bytes are not valid UTF-8.
    """
    match = _BAD_ESCAPE.search(value)
    if match:
        bad = value[match.start() : match.start() + 3]
        raise MalformedEscapeError(f"Invalid percent-encoding {bad!r} in {value!r}", bad)

    try:
        return unquote(value, errors="strict")
    except UnicodeDecodeError as e:
        raise MalformedEscapeError(f"Escaped bytes in {value!r} are not valid UTF-8", value) from e
