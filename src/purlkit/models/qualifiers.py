"""
Qualifier Set - ordered ``key=value`` annotations of a purl.

Qualifiers keep insertion order (the order they appeared in a parsed string or
were supplied by the caller) but always render in ascending key order, so the
canonical string does not depend on how the set was built.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass

from purlkit.core.errors import DuplicateQualifierKeyError, InvalidQualifierKeyError
from purlkit.core.escaping import decode, encode_value

logger = logging.getLogger(__name__)

# ASCII letters, digits, '.', '-', '_'; cannot start with a digit
QUALIFIER_KEY_PATTERN = re.compile(r"^[A-Za-z.\-_][0-9A-Za-z.\-_]*$")


def normalize_key(key: str) -> str:
    """Validate a qualifier key and return its lowercase form."""
    if not QUALIFIER_KEY_PATTERN.fullmatch(key):
        raise InvalidQualifierKeyError(f"Invalid qualifier key: {key!r}", key)
    return key.lower()


def normalize_value(value: str) -> str:
    """Lowercase the first character only (``SHA256:ABC`` -> ``sHA256:ABC``) if it is ASCII."""
    if not value or not value[0].isascii():
        return value
    return value[0].lower() + value[1:]


@dataclass(frozen=True)
class Qualifier:
    """A single ``key=value`` pair."""

    key: str
    value: str

    def __str__(self) -> str:
        return f"{self.key}={encode_value(self.value)}"


class Qualifiers:
    """
    Immutable, insertion-ordered set of qualifiers with unique keys.

    Build it with ``from_pairs``, ``from_map`` or ``from_query``; all of them
    validate and normalize keys and values. Equality ignores order and a set
    also compares equal to a plain mapping holding the same items.
    """

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[Qualifier] = ()):
        self._items: tuple[Qualifier, ...] = tuple(items)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]]) -> Qualifiers:
        """
        Build a set from ordered ``(key, value)`` pairs.

        Raises:
            InvalidQualifierKeyError: If a key does not match the key pattern.
            DuplicateQualifierKeyError: If a key (compared lowercased) repeats.
        """
        seen: set[str] = set()
        items = []
        for raw_key, raw_value in pairs:
            key = normalize_key(raw_key)
            if key in seen:
                raise DuplicateQualifierKeyError(f"Duplicate qualifier key: {key!r}", key)
            seen.add(key)
            items.append(Qualifier(key=key, value=normalize_value(raw_value or "")))
        return cls(items)

    @classmethod
    def from_map(cls, mapping: Mapping[str, str]) -> Qualifiers:
        """Build a set from an unordered mapping; keys end up sorted."""
        return cls.from_pairs(sorted(mapping.items(), key=lambda kv: kv[0].lower()))

    @classmethod
    def from_query(cls, raw_query: str) -> Qualifiers:
        """
        Parse a raw ``k=v&k=v`` query string.

        Empty pieces (``a=1&&b=2``) are skipped and a piece without ``=`` gets
        an empty value. Empty values are kept here so structural rules can
        still see them; ``canonical()`` drops them.
        """
        pairs = []
        for piece in raw_query.split("&"):
            if not piece:
                continue
            key, _, value = piece.partition("=")
            pairs.append((decode(key), decode(value)))
        return cls.from_pairs(pairs)

    def get(self, key: str, default: str | None = None) -> str | None:
        """Return the value for ``key`` (matched lowercased) or ``default``."""
        key = key.lower()
        for item in self._items:
            if item.key == key:
                return item.value
        return default

    def to_map(self) -> dict[str, str]:
        """Return a plain ``dict``; insertion order is kept but not meaningful."""
        return {item.key: item.value for item in self._items}

    def canonical(self) -> Qualifiers:
        """Return a new set with empty values dropped and keys sorted."""
        dropped = [item.key for item in self._items if not item.value]
        if dropped:
            logger.debug(f"Dropping empty qualifiers: {', '.join(dropped)}")
        return Qualifiers(sorted((item for item in self._items if item.value), key=lambda q: q.key))

    def to_query(self) -> str:
        """Render the canonical ``key=value&...`` string (no leading ``?``)."""
        return "&".join(str(item) for item in self.canonical())

    def __iter__(self) -> Iterator[Qualifier]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Qualifiers):
            return self.to_map() == other.to_map()
        if isinstance(other, Mapping):
            return self.to_map() == dict(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(frozenset(self.to_map().items()))

    def __repr__(self) -> str:
        return f"Qualifiers({self.to_map()!r})"
