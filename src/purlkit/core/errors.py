"""
Error taxonomy for purl parsing and normalization.

Every failure is terminal: callers get either a fully valid record or one of
the exceptions below. All of them derive from ``PurlError`` (a ``ValueError``),
so a single ``except PurlError`` handles the whole family.
"""


class PurlError(ValueError):
    """Base class for every purl parse or validation failure."""

    def __init__(self, message: str, value: str | None = None):
        super().__init__(message)
        self.value = value  # offending substring, key or field


class InvalidSchemeError(PurlError):
    """The string does not start with the ``pkg:`` scheme."""


class MissingTypeOrNameError(PurlError):
    """No ``/`` separates the type from the rest of the purl."""


class MissingNameError(PurlError):
    """The name is empty after percent-decoding."""


class MalformedEscapeError(PurlError):
    """A ``%`` escape is not followed by two hex digits or decodes to invalid UTF-8."""


class InvalidTypeError(PurlError):
    """The type contains characters outside letters, digits, ``.``, ``+`` and ``-``."""


class InvalidQualifierKeyError(PurlError):
    """A qualifier key does not match the key pattern."""


class DuplicateQualifierKeyError(PurlError):
    """The same qualifier key occurs more than once."""


class InvalidStructureError(PurlError):
    """A per-type mandatory-field rule is violated."""


class InvalidSubpathSegmentError(PurlError):
    """The subpath contains a traversal segment."""


class InvalidCharacterError(PurlError):
    """The string contains an ASCII control character."""
