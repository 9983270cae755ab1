"""Module path encoding used by the Go module cache.

The cache lives on case-insensitive filesystems too, so every uppercase
letter is stored as ``!`` followed by its lowercase form:
``github.com/Azure/go`` -> ``github.com/!azure/go``.
"""

from __future__ import annotations

ESCAPE_MARKER = "!"


class InvalidEncodingError(ValueError):
    """Raised when an encoded path has a dangling or malformed escape."""


def encode(name: str) -> str:
    """Encode a module identifier into its cache path form."""
    parts: list[str] = []
    for letter in name:
        if letter.isupper():
            parts.append(ESCAPE_MARKER + letter.lower())
        else:
            parts.append(letter)
    return "".join(parts)


def decode(encoded: str) -> str:
    """Invert :func:`encode`.

    Raises InvalidEncodingError if ``!`` is not followed by a lowercase letter.
    """
    parts: list[str] = []
    escaped = False
    for letter in encoded:
        if escaped:
            if not letter.islower():
                raise InvalidEncodingError(
                    f"Invalid escape sequence {ESCAPE_MARKER}{letter!r} in {encoded!r}"
                )
            parts.append(letter.upper())
            escaped = False
        elif letter == ESCAPE_MARKER:
            escaped = True
        else:
            parts.append(letter)
    if escaped:
        raise InvalidEncodingError(f"Dangling escape marker at end of {encoded!r}")
    return "".join(parts)
