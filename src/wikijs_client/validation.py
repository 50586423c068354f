"""Input validation and string escaping for GraphQL operation text.

Everything that ends up inside an operation string passes through this
module first: identifiers are parsed to positive integers, page paths are
normalized and checked for forbidden characters, and free text is escaped
so it can sit inside a double-quoted GraphQL string literal.
"""

import re
from typing import Any

from .errors import (
    InvalidIdentifierError,
    InvalidPathCharactersError,
    MissingPathError,
)

# Leading ASCII integer prefix, surrounding whitespace allowed (permissive parse)
_INTEGER_PREFIX = re.compile(r'^\s*([+-]?[0-9]+)')
_INVALID_PATH_CHARS = re.compile(r'[<>:"|?*]')

# Order matters: backslash first or later escapes get doubled
_ESCAPES = (
    ('\\', '\\\\'),
    ('"', '\\"'),
    ('\n', '\\n'),
    ('\r', '\\r'),
    ('\t', '\\t'),
)


def sanitize_string(value: Any) -> str:
    """Escape a value for embedding inside a quoted GraphQL string.

    Args:
        value: Any value; None becomes the empty string

    Returns:
        The value's string form with backslash, double quote, newline,
        carriage return and tab escaped

    Examples:
        >>> sanitize_string('say "hi"')
        'say \\\\"hi\\\\"'
        >>> sanitize_string(None)
        ''
    """
    if value is None:
        return ''
    text = str(value)
    for raw, escaped in _ESCAPES:
        text = text.replace(raw, escaped)
    return text


def validate_id(value: Any) -> int:
    """Parse a value as a positive integer identifier.

    Parsing is permissive: a leading integer prefix is accepted and any
    trailing characters are ignored, so ``"12abc"`` yields ``12``.

    Args:
        value: Integer, numeric string or anything with a numeric prefix

    Returns:
        The parsed identifier (always >= 1)

    Raises:
        InvalidIdentifierError: If no integer prefix exists or it is < 1
    """
    match = _INTEGER_PREFIX.match(str(value))
    if not match:
        raise InvalidIdentifierError(value)
    number = int(match.group(1))
    if number < 1:
        raise InvalidIdentifierError(value)
    return number


def validate_path(path: Any) -> str:
    """Normalize and validate a page path.

    Args:
        path: Page path such as "/docs/api" or "docs/api"

    Returns:
        The path with one leading slash removed

    Raises:
        MissingPathError: If path is empty or not a string
        InvalidPathCharactersError: If path contains < > : " | ? *
    """
    if not path or not isinstance(path, str):
        raise MissingPathError()

    clean_path = path[1:] if path.startswith('/') else path

    if _INVALID_PATH_CHARS.search(clean_path):
        raise InvalidPathCharactersError(path)

    return clean_path
