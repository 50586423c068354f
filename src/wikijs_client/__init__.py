"""Wiki.js client library.

This package provides the transport layer for the Wiki.js GraphQL API:
configuration loading, input validation and escaping, and a lazily built
HTTP client that raises typed errors.
"""

from .errors import (
    WikiError,
    ValidationError,
    InvalidIdentifierError,
    MissingPathError,
    InvalidPathCharactersError,
    WikiAPIError,
    GraphQLError,
    TransportError,
    MutationFailedError,
    PageNotFoundError,
    ConfigError,
    ConfigNotFoundError,
)

__all__ = [
    "WikiError",
    "ValidationError",
    "InvalidIdentifierError",
    "MissingPathError",
    "InvalidPathCharactersError",
    "WikiAPIError",
    "GraphQLError",
    "TransportError",
    "MutationFailedError",
    "PageNotFoundError",
    "ConfigError",
    "ConfigNotFoundError",
]
