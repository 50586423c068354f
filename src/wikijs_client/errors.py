"""Typed exception hierarchy for Wiki.js client errors.

This module defines all custom exceptions used by the Wiki.js client library.
All exceptions inherit from WikiError so callers can catch any application
error with a single clause, while the subclasses let them tell input
validation, remote-reported failures and transport failures apart.
"""

from typing import Any, List, Optional


class WikiError(Exception):
    """Base exception for all wikijs-cli errors."""
    pass


class ValidationError(WikiError):
    """Raised when an argument is rejected before any network call."""
    pass


class InvalidIdentifierError(ValidationError):
    """Raised when a value cannot be parsed as a positive integer ID."""

    def __init__(self, value: Any):
        super().__init__(f"Invalid ID: {value}")
        self.value = value


class MissingPathError(ValidationError):
    """Raised when a page path is empty or not a string."""

    def __init__(self):
        super().__init__("Path is required")


class InvalidPathCharactersError(ValidationError):
    """Raised when a page path contains one of < > : \" | ? *."""

    def __init__(self, path: str):
        super().__init__(f"Invalid characters in path: {path}")
        self.path = path


class WikiAPIError(WikiError):
    """Base exception for failures reported by or on the way to the API."""
    pass


class GraphQLError(WikiAPIError):
    """Raised when the response envelope contains one or more errors.

    The message is the '; '-joined text of every reported error, in the
    order the server returned them. The raw entries are kept on ``errors``.
    """

    def __init__(self, errors: List[Any]):
        messages = "; ".join(_error_message(error) for error in errors)
        super().__init__(messages)
        self.errors = list(errors)


class TransportError(WikiAPIError):
    """Raised when the request could not be completed.

    Covers timeouts, refused connections, DNS failures, HTTP error statuses
    without a GraphQL error envelope and undecodable response bodies. The
    originating exception, if any, is available as ``__cause__``.
    """

    def __init__(self, message: str, endpoint: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.endpoint = endpoint
        self.status_code = status_code


class MutationFailedError(WikiAPIError):
    """Raised when a mutation responds with ``succeeded: false``."""

    def __init__(self, operation: str, message: str, error_code: Optional[Any] = None):
        super().__init__(message)
        self.operation = operation
        self.error_code = error_code


class PageNotFoundError(WikiAPIError):
    """Raised when a page lookup returns no page."""

    def __init__(self, id_or_path: Any):
        super().__init__(f"Page not found: {id_or_path}")
        self.id_or_path = id_or_path


class ConfigError(WikiError):
    """Raised when configuration is invalid or incomplete."""

    def __init__(self, message: str):
        super().__init__(message)


class ConfigNotFoundError(ConfigError):
    """Raised when no configuration file exists at the expected location."""

    def __init__(self, config_path: str):
        super().__init__(f"Config file not found: {config_path}")
        self.config_path = config_path


def _error_message(error: Any) -> str:
    if isinstance(error, dict):
        return str(error.get("message", ""))
    return str(error)
