"""Helpers for unwrapping GraphQL response data."""

from typing import Any, Dict, Optional

from ..wikijs_client.errors import MutationFailedError
from .models import OperationResult


def section(data: Optional[Dict[str, Any]], *keys: str) -> Any:
    """Walk named keys of a response, returning None at the first gap.

    Example:
        >>> section({'pages': {'list': []}}, 'pages', 'list')
        []
        >>> section({'pages': None}, 'pages', 'list') is None
        True
    """
    current: Any = data
    for key in keys:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def check_result(result: Optional[Dict[str, Any]], operation: str, fallback: str) -> OperationResult:
    """Enforce the ``succeeded`` contract of a mutation payload.

    Args:
        result: The mutation payload (containing ``responseResult``)
        operation: Operation name stored on the raised error
        fallback: Message used when the server sent none

    Returns:
        The decoded OperationResult when the mutation succeeded

    Raises:
        MutationFailedError: If responseResult is absent or not succeeded
    """
    outcome = OperationResult.from_api(section(result, 'responseResult'))
    if not outcome.succeeded:
        raise MutationFailedError(
            operation,
            outcome.message or fallback,
            error_code=outcome.error_code,
        )
    return outcome
