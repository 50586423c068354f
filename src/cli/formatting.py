"""Value formatting and argument parsing helpers for CLI output."""

import json
from dataclasses import asdict, is_dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union


def truncate(value: Any, max_length: int = 50) -> str:
    """Shorten text to max_length characters, ending with '...'.

    Example:
        >>> truncate('this is a very long string', 10)
        'this is...'
    """
    if value is None or value == '':
        return ''
    text = str(value)
    if len(text) <= max_length:
        return text
    return text[:max_length - 3] + '...'


def format_bytes(size: int) -> str:
    """Human readable byte count: '0 B', '1.5 KB', '1 GB'."""
    if not size:
        return '0 B'
    units = ['B', 'KB', 'MB', 'GB']
    exponent = 0
    while size >= 1024 ** (exponent + 1) and exponent < len(units) - 1:
        exponent += 1
    value = round(size / (1024 ** exponent), 2)
    # 1.0 -> '1', 1.5 -> '1.5'
    return f"{value:g} {units[exponent]}"


def format_date(value: Optional[str]) -> str:
    """Format an ISO 8601 timestamp as 'DD/MM/YYYY HH:MM' in local time."""
    if not value:
        return ''
    try:
        parsed = datetime.fromisoformat(value.replace('Z', '+00:00'))
    except ValueError:
        return value
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone()
    return parsed.strftime('%d/%m/%Y %H:%M')


def parse_id_or_path(value: str) -> Union[int, str]:
    """Interpret CLI input as a page ID when it is a canonical integer.

    '123' is an ID; '123abc', '/some/path' and '007' are paths.
    """
    try:
        number = int(value)
    except ValueError:
        return value
    return number if str(number) == value else value


def parse_tags(value: Optional[str]) -> List[str]:
    """Split a comma-separated tag list, trimming and dropping empties."""
    if not value:
        return []
    return [tag.strip() for tag in value.split(',') if tag.strip()]


def to_plain(value: Any) -> Any:
    """Convert dataclasses and enums into JSON-serializable structures."""
    if is_dataclass(value) and not isinstance(value, type):
        return to_plain(asdict(value))
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {str(k): to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(v) for v in value]
    return value


def format_json(data: Any) -> str:
    """Pretty-print data as JSON with two-space indentation."""
    return json.dumps(to_plain(data), indent=2, ensure_ascii=False)


def top_counts(counts: Dict[str, int], limit: int = 10) -> List[tuple]:
    """Highest counts first, ties broken by key."""
    return sorted(counts.items(), key=lambda kv: (-kv[1], str(kv[0])))[:limit]
