"""Unit tests for cli.formatting module."""

import pytest

from src.cli.formatting import (
    format_bytes,
    format_date,
    format_json,
    parse_id_or_path,
    parse_tags,
    top_counts,
    truncate,
)
from src.content_analysis.models import LintIssue, Severity


class TestTruncate:
    """Test cases for truncate."""

    def test_short_string_unchanged(self):
        """Strings under the limit are returned as-is."""
        assert truncate('short', 10) == 'short'

    def test_long_string_truncated(self):
        """Long strings end with an ellipsis within the limit."""
        assert truncate('this is a very long string', 10) == 'this is...'

    def test_default_limit(self):
        """The default limit is 50 characters."""
        result = truncate('a' * 60)
        assert len(result) == 50
        assert result.endswith('...')

    @pytest.mark.parametrize("value", [None, ''])
    def test_empty_values(self, value):
        """None and empty string give the empty string."""
        assert truncate(value) == ''

    def test_non_string(self):
        """Numbers are converted to strings."""
        assert truncate(12345, 10) == '12345'


class TestFormatBytes:
    """Test cases for format_bytes."""

    @pytest.mark.parametrize("size, expected", [
        (0, '0 B'),
        (500, '500 B'),
        (1024, '1 KB'),
        (1536, '1.5 KB'),
        (1048576, '1 MB'),
        (1572864, '1.5 MB'),
        (1073741824, '1 GB'),
    ])
    def test_units(self, size, expected):
        """Sizes use the largest fitting unit with up to two decimals."""
        assert format_bytes(size) == expected


class TestFormatDate:
    """Test cases for format_date."""

    def test_empty(self):
        """Empty input gives an empty string."""
        assert format_date('') == ''
        assert format_date(None) == ''

    def test_naive_timestamp(self):
        """Timestamps without zone are formatted day first."""
        assert format_date('2024-03-05T14:07:00') == '05/03/2024 14:07'

    def test_unparseable_returned_as_is(self):
        """Invalid input is shown unchanged."""
        assert format_date('yesterday') == 'yesterday'


class TestParseIdOrPath:
    """Test cases for parse_id_or_path."""

    def test_integer(self):
        """Canonical integers become ints."""
        assert parse_id_or_path('123') == 123

    @pytest.mark.parametrize("value", ['/some/path', '123abc', '007', 'docs'])
    def test_paths(self, value):
        """Anything else stays a string."""
        assert parse_id_or_path(value) == value


class TestParseTags:
    """Test cases for parse_tags."""

    def test_split_and_trim(self):
        """Tags are split on commas and trimmed."""
        assert parse_tags('a, b ,c') == ['a', 'b', 'c']

    def test_empty_entries_dropped(self):
        """Empty entries are removed."""
        assert parse_tags('a,,b, ') == ['a', 'b']

    @pytest.mark.parametrize("value", [None, ''])
    def test_empty(self, value):
        """No input gives no tags."""
        assert parse_tags(value) == []


class TestFormatJson:
    """Test cases for format_json."""

    def test_object(self):
        """Objects are indented with two spaces."""
        assert format_json({'key': 'value'}) == '{\n  "key": "value"\n}'

    def test_array(self):
        """Arrays are indented too."""
        assert format_json([1, 2, 3]) == '[\n  1,\n  2,\n  3\n]'

    def test_none(self):
        """None renders as null."""
        assert format_json(None) == 'null'

    def test_dataclass_and_enum(self):
        """Dataclasses become objects and enums their values."""
        text = format_json(LintIssue(1, Severity.ERROR, 'no-empty', 'Document is empty'))
        assert '"severity": "error"' in text
        assert '"line": 1' in text


class TestTopCounts:
    """Test cases for top_counts."""

    def test_sorted_by_count_then_key(self):
        """Highest counts first, ties alphabetical, limited."""
        assert top_counts({'b': 2, 'a': 2, 'c': 5, 'd': 1}, limit=3) == [('c', 5), ('a', 2), ('b', 2)]
