"""Unit tests for wiki_operations.responses module."""

import pytest

from src.wiki_operations.models import OperationResult
from src.wiki_operations.responses import check_result, section
from src.wikijs_client.errors import MutationFailedError


class TestSection:
    """Test cases for section."""

    def test_walks_nested_keys(self):
        """Each key descends one level."""
        assert section({'pages': {'list': [1, 2]}}, 'pages', 'list') == [1, 2]

    @pytest.mark.parametrize("data", [
        None,
        {},
        {'pages': None},
        {'pages': 'unexpected'},
        {'pages': [{'list': []}]},
    ])
    def test_gaps_and_unexpected_shapes_yield_none(self, data):
        """A missing key or a non-object level returns None instead of raising."""
        assert section(data, 'pages', 'list') is None


class TestCheckResult:
    """Test cases for check_result."""

    def test_succeeded(self):
        """A succeeded payload is decoded and returned."""
        outcome = check_result(
            {'responseResult': {'succeeded': True, 'message': 'Done'}}, 'delete_page', 'failed'
        )
        assert outcome == OperationResult(succeeded=True, message='Done')

    def test_server_message_used(self):
        """A failed payload raises with the server's message and code."""
        with pytest.raises(MutationFailedError) as exc_info:
            check_result(
                {'responseResult': {'succeeded': False, 'errorCode': 6002, 'message': 'Path already exists'}},
                'create_page',
                'Failed to create page',
            )
        assert str(exc_info.value) == 'Path already exists'
        assert exc_info.value.operation == 'create_page'
        assert exc_info.value.error_code == 6002

    def test_missing_result_uses_fallback(self):
        """An absent responseResult counts as failure with the fallback message."""
        with pytest.raises(MutationFailedError) as exc_info:
            check_result(None, 'delete_page', 'Failed to delete page')
        assert str(exc_info.value) == 'Failed to delete page'
