"""Unit tests for main CLI entry point (main.py).

Tests the Typer CLI application using CliRunner with the operation
classes mocked out.
"""

import json
import logging

import pytest
from unittest.mock import MagicMock, patch
from typer.testing import CliRunner

from src.cli.main import app, _configure_logging, CLIContext
from src.cli.models import ExitCode
from src.cli.output import OutputHandler
from src.wiki_operations.models import (
    Asset,
    OperationResult,
    Page,
    PageSummary,
    SearchResult,
    SearchResults,
    SystemInfo,
    WikiStats,
)
from src.wikijs_client.errors import (
    ConfigNotFoundError,
    MutationFailedError,
    PageNotFoundError,
    TransportError,
)

runner = CliRunner()

PAGES = [
    PageSummary(id=1, path='docs', title='Docs', locale='en', is_published=True),
    PageSummary(id=2, path='docs/install', title='Install', locale='en'),
]


@pytest.fixture
def ops():
    """Patch the client and operation classes used by the CLI."""
    with patch('src.cli.main.GraphQLClient') as mock_client, \
            patch('src.cli.main.PageOperations') as mock_pages, \
            patch('src.cli.main.AssetOperations') as mock_assets, \
            patch('src.cli.main.SystemOperations') as mock_system:
        mock_client.return_value.config.url = 'https://wiki.example.com'
        yield MagicMock(
            client=mock_client,
            pages=mock_pages.return_value,
            assets=mock_assets.return_value,
            system=mock_system.return_value,
        )


def make_page(content='# Title\n\nBody', **kwargs):
    values = dict(id=5, path='docs/page', title='Page', content=content, locale='en')
    values.update(kwargs)
    return Page(**values)


class TestConfigureLogging:
    """Test cases for _configure_logging function."""

    def test_verbosity_0_sets_warning_level(self):
        """Verbosity 0 sets logging to WARNING level."""
        with patch('logging.getLogger') as mock_get_logger:
            mock_logger = MagicMock()
            mock_get_logger.return_value = mock_logger

            _configure_logging(0)

            mock_logger.setLevel.assert_called_with(logging.WARNING)

    def test_verbosity_1_sets_info_level(self):
        """Verbosity 1 sets logging to INFO level."""
        with patch('logging.getLogger') as mock_get_logger:
            mock_logger = MagicMock()
            mock_get_logger.return_value = mock_logger

            _configure_logging(1)

            mock_logger.setLevel.assert_called_with(logging.INFO)

    def test_verbosity_2_sets_debug_level(self):
        """Verbosity 2+ sets logging to DEBUG level."""
        with patch('logging.getLogger') as mock_get_logger:
            mock_logger = MagicMock()
            mock_get_logger.return_value = mock_logger

            _configure_logging(3)

            mock_logger.setLevel.assert_called_with(logging.DEBUG)

    def test_logdir_creates_log_file(self, tmp_path):
        """--logdir adds a timestamped log file."""
        _configure_logging(1, str(tmp_path / 'logs'))

        files = list((tmp_path / 'logs').glob('wikijs_*.log'))
        assert len(files) == 1

    def test_handlers_not_stacked(self):
        """Reconfiguring replaces the previous handlers."""
        _configure_logging(0)
        _configure_logging(0)
        assert len(logging.getLogger("src").handlers) == 1


class TestCLIContext:
    """Test cases for CLIContext."""

    def test_client_built_once_on_demand(self):
        """The client is created lazily and reused."""
        with patch('src.cli.main.GraphQLClient') as mock_client, \
                patch('src.cli.main.RateLimiter') as mock_limiter:
            state = CLIContext(OutputHandler(), rate_limit_ms=250)
            mock_client.assert_not_called()

            assert state.client is state.client

            mock_client.assert_called_once()
            mock_limiter.assert_called_once_with(250)


class TestGlobalOptions:
    """Test cases for app-level options."""

    def test_version(self):
        """--version prints the version and exits."""
        result = runner.invoke(app, ['--version'])
        assert result.exit_code == 0
        assert 'wikijs version' in result.stdout

    def test_negative_rate_limit_rejected(self, ops):
        """--rate-limit must be >= 0."""
        result = runner.invoke(app, ['--rate-limit', '-5', 'tags'])
        assert result.exit_code != 0


class TestPageCommands:
    """Test cases for page commands."""

    def test_list(self, ops):
        """list passes filters and prints a table."""
        ops.pages.list_pages.return_value = PAGES

        result = runner.invoke(app, ['list', '--tag', 'guide', '--limit', '5'])

        assert result.exit_code == 0
        assert 'docs/install' in result.stdout
        ops.pages.list_pages.assert_called_once_with(tag='guide', author=None, locale=None, limit=5)

    def test_list_json(self, ops):
        """--json prints the list as JSON."""
        ops.pages.list_pages.return_value = PAGES

        result = runner.invoke(app, ['--json', 'list'])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert [p['id'] for p in data] == [1, 2]

    def test_search(self, ops):
        """search prints results and the hit count."""
        ops.pages.search_pages.return_value = SearchResults(
            results=[SearchResult(id='2', path='docs/install', title='Install')],
            total_hits=1,
            suggestions=['installation'],
        )

        result = runner.invoke(app, ['search', 'install'])

        assert result.exit_code == 0
        assert '1 hit(s)' in result.stdout
        assert 'installation' in result.stdout

    def test_get_by_id(self, ops):
        """Numeric arguments are looked up as IDs."""
        ops.pages.get_page.return_value = make_page()

        result = runner.invoke(app, ['get', '5', '--content'])

        assert result.exit_code == 0
        ops.pages.get_page.assert_called_once_with(5, with_children=False, locale=None)
        assert '# Title' in result.stdout

    def test_get_by_path(self, ops):
        """Other arguments are looked up as paths."""
        ops.pages.get_page.return_value = make_page(children=[PAGES[1]])

        result = runner.invoke(app, ['get', 'docs/page', '--children'])

        assert result.exit_code == 0
        ops.pages.get_page.assert_called_once_with('docs/page', with_children=True, locale=None)
        assert 'Children (1)' in result.stdout

    def test_get_not_found(self, ops):
        """A missing page exits with GENERAL_ERROR."""
        ops.pages.get_page.side_effect = PageNotFoundError(9)

        result = runner.invoke(app, ['get', '9'])

        assert result.exit_code == ExitCode.GENERAL_ERROR
        assert 'Page not found: 9' in result.output

    def test_create_from_file(self, ops, tmp_path):
        """create reads content from --file and parses tags."""
        source = tmp_path / 'page.md'
        source.write_text('# New', encoding='utf-8')
        ops.pages.create_page.return_value = PageSummary(id=42, path='docs/new', title='New')

        result = runner.invoke(app, [
            'create', 'docs/new', 'New', '--file', str(source), '--tags', 'a, b', '--draft',
        ])

        assert result.exit_code == 0
        assert 'Created page 42' in result.stdout
        kwargs = ops.pages.create_page.call_args.kwargs
        assert kwargs['content'] == '# New'
        assert kwargs['tags'] == ['a', 'b']
        assert kwargs['is_published'] is False

    def test_create_failure(self, ops):
        """A failed mutation prints the server message."""
        ops.pages.create_page.side_effect = MutationFailedError('create_page', 'Path already exists')

        result = runner.invoke(app, ['create', 'docs/install', 'Install'])

        assert result.exit_code == ExitCode.GENERAL_ERROR
        assert 'Path already exists' in result.output

    def test_update_passes_only_given_fields(self, ops):
        """Omitted options are passed as None."""
        ops.pages.update_page.return_value = PageSummary(id=5, path='docs/page', title='T')

        result = runner.invoke(app, ['update', '5', '--title', 'T', '--unpublish'])

        assert result.exit_code == 0
        ops.pages.update_page.assert_called_once_with(
            '5', content=None, title='T', description=None, tags=None, is_published=False
        )

    def test_move(self, ops):
        """move calls move_page."""
        ops.pages.move_page.return_value = OperationResult(succeeded=True)

        result = runner.invoke(app, ['move', '5', 'archive/page'])

        assert result.exit_code == 0
        ops.pages.move_page.assert_called_once_with('5', 'archive/page', locale=None)

    def test_delete_requires_confirmation(self, ops):
        """Declining the prompt aborts without deleting."""
        result = runner.invoke(app, ['delete', '5'], input='n\n')

        assert result.exit_code != 0
        ops.pages.delete_page.assert_not_called()

    def test_delete_with_yes(self, ops):
        """--yes skips the prompt."""
        ops.pages.delete_page.return_value = OperationResult(succeeded=True)

        result = runner.invoke(app, ['delete', '5', '--yes'])

        assert result.exit_code == 0
        ops.pages.delete_page.assert_called_once_with('5')

    def test_revert_confirmed(self, ops):
        """Answering yes restores the version."""
        ops.pages.revert_page.return_value = OperationResult(succeeded=True)

        result = runner.invoke(app, ['revert', '5', '3'], input='y\n')

        assert result.exit_code == 0
        ops.pages.revert_page.assert_called_once_with('5', '3')


class TestErrorMapping:
    """Test cases for exit code mapping."""

    def test_config_error(self, ops):
        """Configuration errors exit with CONFIG_ERROR."""
        ops.pages.list_tags.side_effect = ConfigNotFoundError('/home/u/.config/wikijs.json')

        result = runner.invoke(app, ['tags'])

        assert result.exit_code == ExitCode.CONFIG_ERROR
        assert 'Config file not found' in result.output

    def test_transport_error(self, ops):
        """Network errors exit with NETWORK_ERROR."""
        ops.system.get_health.side_effect = TransportError('Connection refused', endpoint='e')

        result = runner.invoke(app, ['health'])

        assert result.exit_code == ExitCode.NETWORK_ERROR

    def test_unexpected_error(self, ops):
        """Other exceptions exit with GENERAL_ERROR."""
        ops.pages.list_tags.side_effect = RuntimeError('boom')

        result = runner.invoke(app, ['tags'])

        assert result.exit_code == ExitCode.GENERAL_ERROR
        assert 'Unexpected error: boom' in result.output


class TestAssetAndSystemCommands:
    """Test cases for asset and system commands."""

    def test_assets(self, ops):
        """assets prints human readable sizes."""
        ops.assets.list_assets.return_value = [Asset(id=1, filename='logo.png', file_size=1536)]

        result = runner.invoke(app, ['assets'])

        assert result.exit_code == 0
        assert '1.5 KB' in result.stdout

    def test_upload(self, ops, tmp_path):
        """upload passes folder and rename through."""
        source = tmp_path / 'logo.png'
        source.write_bytes(b'png')

        result = runner.invoke(app, ['upload', str(source), '--rename', 'brand.png'])

        assert result.exit_code == 0
        ops.assets.upload_asset.assert_called_once_with(str(source), folder='', rename='brand.png')

    def test_delete_asset(self, ops):
        """delete-asset with --yes deletes."""
        ops.assets.delete_asset.return_value = OperationResult(succeeded=True)

        result = runner.invoke(app, ['delete-asset', '3', '-y'])

        assert result.exit_code == 0
        ops.assets.delete_asset.assert_called_once_with('3')

    def test_health(self, ops):
        """health shows the server version."""
        ops.system.get_health.return_value = SystemInfo(current_version='2.5.300', latest_version='2.5.300')

        result = runner.invoke(app, ['health'])

        assert result.exit_code == 0
        assert '2.5.300' in result.stdout

    def test_stats(self, ops):
        """stats shows totals and top tags."""
        ops.system.get_stats.return_value = WikiStats(
            total_pages=3, published_pages=2, draft_pages=1,
            locales={'en': 3}, top_tags={'guide': 2},
        )

        result = runner.invoke(app, ['stats'])

        assert result.exit_code == 0
        assert 'Total pages:     3' in result.stdout
        assert 'guide: 2' in result.stdout


class TestContentCommands:
    """Test cases for content analysis commands."""

    def test_lint_clean_file(self, ops, tmp_path):
        """A clean file exits with SUCCESS."""
        source = tmp_path / 'ok.md'
        source.write_text('# Title\n\nBody\n', encoding='utf-8')

        result = runner.invoke(app, ['lint', str(source)])

        assert result.exit_code == 0
        assert 'No issues found' in result.stdout

    def test_lint_errors_exit_code(self, ops, tmp_path):
        """Lint errors exit with LINT_FAILED."""
        source = tmp_path / 'bad.md'
        source.write_text('#Title\n', encoding='utf-8')

        result = runner.invoke(app, ['lint', str(source)])

        assert result.exit_code == ExitCode.LINT_FAILED
        assert 'heading-space' in result.stdout

    def test_lint_page(self, ops):
        """--page lints a wiki page's content."""
        ops.pages.get_page.return_value = make_page(content='## Only H2')

        result = runner.invoke(app, ['--json', 'lint', '--page', '5'])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data['valid'] is True
        assert data['warnings'][0]['rule'] == 'first-heading-h1'

    def test_lint_missing_file(self, ops, tmp_path):
        """A missing file exits with GENERAL_ERROR."""
        result = runner.invoke(app, ['lint', str(tmp_path / 'absent.md')])
        assert result.exit_code == ExitCode.GENERAL_ERROR

    def test_diff(self, ops, tmp_path):
        """diff compares page content with a local file."""
        ops.pages.get_page.return_value = make_page(content='a\nb')
        local = tmp_path / 'local.md'
        local.write_text('a\nc', encoding='utf-8')

        result = runner.invoke(app, ['diff', '5', str(local)])

        assert result.exit_code == 0
        assert '-    2 | b' in result.stdout
        assert '+    2 | c' in result.stdout

    def test_tree(self, ops):
        """tree renders page paths, plain with --no-color."""
        ops.pages.list_pages.return_value = PAGES

        result = runner.invoke(app, ['--no-color', 'tree'])

        assert result.exit_code == 0
        assert '[D] docs/' in result.stdout
        assert '[P] Install (2)' in result.stdout

    def test_links_internal_only(self, ops):
        """--internal drops external links."""
        ops.pages.get_page.return_value = make_page(
            content='[Home](/home) [Ext](https://example.com) [[guide]]'
        )

        result = runner.invoke(app, ['--json', 'links', '5', '--internal'])

        assert result.exit_code == 0
        assert [link['url'] for link in json.loads(result.stdout)] == ['/home', 'guide']

    def test_toc(self, ops):
        """toc prints a nested heading list."""
        ops.pages.get_page.return_value = make_page(content='# A\n## B')

        result = runner.invoke(app, ['toc', 'docs/page'])

        assert result.exit_code == 0
        assert '- [A](#a)' in result.stdout
        assert '  - [B](#b)' in result.stdout

    def test_similar(self, ops):
        """similar ranks other pages by shared words."""
        reference = make_page(id=1, content='apple banana cherry')
        other = make_page(id=2, path='fruit', title='Fruit', content='apple banana durian')
        unrelated = make_page(id=3, path='cars', title='Cars', content='engine wheels')
        ops.pages.get_page.side_effect = [reference, other, unrelated]
        ops.pages.list_pages.return_value = [
            PageSummary(id=1, path='docs/page'),
            PageSummary(id=2, path='fruit', title='Fruit'),
            PageSummary(id=3, path='cars', title='Cars'),
        ]

        result = runner.invoke(app, ['--json', 'similar', '1'])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert [r['id'] for r in data] == [2]
        assert data[0]['score'] == 0.5
