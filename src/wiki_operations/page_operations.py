"""Page, tag and version operations for Wiki.js.

This module provides the PageOperations class, which composes validated
and escaped inputs into GraphQL operations, executes them through the
GraphQLClient and decodes the responses into typed models. Mutations
check the server's responseResult and raise MutationFailedError when the
server reports that nothing was applied.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from ..wikijs_client.api_wrapper import GraphQLClient
from ..wikijs_client.errors import PageNotFoundError
from ..wikijs_client.validation import validate_id, validate_path
from . import queries
from .models import (
    OperationResult,
    Page,
    PageSummary,
    PageVersion,
    SearchResults,
    Tag,
)
from .responses import check_result, section

logger = logging.getLogger(__name__)


class PageOperations:
    """High-level page operations against a Wiki.js instance.

    Usage:
        ops = PageOperations(GraphQLClient(ConfigProvider()))

        pages = ops.list_pages(tag="howto", limit=10)
        page = ops.get_page("docs/install", with_children=True)
        created = ops.create_page("docs/new", "New Page", content="# Hi")
        ops.update_page(created.id, title="Renamed")

    No operation retries; every error from the client propagates unchanged.
    """

    def __init__(self, api: Optional[GraphQLClient] = None):
        """Initialize PageOperations with an optional client.

        Args:
            api: GraphQLClient instance. If None, creates one with the
                 default configuration provider.
        """
        self.api = api or GraphQLClient()

    def _fetch_page_list(self, fields: str = queries.PAGE_LIST_FIELDS) -> List[Dict[str, Any]]:
        data = self.api.execute(queries.list_pages_query(fields))
        return section(data, 'pages', 'list') or []

    def list_pages(
        self,
        tag: Optional[str] = None,
        author: Optional[str] = None,
        locale: Optional[str] = None,
        limit: int = 50,
    ) -> List[PageSummary]:
        """List pages, filtered client-side.

        The API offers no server-side filters for listing, so the full list
        is fetched and filtered here by exact locale, then tag membership,
        then case-insensitive author substring, and finally truncated.

        The list projection carries no author, so an author filter only
        matches entries whose ``author_name`` the server did provide.

        Args:
            tag: Keep pages carrying this tag
            author: Keep pages whose author contains this text
            locale: Keep pages in this locale
            limit: Maximum number of pages returned

        Returns:
            Ordered list of PageSummary
        """
        pages = [PageSummary.from_api(item) for item in self._fetch_page_list()]

        if locale:
            pages = [p for p in pages if p.locale == locale]
        if tag:
            pages = [p for p in pages if tag in p.tags]
        if author:
            needle = author.lower()
            pages = [
                p for p in pages
                if p.author_name and needle in p.author_name.lower()
            ]

        return pages[:limit]

    def search_pages(self, query: str, limit: int = 50) -> SearchResults:
        """Full-text search.

        Args:
            query: Search text (escaped before interpolation)
            limit: Maximum number of results kept

        Returns:
            SearchResults with results truncated to limit
        """
        data = self.api.execute(queries.search_pages_query(query))
        return SearchResults.from_api(section(data, 'pages', 'search'), limit=limit)

    def get_page(
        self,
        id_or_path: Union[int, str],
        with_children: bool = False,
        locale: Optional[str] = None,
    ) -> Page:
        """Fetch a single page by ID or by path.

        Integers are looked up by ID; strings are treated as paths in the
        given locale (default: the configured default locale).

        Args:
            id_or_path: Page ID or page path
            with_children: Also fetch every descendant page (second request)
            locale: Locale for path lookups

        Returns:
            The Page, with ``children`` set when requested

        Raises:
            InvalidIdentifierError: If the ID is not a positive integer
            MissingPathError, InvalidPathCharactersError: For invalid paths
            PageNotFoundError: If the server returns no page
        """
        if isinstance(id_or_path, int) and not isinstance(id_or_path, bool):
            page_id = validate_id(id_or_path)
            data = self.api.execute(queries.single_page_query(page_id))
            raw = section(data, 'pages', 'single')
        else:
            path = validate_path(id_or_path)
            lookup_locale = locale or self.api.config.default_locale
            data = self.api.execute(queries.page_by_path_query(path, lookup_locale))
            raw = section(data, 'pages', 'singleByPath')

        if not raw:
            raise PageNotFoundError(id_or_path)

        page = Page.from_api(raw)

        if with_children:
            page.children = self._find_descendants(page)

        return page

    def _find_descendants(self, page: Page) -> List[PageSummary]:
        fields = """
          id
          path
          title"""
        prefix = page.path + '/'
        descendants = []
        for item in self._fetch_page_list(fields):
            path = item.get('path') or ''
            if len(path) > len(prefix) and path.startswith(prefix) and item.get('id') != page.id:
                descendants.append(PageSummary.from_api(item))
        return descendants

    def create_page(
        self,
        path: str,
        title: str,
        content: str = '',
        description: str = '',
        tags: Optional[List[str]] = None,
        locale: Optional[str] = None,
        editor: Optional[str] = None,
        is_published: bool = True,
        is_private: bool = False,
    ) -> PageSummary:
        """Create a page.

        Returns:
            PageSummary with id, path and title of the created page

        Raises:
            MissingPathError, InvalidPathCharactersError: For invalid paths
            MutationFailedError: If the server did not create the page
        """
        clean_path = validate_path(path)
        config = self.api.config

        mutation = queries.create_page_mutation(
            path=clean_path,
            title=title,
            content=content,
            description=description,
            tags=list(tags or []),
            locale=locale or config.default_locale,
            editor=editor or config.default_editor,
            is_published=is_published,
            is_private=is_private,
        )
        data = self.api.execute(mutation)
        result = section(data, 'pages', 'create')
        check_result(result, 'create_page', 'Failed to create page')

        logger.info(f"Created page {clean_path}")
        return PageSummary.from_api(section(result, 'page') or {})

    def update_page(
        self,
        page_id: Any,
        content: Optional[str] = None,
        title: Optional[str] = None,
        description: Optional[str] = None,
        tags: Optional[List[str]] = None,
        is_published: Optional[bool] = None,
    ) -> PageSummary:
        """Update a page, keeping current values for omitted fields.

        The update mutation needs the complete field set, so the current
        page is fetched first and merged with the given values.

        Returns:
            PageSummary with id, path, title and updated_at

        Raises:
            InvalidIdentifierError: If page_id is not a positive integer
            PageNotFoundError: If the page does not exist
            MutationFailedError: If the server did not apply the update
        """
        valid_id = validate_id(page_id)
        current = self.get_page(valid_id)

        mutation = queries.update_page_mutation(
            page_id=valid_id,
            content=content if content is not None else current.content,
            description=description if description is not None else (current.description or ''),
            is_published=is_published if is_published is not None else current.is_published,
            tags=list(tags) if tags is not None else list(current.tags or []),
            title=title if title is not None else current.title,
        )
        data = self.api.execute(mutation)
        result = section(data, 'pages', 'update')
        check_result(result, 'update_page', 'Failed to update page')

        logger.info(f"Updated page {valid_id}")
        return PageSummary.from_api(section(result, 'page') or {})

    def move_page(self, page_id: Any, new_path: str, locale: Optional[str] = None) -> OperationResult:
        """Move a page to a new path (and optionally a new locale).

        Raises:
            MutationFailedError: If the server did not move the page
        """
        valid_id = validate_id(page_id)
        clean_path = validate_path(new_path)
        destination_locale = locale or self.api.config.default_locale

        data = self.api.execute(
            queries.move_page_mutation(valid_id, clean_path, destination_locale)
        )
        outcome = check_result(section(data, 'pages', 'move'), 'move_page', 'Failed to move page')
        logger.info(f"Moved page {valid_id} to {clean_path}")
        return outcome

    def delete_page(self, page_id: Any) -> OperationResult:
        valid_id = validate_id(page_id)
        data = self.api.execute(queries.delete_page_mutation(valid_id))
        outcome = check_result(section(data, 'pages', 'delete'), 'delete_page', 'Failed to delete page')
        logger.info(f"Deleted page {valid_id}")
        return outcome

    def list_tags(self) -> List[Tag]:
        data = self.api.execute(queries.list_tags_query())
        return [Tag.from_api(item) for item in section(data, 'pages', 'tags') or []]

    def get_page_versions(self, page_id: Any) -> List[PageVersion]:
        """Return the history trail of a page, newest first as sent."""
        valid_id = validate_id(page_id)
        data = self.api.execute(queries.page_history_query(valid_id))
        history = section(data, 'pages', 'history')
        if isinstance(history, dict):
            history = history.get('trail')
        return [PageVersion.from_api(item) for item in history or []]

    def revert_page(self, page_id: Any, version_id: Any) -> OperationResult:
        """Restore a page to a previous version.

        Raises:
            InvalidIdentifierError: If either ID is not a positive integer
            MutationFailedError: If the server did not restore the page
        """
        valid_page_id = validate_id(page_id)
        valid_version_id = validate_id(version_id)

        data = self.api.execute(
            queries.restore_page_mutation(valid_page_id, valid_version_id)
        )
        outcome = check_result(section(data, 'pages', 'restore'), 'revert_page', 'Failed to revert page')
        logger.info(f"Reverted page {valid_page_id} to version {valid_version_id}")
        return outcome
