"""Data models for Wiki.js resources.

Each model decodes one response shape from the GraphQL API. Decoding is
explicit: every field reads a named key and falls back to a named default
when the key is absent or null, so a partial response never produces a
half-initialized object.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


def _get(data: Optional[Dict[str, Any]], key: str, default: Any) -> Any:
    """Return data[key], or default when the key is missing or null."""
    if not data:
        return default
    value = data.get(key)
    return default if value is None else value


@dataclass
class OperationResult:
    """The ``responseResult`` block returned by every mutation.

    Attributes:
        succeeded: Whether the server applied the mutation
        error_code: Server error code (None on success)
        message: Human readable server message
    """

    succeeded: bool = False
    error_code: Optional[Any] = None
    message: Optional[str] = None

    @classmethod
    def from_api(cls, data: Optional[Dict[str, Any]]) -> "OperationResult":
        return cls(
            succeeded=bool(_get(data, 'succeeded', False)),
            error_code=_get(data, 'errorCode', None),
            message=_get(data, 'message', None),
        )


@dataclass
class PageSummary:
    """Partial page projection returned by list-style queries.

    Attributes:
        id: Page ID
        path: Page path without leading slash
        title: Page title
        description: Short description
        locale: Locale code (e.g. "en")
        created_at: ISO 8601 creation timestamp
        updated_at: ISO 8601 last update timestamp
        tags: Tag names
        is_published: Whether the page is published
        author_name: Author, when the query projection includes it
    """

    id: int
    path: str
    title: str = ''
    description: str = ''
    locale: str = ''
    created_at: str = ''
    updated_at: str = ''
    tags: List[str] = field(default_factory=list)
    is_published: bool = False
    author_name: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "PageSummary":
        return cls(
            id=_get(data, 'id', 0),
            path=_get(data, 'path', ''),
            title=_get(data, 'title', ''),
            description=_get(data, 'description', ''),
            locale=_get(data, 'locale', ''),
            created_at=_get(data, 'createdAt', ''),
            updated_at=_get(data, 'updatedAt', ''),
            tags=list(_get(data, 'tags', [])),
            is_published=bool(_get(data, 'isPublished', False)),
            author_name=_get(data, 'authorName', None),
        )


@dataclass
class Page:
    """A complete page as returned by single-page lookups.

    Attributes:
        id: Page ID
        path: Page path without leading slash
        title: Page title
        description: Short description
        content: Raw source (markdown for the markdown editor)
        rendered_content: Server-rendered HTML
        locale: Locale code
        created_at: ISO 8601 creation timestamp
        updated_at: ISO 8601 last update timestamp
        author_name: Display name of the last author
        tags: Tag names (flattened from the tag relation)
        is_published: Whether the page is published
        is_private: Whether the page is private
        children: Descendant page stubs, only set when requested
    """

    id: int
    path: str
    title: str = ''
    description: str = ''
    content: str = ''
    rendered_content: str = ''
    locale: str = ''
    created_at: str = ''
    updated_at: str = ''
    author_name: str = ''
    tags: List[str] = field(default_factory=list)
    is_published: bool = False
    is_private: bool = False
    children: Optional[List[PageSummary]] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Page":
        # The tag relation comes back as [{"tag": "name"}, ...]
        tags = [
            entry.get('tag') if isinstance(entry, dict) else entry
            for entry in _get(data, 'tags', [])
        ]
        return cls(
            id=_get(data, 'id', 0),
            path=_get(data, 'path', ''),
            title=_get(data, 'title', ''),
            description=_get(data, 'description', ''),
            content=_get(data, 'content', ''),
            rendered_content=_get(data, 'render', ''),
            locale=_get(data, 'locale', ''),
            created_at=_get(data, 'createdAt', ''),
            updated_at=_get(data, 'updatedAt', ''),
            author_name=_get(data, 'authorName', ''),
            tags=[tag for tag in tags if tag is not None],
            is_published=bool(_get(data, 'isPublished', False)),
            is_private=bool(_get(data, 'isPrivate', False)),
        )


@dataclass
class SearchResult:
    """A single search hit."""

    id: str
    path: str
    title: str = ''
    description: str = ''
    locale: str = ''

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "SearchResult":
        return cls(
            id=str(_get(data, 'id', '')),
            path=_get(data, 'path', ''),
            title=_get(data, 'title', ''),
            description=_get(data, 'description', ''),
            locale=_get(data, 'locale', ''),
        )


@dataclass
class SearchResults:
    """Search response: hits, total hit count and query suggestions."""

    results: List[SearchResult] = field(default_factory=list)
    total_hits: int = 0
    suggestions: List[str] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: Optional[Dict[str, Any]], limit: Optional[int] = None) -> "SearchResults":
        results = [SearchResult.from_api(item) for item in _get(data, 'results', [])]
        if limit is not None:
            results = results[:limit]
        return cls(
            results=results,
            total_hits=int(_get(data, 'totalHits', 0)),
            suggestions=list(_get(data, 'suggestions', [])),
        )


@dataclass
class Tag:
    """A tag known to the wiki."""

    id: int
    tag: str
    title: str = ''
    created_at: str = ''
    updated_at: str = ''

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Tag":
        return cls(
            id=_get(data, 'id', 0),
            tag=_get(data, 'tag', ''),
            title=_get(data, 'title', ''),
            created_at=_get(data, 'createdAt', ''),
            updated_at=_get(data, 'updatedAt', ''),
        )


@dataclass
class Asset:
    """An uploaded media asset."""

    id: int
    filename: str
    ext: str = ''
    kind: str = ''
    mime: str = ''
    file_size: int = 0
    created_at: str = ''
    updated_at: str = ''

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Asset":
        return cls(
            id=_get(data, 'id', 0),
            filename=_get(data, 'filename', ''),
            ext=_get(data, 'ext', ''),
            kind=_get(data, 'kind', ''),
            mime=_get(data, 'mime', ''),
            file_size=int(_get(data, 'fileSize', 0)),
            created_at=_get(data, 'createdAt', ''),
            updated_at=_get(data, 'updatedAt', ''),
        )


@dataclass
class SystemInfo:
    """Server information used as a health check."""

    config_file: str = ''
    current_version: str = ''
    latest_version: str = ''
    operating_system: str = ''
    hostname: str = ''
    platform: str = ''

    @classmethod
    def from_api(cls, data: Optional[Dict[str, Any]]) -> "SystemInfo":
        return cls(
            config_file=_get(data, 'configFile', ''),
            current_version=_get(data, 'currentVersion', ''),
            latest_version=_get(data, 'latestVersion', ''),
            operating_system=_get(data, 'operatingSystem', ''),
            hostname=_get(data, 'hostname', ''),
            platform=_get(data, 'platform', ''),
        )


@dataclass
class PageVersion:
    """One entry of a page's history."""

    version_id: int
    version_date: str = ''
    author_name: str = ''
    action_type: str = ''

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "PageVersion":
        return cls(
            version_id=_get(data, 'versionId', 0),
            version_date=_get(data, 'versionDate', ''),
            author_name=_get(data, 'authorName', ''),
            action_type=_get(data, 'actionType', ''),
        )


@dataclass
class WikiStats:
    """Aggregate page counts computed client-side.

    Attributes:
        total_pages: Number of pages
        published_pages: Pages with is_published set
        draft_pages: Pages without is_published
        locales: Page count per locale
        top_tags: Page count per tag
    """

    total_pages: int = 0
    published_pages: int = 0
    draft_pages: int = 0
    locales: Dict[str, int] = field(default_factory=dict)
    top_tags: Dict[str, int] = field(default_factory=dict)
