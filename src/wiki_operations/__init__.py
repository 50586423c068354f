"""Resource operations for Wiki.js.

Key classes:
    PageOperations: Pages, tags, search and version history
    AssetOperations: Media asset listing, upload and deletion
    SystemOperations: Health check and page statistics
"""

from .models import (
    Asset,
    OperationResult,
    Page,
    PageSummary,
    PageVersion,
    SearchResult,
    SearchResults,
    SystemInfo,
    Tag,
    WikiStats,
)
from .page_operations import PageOperations
from .asset_operations import AssetOperations
from .system_operations import SystemOperations

__all__ = [
    # Operations
    "PageOperations",
    "AssetOperations",
    "SystemOperations",
    # Data models
    "Asset",
    "OperationResult",
    "Page",
    "PageSummary",
    "PageVersion",
    "SearchResult",
    "SearchResults",
    "SystemInfo",
    "Tag",
    "WikiStats",
]
