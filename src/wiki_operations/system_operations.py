"""System information and statistics for Wiki.js."""

import logging
from typing import Optional

from ..wikijs_client.api_wrapper import GraphQLClient
from . import queries
from .models import SystemInfo, WikiStats
from .responses import section

logger = logging.getLogger(__name__)

STATS_FIELDS = """
          id
          locale
          isPublished
          tags"""


class SystemOperations:
    """Health checks and aggregate statistics."""

    def __init__(self, api: Optional[GraphQLClient] = None):
        self.api = api or GraphQLClient()

    def get_health(self) -> SystemInfo:
        """Return server version and host information."""
        data = self.api.execute(queries.system_info_query())
        return SystemInfo.from_api(section(data, 'system', 'info'))

    def get_stats(self) -> WikiStats:
        """Aggregate page counts from one full page list.

        Published/draft totals, per-locale counts and per-tag counts are
        computed in a single pass over the list.
        """
        data = self.api.execute(queries.list_pages_query(STATS_FIELDS))
        pages = section(data, 'pages', 'list') or []

        stats = WikiStats(total_pages=len(pages))
        for page in pages:
            if page.get('isPublished'):
                stats.published_pages += 1
            else:
                stats.draft_pages += 1

            locale = page.get('locale')
            stats.locales[locale] = stats.locales.get(locale, 0) + 1

            for tag in page.get('tags') or []:
                stats.top_tags[tag] = stats.top_tags.get(tag, 0) + 1

        logger.debug(f"Computed stats over {stats.total_pages} pages")
        return stats
