"""Link extraction from markdown and wiki-style content."""

import re
from typing import List

from .models import Link, LinkKind

_MARKDOWN_LINK = re.compile(r'\[([^\]]*)\]\(([^)]+)\)')
# [[target]] or [[target|text]]
_WIKI_LINK = re.compile(r'\[\[([^\]|]+)(?:\|([^\]]+))?\]\]')
_EXTERNAL = re.compile(r'^(https?:|mailto:|tel:|ftp:|#)', re.IGNORECASE)


def extract_links(text: str) -> List[Link]:
    """Find every link in a document.

    Markdown links come first in document order, then wiki links in
    document order.

    Example:
        >>> extract_links("[[a|B]]")
        [Link(text='B', url='a', kind=<LinkKind.WIKI: 'wiki'>)]
    """
    links = [
        Link(text=m.group(1), url=m.group(2), kind=LinkKind.MARKDOWN)
        for m in _MARKDOWN_LINK.finditer(text)
    ]
    links.extend(
        Link(text=m.group(2) or m.group(1), url=m.group(1), kind=LinkKind.WIKI)
        for m in _WIKI_LINK.finditer(text)
    )
    return links


def is_internal_link(url: str) -> bool:
    """True unless the URL has an external scheme or is an in-page anchor."""
    return not _EXTERNAL.match(url)
