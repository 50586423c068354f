"""Heading extraction and table-of-contents rendering."""

import re
from typing import List

from .models import Heading

_HEADING = re.compile(r'^(#{1,6})\s+(.+)$', re.MULTILINE)


def slugify(text: str) -> str:
    """Anchor slug: lowercase, drop punctuation, whitespace runs to '-'.

    Only ASCII letters, digits, underscores and hyphens survive, so "Café"
    becomes "caf".
    """
    slug = re.sub(r'[^A-Za-z0-9_\s-]', '', text.lower())
    return re.sub(r'\s+', '-', slug)


def extract_headings(content: str, max_depth: int = 6) -> List[Heading]:
    """Collect ATX headings up to ``max_depth``.

    Example:
        >>> extract_headings("# Hello World!")
        [Heading(level=1, text='Hello World!', slug='hello-world')]
    """
    headings = []
    for match in _HEADING.finditer(content):
        level = len(match.group(1))
        if level <= max_depth:
            text = match.group(2).strip()
            headings.append(Heading(level=level, text=text, slug=slugify(text)))
    return headings


def build_toc(headings: List[Heading]) -> str:
    """Render headings as a nested markdown list of anchor links.

    Indentation is two spaces per level below the shallowest heading.
    """
    if not headings:
        return ''
    base = min(h.level for h in headings)
    return '\n'.join(
        f"{'  ' * (h.level - base)}- [{h.text}](#{h.slug})"
        for h in headings
    )
