"""Content analysis helpers for wiki pages.

Pure functions over in-memory strings: positional line diff, markdown
lint, link and heading extraction, word-set similarity and tree rendering.
"""

from .models import (
    ChangeType,
    DiffEntry,
    Heading,
    Link,
    LinkKind,
    LintIssue,
    LintResult,
    Severity,
    TreeNode,
)
from .line_diff import diff_lines, format_diff
from .markdown_lint import lint_markdown, format_lint_results
from .links import extract_links, is_internal_link
from .headings import extract_headings, build_toc, slugify
from .similarity import compute_similarity, get_words, rank_similar
from .tree import build_tree, render_tree

__all__ = [
    # Functions
    "diff_lines",
    "format_diff",
    "lint_markdown",
    "format_lint_results",
    "extract_links",
    "is_internal_link",
    "extract_headings",
    "build_toc",
    "slugify",
    "compute_similarity",
    "get_words",
    "rank_similar",
    "build_tree",
    "render_tree",
    # Data models
    "ChangeType",
    "DiffEntry",
    "Heading",
    "Link",
    "LinkKind",
    "LintIssue",
    "LintResult",
    "Severity",
    "TreeNode",
]
