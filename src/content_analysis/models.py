"""Data models for content analysis results."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List


class ChangeType(Enum):
    """Kind of a line in a positional diff."""

    UNCHANGED = "unchanged"
    ADD = "add"
    REMOVE = "remove"


class Severity(Enum):
    """Severity of a lint issue."""

    ERROR = "error"
    WARNING = "warning"


class LinkKind(Enum):
    """Syntax a link was written in."""

    MARKDOWN = "markdown"
    WIKI = "wiki"


@dataclass
class DiffEntry:
    """One line of a positional diff.

    Attributes:
        change_type: unchanged, add or remove
        line_num: 1-based line position the entry refers to
        content: Line text
    """

    change_type: ChangeType
    line_num: int
    content: str


@dataclass
class LintIssue:
    """A single markdown lint finding.

    Attributes:
        line: 1-based line number
        severity: error or warning
        rule: Rule identifier (e.g. "heading-space")
        message: Human readable description
    """

    line: int
    severity: Severity
    rule: str
    message: str


@dataclass
class LintResult:
    """All lint findings for one document, in detection order."""

    all_issues: List[LintIssue] = field(default_factory=list)

    @property
    def errors(self) -> List[LintIssue]:
        return [i for i in self.all_issues if i.severity == Severity.ERROR]

    @property
    def warnings(self) -> List[LintIssue]:
        return [i for i in self.all_issues if i.severity == Severity.WARNING]

    @property
    def valid(self) -> bool:
        """True when no error-severity issue was found."""
        return not self.errors


@dataclass
class Link:
    """A link found in page content.

    Attributes:
        text: Link text (the target for wiki links without a label)
        url: Link target
        kind: markdown for [text](url), wiki for [[target|text]]
    """

    text: str
    url: str
    kind: LinkKind


@dataclass
class Heading:
    """A markdown heading with its anchor slug."""

    level: int
    text: str
    slug: str


@dataclass
class TreeNode:
    """Path trie node used while rendering a tree.

    Attributes:
        children: Sub-nodes keyed by path segment, in insertion order
        items: Entities whose path ends at this node
    """

    children: Dict[str, "TreeNode"] = field(default_factory=dict)
    items: List[Any] = field(default_factory=list)
