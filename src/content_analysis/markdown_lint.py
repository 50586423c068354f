"""Markdown lint checks for wiki page content.

Line rules:
    no-trailing-spaces  (warning) trailing whitespace
    no-multiple-blanks  (warning) second of two consecutive empty lines
    heading-space       (error)   '#' run followed directly by text
    line-length         (warning) over 120 characters, unless it has a URL
    no-tabs             (warning) tab character
    valid-link          (error)   '[text](' left open at end of line

Document rules:
    first-heading-h1    (warning) first heading is not level 1
    no-empty            (error)   no non-blank line at all
"""

import re
from typing import List

from .models import LintIssue, LintResult, Severity

MAX_LINE_LENGTH = 120

_TRAILING_SPACE = re.compile(r'\s+$')
_HEADING_NO_SPACE = re.compile(r'^#+[^#\s]')
_UNCLOSED_LINK = re.compile(r'\[[^\]]*\]\([^)]*$')
_HEADING = re.compile(r'^#{1,6}\s')
_H1 = re.compile(r'^#\s')


def lint_markdown(content: str) -> LintResult:
    """Run every lint rule over a markdown document.

    Args:
        content: Markdown text

    Returns:
        LintResult; ``valid`` is False when any error was found
    """
    issues: List[LintIssue] = []
    lines = content.split('\n')

    for idx, line in enumerate(lines):
        line_num = idx + 1

        if _TRAILING_SPACE.search(line):
            issues.append(LintIssue(
                line_num, Severity.WARNING, 'no-trailing-spaces', 'Trailing whitespace'
            ))

        if idx > 0 and line == '' and lines[idx - 1] == '':
            issues.append(LintIssue(
                line_num, Severity.WARNING, 'no-multiple-blanks', 'Multiple consecutive blank lines'
            ))

        if _HEADING_NO_SPACE.match(line):
            issues.append(LintIssue(
                line_num, Severity.ERROR, 'heading-space', 'Missing space after heading markers'
            ))

        if len(line) > MAX_LINE_LENGTH and 'http' not in line:
            issues.append(LintIssue(
                line_num, Severity.WARNING, 'line-length',
                f'Line too long ({len(line)} > {MAX_LINE_LENGTH} characters)'
            ))

        if '\t' in line:
            issues.append(LintIssue(
                line_num, Severity.WARNING, 'no-tabs', 'Tab character found (prefer spaces)'
            ))

        if _UNCLOSED_LINK.search(line):
            issues.append(LintIssue(
                line_num, Severity.ERROR, 'valid-link', 'Unclosed link syntax'
            ))

    headings = [line for line in lines if _HEADING.match(line)]
    if headings and not _H1.match(headings[0]):
        issues.append(LintIssue(
            1, Severity.WARNING, 'first-heading-h1', 'First heading should be H1'
        ))

    if not any(line.strip() for line in lines):
        issues.append(LintIssue(1, Severity.ERROR, 'no-empty', 'Document is empty'))

    return LintResult(all_issues=issues)


def format_lint_results(result: LintResult) -> str:
    """Render a LintResult as plain text grouped by severity."""
    lines: List[str] = []

    if result.errors:
        lines.append('Errors:')
        for issue in result.errors:
            lines.append(f'  Line {issue.line}: {issue.message} ({issue.rule})')

    if result.warnings:
        lines.append('Warnings:')
        for issue in result.warnings:
            lines.append(f'  Line {issue.line}: {issue.message} ({issue.rule})')

    if result.valid and not result.warnings:
        lines.append('No issues found')

    return '\n'.join(lines)
