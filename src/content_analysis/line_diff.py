"""Positional line diff and its text rendering.

diff_lines compares two texts line by line at the same index. It is not an
LCS alignment: inserting a single line near the top reports every later
line as changed. That keeps the output predictable for short page edits,
but callers should not expect minimal diffs.
"""

from typing import List

from .models import ChangeType, DiffEntry


def diff_lines(before: str, after: str) -> List[DiffEntry]:
    """Compare two texts line by line.

    For each index present in either text:
    - only ``after`` has a line: ADD
    - only ``before`` has a line: REMOVE
    - both differ: REMOVE followed by ADD, both on the same line number
    - both equal: UNCHANGED

    Args:
        before: Original text
        after: New text

    Returns:
        Diff entries in line order

    Example:
        >>> [e.change_type.value for e in diff_lines("old", "new")]
        ['remove', 'add']
    """
    lines_before = before.split('\n')
    lines_after = after.split('\n')
    entries: List[DiffEntry] = []

    for i in range(max(len(lines_before), len(lines_after))):
        line_num = i + 1
        old = lines_before[i] if i < len(lines_before) else None
        new = lines_after[i] if i < len(lines_after) else None

        if old is None:
            entries.append(DiffEntry(ChangeType.ADD, line_num, new))
        elif new is None:
            entries.append(DiffEntry(ChangeType.REMOVE, line_num, old))
        elif old != new:
            entries.append(DiffEntry(ChangeType.REMOVE, line_num, old))
            entries.append(DiffEntry(ChangeType.ADD, line_num, new))
        else:
            entries.append(DiffEntry(ChangeType.UNCHANGED, line_num, old))

    return entries


def format_diff(entries: List[DiffEntry], context_lines: int = 3) -> str:
    """Render diff entries as text with surrounding context.

    Unchanged entries are kept only when a changed entry lies within
    ``context_lines`` positions of them in the entry list. A ``...`` line
    marks each gap in the printed line numbers.

    Each printed line looks like ``+    2 | text``, with ``+``, ``-`` or a
    space as the marker.

    Args:
        entries: Output of diff_lines
        context_lines: Unchanged entries kept on each side of a change

    Returns:
        Newline-joined diff text ('' when nothing changed)
    """
    lines: List[str] = []
    last_printed = -context_lines - 1

    for i, entry in enumerate(entries):
        if entry.change_type == ChangeType.UNCHANGED:
            window = entries[max(0, i - context_lines):i + context_lines + 1]
            if all(e.change_type == ChangeType.UNCHANGED for e in window):
                continue

        if entry.line_num > last_printed + 1 and last_printed > 0:
            lines.append('...')

        marker = {
            ChangeType.ADD: '+',
            ChangeType.REMOVE: '-',
        }.get(entry.change_type, ' ')
        lines.append(f"{marker} {entry.line_num:>4} | {entry.content}")

        last_printed = entry.line_num

    return '\n'.join(lines)
