"""Box-drawing tree rendering of path-addressed items.

Items are placed in a trie keyed by '/'-separated path segments. At each
level the items attached to a node are printed before its sub-directories,
in insertion order. Because an item sits at the node of its full path, a
page always appears inside a directory named after its last segment.

    └── [D] docs/
        ├── [D] api/
        │   └── [P] API Docs (1)
        └── [D] guide/
            └── [P] Guide (2)
"""

from typing import Any, Callable, List, Optional

from .models import TreeNode

BRANCH = '├── '
LAST_BRANCH = '└── '
PIPE = '│   '
SPACE = '    '


def _field(item: Any, name: str) -> Any:
    if isinstance(item, dict):
        return item.get(name)
    return getattr(item, name, None)


def _default_path(item: Any) -> str:
    return _field(item, 'path') or ''


def _default_label(item: Any) -> str:
    return _field(item, 'title') or _field(item, 'path') or ''


def _default_id(item: Any) -> Any:
    return _field(item, 'id')


def build_tree(items: List[Any], get_path: Callable[[Any], str] = _default_path) -> TreeNode:
    """Place each item at the trie node of its full path."""
    root = TreeNode()
    for item in items:
        node = root
        for part in (p for p in get_path(item).split('/') if p):
            node = node.children.setdefault(part, TreeNode())
        node.items.append(item)
    return root


def render_tree(
    items: List[Any],
    get_path: Optional[Callable[[Any], str]] = None,
    get_label: Optional[Callable[[Any], str]] = None,
    get_id: Optional[Callable[[Any], Any]] = None,
    plain: bool = True,
) -> str:
    """Render items as an indented tree.

    Args:
        items: Dicts or objects; by default ``path``, ``title`` and ``id``
               are read from them
        get_path: Accessor for the item's '/'-separated path
        get_label: Accessor for the displayed label (default: title or path)
        get_id: Accessor for the id printed in parentheses
        plain: Use [D]/[P] markers instead of folder/page glyphs

    Returns:
        Newline-joined tree text

    Example:
        >>> print(render_tree([{'id': 1, 'path': 'page', 'title': 'T'}]))
        └── [D] page/
            └── [P] T (1)
    """
    get_path = get_path or _default_path
    get_label = get_label or _default_label
    get_id = get_id or _default_id
    dir_icon = '[D]' if plain else '📁'
    page_icon = '[P]' if plain else '📄'

    lines: List[str] = []

    def render_node(node: TreeNode, prefix: str, is_last: bool, name: str) -> None:
        children = list(node.children.items())

        if name:
            connector = LAST_BRANCH if is_last else BRANCH
            lines.append(f"{prefix}{connector}{dir_icon} {name}/")

        child_prefix = prefix + ((SPACE if is_last else PIPE) if name else '')

        for idx, item in enumerate(node.items):
            last_item = idx == len(node.items) - 1 and not children
            connector = LAST_BRANCH if last_item else BRANCH
            lines.append(
                f"{child_prefix}{connector}{page_icon} {get_label(item)} ({get_id(item)})"
            )

        for idx, (child_name, child) in enumerate(children):
            render_node(child, child_prefix, idx == len(children) - 1, child_name)

    render_node(build_tree(items, get_path), '', True, '')
    return '\n'.join(lines)
