"""
Schema-agnostic helpers for walking a parsed JSON document.

Nodes are whatever ``json.loads`` returns: ``dict`` (insertion-ordered),
``list``, ``str``, ``int``, ``float``, ``bool`` or ``None``.  All walks use
an explicit stack so nesting depth is bounded only by memory.
"""

from typing import Any, Iterator


def node_text(node: Any) -> str:
    """Render a scalar node as text; containers render as ``""``.

    ``None`` renders as ``"null"`` and booleans as ``"true"``/``"false"``,
    matching how the portal's JSON values read in text form.
    """
    if isinstance(node, str):
        return node
    if isinstance(node, bool):
        return "true" if node else "false"
    if isinstance(node, (int, float)):
        return str(node)
    if node is None:
        return "null"
    return ""


def find_value(node: Any, key: str) -> Any:
    """Return the value of the first *key* found in *node* or below it.

    An object's own *key* wins over matches inside its children; children
    are searched depth-first in their natural order.  Returns ``None`` when
    the key occurs nowhere.
    """
    stack = [node]
    while stack:
        item = stack.pop()
        if isinstance(item, dict):
            if key in item:
                return item[key]
            stack.extend(reversed(list(item.values())))
        elif isinstance(item, list):
            stack.extend(reversed(item))
    return None


def iter_objects(node: Any) -> Iterator[dict]:
    """Yield every object node under *node* (inclusive) in pre-order.

    Fields are visited in document order and arrays by ascending index.
    """
    stack = [node]
    while stack:
        item = stack.pop()
        if isinstance(item, dict):
            yield item
            stack.extend(reversed(list(item.values())))
        elif isinstance(item, list):
            stack.extend(reversed(item))
