"""Tree navigation: sibling indices and structural paths between a node and a root."""

from collections.abc import Iterator

from text_anchor.config import SIGNIFICANT_KINDS
from text_anchor.errors import IndexOutOfRangeError, NotFoundError
from text_anchor.models.node import ElementNode, Node


def is_significant(node: Node) -> bool:
    return node.kind in SIGNIFICANT_KINDS


def significant_children(node: Node) -> list[Node]:
    """Text and element children of ``node``, in order. Leaves have none."""
    if not isinstance(node, ElementNode):
        return []
    return [child for child in node.children if is_significant(child)]


def child_index(node: Node) -> int:
    """Position of ``node`` among its significant siblings (0 for the first)."""
    index = 0
    sibling = node.previous_sibling
    while sibling is not None:
        if is_significant(sibling):
            index += 1
        sibling = sibling.previous_sibling
    return index


def path_from(node: Node | None, root: Node) -> list[int]:
    """Build the chain of child indices leading from ``root`` down to ``node``.

    Returns ``[]`` when ``node`` is ``root``.

    Raises:
        NotFoundError: ``node`` is None or not inside ``root``.
    """
    path: list[int] = []
    current: Node | None = node
    while current is not root:
        if current is None:
            msg = f"Node {node!r} is not a descendant of root {root!r}"
            raise NotFoundError(msg)
        path.append(child_index(current))
        current = current.parent
    path.reverse()
    return path


def node_from_path(root: Node, path: list[int] | tuple[int, ...]) -> Node:
    """Follow a path built with :func:`path_from` back to a node.

    Raises:
        IndexOutOfRangeError: A path entry does not name an existing
            significant child at its level.
    """
    current = root
    for depth, index in enumerate(path):
        children = significant_children(current)
        if not 0 <= index < len(children):
            msg = (
                f"Path {list(path)!r} is invalid at depth {depth}: "
                f"index {index} with {len(children)} significant children"
            )
            raise IndexOutOfRangeError(msg)
        current = children[index]
    return current


def iter_descendants(node: Node) -> Iterator[Node]:
    """Yield ``node`` and everything below it in document order (pre-order)."""
    stack: list[Node] = [node]
    while stack:
        current = stack.pop()
        yield current
        if isinstance(current, ElementNode):
            stack.extend(reversed(current.children))
