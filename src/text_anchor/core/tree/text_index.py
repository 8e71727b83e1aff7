"""Flattened-text indexing: map between node positions and offsets into a root's text.

The flattened text of a node is the in-order concatenation of every text leaf
under it. Nothing is cached; the tree may change between calls.
"""

from collections.abc import Iterator

from text_anchor.core.tree.navigation import significant_children
from text_anchor.errors import IndexOutOfRangeError, NotFoundError
from text_anchor.models.node import ElementNode, Node, TextNode
from text_anchor.protocols import Containment


def structural_contains(ancestor: Node, node: Node) -> bool:
    """Inclusive containment test that walks ``node``'s parent chain."""
    current: Node | None = node
    while current is not None:
        if current is ancestor:
            return True
        current = current.parent
    return False


def child_walk_contains(ancestor: Node, node: Node) -> bool:
    """Inclusive containment test that searches down from ``ancestor``.

    For hosts whose parent links are unreliable for text leaves.
    """
    stack: list[Node] = [ancestor]
    while stack:
        current = stack.pop()
        if current is node:
            return True
        if isinstance(current, ElementNode):
            stack.extend(current.children)
    return False


def _iter_text_leaves(node: Node) -> Iterator[TextNode]:
    stack: list[Node] = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, TextNode):
            yield current
        else:
            stack.extend(reversed(significant_children(current)))


def flatten_text(node: Node) -> str:
    """Concatenate the text of all leaves under ``node`` in document order."""
    return "".join(leaf.data for leaf in _iter_text_leaves(node))


def text_length(node: Node) -> int:
    """Length of :func:`flatten_text` without building the string."""
    return sum(len(leaf.data) for leaf in _iter_text_leaves(node))


def absolute_offset(
    node: Node,
    root: Node,
    *,
    contains: Containment = structural_contains,
) -> int:
    """Offset of ``node``'s first character within ``flatten_text(root)``.

    Args:
        node: The node to locate.
        root: The node whose flattened text the offset refers to.
        contains: Containment capability of the host tree.

    Raises:
        NotFoundError: ``node`` is not inside ``root``.
    """
    total = 0
    current = root
    while current is not node:
        children = significant_children(current)
        holder_index: int | None = None
        for i, child in enumerate(children):
            if contains(child, node):
                holder_index = i
        if holder_index is None:
            msg = f"Node {node!r} is not contained in {current!r}"
            raise NotFoundError(msg)
        total += sum(text_length(child) for child in children[:holder_index])
        current = children[holder_index]
    return total


def node_at_offset(offset: int, root: Node) -> tuple[TextNode, int]:
    """Find the text leaf holding ``offset`` of ``flatten_text(root)``.

    Returns:
        Tuple of (leaf, offset local to that leaf).

    Raises:
        IndexOutOfRangeError: ``offset`` is negative or not below the
            flattened length.
    """
    length = text_length(root)
    if not 0 <= offset < length:
        msg = f"Offset {offset} is out of range for flattened text of length {length}"
        raise IndexOutOfRangeError(msg)

    current = root
    remaining = offset
    while not isinstance(current, TextNode):
        for child in significant_children(current):
            child_length = text_length(child)
            if remaining < child_length:
                current = child
                break
            remaining -= child_length
        else:
            # Unreachable while the length check above holds.
            msg = f"Offset {offset} ran past the children of {current!r}"
            raise IndexOutOfRangeError(msg)
    return current, remaining
