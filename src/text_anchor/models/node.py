"""Document tree model that anchors are captured from and resolved against."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar

_uid_counter = itertools.count(1)


class NodeKind(Enum):
    """Kinds of nodes found in a document tree."""

    TEXT = "text"
    ELEMENT = "element"
    COMMENT = "comment"
    PROCESSING_INSTRUCTION = "processing-instruction"


class Node:
    """Common behaviour of tree nodes.

    Nodes compare by identity: two text leaves holding the same string are
    still different nodes. ``uid`` is a stable per-node identifier assigned at
    construction, handy for logging and for hosts that need a hashable key.
    """

    kind: ClassVar[NodeKind]
    parent: ElementNode | None
    uid: int

    def __post_init__(self) -> None:
        self.parent = None
        self.uid = next(_uid_counter)

    @property
    def previous_sibling(self) -> Node | None:
        if self.parent is None:
            return None
        index = self.parent.index_of(self)
        return self.parent.children[index - 1] if index > 0 else None

    @property
    def next_sibling(self) -> Node | None:
        if self.parent is None:
            return None
        siblings = self.parent.children
        index = self.parent.index_of(self)
        return siblings[index + 1] if index + 1 < len(siblings) else None

    def ancestors(self) -> list[ElementNode]:
        """Return the parent chain, nearest first."""
        chain: list[ElementNode] = []
        current = self.parent
        while current is not None:
            chain.append(current)
            current = current.parent
        return chain


@dataclass(eq=False)
class TextNode(Node):
    """A text leaf."""

    data: str

    kind: ClassVar[NodeKind] = NodeKind.TEXT


@dataclass(eq=False)
class CommentNode(Node):
    """A comment. Ignored by text flattening and path arithmetic."""

    data: str = ""

    kind: ClassVar[NodeKind] = NodeKind.COMMENT


@dataclass(eq=False)
class ProcessingInstructionNode(Node):
    """A processing instruction. Ignored like comments."""

    target: str
    data: str = ""

    kind: ClassVar[NodeKind] = NodeKind.PROCESSING_INSTRUCTION


@dataclass(eq=False)
class ElementNode(Node):
    """A container with an ordered list of child nodes."""

    tag: str
    attributes: dict[str, str] = field(default_factory=dict)
    children: list[Node] = field(default_factory=list, repr=False)

    kind: ClassVar[NodeKind] = NodeKind.ELEMENT

    def __post_init__(self) -> None:
        super().__post_init__()
        initial = list(self.children)
        self.children = []
        for child in initial:
            self.append(child)

    @property
    def element_id(self) -> str | None:
        return self.attributes.get("id")

    @property
    def class_list(self) -> tuple[str, ...]:
        return tuple(self.attributes.get("class", "").split())

    def index_of(self, child: Node) -> int:
        for i, candidate in enumerate(self.children):
            if candidate is child:
                return i
        msg = f"{child!r} is not a child of <{self.tag}>"
        raise ValueError(msg)

    def append(self, child: Node) -> Node:
        return self.insert(len(self.children), child)

    def insert(self, index: int, child: Node) -> Node:
        """Insert ``child`` at ``index``, detaching it from any previous parent."""
        if child is self or (isinstance(child, ElementNode) and child in self.ancestors()):
            msg = f"Cannot insert <{self.tag}> into its own subtree"
            raise ValueError(msg)
        if child.parent is not None:
            child.parent.remove(child)
        child.parent = self
        self.children.insert(index, child)
        return child

    def remove(self, child: Node) -> Node:
        del self.children[self.index_of(child)]
        child.parent = None
        return child

    def replace_children(self, *children: Node | str) -> None:
        for old in list(self.children):
            self.remove(old)
        for child in children:
            self.append(TextNode(child) if isinstance(child, str) else child)


def element(tag: str, *children: Node | str, **attributes: str) -> ElementNode:
    """Build an element; plain strings become text leaves.

    ``class_`` is accepted as an alias for the ``class`` attribute.
    """
    if "class_" in attributes:
        attributes["class"] = attributes.pop("class_")
    node = ElementNode(tag, attributes=dict(attributes))
    node.replace_children(*children)
    return node
