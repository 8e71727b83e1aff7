"""Protocols for the host capabilities anchors depend on."""

from typing import Protocol, runtime_checkable

from text_anchor.models.node import Node
from text_anchor.models.root_identifier import RootIdentifier


@runtime_checkable
class RootResolver(Protocol):
    """Protocol for locating the root node an anchor is relative to."""

    def resolve(self, identifier: RootIdentifier) -> Node:
        """Return the node named by ``identifier``.

        Raises NotFoundError when no such node exists.
        """
        ...


class Containment(Protocol):
    """Protocol for subtree containment tests (inclusive of the node itself)."""

    def __call__(self, ancestor: Node, node: Node) -> bool: ...
