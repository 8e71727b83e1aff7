"""Default root resolver over an in-memory document tree."""

from loguru import logger

from text_anchor.core.tree.navigation import iter_descendants, node_from_path
from text_anchor.errors import IndexOutOfRangeError, NotFoundError
from text_anchor.models.node import ElementNode, Node
from text_anchor.models.root_identifier import (
    ByAbsolutePath,
    ByClassAndIndex,
    ById,
    RootIdentifier,
)


class TreeRootResolver:
    """Resolve root identifiers against a single document tree."""

    def __init__(self, document: Node) -> None:
        self.document = document

    def resolve(self, identifier: RootIdentifier) -> Node:
        if isinstance(identifier, ById):
            node = self._find_by_id(identifier.id)
        elif isinstance(identifier, ByClassAndIndex):
            node = self._find_by_class(identifier.class_name, identifier.index)
        elif isinstance(identifier, ByAbsolutePath):
            try:
                node = node_from_path(self.document, identifier.path)
            except IndexOutOfRangeError as e:
                msg = f"No node at absolute path {list(identifier.path)!r}"
                raise NotFoundError(msg) from e
        else:
            msg = f"Unsupported root identifier: {identifier!r}"
            raise TypeError(msg)

        logger.debug("Resolved root {!r} to node uid={}", identifier, node.uid)
        return node

    def _elements(self) -> list[ElementNode]:
        return [n for n in iter_descendants(self.document) if isinstance(n, ElementNode)]

    def _find_by_id(self, element_id: str) -> ElementNode:
        for candidate in self._elements():
            if candidate.element_id == element_id:
                return candidate
        msg = f"No element with id {element_id!r}"
        raise NotFoundError(msg)

    def _find_by_class(self, class_name: str, index: int) -> ElementNode:
        matches = [e for e in self._elements() if class_name in e.class_list]
        if not 0 <= index < len(matches):
            msg = f"No element #{index} with class {class_name!r} ({len(matches)} found)"
            raise NotFoundError(msg)
        return matches[index]
