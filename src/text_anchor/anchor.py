"""Durable anchors for text spans inside a document tree.

An anchor records where a selection sat when it was captured in two ways:

* structurally, as the chain of sibling indices from a root element down to
  the text leaf, plus the leaf-local offsets;
* textually, as the selected string and which of its occurrences in the
  root's flattened text it was.

Resolution tries the structural path first and, when the tree has drifted so
that it no longer leads to the same text, falls back to searching the root's
flattened text for the recorded occurrence.
"""

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from loguru import logger

from text_anchor.config import DEFAULT_CASE_SENSITIVE, RECORD_KEYS
from text_anchor.core.search.occurrences import (
    find_all_occurrences,
    occurrence_index_of,
    text_matches,
)
from text_anchor.core.tree.navigation import (
    child_index,
    node_from_path,
    path_from,
    significant_children,
)
from text_anchor.core.tree.text_index import (
    absolute_offset,
    flatten_text,
    node_at_offset,
    structural_contains,
)
from text_anchor.errors import (
    IndexOutOfRangeError,
    InvalidInputError,
    MalformedRecordError,
    NotFoundError,
)
from text_anchor.models.node import Node, TextNode
from text_anchor.models.root_identifier import (
    RootIdentifier,
    root_identifier_from_dict,
    root_identifier_to_dict,
)
from text_anchor.models.selection import Selection, TextRange
from text_anchor.protocols import Containment, RootResolver

_OPTIONAL_KEYS = frozenset({"version"})


@dataclass(frozen=True)
class AnchorContext:
    """Host capabilities used to capture and resolve anchors.

    The same context (in particular the same ``case_sensitive`` policy) must
    be used for capture and resolution of a given anchor.
    """

    resolver: RootResolver
    contains: Containment = structural_contains
    case_sensitive: bool = DEFAULT_CASE_SENSITIVE


@dataclass(frozen=True)
class Anchor:
    """A serializable, resolvable location of a text span.

    Attributes:
        element_path: Sibling indices from the root to the element holding the leaf.
        node_index: Index of the leaf among that element's significant children.
        node_text_index: Offset of the leaf's start in the root's flattened
            text at capture time. Informational only.
        search_position: Which occurrence of ``text`` in the root's flattened
            text this anchor is, or None if the capture-time scan missed it.
        text: The captured string.
        offset: Start of the span, local to the leaf.
        end_offset: End of the span, local to the leaf.
        root_identifier: How to find the root again.
        version: Caller-supplied document version, not interpreted here.
    """

    element_path: tuple[int, ...]
    node_index: int
    node_text_index: int
    search_position: int | None
    text: str
    offset: int
    end_offset: int
    root_identifier: RootIdentifier
    version: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "element_path", tuple(self.element_path))
        if any(index < 0 for index in self.element_path):
            msg = f"Path entries must be non-negative: {list(self.element_path)!r}"
            raise MalformedRecordError(msg, field="elementPath")
        if self.node_index < 0:
            msg = f"Node index must be non-negative, got {self.node_index}"
            raise MalformedRecordError(msg, field="nodeIndex")
        if self.node_text_index < 0:
            msg = f"Node text index must be non-negative, got {self.node_text_index}"
            raise MalformedRecordError(msg, field="nodeTextIndex")
        if self.search_position is not None and self.search_position < 0:
            msg = f"Search position must be non-negative, got {self.search_position}"
            raise MalformedRecordError(msg, field="searchPosition")
        if not 0 <= self.offset <= self.end_offset:
            msg = f"Expected 0 <= offset <= endOffSet, got {self.offset} and {self.end_offset}"
            raise MalformedRecordError(msg, field="offset")
        if len(self.text) != self.end_offset - self.offset:
            msg = (
                f"Text of length {len(self.text)} does not fit "
                f"offsets {self.offset}..{self.end_offset}"
            )
            raise MalformedRecordError(msg, field="text")

    # --- Construction ---

    @classmethod
    def from_range(
        cls,
        text_range: TextRange,
        root_identifier: RootIdentifier,
        version: int | None = None,
        *,
        context: AnchorContext,
    ) -> "Anchor | None":
        """Capture an anchor for a range lying within a single text leaf.

        Returns None when the range starts and ends in different leaves;
        such selections are not supported.

        Raises:
            NotFoundError: The root cannot be resolved, or the range is not
                inside it.
        """
        if text_range.start_container is not text_range.end_container:
            logger.debug("Range spans several text leaves, not anchoring it")
            return None

        leaf = text_range.start_container
        root = context.resolver.resolve(root_identifier)
        text = text_range.text

        element_path = path_from(leaf.parent, root)
        node_text_index = absolute_offset(leaf, root, contains=context.contains)
        search_position = occurrence_index_of(
            root,
            node_text_index + text_range.start_offset,
            text,
            case_sensitive=context.case_sensitive,
        )
        if search_position is None:
            logger.warning(
                "Captured text {!r} is not found at offset {} by the occurrence scan; "
                "the anchor will only resolve while its path stays valid",
                text,
                node_text_index + text_range.start_offset,
            )

        anchor = cls(
            element_path=tuple(element_path),
            node_index=child_index(leaf),
            node_text_index=node_text_index,
            search_position=search_position,
            text=text,
            offset=text_range.start_offset,
            end_offset=text_range.end_offset,
            root_identifier=root_identifier,
            version=version,
        )
        logger.debug(
            "Captured anchor for {!r} at path {} node {} (occurrence {})",
            text,
            element_path,
            anchor.node_index,
            search_position,
        )
        return anchor

    @classmethod
    def from_selection(
        cls,
        selection: Selection,
        root_identifier: RootIdentifier,
        version: int | None = None,
        *,
        context: AnchorContext,
    ) -> "Anchor | None":
        """Capture an anchor for a selection holding exactly one range.

        Raises:
            InvalidInputError: The selection holds several ranges, or none.
        """
        if selection.range_count > 1:
            msg = f"Cannot anchor multiple ranges ({selection.range_count} selected)"
            raise InvalidInputError(msg)
        if selection.range_count == 0:
            msg = "Cannot anchor an empty selection"
            raise InvalidInputError(msg)
        return cls.from_range(
            selection.get_range_at(0), root_identifier, version, context=context
        )

    # --- Resolution ---

    def to_range(self, *, context: AnchorContext) -> TextRange:
        """Resolve the anchor into a range on the current tree.

        The structural path is tried first; if it no longer leads to the
        captured text, the recorded occurrence of the text is searched in the
        root's flattened text.

        Raises:
            NotFoundError: The root cannot be resolved, or the text is no
                longer present often enough to reach ``search_position``.
        """
        root = context.resolver.resolve(self.root_identifier)

        exact = self._resolve_exact(root)
        if exact is not None:
            return exact

        return self._resolve_by_search(root, context)

    def _resolve_exact(self, root: Node) -> TextRange | None:
        try:
            container = node_from_path(root, self.element_path)
        except IndexOutOfRangeError as e:
            logger.debug("Structural path no longer valid, falling back to search: {}", e)
            return None

        children = significant_children(container)
        if self.node_index >= len(children):
            logger.debug(
                "Node index {} out of range ({} children), falling back to search",
                self.node_index,
                len(children),
            )
            return None

        leaf = children[self.node_index]
        if not isinstance(leaf, TextNode):
            logger.debug("Node at path is no longer a text leaf, falling back to search")
            return None
        in_bounds = self.end_offset <= len(leaf.data)
        if not in_bounds or leaf.data[self.offset : self.end_offset] != self.text:
            logger.debug("Text at path no longer matches {!r}, falling back to search", self.text)
            return None

        return TextRange.in_leaf(leaf, self.offset, self.end_offset)

    def _resolve_by_search(self, root: Node, context: AnchorContext) -> TextRange:
        if self.search_position is None:
            msg = f"Anchor for {self.text!r} has no occurrence to search for"
            raise NotFoundError(msg)

        flat = flatten_text(root)
        occurrences = find_all_occurrences(flat, self.text, case_sensitive=context.case_sensitive)
        if not 0 <= self.search_position < len(occurrences):
            logger.warning(
                "Occurrence {} of {!r} requested, only {} left",
                self.search_position,
                self.text,
                len(occurrences),
            )
            msg = (
                f"Text {self.text!r} occurs {len(occurrences)} time(s), "
                f"occurrence {self.search_position} cannot be located"
            )
            raise NotFoundError(msg)

        start = occurrences[self.search_position]
        start_leaf, start_local = _position_at(start, root, len(flat))
        if not self.text:
            result = TextRange.in_leaf(start_leaf, start_local, start_local)
        else:
            # The occurrence may straddle leaves; locate its last character.
            end_leaf, end_local = node_at_offset(start + len(self.text) - 1, root)
            result = TextRange(start_leaf, start_local, end_leaf, end_local + 1)

        if not text_matches(self.text, result.text, case_sensitive=context.case_sensitive):
            msg = f"Resolved text {result.text!r} does not match {self.text!r}"
            raise NotFoundError(msg)

        logger.debug("Resolved {!r} by search at flattened offset {}", self.text, start)
        return result

    # --- Serialization ---

    def to_dict(self) -> dict[str, Any]:
        """Encode as the persisted record."""
        return {
            "elementPath": list(self.element_path),
            "nodeIndex": self.node_index,
            "nodeTextIndex": self.node_text_index,
            "searchPosition": self.search_position,
            "text": self.text,
            "offset": self.offset,
            "endOffSet": self.end_offset,
            "version": self.version,
            "rootIdentifier": root_identifier_to_dict(self.root_identifier),
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True)

    @classmethod
    def from_dict(cls, record: Mapping[str, Any]) -> "Anchor":
        """Decode a persisted record, validating its shape.

        Raises:
            MalformedRecordError: A field is missing, has the wrong type, or
                the offsets do not fit the text.
        """
        if not isinstance(record, Mapping):
            msg = f"Anchor record must be an object, got {type(record).__name__}"
            raise MalformedRecordError(msg)

        missing = [key for key in RECORD_KEYS if key not in record and key not in _OPTIONAL_KEYS]
        if missing:
            msg = f"Anchor record is missing {', '.join(missing)}"
            raise MalformedRecordError(msg, field=missing[0])

        element_path = record["elementPath"]
        if not isinstance(element_path, list | tuple) or not all(
            _is_int(i) for i in element_path
        ):
            msg = f"Expected a list of integers, got {element_path!r}"
            raise MalformedRecordError(msg, field="elementPath")

        text = record["text"]
        if not isinstance(text, str):
            msg = f"Expected a string, got {type(text).__name__}"
            raise MalformedRecordError(msg, field="text")

        return cls(
            element_path=tuple(element_path),
            node_index=_require_int(record, "nodeIndex"),
            node_text_index=_require_int(record, "nodeTextIndex"),
            search_position=_require_int(record, "searchPosition", nullable=True),
            text=text,
            offset=_require_int(record, "offset"),
            end_offset=_require_int(record, "endOffSet"),
            root_identifier=root_identifier_from_dict(record["rootIdentifier"]),
            version=_require_int(record, "version", nullable=True),
        )

    @classmethod
    def from_json(cls, payload: str | bytes) -> "Anchor":
        """Decode a JSON record; undecodable bytes count as malformed too."""
        try:
            record = json.loads(payload)
        except ValueError as e:
            msg = f"Anchor record is not valid JSON: {e}"
            raise MalformedRecordError(msg) from e
        return cls.from_dict(record)


def _position_at(offset: int, root: Node, length: int) -> tuple[TextNode, int]:
    """Like node_at_offset, but also accepts the position just past the end."""
    if offset == length and length > 0:
        leaf, local = node_at_offset(length - 1, root)
        return leaf, local + 1
    try:
        return node_at_offset(offset, root)
    except IndexOutOfRangeError as e:
        msg = f"No text position at offset {offset}"
        raise NotFoundError(msg) from e


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _require_int(record: Mapping[str, Any], key: str, *, nullable: bool = False) -> Any:
    value = record.get(key)
    if value is None and nullable:
        return None
    if not _is_int(value):
        msg = f"Expected an integer, got {value!r}"
        raise MalformedRecordError(msg, field=key)
    return value
