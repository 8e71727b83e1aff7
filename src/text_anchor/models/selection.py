"""Selection and range primitives over the document tree."""

from dataclasses import dataclass

from text_anchor.core.tree.navigation import iter_descendants
from text_anchor.errors import IndexOutOfRangeError, InvalidInputError
from text_anchor.models.node import TextNode


@dataclass(frozen=True)
class TextRange:
    """A span between two positions inside text leaves.

    Offsets are character offsets into the leaves' own text. Building a range
    never touches the tree.
    """

    start_container: TextNode
    start_offset: int
    end_container: TextNode
    end_offset: int

    def __post_init__(self) -> None:
        for container, offset in (
            (self.start_container, self.start_offset),
            (self.end_container, self.end_offset),
        ):
            if not isinstance(container, TextNode):
                msg = f"Range boundaries must sit in text leaves, got {container!r}"
                raise InvalidInputError(msg)
            if not 0 <= offset <= len(container.data):
                msg = f"Offset {offset} outside of text leaf of length {len(container.data)}"
                raise IndexOutOfRangeError(msg)
        if self.start_container is self.end_container and self.start_offset > self.end_offset:
            msg = f"Range start {self.start_offset} is after its end {self.end_offset}"
            raise IndexOutOfRangeError(msg)

    @classmethod
    def in_leaf(cls, leaf: TextNode, start: int, end: int) -> "TextRange":
        return cls(leaf, start, leaf, end)

    @property
    def collapsed(self) -> bool:
        return self.start_container is self.end_container and self.start_offset == self.end_offset

    @property
    def text(self) -> str:
        """The covered string, joining leaves in document order when needed."""
        start = self.start_container
        end = self.end_container
        if start is end:
            return start.data[self.start_offset : self.end_offset]

        ancestors = start.ancestors()
        top = ancestors[-1] if ancestors else start
        parts: list[str] = []
        inside = False
        for node in iter_descendants(top):
            if not isinstance(node, TextNode):
                continue
            if node is start:
                parts.append(node.data[self.start_offset :])
                inside = True
            elif node is end:
                if not inside:
                    break
                parts.append(node.data[: self.end_offset])
                return "".join(parts)
            elif inside:
                parts.append(node.data)

        msg = "Range end does not follow its start in document order"
        raise InvalidInputError(msg)

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class Selection:
    """An ordered set of ranges, as held by a host selection."""

    ranges: tuple[TextRange, ...] = ()

    @property
    def range_count(self) -> int:
        return len(self.ranges)

    def get_range_at(self, index: int) -> TextRange:
        if not 0 <= index < len(self.ranges):
            msg = f"Selection has {len(self.ranges)} range(s), no range at {index}"
            raise IndexOutOfRangeError(msg)
        return self.ranges[index]
