"""Literal substring search over flattened text, with occurrence ordinals."""

import re

from text_anchor.config import DEFAULT_CASE_SENSITIVE
from text_anchor.core.tree.text_index import flatten_text, node_at_offset
from text_anchor.errors import IndexOutOfRangeError
from text_anchor.models.node import Node, TextNode


def _compile(needle: str, case_sensitive: bool) -> re.Pattern[str]:
    # The needle is user text, never a pattern.
    flags = 0 if case_sensitive else re.IGNORECASE
    return re.compile(re.escape(needle), flags)


def find_all_occurrences(
    haystack: str,
    needle: str,
    *,
    case_sensitive: bool = DEFAULT_CASE_SENSITIVE,
) -> list[int]:
    """Start offsets of ``needle`` in ``haystack``, ascending and non-overlapping.

    An empty needle matches at every position, including ``len(haystack)``.
    """
    return [match.start() for match in _compile(needle, case_sensitive).finditer(haystack)]


def text_matches(
    expected: str,
    actual: str,
    *,
    case_sensitive: bool = DEFAULT_CASE_SENSITIVE,
) -> bool:
    """Compare two strings under the same policy the search uses."""
    if case_sensitive:
        return expected == actual
    return _compile(expected, case_sensitive).fullmatch(actual) is not None


def locate_occurrence(
    root: Node,
    needle: str,
    position: int,
    *,
    case_sensitive: bool = DEFAULT_CASE_SENSITIVE,
) -> tuple[TextNode, int]:
    """Leaf and local offset where the ``position``-th occurrence of ``needle`` starts.

    Raises:
        IndexOutOfRangeError: Fewer than ``position + 1`` occurrences exist
            (including none at all), or ``position`` is negative.
    """
    occurrences = find_all_occurrences(flatten_text(root), needle, case_sensitive=case_sensitive)
    if not 0 <= position < len(occurrences):
        msg = f"Occurrence {position} of {needle!r} requested, {len(occurrences)} found"
        raise IndexOutOfRangeError(msg)
    return node_at_offset(occurrences[position], root)


def occurrence_index_of(
    root: Node,
    absolute_offset: int,
    text: str,
    *,
    case_sensitive: bool = DEFAULT_CASE_SENSITIVE,
) -> int | None:
    """Ordinal of the occurrence of ``text`` starting at ``absolute_offset``, or None."""
    occurrences = find_all_occurrences(flatten_text(root), text, case_sensitive=case_sensitive)
    try:
        return occurrences.index(absolute_offset)
    except ValueError:
        return None
