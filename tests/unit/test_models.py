"""Tests for the tree and selection models."""

import pytest

from text_anchor.errors import IndexOutOfRangeError, InvalidInputError
from text_anchor.models.node import CommentNode, ElementNode, TextNode, element
from text_anchor.models.selection import Selection, TextRange


def test_nodes_compare_by_identity() -> None:
    first, second = TextNode("same"), TextNode("same")
    assert first != second
    assert first.uid != second.uid


def test_insert_moves_node_between_parents() -> None:
    leaf = TextNode("moving")
    source = element("p", leaf)
    target = element("div")
    target.append(leaf)
    assert leaf.parent is target
    assert source.children == []


def test_cannot_insert_ancestor_into_descendant() -> None:
    inner = element("span")
    outer = element("div", inner)
    with pytest.raises(ValueError, match="own subtree"):
        inner.append(outer)


def test_siblings_include_comments() -> None:
    comment = CommentNode("c")
    tree = element("p", "a", comment, "b")
    assert tree.children[2].previous_sibling is comment
    assert comment.next_sibling is tree.children[2]
    assert tree.children[0].previous_sibling is None


def test_element_attributes() -> None:
    node = element("section", class_="chapter wide", id="intro")
    assert isinstance(node, ElementNode)
    assert node.element_id == "intro"
    assert node.class_list == ("chapter", "wide")


def test_range_bounds_are_validated() -> None:
    leaf = TextNode("abc")
    with pytest.raises(IndexOutOfRangeError):
        TextRange.in_leaf(leaf, 0, 4)
    with pytest.raises(IndexOutOfRangeError):
        TextRange.in_leaf(leaf, 2, 1)
    with pytest.raises(InvalidInputError):
        TextRange(element("p"), 0, leaf, 1)  # type: ignore[arg-type]


def test_range_text_and_collapsed() -> None:
    leaf = TextNode("abc")
    assert TextRange.in_leaf(leaf, 1, 3).text == "bc"
    assert str(TextRange.in_leaf(leaf, 0, 1)) == "a"
    assert TextRange.in_leaf(leaf, 2, 2).collapsed


def test_backwards_multi_leaf_range_has_no_text() -> None:
    tree = element("p", "ab", "cd")
    text_range = TextRange(tree.children[1], 0, tree.children[0], 1)  # type: ignore[arg-type]
    with pytest.raises(InvalidInputError):
        _ = text_range.text


def test_selection_range_access() -> None:
    leaf = TextNode("abc")
    selection = Selection((TextRange.in_leaf(leaf, 0, 1),))
    assert selection.range_count == 1
    with pytest.raises(IndexOutOfRangeError):
        selection.get_range_at(1)
