"""Tests for tree navigation (sibling indices, paths)."""

import pytest

from text_anchor.core.tree.navigation import (
    child_index,
    iter_descendants,
    node_from_path,
    path_from,
    significant_children,
)
from text_anchor.errors import IndexOutOfRangeError, NotFoundError
from text_anchor.models.node import CommentNode, ElementNode, TextNode, element


def test_child_index_skips_comments(article: ElementNode) -> None:
    paragraph = article.children[0]
    assert isinstance(paragraph, ElementNode)
    jumps = paragraph.children[4]
    assert isinstance(jumps, TextNode)
    # "The ", b, " brown fox", <!--note-->, " jumps"
    assert child_index(jumps) == 3
    assert child_index(paragraph.children[0]) == 0


def test_significant_children_of_leaf_is_empty() -> None:
    assert significant_children(TextNode("x")) == []


def test_path_from_nested_element(article: ElementNode) -> None:
    bold = article.children[0].children[1]  # type: ignore[attr-defined]
    assert path_from(bold, article) == [0, 1]
    assert path_from(article, article) == []


def test_node_from_path_is_inverse_of_path_from(article: ElementNode) -> None:
    for node in iter_descendants(article):
        if isinstance(node, CommentNode):
            continue
        assert node_from_path(article, path_from(node, article)) is node


def test_node_from_path_rejects_stale_index(article: ElementNode) -> None:
    with pytest.raises(IndexOutOfRangeError):
        node_from_path(article, [5])
    with pytest.raises(IndexOutOfRangeError):
        node_from_path(article, [0, 1, 0, 0])  # descends below a text leaf


def test_path_from_outside_root_fails(article: ElementNode) -> None:
    stranger = element("p", "elsewhere")
    with pytest.raises(NotFoundError):
        path_from(stranger, article)
    with pytest.raises(NotFoundError):
        path_from(None, article)


def test_iter_descendants_is_document_order() -> None:
    tree = element("div", element("p", "a", element("b", "b")), "c")
    texts = [n.data for n in iter_descendants(tree) if isinstance(n, TextNode)]
    assert texts == ["a", "b", "c"]
