"""Shared test fixtures."""

from collections.abc import Callable, Iterator

import pytest
from loguru import logger

from tests.unit.fakes import ROOT_ID, FakeRootResolver
from text_anchor.anchor import AnchorContext
from text_anchor.models.node import CommentNode, ElementNode, element


@pytest.fixture
def article() -> ElementNode:
    """div#root[p["The ", b["quick"], " brown fox", <!--note-->, " jumps"],
    p["over the lazy dog"]].
    """
    return element(
        "div",
        element(
            "p",
            "The ",
            element("b", "quick"),
            " brown fox",
            CommentNode("editor note"),
            " jumps",
        ),
        element("p", "over the lazy dog"),
        id="root",
    )


@pytest.fixture
def resolver() -> FakeRootResolver:
    return FakeRootResolver()


@pytest.fixture
def make_context(resolver: FakeRootResolver) -> Callable[..., AnchorContext]:
    """Register ``root`` under ROOT_ID and return a context using the fake resolver."""

    def _make(root: ElementNode, **kwargs: object) -> AnchorContext:
        resolver.add_root(ROOT_ID, root)
        return AnchorContext(resolver=resolver, **kwargs)  # type: ignore[arg-type]

    return _make


@pytest.fixture
def log_messages() -> Iterator[list[str]]:
    """Collect loguru output emitted during the test."""
    messages: list[str] = []
    handler_id = logger.add(messages.append, level="DEBUG", format="{level} {message}")
    yield messages
    logger.remove(handler_id)
