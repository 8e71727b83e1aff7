"""Durable anchors for text selections in hierarchical documents."""

from text_anchor.anchor import Anchor, AnchorContext
from text_anchor.core.tree.builder import parse_html, parse_xml
from text_anchor.core.tree.resolver import TreeRootResolver
from text_anchor.errors import (
    AnchorError,
    IndexOutOfRangeError,
    InvalidInputError,
    MalformedRecordError,
    NotFoundError,
)
from text_anchor.logging_config import configure_logging
from text_anchor.models.node import ElementNode, TextNode, element
from text_anchor.models.root_identifier import ByAbsolutePath, ByClassAndIndex, ById
from text_anchor.models.selection import Selection, TextRange
from text_anchor.protocols import Containment, RootResolver

__all__ = [
    "Anchor",
    "AnchorContext",
    "AnchorError",
    "ByAbsolutePath",
    "ByClassAndIndex",
    "ById",
    "Containment",
    "ElementNode",
    "IndexOutOfRangeError",
    "InvalidInputError",
    "MalformedRecordError",
    "NotFoundError",
    "RootResolver",
    "Selection",
    "TextNode",
    "TextRange",
    "TreeRootResolver",
    "configure_logging",
    "element",
    "parse_html",
    "parse_xml",
]
