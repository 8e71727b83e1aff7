"""Configuration constants for text-anchor."""

import os

from text_anchor.models.node import NodeKind

# Matching policy shared by capture-time occurrence numbering and the
# resolution fallback. Set TEXT_ANCHOR_CASE_SENSITIVE=0 to match case-insensitively.
DEFAULT_CASE_SENSITIVE: bool = os.environ.get(
    "TEXT_ANCHOR_CASE_SENSITIVE", "1"
).strip().lower() not in ("0", "false", "no")

# Node kinds that take part in text flattening and path arithmetic.
SIGNIFICANT_KINDS: frozenset[NodeKind] = frozenset({NodeKind.TEXT, NodeKind.ELEMENT})

# Keys of the persisted anchor record. "endOffSet" keeps the spelling of
# records written by earlier clients.
RECORD_KEYS: tuple[str, ...] = (
    "elementPath",
    "nodeIndex",
    "nodeTextIndex",
    "searchPosition",
    "text",
    "offset",
    "endOffSet",
    "version",
    "rootIdentifier",
)

# Root identifier discriminators in the persisted record.
ROOT_KIND_BY_ID = "byId"
ROOT_KIND_BY_CLASS_AND_INDEX = "byClassAndIndex"
ROOT_KIND_BY_ABSOLUTE_PATH = "byAbsolutePath"
