"""Descriptors used to re-locate the root node an anchor is relative to."""

from dataclasses import dataclass
from typing import Any

from text_anchor.config import (
    ROOT_KIND_BY_ABSOLUTE_PATH,
    ROOT_KIND_BY_CLASS_AND_INDEX,
    ROOT_KIND_BY_ID,
)
from text_anchor.errors import MalformedRecordError


@dataclass(frozen=True)
class ById:
    """The element carrying this ``id`` attribute."""

    id: str


@dataclass(frozen=True)
class ByClassAndIndex:
    """The ``index``-th element, in document order, carrying ``class_name``."""

    class_name: str
    index: int


@dataclass(frozen=True)
class ByAbsolutePath:
    """The node reached by walking significant-child indices from the document top."""

    path: tuple[int, ...]


RootIdentifier = ById | ByClassAndIndex | ByAbsolutePath


def root_identifier_to_dict(identifier: RootIdentifier) -> dict[str, Any]:
    """Encode a root identifier as a tagged record."""
    if isinstance(identifier, ById):
        return {"kind": ROOT_KIND_BY_ID, "id": identifier.id}
    if isinstance(identifier, ByClassAndIndex):
        return {
            "kind": ROOT_KIND_BY_CLASS_AND_INDEX,
            "className": identifier.class_name,
            "index": identifier.index,
        }
    if isinstance(identifier, ByAbsolutePath):
        return {"kind": ROOT_KIND_BY_ABSOLUTE_PATH, "path": list(identifier.path)}
    msg = f"Unsupported root identifier: {identifier!r}"
    raise TypeError(msg)


def root_identifier_from_dict(data: Any) -> RootIdentifier:
    """Decode a tagged record built by :func:`root_identifier_to_dict`."""
    if not isinstance(data, dict):
        msg = "Root identifier must be an object"
        raise MalformedRecordError(msg, field="rootIdentifier")

    kind = data.get("kind")
    try:
        if kind == ROOT_KIND_BY_ID:
            element_id = data["id"]
            if isinstance(element_id, str):
                return ById(element_id)
        elif kind == ROOT_KIND_BY_CLASS_AND_INDEX:
            class_name, index = data["className"], data["index"]
            if isinstance(class_name, str) and _is_int(index) and index >= 0:
                return ByClassAndIndex(class_name, index)
        elif kind == ROOT_KIND_BY_ABSOLUTE_PATH:
            path = data["path"]
            if isinstance(path, list) and all(_is_int(i) and i >= 0 for i in path):
                return ByAbsolutePath(tuple(path))
        else:
            msg = f"Unknown root identifier kind {kind!r}"
            raise MalformedRecordError(msg, field="rootIdentifier")
    except KeyError as e:
        msg = f"Root identifier of kind {kind!r} is missing {e.args[0]!r}"
        raise MalformedRecordError(msg, field="rootIdentifier") from e

    msg = f"Root identifier of kind {kind!r} has invalid values: {data!r}"
    raise MalformedRecordError(msg, field="rootIdentifier")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
