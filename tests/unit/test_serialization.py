"""Tests for the persisted anchor record."""

import json
from typing import Any

import pytest

from tests.unit.fakes import ROOT_ID
from text_anchor.anchor import Anchor
from text_anchor.errors import MalformedRecordError
from text_anchor.models.root_identifier import ByAbsolutePath, ByClassAndIndex

RECORD: dict[str, Any] = {
    "elementPath": [0, 2],
    "nodeIndex": 1,
    "nodeTextIndex": 14,
    "searchPosition": 0,
    "text": "world",
    "offset": 6,
    "endOffSet": 11,
    "version": 7,
    "rootIdentifier": {"kind": "byId", "id": "root"},
}


def test_from_dict_reads_every_field() -> None:
    anchor = Anchor.from_dict(RECORD)
    assert anchor.element_path == (0, 2)
    assert anchor.node_index == 1
    assert anchor.node_text_index == 14
    assert anchor.search_position == 0
    assert anchor.text == "world"
    assert (anchor.offset, anchor.end_offset) == (6, 11)
    assert anchor.version == 7
    assert anchor.root_identifier == ROOT_ID


def test_to_dict_matches_record_schema() -> None:
    assert Anchor.from_dict(RECORD).to_dict() == RECORD


def test_json_round_trip_for_each_root_kind() -> None:
    for identifier in (ROOT_ID, ByClassAndIndex("chapter", 2), ByAbsolutePath((1, 0))):
        anchor = Anchor((3,), 0, 5, None, "abc", 1, 4, identifier, version=None)
        assert Anchor.from_json(anchor.to_json()) == anchor


def test_version_may_be_absent() -> None:
    record = {k: v for k, v in RECORD.items() if k != "version"}
    assert Anchor.from_dict(record).version is None


@pytest.mark.parametrize("missing", ["elementPath", "text", "endOffSet", "rootIdentifier"])
def test_missing_field_is_rejected(missing: str) -> None:
    record = {k: v for k, v in RECORD.items() if k != missing}
    with pytest.raises(MalformedRecordError) as excinfo:
        Anchor.from_dict(record)
    assert excinfo.value.field == missing


@pytest.mark.parametrize(
    ("field", "value"),
    [
        ("offset", 12),
        ("offset", -1),
        ("endOffSet", 12),
        ("elementPath", [0, -1]),
        ("elementPath", "0/2"),
        ("nodeIndex", True),
        ("nodeIndex", "1"),
        ("text", None),
        ("rootIdentifier", {"kind": "byXpath", "value": "/html"}),
        ("rootIdentifier", {"kind": "byClassAndIndex", "className": "x"}),
    ],
)
def test_invalid_field_is_rejected(field: str, value: Any) -> None:
    with pytest.raises(MalformedRecordError):
        Anchor.from_dict({**RECORD, field: value})


@pytest.mark.parametrize("field", ["nodeTextIndex", "searchPosition"])
def test_negative_position_names_its_field(field: str) -> None:
    with pytest.raises(MalformedRecordError) as excinfo:
        Anchor.from_dict({**RECORD, field: -1})
    assert excinfo.value.field == field


def test_invalid_json_is_rejected() -> None:
    with pytest.raises(MalformedRecordError):
        Anchor.from_json("{not json")
    with pytest.raises(MalformedRecordError):
        Anchor.from_json(json.dumps([1, 2, 3]))


@pytest.mark.parametrize("payload", [b"\xff\xfe{", b"{\"text\": \"\xff\"}"])
def test_undecodable_bytes_are_rejected(payload: bytes) -> None:
    with pytest.raises(MalformedRecordError, match="not valid JSON"):
        Anchor.from_json(payload)


def test_constructed_anchor_keeps_offset_invariants() -> None:
    with pytest.raises(MalformedRecordError):
        Anchor((), 0, 0, 0, "abc", 0, 2, ROOT_ID)
