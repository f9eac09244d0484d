from __future__ import annotations

import json

import pytest

from locstr import LocatedString, MappingMode, OffsetGroup, PreconditionError
from locstr.codec import (
    located_string_from_dict,
    located_string_to_dict,
    offset_group_from_dict,
    offset_group_to_dict,
)


def test_offset_group_field_names_are_stable() -> None:
    group = OffsetGroup.matching(3, byte_offset=5, time_alignment=900)
    assert offset_group_to_dict(group) == {
        "byte_offset": 5,
        "code_point_offset": 3,
        "logical_offset": 3,
        "time_alignment": 900,
    }
    assert offset_group_from_dict({"code_point_offset": 1, "logical_offset": 0}) == OffsetGroup(
        code_point_offset=1, logical_offset=0
    )


def test_located_string_survives_json() -> None:
    s = LocatedString.from_text(
        "x\r\n<p>y</p>", OffsetGroup.matching(0, byte_offset=0), mode=MappingMode.MARKUP
    )
    payload = located_string_to_dict(s)
    assert set(payload) == {"text", "bounds", "regions"}
    assert set(payload["regions"][0]) == {"start_pos", "end_pos", "start", "end"}
    assert located_string_from_dict(json.loads(json.dumps(payload))) == s


def test_missing_field_names_the_key() -> None:
    with pytest.raises(PreconditionError) as e:
        offset_group_from_dict({"logical_offset": 0})
    assert "code_point_offset" in str(e.value)


def test_decoding_revalidates_invariants() -> None:
    payload = located_string_to_dict(LocatedString.from_text("abc"))
    payload["text"] = "abcd"
    with pytest.raises(PreconditionError):
        located_string_from_dict(payload)

    payload = located_string_to_dict(LocatedString.from_text("abc"))
    payload["regions"][0]["end_pos"] = 0
    with pytest.raises(PreconditionError):
        located_string_from_dict(payload)
