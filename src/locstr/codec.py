from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .errors import PreconditionError
from .located import LocatedString
from .offsets import ByteOffset, CodePointOffset, LogicalOffset, OffsetGroup, OffsetRange, TimeAlignment
from .regions import OffsetRegion


def _field(data: Mapping[str, Any], key: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise PreconditionError(f"missing field {key!r}", hint=f"got fields {sorted(data)}") from None


def offset_group_to_dict(group: OffsetGroup) -> dict[str, int | None]:
    return {
        "byte_offset": group.byte_offset,
        "code_point_offset": group.code_point_offset,
        "logical_offset": group.logical_offset,
        "time_alignment": group.time_alignment,
    }


def offset_group_from_dict(data: Mapping[str, Any]) -> OffsetGroup:
    byte = data.get("byte_offset")
    time = data.get("time_alignment")
    return OffsetGroup(
        code_point_offset=CodePointOffset(_field(data, "code_point_offset")),
        logical_offset=LogicalOffset(_field(data, "logical_offset")),
        byte_offset=None if byte is None else ByteOffset(byte),
        time_alignment=None if time is None else TimeAlignment(time),
    )


def offset_range_to_dict(rng: OffsetRange) -> dict[str, Any]:
    return {"start": offset_group_to_dict(rng.start), "end": offset_group_to_dict(rng.end)}


def offset_range_from_dict(data: Mapping[str, Any]) -> OffsetRange:
    return OffsetRange(
        start=offset_group_from_dict(_field(data, "start")),
        end=offset_group_from_dict(_field(data, "end")),
    )


def region_to_dict(region: OffsetRegion) -> dict[str, Any]:
    return {
        "start_pos": region.start_pos,
        "end_pos": region.end_pos,
        "start": offset_group_to_dict(region.start_offsets),
        "end": offset_group_to_dict(region.end_offsets),
    }


def region_from_dict(data: Mapping[str, Any]) -> OffsetRegion:
    return OffsetRegion(
        start_pos=_field(data, "start_pos"),
        end_pos=_field(data, "end_pos"),
        start_offsets=offset_group_from_dict(_field(data, "start")),
        end_offsets=offset_group_from_dict(_field(data, "end")),
    )


def located_string_to_dict(s: LocatedString) -> dict[str, Any]:
    """JSON-compatible form of ``s``; field names are part of the interchange format."""
    return {
        "text": s.text,
        "bounds": offset_range_to_dict(s.bounds),
        "regions": [region_to_dict(r) for r in s.regions],
    }


def located_string_from_dict(data: Mapping[str, Any]) -> LocatedString:
    return LocatedString(
        _field(data, "text"),
        offset_range_from_dict(_field(data, "bounds")),
        tuple(region_from_dict(r) for r in _field(data, "regions")),
    )
