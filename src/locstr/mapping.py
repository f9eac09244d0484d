from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from .errors import PreconditionError
from .offsets import (
    ByteOffset,
    CodePointOffset,
    LogicalOffset,
    OffsetGroup,
    OffsetRange,
    utf8_width,
)
from .regions import OffsetRegion


logger = logging.getLogger(__name__)


class MappingMode(str, Enum):
    # Logical offsets skip <...> spans and carriage returns.
    MARKUP = "markup"
    # Logical offsets advance with every code point.
    PLAIN = "plain"


@dataclass(slots=True)
class _Scan:
    track_bytes: bool
    byte: int
    code_point: int
    logical: int
    in_tag: int = 0
    just_left_tag: bool = False
    prev: str = ""

    def group(self, *, byte: int, code_point: int, logical: int) -> OffsetGroup:
        return OffsetGroup(
            code_point_offset=CodePointOffset(code_point),
            logical_offset=LogicalOffset(logical),
            byte_offset=ByteOffset(byte) if self.track_bytes else None,
        )

    def cuts_before(self, ch: str) -> bool:
        if self.just_left_tag and ch == "<":
            return False
        return (self.in_tag == 0 and (ch == "<" or self.prev == "\r")) or self.just_left_tag

    def consume(self, ch: str, *, markup: bool) -> None:
        self.code_point += 1
        self.byte += utf8_width(ch)
        if not markup or not (self.in_tag or ch == "<" or ch == "\r"):
            self.logical += 1
        if markup:
            self.just_left_tag = False
            if ch == "<":
                self.in_tag += 1
            elif self.in_tag > 0 and ch == ">":
                self.in_tag -= 1
                if self.in_tag == 0:
                    self.just_left_tag = True
        self.prev = ch


def compute_regions(
    text: str,
    initial_offsets: OffsetGroup,
    *,
    mode: MappingMode = MappingMode.PLAIN,
) -> tuple[OffsetRegion, ...]:
    """Map every position of ``text`` to source offsets, starting at ``initial_offsets``.

    Offsets count Python code points, so a character outside the BMP advances
    the code-point offset by one and the byte offset by four.

    In MARKUP mode a new region is cut whenever the scan enters or leaves a
    span where the logical offset stands still: a ``<...>`` tag or a
    carriage return. Tags are tracked with a bare open/close counter, so
    nested or unbalanced brackets are not interpreted. PLAIN mode yields a
    single region.
    """
    markup = mode is MappingMode.MARKUP
    scan = _Scan(
        track_bytes=initial_offsets.byte_offset is not None,
        byte=initial_offsets.byte_offset or 0,
        code_point=initial_offsets.code_point_offset,
        logical=initial_offsets.logical_offset,
    )
    regions: list[OffsetRegion] = []
    start_pos = 0
    start = initial_offsets

    for pos, ch in enumerate(text):
        if markup and pos > 0 and scan.cuts_before(ch):
            if scan.logical == 0 or scan.prev == "\r":
                prev_logical = scan.logical
            else:
                prev_logical = scan.logical - 1
            end = scan.group(
                byte=scan.byte - 1,
                code_point=scan.code_point - 1,
                logical=prev_logical,
            )
            regions.append(OffsetRegion(start_pos, pos, start, end))
            start_pos = pos
            start = scan.group(
                byte=scan.byte,
                code_point=scan.code_point,
                logical=max(scan.logical - 1, 0) if ch == "<" else scan.logical,
            )
        scan.consume(ch, markup=markup)

    if len(text) > start_pos:
        end = scan.group(
            byte=scan.byte - 1,
            code_point=scan.code_point - 1,
            logical=max(start.logical_offset, scan.logical - 1),
        )
        regions.append(OffsetRegion(start_pos, len(text), start, end))

    logger.debug("mapped %d characters onto %d regions (%s)", len(text), len(regions), mode.value)
    return tuple(regions)


def bounds_of(regions: Sequence[OffsetRegion]) -> OffsetRange:
    if not regions:
        raise PreconditionError("cannot derive bounds from an empty region list")
    return OffsetRange(start=regions[0].start_offsets, end=regions[-1].end_offsets)
