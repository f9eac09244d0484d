from __future__ import annotations

from dataclasses import dataclass

from .errors import PreconditionError
from .offsets import CodePointOffset, LogicalOffset, OffsetGroup, OffsetRange


@dataclass(frozen=True, slots=True)
class OffsetRegion:
    """Positions [start_pos, end_pos) of a located string and the source offsets they map to.

    ``start_offsets`` and ``end_offsets`` are inclusive: they describe the first
    and the last character of the run.
    """

    start_pos: int
    end_pos: int
    start_offsets: OffsetGroup
    end_offsets: OffsetGroup

    def __post_init__(self) -> None:
        if self.end_pos <= self.start_pos:
            raise PreconditionError(
                f"region end position {self.end_pos} must exceed start position {self.start_pos}",
            )
        if self.end_offsets.code_point_offset < self.start_offsets.code_point_offset:
            raise PreconditionError(
                f"region ends at code point {self.end_offsets.code_point_offset} "
                f"before it starts at {self.start_offsets.code_point_offset}",
            )

    @property
    def pos_length(self) -> int:
        return self.end_pos - self.start_pos

    @property
    def code_point_length(self) -> int:
        return self.end_offsets.code_point_offset - self.start_offsets.code_point_offset + 1

    @property
    def logical_length(self) -> int:
        return self.end_offsets.logical_offset - self.start_offsets.logical_offset + 1

    @property
    def is_skip_region(self) -> bool:
        """True when the logical offset did not advance across this region (markup, ``\\r``)."""
        return (
            self.code_point_length > 0
            and self.start_offsets.logical_offset == self.end_offsets.logical_offset
        )

    def logical_offset_at(self, delta: int) -> int:
        """Logical offset of the code point ``delta`` places into this region.

        The logical offset never passes ``end_offsets``: a region flushed at a
        trailing carriage return is one logical step shorter than it is wide,
        and that carriage return shares the offset of the character before it.
        """
        first = self.start_offsets.logical_offset
        if self.is_skip_region:
            return first
        return min(first + delta, self.end_offsets.logical_offset)

    def trimmed(self, front: int, back: int, *, rebase: int) -> OffsetRegion:
        """Drop ``front`` positions from the start and ``back`` from the end, then move left by ``rebase``.

        Trimmed boundaries carry only code-point and logical offsets; byte
        offsets and time alignment cannot be recovered from a code-point delta.
        """
        start = self.start_offsets
        if front:
            start = OffsetGroup(
                code_point_offset=CodePointOffset(start.code_point_offset + front),
                logical_offset=LogicalOffset(self.logical_offset_at(front)),
            )
        end = self.end_offsets
        if back:
            end = OffsetGroup(
                code_point_offset=CodePointOffset(end.code_point_offset - back),
                logical_offset=LogicalOffset(self.logical_offset_at(self.code_point_length - 1 - back)),
            )
        return OffsetRegion(self.start_pos + front - rebase, self.end_pos - back - rebase, start, end)

    def offsets(self) -> OffsetRange:
        return OffsetRange(start=self.start_offsets, end=self.end_offsets)

    def __str__(self) -> str:
        return f"OffsetRegion{{pos: [{self.start_pos}, {self.end_pos}); {self.offsets()}}}"
