from __future__ import annotations

from dataclasses import dataclass
from typing import NewType

from .errors import PreconditionError


ByteOffset = NewType("ByteOffset", int)
CodePointOffset = NewType("CodePointOffset", int)
LogicalOffset = NewType("LogicalOffset", int)
TimeAlignment = NewType("TimeAlignment", int)

_ONE_BYTE = 0x7F
_TWO_BYTE = 0x7FF
_THREE_BYTE = 0xFFFF


def utf8_width(ch: str) -> int:
    """Number of bytes UTF-8 uses to encode the single code point ``ch``."""
    cp = ord(ch)
    if cp <= _ONE_BYTE:
        return 1
    if cp <= _TWO_BYTE:
        return 2
    if cp <= _THREE_BYTE:
        return 3
    return 4


@dataclass(frozen=True, slots=True)
class OffsetGroup:
    """One point in the source, expressed in every coordinate system we track.

    Code-point and logical offsets are always present. The logical offset does
    not advance over markup or carriage returns. Byte offsets are only known
    when the caller anchored the text with one; time alignment is whatever the
    caller supplied and is never derived.
    """

    code_point_offset: CodePointOffset
    logical_offset: LogicalOffset
    byte_offset: ByteOffset | None = None
    time_alignment: TimeAlignment | None = None

    def __post_init__(self) -> None:
        for name in ("code_point_offset", "logical_offset", "byte_offset", "time_alignment"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise PreconditionError(f"{name} must be non-negative, got {value}")

    @classmethod
    def matching(
        cls,
        value: int,
        *,
        byte_offset: int | None = None,
        time_alignment: int | None = None,
    ) -> OffsetGroup:
        return cls(
            code_point_offset=CodePointOffset(value),
            logical_offset=LogicalOffset(value),
            byte_offset=None if byte_offset is None else ByteOffset(byte_offset),
            time_alignment=None if time_alignment is None else TimeAlignment(time_alignment),
        )

    def __str__(self) -> str:
        parts = [f"cp={self.code_point_offset}", f"logical={self.logical_offset}"]
        if self.byte_offset is not None:
            parts.append(f"byte={self.byte_offset}")
        if self.time_alignment is not None:
            parts.append(f"time={self.time_alignment}")
        return "{" + ", ".join(parts) + "}"


@dataclass(frozen=True, slots=True)
class OffsetRange:
    """Inclusive [start, end] span of offset groups."""

    start: OffsetGroup
    end: OffsetGroup

    def __post_init__(self) -> None:
        if self.start.code_point_offset > self.end.code_point_offset:
            raise PreconditionError(
                f"range start {self.start} lies after range end {self.end}",
            )

    def as_code_point_range(self) -> tuple[int, int]:
        return (self.start.code_point_offset, self.end.code_point_offset)

    def as_logical_range(self) -> tuple[int, int]:
        return (self.start.logical_offset, self.end.logical_offset)

    def __str__(self) -> str:
        return f"[{self.start}, {self.end}]"
