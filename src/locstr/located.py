from __future__ import annotations

from dataclasses import dataclass, field

from .errors import OffsetNotFoundError, PreconditionError
from .mapping import MappingMode, bounds_of, compute_regions
from .offsets import CodePointOffset, LogicalOffset, OffsetGroup, OffsetRange
from .regions import OffsetRegion


@dataclass(frozen=True, slots=True, eq=False)
class LocatedString:
    """Text that remembers where each of its characters came from.

    Every position of ``text`` is covered by exactly one ``OffsetRegion``;
    regions are contiguous and ordered by position. Inside a region the
    code-point offset grows by one per position while the logical offset
    either does the same or, in a skip region, stands still.

    Equality is strict: same text, same bounds and the same regions, so two
    strings that differ only in which interior material was skipped compare
    unequal.
    """

    text: str
    bounds: OffsetRange
    regions: tuple[OffsetRegion, ...]
    _hash: int | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "regions", tuple(self.regions))
        self._check_validity()

    @classmethod
    def from_text(
        cls,
        text: str,
        initial_offsets: OffsetGroup | None = None,
        *,
        mode: MappingMode = MappingMode.PLAIN,
    ) -> LocatedString:
        if initial_offsets is None:
            initial_offsets = OffsetGroup.matching(0)
        regions = compute_regions(text, initial_offsets, mode=mode)
        if not regions:
            raise PreconditionError(
                "cannot locate an empty string",
                hint="located strings need at least one character to anchor offsets",
            )
        return cls(text, bounds_of(regions), regions)

    def _check_validity(self) -> None:
        if not self.regions:
            raise PreconditionError(f"located string {self.text!r} with bounds {self.bounds} lacks regions")
        first, last = self.regions[0], self.regions[-1]
        if self.bounds.start.code_point_offset > first.start_offsets.code_point_offset:
            raise PreconditionError(
                "bounds and regions have inconsistent start code point offsets: "
                f"{self.bounds.start.code_point_offset} > {first.start_offsets.code_point_offset}",
            )
        if self.bounds.end.code_point_offset > last.end_offsets.code_point_offset:
            raise PreconditionError(
                "bounds and regions have inconsistent end code point offsets: "
                f"{self.bounds.end.code_point_offset} > {last.end_offsets.code_point_offset}",
            )
        expected = 0
        for region in self.regions:
            if region.start_pos != expected:
                raise PreconditionError(
                    f"region {region} does not start at position {expected}",
                    hint="regions must be contiguous and ordered by position",
                )
            expected = region.end_pos
        if expected != len(self.text):
            raise PreconditionError(
                f"regions cover {expected} positions but the text has {len(self.text)}",
            )

    # Offset accessors

    @property
    def start_logical_offset(self) -> LogicalOffset:
        return self.bounds.start.logical_offset

    @property
    def end_logical_offset(self) -> LogicalOffset:
        return self.bounds.end.logical_offset

    @property
    def start_code_point_offset(self) -> CodePointOffset:
        return self.bounds.start.code_point_offset

    @property
    def end_code_point_offset(self) -> CodePointOffset:
        return self.bounds.end.code_point_offset

    def __len__(self) -> int:
        return len(self.text)

    # Derivation

    def substring(self, start: int | OffsetGroup, end: int | OffsetGroup) -> LocatedString:
        """Located substring between two code-point offsets, both inclusive.

        This rebuilds region metadata for the slice and is much more expensive
        than :meth:`raw_substring_by_code_point_offsets`; use that when only
        the text is needed.
        """
        start_pos, end_pos = self._positions_for(start, end)
        return self.substring_by_position(start_pos, end_pos)

    def substring_by_position(self, start: int, end: int) -> LocatedString:
        """Located substring of positions [start, end)."""
        self._check_window(start, end)
        regions = self._regions_of_window(start, end)
        return LocatedString(self.text[start:end], bounds_of(regions), regions)

    def raw_substring_by_code_point_offsets(
        self, start: int | OffsetGroup, end: int | OffsetGroup
    ) -> str:
        start_pos, end_pos = self._positions_for(start, end)
        return self.raw_substring_by_position(start_pos, end_pos)

    def raw_substring_by_position(self, start: int, end: int) -> str:
        self._check_window(start, end)
        return self.text[start:end]

    def _positions_for(self, start: int | OffsetGroup, end: int | OffsetGroup) -> tuple[int, int]:
        base = self.bounds.start.code_point_offset
        return _code_point(start) - base, _code_point(end) - base + 1

    def _check_window(self, start: int, end: int) -> None:
        if start < 0 or end > len(self.text):
            raise PreconditionError(
                f"window [{start}, {end}) lies outside [0, {len(self.text)})",
            )
        if start >= end:
            raise PreconditionError(f"window start {start} is not less than end {end}")

    def _regions_of_window(self, start: int, end: int) -> tuple[OffsetRegion, ...]:
        # Clip each overlapping region to the window and move its boundary
        # groups inward by the trimmed amount.
        length = end - start
        out: list[OffsetRegion] = []
        for region in self.regions[self._last_region_starting_at(start):]:
            clipped = region.trimmed(
                max(0, start - region.start_pos),
                max(0, region.end_pos - end),
                rebase=start,
            )
            out.append(clipped)
            if clipped.end_pos >= length:
                break
        return tuple(out)

    def _last_region_starting_at(self, pos: int) -> int:
        i = 1
        while i < len(self.regions) and self.regions[i].start_pos <= pos:
            i += 1
        return i - 1

    # Queries

    def offset_group_for_code_point_offset(self, offset: int) -> OffsetGroup:
        """Earliest offset group whose code-point offset is ``offset``.

        Only code-point and logical offsets are reported. Raises
        :class:`OffsetNotFoundError` when no region covers ``offset``.
        """
        for region in self.regions:
            first = region.start_offsets.code_point_offset
            # Closed interval, not half-open: end_offsets is inclusive, and a
            # half-open test would miss the last code point of every region.
            if first <= offset <= region.end_offsets.code_point_offset:
                return OffsetGroup(
                    code_point_offset=CodePointOffset(offset),
                    logical_offset=LogicalOffset(region.logical_offset_at(offset - first)),
                )
        raise OffsetNotFoundError(offset=offset)

    def contains(self, other: LocatedString) -> bool:
        """True if ``other`` is a verbatim, offset-consistent piece of this string."""
        return other._is_substring_of(self)

    def _is_substring_of(self, sup: LocatedString) -> bool:
        start_pos = sup._position_of_code_point(self.regions[0].start_offsets.code_point_offset)
        if start_pos is None:
            return False
        end_pos = start_pos + len(self)
        if end_pos > len(sup):
            return False
        start_cp, end_cp = self.bounds.as_code_point_range()
        if start_cp != sup._code_point_starting_at(start_pos):
            return False
        if end_cp != sup._code_point_ending_at(end_pos) - 1:
            return False
        return sup.text[start_pos:end_pos] == self.text

    def _position_of_code_point(self, code_point: int) -> int | None:
        for region in self.regions:
            first = region.start_offsets.code_point_offset
            if first > code_point:
                return None
            if code_point <= region.end_offsets.code_point_offset:
                return region.start_pos + (code_point - first)
        return None

    def _code_point_starting_at(self, pos: int) -> int:
        region = self.regions[self._last_region_starting_at(pos)]
        return region.start_offsets.code_point_offset + (pos - region.start_pos)

    def _code_point_ending_at(self, pos: int) -> int:
        region = self.regions[self._last_region_starting_at(pos)]
        if pos == region.end_pos - 1:
            return region.end_offsets.code_point_offset
        return region.start_offsets.code_point_offset + (pos - region.start_pos)

    # Structural

    def __hash__(self) -> int:
        # Racing writers store the same value.
        if self._hash is None:
            object.__setattr__(self, "_hash", hash((self.text, self.bounds, self.regions)))
        return self._hash

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, LocatedString):
            return NotImplemented
        if hash(self) != hash(other):
            return False
        return (
            self.bounds == other.bounds
            and self.text == other.text
            and self.regions == other.regions
        )

    def __repr__(self) -> str:
        return f"LocatedString(bounds={self.bounds}, text={self.text!r})"


def _code_point(value: int | OffsetGroup) -> int:
    if isinstance(value, OffsetGroup):
        return value.code_point_offset
    return value

