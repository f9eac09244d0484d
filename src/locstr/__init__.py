from __future__ import annotations

from .errors import LocatedStringError, OffsetNotFoundError, PreconditionError
from .located import LocatedString
from .mapping import MappingMode, bounds_of, compute_regions
from .offsets import (
    ByteOffset,
    CodePointOffset,
    LogicalOffset,
    OffsetGroup,
    OffsetRange,
    TimeAlignment,
    utf8_width,
)
from .regions import OffsetRegion

__all__ = [
    "ByteOffset",
    "CodePointOffset",
    "LocatedString",
    "LocatedStringError",
    "LogicalOffset",
    "MappingMode",
    "OffsetGroup",
    "OffsetNotFoundError",
    "OffsetRange",
    "OffsetRegion",
    "PreconditionError",
    "TimeAlignment",
    "bounds_of",
    "compute_regions",
    "utf8_width",
]
