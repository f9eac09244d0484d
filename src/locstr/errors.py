from __future__ import annotations

from dataclasses import dataclass


class LocatedStringError(Exception):
    """Base class for errors raised by locstr."""


@dataclass(slots=True)
class PreconditionError(LocatedStringError, ValueError):
    message: str
    hint: str | None = None

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message}\nhint: {self.hint}"
        return self.message


@dataclass(slots=True)
class OffsetNotFoundError(LocatedStringError, LookupError):
    offset: int
    message: str = "no region covers code point offset"

    def __str__(self) -> str:
        return f"{self.message} {self.offset}"
