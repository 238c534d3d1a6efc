from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, order=True)
class Loc:
    """A source location.

    Row and column are both 1-based. Locations order lexicographically by
    (row, col).
    """

    row: int = 1
    col: int = 1

    def __str__(self) -> str:
        return f"{self.row}:{self.col}"


ORIGIN = Loc(1, 1)


@dataclass(frozen=True, slots=True)
class Span:
    """Closed span [start, end]; `end` is the location of the last character."""

    start: Loc = ORIGIN
    end: Loc = ORIGIN

    @classmethod
    def at(cls, loc: Loc) -> "Span":
        return cls(start=loc, end=loc)

    def join(self, other: "Span") -> "Span":
        return Span(start=self.start, end=other.end)

    def format(self, file: str | None = None) -> str:
        if file:
            return f"{file}:{self.start.row}:{self.start.col}"
        return f"{self.start.row}:{self.start.col}"
