"""Source positions and ranges.

Every token, syntax node, runtime value and error carries a `Range` so
that a front end can point back at the exact text responsible for it.
Positions are zero-indexed and a range's `end` is the position of its
*last* character, not one past it.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Position:
    row: int
    col: int

    def __repr__(self) -> str:
        return f"({self.row}, {self.col})"


@dataclass(frozen=True)
class Range:
    begin: Position
    end: Position

    def __repr__(self) -> str:
        return f"{{begin: {self.begin!r}, end: {self.end!r}}}"

    @staticmethod
    def at(row: int, col: int) -> 'Range':
        """A range covering the single character at (row, col)."""
        pos = Position(row, col)
        return Range(pos, pos)

    @staticmethod
    def of(begin_row: int, begin_col: int, end_row: int, end_col: int) -> 'Range':
        return Range(Position(begin_row, begin_col), Position(end_row, end_col))

    @staticmethod
    def span(first: 'Range', last: 'Range') -> 'Range':
        """From the beginning of `first` to the end of `last`."""
        return Range(first.begin, last.end)
