"""
sunmoon/symbolic/lines.py
=========================
Line geometry: rows and columns as ordered coordinate sequences.

Every rule and every legality check is written once against a Line,
so rows and columns (and both scan directions of each) are handled
identically.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional, Tuple

from sunmoon.core.grid import cell_at
from sunmoon.core.types import Cell, Constraint, Coord, Grid


@dataclass(frozen=True)
class Line:
    kind:   str                 # "row" | "column"
    index:  int
    coords: Tuple[Coord, ...]

    @property
    def name(self) -> str:
        """1-indexed display name, e.g. ``row 3``."""
        return f"{self.kind} {self.index + 1}"

    @property
    def title(self) -> str:
        return self.name.capitalize()

    def __len__(self) -> int:
        return len(self.coords)

    def values(self, grid: Grid) -> List[Cell]:
        return [cell_at(grid, c) for c in self.coords]

    def count(self, grid: Grid, symbol: Cell) -> int:
        return sum(1 for c in self.coords if cell_at(grid, c) is symbol)

    def empty_cells(self, grid: Grid) -> List[Coord]:
        return [c for c in self.coords if cell_at(grid, c) is Cell.EMPTY]

    def contains(self, coord: Coord) -> bool:
        if self.kind == "row":
            return coord[0] == self.index
        return coord[1] == self.index

    def position(self, coord: Coord) -> int:
        """Offset of ``coord`` along this line."""
        return coord[1] if self.kind == "row" else coord[0]

    def directions(self) -> Tuple[Tuple[Coord, ...], Tuple[Coord, ...]]:
        """Both scan orders: as stored, then reversed."""
        return self.coords, self.coords[::-1]


@lru_cache(maxsize=None)
def all_lines(size: int) -> Tuple[Line, ...]:
    """Every row (top to bottom) followed by every column (left to right)."""
    rows = tuple(
        Line("row", r, tuple((r, c) for c in range(size))) for r in range(size)
    )
    cols = tuple(
        Line("column", c, tuple((r, c) for r in range(size))) for c in range(size)
    )
    return rows + cols


def lines_through(coord: Coord, size: int) -> Tuple[Line, Line]:
    """The row and the column containing ``coord``."""
    lines = all_lines(size)
    return lines[coord[0]], lines[size + coord[1]]


def shared_line(constraint: Constraint, size: int) -> Optional[Line]:
    """The line holding both endpoints of ``constraint``, if any."""
    (r1, c1), (r2, c2) = constraint.cells
    if r1 == r2:
        return all_lines(size)[r1]
    if c1 == c2:
        return all_lines(size)[size + c1]
    return None


def cap(size: int) -> int:
    """Maximum count of either symbol in one line."""
    return size // 2
