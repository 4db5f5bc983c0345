"""
sunmoon/core/grid.py
====================
Grid snapshot helpers. A Grid is a tuple of row tuples, so every
snapshot handed out by the core is immutable and can be shared freely.
"""

from __future__ import annotations

from typing import Any, List, Optional, Sequence

from sunmoon.core.types import Cell, Coord, Grid


def freeze_grid(rows: Sequence[Sequence[Any]]) -> Grid:
    """Copy any nested sequence of cells/symbols into an immutable Grid.

    Raises ValueError on unknown cell symbols; shape is checked by
    ``sunmoon.core.validators``.
    """
    return tuple(tuple(Cell.parse(v) for v in row) for row in rows)


def empty_grid(size: int) -> Grid:
    return tuple(tuple(Cell.EMPTY for _ in range(size)) for _ in range(size))


def with_cell(grid: Grid, coord: Coord, value: Cell) -> Grid:
    """Return a new Grid equal to ``grid`` except at ``coord``."""
    r, c = coord
    row = grid[r]
    return grid[:r] + (row[:c] + (value,) + row[c + 1:],) + grid[r + 1:]


def cell_at(grid: Grid, coord: Coord) -> Cell:
    return grid[coord[0]][coord[1]]


def count_empty(grid: Grid) -> int:
    return sum(1 for row in grid for v in row if v is Cell.EMPTY)


def grid_to_wire(grid: Grid) -> List[List[Optional[str]]]:
    return [[v.to_wire() for v in row] for row in grid]


def format_grid(grid: Grid) -> str:
    """Plain-text rendering: ``S`` sun, ``M`` moon, ``.`` empty."""
    glyph = {Cell.SUN: "S", Cell.MOON: "M", Cell.EMPTY: "."}
    return "\n".join(" ".join(glyph[v] for v in row) for row in grid)
