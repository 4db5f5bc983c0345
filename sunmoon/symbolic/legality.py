"""
sunmoon/symbolic/legality.py
============================
Structural legality of a grid position.

One rule set, several consumers:

    validate_start     — pre-solve gate, collects *every* violation
    is_legal_partial   — fast check, stops at the first violation
    is_legal_complete  — partial rules + no Empty cell + exact balance
    is_valid_move      — the rules as seen from one freshly placed cell

Rules per line (rows and columns independently):
    count(Sun) ≤ N/2, count(Moon) ≤ N/2
    no three consecutive identical non-empty symbols
Rules per constraint (only when both endpoints are filled):
    "=" endpoints equal, "×" endpoints different

All messages are 1-indexed for display.
"""

from __future__ import annotations

import logging
from typing import Iterator

from sunmoon.core.grid import cell_at
from sunmoon.core.types import Cell, ConstraintSet, Coord, Grid, StartValidation, format_coord
from sunmoon.symbolic.lines import Line, all_lines, cap, lines_through

logger = logging.getLogger(__name__)


# ─── SHARED RULE SET ──────────────────────────────────────────────

def iter_violations(
    grid: Grid,
    constraints: ConstraintSet,
    size: int,
    require_nonempty: bool = False,
    require_complete: bool = False,
) -> Iterator[str]:
    """Yield violation messages lazily, in a stable order.

    Consumers that only need a yes/no answer take the first item and
    stop, so the remaining checks are never evaluated.
    """
    if require_nonempty and all(v is Cell.EMPTY for row in grid for v in row):
        yield "Grid cannot be completely empty"

    limit = cap(size)
    for line in all_lines(size):
        yield from _line_violations(grid, line, limit, require_complete)

    for constraint in constraints.equals:
        a, b = (cell_at(grid, c) for c in constraint.cells)
        if constraint.is_violated_by(a, b):
            yield (
                f"Constraint violation: Cells {format_coord(constraint.first)} and "
                f"{format_coord(constraint.second)} must be equal but have different values"
            )

    for constraint in constraints.not_equals:
        a, b = (cell_at(grid, c) for c in constraint.cells)
        if constraint.is_violated_by(a, b):
            yield (
                f"Constraint violation: Cells {format_coord(constraint.first)} and "
                f"{format_coord(constraint.second)} must be different but have the same value"
            )


def _line_violations(grid: Grid, line: Line, limit: int, require_complete: bool) -> Iterator[str]:
    values = line.values(grid)
    suns = values.count(Cell.SUN)
    moons = values.count(Cell.MOON)

    if suns > limit:
        yield f"{line.title} has too many suns ({suns} > {limit})"
    if moons > limit:
        yield f"{line.title} has too many moons ({moons} > {limit})"

    across = "column" if line.kind == "row" else "row"
    for i in range(len(values) - 2):
        v = values[i]
        if v.is_filled and v == values[i + 1] == values[i + 2]:
            yield f"{line.title} has 3+ consecutive {v.plural} starting at {across} {i + 1}"

    if require_complete:
        empties = values.count(Cell.EMPTY)
        if empties:
            yield f"{line.title} has {empties} empty cells"
        elif suns != moons:
            yield f"{line.title} is unbalanced ({suns} suns, {moons} moons)"


# ─── ENTRY POINTS ─────────────────────────────────────────────────

def validate_start(
    grid: Grid,
    constraints: ConstraintSet,
    size: int,
    require_nonempty: bool = True,
) -> StartValidation:
    """Full validation: accumulate every violation of the starting position."""
    violations = list(
        iter_violations(grid, constraints, size, require_nonempty=require_nonempty)
    )
    if violations:
        logger.info(f"Starting position rejected with {len(violations)} violation(s)")
    return StartValidation(valid=not violations, violations=violations)


def is_legal_partial(grid: Grid, constraints: ConstraintSet, size: int) -> bool:
    return next(iter_violations(grid, constraints, size), None) is None


def is_legal_complete(grid: Grid, constraints: ConstraintSet, size: int) -> bool:
    first = next(iter_violations(grid, constraints, size, require_complete=True), None)
    return first is None


def is_complete(grid: Grid, size: int) -> bool:
    """Fill-check only: no Empty cell. Does not re-verify legality."""
    return all(grid[r][c] is not Cell.EMPTY for r in range(size) for c in range(size))


def is_solved(grid: Grid, constraints: ConstraintSet, size: int) -> bool:
    """Win state: every cell filled and every rule satisfied exactly."""
    return is_complete(grid, size) and is_legal_complete(grid, constraints, size)


def is_valid_move(grid: Grid, constraints: ConstraintSet, size: int, row: int, col: int) -> bool:
    """Check the position as seen from the cell just placed at (row, col).

    Looks at that cell's row and column counts, any run of three passing
    through it, and every constraint. Used by editors to reject a move
    before it is committed.
    """
    limit = cap(size)
    coord = (row, col)
    for line in lines_through(coord, size):
        if line.count(grid, Cell.SUN) > limit or line.count(grid, Cell.MOON) > limit:
            return False
        if _run_length_through(grid, line, coord) > 2:
            return False
    return not any(
        c.is_violated_by(cell_at(grid, c.first), cell_at(grid, c.second))
        for c in constraints
    )


def _run_length_through(grid: Grid, line: Line, coord: Coord) -> int:
    value = cell_at(grid, coord)
    if value is Cell.EMPTY:
        return 0
    values = line.values(grid)
    i = line.position(coord)
    lo = i
    while lo > 0 and values[lo - 1] is value:
        lo -= 1
    hi = i
    while hi < len(values) - 1 and values[hi + 1] is value:
        hi += 1
    return hi - lo + 1
