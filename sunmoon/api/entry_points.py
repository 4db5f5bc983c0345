"""
sunmoon/api/entry_points.py
===========================
The core's public entry points as plain functions.

Every function accepts loose input (nested lists of ``None`` / ``"sun"``
/ ``"moon"`` or Cells; constraints as a ConstraintSet or the
``{"equals": [...], "notEquals": [...]}`` mapping), validates the
preconditions, and works on an immutable copy. Nothing is retained
between calls.

    validate_start(grid, constraints, size)    -> StartValidation
    is_legal_partial(grid, constraints, size)  -> bool
    is_complete(grid, size)                    -> bool
    next_step(grid, constraints, size)         -> Found | NOT_FOUND
    solve_to_fixpoint(grid, constraints, size) -> List[Step]
    apply_step(grid, step)                     -> Grid
"""

from __future__ import annotations

from typing import Any, Iterable, List, Optional

from sunmoon.core.config import EngineConfig
from sunmoon.core.exceptions import InvariantBreach, PuzzleInputError
from sunmoon.core.grid import cell_at, with_cell
from sunmoon.core.types import Cell, Grid, RuleOutcome, StartValidation, Step, format_coord
from sunmoon.core.validators import ConstraintsLike, normalize_puzzle
from sunmoon.symbolic import legality
from sunmoon.symbolic.engine import DeductionEngine


def validate_start(grid: Any, constraints: ConstraintsLike, size: Optional[int] = None) -> StartValidation:
    g, cs, n = normalize_puzzle(grid, constraints, size)
    return legality.validate_start(g, cs, n)


def is_legal_partial(grid: Any, constraints: ConstraintsLike, size: Optional[int] = None) -> bool:
    g, cs, n = normalize_puzzle(grid, constraints, size)
    return legality.is_legal_partial(g, cs, n)


def is_complete(grid: Any, size: Optional[int] = None) -> bool:
    g, _, n = normalize_puzzle(grid, None, size)
    return legality.is_complete(g, n)


def is_solved(grid: Any, constraints: ConstraintsLike, size: Optional[int] = None) -> bool:
    g, cs, n = normalize_puzzle(grid, constraints, size)
    return legality.is_solved(g, cs, n)


def is_valid_move(grid: Any, constraints: ConstraintsLike, row: int, col: int, size: Optional[int] = None) -> bool:
    g, cs, n = normalize_puzzle(grid, constraints, size)
    _check_coord((row, col), n)
    return legality.is_valid_move(g, cs, n, row, col)


def next_step(
    grid: Any,
    constraints: ConstraintsLike,
    size: Optional[int] = None,
    config: Optional[EngineConfig] = None,
) -> RuleOutcome:
    g, cs, n = normalize_puzzle(grid, constraints, size)
    return DeductionEngine(config).next_step(g, cs, n)


def solve_to_fixpoint(
    grid: Any,
    constraints: ConstraintsLike,
    size: Optional[int] = None,
    config: Optional[EngineConfig] = None,
) -> List[Step]:
    g, cs, n = normalize_puzzle(grid, constraints, size)
    return DeductionEngine(config).solve_to_fixpoint(g, cs, n)


def apply_step(grid: Any, step: Step) -> Grid:
    """Pure: copy ``grid`` and set ``step.result_cell`` to ``step.result_value``."""
    g, _, n = normalize_puzzle(grid, None)
    _check_coord(step.result_cell, n)
    _check_value(step)
    return with_cell(g, step.result_cell, step.result_value)


def replay_steps(grid: Any, steps: Iterable[Step]) -> Grid:
    """Apply a recorded Step sequence, checking each lands on an Empty cell."""
    g, _, n = normalize_puzzle(grid, None)
    for i, step in enumerate(steps):
        _check_coord(step.result_cell, n)
        _check_value(step)
        if cell_at(g, step.result_cell) is not Cell.EMPTY:
            raise InvariantBreach(
                f"Step {i + 1} ({step.rule_name}) targets filled cell {format_coord(step.result_cell)}",
                context={"step_index": i, "cell": step.result_cell},
            )
        g = with_cell(g, step.result_cell, step.result_value)
    return g


def _check_value(step: Step) -> None:
    if not step.result_value.is_filled:
        raise PuzzleInputError(
            f"Step {step.rule_name!r} has no value to place at {format_coord(step.result_cell)}",
            context={"cell": step.result_cell},
        )


def _check_coord(coord, size: int) -> None:
    r, c = coord
    if not (0 <= r < size and 0 <= c < size):
        raise PuzzleInputError(
            f"Cell ({r}, {c}) is outside the {size}x{size} grid",
            context={"cell": coord, "size": size},
        )
