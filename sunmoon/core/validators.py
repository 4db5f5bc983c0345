"""
sunmoon/core/validators.py
==========================
Input validation utilities for SunMoon-Core.

Validates:
    - Grid size (integer, even, at least 4)
    - Grid shape (size × size) and cell symbols
    - Constraint endpoints (in range, distinct)

These validators run at API boundaries, not in hot inference paths.
They guard *preconditions*: a malformed input is a caller bug and
raises ``PuzzleInputError``. Whether a well-formed grid is a legal
puzzle position is a separate question answered by
``sunmoon.symbolic.legality``.
"""
from __future__ import annotations

from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union

from sunmoon.core.exceptions import PuzzleInputError
from sunmoon.core.grid import freeze_grid
from sunmoon.core.types import Cell, Constraint, ConstraintSet, Grid

ConstraintsLike = Union[ConstraintSet, Mapping[str, Any], None]

MIN_SIZE = 4


# ─── SIZE ─────────────────────────────────────────────────────────

def validate_size(size: Any, min_size: int = MIN_SIZE) -> List[str]:
    errors: List[str] = []
    if isinstance(size, bool) or not isinstance(size, int):
        errors.append(f"Size must be an integer, got {size!r}")
    elif size < min_size:
        errors.append(f"Size {size} is too small (minimum {min_size})")
    elif size % 2:
        errors.append(f"Size {size} must be even")
    return errors


# ─── GRID ─────────────────────────────────────────────────────────

def validate_grid(rows: Any, size: int) -> List[str]:
    """Check the grid is ``size`` rows of ``size`` known cell symbols."""
    errors: List[str] = []
    if not isinstance(rows, Sequence) or isinstance(rows, str):
        return [f"Grid must be a sequence of rows, got {type(rows).__name__}"]
    if len(rows) != size:
        errors.append(f"Grid has {len(rows)} rows, expected {size}")
    for r, row in enumerate(rows):
        if not isinstance(row, Sequence) or isinstance(row, str):
            errors.append(f"Grid row {r + 1} is not a sequence")
            continue
        if len(row) != size:
            errors.append(f"Grid row {r + 1} has {len(row)} cells, expected {size}")
        for c, raw in enumerate(row):
            try:
                Cell.parse(raw)
            except ValueError:
                errors.append(f"Grid cell ({r + 1},{c + 1}) has unknown value {raw!r}")
    return errors


# ─── CONSTRAINTS ──────────────────────────────────────────────────

def validate_constraint(constraint: Constraint, size: int) -> List[str]:
    """Endpoints must be integer coordinates within ``[0, size)`` and be distinct."""
    errors: List[str] = []
    for r, c in constraint.cells:
        if not (_is_index(r) and _is_index(c)):
            errors.append(f"Constraint {constraint.as_pair()} has non-integer endpoint ({r!r}, {c!r})")
            continue
        if not (0 <= r < size and 0 <= c < size):
            errors.append(
                f"Constraint {constraint.as_pair()} has endpoint ({r}, {c}) "
                f"outside the {size}x{size} grid"
            )
    if constraint.first == constraint.second:
        errors.append(f"Constraint {constraint.as_pair()} links a cell to itself")
    return errors


def _is_index(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_constraints(constraints: ConstraintSet, size: int) -> List[str]:
    errors: List[str] = []
    for constraint in constraints:
        errors.extend(validate_constraint(constraint, size))
    return errors


def coerce_constraints(constraints: ConstraintsLike) -> ConstraintSet:
    """Accept a ConstraintSet or the ``{"equals", "notEquals"}`` mapping."""
    if isinstance(constraints, ConstraintSet):
        return constraints
    try:
        return ConstraintSet.from_dict(constraints)
    except (TypeError, ValueError) as exc:
        raise PuzzleInputError(
            f"Malformed constraints: {exc}",
            errors=[str(exc)],
        ) from exc


# ─── CONVENIENCE VALIDATORS ──────────────────────────────────────

def assert_valid_size(size: Any, min_size: int = MIN_SIZE) -> None:
    errors = validate_size(size, min_size)
    if errors:
        raise PuzzleInputError(
            f"Invalid size: {'; '.join(errors)}",
            errors=errors,
            context={"size": size},
        )


def normalize_puzzle(
    grid: Any,
    constraints: ConstraintsLike,
    size: Optional[int] = None,
    min_size: int = MIN_SIZE,
) -> Tuple[Grid, ConstraintSet, int]:
    """Validate all preconditions and return immutable copies.

    ``size`` defaults to the number of rows. Raises ``PuzzleInputError``
    listing every problem found.
    """
    if size is None:
        size = len(grid) if isinstance(grid, Sequence) else 0
    assert_valid_size(size, min_size)

    errors = validate_grid(grid, size)
    if errors:
        raise PuzzleInputError(
            f"Invalid grid: {'; '.join(errors)}",
            errors=errors,
            context={"size": size},
        )

    constraint_set = coerce_constraints(constraints)
    errors = validate_constraints(constraint_set, size)
    if errors:
        raise PuzzleInputError(
            f"Invalid constraints: {'; '.join(errors)}",
            errors=errors,
            context={"size": size, "constraint_count": len(constraint_set)},
        )
    return freeze_grid(grid), constraint_set, size
