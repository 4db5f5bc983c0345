"""sunmoon/api — High-level developer API."""

from sunmoon.api.entry_points import (
    apply_step,
    is_complete,
    is_legal_partial,
    is_solved,
    is_valid_move,
    next_step,
    replay_steps,
    solve_to_fixpoint,
    validate_start,
)
from sunmoon.api.puzzle_io import Puzzle, PuzzleLoader, parse_grid_rows
from sunmoon.api.puzzle_solver import PuzzleSolver

__all__ = [
    "PuzzleSolver",
    "Puzzle",
    "PuzzleLoader",
    "parse_grid_rows",
    "validate_start",
    "is_legal_partial",
    "is_complete",
    "is_solved",
    "is_valid_move",
    "next_step",
    "solve_to_fixpoint",
    "apply_step",
    "replay_steps",
]
