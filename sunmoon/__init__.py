"""
sunmoon/__init__.py — Public API exports
"""

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
from sunmoon.api.puzzle_io import Puzzle, PuzzleLoader
from sunmoon.api.puzzle_solver import PuzzleSolver
from sunmoon.core.config import DEFAULT_CONFIG, EngineConfig, SunMoonConfig
from sunmoon.core.exceptions import (
    IllegalStartError,
    InvariantBreach,
    PuzzleFileError,
    PuzzleInputError,
    RuleConfigError,
    SunMoonError,
)
from sunmoon.core.types import (
    NOT_FOUND,
    Cell,
    Constraint,
    ConstraintKind,
    ConstraintSet,
    Found,
    NotFound,
    SolveResult,
    SolveStatus,
    StartValidation,
    Step,
)
from sunmoon.version import VERSION_INFO, __version__

__all__ = [
    "PuzzleSolver",
    "Puzzle",
    "PuzzleLoader",
    "validate_start",
    "is_legal_partial",
    "is_complete",
    "is_solved",
    "is_valid_move",
    "next_step",
    "solve_to_fixpoint",
    "apply_step",
    "replay_steps",
    "Cell",
    "Constraint",
    "ConstraintKind",
    "ConstraintSet",
    "Step",
    "Found",
    "NotFound",
    "NOT_FOUND",
    "StartValidation",
    "SolveResult",
    "SolveStatus",
    "SunMoonConfig",
    "EngineConfig",
    "DEFAULT_CONFIG",
    "SunMoonError",
    "PuzzleInputError",
    "IllegalStartError",
    "InvariantBreach",
    "PuzzleFileError",
    "RuleConfigError",
    "__version__",
    "VERSION_INFO",
]
