"""
sunmoon/core/exceptions.py
==========================
Custom exception hierarchy for SunMoon-Core.

All exceptions carry structured context so callers can
programmatically handle different failure modes.

Note what is *not* here: a puzzle on which no rule fires is a normal,
expected outcome (``NOT_FOUND`` / ``SolveStatus.STUCK``), never an error.
"""

from __future__ import annotations
from typing import List, Optional


class SunMoonError(Exception):
    """Base exception for all SunMoon-Core errors."""

    def __init__(self, message: str, context: Optional[dict] = None):
        super().__init__(message)
        self.context = context or {}


class PuzzleInputError(SunMoonError):
    """Raised when the input itself is malformed: odd or too small size,
    ragged grid, unknown cell symbol, or a constraint whose endpoints are
    out of range or identical.

    This is a precondition violation of the caller, distinct from a
    puzzle-legality violation.
    """

    def __init__(self, message: str, errors: Optional[List[str]] = None, context: dict = None):
        super().__init__(message, context)
        self.errors = errors or []


class IllegalStartError(SunMoonError):
    """Raised when solving is requested from an illegal starting position.

    Carries the full aggregated list of violations produced by
    ``validate_start``; solving never proceeds past this gate.
    """

    def __init__(self, message: str, violations: List[str], context: dict = None):
        super().__init__(message, context)
        self.violations = violations


class InvariantBreach(SunMoonError):
    """Raised when an internal invariant of the engine does not hold.

    Should never happen: the fixpoint iteration cap was exhausted while
    Empty cells remained, or a Step was replayed over a filled cell.
    """

    pass


class PuzzleFileError(SunMoonError):
    """Raised when a puzzle file cannot be read or is structurally invalid."""

    pass


class RuleConfigError(SunMoonError, ValueError):
    """Raised when the engine config names a rule that does not exist,
    e.g. a typo in ``EngineConfig.disabled_rules``.
    """

    pass
