"""
sunmoon/api/puzzle_solver.py
============================
The main developer-facing API for SunMoon-Core.

PuzzleSolver wires the pieces together in the order a presentation
layer uses them: validate the starting position, refuse to go on when
it is illegal, then either run to fixpoint ("solve immediately") or
hand out one forced move at a time ("explain step by step").

Public API:
    solver = PuzzleSolver()
    report = solver.validate(grid, constraints)
    result = solver.solve(grid, constraints)
    print(result.summary())

    outcome = solver.explain_next(grid, constraints)
    if outcome:
        print(outcome.step.explanation)
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from sunmoon.api.entry_points import replay_steps
from sunmoon.core.config import SunMoonConfig
from sunmoon.core.exceptions import IllegalStartError
from sunmoon.core.types import (
    ConstraintSet,
    Grid,
    RuleOutcome,
    SolveResult,
    SolveStatus,
    StartValidation,
    Step,
)
from sunmoon.core.validators import ConstraintsLike, normalize_puzzle
from sunmoon.symbolic import legality
from sunmoon.symbolic.engine import DeductionEngine

logger = logging.getLogger(__name__)


class PuzzleSolver:
    """Validation gate + deduction engine behind one object.

    The solver holds configuration only. Every method is a pure function
    of its arguments, so one instance can serve any number of callers.
    """

    def __init__(self, config: Optional[SunMoonConfig] = None):
        self.config = config or SunMoonConfig()
        self.engine = DeductionEngine(self.config.engine)

    @property
    def rule_names(self) -> List[str]:
        return [r.name for r in self.engine.rules]

    # ─── GATE ──────────────────────────────────────────────────────

    def validate(self, grid: Any, constraints: ConstraintsLike, size: Optional[int] = None) -> StartValidation:
        g, cs, n = self._normalize(grid, constraints, size)
        return self._validate(g, cs, n)

    def _validate(self, grid: Grid, constraints: ConstraintSet, size: int) -> StartValidation:
        return legality.validate_start(
            grid,
            constraints,
            size,
            require_nonempty=self.config.validation.require_nonempty_start,
        )

    def _gate(self, grid: Grid, constraints: ConstraintSet, size: int) -> None:
        report = self._validate(grid, constraints, size)
        if not report.valid:
            raise IllegalStartError(
                f"Illegal starting position: {'. '.join(report.violations)}",
                violations=report.violations,
                context={"size": size},
            )

    # ─── SOLVE IMMEDIATELY ─────────────────────────────────────────

    def solve(self, grid: Any, constraints: ConstraintsLike, size: Optional[int] = None) -> SolveResult:
        """Run to fixpoint from a validated start.

        Raises IllegalStartError when the start fails validation. Not
        reaching a full grid is *not* an error: the result has status
        STUCK and carries the steps that were found.
        """
        g, cs, n = self._normalize(grid, constraints, size)

        if legality.is_solved(g, cs, n):
            return SolveResult(SolveStatus.ALREADY_SOLVED, [], g, g)

        self._gate(g, cs, n)
        steps = self.engine.solve_to_fixpoint(g, cs, n)
        final = steps[-1].grid_after if steps else g

        if legality.is_solved(final, cs, n):
            status = SolveStatus.SOLVED
        else:
            status = SolveStatus.STUCK
            logger.warning(
                f"Could not fully solve: rules ran out after {len(steps)} steps. "
                "This does not mean the puzzle has no solution."
            )
        return SolveResult(status=status, steps=steps, initial_grid=g, final_grid=final)

    # ─── EXPLAIN STEP BY STEP ──────────────────────────────────────

    def explain_next(
        self,
        grid: Any,
        constraints: ConstraintsLike,
        size: Optional[int] = None,
        check_start: bool = True,
    ) -> RuleOutcome:
        """One forced move for the caller's current grid, or NOT_FOUND.

        ``check_start=False`` skips the legality gate for callers that
        validated the starting position once and only replay engine
        Steps on top of it.
        """
        g, cs, n = self._normalize(grid, constraints, size)
        if check_start:
            self._gate(g, cs, n)
        return self.engine.next_step(g, cs, n)

    def replay(self, grid: Any, steps: List[Step]) -> Grid:
        return replay_steps(grid, steps)

    # ─── HELPERS ───────────────────────────────────────────────────

    def _normalize(self, grid: Any, constraints: ConstraintsLike, size: Optional[int]):
        return normalize_puzzle(grid, constraints, size, min_size=self.config.validation.min_size)
