"""
sunmoon/symbolic/engine.py
==========================
DeductionEngine: dispatches the ordered rules against a snapshot, once
(single-step mode) or repeatedly until nothing more follows
(run-to-fixpoint mode).

The engine keeps no state between calls. Every call works on the
immutable snapshot it is given and returns fresh Steps; callers own
history, undo and replay.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from sunmoon.core.config import EngineConfig
from sunmoon.core.exceptions import InvariantBreach, RuleConfigError
from sunmoon.core.grid import cell_at, count_empty
from sunmoon.core.types import (
    NOT_FOUND,
    Cell,
    ConstraintSet,
    Found,
    Grid,
    RuleOutcome,
    Step,
    format_coord,
)
from sunmoon.symbolic.legality import is_complete
from sunmoon.symbolic.rules import DEFAULT_RULES, Board, Rule

logger = logging.getLogger(__name__)


class DeductionEngine:
    """Rule dispatcher and fixpoint driver.

    Usage:
        engine = DeductionEngine()
        outcome = engine.next_step(grid, constraints, 6)
        if outcome:
            grid = outcome.step.grid_after
        steps = engine.solve_to_fixpoint(grid, constraints, 6)

    Inputs must already be normalised (see ``sunmoon.core.validators``);
    the public functions in ``sunmoon.api`` do that for you.
    """

    def __init__(self, config: Optional[EngineConfig] = None, rules: Optional[Sequence[Rule]] = None):
        self.config = config or EngineConfig()
        available = tuple(DEFAULT_RULES if rules is None else rules)
        known = {r.name for r in available}
        unknown = [name for name in self.config.disabled_rules if name not in known]
        if unknown:
            raise RuleConfigError(
                f"Unknown rule name(s) in disabled_rules: {unknown}. Available: {sorted(known)}",
                context={"unknown": unknown},
            )
        self._rules: Tuple[Rule, ...] = tuple(
            r for r in available if r.name not in self.config.disabled_rules
        )

    @property
    def rules(self) -> List[Rule]:
        return list(self._rules)

    # ─── SINGLE STEP ───────────────────────────────────────────────

    def dispatch(self, board: Board) -> RuleOutcome:
        """Try each rule in priority order; the first that fires wins."""
        for rule in self._rules:
            outcome = rule.apply(board)
            if isinstance(outcome, Found):
                if self.config.log_steps:
                    logger.debug(f"Fired {outcome.step.summary()}")
                return outcome
        return NOT_FOUND

    def next_step(self, grid: Grid, constraints: ConstraintSet, size: int) -> RuleOutcome:
        return self.dispatch(Board(grid, constraints, size))

    # ─── RUN TO FIXPOINT ───────────────────────────────────────────

    def solve_to_fixpoint(self, grid: Grid, constraints: ConstraintSet, size: int) -> List[Step]:
        """Apply rules until the grid is full or no rule fires.

        Each successful dispatch removes exactly one Empty cell, so at
        most N² dispatches can succeed. The cap of
        ``iteration_cap_factor × N²`` is a backstop: reaching it with
        Empty cells left raises ``InvariantBreach``.
        """
        max_iterations = self.config.iteration_cap_factor * size * size
        steps: List[Step] = []
        current = grid

        for _ in range(max_iterations):
            if is_complete(current, size):
                break
            outcome = self.next_step(current, constraints, size)
            if not isinstance(outcome, Found):
                logger.info(
                    f"Fixpoint reached after {len(steps)} steps with "
                    f"{count_empty(current)} empty cells left"
                )
                break
            step = outcome.step
            _check_step(step, current)
            steps.append(step)
            current = step.grid_after
        else:
            if not is_complete(current, size):
                raise InvariantBreach(
                    f"Iteration cap {max_iterations} exhausted with "
                    f"{count_empty(current)} empty cells left",
                    context={"size": size, "steps": len(steps)},
                )

        logger.info(f"Run finished: {len(steps)} steps, complete={is_complete(current, size)}")
        return steps


def _check_step(step: Step, grid: Grid) -> None:
    if cell_at(grid, step.result_cell) is not Cell.EMPTY:
        raise InvariantBreach(
            f"{step.rule_name} targeted filled cell {format_coord(step.result_cell)}",
            context={"rule": step.rule_name, "cell": step.result_cell},
        )
