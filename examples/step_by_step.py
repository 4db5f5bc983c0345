"""
examples/step_by_step.py
========================
"Explain one step at a time" mode: the caller owns the grid and its
history, the engine only ever answers with the next forced move.
"""
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from sunmoon.api.entry_points import apply_step
from sunmoon.api.puzzle_io import PuzzleLoader
from sunmoon.api.puzzle_solver import PuzzleSolver
from sunmoon.core.config import SunMoonConfig
from sunmoon.core.grid import format_grid
from sunmoon.core.types import Found

PUZZLE = os.path.join(os.path.dirname(__file__), "puzzles", "sample_6x6.json")


def main():
    puzzle = PuzzleLoader.from_json(PUZZLE)
    solver = PuzzleSolver(SunMoonConfig.for_mode("explain"))

    grid = puzzle.grid
    history = []
    outcome = solver.explain_next(grid, puzzle.constraints)
    while isinstance(outcome, Found):
        step = outcome.step
        history.append(step)
        print(f"Step {len(history)}: {step.rule_name}")
        print(f"  {step.explanation}")
        grid = apply_step(grid, step)
        outcome = solver.explain_next(grid, puzzle.constraints, check_start=False)

    print()
    print(format_grid(grid))
    print(f"{len(history)} steps recorded.")


if __name__ == "__main__":
    main()
