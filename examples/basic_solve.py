"""
examples/basic_solve.py
=======================
Minimal SunMoon-Core example: validate a puzzle, then solve it outright.
"""
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from sunmoon.api.puzzle_io import PuzzleLoader
from sunmoon.api.puzzle_solver import PuzzleSolver
from sunmoon.core.grid import format_grid

PUZZLE = os.path.join(os.path.dirname(__file__), "puzzles", "sample_6x6.json")


def main():
    puzzle = PuzzleLoader.from_json(PUZZLE)
    solver = PuzzleSolver()

    report = solver.validate(puzzle.grid, puzzle.constraints)
    print(f"Valid start: {report.valid}")

    result = solver.solve(puzzle.grid, puzzle.constraints)
    print(format_grid(result.final_grid))
    print(result.summary())
    assert result.is_solved, "Sample puzzle should be solvable by the rules alone"
    print("✓ Basic solve passed.")


if __name__ == "__main__":
    main()
