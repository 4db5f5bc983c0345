#!/usr/bin/env python3
"""
scripts/solve.py
================
Validate and solve a Sun/Moon puzzle from the command line.

Usage:
    python scripts/solve.py examples/puzzles/sample_6x6.json
    python scripts/solve.py examples/puzzles/sample_6x6.json --step      # first forced move only
    python scripts/solve.py examples/puzzles/sample_6x6.json --json      # steps as JSON
"""
import argparse
import json
import logging
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))


def main():
    parser = argparse.ArgumentParser(description="SunMoon-Core Solver CLI")
    parser.add_argument("puzzle", help="Path to puzzle JSON")
    parser.add_argument("--step", action="store_true",
                        help="Explain only the next forced move")
    parser.add_argument("--json", action="store_true",
                        help="Print steps as JSON instead of text")
    parser.add_argument("--disable", nargs="*", default=[],
                        help="Rule names to leave out, e.g. 'Gap Rule'")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    from sunmoon.api.puzzle_io import PuzzleLoader
    from sunmoon.api.puzzle_solver import PuzzleSolver
    from sunmoon.core.config import SunMoonConfig
    from sunmoon.core.exceptions import IllegalStartError, SunMoonError
    from sunmoon.core.grid import format_grid, grid_to_wire
    from sunmoon.core.types import Found

    config = SunMoonConfig.for_mode("explain" if args.step else "solve")
    config.engine.disabled_rules = list(args.disable)

    try:
        puzzle = PuzzleLoader.from_json(args.puzzle)
        solver = PuzzleSolver(config)
        if args.step:
            outcome = solver.explain_next(puzzle.grid, puzzle.constraints, puzzle.size)
            if not isinstance(outcome, Found):
                print("No forced move found.")
                return 0
            steps = [outcome.step]
            final = outcome.step.grid_after
        else:
            result = solver.solve(puzzle.grid, puzzle.constraints, puzzle.size)
            steps, final = result.steps, result.final_grid
    except IllegalStartError as exc:
        print("Illegal starting position:")
        for v in exc.violations:
            print(f"  - {v}")
        return 2
    except SunMoonError as exc:
        print(f"Error: {exc}")
        return 1

    if args.json:
        print(json.dumps({
            "steps": [s.to_dict() for s in steps],
            "final_grid": grid_to_wire(final),
        }, indent=2, ensure_ascii=False))
        return 0

    print("Starting position: valid")
    for i, step in enumerate(steps, start=1):
        print(f"Step {i}: {step.summary()}")
        print(f"    {step.explanation}")
    print()
    print(format_grid(final))
    if not args.step:
        print()
        print(result.summary())
    return 0


if __name__ == "__main__":
    sys.exit(main())
