"""tests/unit/test_api.py — Public entry points and the PuzzleSolver facade"""
from dataclasses import replace

import pytest
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
from sunmoon.api.puzzle_solver import PuzzleSolver
from sunmoon.core.config import EngineConfig, SunMoonConfig, ValidationConfig
from sunmoon.core.exceptions import IllegalStartError, InvariantBreach, PuzzleInputError
from sunmoon.core.grid import grid_to_wire
from sunmoon.core.types import NOT_FOUND, Cell, Found, SolveStatus


def wire(*rows):
    symbols = {"S": "sun", "M": "moon", ".": None}
    return [[symbols[ch] for ch in row] for row in rows]


class TestEntryPoints:
    def test_accepts_wire_grid_and_constraint_dict(self):
        grid = wire("SS....", *["......"] * 5)
        report = validate_start(grid, {"notEquals": [[0, 0, 0, 1]]})
        assert not report.valid
        assert "(1,1) and (1,2)" in report.violations[0]

    def test_next_step_on_wire_grid(self):
        outcome = next_step(wire("SS....", *["......"] * 5), {})
        assert isinstance(outcome, Found)
        assert outcome.step.result_cell == (0, 2)

    def test_next_step_none_on_empty_grid(self):
        assert next_step(wire(*["......"] * 6), None) is NOT_FOUND

    def test_next_step_respects_engine_config(self):
        cfg = EngineConfig(disabled_rules=["No-Three Rule"])
        outcome = next_step(wire("SS....", *["......"] * 5), {}, config=cfg)
        assert outcome.step.rule_name == "Two-Equals-At-End Rule"
        assert outcome.step.result_cell == (0, 5)

    def test_solve_to_fixpoint(self, sample_puzzle, solution_6):
        grid, cs = sample_puzzle
        steps = solve_to_fixpoint(grid_to_wire(grid), cs.to_dict())
        assert steps[-1].grid_after == solution_6

    def test_legality_helpers(self, solution_6, sample_puzzle):
        grid, cs = sample_puzzle
        assert is_legal_partial(grid, cs)
        assert not is_complete(grid)
        assert is_complete(solution_6)
        assert is_solved(solution_6, cs)

    def test_is_valid_move(self, make_grid):
        grid = make_grid("SSS...", size=6)
        assert not is_valid_move(grid, None, 0, 2)
        assert is_valid_move(make_grid("SS....", size=6), None, 0, 1)

    def test_is_valid_move_out_of_range(self, empty_6):
        with pytest.raises(PuzzleInputError):
            is_valid_move(empty_6, None, 6, 0)

    def test_malformed_input_raises(self):
        with pytest.raises(PuzzleInputError):
            next_step(wire("SS...", *["....."] * 4), {})

    def test_bad_cell_symbol(self):
        grid = wire(*["......"] * 6)
        grid[0][0] = "comet"
        with pytest.raises(PuzzleInputError) as exc_info:
            validate_start(grid, {})
        assert "unknown value 'comet'" in exc_info.value.errors[0]


class TestApplyAndReplay:
    def test_apply_step_is_pure(self, make_grid, no_constraints):
        grid = make_grid("SS....", size=6)
        step = next_step(grid, no_constraints).step
        after = apply_step(grid, step)
        assert after == step.grid_after
        assert grid[0][2] is Cell.EMPTY

    def test_apply_step_outside_grid(self, make_grid, no_constraints):
        step = next_step(make_grid("SS....", size=6), no_constraints).step
        with pytest.raises(PuzzleInputError):
            apply_step(make_grid("....", size=4), replace(step, result_cell=(5, 5)))

    def test_apply_step_refuses_to_erase_a_cell(self, make_grid, no_constraints):
        grid = make_grid("SS....", size=6)
        step = replace(next_step(grid, no_constraints).step, result_cell=(0, 0), result_value=Cell.EMPTY)
        with pytest.raises(PuzzleInputError, match="no value to place"):
            apply_step(grid, step)
        with pytest.raises(PuzzleInputError):
            replay_steps(make_grid("......", size=6), [replace(step, result_cell=(3, 3))])

    def test_replay_reproduces_final_grid(self, sample_puzzle, solution_6):
        grid, cs = sample_puzzle
        steps = solve_to_fixpoint(grid, cs)
        assert replay_steps(grid, steps) == solution_6

    def test_replay_over_filled_cell(self, sample_puzzle):
        grid, cs = sample_puzzle
        steps = solve_to_fixpoint(grid, cs)
        with pytest.raises(InvariantBreach) as exc_info:
            replay_steps(grid, steps + steps[:1])
        assert exc_info.value.context["step_index"] == len(steps)


class TestPuzzleSolver:
    def test_solves_sample(self, solver, sample_puzzle, solution_6):
        grid, cs = sample_puzzle
        result = solver.solve(grid, cs)
        assert result.status is SolveStatus.SOLVED
        assert result.is_solved
        assert result.final_grid == solution_6
        assert result.initial_grid == grid
        assert sum(result.rules_used.values()) == len(result.steps) == 21

    def test_already_solved(self, solver, solution_6, sample_constraints):
        result = solver.solve(solution_6, sample_constraints)
        assert result.status is SolveStatus.ALREADY_SOLVED
        assert result.steps == []

    def test_stuck_is_not_an_error(self, solver, make_grid, no_constraints):
        grid = make_grid("S.....", size=6)
        result = solver.solve(grid, no_constraints)
        assert result.status is SolveStatus.STUCK
        assert result.final_grid == grid
        assert not result.is_solved

    def test_illegal_start_is_refused(self, solver, make_grid):
        grid = make_grid("SS....", size=6)
        with pytest.raises(IllegalStartError) as exc_info:
            solver.solve(grid, {"notEquals": [[0, 0, 0, 1]]})
        assert exc_info.value.violations == [
            "Constraint violation: Cells (1,1) and (1,2) must be different but have the same value"
        ]
        assert str(exc_info.value).startswith("Illegal starting position")

    def test_empty_grid_refused_by_default(self, solver, empty_6):
        with pytest.raises(IllegalStartError):
            solver.solve(empty_6, None)

    def test_empty_grid_allowed_by_config(self, empty_6):
        cfg = SunMoonConfig(validation=ValidationConfig(require_nonempty_start=False))
        result = PuzzleSolver(cfg).solve(empty_6, None)
        assert result.status is SolveStatus.STUCK

    def test_explain_next_gates_start(self, solver, empty_6):
        with pytest.raises(IllegalStartError):
            solver.explain_next(empty_6, None)
        assert solver.explain_next(empty_6, None, check_start=False) is NOT_FOUND

    def test_explain_next_walks_to_solution(self, solver, sample_puzzle, solution_6):
        grid, cs = sample_puzzle
        outcome = solver.explain_next(grid, cs)
        while outcome:
            grid = apply_step(grid, outcome.step)
            outcome = solver.explain_next(grid, cs, check_start=False)
        assert grid == solution_6

    def test_min_size_is_configurable(self, make_grid):
        cfg = SunMoonConfig(validation=ValidationConfig(min_size=6))
        with pytest.raises(PuzzleInputError):
            PuzzleSolver(cfg).validate(make_grid("S...", size=4), None)

    def test_rule_names_follow_engine(self):
        cfg = SunMoonConfig(engine=EngineConfig(disabled_rules=["Gap Rule"]))
        names = PuzzleSolver(cfg).rule_names
        assert len(names) == 9
        assert "Gap Rule" not in names

    def test_replay(self, solver, sample_puzzle, solution_6):
        grid, cs = sample_puzzle
        result = solver.solve(grid, cs)
        assert solver.replay(grid, result.steps) == solution_6
