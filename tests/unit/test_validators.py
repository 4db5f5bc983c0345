"""tests/unit/test_validators.py — Input preconditions and config"""
import pytest
from sunmoon.core.config import SunMoonConfig
from sunmoon.core.exceptions import PuzzleInputError, SunMoonError
from sunmoon.core.types import Cell, Constraint, ConstraintKind, ConstraintSet
from sunmoon.core.validators import (
    assert_valid_size,
    coerce_constraints,
    normalize_puzzle,
    validate_constraint,
    validate_grid,
    validate_size,
)


class TestSize:
    def test_valid_sizes(self):
        for n in (4, 6, 8, 10):
            assert validate_size(n) == []

    def test_odd_size(self):
        assert validate_size(5) == ["Size 5 must be even"]

    def test_too_small(self):
        assert validate_size(2) == ["Size 2 is too small (minimum 4)"]

    def test_bool_is_not_a_size(self):
        assert validate_size(True)

    def test_assert_raises_with_errors(self):
        with pytest.raises(PuzzleInputError) as exc_info:
            assert_valid_size(7)
        assert exc_info.value.errors == ["Size 7 must be even"]
        assert exc_info.value.context["size"] == 7


class TestGrid:
    def test_well_formed(self):
        assert validate_grid([[None] * 4 for _ in range(4)], 4) == []

    def test_wrong_row_count(self):
        errors = validate_grid([[None] * 4 for _ in range(3)], 4)
        assert "Grid has 3 rows, expected 4" in errors

    def test_ragged_row(self):
        rows = [[None] * 4 for _ in range(4)]
        rows[2] = [None] * 3
        assert validate_grid(rows, 4) == ["Grid row 3 has 3 cells, expected 4"]

    def test_unknown_symbol(self):
        rows = [[None] * 4 for _ in range(4)]
        rows[0][1] = "star"
        assert validate_grid(rows, 4) == ["Grid cell (1,2) has unknown value 'star'"]

    def test_not_a_sequence(self):
        assert validate_grid("SSMM", 4)


class TestConstraints:
    def test_out_of_range_endpoint(self):
        c = Constraint.between((0, 0), (0, 6), ConstraintKind.EQUALS)
        errors = validate_constraint(c, 6)
        assert len(errors) == 1
        assert "outside the 6x6 grid" in errors[0]

    def test_self_link(self):
        c = Constraint.between((1, 1), (1, 1), ConstraintKind.NOT_EQUALS)
        assert validate_constraint(c, 6) == [f"Constraint {c.as_pair()} links a cell to itself"]

    @pytest.mark.parametrize("endpoint", [0.9, True, 2.0])
    def test_non_integer_endpoint(self, endpoint):
        c = Constraint.between((0, 0), (0, endpoint), ConstraintKind.EQUALS)
        errors = validate_constraint(c, 6)
        assert len(errors) == 1
        assert "non-integer endpoint" in errors[0]

    def test_float_endpoint_is_not_truncated(self):
        with pytest.raises(PuzzleInputError) as exc_info:
            normalize_puzzle([[None] * 4] * 4, {"equals": [[0, 0, 0, 0.9]]})
        assert "non-integer endpoint" in exc_info.value.errors[0]

    def test_coerce_passes_constraint_set_through(self):
        cs = ConstraintSet()
        assert coerce_constraints(cs) is cs

    def test_coerce_malformed_pair(self):
        with pytest.raises(PuzzleInputError):
            coerce_constraints({"equals": [[0, 0, 1]]})


class TestNormalizePuzzle:
    def test_size_defaults_to_row_count(self):
        grid, cs, size = normalize_puzzle([["sun", None, None, None]] + [[None] * 4] * 3, None)
        assert size == 4
        assert grid[0][0] is Cell.SUN
        assert len(cs) == 0

    def test_returns_immutable_copy(self):
        rows = [[None] * 4 for _ in range(4)]
        grid, _, _ = normalize_puzzle(rows, {})
        rows[0][0] = "sun"
        assert grid[0][0] is Cell.EMPTY
        assert isinstance(grid, tuple)

    def test_explicit_size_mismatch(self):
        with pytest.raises(PuzzleInputError):
            normalize_puzzle([[None] * 4] * 4, None, size=6)

    def test_constraint_outside_grid(self):
        with pytest.raises(PuzzleInputError) as exc_info:
            normalize_puzzle([[None] * 4] * 4, {"equals": [[0, 0, 4, 0]]})
        assert exc_info.value.errors

    def test_input_error_is_a_sunmoon_error(self):
        with pytest.raises(SunMoonError):
            normalize_puzzle([[None] * 5] * 5, None)


class TestConfig:
    def test_solve_mode_silences_step_logging(self):
        assert SunMoonConfig.for_mode("solve").engine.log_steps is False

    def test_explain_mode_logs_steps(self):
        cfg = SunMoonConfig.for_mode("explain")
        assert cfg.mode == "explain"
        assert cfg.engine.log_steps is True

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            SunMoonConfig.for_mode("race")

    def test_configs_are_independent(self):
        a, b = SunMoonConfig(), SunMoonConfig()
        a.engine.disabled_rules.append("Gap Rule")
        assert b.engine.disabled_rules == []
