"""
tests/conftest.py
==================
Shared pytest fixtures for all SunMoon-Core tests.

Grids are written as row strings: ``S`` sun, ``M`` moon, ``.`` empty.
"""

import pytest
from sunmoon.api.puzzle_io import parse_grid_rows
from sunmoon.api.puzzle_solver import PuzzleSolver
from sunmoon.core.grid import freeze_grid
from sunmoon.core.types import ConstraintSet


# ─── GRIDS ────────────────────────────────────────────────────────

SOLUTION_6 = [
    "SSMSMM",
    "MMSMSS",
    "SMSSMM",
    "MSMMSS",
    "SMMSSM",
    "MSSMMS",
]

SAMPLE_6 = [
    "SS..M.",
    "..S..S",
    "S..S.M",
    ".S..S.",
    ".M..S.",
    "M.S..S",
]


def to_grid(rows):
    return freeze_grid(parse_grid_rows(list(rows)))


@pytest.fixture
def make_grid():
    """``make_grid("SS....", ...)``; missing rows are padded with empties."""
    def _make(*rows, size=None):
        size = size or len(rows[0])
        padded = list(rows) + ["." * size] * (size - len(rows))
        return to_grid(padded)
    return _make


@pytest.fixture
def solution_6():
    return to_grid(SOLUTION_6)


@pytest.fixture
def empty_6():
    return to_grid(["......"] * 6)


# ─── CONSTRAINTS ──────────────────────────────────────────────────


@pytest.fixture
def no_constraints():
    return ConstraintSet()


@pytest.fixture
def sample_constraints():
    return ConstraintSet.from_pairs(
        equals=[(1, 0, 1, 1), (5, 3, 5, 4)],
        not_equals=[(4, 2, 4, 3)],
    )


@pytest.fixture
def sample_puzzle(sample_constraints):
    return to_grid(SAMPLE_6), sample_constraints


# ─── SOLVER ───────────────────────────────────────────────────────


@pytest.fixture
def solver():
    return PuzzleSolver()
