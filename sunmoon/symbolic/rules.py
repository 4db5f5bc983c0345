"""
sunmoon/symbolic/rules.py
=========================
The ten inference rules, in priority order.

Each rule is a pure function of an immutable Board snapshot. Internally
a rule is a *candidate finder*: a generator that walks rows then columns
(both scan directions where the pattern is directional) and yields every
cell its pattern forces. ``Rule.apply`` takes the first admissible
candidate and wraps it into a Step, or answers NOT_FOUND.

A candidate is admissible when its cell is Empty and the value still
fits under the N/2 cap of the cell's row and column. A sound rule never
proposes anything else on a solvable position; the check keeps the
engine from stacking a fourth symbol onto an already saturated line
when it is handed an illegal one.

Rules:
     1. No-Three Rule                     XX_  → _ is the opposite
     2. Parity Rule                       line holds N/2 of X → rest opposite
     3. Constraint Propagation            one filled endpoint → other endpoint
     4. Edge Case Rule                    X....X → cells next to the ends opposite
     5. Gap Rule                          X_X  → _ is the opposite
     6. Two-Equals-At-End Rule            XX..._ → last cell opposite
     7. Second-To-Last-Equals-First Rule  X...X_ → last cell opposite
     8. Modifier Balance Rule             near-saturated line + "×" pair
     9. End-With-Equals-Constraint Rule   X...[=] → pair opposite
    10. Adjacent-Equals-Constraint Rule   X[=]  → pair opposite

Rules 4, 6, 7 and 9 rely on the end symbol having a single remaining
interior slot, which is only true for lines of length 4 or 6. On larger
grids they never fire.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, FrozenSet, Iterator, Optional, Tuple

from sunmoon.core.grid import cell_at, with_cell
from sunmoon.core.types import (
    NOT_FOUND,
    Cell,
    Constraint,
    ConstraintSet,
    Coord,
    Found,
    Grid,
    RuleOutcome,
    Step,
    format_coord,
)
from sunmoon.symbolic.lines import Line, all_lines, cap, lines_through, shared_line

logger = logging.getLogger(__name__)

END_PATTERN_MAX_SIZE = 6


# ─────────────────────────────────────────────
#  BOARD SNAPSHOT
# ─────────────────────────────────────────────


@dataclass(frozen=True)
class Board:
    """Read-only view of one position, shared by all rules of a dispatch."""

    grid: Grid
    constraints: ConstraintSet
    size: int

    @property
    def cap(self) -> int:
        return cap(self.size)

    @property
    def lines(self) -> Tuple[Line, ...]:
        return all_lines(self.size)

    def at(self, coord: Coord) -> Cell:
        return cell_at(self.grid, coord)

    def is_empty(self, coord: Coord) -> bool:
        return cell_at(self.grid, coord) is Cell.EMPTY

    def has_room(self, coord: Coord, value: Cell) -> bool:
        """True if ``value`` at ``coord`` keeps both its lines within the cap."""
        return all(line.count(self.grid, value) < self.cap for line in lines_through(coord, self.size))

    def equals_between(self, a: Coord, b: Coord) -> Optional[Constraint]:
        return self._equals_index().get(frozenset((a, b)))

    def _equals_index(self) -> Dict[FrozenSet[Coord], Constraint]:
        # Frozen dataclass: build lazily, cache on the instance.
        index = self.__dict__.get("_eq_index")
        if index is None:
            index = {frozenset(c.cells): c for c in self.constraints.equals}
            object.__setattr__(self, "_eq_index", index)
        return index


@dataclass(frozen=True)
class Candidate:
    cell: Coord
    value: Cell
    affected: Tuple[Coord, ...]
    explanation: str


CandidateFinder = Callable[[Board], Iterator[Candidate]]


@dataclass(frozen=True)
class Rule:
    """A named inference rule. ``apply`` is pure and fills at most one cell."""

    name: str
    find: CandidateFinder
    description: str = ""

    def apply(self, board: Board) -> RuleOutcome:
        for candidate in self.find(board):
            if not board.is_empty(candidate.cell):
                continue
            if not board.has_room(candidate.cell, candidate.value):
                logger.debug(
                    f"{self.name}: skipped {format_coord(candidate.cell)} → "
                    f"{candidate.value.label} (line already at cap)"
                )
                continue
            return Found(make_step(self.name, board, candidate))
        return NOT_FOUND


def make_step(rule_name: str, board: Board, candidate: Candidate) -> Step:
    return Step(
        rule_name=rule_name,
        explanation=candidate.explanation,
        affected_cells=candidate.affected,
        result_cell=candidate.cell,
        result_value=candidate.value,
        grid_before=board.grid,
        grid_after=with_cell(board.grid, candidate.cell, candidate.value),
    )


# ─────────────────────────────────────────────
#  1. NO-THREE
# ─────────────────────────────────────────────


def find_no_three(board: Board) -> Iterator[Candidate]:
    for line in board.lines:
        cells = line.coords
        for i in range(len(cells) - 1):
            a, b = cells[i], cells[i + 1]
            v = board.at(a)
            if not v.is_filled or board.at(b) is not v:
                continue
            for j in (i + 2, i - 1):
                if 0 <= j < len(cells) and board.is_empty(cells[j]):
                    yield Candidate(
                        cell=cells[j],
                        value=v.opposite,
                        affected=(a, b),
                        explanation=(
                            f"Cells {format_coord(a)} and {format_coord(b)} in {line.name} are both "
                            f"{v.label}. Another {v.label} at {format_coord(cells[j])} would make three "
                            f"in a row, so it must be {v.opposite.label}."
                        ),
                    )


# ─────────────────────────────────────────────
#  2. PARITY
# ─────────────────────────────────────────────


def find_parity(board: Board) -> Iterator[Candidate]:
    for line in board.lines:
        for symbol in (Cell.SUN, Cell.MOON):
            if line.count(board.grid, symbol) != board.cap:
                continue
            holders = tuple(c for c in line.coords if board.at(c) is symbol)
            for target in line.empty_cells(board.grid):
                yield Candidate(
                    cell=target,
                    value=symbol.opposite,
                    affected=holders,
                    explanation=(
                        f"{line.title} already has {board.cap} {symbol.plural}, the most it can hold. "
                        f"Every remaining empty cell must be {symbol.opposite.label}, "
                        f"so {format_coord(target)} is {symbol.opposite.label}."
                    ),
                )


# ─────────────────────────────────────────────
#  3. CONSTRAINT PROPAGATION
# ─────────────────────────────────────────────


def find_constraint_propagation(board: Board) -> Iterator[Candidate]:
    for constraint in board.constraints:
        for known in constraint.cells:
            target = constraint.partner(known)
            v = board.at(known)
            if not v.is_filled or not board.is_empty(target):
                continue
            forced = constraint.forced_value(v)
            relation = "the same symbol" if constraint.is_equals else "different symbols"
            yield Candidate(
                cell=target,
                value=forced,
                affected=(known,),
                explanation=(
                    f"Cells {format_coord(constraint.first)} {constraint.kind.symbol} "
                    f"{format_coord(constraint.second)} must hold {relation}. "
                    f"{format_coord(known)} is {v.label}, so {format_coord(target)} must be {forced.label}."
                ),
            )


# ─────────────────────────────────────────────
#  4. EDGE CASE
# ─────────────────────────────────────────────


def find_edge_case(board: Board) -> Iterator[Candidate]:
    if board.size > END_PATTERN_MAX_SIZE:
        return
    for line in board.lines:
        cells = line.coords
        first, last = cells[0], cells[-1]
        v = board.at(first)
        if not v.is_filled or board.at(last) is not v:
            continue
        for target in (cells[1], cells[-2]):
            if board.is_empty(target):
                yield Candidate(
                    cell=target,
                    value=v.opposite,
                    affected=(first, last),
                    explanation=(
                        f"Both ends of {line.name}, {format_coord(first)} and {format_coord(last)}, are "
                        f"{v.label}. A {v.label} next to either end would leave the remaining "
                        f"{v.opposite.plural} no room without three in a row, "
                        f"so {format_coord(target)} must be {v.opposite.label}."
                    ),
                )


# ─────────────────────────────────────────────
#  5. GAP
# ─────────────────────────────────────────────


def find_gap(board: Board) -> Iterator[Candidate]:
    for line in board.lines:
        cells = line.coords
        for i in range(len(cells) - 2):
            a, gap, b = cells[i], cells[i + 1], cells[i + 2]
            v = board.at(a)
            if v.is_filled and board.at(b) is v and board.is_empty(gap):
                yield Candidate(
                    cell=gap,
                    value=v.opposite,
                    affected=(a, b),
                    explanation=(
                        f"{format_coord(a)} and {format_coord(b)} in {line.name} are both {v.label} "
                        f"with one cell between them. Filling the gap with {v.label} would make "
                        f"three in a row, so {format_coord(gap)} must be {v.opposite.label}."
                    ),
                )


# ─────────────────────────────────────────────
#  6. TWO-EQUALS-AT-END
# ─────────────────────────────────────────────


def find_two_equals_at_end(board: Board) -> Iterator[Candidate]:
    if board.size > END_PATTERN_MAX_SIZE:
        return
    for line in board.lines:
        for cells in line.directions():
            v = board.at(cells[0])
            target = cells[-1]
            if v.is_filled and board.at(cells[1]) is v and board.is_empty(target):
                yield Candidate(
                    cell=target,
                    value=v.opposite,
                    affected=(cells[0], cells[1]),
                    explanation=(
                        f"{line.title} starts with two {v.plural} at {format_coord(cells[0])} and "
                        f"{format_coord(cells[1])}. A third {v.label} at the far end would squeeze "
                        f"the {v.opposite.plural} into three in a row, "
                        f"so {format_coord(target)} must be {v.opposite.label}."
                    ),
                )


# ─────────────────────────────────────────────
#  7. SECOND-TO-LAST-EQUALS-FIRST
# ─────────────────────────────────────────────


def find_second_to_last_equals_first(board: Board) -> Iterator[Candidate]:
    if board.size > END_PATTERN_MAX_SIZE:
        return
    for line in board.lines:
        for cells in line.directions():
            v = board.at(cells[0])
            target = cells[-1]
            if v.is_filled and board.at(cells[-2]) is v and board.is_empty(target):
                yield Candidate(
                    cell=target,
                    value=v.opposite,
                    affected=(cells[0], cells[-2]),
                    explanation=(
                        f"In {line.name}, {format_coord(cells[0])} and {format_coord(cells[-2])} are both "
                        f"{v.label}. Another {v.label} at {format_coord(target)} would force every cell "
                        f"between them to {v.opposite.label}, three in a row, "
                        f"so {format_coord(target)} must be {v.opposite.label}."
                    ),
                )


# ─────────────────────────────────────────────
#  8. MODIFIER BALANCE
# ─────────────────────────────────────────────


def find_modifier_balance(board: Board) -> Iterator[Candidate]:
    near_cap = board.cap - 1
    for line in board.lines:
        for symbol in (Cell.SUN, Cell.MOON):
            if line.count(board.grid, symbol) != near_cap:
                continue
            yield from _cross_line_balance(board, line, symbol)
            yield from _same_line_balance(board, line, symbol)


def _cross_line_balance(board: Board, line: Line, symbol: Cell) -> Iterator[Candidate]:
    """A "×" pair in another, already saturated line settles its open end."""
    for constraint in board.constraints.not_equals:
        other = shared_line(constraint, board.size)
        if other is None or other == line:
            continue
        if other.count(board.grid, symbol) != board.cap:
            continue
        for known in constraint.cells:
            target = constraint.partner(known)
            if board.at(known) is symbol and board.is_empty(target):
                yield Candidate(
                    cell=target,
                    value=symbol.opposite,
                    affected=(known,),
                    explanation=(
                        f"{other.title} already holds {board.cap} {symbol.plural} and {format_coord(known)} "
                        f"is one of them. The × between {format_coord(known)} and {format_coord(target)} "
                        f"means {format_coord(target)} must be {symbol.opposite.label}."
                    ),
                )


def _same_line_balance(board: Board, line: Line, symbol: Cell) -> Iterator[Candidate]:
    """A "×" pair inside a line one short of its cap supplies the last symbol."""
    for constraint in board.constraints.not_equals:
        if shared_line(constraint, board.size) != line:
            continue
        if not all(board.is_empty(c) for c in constraint.cells):
            continue
        for target in line.empty_cells(board.grid):
            if target in constraint.cells:
                continue
            yield Candidate(
                cell=target,
                value=symbol.opposite,
                affected=constraint.cells,
                explanation=(
                    f"{line.title} has {board.cap - 1} {symbol.plural} and needs exactly one more. "
                    f"The × pair {format_coord(constraint.first)} and {format_coord(constraint.second)} "
                    f"must supply it, so every other empty cell in {line.name} is "
                    f"{symbol.opposite.label}, including {format_coord(target)}."
                ),
            )


# ─────────────────────────────────────────────
#  9. END-WITH-EQUALS-CONSTRAINT
# ─────────────────────────────────────────────


def find_end_with_equals_constraint(board: Board) -> Iterator[Candidate]:
    if board.size > END_PATTERN_MAX_SIZE:
        return
    for line in board.lines:
        for cells in line.directions():
            end = cells[0]
            v = board.at(end)
            if not v.is_filled:
                continue
            near, far = cells[-2], cells[-1]
            if not (board.is_empty(near) and board.is_empty(far)):
                continue
            if board.equals_between(near, far) is None:
                continue
            yield Candidate(
                cell=near,
                value=v.opposite,
                affected=(end, far),
                explanation=(
                    f"{format_coord(end)} at one end of {line.name} is {v.label}, and the last two cells "
                    f"at the other end, {format_coord(near)} = {format_coord(far)}, must match. "
                    f"Two more {v.plural} there would leave three {v.opposite.plural} in a row between, "
                    f"so {format_coord(near)} must be {v.opposite.label}."
                ),
            )


# ─────────────────────────────────────────────
#  10. ADJACENT-EQUALS-CONSTRAINT
# ─────────────────────────────────────────────


def find_adjacent_equals_constraint(board: Board) -> Iterator[Candidate]:
    for line in board.lines:
        for cells in line.directions():
            for i in range(len(cells) - 2):
                known, p, q = cells[i], cells[i + 1], cells[i + 2]
                v = board.at(known)
                if not v.is_filled or not (board.is_empty(p) and board.is_empty(q)):
                    continue
                constraint = board.equals_between(p, q)
                if constraint is None:
                    continue
                target = constraint.first
                yield Candidate(
                    cell=target,
                    value=v.opposite,
                    affected=(known, constraint.partner(target)),
                    explanation=(
                        f"{format_coord(known)} is {v.label} and sits right next to the matched pair "
                        f"{format_coord(constraint.first)} = {format_coord(constraint.second)}. "
                        f"If the pair were {v.plural} there would be three in a row, "
                        f"so {format_coord(target)} must be {v.opposite.label}."
                    ),
                )


# ─────────────────────────────────────────────
#  REGISTRY (fixed priority order)
# ─────────────────────────────────────────────

NO_THREE = Rule("No-Three Rule", find_no_three, "No three identical symbols in a row")
PARITY = Rule("Parity Rule", find_parity, "A saturated line fills up with the other symbol")
CONSTRAINT_PROPAGATION = Rule(
    "Constraint Propagation", find_constraint_propagation, "= and × markers copy or flip a known value"
)
EDGE_CASE = Rule("Edge Case Rule", find_edge_case, "Equal ends push their neighbours to the opposite")
GAP = Rule("Gap Rule", find_gap, "X _ X forces the gap to the opposite")
TWO_EQUALS_AT_END = Rule(
    "Two-Equals-At-End Rule", find_two_equals_at_end, "XX at one end forces the far end to the opposite"
)
SECOND_TO_LAST_EQUALS_FIRST = Rule(
    "Second-To-Last-Equals-First Rule",
    find_second_to_last_equals_first,
    "First equals second-to-last forces the last cell to the opposite",
)
MODIFIER_BALANCE = Rule(
    "Modifier Balance Rule", find_modifier_balance, "× pairs complete a line one short of its cap"
)
END_WITH_EQUALS_CONSTRAINT = Rule(
    "End-With-Equals-Constraint Rule",
    find_end_with_equals_constraint,
    "A known end and an = pair at the far end",
)
ADJACENT_EQUALS_CONSTRAINT = Rule(
    "Adjacent-Equals-Constraint Rule",
    find_adjacent_equals_constraint,
    "A known cell next to an = pair",
)

DEFAULT_RULES: Tuple[Rule, ...] = (
    NO_THREE,
    PARITY,
    CONSTRAINT_PROPAGATION,
    EDGE_CASE,
    GAP,
    TWO_EQUALS_AT_END,
    SECOND_TO_LAST_EQUALS_FIRST,
    MODIFIER_BALANCE,
    END_WITH_EQUALS_CONSTRAINT,
    ADJACENT_EQUALS_CONSTRAINT,
)


def rule_names() -> Tuple[str, ...]:
    return tuple(r.name for r in DEFAULT_RULES)
