"""
sunmoon/core/types.py
=====================
Foundation type system for SunMoon-Core.
Every module imports from here. No circular dependencies.

Model:
  - A Grid is an N×N immutable snapshot of Cells (N even, N ≥ 4)
  - A Constraint links two distinct cells with "=" or "×"
  - A Step records one forced move and the grids either side of it
  - Rules answer with a tagged RuleOutcome: Found(step) or NOT_FOUND
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union


# ─────────────────────────────────────────────
#  ENUMERATIONS
# ─────────────────────────────────────────────

class Cell(Enum):
    """State of one grid cell. There are no other states."""
    EMPTY = "empty"
    SUN   = "sun"
    MOON  = "moon"

    @property
    def is_filled(self) -> bool:
        return self is not Cell.EMPTY

    @property
    def opposite(self) -> "Cell":
        if self is Cell.SUN:
            return Cell.MOON
        if self is Cell.MOON:
            return Cell.SUN
        raise ValueError("Cell.EMPTY has no opposite")

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def plural(self) -> str:
        return f"{self.value}s"

    def to_wire(self) -> Optional[str]:
        """JSON form used by the frontend: null, "sun" or "moon"."""
        return None if self is Cell.EMPTY else self.value

    @classmethod
    def parse(cls, raw: Any) -> "Cell":
        """Accept a Cell, None, or a symbol string (sun/moon/empty, S/M/.)."""
        if isinstance(raw, Cell):
            return raw
        if raw is None:
            return cls.EMPTY
        if isinstance(raw, str):
            key = raw.strip().lower()
            if key in _CELL_ALIASES:
                return _CELL_ALIASES[key]
        raise ValueError(f"Unknown cell value {raw!r}")


_CELL_ALIASES: Dict[str, Cell] = {
    "": Cell.EMPTY, ".": Cell.EMPTY, "_": Cell.EMPTY, "empty": Cell.EMPTY,
    "s": Cell.SUN, "sun": Cell.SUN, "☀": Cell.SUN,
    "m": Cell.MOON, "moon": Cell.MOON, "☾": Cell.MOON,
}


class ConstraintKind(Enum):
    EQUALS     = "equals"
    NOT_EQUALS = "not_equals"

    @property
    def symbol(self) -> str:
        return "=" if self is ConstraintKind.EQUALS else "×"


class SolveStatus(Enum):
    SOLVED         = "solved"
    STUCK          = "stuck"            # soft outcome: no rule fires
    ALREADY_SOLVED = "already_solved"


Coord = Tuple[int, int]
Grid = Tuple[Tuple[Cell, ...], ...]


def format_coord(coord: Coord) -> str:
    """Human-readable, 1-indexed coordinate: ``(row, col)``."""
    return f"({coord[0] + 1},{coord[1] + 1})"


# ─────────────────────────────────────────────
#  CONSTRAINTS
# ─────────────────────────────────────────────

@dataclass(frozen=True)
class Constraint:
    """Binary relation between two distinct cells.

    Frozen so constraints can be deduplicated in sets. Use
    ``Constraint.between`` to get canonical endpoint order
    (by row, then column), which makes duplicate detection
    independent of the order the caller listed the endpoints in.
    """
    first:  Coord
    second: Coord
    kind:   ConstraintKind

    @classmethod
    def between(cls, a: Coord, b: Coord, kind: ConstraintKind) -> "Constraint":
        a, b = tuple(a), tuple(b)
        if b < a:
            a, b = b, a
        return cls(first=a, second=b, kind=kind)

    @classmethod
    def from_pair(cls, pair: Sequence[int], kind: ConstraintKind) -> "Constraint":
        """Build from the wire form ``(row1, col1, row2, col2)``."""
        if len(pair) != 4:
            raise ValueError(f"Constraint pair must have 4 integers, got {list(pair)!r}")
        r1, c1, r2, c2 = pair
        return cls.between((r1, c1), (r2, c2), kind)

    @property
    def cells(self) -> Tuple[Coord, Coord]:
        return (self.first, self.second)

    @property
    def is_equals(self) -> bool:
        return self.kind is ConstraintKind.EQUALS

    def partner(self, coord: Coord) -> Coord:
        if coord == self.first:
            return self.second
        if coord == self.second:
            return self.first
        raise ValueError(f"{format_coord(coord)} is not an endpoint of {self}")

    def forced_value(self, known: Cell) -> Cell:
        """Value the partner endpoint must take when one endpoint is ``known``."""
        return known if self.is_equals else known.opposite

    def is_violated_by(self, a: Cell, b: Cell) -> bool:
        """True only when both endpoints are filled and disagree with the kind."""
        if not (a.is_filled and b.is_filled):
            return False
        return (a != b) if self.is_equals else (a == b)

    def as_pair(self) -> Tuple[int, int, int, int]:
        return (self.first[0], self.first[1], self.second[0], self.second[1])

    def __str__(self) -> str:
        return f"{format_coord(self.first)} {self.kind.symbol} {format_coord(self.second)}"


@dataclass(frozen=True)
class ConstraintSet:
    """The puzzle's "=" and "×" markers, one collection per kind."""
    equals:     Tuple[Constraint, ...] = ()
    not_equals: Tuple[Constraint, ...] = ()

    @classmethod
    def from_pairs(
        cls,
        equals: Iterable[Sequence[int]] = (),
        not_equals: Iterable[Sequence[int]] = (),
    ) -> "ConstraintSet":
        return cls(
            equals=_dedupe(Constraint.from_pair(p, ConstraintKind.EQUALS) for p in equals),
            not_equals=_dedupe(Constraint.from_pair(p, ConstraintKind.NOT_EQUALS) for p in not_equals),
        )

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ConstraintSet":
        """Accept ``{"equals": [...], "notEquals": [...]}`` (snake_case too)."""
        data = data or {}
        not_equals = data.get("notEquals", data.get("not_equals", []))
        return cls.from_pairs(equals=data.get("equals", []), not_equals=not_equals)

    def to_dict(self) -> Dict[str, List[List[int]]]:
        return {
            "equals":    [list(c.as_pair()) for c in self.equals],
            "notEquals": [list(c.as_pair()) for c in self.not_equals],
        }

    def __iter__(self) -> Iterator[Constraint]:
        yield from self.equals
        yield from self.not_equals

    def __len__(self) -> int:
        return len(self.equals) + len(self.not_equals)


def _dedupe(constraints: Iterable[Constraint]) -> Tuple[Constraint, ...]:
    seen = {}
    for c in constraints:
        seen.setdefault(c, None)
    return tuple(seen)


# ─────────────────────────────────────────────
#  STEPS & OUTCOMES
# ─────────────────────────────────────────────

@dataclass(frozen=True)
class Step:
    """One forced move, self-contained and replayable in isolation.

    Invariants:
        grid_before[result_cell] is Cell.EMPTY
        grid_after[result_cell]  == result_value
        grid_after differs from grid_before in exactly that one cell
    """
    rule_name:      str
    explanation:    str
    affected_cells: Tuple[Coord, ...]
    result_cell:    Coord
    result_value:   Cell
    grid_before:    Grid
    grid_after:     Grid

    def to_dict(self) -> Dict[str, Any]:
        """Wire form; keys follow the frontend's step objects."""
        return {
            "ruleName":        self.rule_name,
            "explanation":     self.explanation,
            "affectedCells":   [list(c) for c in self.affected_cells],
            "resultCell":      list(self.result_cell),
            "resultValue":     self.result_value.to_wire(),
            "gridStateBefore": [[c.to_wire() for c in row] for row in self.grid_before],
            "gridStateAfter":  [[c.to_wire() for c in row] for row in self.grid_after],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Step":
        """Inverse of ``to_dict``.

        Raises KeyError/ValueError on bad input, including a
        ``resultValue`` that is not sun or moon.
        """
        def grid(rows: Sequence[Sequence[Any]]) -> Grid:
            return tuple(tuple(Cell.parse(v) for v in row) for row in rows)

        r, c = data["resultCell"]
        value = Cell.parse(data["resultValue"])
        if not value.is_filled:
            raise ValueError(f"Step resultValue must be sun or moon, got {data['resultValue']!r}")
        return cls(
            rule_name=data["ruleName"],
            explanation=data.get("explanation", ""),
            affected_cells=tuple((int(a), int(b)) for a, b in data.get("affectedCells", [])),
            result_cell=(int(r), int(c)),
            result_value=value,
            grid_before=grid(data["gridStateBefore"]),
            grid_after=grid(data["gridStateAfter"]),
        )

    def summary(self) -> str:
        return f"{self.rule_name}: {format_coord(self.result_cell)} → {self.result_value.label}"


@dataclass(frozen=True)
class Found:
    """A rule (or the engine) found a forced move."""
    step: Step


class NotFound:
    """No rule-derivable deduction exists for this snapshot right now."""

    _instance: Optional["NotFound"] = None

    def __new__(cls) -> "NotFound":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NOT_FOUND"

    def __bool__(self) -> bool:
        return False


NOT_FOUND = NotFound()

RuleOutcome = Union[Found, NotFound]


# ─────────────────────────────────────────────
#  RESULTS
# ─────────────────────────────────────────────

@dataclass
class StartValidation:
    """Result of the pre-solve gate.

    Attributes:
        valid:      True when no structural violation was found.
        violations: Every violation, human-readable, 1-indexed.
    """
    valid:      bool
    violations: List[str] = field(default_factory=list)


@dataclass
class SolveResult:
    status:       SolveStatus
    steps:        List[Step]
    initial_grid: Grid
    final_grid:   Grid

    @property
    def is_solved(self) -> bool:
        return self.status in (SolveStatus.SOLVED, SolveStatus.ALREADY_SOLVED)

    @property
    def rules_used(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for step in self.steps:
            counts[step.rule_name] = counts.get(step.rule_name, 0) + 1
        return counts

    def summary(self) -> str:
        lines = [f"Status: {self.status.value} ({len(self.steps)} steps)"]
        for name, n in self.rules_used.items():
            lines.append(f"  {name}: {n}")
        return "\n".join(lines)
