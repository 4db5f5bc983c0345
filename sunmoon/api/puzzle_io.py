"""
sunmoon/api/puzzle_io.py
========================
Puzzle and step-trace files.

JSON format:
{
  "size": 6,
  "grid": [[null, "sun", null, ...], ...],
  "constraints": {"equals": [[0, 0, 0, 1]], "notEquals": [[2, 3, 3, 3]]}
}

``grid`` may also be given as text, one row per line (or a list of row
strings), with ``S`` for sun, ``M`` for moon and ``.`` for empty:

  "grid": ["S..M..", "......", ...]
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from sunmoon.core.exceptions import PuzzleFileError, PuzzleInputError
from sunmoon.core.grid import grid_to_wire
from sunmoon.core.types import ConstraintSet, Grid, Step
from sunmoon.core.validators import normalize_puzzle

logger = logging.getLogger(__name__)


@dataclass
class Puzzle:
    grid:        Grid
    constraints: ConstraintSet = field(default_factory=ConstraintSet)
    size:        int = 6

    def to_dict(self) -> Dict[str, Any]:
        return {
            "size": self.size,
            "grid": grid_to_wire(self.grid),
            "constraints": self.constraints.to_dict(),
        }


class PuzzleLoader:
    """Load puzzles and step traces from JSON or dict config."""

    @classmethod
    def from_json(cls, path: str) -> Puzzle:
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise PuzzleFileError(f"Cannot read puzzle file '{path}': {exc}", context={"path": path}) from exc
        puzzle = cls.from_dict(data)
        logger.info(f"Loaded {puzzle.size}x{puzzle.size} puzzle with {len(puzzle.constraints)} constraints")
        return puzzle

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Puzzle:
        if not isinstance(data, dict) or "grid" not in data:
            raise PuzzleFileError("Puzzle data must be an object with a 'grid' field")
        rows = parse_grid_rows(data["grid"])
        try:
            grid, constraints, size = normalize_puzzle(rows, data.get("constraints"), data.get("size"))
        except PuzzleInputError as exc:
            raise PuzzleFileError(str(exc), context={"errors": exc.errors}) from exc
        return Puzzle(grid=grid, constraints=constraints, size=size)

    @classmethod
    def to_json(cls, puzzle: Puzzle, path: str) -> None:
        Path(path).write_text(json.dumps(puzzle.to_dict(), indent=2), encoding="utf-8")

    @classmethod
    def steps_to_json(cls, steps: List[Step], path: str) -> None:
        Path(path).write_text(json.dumps([s.to_dict() for s in steps], indent=2, ensure_ascii=False), encoding="utf-8")

    @classmethod
    def steps_from_json(cls, path: str) -> List[Step]:
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
            return [Step.from_dict(item) for item in data]
        except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError) as exc:
            raise PuzzleFileError(f"Cannot read step trace '{path}': {exc}", context={"path": path}) from exc


def parse_grid_rows(raw: Any) -> List[List[Optional[str]]]:
    """Turn a text grid (str or list of row strings) into nested lists.

    Nested lists are passed through unchanged; symbols are checked later
    by the validators.
    """
    if isinstance(raw, str):
        raw = [line for line in raw.splitlines() if line.strip()]
    if isinstance(raw, list) and raw and all(isinstance(r, str) for r in raw):
        return [[ch for ch in row if not ch.isspace()] for row in raw]
    return raw
