"""sunmoon/symbolic — Legality checking, inference rules and the deduction engine."""

from sunmoon.symbolic.engine import DeductionEngine
from sunmoon.symbolic.legality import (
    is_complete,
    is_legal_complete,
    is_legal_partial,
    is_solved,
    is_valid_move,
    iter_violations,
    validate_start,
)
from sunmoon.symbolic.lines import Line, all_lines, cap, lines_through, shared_line
from sunmoon.symbolic.rules import DEFAULT_RULES, Board, Rule, rule_names

__all__ = [
    "DeductionEngine",
    "Board",
    "Rule",
    "DEFAULT_RULES",
    "rule_names",
    "Line",
    "all_lines",
    "cap",
    "lines_through",
    "shared_line",
    "iter_violations",
    "validate_start",
    "is_legal_partial",
    "is_legal_complete",
    "is_complete",
    "is_solved",
    "is_valid_move",
]
