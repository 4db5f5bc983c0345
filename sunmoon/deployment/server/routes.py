"""
sunmoon/deployment/server/routes.py
===================================
REST API routes for the SunMoon-Core server.

Cells travel as null / "sun" / "moon"; steps use the front end's
camelCase keys (see ``Step.to_dict``).
"""
from __future__ import annotations
from typing import Any, Dict, List, Optional
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from sunmoon.api.entry_points import apply_step, is_complete
from sunmoon.api.puzzle_solver import PuzzleSolver
from sunmoon.core.exceptions import IllegalStartError, PuzzleInputError
from sunmoon.core.grid import grid_to_wire
from sunmoon.core.types import Found, Step

router = APIRouter()

WireGrid = List[List[Optional[str]]]

# ─── Request/Response Models ────────────────────────────────────

class PuzzleRequest(BaseModel):
    grid: WireGrid                               # [[null, "sun", ...], ...]
    constraints: Dict[str, List[List[int]]] = {}  # {"equals": [[r1,c1,r2,c2]], "notEquals": [...]}
    size: Optional[int] = None

class NextStepRequest(PuzzleRequest):
    check_start: bool = True

class ApplyStepRequest(BaseModel):
    grid: WireGrid
    step: Dict[str, Any]

class ValidateResponse(BaseModel):
    valid:      bool
    violations: List[str]

class NextStepResponse(BaseModel):
    found:   bool
    step:    Optional[Dict[str, Any]] = None
    message: str = ""

class SolveResponse(BaseModel):
    status:     str
    solved:     bool
    steps:      List[Dict[str, Any]]
    final_grid: WireGrid
    message:    str = ""

class ApplyStepResponse(BaseModel):
    grid:     WireGrid
    complete: bool

# ─── Solver instance ────────────────────────────────────────────
# Stateless: holds config only, safe to share between requests
_solver = None

def get_solver() -> PuzzleSolver:
    global _solver
    if _solver is None:
        _solver = PuzzleSolver()
    return _solver

def _bad_input(exc: PuzzleInputError) -> HTTPException:
    return HTTPException(status_code=400, detail={"message": str(exc), "errors": exc.errors})

def _illegal_start(exc: IllegalStartError) -> HTTPException:
    return HTTPException(status_code=422, detail={"message": str(exc), "violations": exc.violations})

# ─── Routes ─────────────────────────────────────────────────────

@router.post("/validate", response_model=ValidateResponse)
async def validate(request: PuzzleRequest):
    try:
        report = get_solver().validate(request.grid, request.constraints, request.size)
    except PuzzleInputError as exc:
        raise _bad_input(exc)
    return ValidateResponse(valid=report.valid, violations=report.violations)

@router.post("/next-step", response_model=NextStepResponse)
async def next_step(request: NextStepRequest):
    try:
        outcome = get_solver().explain_next(
            request.grid, request.constraints, request.size, check_start=request.check_start
        )
    except PuzzleInputError as exc:
        raise _bad_input(exc)
    except IllegalStartError as exc:
        raise _illegal_start(exc)
    if isinstance(outcome, Found):
        return NextStepResponse(found=True, step=outcome.step.to_dict())
    return NextStepResponse(
        found=False,
        message="No more moves can be made. Puzzle may be unsolvable or complete.",
    )

@router.post("/solve", response_model=SolveResponse)
async def solve(request: PuzzleRequest):
    try:
        result = get_solver().solve(request.grid, request.constraints, request.size)
    except PuzzleInputError as exc:
        raise _bad_input(exc)
    except IllegalStartError as exc:
        raise _illegal_start(exc)
    return SolveResponse(
        status=result.status.value,
        solved=result.is_solved,
        steps=[s.to_dict() for s in result.steps],
        final_grid=grid_to_wire(result.final_grid),
        message="" if result.is_solved else "Puzzle could not be fully solved.",
    )

@router.post("/apply-step", response_model=ApplyStepResponse)
async def apply(request: ApplyStepRequest):
    try:
        step = Step.from_dict(request.step)
    except (KeyError, TypeError, ValueError) as exc:
        raise HTTPException(status_code=400, detail={"message": f"Malformed step: {exc}", "errors": []})
    try:
        grid = apply_step(request.grid, step)
    except PuzzleInputError as exc:
        raise _bad_input(exc)
    return ApplyStepResponse(grid=grid_to_wire(grid), complete=is_complete(grid))

@router.get("/rules")
async def list_rules():
    names = get_solver().rule_names
    return {"total": len(names), "rules": names}
