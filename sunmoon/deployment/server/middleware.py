"""
sunmoon/deployment/server/middleware.py
=======================================
CORS for the browser front end and per-request timing.

Timing is reported in the ``X-Solve-Time-Ms`` response header so the
front end can show how long a deduction took. Health probes are logged
at debug level only.
"""
from __future__ import annotations
import logging
import time
from typing import List
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

logger = logging.getLogger(__name__)

TIMING_HEADER = "X-Solve-Time-Ms"
QUIET_PATHS = frozenset({"/health"})


def setup_middleware(app: FastAPI, cors_origins: List[str]) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type"],
        expose_headers=[TIMING_HEADER],
    )

    @app.middleware("http")
    async def time_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        response.headers[TIMING_HEADER] = f"{elapsed_ms:.1f}"

        log = logger.debug if request.url.path in QUIET_PATHS else logger.info
        log(f"{request.method} {request.url.path} {response.status_code} in {elapsed_ms:.1f}ms")
        return response
