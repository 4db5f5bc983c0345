"""
sunmoon/deployment/server/app.py
================================
FastAPI server for SunMoon-Core.
Exposes /validate, /next-step, /solve and /apply-step as REST endpoints
for a browser front end that owns the editable grid.
Requires: pip install fastapi uvicorn
"""
from __future__ import annotations
import logging
import uvicorn
from fastapi import FastAPI
from sunmoon.core.config import DEFAULT_CONFIG
from sunmoon.deployment.server.routes import router
from sunmoon.deployment.server.middleware import setup_middleware
from sunmoon.version import __version__

logger = logging.getLogger(__name__)

app = FastAPI(
    title="SunMoon-Core Solver Server",
    description="Forced-move deduction with step-by-step explanations for Sun/Moon grid puzzles",
    version=__version__,
)

setup_middleware(app, DEFAULT_CONFIG.server.cors_origins)
app.include_router(router, prefix=DEFAULT_CONFIG.server.api_prefix)


@app.get("/health")
async def health():
    return {"status": "ok", "framework": "sunmoon-core", "version": __version__}


def serve(host: str = DEFAULT_CONFIG.server.host, port: int = DEFAULT_CONFIG.server.port, reload: bool = False):
    logger.info(f"Serving on {host}:{port}")
    uvicorn.run("sunmoon.deployment.server.app:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    serve()
