"""sunmoon/deployment/server — FastAPI app exposing the core entry points."""
