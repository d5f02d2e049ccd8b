"""
HTTP driver for the arena engine.

Each game lives in an in-memory session owned by the ``SessionManager`` on
``app.state``; routers only translate requests into session calls. The
number of concurrent games is capped by ``CORNUCOPIA_MAX_SESSIONS`` (unset
or non-positive means unlimited), read from the environment or a ``.env``.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cornucopia.api.sessions import SessionManager
from cornucopia.api.routers import experiments, games, tributes

# Load .env: project root first, then CWD
_project_root = Path(__file__).resolve().parents[3]  # src/cornucopia/api/app.py → project root
load_dotenv(_project_root / ".env")
load_dotenv(Path.cwd() / ".env")


def _max_sessions() -> int | None:
    """Session cap from the environment; None when unset or not positive."""
    raw = os.environ.get("CORNUCOPIA_MAX_SESSIONS", "").strip()
    if not raw:
        return None
    value = int(raw)
    return value if value > 0 else None


def create_app() -> FastAPI:
    """Build the app around a fresh session manager, so each instance starts empty."""
    application = FastAPI(
        title="Cornucopia API",
        description="REST API for the Cornucopia arena simulation engine",
        version="0.1.0",
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.state.session_manager = SessionManager(max_sessions=_max_sessions())

    # Game and tribute routes share the /api/games prefix
    application.include_router(games.router, prefix="/api/games", tags=["games"])
    application.include_router(tributes.router, prefix="/api/games", tags=["tributes"])
    application.include_router(experiments.router, prefix="/api", tags=["experiments"])

    @application.get("/api/health")
    def health_check():
        return {"status": "ok"}

    return application


app = create_app()
