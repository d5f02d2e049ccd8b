"""Game session management endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, Query, Request

from cornucopia.api.schemas import (
    AdvanceRequest,
    AdvanceResponse,
    CreateGameRequest,
    GameResponse,
    GameSummary,
    InteractRequest,
    LogEntry,
)
from cornucopia.api.serializers import serialize_game
from cornucopia.api.sessions import SessionLimitError
from cornucopia.core.config import GameConfig
from cornucopia.experiment.presets import get_preset

router = APIRouter()


def _get_session(request: Request, game_id: str):
    mgr = request.app.state.session_manager
    try:
        return mgr.get_session(game_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Game '{game_id}' not found")


@router.post("", response_model=GameResponse)
def create_game(req: CreateGameRequest, request: Request):
    mgr = request.app.state.session_manager

    try:
        if req.preset:
            config = get_preset(req.preset)
        elif req.config:
            config = GameConfig.from_dict(req.config)
        else:
            config = GameConfig()
        if req.seed is not None:
            config.random_seed = req.seed
    except KeyError as e:
        raise HTTPException(status_code=422, detail=str(e.args[0]) if e.args else str(e))
    except (TypeError, ValueError) as e:
        raise HTTPException(status_code=422, detail=str(e))

    try:
        session = mgr.create_session(config=config, name=req.name)
    except SessionLimitError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return serialize_game(session, detail=True)


@router.get("", response_model=list[GameSummary])
def list_games(request: Request):
    mgr = request.app.state.session_manager
    return [serialize_game(s) for s in mgr.list_sessions()]


@router.get("/{game_id}", response_model=GameResponse)
def get_game(game_id: str, request: Request):
    return serialize_game(_get_session(request, game_id), detail=True)


@router.delete("/{game_id}")
def delete_game(game_id: str, request: Request):
    mgr = request.app.state.session_manager
    try:
        mgr.delete_session(game_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Game '{game_id}' not found")
    return {"deleted": True}


@router.get("/{game_id}/state")
def get_state(game_id: str, request: Request) -> dict[str, Any]:
    """The full current snapshot."""
    return _get_session(request, game_id).state.to_dict()


@router.post("/{game_id}/advance", response_model=AdvanceResponse)
def advance_game(game_id: str, req: AdvanceRequest, request: Request):
    mgr = request.app.state.session_manager
    _get_session(request, game_id)
    session, taken, paused = mgr.advance(game_id, req.n, req.auto_continue)
    return {
        **serialize_game(session, detail=True),
        "steps_taken": taken,
        "paused_for_deceased": paused,
    }


@router.post("/{game_id}/interact", response_model=GameResponse)
def interact(game_id: str, req: InteractRequest, request: Request):
    mgr = request.app.state.session_manager
    _get_session(request, game_id)
    try:
        session = mgr.interact(game_id, req.action, req.actor_id, req.target_id)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return serialize_game(session, detail=True)


@router.post("/{game_id}/acknowledge", response_model=GameResponse)
def acknowledge(game_id: str, request: Request):
    mgr = request.app.state.session_manager
    _get_session(request, game_id)
    return serialize_game(mgr.acknowledge(game_id), detail=True)


@router.get("/{game_id}/logs", response_model=list[LogEntry])
def get_logs(
    game_id: str,
    request: Request,
    since: int = Query(0, ge=0),
    category: str | None = Query(None),
) -> list[dict[str, Any]]:
    """Log entries with ``seq >= since``, optionally for one category."""
    logs = _get_session(request, game_id).state.logs[since:]
    if category is not None:
        logs = [entry for entry in logs if entry.category.value == category]
    return [entry.to_dict() for entry in logs]
