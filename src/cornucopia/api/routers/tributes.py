"""Tribute list and detail endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, Query, Request

from cornucopia.api.schemas import TributeDetailResponse, TributeSummaryResponse
from cornucopia.api.serializers import serialize_tribute_detail, serialize_tribute_summary

router = APIRouter()


@router.get("/{game_id}/tributes", response_model=list[TributeSummaryResponse])
def list_tributes(
    game_id: str,
    request: Request,
    alive_only: bool = Query(False),
    district: str | None = Query(None),
) -> list[dict[str, Any]]:
    mgr = request.app.state.session_manager
    try:
        session = mgr.get_session(game_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Game '{game_id}' not found")

    tributes = session.state.tributes
    if alive_only:
        tributes = [t for t in tributes if t.is_alive]
    if district is not None:
        tributes = [t for t in tributes if t.district.value == district]
    return [serialize_tribute_summary(t) for t in tributes]


@router.get("/{game_id}/tributes/{tribute_id}", response_model=TributeDetailResponse)
def get_tribute(game_id: str, tribute_id: str, request: Request) -> dict[str, Any]:
    mgr = request.app.state.session_manager
    try:
        session = mgr.get_session(game_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Game '{game_id}' not found")

    tribute = session.state.find_tribute(tribute_id)
    if tribute is None:
        raise HTTPException(status_code=404, detail=f"Tribute '{tribute_id}' not found")
    return serialize_tribute_detail(tribute)
