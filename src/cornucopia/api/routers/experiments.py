"""Preset listing and batch comparison endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from cornucopia.api.schemas import CompareRequest, ComparisonResponse, PresetInfo
from cornucopia.experiment.presets import get_preset, list_presets
from cornucopia.experiment.runner import GameRunner

router = APIRouter()


@router.get("/presets", response_model=list[PresetInfo])
def get_presets():
    return [
        {"name": name, "config": get_preset(name).to_dict()}
        for name in list_presets()
    ]


@router.get("/presets/{name}", response_model=PresetInfo)
def get_preset_detail(name: str):
    try:
        config = get_preset(name)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Preset '{name}' not found")
    return {"name": name, "config": config.to_dict()}


@router.post("/experiments/compare", response_model=ComparisonResponse)
def compare_presets(req: CompareRequest):
    """Run every requested preset under the same seeds, synchronously."""
    unknown = [name for name in req.presets if name not in list_presets()]
    if unknown:
        raise HTTPException(status_code=422, detail=f"Unknown presets: {unknown}")

    comparison = GameRunner(max_steps=req.max_steps).compare_presets(req.presets, req.seeds)
    return {
        "presets": {
            name: {
                "games": len(sweep.results),
                "win_rates_by_district": sweep.win_rates_by_district,
                "no_winner_rate": sweep.no_winner_rate,
                "mean_days": sweep.mean_days,
                "mean_steps": sweep.mean_steps,
            }
            for name, sweep in comparison.results.items()
        },
        "config_diffs": {
            key: {param: list(values) for param, values in diff.items()}
            for key, diff in comparison.config_diffs.items()
        },
    }
