"""
Pydantic models for API request/response validation.
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from typing import Any


# === Games ===

class CreateGameRequest(BaseModel):
    config: dict[str, Any] | None = None
    preset: str | None = None
    name: str | None = None
    seed: int | None = None


class AdvanceRequest(BaseModel):
    n: int = Field(default=1, ge=1, le=1000)
    auto_continue: bool | None = None


class InteractRequest(BaseModel):
    action: str
    actor_id: str
    target_id: str


class GameSummary(BaseModel):
    id: str
    name: str
    status: str
    day: int
    phase: str
    weather: str
    survivors: int
    tribute_count: int
    steps: int
    winner_id: str | None
    pending_deceased: int


class GameResponse(GameSummary):
    config: dict[str, Any]
    active_hazard: dict[str, Any] | None = None


class AdvanceResponse(GameResponse):
    steps_taken: int
    paused_for_deceased: bool


# === Tributes ===

class TributeSummaryResponse(BaseModel):
    id: str
    name: str
    district: str
    gender: str
    age: int
    is_alive: bool
    health: float
    hunger: float
    thirst: float
    stamina: float
    kills: int
    hype: int
    location: list[int]
    status_effects: list[str]
    last_action: str
    cause_of_death: str | None


class RelationshipInfo(BaseModel):
    trust: float
    type: str


class TributeDetailResponse(TributeSummaryResponse):
    stats: dict[str, int]
    inventory: list[dict[str, Any]]
    last_location: list[int] | None
    relationships: dict[str, RelationshipInfo]
    last_attacker_id: str | None


# === Logs ===

class LogEntry(BaseModel):
    seq: int
    day: int
    phase: str
    message: str
    category: str


# === Experiments ===

class PresetInfo(BaseModel):
    name: str
    config: dict[str, Any]


class CompareRequest(BaseModel):
    presets: list[str] = Field(min_length=1)
    seeds: list[int] = Field(default_factory=lambda: [0, 1, 2], min_length=1)
    max_steps: int = Field(default=500, ge=1)


class PresetOutcome(BaseModel):
    games: int
    win_rates_by_district: dict[str, float]
    no_winner_rate: float
    mean_days: float
    mean_steps: float


class ComparisonResponse(BaseModel):
    presets: dict[str, PresetOutcome]
    config_diffs: dict[str, dict[str, list]]
