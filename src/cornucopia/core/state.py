"""
GameState: the snapshot passed into and returned from every engine call.

A snapshot is never mutated once handed out: each entry point works on
``state.copy()``, a full structural copy, and returns it. The helpers on
this class (logging, burying the dead, lookups) are meant to be called
only on such a working copy.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from cornucopia.core.config import GameConfig
from cornucopia.core.game_log import GameLog, LogCategory
from cornucopia.core.hazards import ActiveHazard
from cornucopia.core.hex_grid import HexGrid, HexTile
from cornucopia.core.tribute import Tribute
from cornucopia.core.weather import STARTING_WEATHER, WeatherType


class GamePhase(str, Enum):
    SETUP = "SETUP"
    BLOODBATH = "BLOODBATH"
    DAY = "DAY"
    NIGHT = "NIGHT"
    GAME_OVER = "GAME_OVER"


@dataclass
class GameState:
    """Complete state of one game at one step."""

    day: int
    phase: GamePhase
    tributes: list[Tribute]
    grid: HexGrid
    config: GameConfig
    logs: list[GameLog] = field(default_factory=list)
    deceased_queue: list[str] = field(default_factory=list)  # tribute ids
    winner_id: str | None = None
    weather: WeatherType = STARTING_WEATHER
    active_hazard: ActiveHazard | None = None

    def copy(self) -> GameState:
        """Full structural copy sharing no mutable object with ``self``."""
        return copy.deepcopy(self)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------
    def find_tribute(self, tribute_id: str | None) -> Tribute | None:
        if tribute_id is None:
            return None
        for t in self.tributes:
            if t.id == tribute_id:
                return t
        return None

    def living(self) -> list[Tribute]:
        return [t for t in self.tributes if t.is_alive]

    @property
    def survivor_count(self) -> int:
        return sum(1 for t in self.tributes if t.is_alive)

    def occupants(self, coords: tuple[int, int], exclude_id: str | None = None) -> list[Tribute]:
        """Living tributes standing on ``coords``."""
        return [
            t for t in self.tributes
            if t.is_alive and t.location == coords and t.id != exclude_id
        ]

    def tile_of(self, tribute: Tribute) -> HexTile | None:
        return self.grid.tile_at(tribute.location)

    @property
    def winner(self) -> Tribute | None:
        return self.find_tribute(self.winner_id)

    def deceased(self) -> list[Tribute]:
        """Tributes waiting in the deceased queue, in order of death."""
        return [t for t in (self.find_tribute(i) for i in self.deceased_queue) if t]

    # ------------------------------------------------------------------
    # Mutation helpers (working copies only)
    # ------------------------------------------------------------------
    def log(self, message: str, category: LogCategory = LogCategory.INFO) -> GameLog:
        """Append a log entry stamped with the current day and phase."""
        entry = GameLog(
            seq=len(self.logs),
            day=self.day,
            phase=self.phase.value,
            message=message,
            category=category,
        )
        self.logs.append(entry)
        return entry

    def log_death_summary(self, tribute: Tribute) -> None:
        self.log(
            f"{tribute.district.value} {tribute.name} ELIMINATED // Kills: {tribute.kills}"
            f" // Hype: {tribute.hype} // Cause: {tribute.cause_of_death}",
            LogCategory.DEATH_SUMMARY,
        )

    def bury(self, tribute: Tribute, cause: str) -> None:
        """Mark ``tribute`` dead, write its summary and queue it for the driver.

        The cause of death is recorded only if none was set before.
        """
        tribute.is_alive = False
        tribute.health = 0.0
        if tribute.cause_of_death is None:
            tribute.cause_of_death = cause
        self.log_death_summary(tribute)
        self.deceased_queue.append(tribute.id)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------
    def to_dict(self) -> dict[str, Any]:
        return {
            "day": self.day,
            "phase": self.phase.value,
            "tributes": [t.to_dict() for t in self.tributes],
            "grid": self.grid.to_dict(),
            "config": self.config.to_dict(),
            "logs": [entry.to_dict() for entry in self.logs],
            "deceased_queue": list(self.deceased_queue),
            "winner_id": self.winner_id,
            "weather": self.weather.value,
            "active_hazard": self.active_hazard.to_dict() if self.active_hazard else None,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> GameState:
        hazard = d.get("active_hazard")
        return cls(
            day=d["day"],
            phase=GamePhase(d["phase"]),
            tributes=[Tribute.from_dict(t) for t in d["tributes"]],
            grid=HexGrid.from_dict(d["grid"]),
            config=GameConfig.from_dict(d["config"]),
            logs=[GameLog.from_dict(e) for e in d.get("logs", [])],
            deceased_queue=list(d.get("deceased_queue", [])),
            winner_id=d.get("winner_id"),
            weather=WeatherType(d.get("weather", STARTING_WEATHER.value)),
            active_hazard=ActiveHazard.from_dict(hazard) if hazard else None,
        )
