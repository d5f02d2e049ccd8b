"""
Append-only narrative log of a game.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class LogCategory(str, Enum):
    """Presentation tag on a log entry. The engine never branches on it."""

    COMBAT = "combat"
    DEATH = "death"
    DEATH_SUMMARY = "death-summary"
    INFO = "info"
    GAMEMAKER = "gamemaker"
    HAZARD = "hazard"
    SPONSOR = "sponsor"
    CRAFTING = "crafting"
    WEATHER = "weather"
    STATUS = "status"
    TRAP = "trap"
    ALLIANCE = "alliance"
    FLEE = "flee"
    REST = "rest"


@dataclass(frozen=True)
class GameLog:
    """One log line. ``seq`` is its position in the game's log."""

    seq: int
    day: int
    phase: str
    message: str
    category: LogCategory = LogCategory.INFO

    def to_dict(self) -> dict[str, Any]:
        return {
            "seq": self.seq,
            "day": self.day,
            "phase": self.phase,
            "message": self.message,
            "category": self.category.value,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> GameLog:
        return cls(
            seq=d["seq"],
            day=d["day"],
            phase=d["phase"],
            message=d["message"],
            category=LogCategory(d.get("category", LogCategory.INFO.value)),
        )
