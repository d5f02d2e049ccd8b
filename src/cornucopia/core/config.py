"""
Run configuration for the Cornucopia arena.

Every knob a driver can turn for a single game lives on ``GameConfig``.
Per-system tuning tables (weather, hazards, biome seeds, items) live next
to the system that consumes them.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any


class Lethality(str, Enum):
    """Combat damage tier."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ResourceScarcity(str, Enum):
    """Resource tier. Accepted and carried, but no mechanic reads it yet."""

    ABUNDANT = "abundant"
    NORMAL = "normal"
    STARVATION = "starvation"


# Damage multiplier applied by the combat resolver per lethality tier.
LETHALITY_MULTIPLIERS: dict[Lethality, float] = {
    Lethality.LOW: 0.6,
    Lethality.MEDIUM: 1.0,
    Lethality.HIGH: 1.5,
}


@dataclass
class GameConfig:
    """
    Configuration for one game.

    Defaults match the "standard" preset. ``game_speed`` is only read by
    the external driver (milliseconds between auto-advances) and
    ``bloodbath_deaths`` is descriptive; neither changes engine behaviour.
    Use ``to_dict()`` / ``from_dict()`` for serialization and comparison.
    """

    # === Rules ===
    lethality: Lethality = Lethality.MEDIUM
    resource_scarcity: ResourceScarcity = ResourceScarcity.NORMAL

    # === Arena ===
    map_size: int = 5  # hex radius
    tribute_count: int = 24

    # === Pacing ===
    game_speed: int = 1500
    finale_day: int = 7
    bloodbath_deaths: int = 5

    # === Toggles ===
    use_career_alliance: bool = True
    use_ages: bool = True
    auto_continue_on_death: bool = False

    # === Reproducibility ===
    random_seed: int | None = None

    def __post_init__(self) -> None:
        try:
            self.lethality = Lethality(self.lethality)
        except ValueError:
            raise ValueError(f"Unknown lethality tier: {self.lethality!r}") from None
        try:
            self.resource_scarcity = ResourceScarcity(self.resource_scarcity)
        except ValueError:
            raise ValueError(
                f"Unknown resource scarcity tier: {self.resource_scarcity!r}"
            ) from None

        if self.map_size < 1:
            raise ValueError(f"map_size must be >= 1, got {self.map_size}")
        if self.tribute_count < 1:
            raise ValueError(f"tribute_count must be >= 1, got {self.tribute_count}")
        if self.finale_day < 1:
            raise ValueError(f"finale_day must be >= 1, got {self.finale_day}")

    @property
    def lethality_multiplier(self) -> float:
        """Damage multiplier for the configured lethality tier."""
        return LETHALITY_MULTIPLIERS[self.lethality]

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------
    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        d: dict[str, Any] = {}
        for k, v in self.__dict__.items():
            if k.startswith("_"):
                continue
            d[k] = v.value if isinstance(v, Enum) else v
        return d

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> GameConfig:
        """Deserialize from a dict. Unknown keys raise ``TypeError``."""
        return cls(**{k: v for k, v in d.items() if not k.startswith("_")})

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls, s: str) -> GameConfig:
        return cls.from_dict(json.loads(s))

    def diff(self, other: GameConfig) -> dict[str, tuple[Any, Any]]:
        """Return parameters that differ between two configs."""
        diffs: dict[str, tuple[Any, Any]] = {}
        mine, theirs = self.to_dict(), other.to_dict()
        for k, v1 in mine.items():
            v2 = theirs.get(k)
            if v1 != v2:
                diffs[k] = (v1, v2)
        return diffs
