"""
Gamemaker hazards: biome-scoped area damage rolled at dawn.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import numpy as np

from cornucopia.core.hex_grid import Biome


class HazardType(str, Enum):
    NONE = "NONE"
    ACID_FOG = "ACID FOG"
    WILDFIRE = "WILDFIRE"
    FLASH_FLOOD = "FLASH FLOOD"
    WOLF_MUTTS = "WOLF MUTTS"
    TRACKER_JACKERS = "TRACKER JACKERS"


# Chance that a NIGHT -> DAY transition unleashes a hazard.
HAZARD_CHANCE = 0.3


@dataclass
class ActiveHazard:
    """The hazard in effect for the current day.

    ``biomes[0]`` is the primary biome tributes actively steer away from;
    damage applies on all listed biomes.
    """

    type: HazardType
    description: str
    biomes: list[Biome] = field(default_factory=list)
    damage: int = 0

    @property
    def primary_biome(self) -> Biome | None:
        return self.biomes[0] if self.biomes else None

    def affects(self, biome: Biome) -> bool:
        return biome in self.biomes

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "description": self.description,
            "biomes": [b.value for b in self.biomes],
            "damage": self.damage,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> ActiveHazard:
        return cls(
            type=HazardType(d["type"]),
            description=d["description"],
            biomes=[Biome(b) for b in d["biomes"]],
            damage=d["damage"],
        )


HAZARD_TABLE: dict[HazardType, tuple[str, tuple[Biome, ...], int]] = {
    HazardType.ACID_FOG: (
        "A corrosive fog rolls in. It burns the skin and lungs.",
        (Biome.FOREST, Biome.MEADOW, Biome.RIVER, Biome.MOUNTAIN, Biome.CORNUCOPIA, Biome.SWAMP),
        5,
    ),
    HazardType.WILDFIRE: (
        "A wall of fire sweeps through the arena.",
        (Biome.FOREST, Biome.MEADOW, Biome.DESERT, Biome.RUINS, Biome.VOLCANO),
        25,
    ),
    HazardType.FLASH_FLOOD: (
        "Torrential rain causes massive flooding.",
        (Biome.RIVER, Biome.SWAMP, Biome.TUNDRA),
        30,
    ),
    HazardType.WOLF_MUTTS: (
        "Engineered Wolf Mutts are hunting.",
        (Biome.FOREST, Biome.MEADOW, Biome.CORNUCOPIA, Biome.TUNDRA, Biome.DESERT),
        40,
    ),
    HazardType.TRACKER_JACKERS: (
        "A nest of Tracker Jackers has been disturbed.",
        (Biome.FOREST, Biome.RUINS, Biome.SWAMP),
        15,
    ),
}


def make_hazard(hazard_type: HazardType) -> ActiveHazard:
    """Build a fresh ActiveHazard from the table."""
    if hazard_type not in HAZARD_TABLE:
        raise ValueError(f"No hazard data for {hazard_type!r}")
    description, biomes, damage = HAZARD_TABLE[hazard_type]
    return ActiveHazard(
        type=hazard_type,
        description=description,
        biomes=list(biomes),
        damage=damage,
    )


def roll_hazard(
    rng: np.random.Generator,
    chance: float = HAZARD_CHANCE,
) -> ActiveHazard | None:
    """With probability ``chance``, pick a uniformly random hazard."""
    if rng.random() >= chance:
        return None
    candidates = [h for h in HazardType if h != HazardType.NONE]
    return make_hazard(candidates[int(rng.integers(len(candidates)))])
