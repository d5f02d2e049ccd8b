"""
Utility-scoring movement AI over neighbouring hexes.

Each tribute with stamina to spare scores every neighbouring tile and
steps onto the best one. The score mixes random jitter, anti-oscillation,
social posture (crowds, allies, enemies), trap awareness, goal seeking and
survival desires. During the finale only jitter, enemy avoidance, traps
and the pull toward the goal remain, so survivors converge on the centre.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from cornucopia.core.hex_grid import ORIGIN, Biome, HexGrid, HexTile
from cornucopia.core.items import Weapon
from cornucopia.core.tribute import RelationshipType, StatusEffect, Tribute
from cornucopia.core.weather import WeatherType, weather_profile

# Stamina at or below which a tribute rests instead of moving.
REST_THRESHOLD = 10
REST_RECOVERY = 30

BASE_STAMINA_COST = 5
TERRAIN_STAMINA_COST: dict[Biome, int] = {
    Biome.MOUNTAIN: 5,
    Biome.SWAMP: 3,
}

# Flat score adjustments for rough terrain outside the finale.
TERRAIN_SCORE_PENALTY: dict[Biome, int] = {
    Biome.MOUNTAIN: 15,
    Biome.VOLCANO: 20,
    Biome.SWAMP: 10,
}

JITTER = 10
BACKTRACK_PENALTY = 500
HAZARD_PENALTY = 500
TRAP_PENALTY = 200
FLEE_PENALTY = 100
TRAP_SENSE_INTELLECT = 7        # strictly above this spots traps
TIMID_AGGRESSION = 6            # strictly below this avoids crowds
HURT_HEALTH = 50

GOAL_WEIGHT = 15
FINALE_GOAL_WEIGHT = 50
FINALE_CENTER_WEIGHT = 100

# (biomes that satisfy the desire, bonus)
WATER_DESIRE = (frozenset({Biome.RIVER, Biome.SWAMP}), 100)
FOOD_DESIRE = (frozenset({Biome.FOREST, Biome.MEADOW}), 60)
WEAPON_DESIRE = (frozenset({Biome.CORNUCOPIA, Biome.RUINS}), 120)
COVER_DESIRE = (frozenset({Biome.FOREST, Biome.MOUNTAIN}), 80)


@dataclass(frozen=True)
class Desires:
    """What a tribute is currently looking for."""

    water: bool
    food: bool
    weapon: bool
    cover: bool

    @classmethod
    def of(cls, tribute: Tribute) -> Desires:
        return cls(
            water=tribute.thirst < 50 or tribute.has_status(StatusEffect.HEATSTROKE),
            food=tribute.hunger < 40,
            weapon=not any(isinstance(i, Weapon) for i in tribute.inventory),
            cover=tribute.health < 40 or tribute.has_status(StatusEffect.BLEEDING),
        )


def score_tile(
    tribute: Tribute,
    tile: HexTile,
    occupants: list[Tribute],
    desires: Desires,
    target: tuple[int, int] | None,
    avoid_biome: Biome | None,
    is_finale: bool,
    weather: WeatherType,
    rng: np.random.Generator,
) -> float:
    """Score one candidate tile for ``tribute``. Higher is better."""
    score = float(rng.integers(-JITTER, JITTER + 1))

    if not is_finale and tribute.last_location == tile.coords:
        score -= BACKTRACK_PENALTY

    rel_types = [tribute.relationship_type_to(o.id) for o in occupants]
    enemy_count = rel_types.count(RelationshipType.ENEMY)
    ally_count = sum(
        1 for t in rel_types if t in (RelationshipType.ALLY, RelationshipType.CLOSE_ALLY)
    )

    if not is_finale:
        if tribute.stats.aggression < TIMID_AGGRESSION:
            score -= len(occupants) * 20
            score += ally_count * 30
        else:
            if len(occupants) == 1:
                score += 20
            elif len(occupants) > 2:
                score -= 10
    if enemy_count > 0 and tribute.health < HURT_HEALTH:
        score -= FLEE_PENALTY

    if tile.trap is not None:
        if tribute.stats.intellect > TRAP_SENSE_INTELLECT or tile.trap.owner_id == tribute.id:
            score -= TRAP_PENALTY

    if target is not None:
        dist = HexGrid.hex_distance(tile.coords, target)
        score -= dist * (FINALE_GOAL_WEIGHT if is_finale else GOAL_WEIGHT)
    elif is_finale:
        score -= HexGrid.hex_distance(tile.coords, ORIGIN) * FINALE_CENTER_WEIGHT

    if is_finale:
        return score

    for wanted, (biomes, bonus) in (
        (desires.water, WATER_DESIRE),
        (desires.food, FOOD_DESIRE),
        (desires.weapon, WEAPON_DESIRE),
        (desires.cover, COVER_DESIRE),
    ):
        if wanted and tile.biome in biomes:
            score += bonus

    if avoid_biome is not None and tile.biome == avoid_biome:
        score -= HAZARD_PENALTY

    score -= TERRAIN_SCORE_PENALTY.get(tile.biome, 0)

    if weather == WeatherType.HEATWAVE:
        if tile.biome == Biome.RIVER:
            score += 40
        if tile.biome == Biome.DESERT:
            score -= 50

    return score


def choose_destination(
    tribute: Tribute,
    grid: HexGrid,
    tributes: list[Tribute],
    target: tuple[int, int] | None,
    avoid_biome: Biome | None,
    is_finale: bool,
    weather: WeatherType,
    rng: np.random.Generator,
) -> HexTile | None:
    """Pick the best neighbouring tile, or None if the tribute has no neighbours.

    Neighbours are shuffled before scoring, and only a strictly higher score
    replaces the current best, so ties go to whichever came first.
    """
    neighbors = grid.valid_neighbors(*tribute.location)
    if not neighbors:
        return None
    shuffled = [neighbors[i] for i in rng.permutation(len(neighbors))]

    desires = Desires.of(tribute)
    best_tile = shuffled[0]
    best_score = float("-inf")
    for tile in shuffled:
        occupants = [
            t for t in tributes
            if t.is_alive and t.id != tribute.id and t.location == tile.coords
        ]
        score = score_tile(
            tribute, tile, occupants, desires, target, avoid_biome,
            is_finale, weather, rng,
        )
        if score > best_score:
            best_score = score
            best_tile = tile
    return best_tile


def movement_cost(biome: Biome, weather: WeatherType) -> float:
    """Stamina spent stepping onto ``biome`` in ``weather``."""
    base = BASE_STAMINA_COST + TERRAIN_STAMINA_COST.get(biome, 0)
    return base * weather_profile(weather).stamina_cost


def move_tribute(
    tribute: Tribute,
    grid: HexGrid,
    tributes: list[Tribute],
    target: tuple[int, int] | None,
    avoid_biome: Biome | None,
    is_finale: bool,
    weather: WeatherType,
    rng: np.random.Generator,
) -> HexTile | None:
    """Move ``tribute`` one step and pay the stamina cost.

    Returns:
        The tile moved onto, or None if there was nowhere to go.
    """
    if not tribute.is_alive:
        return None
    destination = choose_destination(
        tribute, grid, tributes, target, avoid_biome, is_finale, weather, rng,
    )
    if destination is None:
        return None

    tribute.last_location = tribute.location
    tribute.location = destination.coords
    tribute.change_stamina(-movement_cost(destination.biome, weather))
    return destination
