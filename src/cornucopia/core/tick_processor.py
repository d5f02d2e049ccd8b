"""
Per-tribute tick processing.

Runs once per step for every living tribute, before anyone moves. In
order: needs decay, ongoing status effects, starvation and dehydration,
hazard damage, weather-driven status changes, crafting, trap placement,
automatic healing, eating and drinking, and finally the death check.
Vitals are clamped to [0, 100] after every change.
"""

from __future__ import annotations

from collections import Counter

import numpy as np

from cornucopia.core.game_log import LogCategory
from cornucopia.core.hex_grid import SHELTER_BIOMES, WATER_BIOMES, Biome, HexTile, Trap
from cornucopia.core.items import (
    CRAFTING_RECIPES,
    TRAP_ITEM_ID,
    ConsumableEffect,
    Recipe,
    provides_warmth,
)
from cornucopia.core.state import GamePhase, GameState
from cornucopia.core.tribute import StatusEffect, Tribute
from cornucopia.core.weather import WeatherType, weather_profile

# ---------------------------------------------------------------------------
# Needs decay
# ---------------------------------------------------------------------------

HUNGER_DECAY = 3
THIRST_DECAY = 4
NIGHT_DECAY_FACTOR = 0.5
NIGHT_STAMINA_RECOVERY = 20
STARVATION_DAMAGE = 5
DEHYDRATION_DAMAGE = 8

# ---------------------------------------------------------------------------
# Status effects
# ---------------------------------------------------------------------------

BLEED_DAMAGE = 5
BLEED_LOG_CHANCE = 0.2
POISON_STAMINA_DRAIN = 10
POISON_DAMAGE = 2
HYPOTHERMIA_DAMAGE = 4
HYPOTHERMIA_STAMINA_DRAIN = 10
HEATSTROKE_THIRST_FACTOR = 2
HEATSTROKE_DAMAGE = 2

HYPOTHERMIA_ONSET_CHANCE = 0.3
HEATSTROKE_ONSET_CHANCE = 0.2

# ---------------------------------------------------------------------------
# Automatic item use
# ---------------------------------------------------------------------------

HEAL_BELOW = 60
EAT_BELOW = 50
DRINK_BELOW = 50
WATER_ITEM_RELIEF = 50

TRAP_DAMAGE = 60
TRAP_DESCRIPTION = "stepped on a Landmine"

DEFAULT_DEATH_CAUSE = "Succumbed to the elements"


def process_tribute_tick(tribute: Tribute, state: GameState, rng: np.random.Generator) -> None:
    """Apply one tick of survival logic to ``tribute`` on ``state``.

    Does nothing for dead tributes or tributes standing off the grid.
    """
    if not tribute.is_alive:
        return
    tile = state.tile_of(tribute)
    if tile is None:
        return

    profile = weather_profile(state.weather)
    hunger_decay = HUNGER_DECAY * profile.hunger_mod
    thirst_decay = THIRST_DECAY * profile.thirst_mod

    if state.phase == GamePhase.NIGHT:
        hunger_decay *= NIGHT_DECAY_FACTOR
        thirst_decay *= NIGHT_DECAY_FACTOR
        tribute.change_stamina(NIGHT_STAMINA_RECOVERY)

    if tribute.has_status(StatusEffect.BLEEDING):
        tribute.change_health(-BLEED_DAMAGE)
        if rng.random() < BLEED_LOG_CHANCE:
            state.log(f"{tribute.name} is bleeding out.", LogCategory.STATUS)
    if tribute.has_status(StatusEffect.POISONED):
        tribute.change_stamina(-POISON_STAMINA_DRAIN)
        tribute.change_health(-POISON_DAMAGE)
    if tribute.has_status(StatusEffect.HYPOTHERMIA):
        tribute.change_health(-HYPOTHERMIA_DAMAGE)
        tribute.change_stamina(-HYPOTHERMIA_STAMINA_DRAIN)
    if tribute.has_status(StatusEffect.HEATSTROKE):
        thirst_decay *= HEATSTROKE_THIRST_FACTOR
        tribute.change_health(-HEATSTROKE_DAMAGE)

    tribute.change_hunger(-hunger_decay)
    tribute.change_thirst(-thirst_decay)
    if tribute.hunger <= 0:
        tribute.change_health(-STARVATION_DAMAGE)
    if tribute.thirst <= 0:
        tribute.change_health(-DEHYDRATION_DAMAGE)

    hazard = state.active_hazard
    if hazard is not None and hazard.affects(tile.biome):
        tribute.change_health(-hazard.damage)
        state.log(f"{tribute.name} was hurt by the {hazard.type.value}.", LogCategory.HAZARD)

    apply_weather_status(tribute, tile, state, rng)

    try_craft(tribute, state)
    try_place_trap(tribute, tile, state)
    auto_heal(tribute, state)
    auto_eat(tribute, state)
    auto_drink(tribute, tile, state)

    if tribute.health <= 0:
        if tribute.cause_of_death is None:
            tribute.cause_of_death = DEFAULT_DEATH_CAUSE
        state.log(f"{tribute.name} died of {tribute.cause_of_death}.", LogCategory.DEATH)
        state.bury(tribute, DEFAULT_DEATH_CAUSE)


# ---------------------------------------------------------------------------
# Weather-driven status effects
# ---------------------------------------------------------------------------

def is_cold(weather: WeatherType, phase: GamePhase) -> bool:
    """Snowstorms, and rain at night, threaten hypothermia."""
    return weather == WeatherType.SNOW or (weather == WeatherType.RAIN and phase == GamePhase.NIGHT)


def apply_weather_status(
    tribute: Tribute, tile: HexTile, state: GameState, rng: np.random.Generator,
) -> None:
    """Start, cure or silently clear hypothermia and heatstroke."""
    if is_cold(state.weather, state.phase):
        has_warmth = any(provides_warmth(item) for item in tribute.inventory)
        has_shelter = tile.biome in SHELTER_BIOMES
        if not has_warmth and not has_shelter:
            if rng.random() < HYPOTHERMIA_ONSET_CHANCE and tribute.add_status(StatusEffect.HYPOTHERMIA):
                state.log(
                    f"{tribute.name} is developing Hypothermia from the cold.",
                    LogCategory.STATUS,
                )
        elif tribute.remove_status(StatusEffect.HYPOTHERMIA):
            state.log(
                f"{tribute.name} warmed up and cured their Hypothermia.",
                LogCategory.STATUS,
            )
    else:
        tribute.remove_status(StatusEffect.HYPOTHERMIA)

    if state.weather == WeatherType.HEATWAVE:
        water = tribute.best_consumable(ConsumableEffect.WATER)
        near_water = tile.biome in WATER_BIOMES
        if water is None and not near_water:
            if rng.random() < HEATSTROKE_ONSET_CHANCE and tribute.add_status(StatusEffect.HEATSTROKE):
                state.log(f"{tribute.name} collapsed from Heatstroke.", LogCategory.STATUS)
        elif tribute.remove_status(StatusEffect.HEATSTROKE) and water is not None:
            tribute.discard(water)
            state.log(f"{tribute.name} drank water to cure Heatstroke.", LogCategory.STATUS)
    else:
        tribute.remove_status(StatusEffect.HEATSTROKE)


# ---------------------------------------------------------------------------
# Crafting and traps
# ---------------------------------------------------------------------------

def can_craft(tribute: Tribute, recipe: Recipe) -> bool:
    held = Counter(item.id for item in tribute.inventory)
    needed = Counter(recipe.ingredients)
    return all(held[item_id] >= n for item_id, n in needed.items())


def try_craft(tribute: Tribute, state: GameState) -> Recipe | None:
    """Craft with the first recipe whose ingredients are all held.

    At most one craft per tick.
    """
    for recipe in CRAFTING_RECIPES:
        if can_craft(tribute, recipe):
            for item_id in recipe.ingredients:
                tribute.take_item(item_id)
            tribute.inventory.append(recipe.result)
            state.log(f"{tribute.name} crafted a {recipe.result.name}.", LogCategory.CRAFTING)
            return recipe
    return None


def try_place_trap(tribute: Tribute, tile: HexTile, state: GameState) -> Trap | None:
    """Plant a carried mine on ``tile`` if the tile is not trapped yet."""
    if tile.trap is not None or not tribute.has_item(TRAP_ITEM_ID):
        return None
    tribute.take_item(TRAP_ITEM_ID)
    tile.trap = Trap(owner_id=tribute.id, damage=TRAP_DAMAGE, description=TRAP_DESCRIPTION)
    state.log(f"{tribute.name} set a trap in the {tile.biome.value}.", LogCategory.TRAP)
    return tile.trap


# ---------------------------------------------------------------------------
# Automatic item use
# ---------------------------------------------------------------------------

def auto_heal(tribute: Tribute, state: GameState) -> None:
    if tribute.has_status(StatusEffect.POISONED):
        antidote = tribute.best_consumable(ConsumableEffect.CURE_POISON)
        if antidote is not None:
            tribute.discard(antidote)
            tribute.remove_status(StatusEffect.POISONED)
            state.log(f"{tribute.name} used {antidote.name} to cure Poison.", LogCategory.STATUS)

    if tribute.health >= HEAL_BELOW:
        return
    med = tribute.best_consumable(ConsumableEffect.HEALING)
    if med is None:
        return
    tribute.discard(med)
    tribute.change_health(med.amount)
    state.log(f"{tribute.name} used {med.name} to heal.", LogCategory.INFO)
    if med.id == "bandage":
        tribute.remove_status(StatusEffect.BLEEDING)


def auto_eat(tribute: Tribute, state: GameState) -> None:
    if tribute.hunger >= EAT_BELOW:
        return
    food = tribute.best_consumable(ConsumableEffect.FOOD)
    if food is None:
        return
    tribute.discard(food)
    tribute.change_hunger(food.amount)
    state.log(f"{tribute.name} ate {food.name}.", LogCategory.INFO)


def auto_drink(tribute: Tribute, tile: HexTile, state: GameState) -> None:
    if tribute.thirst >= DRINK_BELOW:
        return
    if tile.biome == Biome.RIVER:
        tribute.thirst = 100.0
        state.log(f"{tribute.name} drank from the river.", LogCategory.INFO)
        return
    water = tribute.best_consumable(ConsumableEffect.WATER)
    if water is not None:
        tribute.discard(water)
        tribute.change_thirst(WATER_ITEM_RELIEF)
        state.log(f"{tribute.name} drank their water.", LogCategory.INFO)
