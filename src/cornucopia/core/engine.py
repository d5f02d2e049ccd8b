"""
Main game engine.

Drives a game one discrete step at a time through the phase cycle
SETUP -> BLOODBATH -> DAY -> NIGHT -> DAY -> ... -> GAME_OVER.

Every entry point takes a snapshot and returns a new one; the input is
never mutated and no reference to it is kept. All randomness flows
through the ``numpy.random.Generator`` passed in as ``rng``.
"""

from __future__ import annotations

import logging
from enum import Enum

import numpy as np

from cornucopia.core.combat import resolve_combat
from cornucopia.core.config import GameConfig
from cornucopia.core.game_log import LogCategory
from cornucopia.core.hazards import roll_hazard
from cornucopia.core.hex_grid import ORIGIN, Biome, HexGrid, HexTile
from cornucopia.core.interaction import (
    InteractionType,
    apply_alliance,
    apply_bond,
    evaluate_interaction,
    idle_line,
)
from cornucopia.core.items import CONSUMABLES, WEAPONS
from cornucopia.core.map_generators import generate_arena
from cornucopia.core.movement import REST_RECOVERY, REST_THRESHOLD, move_tribute
from cornucopia.core.relationships import modify_trust, seed_relationships
from cornucopia.core.state import GamePhase, GameState
from cornucopia.core.tick_processor import process_tribute_tick
from cornucopia.core.tribute import StatusEffect, Tribute
from cornucopia.core.tribute_generator import generate_tributes
from cornucopia.core.weather import STARTING_WEATHER, WEATHER_IDLE_EVENTS, next_weather

logger = logging.getLogger(__name__)

IDLE_CHANCE = 0.15
LOOT_CHANCE = 0.2
LOOT_BIOMES = frozenset({Biome.FOREST, Biome.CORNUCOPIA, Biome.RUINS})

FORCED_ALLIANCE_TRUST = 30
FORCED_ALLIANCE_RETURN_TRUST = 10
FORCED_BETRAYAL_TRUST = 100
GIFT_TRUST = 40
FORCED_FIGHT_LETHALITY = 1.0


class ManualAction(str, Enum):
    """Operator commands that can be forced on a pair of tributes."""

    ALLIANCE = "alliance"
    BETRAY = "betray"
    GIFT = "gift"


# ---------------------------------------------------------------------------
# Initialization
# ---------------------------------------------------------------------------

def place_tributes(tributes: list[Tribute], grid: HexGrid, ring: int) -> None:
    """Spread tributes round-robin over the tiles ``ring`` steps from the origin.

    Falls back to the first tile of the grid when that ring is empty.
    """
    starts = grid.ring(ring)
    fallback = next(iter(grid))
    for i, tribute in enumerate(tributes):
        tile = starts[i % len(starts)] if starts else fallback
        tribute.location = tile.coords
        tribute.last_location = tile.coords


def initialize_game(config: GameConfig, rng: np.random.Generator | None = None) -> GameState:
    """Create the opening snapshot for ``config``.

    Tributes are generated first, then the arena, so a given seed always
    yields the same roster regardless of map size.
    """
    if rng is None:
        rng = np.random.default_rng(config.random_seed)

    tributes = generate_tributes(config.tribute_count, config.use_ages, rng)
    grid = generate_arena(config.map_size, rng)
    seed_relationships(tributes, config.use_career_alliance)
    place_tributes(tributes, grid, config.map_size - 1)

    logger.debug(
        "Initialized game: %d tributes on a radius-%d arena (%d tiles)",
        len(tributes), config.map_size, len(grid),
    )
    return GameState(
        day=1,
        phase=GamePhase.SETUP,
        tributes=tributes,
        grid=grid,
        config=GameConfig.from_dict(config.to_dict()),
        weather=STARTING_WEATHER,
    )


# ---------------------------------------------------------------------------
# Phase controller
# ---------------------------------------------------------------------------

class PhaseController:
    """
    Runs one step on a working copy of a snapshot.

    Stages per step:
    1. Phase transition (weather, hazards, day counter)
    2. Tick processing for every living tribute
    3. Movement, with traps triggering on entry
    4. Interactions between tributes sharing a tile
    5. Game-over check
    """

    def __init__(self, state: GameState, rng: np.random.Generator):
        self.state = state
        self.rng = rng

    def step(self) -> GameState:
        deaths_before = len(self.state.deceased_queue)

        self._transition()
        self._run_ticks()
        self._run_movement()
        self._run_interactions()
        self._check_game_over()

        for tribute_id in self.state.deceased_queue[deaths_before:]:
            dead = self.state.find_tribute(tribute_id)
            if dead is not None:
                logger.debug("%s eliminated: %s", dead.name, dead.cause_of_death)
        return self.state

    # ------------------------------------------------------------------
    # 1. Transition
    # ------------------------------------------------------------------
    def _transition(self) -> None:
        state = self.state
        previous = state.phase

        if previous == GamePhase.SETUP:
            state.phase = GamePhase.BLOODBATH
            state.log("THE GAMES HAVE BEGUN!", LogCategory.GAMEMAKER)
            state.log(f"Weather is {state.weather.value}", LogCategory.WEATHER)
        elif previous == GamePhase.BLOODBATH:
            state.phase = GamePhase.DAY
            state.active_hazard = None
        elif previous == GamePhase.DAY:
            state.phase = GamePhase.NIGHT
            self._advance_weather()
        elif previous == GamePhase.NIGHT:
            state.phase = GamePhase.DAY
            state.day += 1
            state.active_hazard = roll_hazard(self.rng)
            if state.active_hazard is not None:
                state.log(
                    f"GAMEMAKER EVENT: {state.active_hazard.type.value}",
                    LogCategory.GAMEMAKER,
                )
                state.log(state.active_hazard.description, LogCategory.HAZARD)
            self._advance_weather()

        logger.debug(
            "Day %d: %s -> %s (%s, %d alive)",
            state.day, previous.value, state.phase.value,
            state.weather.value, state.survivor_count,
        )

    def _advance_weather(self) -> None:
        self.state.weather = next_weather(self.state.weather, self.rng)
        self.state.log(f"Weather changed to {self.state.weather.value}", LogCategory.WEATHER)

    # ------------------------------------------------------------------
    # 2. Ticks
    # ------------------------------------------------------------------
    def _run_ticks(self) -> None:
        for tribute in self.state.living():
            process_tribute_tick(tribute, self.state, self.rng)

    # ------------------------------------------------------------------
    # 3. Movement
    # ------------------------------------------------------------------
    def _run_movement(self) -> None:
        state = self.state
        is_finale = state.day >= state.config.finale_day
        target = ORIGIN if is_finale else None
        avoid = state.active_hazard.primary_biome if state.active_hazard else None

        for tribute in state.living():
            if tribute.stamina <= REST_THRESHOLD:
                tribute.last_action = "Resting to recover stamina"
                tribute.change_stamina(REST_RECOVERY)
                state.log(f"{tribute.name} is resting.", LogCategory.REST)
                continue

            move_tribute(
                tribute, state.grid, state.tributes, target, avoid,
                is_finale, state.weather, self.rng,
            )
            tile = state.tile_of(tribute)
            if tile is not None and tile.trap is not None and tile.trap.owner_id != tribute.id:
                self._trigger_trap(tribute, tile)
            else:
                q, r = tribute.location
                tribute.last_action = f"Moved to ({q}, {r})"

    def _trigger_trap(self, tribute: Tribute, tile: HexTile) -> None:
        trap = tile.trap
        tile.trap = None
        tribute.change_health(-trap.damage)
        tribute.add_status(StatusEffect.BLEEDING)
        self.state.log(f"{tribute.name} {trap.description}!", LogCategory.TRAP)
        if tribute.health <= 0:
            self.state.log(f"{tribute.name} died from a trap.", LogCategory.DEATH)
            self.state.bury(tribute, "Caught in a trap")

    # ------------------------------------------------------------------
    # 4. Interactions
    # ------------------------------------------------------------------
    def _run_interactions(self) -> None:
        groups: dict[tuple[int, int], list[Tribute]] = {}
        for tribute in self.state.living():
            groups.setdefault(tribute.location, []).append(tribute)

        for group in groups.values():
            if len(group) > 1:
                self._run_group(group)
            else:
                self._run_lone(group[0])

    def _run_group(self, group: list[Tribute]) -> None:
        shuffled = [group[i] for i in self.rng.permutation(len(group))]
        for i in range(0, len(shuffled), 2):
            t1 = shuffled[i]
            if i + 1 >= len(shuffled):
                t1.last_action = "Watching from the shadows"
                continue
            t2 = shuffled[i + 1]
            if not t1.is_alive or not t2.is_alive:
                continue

            outcome = evaluate_interaction(t1, t2, self.state, self.rng)
            if outcome == InteractionType.FIGHT:
                resolve_combat(t1, t2, self.state, self.rng, self.state.config.lethality_multiplier)
            elif outcome == InteractionType.BOND:
                apply_bond(t1, t2, self.state, self.rng)
            elif outcome == InteractionType.ALLIANCE:
                apply_alliance(t1, t2, self.state)

    def _run_lone(self, tribute: Tribute) -> None:
        state = self.state
        if "Resting" not in tribute.last_action and self.rng.random() < IDLE_CHANCE:
            idle_line(tribute, state, WEATHER_IDLE_EVENTS.get(state.weather, []), self.rng)
            return
        if "Moved" not in tribute.last_action:
            return
        tile = state.tile_of(tribute)
        if tile is None or tile.biome not in LOOT_BIOMES:
            return
        if self.rng.random() < LOOT_CHANCE:
            pool = WEAPONS if tile.biome == Biome.CORNUCOPIA else CONSUMABLES
            item = pool[int(self.rng.integers(len(pool)))]
            tribute.inventory.append(item)
            state.log(
                f"{tribute.name} found a {item.name} in the {tile.biome.value}.",
                LogCategory.CRAFTING,
            )

    # ------------------------------------------------------------------
    # 5. Game over
    # ------------------------------------------------------------------
    def _check_game_over(self) -> None:
        survivors = self.state.living()
        if len(survivors) > 1:
            return
        self.state.winner_id = survivors[0].id if survivors else None
        self.state.log("--- GAME OVER ---", LogCategory.GAMEMAKER)
        self.state.phase = GamePhase.GAME_OVER
        if survivors:
            logger.debug("Game over on day %d: %s wins", self.state.day, survivors[0].name)
        else:
            logger.debug("Game over on day %d: no survivors", self.state.day)


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------

def advance_game_phase(state: GameState, rng: np.random.Generator | None = None) -> GameState:
    """Advance ``state`` by one step and return the new snapshot.

    A finished game is returned as is.
    """
    if state.phase == GamePhase.GAME_OVER:
        return state
    if rng is None:
        rng = np.random.default_rng()
    return PhaseController(state.copy(), rng).step()


def manual_interaction(
    action: ManualAction | str,
    actor_id: str,
    target_id: str,
    state: GameState,
    rng: np.random.Generator | None = None,
) -> GameState:
    """Force ``actor_id`` to act on ``target_id``.

    Returns the original state unchanged when either tribute is missing or
    dead. Unknown actions raise ``ValueError``.
    """
    try:
        action = ManualAction(action)
    except ValueError:
        raise ValueError(f"Unknown manual action: {action!r}") from None

    new_state = state.copy()
    actor = new_state.find_tribute(actor_id)
    target = new_state.find_tribute(target_id)
    if actor is None or target is None or not actor.is_alive or not target.is_alive:
        return state

    if action == ManualAction.ALLIANCE:
        modify_trust(actor, target.id, FORCED_ALLIANCE_TRUST)
        modify_trust(target, actor.id, FORCED_ALLIANCE_RETURN_TRUST)
        new_state.log(
            f"GAMEMAKER: Forced {actor.name} to attempt alliance with {target.name}.",
            LogCategory.GAMEMAKER,
        )
    elif action == ManualAction.BETRAY:
        if rng is None:
            rng = np.random.default_rng()
        modify_trust(actor, target.id, -FORCED_BETRAYAL_TRUST)
        new_state.log(
            f"GAMEMAKER: Forced {actor.name} to attack {target.name}!",
            LogCategory.GAMEMAKER,
        )
        resolve_combat(actor, target, new_state, rng, FORCED_FIGHT_LETHALITY)
    elif action == ManualAction.GIFT and actor.inventory:
        item = actor.inventory.pop(0)
        target.inventory.append(item)
        modify_trust(target, actor.id, GIFT_TRUST)
        new_state.log(
            f"{actor.name} was forced to give {item.name} to {target.name}.",
            LogCategory.INFO,
        )

    return new_state


def acknowledge_deceased(state: GameState) -> GameState:
    """Return a copy of ``state`` with the deceased queue drained."""
    new_state = state.copy()
    new_state.deceased_queue = []
    return new_state
