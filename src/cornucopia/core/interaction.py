"""
Pairwise encounter logic.

When two tributes share a tile the first of the pair decides what happens:
betray an ally late in the game, attack an enemy, try to form an alliance,
pick a fight, bond, or ignore the other. Bonding and alliance outcomes are
applied here too; fights are handed to the combat resolver by the caller.
"""

from __future__ import annotations

from enum import Enum

import numpy as np

from cornucopia.core.game_log import LogCategory
from cornucopia.core.relationships import modify_trust
from cornucopia.core.state import GameState
from cornucopia.core.tribute import RelationshipType, Tribute


class InteractionType(str, Enum):
    FIGHT = "fight"
    BOND = "bond"
    ALLIANCE = "alliance"
    IGNORE = "ignore"


BETRAYAL_SURVIVORS = 4      # at or below, allies start eyeing each other
BETRAYAL_TRUST_PENALTY = 100
PEACEFUL_AGGRESSION = 7     # both strictly below may ally
ALLIANCE_CHANCE = 0.15
HOSTILE_AGGRESSION = 7      # strictly above picks fights
BOND_CHANCE = 0.2
BOND_TRUST = 10
ALLIANCE_TRUST = 40

BONDING_EVENTS = [
    "shares a story about their family with",
    "agrees to take first watch for",
    "shares food with",
    "promises to protect",
    "huddles for warmth with",
    "discusses strategy with",
    "holds hands with",
    "treats a small wound for",
    "jokes about the Capitol with",
    "teaches a survival trick to",
]

BETRAYAL_EVENTS = [
    "waited for the perfect moment to strike",
    "shoved",
    "decided they didn't need",
    "stabbed",
    "broke the alliance with",
    "used as bait",
    "stole supplies from",
    "pushed into a trap",
]

IDLE_EVENTS = [
    "picks flowers.",
    "practices their weapon handling.",
    "cries silently.",
    "thinks about home.",
    "hums a song from their district.",
    "climbs a tree to get a better view.",
    "sharpens a stick.",
    "tries to sleep but can't.",
    "looks at the sky.",
    "searches for clean water.",
    "camouflages themselves with mud.",
    "hears a cannon fire in the distance.",
    "inspects a strange insect.",
    "whispers a prayer.",
    "rearranges their inventory.",
    "hallucinates a loved one.",
    "trips over a root.",
    "watches a mockingjay fly by.",
    "tastes the air.",
    "checks their pulse.",
    "curls into a ball.",
    "stares blankly at the horizon.",
]


def _pick(lines: list[str], rng: np.random.Generator) -> str:
    return lines[int(rng.integers(len(lines)))]


def betrayal_chance(t1: Tribute, t2: Tribute) -> float:
    """Percent chance that ``t1`` turns on ``t2``: 3 x intellect + 2 x aggression - trust."""
    trust = t1.relationship_to(t2.id).trust
    return t1.stats.intellect * 3 + t1.stats.aggression * 2 - trust


def evaluate_interaction(
    t1: Tribute,
    t2: Tribute,
    state: GameState,
    rng: np.random.Generator,
) -> InteractionType:
    """Decide what ``t1`` does about ``t2``.

    Rules are checked in order and the first that applies wins:

    1. ``t1`` counts ``t2`` as an ally or close ally and few tributes remain:
       a betrayal roll. On success the betrayal is logged, trust collapses
       both ways and the result is a fight.
    2. ``t1`` regards ``t2`` as an enemy: fight.
    3. Neutral and both peaceful: a small chance of an alliance.
    4. ``t1`` is aggressive and more than two remain: fight.
    5. A chance to bond.
    6. Otherwise ignore.
    """
    rel_type = t1.relationship_type_to(t2.id)
    survivors = state.survivor_count

    if rel_type in (RelationshipType.ALLY, RelationshipType.CLOSE_ALLY) and survivors <= BETRAYAL_SURVIVORS:
        if rng.random() * 100 < betrayal_chance(t1, t2):
            method = _pick(BETRAYAL_EVENTS, rng)
            state.log(f"{t1.name} {method} {t2.name}!", LogCategory.COMBAT)
            modify_trust(t1, t2.id, -BETRAYAL_TRUST_PENALTY)
            modify_trust(t2, t1.id, -BETRAYAL_TRUST_PENALTY)
            return InteractionType.FIGHT

    if rel_type == RelationshipType.ENEMY:
        return InteractionType.FIGHT

    if (
        rel_type == RelationshipType.NEUTRAL
        and t1.stats.aggression < PEACEFUL_AGGRESSION
        and t2.stats.aggression < PEACEFUL_AGGRESSION
    ):
        if rng.random() < ALLIANCE_CHANCE:
            return InteractionType.ALLIANCE

    if t1.stats.aggression > HOSTILE_AGGRESSION and survivors > 2:
        return InteractionType.FIGHT

    if rng.random() < BOND_CHANCE:
        return InteractionType.BOND

    return InteractionType.IGNORE


def apply_bond(t1: Tribute, t2: Tribute, state: GameState, rng: np.random.Generator) -> None:
    event = _pick(BONDING_EVENTS, rng)
    state.log(f"{t1.name} {event} {t2.name}.", LogCategory.INFO)
    modify_trust(t1, t2.id, BOND_TRUST)
    modify_trust(t2, t1.id, BOND_TRUST)
    t1.last_action = "Bonding"
    t2.last_action = "Bonding"


def apply_alliance(t1: Tribute, t2: Tribute, state: GameState) -> None:
    state.log(f"{t1.name} and {t2.name} formed an alliance!", LogCategory.ALLIANCE)
    modify_trust(t1, t2.id, ALLIANCE_TRUST)
    modify_trust(t2, t1.id, ALLIANCE_TRUST)


def idle_line(tribute: Tribute, state: GameState, weather_lines: list[str], rng: np.random.Generator) -> None:
    """Log a flavour line for a tribute alone on its tile.

    Weather-specific lines are used 60% of the time when the current
    weather has any, generic ones otherwise.
    """
    if rng.random() < 0.6 and weather_lines:
        state.log(f"{tribute.name} {_pick(weather_lines, rng)}", LogCategory.WEATHER)
    else:
        state.log(f"{tribute.name} {_pick(IDLE_EVENTS, rng)}", LogCategory.INFO)
    tribute.last_action = "Idle"
