"""
Combat resolution between two co-located tributes.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from cornucopia.core.game_log import LogCategory
from cornucopia.core.items import GearTrait
from cornucopia.core.relationships import modify_trust, propagate_hostility
from cornucopia.core.state import GameState
from cornucopia.core.tribute import Tribute

FLEE_HEALTH = 30        # strictly below this a faster tribute may run
FLEE_CHANCE = 0.5
MIN_DAMAGE = 5
DAMAGE_FACTOR = 0.5
ARMOR_FACTOR = 0.7
COMBAT_TRUST_PENALTY = 50
FIRST_STRIKE_SPEED_GAP = 3
KILL_HYPE = 5


@dataclass
class CombatResult:
    """What happened in one exchange, seen from ``attacker_id``'s side."""

    attacker_id: str
    defender_id: str
    fled: bool = False
    attacker_score: float = 0.0
    defender_score: float = 0.0
    verb: str = ""
    damage_to_attacker: float = 0.0
    damage_to_defender: float = 0.0
    deaths: list[str] = field(default_factory=list)


def narrative_verb(gap: float) -> str:
    """Describe an exchange from the side whose score exceeds the other's by ``gap``."""
    verb = "fought"
    if gap > 20:
        verb = "dominated"
    if gap < -20:
        verb = "was crushed by"
    if abs(gap) < 10:
        verb = "clashed evenly with"
    return verb


def combat_score(tribute: Tribute, rng: np.random.Generator) -> float:
    """2 x strength + speed + weapon damage + aggression / 2 + U[0, 20]."""
    weapon = tribute.weapon
    s = tribute.stats
    return (
        s.strength * 2
        + s.speed
        + (weapon.damage if weapon else 0)
        + s.aggression / 2
        + int(rng.integers(0, 21))
    )


def _damage_taken(own_score: float, opponent_score: float, lethality: float, tribute: Tribute) -> float:
    damage = max(MIN_DAMAGE, (opponent_score - own_score) * DAMAGE_FACTOR) * lethality
    if tribute.has_gear(GearTrait.ARMOR):
        damage *= ARMOR_FACTOR
    return damage


def resolve_combat(
    t1: Tribute,
    t2: Tribute,
    state: GameState,
    rng: np.random.Generator,
    lethality: float,
) -> CombatResult:
    """Resolve a fight between ``t1`` and ``t2`` on ``state`` (a working copy).

    A badly hurt ``t1`` that is strictly faster may flee instead. Otherwise
    both take damage from the score gap, trust collapses both ways and any
    deaths are recorded. If both would die, a speed advantage of
    ``FIRST_STRIKE_SPEED_GAP`` or more lets the faster one survive on 1 health.
    """
    result = CombatResult(attacker_id=t1.id, defender_id=t2.id)
    if not t1.is_alive or not t2.is_alive:
        return result

    if t1.stats.speed > t2.stats.speed and t1.health < FLEE_HEALTH:
        if rng.random() < FLEE_CHANCE:
            state.log(f"{t1.name} fled from {t2.name}!", LogCategory.FLEE)
            result.fled = True
            return result

    s1 = combat_score(t1, rng)
    s2 = combat_score(t2, rng)
    dmg1 = _damage_taken(s1, s2, lethality, t1)
    dmg2 = _damage_taken(s2, s1, lethality, t2)

    result.attacker_score = s1
    result.defender_score = s2
    result.damage_to_attacker = dmg1
    result.damage_to_defender = dmg2

    t1.change_health(-dmg1)
    t2.change_health(-dmg2)

    result.verb = narrative_verb(s1 - s2)
    weapon = t1.weapon
    weapon_name = weapon.name if weapon else "fists"
    state.log(f"{t1.name} {result.verb} {t2.name} using {weapon_name}.", LogCategory.COMBAT)

    modify_trust(t1, t2.id, -COMBAT_TRUST_PENALTY)
    modify_trust(t2, t1.id, -COMBAT_TRUST_PENALTY)
    t1.last_attacker_id = t2.id
    t2.last_attacker_id = t1.id

    if t1.health <= 0 and t2.health <= 0:
        if t1.stats.speed >= t2.stats.speed + FIRST_STRIKE_SPEED_GAP:
            t1.health = 1.0
        elif t2.stats.speed >= t1.stats.speed + FIRST_STRIKE_SPEED_GAP:
            t2.health = 1.0

    if t1.health <= 0 and t2.health <= 0:
        state.log(
            f"{t1.name} and {t2.name} killed each other in a brutal duel.",
            LogCategory.DEATH,
        )
        state.bury(t1, f"Died fighting {t2.name}")
        state.bury(t2, f"Died fighting {t1.name}")
        result.deaths = [t1.id, t2.id]
    elif t1.health <= 0:
        _record_kill(t2, t1, state)
        result.deaths = [t1.id]
    elif t2.health <= 0:
        _record_kill(t1, t2, state)
        result.deaths = [t2.id]

    return result


def _record_kill(killer: Tribute, victim: Tribute, state: GameState) -> None:
    killer.kills += 1
    killer.hype += KILL_HYPE
    state.log(f"{victim.name} was killed by {killer.name}.", LogCategory.DEATH)
    state.bury(victim, f"Slain by {killer.name}")
    propagate_hostility(killer.id, victim, state.tributes)
