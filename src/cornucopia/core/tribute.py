"""
Tribute dataclass and the small value types hanging off it.

A tribute is created once at initialization, mutated every step while
alive, and frozen at death. Vitals are clamped to [0, 100] on every
change and trust to [-100, 100]; the relationship category is always
derived from trust, never stored.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from cornucopia.core.items import (
    ConsumableEffect,
    Consumable,
    Gear,
    GearTrait,
    Item,
    Weapon,
    item_from_dict,
)

VITAL_MIN = 0.0
VITAL_MAX = 100.0
TRUST_MIN = -100.0
TRUST_MAX = 100.0

# Location of a tribute that has not been placed on the arena yet.
UNPLACED: tuple[int, int] = (-99, -99)


class District(str, Enum):
    D1 = "D1"
    D2 = "D2"
    D3 = "D3"
    D4 = "D4"
    D5 = "D5"
    D6 = "D6"
    D7 = "D7"
    D8 = "D8"
    D9 = "D9"
    D10 = "D10"
    D11 = "D11"
    D12 = "D12"


DISTRICTS: list[District] = list(District)

# Districts that train their tributes and, optionally, start allied.
CAREER_DISTRICTS: frozenset[District] = frozenset({District.D1, District.D2, District.D4})


class Gender(str, Enum):
    M = "M"
    F = "F"


class StatusEffect(str, Enum):
    """Lingering conditions processed once per tick."""

    BLEEDING = "Bleeding"
    POISONED = "Poisoned"
    HYPOTHERMIA = "Hypothermia"
    HEATSTROKE = "Heatstroke"


class RelationshipType(str, Enum):
    ENEMY = "Enemy"
    NEUTRAL = "Neutral"
    ALLY = "Ally"
    CLOSE_ALLY = "Close Ally"
    SOULMATE = "Soulmate"


RELATIONSHIP_THRESHOLDS: dict[RelationshipType, float] = {
    RelationshipType.ENEMY: -20,
    RelationshipType.NEUTRAL: 0,
    RelationshipType.ALLY: 20,
    RelationshipType.CLOSE_ALLY: 60,
    RelationshipType.SOULMATE: 90,
}

# Categories that count as being on someone's side.
FRIENDLY_TYPES: frozenset[RelationshipType] = frozenset({
    RelationshipType.ALLY,
    RelationshipType.CLOSE_ALLY,
    RelationshipType.SOULMATE,
})


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def relationship_type_for(trust: float) -> RelationshipType:
    """Map a trust score to its relationship category."""
    if trust >= RELATIONSHIP_THRESHOLDS[RelationshipType.SOULMATE]:
        return RelationshipType.SOULMATE
    if trust >= RELATIONSHIP_THRESHOLDS[RelationshipType.CLOSE_ALLY]:
        return RelationshipType.CLOSE_ALLY
    if trust >= RELATIONSHIP_THRESHOLDS[RelationshipType.ALLY]:
        return RelationshipType.ALLY
    if trust <= RELATIONSHIP_THRESHOLDS[RelationshipType.ENEMY]:
        return RelationshipType.ENEMY
    return RelationshipType.NEUTRAL


@dataclass
class Relationship:
    """Directed trust from one tribute toward another."""

    trust: float = 0.0

    def __post_init__(self) -> None:
        self.trust = clamp(self.trust, TRUST_MIN, TRUST_MAX)

    @property
    def type(self) -> RelationshipType:
        return relationship_type_for(self.trust)

    def to_dict(self) -> dict[str, Any]:
        return {"trust": self.trust, "type": self.type.value}


@dataclass
class Stats:
    """The five fixed attributes rolled at creation."""

    strength: int
    speed: int
    constitution: int
    intellect: int
    aggression: int

    def to_dict(self) -> dict[str, int]:
        return {
            "strength": self.strength,
            "speed": self.speed,
            "constitution": self.constitution,
            "intellect": self.intellect,
            "aggression": self.aggression,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Stats:
        return cls(**{k: int(d[k]) for k in (
            "strength", "speed", "constitution", "intellect", "aggression",
        )})


@dataclass
class Tribute:
    """One competitor in the arena."""

    # === Identity ===
    id: str
    name: str
    district: District
    gender: Gender
    age: int
    stats: Stats

    # === Vitals, each in [0, 100] ===
    health: float = VITAL_MAX
    hunger: float = VITAL_MAX   # 100 is full
    thirst: float = VITAL_MAX   # 100 is full
    stamina: float = VITAL_MAX

    # === State ===
    is_alive: bool = True
    inventory: list[Item] = field(default_factory=list)
    kills: int = 0
    location: tuple[int, int] = UNPLACED
    last_location: tuple[int, int] | None = None
    status_effects: list[StatusEffect] = field(default_factory=list)
    last_action: str = "Waiting for launch..."
    hype: int = 0

    # === Social ===
    relationships: dict[str, Relationship] = field(default_factory=dict)

    # === Death bookkeeping ===
    cause_of_death: str | None = None
    last_attacker_id: str | None = None

    # ------------------------------------------------------------------
    # Vitals
    # ------------------------------------------------------------------
    def change_health(self, delta: float) -> None:
        self.health = clamp(self.health + delta, VITAL_MIN, VITAL_MAX)

    def change_hunger(self, delta: float) -> None:
        self.hunger = clamp(self.hunger + delta, VITAL_MIN, VITAL_MAX)

    def change_thirst(self, delta: float) -> None:
        self.thirst = clamp(self.thirst + delta, VITAL_MIN, VITAL_MAX)

    def change_stamina(self, delta: float) -> None:
        self.stamina = clamp(self.stamina + delta, VITAL_MIN, VITAL_MAX)

    # ------------------------------------------------------------------
    # Status effects (ordered, no duplicates)
    # ------------------------------------------------------------------
    def has_status(self, effect: StatusEffect) -> bool:
        return effect in self.status_effects

    def add_status(self, effect: StatusEffect) -> bool:
        """Add ``effect``; returns False if it was already active."""
        if effect in self.status_effects:
            return False
        self.status_effects.append(effect)
        return True

    def remove_status(self, effect: StatusEffect) -> bool:
        """Remove ``effect``; returns False if it was not active."""
        if effect not in self.status_effects:
            return False
        self.status_effects.remove(effect)
        return True

    # ------------------------------------------------------------------
    # Inventory
    # ------------------------------------------------------------------
    def has_item(self, item_id: str) -> bool:
        return any(item.id == item_id for item in self.inventory)

    def take_item(self, item_id: str) -> Item | None:
        """Remove and return the first inventory item with ``item_id``."""
        for idx, item in enumerate(self.inventory):
            if item.id == item_id:
                return self.inventory.pop(idx)
        return None

    def discard(self, item: Item) -> None:
        """Remove the first inventory entry equal to ``item``."""
        self.inventory.remove(item)

    @property
    def weapon(self) -> Weapon | None:
        """The weapon this tribute fights with: the first one carried."""
        for item in self.inventory:
            if isinstance(item, Weapon):
                return item
        return None

    def has_gear(self, trait: GearTrait) -> bool:
        return any(isinstance(i, Gear) and i.trait == trait for i in self.inventory)

    def best_consumable(self, effect: ConsumableEffect) -> Consumable | None:
        """Highest-amount consumable with ``effect``; earliest wins ties."""
        best: Consumable | None = None
        for item in self.inventory:
            if isinstance(item, Consumable) and item.effect == effect:
                if best is None or item.amount > best.amount:
                    best = item
        return best

    # ------------------------------------------------------------------
    # Relationships
    # ------------------------------------------------------------------
    def relationship_to(self, other_id: str) -> Relationship:
        """Relationship toward ``other_id``; an unstored Neutral one if unknown."""
        return self.relationships.get(other_id) or Relationship()

    def relationship_type_to(self, other_id: str) -> RelationshipType:
        return self.relationship_to(other_id).type

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------
    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "district": self.district.value,
            "gender": self.gender.value,
            "age": self.age,
            "stats": self.stats.to_dict(),
            "health": self.health,
            "hunger": self.hunger,
            "thirst": self.thirst,
            "stamina": self.stamina,
            "is_alive": self.is_alive,
            "inventory": [item.to_dict() for item in self.inventory],
            "kills": self.kills,
            "location": list(self.location),
            "last_location": list(self.last_location) if self.last_location else None,
            "status_effects": [e.value for e in self.status_effects],
            "last_action": self.last_action,
            "hype": self.hype,
            "relationships": {k: v.to_dict() for k, v in self.relationships.items()},
            "cause_of_death": self.cause_of_death,
            "last_attacker_id": self.last_attacker_id,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Tribute:
        last = d.get("last_location")
        return cls(
            id=d["id"],
            name=d["name"],
            district=District(d["district"]),
            gender=Gender(d["gender"]),
            age=d["age"],
            stats=Stats.from_dict(d["stats"]),
            health=d["health"],
            hunger=d["hunger"],
            thirst=d["thirst"],
            stamina=d["stamina"],
            is_alive=d["is_alive"],
            inventory=[item_from_dict(i) for i in d.get("inventory", [])],
            kills=d.get("kills", 0),
            location=tuple(d["location"]),
            last_location=tuple(last) if last else None,
            status_effects=[StatusEffect(e) for e in d.get("status_effects", [])],
            last_action=d.get("last_action", ""),
            hype=d.get("hype", 0),
            relationships={
                k: Relationship(trust=v["trust"])
                for k, v in d.get("relationships", {}).items()
            },
            cause_of_death=d.get("cause_of_death"),
            last_attacker_id=d.get("last_attacker_id"),
        )

    def __repr__(self) -> str:
        status = "alive" if self.is_alive else "dead"
        return (
            f"Tribute(id={self.id!r}, name={self.name!r}, hp={self.health:.0f}, "
            f"at={self.location}, {status})"
        )
