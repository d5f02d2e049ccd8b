"""
Item catalogue for the arena.

Items are immutable value objects, one dataclass per category, each
carrying only the payload that makes sense for it: weapons have damage,
consumables have an effect and an amount, gear has a trait, materials
only exist to be crafted. Because instances are frozen, moving an item
from one inventory to another can never leave two tributes sharing
mutable state.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, ClassVar


class ItemCategory(str, Enum):
    WEAPON = "weapon"
    CONSUMABLE = "consumable"
    GEAR = "gear"
    MATERIAL = "material"


class ConsumableEffect(str, Enum):
    """What a consumable does when used."""

    FOOD = "food"
    WATER = "water"
    HEALING = "healing"
    CURE_POISON = "cure_poison"
    POISON = "poison"


class GearTrait(str, Enum):
    """Passive property granted by carrying a piece of gear."""

    ARMOR = "armor"
    WARMTH = "warmth"
    NIGHT_VISION = "night_vision"
    CAMOUFLAGE = "camouflage"


@dataclass(frozen=True)
class Item:
    """Base class for every inventory item."""

    category: ClassVar[ItemCategory]

    id: str
    name: str
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        for k, v in d.items():
            if isinstance(v, Enum):
                d[k] = v.value
        d["category"] = self.category.value
        return d


@dataclass(frozen=True)
class Weapon(Item):
    category: ClassVar[ItemCategory] = ItemCategory.WEAPON

    damage: int = 0
    incendiary: bool = False  # doubles as a heat source


@dataclass(frozen=True)
class Consumable(Item):
    category: ClassVar[ItemCategory] = ItemCategory.CONSUMABLE

    effect: ConsumableEffect = ConsumableEffect.FOOD
    amount: int = 0


@dataclass(frozen=True)
class Gear(Item):
    category: ClassVar[ItemCategory] = ItemCategory.GEAR

    trait: GearTrait = GearTrait.ARMOR


@dataclass(frozen=True)
class Material(Item):
    category: ClassVar[ItemCategory] = ItemCategory.MATERIAL


_ITEM_CLASSES: dict[ItemCategory, type[Item]] = {
    ItemCategory.WEAPON: Weapon,
    ItemCategory.CONSUMABLE: Consumable,
    ItemCategory.GEAR: Gear,
    ItemCategory.MATERIAL: Material,
}


def item_from_dict(d: dict[str, Any]) -> Item:
    """Rebuild an item from ``Item.to_dict()`` output."""
    data = dict(d)
    cls = _ITEM_CLASSES[ItemCategory(data.pop("category"))]
    if "effect" in data:
        data["effect"] = ConsumableEffect(data["effect"])
    if "trait" in data:
        data["trait"] = GearTrait(data["trait"])
    return cls(**data)


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------

WEAPONS: list[Weapon] = [
    Weapon("knife", "Combat Knife", "Sharp and deadly.", damage=15),
    Weapon("bow", "Recurve Bow", "Good for range.", damage=20),
    Weapon("spear", "Steel Spear", "Long reach.", damage=25),
    Weapon("axe", "Woodsman Axe", "Heavy hitter.", damage=30),
    Weapon("sword", "Short Sword", "Balanced combat.", damage=25),
    Weapon("trident", "Trident", "Rare and powerful.", damage=35),
    Weapon("rock", "Heavy Rock", "Better than nothing.", damage=5),
    Weapon("sickle", "Sickle", "Curved blade.", damage=22),
    Weapon("mace", "Spiked Mace", "Crushing power.", damage=28),
    Weapon("katana", "Katana", "Swift slicing.", damage=27),
    Weapon(
        "flamethrower", "Improvised Flamethrower", "Dangerous but effective.",
        damage=40, incendiary=True,
    ),
    Weapon("club", "Heavy Club", "Brutal blunt force.", damage=12),
]

CONSUMABLES: list[Item] = [
    Consumable("apple", "Dried Fruit", "Restores hunger.", ConsumableEffect.FOOD, 15),
    Consumable("bread", "District 9 Bread", "Hearty meal.", ConsumableEffect.FOOD, 25),
    Consumable("water", "Water Jug", "Restores thirst.", ConsumableEffect.WATER, 30),
    Consumable("bandage", "Bandages", "Heals Bleeding.", ConsumableEffect.HEALING, 20),
    Consumable("antidote", "Antidote", "Cures Poison.", ConsumableEffect.CURE_POISON, 0),
    Consumable("medkit", "Medkit", "Major healing.", ConsumableEffect.HEALING, 50),
    Consumable("berries", "Unknown Berries", "Risky snack.", ConsumableEffect.FOOD, 5),
    Consumable("squirrel", "Cooked Squirrel", "Good protein.", ConsumableEffect.FOOD, 20),
    Material("herbs", "Medicinal Herbs", "Used for crafting."),
    Material("wood", "Sturdy Branch", "Used for crafting."),
    Consumable("fish", "Raw Fish", "Better if cooked.", ConsumableEffect.FOOD, 10),
]

# Not handed out by the engine itself; kept so drivers and tests can
# equip tributes with the full range of gear.
SPONSOR_ITEMS: list[Item] = [
    Consumable("soup", "Hot Broth", "Sponsor gift.", ConsumableEffect.FOOD, 40),
    Consumable("morphling", "Morphling", "Powerful painkiller.", ConsumableEffect.HEALING, 50),
    Weapon("dagger", "Throwing Dagger", "Small but useful.", damage=10),
    Weapon("trident_gift", "Gold Trident", "Expensive gift.", damage=45),
    Gear("armor", "Light Armor", "Reduces damage taken.", GearTrait.ARMOR),
    Gear("night_vision", "Night Vision Goggles", "Safe movement at night.", GearTrait.NIGHT_VISION),
    Gear("camouflage", "Camo Kit", "Reduces encounter rate.", GearTrait.CAMOUFLAGE),
    Consumable("poison_vial", "Vial of Poison", "Applies poison to weapon.", ConsumableEffect.POISON, 0),
    Weapon("explosive", "Small Mine", "Trap item.", damage=60),
    Consumable("feast", "Lamb Stew", "Full hunger restore.", ConsumableEffect.FOOD, 100),
    Gear("fire_kit", "Flint & Steel", "Creates warmth.", GearTrait.WARMTH),
]

# Id of the item that gets planted as a trap.
TRAP_ITEM_ID = "explosive"


@dataclass(frozen=True)
class Recipe:
    """Ingredient ids (duplicates mean several copies) and the crafted result."""

    ingredients: tuple[str, ...]
    result: Item


CRAFTING_RECIPES: list[Recipe] = [
    Recipe(
        ("bandage", "herbs"),
        Consumable("salve", "Healing Salve", "Potent healing mixture.", ConsumableEffect.HEALING, 45),
    ),
    Recipe(
        ("wood", "knife"),
        Weapon("spear_wood", "Sharpened Spear", "Primitive but effective.", damage=18),
    ),
    Recipe(
        ("wood", "rock"),
        Weapon("hammer", "Stone Hammer", "Blunt force.", damage=12),
    ),
    Recipe(
        ("wood", "wood"),
        Gear("fire_kit", "Friction Fire", "Primitive fire starter.", GearTrait.WARMTH),
    ),
]

CATALOGUE: dict[str, Item] = {
    item.id: item for item in [*WEAPONS, *CONSUMABLES, *SPONSOR_ITEMS]
}


def get_item(item_id: str) -> Item:
    """Look up a catalogue item by id."""
    if item_id not in CATALOGUE:
        raise KeyError(f"Unknown item: '{item_id}'")
    return CATALOGUE[item_id]


def provides_warmth(item: Item) -> bool:
    if isinstance(item, Gear):
        return item.trait == GearTrait.WARMTH
    return isinstance(item, Weapon) and item.incendiary
