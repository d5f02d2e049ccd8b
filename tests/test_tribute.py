"""Tests for the Tribute dataclass."""

from cornucopia.core.items import ConsumableEffect, GearTrait, get_item
from cornucopia.core.tribute import District, Gender, Stats, StatusEffect, Tribute


def _make_tribute(**kwargs) -> Tribute:
    defaults = dict(
        id="tribute-1", name="D1-M", district=District.D1, gender=Gender.M,
        age=16, stats=Stats(6, 5, 7, 4, 8),
    )
    defaults.update(kwargs)
    return Tribute(**defaults)


class TestVitals:
    def test_clamped_high(self):
        t = _make_tribute()
        t.change_health(50)
        t.change_stamina(20)
        assert t.health == 100
        assert t.stamina == 100

    def test_clamped_low(self):
        t = _make_tribute()
        t.change_hunger(-250)
        t.change_thirst(-101)
        assert t.hunger == 0
        assert t.thirst == 0


class TestStatus:
    def test_no_duplicates(self):
        t = _make_tribute()
        assert t.add_status(StatusEffect.BLEEDING)
        assert not t.add_status(StatusEffect.BLEEDING)
        assert t.status_effects == [StatusEffect.BLEEDING]

    def test_order_kept(self):
        t = _make_tribute()
        t.add_status(StatusEffect.POISONED)
        t.add_status(StatusEffect.HEATSTROKE)
        assert t.status_effects == [StatusEffect.POISONED, StatusEffect.HEATSTROKE]

    def test_remove(self):
        t = _make_tribute(status_effects=[StatusEffect.HYPOTHERMIA])
        assert t.remove_status(StatusEffect.HYPOTHERMIA)
        assert not t.remove_status(StatusEffect.HYPOTHERMIA)
        assert not t.has_status(StatusEffect.HYPOTHERMIA)


class TestInventory:
    def test_weapon_is_first_carried(self):
        t = _make_tribute(inventory=[get_item("apple"), get_item("club"), get_item("sword")])
        assert t.weapon.id == "club"

    def test_no_weapon(self):
        assert _make_tribute(inventory=[get_item("water")]).weapon is None

    def test_take_item(self):
        t = _make_tribute(inventory=[get_item("wood"), get_item("knife"), get_item("wood")])
        assert t.take_item("wood").id == "wood"
        assert [i.id for i in t.inventory] == ["knife", "wood"]
        assert t.take_item("bow") is None

    def test_best_consumable_highest_amount(self):
        t = _make_tribute(inventory=[get_item("bandage"), get_item("medkit"), get_item("apple")])
        assert t.best_consumable(ConsumableEffect.HEALING).id == "medkit"
        assert t.best_consumable(ConsumableEffect.WATER) is None

    def test_has_gear(self):
        t = _make_tribute(inventory=[get_item("armor")])
        assert t.has_gear(GearTrait.ARMOR)
        assert not t.has_gear(GearTrait.WARMTH)


class TestSerialization:
    def test_roundtrip(self):
        t = _make_tribute(
            inventory=[get_item("medkit"), get_item("fire_kit")],
            status_effects=[StatusEffect.BLEEDING],
            location=(1, -1),
            last_location=(0, 0),
            kills=2,
            hype=10,
        )
        t.relationships["tribute-2"] = t.relationship_to("tribute-2")
        t.relationships["tribute-2"].trust = 65

        restored = Tribute.from_dict(t.to_dict())

        assert restored == t
        assert restored.location == (1, -1)
        assert restored.relationship_type_to("tribute-2") == t.relationship_type_to("tribute-2")

    def test_dict_is_plain(self):
        d = _make_tribute(status_effects=[StatusEffect.POISONED]).to_dict()
        assert d["district"] == "D1"
        assert d["status_effects"] == ["Poisoned"]
        assert d["last_location"] is None
