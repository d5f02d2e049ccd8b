"""Tests for combat resolution."""

import numpy as np
import pytest

from cornucopia.core.combat import combat_score, narrative_verb, resolve_combat
from cornucopia.core.config import GameConfig
from cornucopia.core.game_log import LogCategory
from cornucopia.core.hex_grid import HexGrid
from cornucopia.core.items import get_item
from cornucopia.core.relationships import modify_trust
from cornucopia.core.state import GamePhase, GameState
from cornucopia.core.tribute import District, Gender, Stats, Tribute


class _StubRng:
    """Deterministic generator: lowest integer, fixed float."""

    def __init__(self, value: float = 0.5) -> None:
        self.value = value

    def random(self):
        return self.value

    def integers(self, low, high=None):
        return 0 if high is None else low


def _make_tribute(tid, strength=5, speed=5, aggression=4, **kwargs) -> Tribute:
    t = Tribute(
        id=tid, name=tid.capitalize(), district=District.D3, gender=Gender.M, age=16,
        stats=Stats(strength, speed, 5, 5, aggression), **kwargs,
    )
    t.location = (0, 0)
    return t


def _make_state(*tributes) -> GameState:
    return GameState(
        day=2,
        phase=GamePhase.DAY,
        tributes=list(tributes),
        grid=HexGrid.hexagon(1),
        config=GameConfig(map_size=1, tribute_count=len(tributes)),
    )


def _strong_and_weak(**weak_kwargs):
    strong = _make_tribute("strong", strength=10, speed=5, aggression=4, inventory=[get_item("sword")])
    weak = _make_tribute("weak", strength=3, speed=3, aggression=2, **weak_kwargs)
    return strong, weak


class TestNarrativeVerb:
    @pytest.mark.parametrize("gap, verb", [
        (21, "dominated"),
        (20, "fought"),
        (10, "fought"),
        (9, "clashed evenly with"),
        (0, "clashed evenly with"),
        (-9, "clashed evenly with"),
        (-15, "fought"),
        (-21, "was crushed by"),
    ])
    def test_thresholds(self, gap, verb):
        assert narrative_verb(gap) == verb


class TestCombatScore:
    def test_formula(self):
        strong, weak = _strong_and_weak()
        assert combat_score(strong, _StubRng()) == 10 * 2 + 5 + 25 + 2
        assert combat_score(weak, _StubRng()) == 3 * 2 + 3 + 0 + 1

    def test_roll_range(self):
        t = _make_tribute("a")
        rng = np.random.default_rng(42)
        base = 5 * 2 + 5 + 4 / 2
        for _ in range(100):
            assert base <= combat_score(t, rng) <= base + 20


class TestResolveCombat:
    def test_dominant_fight(self):
        strong, weak = _strong_and_weak()
        state = _make_state(strong, weak)

        result = resolve_combat(strong, weak, state, _StubRng(), 1.0)

        assert result.verb == "dominated"
        assert strong.health == 95
        assert weak.health == 79
        assert state.logs[-1].message == "Strong dominated Weak using Short Sword."
        assert state.logs[-1].category == LogCategory.COMBAT

    def test_trust_collapses(self):
        strong, weak = _strong_and_weak()
        resolve_combat(strong, weak, _make_state(strong, weak), _StubRng(), 1.0)
        assert strong.relationships["weak"].trust == -50
        assert weak.relationships["strong"].trust == -50
        assert strong.last_attacker_id == "weak"
        assert weak.last_attacker_id == "strong"

    def test_unarmed_uses_fists(self):
        a, b = _make_tribute("a"), _make_tribute("b")
        state = _make_state(a, b)
        resolve_combat(a, b, state, _StubRng(), 1.0)
        assert state.logs[-1].message == "A clashed evenly with B using fists."
        assert a.health == 95
        assert b.health == 95

    def test_armor_reduces_damage(self):
        strong, weak = _strong_and_weak()
        strong.inventory.append(get_item("armor"))
        resolve_combat(strong, weak, _make_state(strong, weak), _StubRng(), 1.0)
        assert strong.health == pytest.approx(96.5)

    def test_lethality_scales_damage(self):
        strong, weak = _strong_and_weak()
        resolve_combat(strong, weak, _make_state(strong, weak), _StubRng(), 1.5)
        assert weak.health == pytest.approx(100 - 21 * 1.5)
        assert strong.health == pytest.approx(100 - 5 * 1.5)

    def test_wounded_faster_tribute_flees(self):
        runner = _make_tribute("runner", speed=8, health=20)
        brute = _make_tribute("brute", speed=5)
        state = _make_state(runner, brute)

        result = resolve_combat(runner, brute, state, _StubRng(0.1), 1.0)

        assert result.fled
        assert runner.health == 20
        assert brute.health == 100
        assert state.logs[-1].message == "Runner fled from Brute!"
        assert state.logs[-1].category == LogCategory.FLEE
        assert "brute" not in runner.relationships

    def test_flee_can_fail(self):
        runner = _make_tribute("runner", speed=8, health=20)
        brute = _make_tribute("brute", speed=5)
        result = resolve_combat(runner, brute, _make_state(runner, brute), _StubRng(0.9), 1.0)
        assert not result.fled
        assert runner.health < 20

    def test_kill(self):
        strong, weak = _strong_and_weak(health=10)
        state = _make_state(strong, weak)

        result = resolve_combat(strong, weak, state, _StubRng(), 1.0)

        assert result.deaths == ["weak"]
        assert not weak.is_alive
        assert weak.health == 0
        assert weak.cause_of_death == "Slain by Strong"
        assert strong.kills == 1
        assert strong.hype == 5
        assert state.deceased_queue == ["weak"]
        messages = [entry.message for entry in state.logs]
        assert "Weak was killed by Strong." in messages
        assert state.logs[-1].category == LogCategory.DEATH_SUMMARY

    def test_kill_turns_victims_friends(self):
        strong, weak = _strong_and_weak(health=10)
        friend = _make_tribute("friend")
        modify_trust(weak, "friend", 30)
        resolve_combat(strong, weak, _make_state(strong, weak, friend), _StubRng(), 1.0)
        assert friend.relationships["strong"].trust == -30

    def test_double_death(self):
        a = _make_tribute("a", health=1)
        b = _make_tribute("b", health=1)
        state = _make_state(a, b)

        result = resolve_combat(a, b, state, _StubRng(), 1.0)

        assert sorted(result.deaths) == ["a", "b"]
        assert a.cause_of_death == "Died fighting B"
        assert b.cause_of_death == "Died fighting A"
        assert a.kills == 0 and b.kills == 0
        assert state.deceased_queue == ["a", "b"]
        assert any("killed each other" in e.message for e in state.logs)

    def test_faster_tribute_survives_mutual_kill(self):
        quick = _make_tribute("quick", speed=8, health=1)
        slow = _make_tribute("slow", speed=5, health=1)
        state = _make_state(quick, slow)

        result = resolve_combat(quick, slow, state, _StubRng(0.9), 1.0)

        assert result.deaths == ["slow"]
        assert quick.is_alive
        assert quick.health == 1
        assert quick.kills == 1

    def test_dead_participant_no_op(self):
        a, b = _make_tribute("a"), _make_tribute("b", is_alive=False)
        state = _make_state(a, b)
        result = resolve_combat(a, b, state, _StubRng(), 1.0)
        assert result.deaths == []
        assert state.logs == []
        assert a.health == 100
