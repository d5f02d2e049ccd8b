"""
Game presets: pre-configured rule sets.

Each preset returns a GameConfig tuned for a different style of game,
from the standard Games to a free-for-all bloodbath.
"""

from __future__ import annotations

from typing import Callable

from cornucopia.core.config import GameConfig, Lethality, ResourceScarcity


def standard() -> GameConfig:
    """The default rules: 24 tributes, a medium arena, finale on day 7."""
    return GameConfig(
        lethality=Lethality.MEDIUM,
        resource_scarcity=ResourceScarcity.NORMAL,
        map_size=5,
        tribute_count=24,
        game_speed=1500,
        finale_day=7,
        bloodbath_deaths=5,
        use_career_alliance=True,
        use_ages=True,
        auto_continue_on_death=False,
    )


def battle_royale() -> GameConfig:
    """Small arena, high lethality and an early finale. No career pack."""
    return GameConfig(
        lethality=Lethality.HIGH,
        resource_scarcity=ResourceScarcity.NORMAL,
        map_size=4,
        tribute_count=24,
        game_speed=800,
        finale_day=4,
        bloodbath_deaths=8,
        use_career_alliance=False,
        use_ages=False,
        auto_continue_on_death=True,
    )


def long_survival() -> GameConfig:
    """Few tributes on a large arena; the elements do most of the killing."""
    return GameConfig(
        lethality=Lethality.LOW,
        resource_scarcity=ResourceScarcity.STARVATION,
        map_size=7,
        tribute_count=12,
        game_speed=2000,
        finale_day=14,
        bloodbath_deaths=0,
        use_career_alliance=True,
        use_ages=True,
        auto_continue_on_death=False,
    )


def chaos_mode() -> GameConfig:
    """36 tributes, high lethality, everyone for themselves."""
    return GameConfig(
        lethality=Lethality.HIGH,
        resource_scarcity=ResourceScarcity.ABUNDANT,
        map_size=6,
        tribute_count=36,
        game_speed=1000,
        finale_day=6,
        bloodbath_deaths=12,
        use_career_alliance=False,
        use_ages=True,
        auto_continue_on_death=True,
    )


# Registry of all presets
PRESETS: dict[str, Callable[[], GameConfig]] = {
    "standard": standard,
    "battle_royale": battle_royale,
    "long_survival": long_survival,
    "chaos_mode": chaos_mode,
}


def get_preset(name: str) -> GameConfig:
    """Get a preset config by name."""
    if name not in PRESETS:
        raise KeyError(f"Unknown preset: '{name}'. Available: {list(PRESETS.keys())}")
    return PRESETS[name]()


def list_presets() -> list[str]:
    """Return list of available preset names."""
    return list(PRESETS.keys())
