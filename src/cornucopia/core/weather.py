"""
Weather system: a Markov chain over six weather states.

Each state carries static modifiers read by movement and the tick
processor, and a transition row used to roll the next state at every
day/night boundary.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np


class WeatherType(str, Enum):
    CLEAR = "Clear"
    RAIN = "Rain"
    STORM = "Thunderstorm"
    SNOW = "Snowstorm"
    FOG = "Dense Fog"
    HEATWAVE = "Heatwave"


STARTING_WEATHER = WeatherType.CLEAR


@dataclass(frozen=True)
class WeatherProfile:
    """Static modifiers for one weather state.

    Attributes:
        description: Flavour text.
        stamina_cost: Multiplier on movement stamina cost.
        thirst_mod: Multiplier on per-tick thirst decay.
        hunger_mod: Multiplier on per-tick hunger decay.
        visibility: 0-1 sight factor. Exposed only; no decision reads it.
    """

    description: str
    stamina_cost: float
    thirst_mod: float
    hunger_mod: float
    visibility: float


WEATHER_PROFILES: dict[WeatherType, WeatherProfile] = {
    WeatherType.CLEAR: WeatherProfile(
        "Skies are clear. Visibility is perfect.", 1.0, 1.0, 1.0, 1.0,
    ),
    WeatherType.RAIN: WeatherProfile(
        "Rain makes the ground slick and cold.", 1.8, 0.8, 1.2, 0.7,
    ),
    WeatherType.STORM: WeatherProfile(
        "Heavy thunder and chaos. High stamina drain.", 3.0, 0.6, 1.3, 0.4,
    ),
    WeatherType.SNOW: WeatherProfile(
        "Freezing temperatures. Extreme cold risk.", 2.5, 0.9, 2.0, 0.5,
    ),
    WeatherType.FOG: WeatherProfile(
        "Dense fog obscures all movement.", 1.2, 1.0, 1.0, 0.1,
    ),
    WeatherType.HEATWAVE: WeatherProfile(
        "Blistering heat. Water is crucial.", 2.2, 3.0, 0.7, 0.9,
    ),
}

# Transition rows: (next state, weight out of 100), walked in order
# against a 1-100 roll. Each row sums to 100.
WEATHER_TRANSITIONS: dict[WeatherType, list[tuple[WeatherType, int]]] = {
    WeatherType.CLEAR: [
        (WeatherType.CLEAR, 49),
        (WeatherType.RAIN, 25),
        (WeatherType.HEATWAVE, 10),
        (WeatherType.FOG, 10),
        (WeatherType.SNOW, 6),
    ],
    WeatherType.RAIN: [
        (WeatherType.RAIN, 39),
        (WeatherType.STORM, 20),
        (WeatherType.CLEAR, 25),
        (WeatherType.FOG, 16),
    ],
    WeatherType.STORM: [
        (WeatherType.STORM, 29),
        (WeatherType.RAIN, 40),
        (WeatherType.CLEAR, 31),
    ],
    WeatherType.FOG: [
        (WeatherType.FOG, 29),
        (WeatherType.RAIN, 30),
        (WeatherType.CLEAR, 41),
    ],
    WeatherType.HEATWAVE: [
        (WeatherType.HEATWAVE, 39),
        (WeatherType.CLEAR, 30),
        (WeatherType.STORM, 31),  # heat storm
    ],
    WeatherType.SNOW: [
        (WeatherType.SNOW, 39),
        (WeatherType.FOG, 20),
        (WeatherType.RAIN, 41),
    ],
}

WEATHER_IDLE_EVENTS: dict[WeatherType, list[str]] = {
    WeatherType.CLEAR: [
        "basks in the sunlight.",
        "watches a cloud shaped like a mutt.",
        "enjoys the gentle breeze.",
    ],
    WeatherType.RAIN: [
        "catches raindrops in their mouth.",
        "shivers uncontrollably.",
        "struggles to find dry wood.",
        "slips in the mud.",
    ],
    WeatherType.STORM: [
        "winces at a thunderclap.",
        "seeks shelter from the lightning.",
        "is soaked to the bone.",
    ],
    WeatherType.SNOW: [
        "tries to warm their freezing hands.",
        "watches their breath mist in the air.",
        "shakes snow off their gear.",
    ],
    WeatherType.FOG: [
        "can barely see their own hands.",
        "hears strange noises in the mist.",
        "feels like they are being watched.",
    ],
    WeatherType.HEATWAVE: [
        "sweats profusely.",
        "hallucinates an oasis.",
        "feels faint from the heat.",
    ],
}


def weather_profile(weather: WeatherType) -> WeatherProfile:
    return WEATHER_PROFILES[weather]


def next_weather(current: WeatherType, rng: np.random.Generator) -> WeatherType:
    """Roll the weather that follows ``current``.

    Draws a uniform integer in [1, 100] and walks the current state's
    transition row until the cumulative weight reaches the roll.
    """
    roll = int(rng.integers(1, 101))
    cumulative = 0
    row = WEATHER_TRANSITIONS[current]
    for state, weight in row:
        cumulative += weight
        if roll <= cumulative:
            return state
    return row[-1][0]
