"""
Tribute generation: districts, genders, ages and attribute rolls.
"""

from __future__ import annotations

import numpy as np

from cornucopia.core.tribute import (
    CAREER_DISTRICTS,
    DISTRICTS,
    District,
    Gender,
    Stats,
    Tribute,
)

DEFAULT_AGE = 16
MIN_AGE = 12
MAX_AGE = 18
YOUNG_AGE = 13   # at or below
OLD_AGE = 17     # at or above

RESOURCE_DISTRICTS: frozenset[District] = frozenset({District.D7, District.D11})
TECH_DISTRICTS: frozenset[District] = frozenset({District.D3, District.D5})
HARDY_DISTRICTS: frozenset[District] = frozenset({District.D9, District.D12})


def _roll(rng: np.random.Generator, low: int, high: int) -> int:
    """Uniform integer in [low, high]."""
    return int(rng.integers(low, high + 1))


def generate_stats(age: int, district: District, rng: np.random.Generator) -> Stats:
    """Roll base attributes and apply age-bracket and district adjustments."""
    is_young = age <= YOUNG_AGE
    is_old = age >= OLD_AGE

    stats = Stats(
        strength=_roll(rng, 3, 10) + (2 if is_old else 0) - (2 if is_young else 0),
        speed=_roll(rng, 3, 10) + (2 if is_young else 0),
        constitution=_roll(rng, 3, 10) + (1 if is_old else 0),
        intellect=_roll(rng, 2, 10),
        aggression=_roll(rng, 2, 10),
    )

    if district in CAREER_DISTRICTS:
        stats.strength += 2
        stats.aggression += 2
        stats.constitution += 1
    elif district in RESOURCE_DISTRICTS:
        stats.constitution += 2
        stats.strength += 1
    elif district in TECH_DISTRICTS:
        stats.intellect += 3
    elif district in HARDY_DISTRICTS:
        stats.constitution += 1

    return stats


def generate_tributes(
    count: int,
    use_ages: bool,
    rng: np.random.Generator,
) -> list[Tribute]:
    """Create ``count`` unplaced tributes.

    Tributes fill districts two at a time (one of each gender) in district
    order, wrapping after District 12. Vitals start full and inventories
    empty.
    """
    genders = list(Gender)
    tributes: list[Tribute] = []
    for i in range(count):
        district = DISTRICTS[(i // 2) % len(DISTRICTS)]
        gender = genders[i % 2]
        age = _roll(rng, MIN_AGE, MAX_AGE) if use_ages else DEFAULT_AGE
        tributes.append(Tribute(
            id=f"tribute-{i + 1}",
            name=f"{district.value}-{gender.value}",
            district=district,
            gender=gender,
            age=age,
            stats=generate_stats(age, district, rng),
        ))
    return tributes
