"""
Arena generator for the Cornucopia hex grid.

Builds a hexagonal arena, fixes the Cornucopia at the origin, then paints
biomes by seeded region growth: for each biome specification in order,
pick random Meadow tiles as seeds and grow an irregular region from each
by a randomized breadth-first flood fill. Later specifications can only
claim tiles still at Meadow, so regions never overwrite each other.

All randomness goes through the supplied numpy Generator.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Callable

import numpy as np

from cornucopia.core.hex_grid import ORIGIN, Biome, HexGrid

# Biome left on tiles no region claimed.
FILLER_BIOME = Biome.MEADOW

# Region size cap is drawn per seed from [MIN_REGION_SIZE, MAX_REGION_SIZE].
MIN_REGION_SIZE = 3
MAX_REGION_SIZE = 8


@dataclass(frozen=True)
class BiomeSeedSpec:
    """How many regions of a biome to grow and how eagerly they spread."""

    biome: Biome
    count: Callable[[int], int]
    spread: float


# Order matters: earlier biomes get first pick of the open Meadow.
BIOME_SEED_SPECS: list[BiomeSeedSpec] = [
    BiomeSeedSpec(Biome.FOREST, lambda r: max(1, int(r * 1.2)), 0.8),
    BiomeSeedSpec(Biome.MOUNTAIN, lambda r: max(1, int(r * 0.8)), 0.7),
    BiomeSeedSpec(Biome.RIVER, lambda r: max(1, int(r * 0.6)), 0.9),
    BiomeSeedSpec(Biome.SWAMP, lambda r: max(1, int(r * 0.5)), 0.7),
    BiomeSeedSpec(Biome.DESERT, lambda r: max(1, int(r * 0.5)), 0.7),
    BiomeSeedSpec(Biome.RUINS, lambda r: max(1, int(r * 0.4)), 0.6),
    BiomeSeedSpec(Biome.TUNDRA, lambda r: max(1, int(r * 0.4)), 0.6),
    BiomeSeedSpec(Biome.VOLCANO, lambda r: 1, 0.5),
]


def generate_arena(radius: int, rng: np.random.Generator | None = None) -> HexGrid:
    """Generate a biome-painted hexagonal arena.

    Args:
        radius: Hex radius of the arena (>= 1).
        rng: Random generator; a fresh unseeded one is used if omitted.

    Returns:
        A fully populated HexGrid with the Cornucopia at the origin.
    """
    rng = rng if rng is not None else np.random.default_rng()
    grid = HexGrid.hexagon(radius, biome=FILLER_BIOME)

    center = grid.tile_at(ORIGIN)
    if center is not None:
        center.biome = Biome.CORNUCOPIA

    for spec in BIOME_SEED_SPECS:
        for _ in range(spec.count(radius)):
            if not _grow_region(grid, spec, rng):
                break

    return grid


def _grow_region(grid: HexGrid, spec: BiomeSeedSpec, rng: np.random.Generator) -> bool:
    """Seed one region of ``spec.biome`` and flood-fill it outwards.

    Args:
        grid: The arena being painted (mutated in place).
        spec: Biome, spread probability and seed count.
        rng: Random generator.

    Returns:
        False if no Meadow tile was left to seed, True otherwise.
    """
    candidates = grid.tiles_by_biome(FILLER_BIOME)
    if not candidates:
        return False

    seed_tile = candidates[int(rng.integers(len(candidates)))]
    seed_tile.biome = spec.biome

    max_size = int(rng.integers(MIN_REGION_SIZE, MAX_REGION_SIZE + 1))
    frontier = deque([seed_tile])
    size = 0

    while frontier and size < max_size:
        current = frontier.popleft()
        for neighbor in grid.valid_neighbors(current.q, current.r):
            if neighbor.biome != FILLER_BIOME:
                continue
            if rng.random() < spec.spread:
                neighbor.biome = spec.biome
                frontier.append(neighbor)
                size += 1

    return True
