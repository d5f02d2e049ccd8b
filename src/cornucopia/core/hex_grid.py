"""
Hexagonal arena grid.

Implements a hexagon-shaped axial coordinate grid of biome tiles with
neighbour lookup, hex distance, ring queries and trap storage.

Coordinate system: axial (q, r). Cube coordinates derived as (q, -q-r, r).
A grid of radius R holds every tile with |q|, |r|, |q + r| <= R.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator


class Biome(str, Enum):
    """Biome classifications for arena tiles."""

    CORNUCOPIA = "Cornucopia"
    FOREST = "Forest"
    RIVER = "River"
    MOUNTAIN = "Mountain"
    MEADOW = "Meadow"
    DESERT = "Desert"
    SWAMP = "Swamp"
    RUINS = "Ruins"
    TUNDRA = "Tundra"
    VOLCANO = "Volcano"


# Biomes where a tribute can drink or cool off.
WATER_BIOMES: frozenset[Biome] = frozenset({Biome.RIVER, Biome.SWAMP})

# Biomes that shelter a tribute from the cold.
SHELTER_BIOMES: frozenset[Biome] = frozenset({Biome.FOREST, Biome.RUINS, Biome.CORNUCOPIA})

ORIGIN: tuple[int, int] = (0, 0)


@dataclass
class Trap:
    """A hidden trap planted on a tile. Consumed when triggered."""

    owner_id: str
    damage: int
    description: str
    is_hidden: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "owner_id": self.owner_id,
            "damage": self.damage,
            "description": self.description,
            "is_hidden": self.is_hidden,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Trap:
        return cls(
            owner_id=d["owner_id"],
            damage=d["damage"],
            description=d["description"],
            is_hidden=d.get("is_hidden", True),
        )


@dataclass
class HexTile:
    """A single hexagonal tile in the arena.

    Attributes:
        q: Column coordinate (axial).
        r: Row coordinate (axial).
        biome: The biome painted on this tile.
        trap: The trap planted here, if any. At most one per tile.
    """

    q: int
    r: int
    biome: Biome = Biome.MEADOW
    trap: Trap | None = None

    @property
    def coords(self) -> tuple[int, int]:
        """Axial coordinates as a tuple."""
        return (self.q, self.r)

    @property
    def cube_coords(self) -> tuple[int, int, int]:
        """Cube coordinates derived from axial. Satisfies x + y + z = 0."""
        return (self.q, -self.q - self.r, self.r)

    def to_dict(self) -> dict[str, Any]:
        """Serialize tile to dictionary."""
        return {
            "q": self.q,
            "r": self.r,
            "biome": self.biome.value,
            "trap": self.trap.to_dict() if self.trap is not None else None,
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> HexTile:
        """Deserialize tile from dictionary."""
        trap = d.get("trap")
        return cls(
            q=d["q"],
            r=d["r"],
            biome=Biome(d["biome"]),
            trap=Trap.from_dict(trap) if trap else None,
        )


class HexGrid:
    """A hexagon-shaped grid of HexTile instances in axial coordinates.

    The tile set is fixed at construction; only traps change afterwards.
    Tiles are stored in insertion order (q ascending, then r ascending),
    which every random selection over the grid relies on.

    Attributes:
        radius: Hex radius of the arena.
        tiles: Mapping from (q, r) coordinates to HexTile instances.
    """

    # Axial hex directions (6 neighbours).
    DIRECTIONS: list[tuple[int, int]] = [
        (1, 0),
        (1, -1),
        (0, -1),
        (-1, 0),
        (-1, 1),
        (0, 1),
    ]

    def __init__(self, radius: int) -> None:
        self.radius: int = radius
        self.tiles: dict[tuple[int, int], HexTile] = {}

    @classmethod
    def hexagon(cls, radius: int, biome: Biome = Biome.MEADOW) -> HexGrid:
        """Build a full hexagon of the given radius, every tile at ``biome``.

        Args:
            radius: Hex radius; must be >= 1.
            biome: Biome every tile starts with.

        Returns:
            A grid holding ``3R(R+1) + 1`` tiles.
        """
        if radius < 1:
            raise ValueError(f"radius must be >= 1, got {radius}")
        grid = cls(radius)
        for q in range(-radius, radius + 1):
            r1 = max(-radius, -q - radius)
            r2 = min(radius, -q + radius)
            for r in range(r1, r2 + 1):
                grid.add_tile(HexTile(q=q, r=r, biome=biome))
        return grid

    def add_tile(self, tile: HexTile) -> None:
        """Add a tile to the grid, keyed by its axial coordinates."""
        self.tiles[tile.coords] = tile

    def get_tile(self, q: int, r: int) -> HexTile | None:
        """Retrieve a tile by coordinates, or None if not present."""
        return self.tiles.get((q, r))

    def tile_at(self, coords: tuple[int, int]) -> HexTile | None:
        return self.tiles.get(coords)

    def has_tile(self, q: int, r: int) -> bool:
        """Check whether a tile exists at the given coordinates."""
        return (q, r) in self.tiles

    def __len__(self) -> int:
        return len(self.tiles)

    def __iter__(self) -> Iterator[HexTile]:
        return iter(self.tiles.values())

    # ---- Neighbour queries ----

    def neighbors(self, q: int, r: int) -> list[tuple[int, int]]:
        """Return coordinates of all neighbours that exist in the grid.

        Args:
            q: Column coordinate.
            r: Row coordinate.

        Returns:
            List of (q, r) tuples for existing neighbour tiles.
        """
        result: list[tuple[int, int]] = []
        for dq, dr in self.DIRECTIONS:
            nq, nr = q + dq, r + dr
            if (nq, nr) in self.tiles:
                result.append((nq, nr))
        return result

    def valid_neighbors(self, q: int, r: int) -> list[HexTile]:
        """Return neighbour tiles that exist in the grid."""
        return [self.tiles[coord] for coord in self.neighbors(q, r)]

    # ---- Distance ----

    @staticmethod
    def hex_distance(a: tuple[int, int], b: tuple[int, int]) -> int:
        """Calculate the hex distance between two axial coordinates.

        Converts to cube coordinates and takes the maximum absolute
        difference across the three axes.

        Args:
            a: First position as (q, r).
            b: Second position as (q, r).

        Returns:
            Integer distance in hex steps.
        """
        ax, az = a
        ay = -ax - az
        bx, bz = b
        by = -bx - bz
        return max(abs(ax - bx), abs(ay - by), abs(az - bz))

    # ---- Area queries ----

    def ring(self, distance: int, center: tuple[int, int] = ORIGIN) -> list[HexTile]:
        """Return tiles exactly ``distance`` steps from ``center``, in grid order."""
        return [
            tile for coord, tile in self.tiles.items()
            if self.hex_distance(center, coord) == distance
        ]

    def tiles_by_biome(self, biome: Biome) -> list[HexTile]:
        """Return all tiles painted with ``biome``, in grid order."""
        return [tile for tile in self.tiles.values() if tile.biome == biome]

    def trapped_tiles(self) -> list[HexTile]:
        return [tile for tile in self.tiles.values() if tile.trap is not None]

    # ---- Serialization ----

    def to_dict(self) -> dict[str, Any]:
        """Serialize the grid to a dictionary."""
        return {
            "radius": self.radius,
            "tiles": [tile.to_dict() for tile in self.tiles.values()],
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> HexGrid:
        """Deserialize a grid from a dictionary."""
        grid = cls(radius=d["radius"])
        for tile_data in d["tiles"]:
            grid.add_tile(HexTile.from_dict(tile_data))
        return grid
