"""Hierarchical seed derivation.

Every piece of generated content is keyed by a seed derived from its parent
seed, a fixed per-layer salt and the local coordinates of the child::

    root -> galaxy -> sector -> system -> planet -> tile / poi -> npc / item / mission

All helpers take the parent seed explicitly. :class:`Universe` is a small
convenience holder for the one root seed an application works with.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Tuple, Union

from starseed.core.hashing import hash_combine, hash_string, to_signed

SectorCoords = Tuple[int, int, int]


class Layer(IntEnum):
    GALAXY = 0
    SECTOR = 1
    SYSTEM = 2
    PLANET = 3
    TILE = 4
    POI = 5
    NPC = 6
    ITEM = 7
    MISSION = 8


LAYER_SALTS = {
    Layer.GALAXY: 0x47414C4158590001,
    Layer.SECTOR: 0x534543544F520002,
    Layer.SYSTEM: 0x53595354454D0003,
    Layer.PLANET: 0x504C414E45540004,
    Layer.TILE: 0x54494C4500000005,
    Layer.POI: 0x504F490000000006,
    Layer.NPC: 0x4E50430000000007,
    Layer.ITEM: 0x4954454D00000008,
    Layer.MISSION: 0x4D495353494F0009,
}


def derive_seed(layer: Layer | int, parent_seed: int, *coords: int) -> int:
    try:
        layer = Layer(layer)
    except ValueError:
        raise ValueError(f"Unknown seed layer: {layer!r}") from None
    return hash_combine(parent_seed, (LAYER_SALTS[layer], *coords))


def galaxy_seed(root_seed: int, galaxy_id: int = 0) -> int:
    return derive_seed(Layer.GALAXY, root_seed, galaxy_id)


def sector_seed(galaxy: int, x: int, y: int, z: int) -> int:
    return derive_seed(Layer.SECTOR, galaxy, x, y, z)


def system_seed(sector: int, index: int) -> int:
    return derive_seed(Layer.SYSTEM, sector, index)


def planet_seed(system: int, index: int) -> int:
    return derive_seed(Layer.PLANET, system, index)


def tile_seed(planet: int, tile_x: int, tile_y: int, lod: int = 0) -> int:
    return derive_seed(Layer.TILE, planet, tile_x, tile_y, lod)


def poi_seed(planet: int, index: int) -> int:
    return derive_seed(Layer.POI, planet, index)


def npc_seed(parent: int, index: int) -> int:
    return derive_seed(Layer.NPC, parent, index)


def item_seed(parent: int, index: int) -> int:
    return derive_seed(Layer.ITEM, parent, index)


def mission_seed(parent: int, index: int) -> int:
    return derive_seed(Layer.MISSION, parent, index)


def seed_from_value(value: Union[int, str]) -> int:
    """Normalise a user supplied seed.

    Integers wrap into the signed 64-bit range, decimal strings are parsed and
    any other text is hashed over its UTF-8 bytes.
    """

    if isinstance(value, bool):
        raise TypeError("seed must be an int or str, not bool")
    if isinstance(value, int):
        return to_signed(value)
    if isinstance(value, str):
        text = value.strip()
        try:
            return to_signed(int(text, 10))
        except ValueError:
            return hash_string(text)
    raise TypeError(f"seed must be an int or str, not {type(value).__name__}")


@dataclass(frozen=True)
class Universe:
    """Root seed context threaded through the generators."""

    root_seed: int
    galaxy_id: int = 0

    @classmethod
    def from_value(cls, value: Union[int, str], galaxy_id: int = 0) -> "Universe":
        return cls(root_seed=seed_from_value(value), galaxy_id=galaxy_id)

    @property
    def galaxy_seed(self) -> int:
        return galaxy_seed(self.root_seed, self.galaxy_id)

    def sector_seed(self, coords: SectorCoords) -> int:
        return sector_seed(self.galaxy_seed, *coords)

    def system_seed(self, coords: SectorCoords, index: int) -> int:
        return system_seed(self.sector_seed(coords), index)

    def planet_seed(self, coords: SectorCoords, system_index: int, planet_index: int) -> int:
        return planet_seed(self.system_seed(coords, system_index), planet_index)

    def poi_seed(self, coords: SectorCoords, system_index: int, planet_index: int, poi_index: int) -> int:
        return poi_seed(self.planet_seed(coords, system_index, planet_index), poi_index)

    def mission_seed(self, index: int) -> int:
        return mission_seed(self.galaxy_seed, index)


_current: Optional[Universe] = None


def initialize_universe(value: Union[int, str], galaxy_id: int = 0) -> Universe:
    """Create the application-root universe and remember it."""

    global _current
    _current = Universe.from_value(value, galaxy_id)
    return _current


def current_universe() -> Universe:
    if _current is None:
        raise RuntimeError("initialize_universe() has not been called")
    return _current


__all__ = [
    "LAYER_SALTS",
    "Layer",
    "SectorCoords",
    "Universe",
    "current_universe",
    "derive_seed",
    "galaxy_seed",
    "initialize_universe",
    "item_seed",
    "mission_seed",
    "npc_seed",
    "planet_seed",
    "poi_seed",
    "sector_seed",
    "seed_from_value",
    "system_seed",
    "tile_seed",
]
