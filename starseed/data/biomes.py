"""Surface biome catalogue."""
from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Tuple


class Biome(IntEnum):
    DEEP_OCEAN = 0
    SHALLOW_OCEAN = 1
    FROZEN_OCEAN = 2
    BEACH = 3
    DESERT = 4
    GRASSLAND = 5
    FOREST = 6
    JUNGLE = 7
    SWAMP = 8
    TUNDRA = 9
    SNOW = 10
    MOUNTAIN = 11
    VOLCANIC = 12
    BARREN = 13


@dataclass(frozen=True)
class BiomeInfo:
    name: str
    color: Tuple[int, int, int]
    walkable: bool
    is_water: bool = False


BIOMES: Dict[Biome, BiomeInfo] = {
    Biome.DEEP_OCEAN: BiomeInfo("Deep Ocean", (18, 48, 120), walkable=False, is_water=True),
    Biome.SHALLOW_OCEAN: BiomeInfo("Shallow Ocean", (40, 96, 180), walkable=False, is_water=True),
    Biome.FROZEN_OCEAN: BiomeInfo("Frozen Ocean", (170, 205, 230), walkable=True, is_water=True),
    Biome.BEACH: BiomeInfo("Beach", (220, 206, 150), walkable=True),
    Biome.DESERT: BiomeInfo("Desert", (226, 190, 120), walkable=True),
    Biome.GRASSLAND: BiomeInfo("Grassland", (120, 180, 80), walkable=True),
    Biome.FOREST: BiomeInfo("Forest", (48, 120, 56), walkable=True),
    Biome.JUNGLE: BiomeInfo("Jungle", (30, 100, 40), walkable=True),
    Biome.SWAMP: BiomeInfo("Swamp", (70, 90, 60), walkable=True),
    Biome.TUNDRA: BiomeInfo("Tundra", (150, 160, 140), walkable=True),
    Biome.SNOW: BiomeInfo("Snow", (240, 245, 250), walkable=True),
    Biome.MOUNTAIN: BiomeInfo("Mountain", (120, 110, 100), walkable=True),
    Biome.VOLCANIC: BiomeInfo("Volcanic", (90, 40, 30), walkable=True),
    Biome.BARREN: BiomeInfo("Barren", (140, 130, 120), walkable=True),
}

__all__ = ["BIOMES", "Biome", "BiomeInfo"]
