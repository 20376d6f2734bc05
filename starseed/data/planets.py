"""Planet archetypes and their per-type statistics."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple

Range = Tuple[float, float]


class PlanetType(Enum):
    VOLCANIC = "volcanic"
    DESERT = "desert"
    BARREN = "barren"
    TEMPERATE = "temperate"
    OCEAN = "ocean"
    JUNGLE = "jungle"
    ICE = "ice"
    TOXIC = "toxic"
    GAS_GIANT = "gas_giant"


@dataclass(frozen=True)
class TerrainRanges:
    """Rolled once per planet to build its terrain config."""

    sea_level: Range
    mountain_threshold: Range
    temperature: Range
    water_coverage: Range
    roughness: Range
    continental_scale: Range
    height_multiplier: Range
    erosion_strength: Range


@dataclass(frozen=True)
class PlanetTypeInfo:
    name: str
    color: Tuple[int, int, int]
    radius: Range
    density: Range
    moons: Tuple[int, int]
    habitability: float
    poi_count: Tuple[int, int]
    terrain: TerrainRanges


PLANET_TYPES: Dict[PlanetType, PlanetTypeInfo] = {
    PlanetType.VOLCANIC: PlanetTypeInfo(
        name="Volcanic",
        color=(214, 84, 40),
        radius=(0.4, 1.3),
        density=(1.0, 1.4),
        moons=(0, 2),
        habitability=0.05,
        poi_count=(3, 5),
        terrain=TerrainRanges(
            sea_level=(0.18, 0.28),
            mountain_threshold=(0.62, 0.72),
            temperature=(45.0, 90.0),
            water_coverage=(0.0, 0.1),
            roughness=(1.1, 1.5),
            continental_scale=(0.8, 1.2),
            height_multiplier=(1.1, 1.4),
            erosion_strength=(0.2, 0.5),
        ),
    ),
    PlanetType.DESERT: PlanetTypeInfo(
        name="Desert",
        color=(222, 184, 110),
        radius=(0.5, 1.4),
        density=(0.8, 1.1),
        moons=(0, 2),
        habitability=0.35,
        poi_count=(4, 7),
        terrain=TerrainRanges(
            sea_level=(0.12, 0.22),
            mountain_threshold=(0.66, 0.76),
            temperature=(28.0, 48.0),
            water_coverage=(0.0, 0.15),
            roughness=(0.7, 1.0),
            continental_scale=(0.9, 1.4),
            height_multiplier=(0.9, 1.1),
            erosion_strength=(0.8, 1.3),
        ),
    ),
    PlanetType.BARREN: PlanetTypeInfo(
        name="Barren",
        color=(150, 146, 140),
        radius=(0.2, 0.9),
        density=(0.9, 1.2),
        moons=(0, 1),
        habitability=0.0,
        poi_count=(2, 4),
        terrain=TerrainRanges(
            sea_level=(0.05, 0.12),
            mountain_threshold=(0.64, 0.74),
            temperature=(-60.0, 10.0),
            water_coverage=(0.0, 0.05),
            roughness=(0.9, 1.3),
            continental_scale=(0.7, 1.1),
            height_multiplier=(1.0, 1.2),
            erosion_strength=(0.0, 0.3),
        ),
    ),
    PlanetType.TEMPERATE: PlanetTypeInfo(
        name="Temperate",
        color=(88, 170, 96),
        radius=(0.8, 1.5),
        density=(0.9, 1.1),
        moons=(0, 3),
        habitability=1.0,
        poi_count=(5, 8),
        terrain=TerrainRanges(
            sea_level=(0.36, 0.44),
            mountain_threshold=(0.68, 0.76),
            temperature=(12.0, 24.0),
            water_coverage=(0.4, 0.65),
            roughness=(0.8, 1.2),
            continental_scale=(0.9, 1.3),
            height_multiplier=(1.0, 1.25),
            erosion_strength=(0.6, 1.0),
        ),
    ),
    PlanetType.OCEAN: PlanetTypeInfo(
        name="Ocean",
        color=(52, 110, 210),
        radius=(0.9, 1.8),
        density=(0.8, 1.0),
        moons=(0, 3),
        habitability=0.7,
        poi_count=(2, 4),
        terrain=TerrainRanges(
            sea_level=(0.52, 0.6),
            mountain_threshold=(0.78, 0.84),
            temperature=(8.0, 26.0),
            water_coverage=(0.8, 0.95),
            roughness=(0.6, 0.9),
            continental_scale=(1.2, 1.6),
            height_multiplier=(1.0, 1.1),
            erosion_strength=(0.9, 1.2),
        ),
    ),
    PlanetType.JUNGLE: PlanetTypeInfo(
        name="Jungle",
        color=(40, 130, 60),
        radius=(0.8, 1.4),
        density=(0.9, 1.1),
        moons=(0, 3),
        habitability=0.85,
        poi_count=(5, 8),
        terrain=TerrainRanges(
            sea_level=(0.32, 0.4),
            mountain_threshold=(0.7, 0.78),
            temperature=(26.0, 36.0),
            water_coverage=(0.55, 0.8),
            roughness=(0.9, 1.2),
            continental_scale=(0.9, 1.2),
            height_multiplier=(1.0, 1.2),
            erosion_strength=(0.7, 1.1),
        ),
    ),
    PlanetType.ICE: PlanetTypeInfo(
        name="Ice",
        color=(200, 230, 250),
        radius=(0.4, 1.3),
        density=(0.6, 0.9),
        moons=(0, 4),
        habitability=0.15,
        poi_count=(3, 5),
        terrain=TerrainRanges(
            sea_level=(0.3, 0.4),
            mountain_threshold=(0.68, 0.78),
            temperature=(-55.0, -15.0),
            water_coverage=(0.3, 0.6),
            roughness=(0.6, 1.0),
            continental_scale=(0.9, 1.3),
            height_multiplier=(0.9, 1.1),
            erosion_strength=(0.3, 0.7),
        ),
    ),
    PlanetType.TOXIC: PlanetTypeInfo(
        name="Toxic",
        color=(150, 190, 60),
        radius=(0.6, 1.4),
        density=(0.9, 1.2),
        moons=(0, 2),
        habitability=0.1,
        poi_count=(3, 5),
        terrain=TerrainRanges(
            sea_level=(0.3, 0.4),
            mountain_threshold=(0.7, 0.78),
            temperature=(30.0, 70.0),
            water_coverage=(0.2, 0.5),
            roughness=(0.8, 1.1),
            continental_scale=(0.9, 1.2),
            height_multiplier=(1.0, 1.2),
            erosion_strength=(0.5, 0.9),
        ),
    ),
    PlanetType.GAS_GIANT: PlanetTypeInfo(
        name="Gas Giant",
        color=(210, 170, 120),
        radius=(3.5, 12.0),
        density=(0.15, 0.35),
        moons=(2, 8),
        habitability=0.0,
        poi_count=(1, 2),
        terrain=TerrainRanges(
            sea_level=(0.0, 0.05),
            mountain_threshold=(0.9, 0.95),
            temperature=(-160.0, -80.0),
            water_coverage=(0.0, 0.0),
            roughness=(0.3, 0.5),
            continental_scale=(1.5, 2.0),
            height_multiplier=(0.8, 1.0),
            erosion_strength=(0.0, 0.1),
        ),
    ),
}

HABITABLE_TYPES = frozenset(
    planet_type for planet_type, info in PLANET_TYPES.items() if info.habitability >= 0.3
)


__all__ = [
    "HABITABLE_TYPES",
    "PLANET_TYPES",
    "PlanetType",
    "PlanetTypeInfo",
    "TerrainRanges",
]
