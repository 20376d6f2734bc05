"""Climate fields and the biome decision procedure.

Latitude comes straight from world Y: the planet surface is treated as a
flat strip whose length along Y equals the circumference, folded into
[-90, 90]. This is a deliberate flat-world approximation of a sphere.
"""
from __future__ import annotations

import numpy as np

from starseed.core.hashing import hash_combine
from starseed.data.biomes import Biome
from starseed.terrain.config import TerrainConfig
from starseed.terrain.noise import fbm

LATITUDE_COOLING = 45.0
ALTITUDE_COOLING = 55.0
MOISTURE_FREQUENCY = 1.0 / 700.0

DEEP_OCEAN_OFFSET = 0.08
BEACH_OFFSET = 0.025
SNOWCAP_OFFSET = 0.12
FROZEN_WATER_TEMP = -10.0
SNOW_TEMP = -10.0
MOUNTAIN_SNOW_TEMP = -5.0
TUNDRA_TEMP = 2.0
JUNGLE_TEMP = 22.0
HUMID_JUNGLE_TEMP = 26.0
VOLCANIC_MOISTURE = 0.55


def latitude(config: TerrainConfig, world_y: np.ndarray) -> np.ndarray:
    lat = (np.asarray(world_y, dtype=np.float64) / config.circumference) * 360.0
    lat = np.mod(lat + 180.0, 360.0) - 180.0
    lat = np.where(lat > 90.0, 180.0 - lat, lat)
    return np.where(lat < -90.0, -180.0 - lat, lat)


def temperature(config: TerrainConfig, world_y: np.ndarray, heights: np.ndarray) -> np.ndarray:
    lat = latitude(config, world_y)
    altitude = np.maximum(0.0, np.asarray(heights, dtype=np.float64) - config.sea_level)
    return config.base_temperature - np.abs(lat) / 90.0 * LATITUDE_COOLING - altitude * ALTITUDE_COOLING


def moisture(config: TerrainConfig, world_x: np.ndarray, world_y: np.ndarray) -> np.ndarray:
    noise = fbm(
        hash_combine(config.seed, ("moisture",)),
        world_x,
        world_y,
        frequency=MOISTURE_FREQUENCY,
        octaves=3,
        persistence=0.5,
    )
    wetness = (noise + 1.0) * 0.5 * (0.4 + config.water_coverage)
    return np.clip(wetness, 0.0, 1.0)


def classify_biome(height: float, temp: float, wetness: float, config: TerrainConfig) -> Biome:
    sea = config.sea_level
    if height < sea:
        if temp < FROZEN_WATER_TEMP:
            return Biome.FROZEN_OCEAN
        if height < sea - DEEP_OCEAN_OFFSET:
            return Biome.DEEP_OCEAN
        return Biome.SHALLOW_OCEAN
    if height < sea + BEACH_OFFSET:
        if temp < SNOW_TEMP:
            return Biome.SNOW
        return Biome.BEACH
    if height >= config.mountain_threshold:
        if height >= config.mountain_threshold + SNOWCAP_OFFSET or temp < MOUNTAIN_SNOW_TEMP:
            return Biome.SNOW
        return Biome.MOUNTAIN
    if config.volcanic:
        return Biome.VOLCANIC if wetness < VOLCANIC_MOISTURE else Biome.BARREN
    if config.barren:
        return Biome.BARREN
    if temp < SNOW_TEMP:
        return Biome.SNOW
    if temp < TUNDRA_TEMP:
        return Biome.TUNDRA
    if wetness < 0.2:
        return Biome.DESERT
    if wetness < 0.42:
        return Biome.GRASSLAND
    if wetness < 0.65:
        return Biome.FOREST
    if wetness < 0.82:
        return Biome.JUNGLE if temp >= JUNGLE_TEMP else Biome.FOREST
    return Biome.JUNGLE if temp >= HUMID_JUNGLE_TEMP else Biome.SWAMP


def classify_grid(
    config: TerrainConfig,
    heights: np.ndarray,
    temps: np.ndarray,
    wetness: np.ndarray,
) -> np.ndarray:
    biomes = np.empty(heights.shape, dtype=np.uint8)
    for index in np.ndindex(heights.shape):
        biomes[index] = classify_biome(
            float(heights[index]),
            float(temps[index]),
            float(wetness[index]),
            config,
        )
    return biomes


__all__ = ["classify_biome", "classify_grid", "latitude", "moisture", "temperature"]
