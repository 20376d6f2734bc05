"""Terrain height synthesis, tile generation and point queries."""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence, Tuple

import numpy as np

from starseed.core.hashing import hash_combine
from starseed.data.biomes import Biome
from starseed.engine.logger import ChannelLogger
from starseed.terrain import biomes as climate
from starseed.terrain.config import TerrainConfig
from starseed.terrain.lod import TileCoords, TileKey, tile_key, tile_size_for_lod
from starseed.terrain.noise import NoiseLayer, fbm

# World units represented by a normalised height of 1.0.
HEIGHT_SCALE = 400.0

HEIGHT_LAYERS: Tuple[NoiseLayer, ...] = (
    NoiseLayer("continental", frequency=1.0 / 1500.0, octaves=4, persistence=0.5, weight=0.6),
    NoiseLayer("mountain", frequency=1.0 / 400.0, octaves=5, persistence=0.5, weight=0.35),
    NoiseLayer("hills", frequency=1.0 / 150.0, octaves=4, persistence=0.5, weight=0.2, modulation="roughness"),
    NoiseLayer("detail", frequency=1.0 / 30.0, octaves=3, persistence=0.45, weight=0.06, modulation="roughness"),
    NoiseLayer("erosion", frequency=1.0 / 220.0, octaves=3, persistence=0.5, weight=-0.15, modulation="erosion"),
)


def layer_weight(layer: NoiseLayer, config: TerrainConfig) -> float:
    if layer.modulation == "roughness":
        return layer.weight * config.roughness
    if layer.modulation == "erosion":
        return layer.weight * config.erosion_strength
    return layer.weight


def layer_frequency(layer: NoiseLayer, config: TerrainConfig) -> float:
    if layer.name == "continental":
        return layer.frequency / config.continental_scale
    return layer.frequency


def _require_config(config: Optional[TerrainConfig]) -> TerrainConfig:
    if config is None:
        raise ValueError("a TerrainConfig is required")
    return config


def sample_heights(config: TerrainConfig, world_x: np.ndarray, world_y: np.ndarray) -> np.ndarray:
    """Normalised heights in [0, 1] for arrays of world coordinates."""

    config = _require_config(config)
    world_x = np.atleast_1d(np.asarray(world_x, dtype=np.float64))
    world_y = np.atleast_1d(np.asarray(world_y, dtype=np.float64))
    total = np.zeros(np.broadcast(world_x, world_y).shape, dtype=np.float64)
    for layer in HEIGHT_LAYERS:
        total += layer_weight(layer, config) * fbm(
            hash_combine(config.seed, (layer.name,)),
            world_x,
            world_y,
            frequency=layer_frequency(layer, config),
            octaves=layer.octaves,
            persistence=layer.persistence,
        )
    heights = np.clip((total + 1.0) * 0.5, 0.0, 1.0)
    if config.height_multiplier != 1.0:
        heights = np.power(heights, 1.0 / config.height_multiplier)
    return heights


def compute_normals(heights: np.ndarray, step: float) -> np.ndarray:
    """Unit surface normals (x, up, y) by central differences.

    Edge samples reuse their own height for the missing neighbour.
    """

    padded = np.pad(heights, 1, mode="edge")
    dx = (padded[1:-1, 2:] - padded[1:-1, :-2]) * HEIGHT_SCALE
    dy = (padded[2:, 1:-1] - padded[:-2, 1:-1]) * HEIGHT_SCALE
    normals = np.stack((-dx, np.full_like(dx, 2.0 * step), -dy), axis=-1)
    normals /= np.linalg.norm(normals, axis=-1, keepdims=True)
    return normals


class TileScratch:
    """Reusable per-worker sample grids keyed by resolution.

    Never share one scratch between threads; each worker owns its own.
    """

    def __init__(self) -> None:
        self._grids: Dict[int, Tuple[np.ndarray, np.ndarray]] = {}

    def grid(self, resolution: int) -> Tuple[np.ndarray, np.ndarray]:
        grid = self._grids.get(resolution)
        if grid is None:
            local = np.arange(resolution, dtype=np.float64)
            grid = np.meshgrid(local, local)
            self._grids[resolution] = grid
        return grid

    def __len__(self) -> int:
        return len(self._grids)


@dataclass(eq=False)
class TerrainTile:
    coords: TileCoords
    lod: int
    resolution: int
    tile_size: float
    step: float
    heights: np.ndarray
    biomes: np.ndarray
    normals: np.ndarray
    generation_time_ms: float = field(default=0.0, repr=False)

    @property
    def key(self) -> TileKey:
        return tile_key(self.coords, self.lod)

    @property
    def origin(self) -> Tuple[float, float]:
        return (self.coords[0] * self.tile_size, self.coords[1] * self.tile_size)

    def world_position(self, x: int, y: int) -> Tuple[float, float]:
        ox, oy = self.origin
        return (
            ox + (x * self.tile_size) / (self.resolution - 1),
            oy + (y * self.tile_size) / (self.resolution - 1),
        )

    def height_at(self, x: int, y: int) -> float:
        return float(self.heights[y, x])

    def biome_at(self, x: int, y: int) -> Biome:
        return Biome(int(self.biomes[y, x]))

    def biome_histogram(self) -> Dict[Biome, int]:
        values, counts = np.unique(self.biomes, return_counts=True)
        return {Biome(int(value)): int(count) for value, count in zip(values, counts)}

    def same_content(self, other: "TerrainTile") -> bool:
        return (
            self.coords == other.coords
            and self.lod == other.lod
            and self.resolution == other.resolution
            and np.array_equal(self.heights, other.heights)
            and np.array_equal(self.biomes, other.biomes)
            and np.array_equal(self.normals, other.normals)
        )


def generate_tile(
    config: TerrainConfig,
    tile_coords: TileCoords,
    lod: int = 0,
    resolution: int = 33,
    *,
    scratch: Optional[TileScratch] = None,
    logger: Optional[ChannelLogger] = None,
) -> TerrainTile:
    """Generate one square tile of ``resolution`` x ``resolution`` samples.

    Sample ``(x, y)`` sits at ``tile * tile_size + (x, y) * tile_size / (resolution - 1)``.
    Neighbouring tiles evaluate identical coordinates on their shared edge,
    which keeps seams exact.
    """

    config = _require_config(config)
    if resolution < 2:
        raise ValueError(f"resolution must be at least 2, got {resolution}")
    start = time.perf_counter()
    tile_size = tile_size_for_lod(lod)
    step = tile_size / (resolution - 1)
    tx, ty = int(tile_coords[0]), int(tile_coords[1])

    local_x, local_y = (scratch or TileScratch()).grid(resolution)
    world_x = tx * tile_size + (local_x * tile_size) / (resolution - 1)
    world_y = ty * tile_size + (local_y * tile_size) / (resolution - 1)

    heights = sample_heights(config, world_x, world_y)
    temps = climate.temperature(config, world_y, heights)
    wetness = climate.moisture(config, world_x, world_y)
    biomes = climate.classify_grid(config, heights, temps, wetness)
    normals = compute_normals(heights, step)

    elapsed_ms = (time.perf_counter() - start) * 1000.0
    if logger:
        logger.debug(
            "Tile (%d, %d) lod=%d res=%d generated in %.2fms",
            tx,
            ty,
            lod,
            resolution,
            elapsed_ms,
        )
    return TerrainTile(
        coords=(tx, ty),
        lod=lod,
        resolution=resolution,
        tile_size=tile_size,
        step=step,
        heights=heights,
        biomes=biomes,
        normals=normals,
        generation_time_ms=elapsed_ms,
    )


def get_height_at_world(config: TerrainConfig, world_xy: Sequence[float]) -> float:
    heights = sample_heights(config, np.array([world_xy[0]]), np.array([world_xy[1]]))
    return float(heights[0])


def sample_climate_at_world(config: TerrainConfig, world_xy: Sequence[float]) -> Tuple[float, float, float]:
    """(height, temperature, moisture) at a world point."""

    xs = np.array([world_xy[0]], dtype=np.float64)
    ys = np.array([world_xy[1]], dtype=np.float64)
    heights = sample_heights(config, xs, ys)
    temps = climate.temperature(config, ys, heights)
    wetness = climate.moisture(config, xs, ys)
    return float(heights[0]), float(temps[0]), float(wetness[0])


def get_biome_at_world(config: TerrainConfig, world_xy: Sequence[float]) -> Biome:
    height, temp, wetness = sample_climate_at_world(config, world_xy)
    return climate.classify_biome(height, temp, wetness, config)


def get_normal_at_world(config: TerrainConfig, world_xy: Sequence[float], step: float = 1.0) -> Tuple[float, float, float]:
    x, y = float(world_xy[0]), float(world_xy[1])
    xs = np.array([x - step, x + step, x, x])
    ys = np.array([y, y, y - step, y + step])
    heights = sample_heights(config, xs, ys)
    dx = (heights[1] - heights[0]) * HEIGHT_SCALE
    dy = (heights[3] - heights[2]) * HEIGHT_SCALE
    normal = np.array([-dx, 2.0 * step, -dy])
    normal /= np.linalg.norm(normal)
    return (float(normal[0]), float(normal[1]), float(normal[2]))


__all__ = [
    "HEIGHT_LAYERS",
    "HEIGHT_SCALE",
    "TerrainTile",
    "TileScratch",
    "compute_normals",
    "generate_tile",
    "get_biome_at_world",
    "get_height_at_world",
    "get_normal_at_world",
    "layer_frequency",
    "layer_weight",
    "sample_climate_at_world",
    "sample_heights",
]
