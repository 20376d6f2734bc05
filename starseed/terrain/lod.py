"""Discrete level-of-detail tiers for terrain tiles."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Tuple

TileCoords = Tuple[int, int]
TileKey = Tuple[int, int, int]

BASE_TILE_SIZE = 64.0


@dataclass(frozen=True)
class LodLevel:
    lod: int
    resolution: int
    max_distance: float


# Distances are Chebyshev distances in LOD 0 tiles.
LOD_LEVELS: Tuple[LodLevel, ...] = (
    LodLevel(lod=0, resolution=33, max_distance=1.0),
    LodLevel(lod=1, resolution=17, max_distance=3.0),
    LodLevel(lod=2, resolution=9, max_distance=6.0),
    LodLevel(lod=3, resolution=5, max_distance=math.inf),
)


def lod_level(lod: int) -> LodLevel:
    for level in LOD_LEVELS:
        if level.lod == lod:
            return level
    raise ValueError(f"Unknown LOD {lod}")


def resolution_for_lod(lod: int) -> int:
    return lod_level(lod).resolution


def tile_size_for_lod(lod: int) -> float:
    if lod < 0:
        raise ValueError(f"LOD must be non-negative, got {lod}")
    return BASE_TILE_SIZE * (2 ** lod)


def tile_distance(a: TileCoords, b: TileCoords) -> int:
    return max(abs(a[0] - b[0]), abs(a[1] - b[1]))


def select_lod(tile: TileCoords, reference: TileCoords) -> LodLevel:
    distance = tile_distance(tile, reference)
    for level in LOD_LEVELS:
        if distance <= level.max_distance:
            return level
    return LOD_LEVELS[-1]


def tile_for_world(world_x: float, world_y: float, lod: int = 0) -> TileCoords:
    size = tile_size_for_lod(lod)
    return (math.floor(world_x / size), math.floor(world_y / size))


def tiles_in_radius(center: TileCoords, radius: int) -> List[TileCoords]:
    """Tile coordinates around ``center``, nearest first, ties by (y, x)."""

    tiles = [
        (center[0] + dx, center[1] + dy)
        for dy in range(-radius, radius + 1)
        for dx in range(-radius, radius + 1)
    ]
    tiles.sort(key=lambda tile: (tile_distance(tile, center), tile[1], tile[0]))
    return tiles


def tile_key(coords: TileCoords, lod: int) -> TileKey:
    return (int(coords[0]), int(coords[1]), int(lod))


def cell_span(coords: TileCoords, lod: int) -> Tuple[int, int, int, int]:
    """Inclusive LOD 0 cell range ``(x0, y0, x1, y1)`` covered by a tile."""

    width = 1 << lod
    x0, y0 = int(coords[0]) << lod, int(coords[1]) << lod
    return (x0, y0, x0 + width - 1, y0 + width - 1)


def distance_to_tile(cell: TileCoords, coords: TileCoords, lod: int) -> int:
    x0, y0, x1, y1 = cell_span(coords, lod)
    nearest = (min(max(cell[0], x0), x1), min(max(cell[1], y0), y1))
    return tile_distance(cell, nearest)


def plan_tiles(center: TileCoords, radius: int) -> List[Tuple[TileCoords, LodLevel]]:
    """Tiles covering the square of LOD 0 cells within ``radius`` of ``center``.

    Coarse tiles are split into quadrants until every tile is no coarser
    than ``select_lod`` asks for at its cell nearest the centre, so the
    result partitions the area with no gaps or overlaps. Coarse tiles may
    reach past the square's edge. Ordered nearest first, then by LOD, y, x.
    """

    if radius < 0:
        raise ValueError(f"radius must be non-negative, got {radius}")
    cx, cy = int(center[0]), int(center[1])
    lo_x, hi_x = cx - radius, cx + radius
    lo_y, hi_y = cy - radius, cy + radius
    top = LOD_LEVELS[-1].lod
    stack = [
        (x, y, top)
        for y in range(lo_y >> top, (hi_y >> top) + 1)
        for x in range(lo_x >> top, (hi_x >> top) + 1)
    ]
    planned: List[Tuple[TileCoords, LodLevel]] = []
    while stack:
        x, y, lod = stack.pop()
        x0, y0, x1, y1 = cell_span((x, y), lod)
        ax0, ax1 = max(x0, lo_x), min(x1, hi_x)
        ay0, ay1 = max(y0, lo_y), min(y1, hi_y)
        if ax0 > ax1 or ay0 > ay1:
            continue
        nearest = (min(max(cx, ax0), ax1), min(max(cy, ay0), ay1))
        if select_lod(nearest, center).lod >= lod:
            planned.append(((x, y), lod_level(lod)))
            continue
        for dy in (0, 1):
            for dx in (0, 1):
                stack.append((2 * x + dx, 2 * y + dy, lod - 1))
    planned.sort(
        key=lambda item: (
            distance_to_tile((cx, cy), item[0], item[1].lod),
            item[1].lod,
            item[0][1],
            item[0][0],
        )
    )
    return planned


__all__ = [
    "BASE_TILE_SIZE",
    "LOD_LEVELS",
    "LodLevel",
    "TileCoords",
    "TileKey",
    "cell_span",
    "distance_to_tile",
    "lod_level",
    "plan_tiles",
    "resolution_for_lod",
    "select_lod",
    "tile_distance",
    "tile_for_world",
    "tile_key",
    "tile_size_for_lod",
    "tiles_in_radius",
]
