"""Point-of-interest placement and artifact state."""
from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np
from pygame.math import Vector2

from starseed.core.hashing import hash_combine
from starseed.core.prng import Prng
from starseed.core.seeds import poi_seed
from starseed.data.planets import PLANET_TYPES, PlanetType
from starseed.data.pois import POI_TYPES, POI_TYPE_ORDER, POIType, POITypeInfo
from starseed.engine.logger import ChannelLogger
from starseed.terrain.config import TerrainConfig
from starseed.terrain.generator import get_height_at_world, sample_heights
from starseed.world.planet_detail import PlanetDetail

POI_BASE_RADIUS = 150.0
POI_RADIUS_STEP = 90.0
ATTEMPT_RADIUS_GROWTH = 0.15
MAX_PLACEMENT_ATTEMPTS = 48
SPAWN_CLEARANCE = 60.0
POI_SPACING = 80.0
MIN_DISCOVERY_RADIUS = 25.0
COLLECT_RADIUS = 6.0
FALLBACK_ANGLE_STEP = 137.5
SPIRAL_SCAN_POINTS = 4096
SPIRAL_RING_STEP = 60.0


@dataclass(frozen=True)
class Artifact:
    name: str
    offset: Tuple[float, float]


@dataclass
class POI:
    index: int
    seed: int
    poi_type: POIType
    position: Vector2
    elevation: float
    size: float
    rotation: float
    artifact: Artifact
    validated: bool
    discovered: bool = field(default=False)
    artifact_collected: bool = field(default=False)

    @property
    def info(self) -> POITypeInfo:
        return POI_TYPES[self.poi_type]

    @property
    def discovery_radius(self) -> float:
        return max(MIN_DISCOVERY_RADIUS, self.size)

    def get_world_artifact_position(self) -> Vector2:
        return Vector2(self.position.x + self.artifact.offset[0], self.position.y + self.artifact.offset[1])

    def in_discovery_range(self, point: Sequence[float]) -> bool:
        return self.position.distance_to(Vector2(point[0], point[1])) <= self.discovery_radius

    def in_collect_range(self, point: Sequence[float]) -> bool:
        return self.get_world_artifact_position().distance_to(Vector2(point[0], point[1])) <= COLLECT_RADIUS

    def discover(self) -> bool:
        """Mark the POI discovered. Returns True only the first time."""

        if self.discovered:
            return False
        self.discovered = True
        return True

    def collect_artifact(self) -> bool:
        """Collect the artifact; requires discovery and succeeds once."""

        if not self.discovered or self.artifact_collected:
            return False
        self.artifact_collected = True
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "seed": self.seed,
            "type": self.poi_type.value,
            "position": [self.position.x, self.position.y],
            "elevation": self.elevation,
            "size": self.size,
            "rotation": self.rotation,
            "artifact": {"name": self.artifact.name, "offset": list(self.artifact.offset)},
            "validated": self.validated,
            "discovered": self.discovered,
            "artifact_collected": self.artifact_collected,
        }


def poi_count(planet_seed: int, planet_type: PlanetType) -> int:
    rng = Prng(hash_combine(planet_seed, ("poi_count",)))
    return rng.next_int_range(*PLANET_TYPES[planet_type].poi_count)


def artifact_name(rng: Prng, info: POITypeInfo) -> str:
    return f"{rng.pick(info.artifact_prefixes)} {rng.pick(info.artifact_suffixes)}"


def roll_poi_type(rng: Prng, types: Sequence[POIType] = POI_TYPE_ORDER) -> POIType:
    return types[rng.weighted_index([POI_TYPES[poi_type].weight for poi_type in types])]


def scan_for_dry_land(
    index: int,
    config: TerrainConfig,
    placed: Sequence[Vector2],
) -> Optional[Tuple[Vector2, float]]:
    """Walk a fixed golden-angle spiral out from the spawn point.

    Returns the first point above sea level that keeps its distance from
    the spawn and from ``placed``, or None after ``SPIRAL_SCAN_POINTS``.
    """

    steps = np.arange(SPIRAL_SCAN_POINTS, dtype=np.float64)
    radii = SPAWN_CLEARANCE + SPIRAL_RING_STEP * np.sqrt(steps)
    angles = np.radians((index + steps) * FALLBACK_ANGLE_STEP)
    xs = np.cos(angles) * radii
    ys = np.sin(angles) * radii
    heights = sample_heights(config, xs, ys)
    for step in np.flatnonzero(heights > config.sea_level):
        candidate = Vector2(float(xs[step]), float(ys[step]))
        if any(candidate.distance_to(other) < POI_SPACING for other in placed):
            continue
        height = get_height_at_world(config, candidate)
        if height > config.sea_level:
            return candidate, height
    return None


def place_poi(
    rng: Prng,
    index: int,
    config: TerrainConfig,
    placed: Sequence[Vector2],
) -> Tuple[Vector2, float, bool]:
    """Pick a dry position for POI ``index``.

    Candidates are drawn in polar coordinates around the spawn point; the
    search ring widens with the POI index and with every failed attempt.
    After ``MAX_PLACEMENT_ATTEMPTS`` a fixed spiral scan takes over. Only
    when that finds no dry land either is the highest candidate seen used
    (or a golden-angle point on the search ring if spacing rejected them
    all). Returns ``(position, height, above_sea_level)``.
    """

    search_radius = POI_BASE_RADIUS + index * POI_RADIUS_STEP
    best: Optional[Tuple[Vector2, float]] = None
    for attempt in range(MAX_PLACEMENT_ATTEMPTS):
        radius = search_radius * (1.0 + attempt * ATTEMPT_RADIUS_GROWTH)
        angle = rng.next_float_range(0.0, 2.0 * math.pi)
        distance = SPAWN_CLEARANCE + (radius - SPAWN_CLEARANCE) * math.sqrt(rng.next_float())
        candidate = Vector2(math.cos(angle) * distance, math.sin(angle) * distance)
        if any(candidate.distance_to(other) < POI_SPACING for other in placed):
            continue
        height = get_height_at_world(config, candidate)
        if height > config.sea_level:
            return candidate, height, True
        if best is None or height > best[1]:
            best = (candidate, height)
    dry = scan_for_dry_land(index, config, placed)
    if dry is not None:
        return dry[0], dry[1], True
    if best is None:
        fallback = Vector2(search_radius, 0.0).rotate(index * FALLBACK_ANGLE_STEP)
        best = (fallback, get_height_at_world(config, fallback))
    return best[0], best[1], best[1] > config.sea_level


def generate_planet_pois(
    planet_seed: int,
    planet_type: PlanetType,
    terrain_config: TerrainConfig,
    detail: Optional[PlanetDetail] = None,
    logger: Optional[ChannelLogger] = None,
) -> List[POI]:
    """Place the points of interest of one planet.

    With ``detail`` the type roll is restricted to the POI types the planet
    is eligible for; otherwise the full weighted catalogue is used.
    """

    if terrain_config is None:
        raise ValueError("a TerrainConfig is required to validate POI placement")
    types = tuple(detail.poi_types) if detail is not None and detail.poi_types else POI_TYPE_ORDER
    pois: List[POI] = []
    for index in range(poi_count(planet_seed, planet_type)):
        seed = poi_seed(planet_seed, index)
        rng = Prng(seed)
        poi_type = roll_poi_type(rng, types)
        info = POI_TYPES[poi_type]
        size = rng.next_float_range(*info.size)
        rotation = rng.next_float_range(0.0, 360.0)
        offset = rng.point_in_circle(size * 0.4)
        artifact = Artifact(name=artifact_name(rng, info), offset=(offset.x, offset.y))
        position, elevation, validated = place_poi(rng, index, terrain_config, [poi.position for poi in pois])
        if logger and not validated:
            logger.warning("POI %d fell back to %s below sea level", index, tuple(position))
        pois.append(
            POI(
                index=index,
                seed=seed,
                poi_type=poi_type,
                position=position,
                elevation=elevation,
                size=size,
                rotation=rotation,
                artifact=artifact,
                validated=validated,
            )
        )
    if logger:
        logger.debug("Placed %d POIs for planet seed %d", len(pois), planet_seed)
    return pois


def pois_to_json(pois: Sequence[POI]) -> str:
    return json.dumps([poi.to_dict() for poi in pois], indent=2)


__all__ = [
    "Artifact",
    "COLLECT_RADIUS",
    "MAX_PLACEMENT_ATTEMPTS",
    "POI",
    "SPIRAL_SCAN_POINTS",
    "artifact_name",
    "generate_planet_pois",
    "place_poi",
    "roll_poi_type",
    "scan_for_dry_land",
    "poi_count",
    "pois_to_json",
]
