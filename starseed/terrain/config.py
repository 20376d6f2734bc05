"""Per-planet terrain parameters."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from starseed.core.hashing import hash_combine
from starseed.core.prng import Prng
from starseed.data.planets import PLANET_TYPES, PlanetType
from starseed.data.resources import Hazard

if TYPE_CHECKING:
    from starseed.world.planet_detail import PlanetDetail

# World units around the equator per Earth radius.
CIRCUMFERENCE_PER_RADIUS = 40000.0


@dataclass(frozen=True)
class TerrainConfig:
    """Immutable inputs shared by every tile of one planet."""

    seed: int
    planet_type: PlanetType
    sea_level: float
    mountain_threshold: float
    base_temperature: float
    water_coverage: float
    roughness: float
    continental_scale: float
    height_multiplier: float
    erosion_strength: float
    circumference: float
    volcanic: bool = False

    @property
    def barren(self) -> bool:
        return self.planet_type in (PlanetType.BARREN, PlanetType.GAS_GIANT)

    def to_dict(self) -> dict:
        return {
            "seed": self.seed,
            "planet_type": self.planet_type.value,
            "sea_level": self.sea_level,
            "mountain_threshold": self.mountain_threshold,
            "base_temperature": self.base_temperature,
            "water_coverage": self.water_coverage,
            "roughness": self.roughness,
            "continental_scale": self.continental_scale,
            "height_multiplier": self.height_multiplier,
            "erosion_strength": self.erosion_strength,
            "circumference": self.circumference,
            "volcanic": self.volcanic,
        }


def create_terrain_config(
    planet_seed: int,
    planet_type: PlanetType,
    detail: Optional["PlanetDetail"] = None,
) -> TerrainConfig:
    """Roll the terrain parameters of a planet.

    ``detail`` replaces the climate fields (temperature and water coverage)
    with the values of an already generated :class:`PlanetDetail`; sea level
    follows the water coverage shift.
    """

    if planet_type is None:
        raise ValueError("planet_type is required")
    info = PLANET_TYPES[planet_type]
    ranges = info.terrain
    rng = Prng(hash_combine(planet_seed, ("terrain",)))

    sea_level = rng.next_float_range(*ranges.sea_level)
    mountain_threshold = rng.next_float_range(*ranges.mountain_threshold)
    temperature = rng.next_float_range(*ranges.temperature)
    water_coverage = rng.next_float_range(*ranges.water_coverage)
    roughness = rng.next_float_range(*ranges.roughness)
    continental_scale = rng.next_float_range(*ranges.continental_scale)
    height_multiplier = rng.next_float_range(*ranges.height_multiplier)
    erosion_strength = rng.next_float_range(*ranges.erosion_strength)
    circumference = rng.next_float_range(*info.radius) * CIRCUMFERENCE_PER_RADIUS
    volcanic = planet_type is PlanetType.VOLCANIC

    if detail is not None:
        shift = detail.water_coverage - water_coverage
        sea_level = min(0.7, max(0.02, sea_level + shift * 0.2))
        water_coverage = detail.water_coverage
        temperature = detail.mean_temperature
        volcanic = volcanic or Hazard.LAVA_FLOWS in detail.hazards

    return TerrainConfig(
        seed=planet_seed,
        planet_type=planet_type,
        sea_level=sea_level,
        mountain_threshold=max(mountain_threshold, sea_level + 0.1),
        base_temperature=temperature,
        water_coverage=water_coverage,
        roughness=roughness,
        continental_scale=continental_scale,
        height_multiplier=height_multiplier,
        erosion_strength=erosion_strength,
        circumference=circumference,
        volcanic=volcanic,
    )


__all__ = ["CIRCUMFERENCE_PER_RADIUS", "TerrainConfig", "create_terrain_config"]
