"""Deterministic sector and star generation."""
from __future__ import annotations

import json
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from starseed.core.prng import Prng
from starseed.core.seeds import SectorCoords, sector_seed, system_seed
from starseed.data.stars import (
    FACTIONS,
    MAX_PLANETS,
    SPECTRAL_CLASSES,
    Faction,
    SpectralClass,
)
from starseed.engine.logger import ChannelLogger
from starseed.world.names import star_name

StarPosition = Tuple[float, float, float]

GALAXY_CORE_RADIUS = 12.0
MIN_STARS = 50
MAX_STARS = 300
MIN_SEPARATION = 0.035
ATTEMPTS_PER_STAR = 30

_SPECTRAL_ORDER: Tuple[SpectralClass, ...] = tuple(SPECTRAL_CLASSES)
_SPECTRAL_WEIGHTS: Tuple[float, ...] = tuple(info.weight for info in SPECTRAL_CLASSES.values())
_FACTION_ORDER: Tuple[Faction, ...] = tuple(FACTIONS)
_FACTION_WEIGHTS: Tuple[float, ...] = tuple(info.weight for info in FACTIONS.values())


@dataclass(frozen=True)
class Star:
    sector: SectorCoords
    index: int
    seed: int
    name: str
    spectral_class: SpectralClass
    position: StarPosition
    planet_count: int
    faction: Faction
    danger: int
    luminosity: float
    mass: float
    temperature: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sector": list(self.sector),
            "index": self.index,
            "seed": self.seed,
            "name": self.name,
            "spectral_class": self.spectral_class.value,
            "position": list(self.position),
            "planet_count": self.planet_count,
            "faction": self.faction.value,
            "danger": self.danger,
            "luminosity": self.luminosity,
            "mass": self.mass,
            "temperature": self.temperature,
        }


@dataclass
class Sector:
    coords: SectorCoords
    seed: int
    density: float
    target_count: int
    stars: List[Star]

    @property
    def underfilled(self) -> bool:
        return len(self.stars) < self.target_count

    def to_dict(self) -> Dict[str, Any]:
        return {
            "coords": list(self.coords),
            "seed": self.seed,
            "density": self.density,
            "target_count": self.target_count,
            "stars": [star.to_dict() for star in self.stars],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)


def sector_density(coords: SectorCoords) -> float:
    """Star density multiplier in (0.2, 1.0]: dense core, sparse rim."""

    distance = math.sqrt(coords[0] ** 2 + coords[1] ** 2 + coords[2] ** 2)
    return 0.2 + 0.8 * math.exp(-((distance / GALAXY_CORE_RADIUS) ** 2))


def target_star_count(coords: SectorCoords) -> int:
    count = MIN_STARS + round((MAX_STARS - MIN_STARS) * (sector_density(coords) - 0.2) / 0.8)
    return max(MIN_STARS, min(MAX_STARS, count))


def _cell(position: StarPosition) -> Tuple[int, int, int]:
    return (
        int(position[0] / MIN_SEPARATION),
        int(position[1] / MIN_SEPARATION),
        int(position[2] / MIN_SEPARATION),
    )


def _too_close(position: StarPosition, grid: Dict[Tuple[int, int, int], List[StarPosition]]) -> bool:
    cx, cy, cz = _cell(position)
    limit = MIN_SEPARATION * MIN_SEPARATION
    for dx in (-1, 0, 1):
        for dy in (-1, 0, 1):
            for dz in (-1, 0, 1):
                for other in grid.get((cx + dx, cy + dy, cz + dz), ()):
                    distance = (
                        (position[0] - other[0]) ** 2
                        + (position[1] - other[1]) ** 2
                        + (position[2] - other[2]) ** 2
                    )
                    if distance < limit:
                        return True
    return False


def place_stars(rng: Prng, target: int) -> List[StarPosition]:
    """Rejection-sample ``target`` positions in the unit cube.

    Gives up after ``target * ATTEMPTS_PER_STAR`` candidates and returns
    however many positions were accepted by then.
    """

    positions: List[StarPosition] = []
    grid: Dict[Tuple[int, int, int], List[StarPosition]] = {}
    for _ in range(target * ATTEMPTS_PER_STAR):
        if len(positions) >= target:
            break
        candidate = (rng.next_float(), rng.next_float(), rng.next_float())
        if _too_close(candidate, grid):
            continue
        positions.append(candidate)
        grid.setdefault(_cell(candidate), []).append(candidate)
    return positions


def _log_uniform(rng: Prng, low: float, high: float) -> float:
    return math.exp(rng.next_float_range(math.log(low), math.log(high)))


def generate_star(sector_seed_value: int, coords: SectorCoords, index: int, position: StarPosition) -> Star:
    seed = system_seed(sector_seed_value, index)
    rng = Prng(seed)
    spectral_class = _SPECTRAL_ORDER[rng.weighted_index(_SPECTRAL_WEIGHTS)]
    info = SPECTRAL_CLASSES[spectral_class]
    planet_count = rng.next_int_range(*info.planets) + info.planet_modifier
    planet_count = max(0, min(MAX_PLANETS, planet_count))
    name = star_name(rng)
    faction = _FACTION_ORDER[rng.weighted_index(_FACTION_WEIGHTS)]
    danger = max(0, min(5, rng.next_int_range(0, 3) + FACTIONS[faction].danger_bias))
    return Star(
        sector=tuple(coords),
        index=index,
        seed=seed,
        name=name,
        spectral_class=spectral_class,
        position=position,
        planet_count=planet_count,
        faction=faction,
        danger=danger,
        luminosity=_log_uniform(rng, *info.luminosity),
        mass=rng.next_float_range(*info.mass),
        temperature=rng.next_float_range(*info.temperature),
    )


def generate_sector(
    galaxy_seed: int,
    coords: SectorCoords,
    logger: Optional[ChannelLogger] = None,
) -> Sector:
    coords = (int(coords[0]), int(coords[1]), int(coords[2]))
    seed = sector_seed(galaxy_seed, *coords)
    target = target_star_count(coords)
    positions = place_stars(Prng(seed), target)
    stars = [generate_star(seed, coords, index, position) for index, position in enumerate(positions)]
    sector = Sector(
        coords=coords,
        seed=seed,
        density=sector_density(coords),
        target_count=target,
        stars=stars,
    )
    if logger:
        if sector.underfilled:
            logger.warning(
                "Sector %s placed %d/%d stars before exhausting attempts",
                coords,
                len(stars),
                target,
            )
        logger.debug("Sector %s generated with %d stars", coords, len(stars))
    return sector


def get_star(galaxy_seed: int, coords: SectorCoords, index: int) -> Star:
    """Regenerate a single star; only the sector's placement stream is replayed."""

    coords = (int(coords[0]), int(coords[1]), int(coords[2]))
    seed = sector_seed(galaxy_seed, *coords)
    positions = place_stars(Prng(seed), target_star_count(coords))
    if not 0 <= index < len(positions):
        raise IndexError(f"Sector {coords} has no star {index}")
    return generate_star(seed, coords, index, positions[index])


__all__ = [
    "ATTEMPTS_PER_STAR",
    "GALAXY_CORE_RADIUS",
    "MAX_STARS",
    "MIN_SEPARATION",
    "MIN_STARS",
    "Sector",
    "Star",
    "generate_sector",
    "generate_star",
    "get_star",
    "place_stars",
    "sector_density",
    "target_star_count",
]
