"""Star systems: orbital layout, planets, belts and moons."""
from __future__ import annotations

import json
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from starseed.core.hashing import hash_combine
from starseed.core.prng import Prng
from starseed.core.seeds import SectorCoords, planet_seed
from starseed.data.planets import PLANET_TYPES, PlanetType
from starseed.engine.logger import ChannelLogger
from starseed.world.galaxy import Star, get_star
from starseed.world.names import belt_name, moon_name, planet_name

HZ_INNER_FACTOR = 0.95
HZ_OUTER_FACTOR = 1.37
FROST_LINE_FACTOR = 4.85
FIRST_ORBIT_RANGE = (0.15, 0.45)
ORBIT_SPACING_RANGE = (1.4, 2.2)


class OrbitalZone(Enum):
    HOT_INNER = "hot_inner"
    INNER_HABITABLE = "inner_habitable"
    GOLDILOCKS = "goldilocks"
    OUTER_HABITABLE = "outer_habitable"
    COLD_OUTER = "cold_outer"


class BodyKind(Enum):
    PLANET = "planet"
    ASTEROID_BELT = "asteroid_belt"


_TYPE_ORDER: Tuple[PlanetType, ...] = (
    PlanetType.VOLCANIC,
    PlanetType.DESERT,
    PlanetType.BARREN,
    PlanetType.TEMPERATE,
    PlanetType.OCEAN,
    PlanetType.JUNGLE,
    PlanetType.ICE,
    PlanetType.TOXIC,
    PlanetType.GAS_GIANT,
)

# Weights follow _TYPE_ORDER.
ZONE_TYPE_WEIGHTS: Dict[OrbitalZone, Tuple[float, ...]] = {
    OrbitalZone.HOT_INNER: (6.0, 3.0, 4.0, 0.0, 0.0, 0.0, 0.0, 3.0, 0.5),
    OrbitalZone.INNER_HABITABLE: (2.0, 5.0, 3.0, 1.0, 0.5, 1.0, 0.0, 3.0, 0.5),
    OrbitalZone.GOLDILOCKS: (0.5, 2.0, 1.0, 6.0, 3.0, 4.0, 0.0, 1.0, 0.5),
    OrbitalZone.OUTER_HABITABLE: (0.0, 2.0, 3.0, 1.0, 1.0, 0.5, 3.0, 1.0, 3.0),
    OrbitalZone.COLD_OUTER: (0.0, 0.0, 3.0, 0.0, 0.0, 0.0, 5.0, 0.5, 7.0),
}

BELT_CHANCE: Dict[OrbitalZone, float] = {
    OrbitalZone.HOT_INNER: 0.03,
    OrbitalZone.INNER_HABITABLE: 0.05,
    OrbitalZone.GOLDILOCKS: 0.05,
    OrbitalZone.OUTER_HABITABLE: 0.15,
    OrbitalZone.COLD_OUTER: 0.12,
}


class PopulationTier(Enum):
    UNINHABITED = "uninhabited"
    OUTPOST = "outpost"
    COLONY = "colony"
    SETTLED = "settled"
    CORE_WORLD = "core_world"


@dataclass(frozen=True)
class PopulationBand:
    tier: PopulationTier
    threshold: float
    population: Tuple[float, float]
    tech_level: Tuple[int, int]


# A roll below ``threshold`` selects the band; checked in order.
POPULATION_BANDS: Tuple[PopulationBand, ...] = (
    PopulationBand(PopulationTier.OUTPOST, 0.45, (1e3, 1e5), (1, 3)),
    PopulationBand(PopulationTier.COLONY, 0.75, (1e5, 1e7), (2, 4)),
    PopulationBand(PopulationTier.SETTLED, 0.93, (1e7, 1e9), (3, 5)),
    PopulationBand(PopulationTier.CORE_WORLD, 1.01, (1e9, 5e10), (4, 6)),
)


@dataclass(frozen=True)
class Moon:
    name: str
    index: int
    seed: int
    radius: float
    orbit_radius: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "index": self.index,
            "seed": self.seed,
            "radius": self.radius,
            "orbit_radius": self.orbit_radius,
        }


@dataclass(frozen=True)
class OrbitalBody:
    name: str
    orbit_index: int
    seed: int
    kind: BodyKind
    planet_type: Optional[PlanetType]
    orbital_radius: float
    zone: OrbitalZone
    radius: float
    mass: float
    gravity: float
    orbital_period: float
    moons: Tuple[Moon, ...]
    population_tier: PopulationTier
    population: int
    tech_level: int

    @property
    def is_planet(self) -> bool:
        return self.kind is BodyKind.PLANET

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "orbit_index": self.orbit_index,
            "seed": self.seed,
            "kind": self.kind.value,
            "planet_type": self.planet_type.value if self.planet_type else None,
            "orbital_radius": self.orbital_radius,
            "zone": self.zone.value,
            "radius": self.radius,
            "mass": self.mass,
            "gravity": self.gravity,
            "orbital_period": self.orbital_period,
            "moons": [moon.to_dict() for moon in self.moons],
            "population_tier": self.population_tier.value,
            "population": self.population,
            "tech_level": self.tech_level,
        }


@dataclass
class StarSystem:
    star: Star
    seed: int
    habitable_zone: Tuple[float, float]
    frost_line: float
    bodies: List[OrbitalBody]

    @property
    def planets(self) -> List[OrbitalBody]:
        return [body for body in self.bodies if body.is_planet]

    @property
    def asteroid_belts(self) -> List[OrbitalBody]:
        return [body for body in self.bodies if not body.is_planet]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "star": self.star.to_dict(),
            "seed": self.seed,
            "habitable_zone": list(self.habitable_zone),
            "frost_line": self.frost_line,
            "bodies": [body.to_dict() for body in self.bodies],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)


def habitable_zone(luminosity: float) -> Tuple[float, float]:
    root = math.sqrt(luminosity)
    return (HZ_INNER_FACTOR * root, HZ_OUTER_FACTOR * root)


def frost_line(luminosity: float) -> float:
    return FROST_LINE_FACTOR * math.sqrt(luminosity)


def orbital_zone(radius: float, zone: Tuple[float, float], frost: float) -> OrbitalZone:
    inner, outer = zone
    if radius < inner * 0.6:
        return OrbitalZone.HOT_INNER
    if radius < inner:
        return OrbitalZone.INNER_HABITABLE
    if radius <= outer:
        return OrbitalZone.GOLDILOCKS
    if radius < frost:
        return OrbitalZone.OUTER_HABITABLE
    return OrbitalZone.COLD_OUTER


def orbital_period(radius_au: float, star_mass: float) -> float:
    """Orbital period in years (Kepler's third law, planet mass ignored)."""

    return math.sqrt(radius_au ** 3 / max(star_mass, 1e-6))


def roll_population(rng: Prng, planet_type: PlanetType) -> Tuple[PopulationTier, int, int]:
    habitability = PLANET_TYPES[planet_type].habitability
    settled_roll = rng.next_float()
    tier_roll = rng.next_float()
    if habitability <= 0.0 or settled_roll >= habitability * 0.8:
        return PopulationTier.UNINHABITED, 0, 0
    for band in POPULATION_BANDS:
        if tier_roll < band.threshold:
            low, high = band.population
            population = int(math.exp(rng.next_float_range(math.log(low), math.log(high))))
            return band.tier, population, rng.next_int_range(*band.tech_level)
    return PopulationTier.UNINHABITED, 0, 0


def _generate_moons(body_seed: int, name: str, count: int) -> Tuple[Moon, ...]:
    moons: List[Moon] = []
    orbit = 0.0
    for index in range(count):
        seed = hash_combine(body_seed, ("moon", index))
        rng = Prng(seed)
        orbit = rng.next_float_range(3.0, 8.0) if index == 0 else orbit * rng.next_float_range(1.3, 2.0)
        moons.append(
            Moon(
                name=moon_name(name, index),
                index=index,
                seed=seed,
                radius=rng.next_float_range(0.05, 0.35),
                orbit_radius=orbit,
            )
        )
    return tuple(moons)


def generate_body(
    star: Star,
    orbit_index: int,
    radius_au: float,
    zone_bounds: Tuple[float, float],
    frost: float,
) -> OrbitalBody:
    seed = planet_seed(star.seed, orbit_index)
    rng = Prng(seed)
    zone = orbital_zone(radius_au, zone_bounds, frost)
    period = orbital_period(radius_au, star.mass)
    if rng.next_bool(BELT_CHANCE[zone]):
        return OrbitalBody(
            name=belt_name(star.name, orbit_index),
            orbit_index=orbit_index,
            seed=seed,
            kind=BodyKind.ASTEROID_BELT,
            planet_type=None,
            orbital_radius=radius_au,
            zone=zone,
            radius=0.0,
            mass=0.0,
            gravity=0.0,
            orbital_period=period,
            moons=(),
            population_tier=PopulationTier.UNINHABITED,
            population=0,
            tech_level=0,
        )
    planet_type = _TYPE_ORDER[rng.weighted_index(ZONE_TYPE_WEIGHTS[zone])]
    info = PLANET_TYPES[planet_type]
    radius = rng.next_float_range(*info.radius)
    mass = rng.next_float_range(*info.density) * radius ** 3
    name = planet_name(star.name, orbit_index)
    moons = _generate_moons(seed, name, rng.next_int_range(*info.moons))
    tier, population, tech_level = roll_population(rng, planet_type)
    return OrbitalBody(
        name=name,
        orbit_index=orbit_index,
        seed=seed,
        kind=BodyKind.PLANET,
        planet_type=planet_type,
        orbital_radius=radius_au,
        zone=zone,
        radius=radius,
        mass=mass,
        gravity=mass / (radius * radius),
        orbital_period=period,
        moons=moons,
        population_tier=tier,
        population=population,
        tech_level=tech_level,
    )


def generate_system(
    galaxy_seed: int,
    sector_coords: SectorCoords,
    index: int,
    star: Optional[Star] = None,
    logger: Optional[ChannelLogger] = None,
) -> StarSystem:
    """Build the system of star ``index`` in a sector.

    Pass ``star`` when the caller already holds it to skip regenerating the
    sector's star placement.
    """

    if star is None:
        star = get_star(galaxy_seed, sector_coords, index)
    zone_bounds = habitable_zone(star.luminosity)
    frost = frost_line(star.luminosity)
    rng = Prng(hash_combine(star.seed, ("orbits",)))
    root = math.sqrt(star.luminosity)
    radius = rng.next_float_range(*FIRST_ORBIT_RANGE) * root
    bodies: List[OrbitalBody] = []
    for orbit_index in range(star.planet_count):
        if orbit_index > 0:
            radius *= rng.next_float_range(*ORBIT_SPACING_RANGE)
        bodies.append(generate_body(star, orbit_index, radius, zone_bounds, frost))
    if logger:
        logger.debug(
            "System %s (%s) generated with %d bodies",
            star.name,
            star.spectral_class.value,
            len(bodies),
        )
    return StarSystem(
        star=star,
        seed=star.seed,
        habitable_zone=zone_bounds,
        frost_line=frost,
        bodies=bodies,
    )


__all__ = [
    "BELT_CHANCE",
    "BodyKind",
    "Moon",
    "OrbitalBody",
    "OrbitalZone",
    "POPULATION_BANDS",
    "PopulationTier",
    "StarSystem",
    "ZONE_TYPE_WEIGHTS",
    "frost_line",
    "generate_body",
    "generate_system",
    "habitable_zone",
    "orbital_period",
    "orbital_zone",
    "roll_population",
]
