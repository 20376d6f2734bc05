"""Atmosphere, climate, hazard and resource catalogues for planet detail."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple

from starseed.data.planets import PlanetType


class Atmosphere(Enum):
    NONE = "none"
    THIN = "thin"
    BREATHABLE = "breathable"
    DENSE = "dense"
    TOXIC = "toxic"
    CORROSIVE = "corrosive"


BREATHABLE_ATMOSPHERES = frozenset({Atmosphere.BREATHABLE, Atmosphere.DENSE})


class Climate(Enum):
    FROZEN = "frozen"
    COLD = "cold"
    TEMPERATE = "temperate"
    TROPICAL = "tropical"
    ARID = "arid"
    SCORCHING = "scorching"


class Hazard(Enum):
    LAVA_FLOWS = "lava_flows"
    ASH_STORMS = "ash_storms"
    SANDSTORMS = "sandstorms"
    BLIZZARDS = "blizzards"
    ACID_RAIN = "acid_rain"
    TOXIC_SPORES = "toxic_spores"
    PREDATORS = "predators"
    MEGASTORMS = "megastorms"
    RADIATION = "radiation"
    SEISMIC_ACTIVITY = "seismic_activity"
    METEOR_SHOWERS = "meteor_showers"
    CRUSHING_PRESSURE = "crushing_pressure"


@dataclass(frozen=True)
class HazardInfo:
    name: str
    severity: int


HAZARDS: Dict[Hazard, HazardInfo] = {
    Hazard.LAVA_FLOWS: HazardInfo("Lava Flows", 3),
    Hazard.ASH_STORMS: HazardInfo("Ash Storms", 2),
    Hazard.SANDSTORMS: HazardInfo("Sandstorms", 2),
    Hazard.BLIZZARDS: HazardInfo("Blizzards", 2),
    Hazard.ACID_RAIN: HazardInfo("Acid Rain", 3),
    Hazard.TOXIC_SPORES: HazardInfo("Toxic Spores", 2),
    Hazard.PREDATORS: HazardInfo("Predators", 2),
    Hazard.MEGASTORMS: HazardInfo("Megastorms", 2),
    Hazard.RADIATION: HazardInfo("Radiation", 3),
    Hazard.SEISMIC_ACTIVITY: HazardInfo("Seismic Activity", 1),
    Hazard.METEOR_SHOWERS: HazardInfo("Meteor Showers", 1),
    Hazard.CRUSHING_PRESSURE: HazardInfo("Crushing Pressure", 3),
}

# Hazards every planet of a type carries.
TYPE_HAZARDS: Dict[PlanetType, Tuple[Hazard, ...]] = {
    PlanetType.VOLCANIC: (Hazard.LAVA_FLOWS, Hazard.ASH_STORMS),
    PlanetType.DESERT: (Hazard.SANDSTORMS,),
    PlanetType.BARREN: (Hazard.METEOR_SHOWERS,),
    PlanetType.TEMPERATE: (),
    PlanetType.OCEAN: (Hazard.MEGASTORMS,),
    PlanetType.JUNGLE: (Hazard.PREDATORS, Hazard.TOXIC_SPORES),
    PlanetType.ICE: (Hazard.BLIZZARDS,),
    PlanetType.TOXIC: (Hazard.ACID_RAIN, Hazard.TOXIC_SPORES),
    PlanetType.GAS_GIANT: (Hazard.CRUSHING_PRESSURE, Hazard.MEGASTORMS),
}

# Independently rolled extras, in roll order.
EXTRA_HAZARD_CHANCES: Tuple[Tuple[Hazard, float], ...] = (
    (Hazard.RADIATION, 0.12),
    (Hazard.SEISMIC_ACTIVITY, 0.18),
    (Hazard.METEOR_SHOWERS, 0.1),
    (Hazard.PREDATORS, 0.15),
)


class Resource(Enum):
    IRON = "iron"
    COPPER = "copper"
    NICKEL = "nickel"
    WATER_ICE = "water_ice"
    SILICATES = "silicates"
    SULFUR = "sulfur"
    OBSIDIAN = "obsidian"
    HYDROCARBONS = "hydrocarbons"
    TIMBER = "timber"
    BIOMASS = "biomass"
    HELIUM_3 = "helium_3"
    TIBANNA_GAS = "tibanna_gas"
    RARE_EARTHS = "rare_earths"
    FORCE_CRYSTAL = "force_crystal"
    ANCIENT_ALLOY = "ancient_alloy"
    EXOTIC_MATTER = "exotic_matter"


COMMON_METALS: Tuple[Resource, ...] = (Resource.IRON, Resource.COPPER, Resource.NICKEL)

TYPE_RESOURCES: Dict[PlanetType, Tuple[Resource, ...]] = {
    PlanetType.VOLCANIC: (Resource.SULFUR, Resource.OBSIDIAN),
    PlanetType.DESERT: (Resource.SILICATES,),
    PlanetType.BARREN: (Resource.SILICATES, Resource.HELIUM_3),
    PlanetType.TEMPERATE: (Resource.TIMBER, Resource.BIOMASS),
    PlanetType.OCEAN: (Resource.BIOMASS, Resource.HYDROCARBONS),
    PlanetType.JUNGLE: (Resource.TIMBER, Resource.BIOMASS),
    PlanetType.ICE: (Resource.WATER_ICE,),
    PlanetType.TOXIC: (Resource.HYDROCARBONS, Resource.SULFUR),
    PlanetType.GAS_GIANT: (Resource.HELIUM_3, Resource.TIBANNA_GAS),
}

RARE_RESOURCE_CHANCES: Tuple[Tuple[Resource, float], ...] = (
    (Resource.RARE_EARTHS, 0.15),
    (Resource.FORCE_CRYSTAL, 0.06),
    (Resource.ANCIENT_ALLOY, 0.05),
    (Resource.EXOTIC_MATTER, 0.02),
)

RARE_RESOURCES = frozenset(resource for resource, _ in RARE_RESOURCE_CHANCES)

# Relative atmosphere weights per planet type, in Atmosphere declaration order.
ATMOSPHERE_WEIGHTS: Dict[PlanetType, Tuple[float, ...]] = {
    PlanetType.VOLCANIC: (1.0, 2.0, 0.0, 2.0, 5.0, 3.0),
    PlanetType.DESERT: (1.0, 5.0, 3.0, 0.5, 0.5, 0.0),
    PlanetType.BARREN: (8.0, 3.0, 0.0, 0.0, 0.5, 0.0),
    PlanetType.TEMPERATE: (0.0, 1.0, 8.0, 2.0, 0.0, 0.0),
    PlanetType.OCEAN: (0.0, 1.0, 6.0, 3.0, 0.5, 0.0),
    PlanetType.JUNGLE: (0.0, 0.0, 5.0, 5.0, 1.0, 0.0),
    PlanetType.ICE: (2.0, 6.0, 1.0, 0.5, 0.5, 0.0),
    PlanetType.TOXIC: (0.0, 0.5, 0.0, 2.0, 6.0, 4.0),
    PlanetType.GAS_GIANT: (0.0, 0.0, 0.0, 8.0, 3.0, 2.0),
}

__all__ = [
    "ATMOSPHERE_WEIGHTS",
    "Atmosphere",
    "BREATHABLE_ATMOSPHERES",
    "COMMON_METALS",
    "Climate",
    "EXTRA_HAZARD_CHANCES",
    "HAZARDS",
    "Hazard",
    "HazardInfo",
    "RARE_RESOURCES",
    "RARE_RESOURCE_CHANCES",
    "Resource",
    "TYPE_HAZARDS",
    "TYPE_RESOURCES",
]
