"""Rich planet descriptions derived independently of the orbital body."""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from starseed.core.hashing import hash_combine
from starseed.core.prng import Prng
from starseed.data.planets import PLANET_TYPES, PlanetType
from starseed.data.pois import POI_TYPE_ORDER, POIType
from starseed.data.resources import (
    ATMOSPHERE_WEIGHTS,
    BREATHABLE_ATMOSPHERES,
    COMMON_METALS,
    EXTRA_HAZARD_CHANCES,
    HAZARDS,
    RARE_RESOURCE_CHANCES,
    RARE_RESOURCES,
    TYPE_HAZARDS,
    TYPE_RESOURCES,
    Atmosphere,
    Climate,
    Hazard,
    Resource,
)

_ATMOSPHERE_ORDER: Tuple[Atmosphere, ...] = tuple(Atmosphere)

CLIMATE_WORDS: Dict[Climate, Tuple[str, ...]] = {
    Climate.FROZEN: ("frozen", "ice-locked", "glacial"),
    Climate.COLD: ("chilly", "windswept", "cold"),
    Climate.TEMPERATE: ("temperate", "mild", "verdant"),
    Climate.TROPICAL: ("steaming", "humid", "tropical"),
    Climate.ARID: ("arid", "sun-bleached", "parched"),
    Climate.SCORCHING: ("scorching", "blistering", "molten"),
}


@dataclass(frozen=True)
class PlanetDetail:
    seed: int
    planet_type: PlanetType
    atmosphere: Atmosphere
    climate: Climate
    mean_temperature: float
    water_coverage: float
    day_length: float
    hazards: Tuple[Hazard, ...]
    resources: Tuple[Resource, ...]
    poi_types: Tuple[POIType, ...]
    description: str

    @property
    def breathable(self) -> bool:
        return self.atmosphere in BREATHABLE_ATMOSPHERES

    @property
    def danger_rating(self) -> int:
        return sum(HAZARDS[hazard].severity for hazard in self.hazards)

    def has_resource(self, resource: Resource) -> bool:
        return resource in self.resources

    @property
    def rare_resources(self) -> Tuple[Resource, ...]:
        return tuple(resource for resource in self.resources if resource in RARE_RESOURCES)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seed": self.seed,
            "planet_type": self.planet_type.value,
            "atmosphere": self.atmosphere.value,
            "climate": self.climate.value,
            "mean_temperature": self.mean_temperature,
            "water_coverage": self.water_coverage,
            "day_length": self.day_length,
            "hazards": [hazard.value for hazard in self.hazards],
            "resources": [resource.value for resource in self.resources],
            "poi_types": [poi_type.value for poi_type in self.poi_types],
            "description": self.description,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)


def classify_climate(temperature: float, water_coverage: float) -> Climate:
    if temperature < -20.0:
        return Climate.FROZEN
    if temperature < 5.0:
        return Climate.COLD
    if temperature > 45.0:
        return Climate.SCORCHING
    if water_coverage < 0.2 and temperature > 15.0:
        return Climate.ARID
    if temperature > 24.0:
        return Climate.TROPICAL
    return Climate.TEMPERATE


def eligible_poi_types(
    planet_type: PlanetType,
    resources: Tuple[Resource, ...],
) -> Tuple[POIType, ...]:
    """POI archetypes a planet can host, in catalogue order."""

    gas_giant = planet_type is PlanetType.GAS_GIANT
    allowed = {POIType.CRASHED_SHIP, POIType.ABANDONED_OUTPOST}
    if not gas_giant:
        allowed.add(POIType.ANCIENT_RUINS)
        if planet_type is not PlanetType.OCEAN:
            allowed.add(POIType.CAVE_SYSTEM)
        if planet_type in (PlanetType.ICE, PlanetType.VOLCANIC) or Resource.RARE_EARTHS in resources:
            allowed.add(POIType.CRYSTAL_FORMATION)
        if Resource.FORCE_CRYSTAL in resources:
            allowed.add(POIType.TEMPLE)
            allowed.add(POIType.CRYSTAL_FORMATION)
        if Resource.ANCIENT_ALLOY in resources or Resource.EXOTIC_MATTER in resources:
            allowed.add(POIType.ANCIENT_MONUMENT)
    return tuple(poi_type for poi_type in POI_TYPE_ORDER if poi_type in allowed)


def _roll_hazards(rng: Prng, planet_type: PlanetType, atmosphere: Atmosphere) -> Tuple[Hazard, ...]:
    hazards: List[Hazard] = list(TYPE_HAZARDS[planet_type])
    if atmosphere is Atmosphere.CORROSIVE and Hazard.ACID_RAIN not in hazards:
        hazards.append(Hazard.ACID_RAIN)
    for hazard, chance in EXTRA_HAZARD_CHANCES:
        # Always roll so the stream position does not depend on earlier hazards.
        rolled = rng.next_bool(chance)
        if rolled and hazard not in hazards:
            hazards.append(hazard)
    return tuple(hazards)


def _roll_resources(rng: Prng, planet_type: PlanetType, climate: Climate) -> Tuple[Resource, ...]:
    resources: List[Resource] = list(COMMON_METALS)
    for resource in TYPE_RESOURCES[planet_type]:
        if resource not in resources:
            resources.append(resource)
    if climate is Climate.FROZEN and Resource.WATER_ICE not in resources:
        resources.append(Resource.WATER_ICE)
    for resource, chance in RARE_RESOURCE_CHANCES:
        if rng.next_bool(chance):
            resources.append(resource)
    return tuple(resources)


def _describe(
    rng: Prng,
    planet_type: PlanetType,
    climate: Climate,
    atmosphere: Atmosphere,
    hazards: Tuple[Hazard, ...],
    resources: Tuple[Resource, ...],
) -> str:
    adjective = rng.pick(CLIMATE_WORDS[climate])
    type_name = PLANET_TYPES[planet_type].name.lower()
    if atmosphere is Atmosphere.NONE:
        air = "no atmosphere to speak of"
    else:
        air = f"a {atmosphere.value} atmosphere"
    sentences = [f"A {adjective} {type_name} world with {air}."]
    notable = [resource for resource in resources if resource not in COMMON_METALS]
    if notable:
        highlight = rng.pick(notable).value.replace("_", " ")
        sentences.append(f"Survey drones report deposits of {highlight}.")
    if hazards:
        worst = max(hazards, key=lambda hazard: (HAZARDS[hazard].severity, -list(Hazard).index(hazard)))
        sentences.append(f"Expect {HAZARDS[worst].name.lower()} planetside.")
    else:
        sentences.append("Conditions on the surface are unusually calm.")
    return " ".join(sentences)


def generate_planet_detail(planet_seed: int, planet_type: PlanetType) -> PlanetDetail:
    if planet_type is None:
        raise ValueError("planet_type is required")
    info = PLANET_TYPES[planet_type]
    rng = Prng(hash_combine(planet_seed, ("detail",)))
    atmosphere = _ATMOSPHERE_ORDER[rng.weighted_index(ATMOSPHERE_WEIGHTS[planet_type])]
    temperature = rng.next_float_range(*info.terrain.temperature)
    if atmosphere is Atmosphere.DENSE:
        temperature += 8.0
    elif atmosphere in (Atmosphere.NONE, Atmosphere.THIN):
        temperature -= 5.0
    water_coverage = rng.next_float_range(*info.terrain.water_coverage)
    day_length = rng.next_float_range(8.0, 60.0)
    climate = classify_climate(temperature, water_coverage)
    hazards = _roll_hazards(rng, planet_type, atmosphere)
    resources = _roll_resources(rng, planet_type, climate)
    description = _describe(rng, planet_type, climate, atmosphere, hazards, resources)
    return PlanetDetail(
        seed=planet_seed,
        planet_type=planet_type,
        atmosphere=atmosphere,
        climate=climate,
        mean_temperature=temperature,
        water_coverage=water_coverage,
        day_length=day_length,
        hazards=hazards,
        resources=resources,
        poi_types=eligible_poi_types(planet_type, resources),
        description=description,
    )


__all__ = ["PlanetDetail", "classify_climate", "eligible_poi_types", "generate_planet_detail"]
