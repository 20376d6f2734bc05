"""Point-of-interest archetypes."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple


class POIType(Enum):
    CAVE_SYSTEM = "cave_system"
    CRASHED_SHIP = "crashed_ship"
    ABANDONED_OUTPOST = "abandoned_outpost"
    ANCIENT_RUINS = "ancient_ruins"
    CRYSTAL_FORMATION = "crystal_formation"
    TEMPLE = "temple"
    ANCIENT_MONUMENT = "ancient_monument"


@dataclass(frozen=True)
class POITypeInfo:
    name: str
    weight: float
    size: Tuple[float, float]
    marker_color: Tuple[int, int, int]
    artifact_prefixes: Tuple[str, ...]
    artifact_suffixes: Tuple[str, ...]


POI_TYPES: Dict[POIType, POITypeInfo] = {
    POIType.CAVE_SYSTEM: POITypeInfo(
        name="Cave System",
        weight=25.0,
        size=(12.0, 30.0),
        marker_color=(150, 120, 90),
        artifact_prefixes=("Fossilized", "Glowing", "Petrified", "Echoing"),
        artifact_suffixes=("Geode", "Idol", "Totem", "Shard"),
    ),
    POIType.CRASHED_SHIP: POITypeInfo(
        name="Crashed Ship",
        weight=20.0,
        size=(15.0, 40.0),
        marker_color=(200, 200, 210),
        artifact_prefixes=("Damaged", "Encrypted", "Scorched", "Salvaged"),
        artifact_suffixes=("Flight Recorder", "Navicomputer", "Hyperdrive Core", "Data Chip"),
    ),
    POIType.ABANDONED_OUTPOST: POITypeInfo(
        name="Abandoned Outpost",
        weight=18.0,
        size=(20.0, 45.0),
        marker_color=(180, 180, 120),
        artifact_prefixes=("Forgotten", "Sealed", "Military", "Rusted"),
        artifact_suffixes=("Logbook", "Supply Cache", "Holotape", "Access Key"),
    ),
    POIType.ANCIENT_RUINS: POITypeInfo(
        name="Ancient Ruins",
        weight=15.0,
        size=(25.0, 60.0),
        marker_color=(210, 180, 120),
        artifact_prefixes=("Ancient", "Weathered", "Carved", "Forgotten"),
        artifact_suffixes=("Tablet", "Relic", "Effigy", "Seal"),
    ),
    POIType.CRYSTAL_FORMATION: POITypeInfo(
        name="Crystal Formation",
        weight=12.0,
        size=(10.0, 25.0),
        marker_color=(120, 220, 255),
        artifact_prefixes=("Resonant", "Prismatic", "Humming", "Pure"),
        artifact_suffixes=("Crystal", "Lens", "Prism", "Core"),
    ),
    POIType.TEMPLE: POITypeInfo(
        name="Temple",
        weight=6.0,
        size=(30.0, 55.0),
        marker_color=(170, 130, 255),
        artifact_prefixes=("Sacred", "Luminous", "Whispering", "Eternal"),
        artifact_suffixes=("Holocron", "Kyber Shard", "Amulet", "Codex"),
    ),
    POIType.ANCIENT_MONUMENT: POITypeInfo(
        name="Ancient Monument",
        weight=4.0,
        size=(35.0, 70.0),
        marker_color=(255, 210, 90),
        artifact_prefixes=("Primordial", "Colossal", "Star-Forged", "Timeless"),
        artifact_suffixes=("Keystone", "Obelisk Fragment", "Star Map", "Crown"),
    ),
}

POI_TYPE_ORDER: Tuple[POIType, ...] = tuple(POI_TYPES)

__all__ = ["POITypeInfo", "POIType", "POI_TYPES", "POI_TYPE_ORDER"]
