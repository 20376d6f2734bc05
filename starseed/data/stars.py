"""Stellar catalogue: spectral classes and controlling factions."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple


class SpectralClass(Enum):
    O = "O"
    B = "B"
    A = "A"
    F = "F"
    G = "G"
    K = "K"
    M = "M"


@dataclass(frozen=True)
class SpectralInfo:
    weight: float
    color: Tuple[int, int, int]
    temperature: Tuple[float, float]
    luminosity: Tuple[float, float]
    mass: Tuple[float, float]
    planets: Tuple[int, int]
    planet_modifier: int


# Ordered hottest to coolest; weights are relative rarity.
SPECTRAL_CLASSES: Dict[SpectralClass, SpectralInfo] = {
    SpectralClass.O: SpectralInfo(0.5, (155, 176, 255), (30000.0, 45000.0), (30000.0, 90000.0), (16.0, 40.0), (0, 4), -2),
    SpectralClass.B: SpectralInfo(1.5, (170, 191, 255), (10000.0, 30000.0), (25.0, 30000.0), (2.1, 16.0), (0, 6), -1),
    SpectralClass.A: SpectralInfo(3.0, (202, 215, 255), (7500.0, 10000.0), (5.0, 25.0), (1.4, 2.1), (1, 7), 0),
    SpectralClass.F: SpectralInfo(6.0, (248, 247, 255), (6000.0, 7500.0), (1.5, 5.0), (1.04, 1.4), (2, 8), 0),
    SpectralClass.G: SpectralInfo(10.0, (255, 244, 234), (5200.0, 6000.0), (0.6, 1.5), (0.8, 1.04), (3, 9), 2),
    SpectralClass.K: SpectralInfo(17.0, (255, 210, 161), (3700.0, 5200.0), (0.08, 0.6), (0.45, 0.8), (2, 8), 1),
    SpectralClass.M: SpectralInfo(62.0, (255, 204, 111), (2400.0, 3700.0), (0.01, 0.08), (0.08, 0.45), (1, 6), 0),
}

MAX_PLANETS = 12


class Faction(Enum):
    UNCLAIMED = "unclaimed"
    REPUBLIC = "republic"
    EMPIRE = "empire"
    HUTT_CARTEL = "hutt_cartel"
    TRADE_GUILD = "trade_guild"
    PIRATES = "pirates"


@dataclass(frozen=True)
class FactionInfo:
    name: str
    weight: float
    danger_bias: int
    color: Tuple[int, int, int]


FACTIONS: Dict[Faction, FactionInfo] = {
    Faction.UNCLAIMED: FactionInfo("Unclaimed", 40.0, 0, (160, 160, 160)),
    Faction.REPUBLIC: FactionInfo("Republic", 18.0, -1, (90, 150, 255)),
    Faction.EMPIRE: FactionInfo("Empire", 18.0, 1, (220, 60, 60)),
    Faction.HUTT_CARTEL: FactionInfo("Hutt Cartel", 8.0, 1, (200, 160, 60)),
    Faction.TRADE_GUILD: FactionInfo("Trade Guild", 10.0, 0, (120, 210, 160)),
    Faction.PIRATES: FactionInfo("Pirates", 6.0, 2, (230, 120, 40)),
}

__all__ = [
    "FACTIONS",
    "Faction",
    "FactionInfo",
    "MAX_PLANETS",
    "SPECTRAL_CLASSES",
    "SpectralClass",
    "SpectralInfo",
]
