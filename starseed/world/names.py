"""Procedural name synthesis."""
from __future__ import annotations

from enum import Enum
from typing import Tuple

from starseed.core.prng import Prng

ONSETS: Tuple[str, ...] = (
    "ka", "ta", "ko", "ri", "ve", "za", "mo", "dan", "cor", "bes", "ny", "ul",
    "tor", "fel", "ith", "ser", "qu", "ral", "xan", "yo", "dra", "hal", "ob", "ent",
)
MIDDLES: Tuple[str, ...] = (
    "la", "ro", "ne", "shi", "va", "di", "mu", "ter", "gal", "ri", "so", "an",
)
CODAS: Tuple[str, ...] = (
    "ris", "ne", "dor", "oon", "ia", "us", "ax", "eth", "ar", "ine", "ul", "os",
)
GREEK_LETTERS: Tuple[str, ...] = (
    "Alpha", "Beta", "Gamma", "Delta", "Epsilon", "Zeta", "Eta", "Theta",
    "Iota", "Kappa", "Lambda", "Mu", "Nu", "Xi", "Omicron", "Pi", "Rho",
    "Sigma", "Tau", "Upsilon", "Phi", "Chi", "Psi", "Omega",
)
ROOTS: Tuple[str, ...] = (
    "Vexis", "Coruna", "Tarsis", "Mirel", "Ondara", "Keth", "Solenne", "Draxis",
    "Ilum", "Varna", "Pellaeon", "Zhar", "Orrin", "Castell", "Nevar", "Yavin",
)
CATALOG_PREFIXES: Tuple[str, ...] = ("HD", "GX", "KOI", "TYC", "SR", "NX", "RV")
ROMAN_NUMERALS: Tuple[Tuple[int, str], ...] = (
    (10, "X"), (9, "IX"), (5, "V"), (4, "IV"), (1, "I"),
)
MOON_SUFFIXES: Tuple[str, ...] = ("a", "b", "c", "d", "e", "f", "g", "h")


class NameStyle(Enum):
    SYLLABIC = "syllabic"
    GREEK = "greek"
    CATALOG = "catalog"


NAME_STYLE_WEIGHTS = (0.55, 0.25, 0.2)


def syllabic_name(rng: Prng) -> str:
    parts = [rng.pick(ONSETS)]
    if rng.next_bool(0.5):
        parts.append(rng.pick(MIDDLES))
    parts.append(rng.pick(CODAS))
    return "".join(parts).capitalize()


def greek_name(rng: Prng) -> str:
    return f"{rng.pick(GREEK_LETTERS)} {rng.pick(ROOTS)}"


def catalog_name(rng: Prng) -> str:
    return f"{rng.pick(CATALOG_PREFIXES)}-{rng.next_int_range(100, 9999)}"


def star_name(rng: Prng) -> str:
    style = (NameStyle.SYLLABIC, NameStyle.GREEK, NameStyle.CATALOG)[
        rng.weighted_index(NAME_STYLE_WEIGHTS)
    ]
    if style is NameStyle.GREEK:
        return greek_name(rng)
    if style is NameStyle.CATALOG:
        return catalog_name(rng)
    return syllabic_name(rng)


def roman_numeral(value: int) -> str:
    if value <= 0:
        raise ValueError("roman numerals start at 1")
    parts = []
    for amount, symbol in ROMAN_NUMERALS:
        while value >= amount:
            parts.append(symbol)
            value -= amount
    return "".join(parts)


def planet_name(star: str, orbit_index: int) -> str:
    return f"{star} {roman_numeral(orbit_index + 1)}"


def belt_name(star: str, orbit_index: int) -> str:
    return f"{star} Belt {roman_numeral(orbit_index + 1)}"


def moon_name(planet: str, moon_index: int) -> str:
    suffix = MOON_SUFFIXES[moon_index % len(MOON_SUFFIXES)]
    if moon_index >= len(MOON_SUFFIXES):
        suffix = f"{suffix}{moon_index // len(MOON_SUFFIXES) + 1}"
    return f"{planet}{suffix}"


__all__ = [
    "NameStyle",
    "belt_name",
    "catalog_name",
    "greek_name",
    "moon_name",
    "planet_name",
    "roman_numeral",
    "star_name",
    "syllabic_name",
]
