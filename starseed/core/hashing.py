"""Integer mixing functions shared by every generation layer.

All arithmetic wraps modulo 2**64. Results are exposed as signed 64-bit
integers so they round-trip through anything that stores an ``int64``.
"""
from __future__ import annotations

import struct
from typing import Iterable

from pygame.math import Vector2, Vector3

MASK64 = (1 << 64) - 1
MASK63 = (1 << 63) - 1

GOLDEN_GAMMA = 0x9E3779B97F4A7C15
MIX_A = 0xBF58476D1CE4E5B9
MIX_B = 0x94D049BB133111EB

_FLOAT_SCALE = 1.0 / float(1 << 53)


def to_unsigned(value: int) -> int:
    return value & MASK64


def to_signed(value: int) -> int:
    value &= MASK64
    if value >= 1 << 63:
        return value - (1 << 64)
    return value


def mix(state: int, value: int) -> int:
    """Fold ``value`` into ``state``."""

    s = state & MASK64
    v = value & MASK64
    s ^= (v + GOLDEN_GAMMA + ((s << 6) & MASK64) + (s >> 2)) & MASK64
    s = (s * MIX_A) & MASK64
    s ^= s >> 29
    return to_signed(s)


def finalize(state: int) -> int:
    """Avalanche ``state`` so every input bit affects every output bit."""

    z = state & MASK64
    z = ((z ^ (z >> 30)) * MIX_A) & MASK64
    z = ((z ^ (z >> 27)) * MIX_B) & MASK64
    z ^= z >> 31
    return to_signed(z)


def float_bits(value: float) -> int:
    return struct.unpack("<q", struct.pack("<d", float(value)))[0]


def _mix_value(state: int, value: object) -> int:
    # bool is an int subclass and hashes as 0/1.
    if isinstance(value, int):
        return mix(state, value)
    if isinstance(value, float):
        return mix(state, float_bits(value))
    if isinstance(value, str):
        return _mix_bytes(state, value.encode("utf-8"))
    if isinstance(value, (bytes, bytearray)):
        return _mix_bytes(state, bytes(value))
    if isinstance(value, (Vector2, Vector3)):
        for component in value:
            state = mix(state, float_bits(component))
        return state
    if isinstance(value, (tuple, list)):
        for component in value:
            state = _mix_value(state, component)
        return state
    raise TypeError(f"Cannot hash value of type {type(value).__name__}")


def _mix_bytes(state: int, data: bytes) -> int:
    for byte in data:
        state = mix(state, byte)
    return mix(state, len(data))


def hash_combine(seed: int, values: Iterable[object]) -> int:
    """Hash a heterogeneous sequence of values into a single seed.

    Supported values are ints (including bools), floats (hashed by their
    IEEE-754 bit pattern), strings (UTF-8 bytes), bytes, pygame vectors and
    tuples/lists of any of these. Anything else raises ``TypeError``.
    """

    state = seed
    for value in values:
        state = _mix_value(state, value)
    return finalize(state)


def hash_string(text: str, seed: int = 0) -> int:
    return hash_combine(seed, (text,))


def hash_coords(seed: int, *coords: int) -> int:
    return hash_combine(seed, coords)


def to_float(value: int) -> float:
    """Map a hash onto [0, 1) using the positive half of the range."""

    return ((value & MASK63) >> 10) * _FLOAT_SCALE


def to_float_range(value: int, low: float, high: float) -> float:
    return low + (high - low) * to_float(value)


def to_int_range(value: int, low: int, high: int) -> int:
    if high <= low:
        return low
    span = high - low + 1
    return min(high, low + int(to_float(value) * span))


__all__ = [
    "GOLDEN_GAMMA",
    "MASK63",
    "MASK64",
    "MIX_A",
    "MIX_B",
    "finalize",
    "float_bits",
    "hash_combine",
    "hash_coords",
    "hash_string",
    "mix",
    "to_float",
    "to_float_range",
    "to_int_range",
    "to_signed",
    "to_unsigned",
]
