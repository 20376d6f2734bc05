"""Lattice value noise and fractal Brownian motion over numpy arrays.

The lattice hash is the numpy twin of :func:`starseed.core.hashing.hash_combine`
applied to ``(ix, iy)``: same mixing constants, same modulo 2**64 wraparound.
uint64 array arithmetic wraps silently, so inputs are always promoted to
arrays before mixing.
"""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from starseed.core.hashing import GOLDEN_GAMMA, MASK64, MIX_A, MIX_B, hash_combine

_GAMMA = np.uint64(GOLDEN_GAMMA)
_MIX_A = np.uint64(MIX_A)
_MIX_B = np.uint64(MIX_B)
_MASK63 = np.uint64((1 << 63) - 1)
_FLOAT_SCALE = 1.0 / float(1 << 53)


def _shift(bits: int) -> np.uint64:
    return np.uint64(bits)


def _mix(state: np.ndarray, value: np.ndarray) -> np.ndarray:
    state = state ^ (value + _GAMMA + (state << _shift(6)) + (state >> _shift(2)))
    state = state * _MIX_A
    return state ^ (state >> _shift(29))


def _finalize(z: np.ndarray) -> np.ndarray:
    z = (z ^ (z >> _shift(30))) * _MIX_A
    z = (z ^ (z >> _shift(27))) * _MIX_B
    return z ^ (z >> _shift(31))


def _as_u64(values: np.ndarray) -> np.ndarray:
    return np.asarray(values, dtype=np.int64).view(np.uint64)


def lattice_hash(seed: int, ix: np.ndarray, iy: np.ndarray) -> np.ndarray:
    ix = np.atleast_1d(ix)
    iy = np.atleast_1d(iy)
    state = np.full(ix.shape, seed & MASK64, dtype=np.uint64)
    state = _mix(state, _as_u64(ix))
    state = _mix(state, _as_u64(iy))
    return _finalize(state)


def lattice_value(seed: int, ix: np.ndarray, iy: np.ndarray) -> np.ndarray:
    """Pseudo-random corner value in [-1, 1)."""

    hashed = lattice_hash(seed, ix, iy)
    unit = ((hashed & _MASK63) >> _shift(10)).astype(np.float64) * _FLOAT_SCALE
    return unit * 2.0 - 1.0


def smoothstep(t: np.ndarray) -> np.ndarray:
    return t * t * (3.0 - 2.0 * t)


def value_noise(seed: int, x: np.ndarray, y: np.ndarray) -> np.ndarray:
    x = np.atleast_1d(np.asarray(x, dtype=np.float64))
    y = np.atleast_1d(np.asarray(y, dtype=np.float64))
    x0 = np.floor(x)
    y0 = np.floor(y)
    u = smoothstep(x - x0)
    v = smoothstep(y - y0)
    ix = x0.astype(np.int64)
    iy = y0.astype(np.int64)
    c00 = lattice_value(seed, ix, iy)
    c10 = lattice_value(seed, ix + 1, iy)
    c01 = lattice_value(seed, ix, iy + 1)
    c11 = lattice_value(seed, ix + 1, iy + 1)
    top = c00 + (c10 - c00) * u
    bottom = c01 + (c11 - c01) * u
    return top + (bottom - top) * v


def fbm(
    seed: int,
    x: np.ndarray,
    y: np.ndarray,
    *,
    frequency: float,
    octaves: int,
    persistence: float,
) -> np.ndarray:
    """Sum ``octaves`` of value noise, normalised back into [-1, 1]."""

    x = np.atleast_1d(np.asarray(x, dtype=np.float64))
    y = np.atleast_1d(np.asarray(y, dtype=np.float64))
    total = np.zeros(np.broadcast(x, y).shape, dtype=np.float64)
    amplitude = 1.0
    amplitude_sum = 0.0
    for octave in range(max(1, octaves)):
        octave_seed = hash_combine(seed, (octave,))
        total += amplitude * value_noise(octave_seed, x * frequency, y * frequency)
        amplitude_sum += amplitude
        amplitude *= persistence
        frequency *= 2.0
    return total / amplitude_sum


@dataclass(frozen=True)
class NoiseLayer:
    """One term of the height sum."""

    name: str
    frequency: float
    octaves: int
    persistence: float
    weight: float
    modulation: str | None = None


__all__ = ["NoiseLayer", "fbm", "lattice_hash", "lattice_value", "smoothstep", "value_noise"]
