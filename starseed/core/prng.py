"""SplitMix64 pseudo-random stream used by every content generator."""
from __future__ import annotations

import math
from typing import List, MutableSequence, Sequence, TypeVar

from pygame.math import Vector2, Vector3

from starseed.core.hashing import (
    GOLDEN_GAMMA,
    MASK64,
    MIX_A,
    MIX_B,
    hash_combine,
    to_float,
    to_signed,
)

T = TypeVar("T")

MAX_REJECTION_ATTEMPTS = 64
GAUSSIAN_EPSILON = 1e-12


class Prng:
    """Deterministic stream seeded from a single 64-bit integer.

    Two streams built from equal seeds produce identical sequences forever.
    The step function must never change: every stored expectation in the
    test-suite and every generated world depends on it.

    Instances are not thread-safe. Build one stream per generation call
    instead of sharing a stream between workers.
    """

    __slots__ = ("_state",)

    def __init__(self, seed: int) -> None:
        self._state = seed & MASK64

    @property
    def state(self) -> int:
        return to_signed(self._state)

    def set_state(self, state: int) -> None:
        self._state = state & MASK64

    def next_int(self) -> int:
        self._state = (self._state + GOLDEN_GAMMA) & MASK64
        z = self._state
        z = ((z ^ (z >> 30)) * MIX_A) & MASK64
        z = ((z ^ (z >> 27)) * MIX_B) & MASK64
        z ^= z >> 31
        return to_signed(z)

    def next_float(self) -> float:
        return to_float(self.next_int())

    def next_float_range(self, low: float, high: float) -> float:
        return low + (high - low) * self.next_float()

    def next_int_range(self, low: int, high: int) -> int:
        """Return an integer in ``[low, high]``.

        Precondition: ``high >= low``. A reversed range yields ``low``; one
        value is still drawn so the stream position stays predictable.
        """

        roll = self.next_float()
        if high <= low:
            return low
        span = high - low + 1
        return min(high, low + int(roll * span))

    def next_bool(self, probability: float = 0.5) -> bool:
        return self.next_float() < probability

    def weighted_index(self, weights: Sequence[float]) -> int:
        if not weights:
            raise ValueError("weighted_index() needs at least one weight")
        total = 0.0
        for weight in weights:
            total += max(0.0, weight)
        roll = self.next_float() * total
        cumulative = 0.0
        for index, weight in enumerate(weights):
            cumulative += max(0.0, weight)
            if roll < cumulative:
                return index
        # Floating point undershoot lands on the final bucket.
        return len(weights) - 1

    def weighted_choice(self, items: Sequence[T], weights: Sequence[float]) -> T:
        if len(items) != len(weights):
            raise ValueError("items and weights must have the same length")
        return items[self.weighted_index(weights)]

    def shuffle(self, items: MutableSequence[T]) -> None:
        for i in range(len(items) - 1, 0, -1):
            j = self.next_int_range(0, i)
            items[i], items[j] = items[j], items[i]

    def pick(self, items: Sequence[T]) -> T:
        if not items:
            raise ValueError("pick() from an empty sequence")
        return items[self.next_int_range(0, len(items) - 1)]

    def pick_n(self, items: Sequence[T], count: int) -> List[T]:
        pool = list(items)
        chosen: List[T] = []
        for _ in range(min(max(0, count), len(pool))):
            chosen.append(pool.pop(self.next_int_range(0, len(pool) - 1)))
        return chosen

    def point_in_circle(self, radius: float = 1.0) -> Vector2:
        """Uniform point inside a disc.

        Accepts about 78.5% of candidates (expected 1.27 draws). After
        ``MAX_REJECTION_ATTEMPTS`` rejections the centre is returned.
        """

        for _ in range(MAX_REJECTION_ATTEMPTS):
            x = self.next_float() * 2.0 - 1.0
            y = self.next_float() * 2.0 - 1.0
            if x * x + y * y <= 1.0:
                return Vector2(x * radius, y * radius)
        return Vector2(0.0, 0.0)

    def point_in_sphere(self, radius: float = 1.0) -> Vector3:
        """Uniform point inside a ball.

        Accepts about 52.4% of candidates (expected 1.91 draws). After
        ``MAX_REJECTION_ATTEMPTS`` rejections the centre is returned.
        """

        for _ in range(MAX_REJECTION_ATTEMPTS):
            x = self.next_float() * 2.0 - 1.0
            y = self.next_float() * 2.0 - 1.0
            z = self.next_float() * 2.0 - 1.0
            if x * x + y * y + z * z <= 1.0:
                return Vector3(x * radius, y * radius, z * radius)
        return Vector3(0.0, 0.0, 0.0)

    def direction_on_sphere(self) -> Vector3:
        z = self.next_float_range(-1.0, 1.0)
        theta = self.next_float_range(0.0, 2.0 * math.pi)
        ring = math.sqrt(max(0.0, 1.0 - z * z))
        return Vector3(ring * math.cos(theta), ring * math.sin(theta), z)

    def gaussian(self, mean: float = 0.0, std_dev: float = 1.0) -> float:
        u1 = max(self.next_float(), GAUSSIAN_EPSILON)
        u2 = self.next_float()
        magnitude = math.sqrt(-2.0 * math.log(u1))
        return mean + std_dev * magnitude * math.cos(2.0 * math.pi * u2)

    def fork(self, *salt: object) -> "Prng":
        """Independent child stream; does not advance this stream."""

        return Prng(hash_combine(self._state, salt))


__all__ = ["GAUSSIAN_EPSILON", "MAX_REJECTION_ATTEMPTS", "Prng"]
