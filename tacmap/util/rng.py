"""Deterministic random number generation with isolated streams.

Every generation run owns one RNGProvider built from the map seed. Each
generation layer pulls its own stream from the provider by domain name, so:

1. The same seed always produces the same map
2. A layer that consumes more or fewer values (or is skipped entirely)
   doesn't shift the sequences seen by other layers

There is no module-level provider. The provider travels on the generation
context and dies with it, so concurrent runs never share state.

Usage:
    provider = RNGProvider("NEXUS_ALPHA")
    rng = provider.get("map.hydrology")
    angle = rng.uniform(0.0, math.tau)

Streams are a string hash feeding a 32-bit linear congruential generator.
The sequence for a given seed string is stable across Python versions and
platforms (unlike random.Random, whose str seeding is tied to its hashing).

Domain naming convention (hierarchical):
    - "map.landmarks", "map.hydrology", "map.biomes"
"""

from __future__ import annotations

import math
from collections.abc import MutableSequence, Sequence
from typing import TypeVar

from tacmap.types import RandomSeed

T = TypeVar("T")

_LCG_MULTIPLIER = 1664525
_LCG_INCREMENT = 1013904223
_LCG_MODULUS = 2**32


def hash_seed(seed: RandomSeed) -> int:
    """Hash a seed string to a signed 32-bit integer.

    This is the classic ``h = h * 31 + c`` string hash with 32-bit
    wraparound, computed over UTF-16 code units.
    """
    encoded = str(seed).encode("utf-16-le")
    value = 0
    for i in range(0, len(encoded), 2):
        unit = encoded[i] | (encoded[i + 1] << 8)
        value = (value * 31 + unit) & 0xFFFFFFFF
    # Reinterpret as signed
    return value - 2**32 if value >= 2**31 else value


class SeededRandom:
    """Seeded pseudo-random source with a subset of the random.Random API.

    Method names follow random.Random so call sites read the same, but the
    underlying sequence is the LCG described in the module docstring.
    """

    def __init__(self, seed: RandomSeed) -> None:
        self.seed = str(seed)
        self._state = hash_seed(self.seed)

    def random(self) -> float:
        """Return random float in [0.0, 1.0)."""
        value = self._state * _LCG_MULTIPLIER + _LCG_INCREMENT
        # Remainder takes the sign of the dividend, so a negative hash keeps
        # producing negative states. Only the magnitude is used.
        remainder = abs(value) % _LCG_MODULUS
        self._state = -remainder if value < 0 else remainder
        return abs(self._state / _LCG_MODULUS)

    def uniform(self, a: float, b: float) -> float:
        """Return random float N such that a <= N < b."""
        return a + self.random() * (b - a)

    def randint(self, a: int, b: int) -> int:
        """Return random integer N such that a <= N <= b."""
        return math.floor(self.uniform(a, b + 1))

    def choice(self, seq: Sequence[T]) -> T:
        """Return random element from non-empty sequence."""
        if not seq:
            raise IndexError("Cannot choose from an empty sequence")
        return seq[self.randint(0, len(seq) - 1)]

    def weighted_choice(self, items: Sequence[T], weights: Sequence[float]) -> T:
        """Return the first item whose cumulative weight exceeds a draw.

        Falls back to the first item when every weight is zero.
        """
        if not items:
            raise IndexError("Cannot choose from an empty sequence")
        if len(items) != len(weights):
            raise ValueError("items and weights must be the same length")

        r = self.random() * sum(weights)
        for item, weight in zip(items, weights, strict=True):
            if r < weight:
                return item
            r -= weight
        return items[0]

    def shuffle(self, x: MutableSequence) -> None:
        """Shuffle sequence x in place (Fisher-Yates, last index first)."""
        for i in range(len(x) - 1, 0, -1):
            j = math.floor(self.random() * (i + 1))
            x[i], x[j] = x[j], x[i]


# Type alias for functions that accept a random source.
# Use this in type hints: `def foo(rng: RNG) -> int:`
type RNG = SeededRandom


class RNGProvider:
    """Provides isolated random streams for the layers of one generation run.

    Each domain gets its own SeededRandom derived deterministically from
    the master seed. Domains are identified by string names.

    Maps are reproducible for a given seed only within this package. A
    seed does not reproduce maps from generators that draw every value
    from one shared stream; that single-stream sequence is deliberately
    not supported, since per-domain streams are what let a layer be
    skipped without shifting the others.
    """

    def __init__(self, master_seed: RandomSeed) -> None:
        self.master_seed = str(master_seed)
        self._streams: dict[str, SeededRandom] = {}

    def get(self, domain: str) -> SeededRandom:
        """Get the random stream for the named domain.

        Repeated calls with the same domain return the same stream, which
        continues where it left off.

        Args:
            domain: Hierarchical name like "map.hydrology".

        Returns:
            The SeededRandom for that domain.
        """
        if domain not in self._streams:
            self._streams[domain] = SeededRandom(f"{self.master_seed}:{domain}")
        return self._streams[domain]
