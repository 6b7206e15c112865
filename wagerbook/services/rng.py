"""Randomness sources for odds sampling and settlement.

Anything with ``randint(a, b)`` works as a source, so a plain
``random.Random`` can be passed wherever a ``RandomSource`` is expected.
"""

import random
from collections.abc import Iterable
from typing import Protocol

import structlog

from wagerbook.config import get_settings

logger = structlog.get_logger(__name__)


class RandomSource(Protocol):
    """Uniform integer generator."""

    def randint(self, a: int, b: int) -> int:
        """Return an integer N with a <= N <= b."""
        ...


def make_rng(seed: int | None = None) -> random.Random:
    """Create a generator, seeded when ``seed`` is given."""
    return random.Random(seed)


_DEFAULT_RNG: random.Random | None = None


def default_rng() -> random.Random:
    """Process-wide generator, seeded from settings.random_seed if set."""
    global _DEFAULT_RNG
    if _DEFAULT_RNG is None:
        seed = get_settings().random_seed
        _DEFAULT_RNG = make_rng(seed)
        logger.debug("default_rng_created", seeded=seed is not None)
    return _DEFAULT_RNG


class ScriptedRandom:
    """
    Replays a fixed sequence of draws.

    Used to reproduce a known settlement or odds trace exactly. Each
    ``randint`` call consumes the next scripted value.
    """

    def __init__(self, values: Iterable[int]):
        self._values = list(values)
        self._position = 0

    @property
    def remaining(self) -> int:
        return len(self._values) - self._position

    def randint(self, a: int, b: int) -> int:
        if self._position >= len(self._values):
            raise ValueError("ScriptedRandom exhausted")
        value = self._values[self._position]
        if not a <= value <= b:
            raise ValueError(f"Scripted value {value} outside [{a}, {b}]")
        self._position += 1
        return value
