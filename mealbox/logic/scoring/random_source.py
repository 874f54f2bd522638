"""Injectable random sources for scoring jitter and swap picks."""
import random
from typing import Iterable, Optional, Protocol


class RandomSource(Protocol):
    def next_float(self) -> float:
        """Return a float in [0, 1)."""
        ...


class SystemRandom:
    """Default source backed by the ``random`` module (optionally seeded)."""

    def __init__(self, seed: Optional[int] = None):
        self._rng = random.Random(seed)

    def next_float(self) -> float:
        return self._rng.random()


class FixedRandom:
    """Deterministic source: cycles through the given values (a single value repeats forever)."""

    def __init__(self, values: Iterable[float] = (0.0,)):
        self._values = list(values) or [0.0]
        self._pos = 0

    def next_float(self) -> float:
        value = self._values[self._pos % len(self._values)]
        self._pos += 1
        return value


DEFAULT_RANDOM = SystemRandom()

__all__ = ["RandomSource", "SystemRandom", "FixedRandom", "DEFAULT_RANDOM"]
