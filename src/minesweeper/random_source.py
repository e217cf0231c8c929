"""
Random sources for mine placement.

The engine never calls the ``random`` module directly; it asks a
``RandomSource`` to shuffle candidate positions. Swapping the source gives
reproducible layouts for tests and seeded environments.
"""
import random
from abc import ABC, abstractmethod
from typing import Any, List, Optional

import numpy as np


# ============================================================================
# Base Interface
# ============================================================================

class RandomSource(ABC):
    """Abstract source of uniform random integers."""

    @abstractmethod
    def randbelow(self, n: int) -> int:
        """
        Return a uniform random integer in ``[0, n)``.

        Args:
            n: Exclusive upper bound, always positive.
        """

    def shuffle(self, items: List[Any]) -> None:
        """Shuffle ``items`` in place (Fisher-Yates)."""
        for i in range(len(items) - 1, 0, -1):
            j = self.randbelow(i + 1)
            items[i], items[j] = items[j], items[i]


# ============================================================================
# Implementations
# ============================================================================

class SystemRandomSource(RandomSource):
    """Default source backed by the operating system's entropy pool."""

    def __init__(self) -> None:
        self._random = random.SystemRandom()

    def randbelow(self, n: int) -> int:
        return self._random.randrange(n)


class SeededRandomSource(RandomSource):
    """Reproducible source backed by ``random.Random``."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self._random = random.Random(seed)

    def randbelow(self, n: int) -> int:
        return self._random.randrange(n)


class NumpyRandomSource(RandomSource):
    """
    Source backed by a numpy ``Generator``.

    Lets gymnasium environments drive mine layouts from ``self.np_random``
    so ``reset(seed=...)`` reproduces boards.
    """

    def __init__(self, generator: Optional[np.random.Generator] = None) -> None:
        self.generator = generator or np.random.default_rng()

    def randbelow(self, n: int) -> int:
        return int(self.generator.integers(n))
