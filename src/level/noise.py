"""
Noise Field - seeded 2D gradient (Perlin) noise used to bias cluster growth
"""

import math
import random
from typing import List, Optional


class NoiseField:
    """Coherent 2D noise over a shuffled 256-entry permutation table.

    The table is fixed at construction, so ``noise`` is a pure function of
    its arguments: two fields built from equally seeded RNGs agree everywhere.
    """

    # Eight gradient directions selected by the low hash bits
    _GRADIENTS = (
        (1, 1), (-1, 1), (1, -1), (-1, -1),
        (1, 0), (-1, 0), (0, 1), (0, -1),
    )

    def __init__(self, permutation: List[int]):
        if sorted(permutation) != list(range(256)):
            raise ValueError("permutation must be a shuffle of 0..255")
        # Duplicate for overflow
        self._perm = tuple(permutation) + tuple(permutation)

    @classmethod
    def seed(cls, rng: Optional[random.Random] = None) -> "NoiseField":
        """Build a field from a uniform shuffle of 0..255."""
        rng = rng or random.Random()
        permutation = list(range(256))
        rng.shuffle(permutation)
        return cls(permutation)

    @property
    def permutation(self) -> List[int]:
        return list(self._perm[:256])

    def noise(self, x: float, y: float) -> float:
        """Sample the field at (x, y). Result lies in [-1, 1]."""
        xi = math.floor(x)
        yi = math.floor(y)
        X = xi & 255
        Y = yi & 255
        xf = x - xi
        yf = y - yi

        u = self._fade(xf)
        v = self._fade(yf)

        p = self._perm
        a = p[X] + Y
        b = p[X + 1] + Y

        value = self._lerp(
            v,
            self._lerp(u, self._grad(p[a], xf, yf), self._grad(p[b], xf - 1, yf)),
            self._lerp(u, self._grad(p[a + 1], xf, yf - 1), self._grad(p[b + 1], xf - 1, yf - 1)),
        )
        return max(-1.0, min(1.0, value))

    @staticmethod
    def _fade(t: float) -> float:
        # 6t^5 - 15t^4 + 10t^3
        return t * t * t * (t * (t * 6 - 15) + 10)

    @staticmethod
    def _lerp(t: float, a: float, b: float) -> float:
        return a + t * (b - a)

    def _grad(self, hash_value: int, x: float, y: float) -> float:
        gx, gy = self._GRADIENTS[hash_value & 7]
        return gx * x + gy * y
