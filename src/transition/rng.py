"""
Seeded shock generator for Monte Carlo paths.

A small linear congruential generator is used instead of numpy's bit
generators so that a seed maps to one fixed shock sequence that can be
compared against reference runs value by value.
"""

from __future__ import annotations

import math
from typing import List, Optional, Tuple

from .schema import ShockParameters

ShockPair = Tuple[float, float]  # (price_shock, intensity_shock)


class PathGenerator:
    """
    Deterministic uniform/normal stream owning its own state.

    Each simulation gets its own instance; nothing is shared between runs.

    Example:
        >>> gen = PathGenerator(seed=42)
        >>> price_shock, intensity_shock = gen.shock_pair()
    """

    MULTIPLIER = 9301
    INCREMENT = 49297
    MODULUS = 233280

    def __init__(self, seed: int = 42, params: Optional[ShockParameters] = None):
        self.seed = int(seed)
        self.params = params or ShockParameters()
        self._state = self.seed

    def uniform(self) -> float:
        """Next value in [0, 1)."""
        self._state = (self._state * self.MULTIPLIER + self.INCREMENT) % self.MODULUS
        return self._state / self.MODULUS

    def normal_pair(self) -> Tuple[float, float]:
        """Two independent standard normals via the Box-Muller transform."""
        u1 = self.uniform()
        u2 = self.uniform()
        # u1 hits 0 once per period
        u1 = max(u1, 1.0 / self.MODULUS)
        radius = math.sqrt(-2.0 * math.log(u1))
        angle = 2.0 * math.pi * u2
        return radius * math.cos(angle), radius * math.sin(angle)

    def shock_pair(self) -> ShockPair:
        """Correlated (price, intensity) shocks scaled by their volatilities."""
        p = self.params
        z0, z1 = self.normal_pair()
        price_shock = z0 * p.price_vol
        intensity_shock = (
            p.correlation * z0 + math.sqrt(1.0 - p.correlation * p.correlation) * z1
        ) * p.intensity_vol
        return price_shock, intensity_shock

    def shock_pairs(self, n: int) -> List[ShockPair]:
        return [self.shock_pair() for _ in range(n)]

    def reset(self) -> None:
        self._state = self.seed
