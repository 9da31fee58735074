from __future__ import annotations

import math
from typing import Callable


class CostScaling:
    """Determines how a producer's unit cost grows with the number owned."""

    def __init__(self, fn: Callable[[float, int], float]) -> None:
        self._fn = fn

    def unit_cost(self, base_cost: float, index: int, factor: float = 1.0) -> float:
        """Cost of the unit at zero-based *index*, discounted by *factor*."""
        try:
            raw = self._fn(base_cost, index) * factor
        except OverflowError:
            return math.inf
        if not math.isfinite(raw):
            return math.inf
        return float(math.ceil(raw))

    def total_cost(
        self, base_cost: float, owned: int, quantity: int, factor: float = 1.0
    ) -> float:
        """Sum of unit costs for the next *quantity* units after *owned*."""
        return sum(
            self.unit_cost(base_cost, owned + n, factor) for n in range(quantity)
        )

    def max_affordable(
        self,
        base_cost: float,
        owned: int,
        budget: float,
        factor: float = 1.0,
        limit: int = 10_000,
    ) -> int:
        """Greedy forward scan of how many units *budget* covers.

        Never returns less than 1, so a caller asking for "max" always has a
        concrete quantity to price; affordability is checked at purchase.
        """
        spent = 0.0
        count = 0
        while count < limit:
            nxt = self.unit_cost(base_cost, owned + count, factor)
            if spent + nxt > budget:
                break
            spent += nxt
            count += 1
        return max(1, count)

    @classmethod
    def exponential(cls, growth_rate: float = 1.15) -> CostScaling:
        """Cost = base * growth_rate^index."""
        gr = growth_rate  # capture

        def _compute(base: float, index: int) -> float:
            return base * gr ** index

        return cls(_compute)
