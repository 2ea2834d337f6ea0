"""Synthetic price series for exercising the aggregator."""

from __future__ import annotations

import math
import random


def _round_half_away(value: float) -> float:
    return math.copysign(math.floor(abs(value) + 0.5), value)


def generate_random_data(n: int, base: float, drift: float, volatility: float) -> list[float]:
    """Random walk of ``n`` prices rounded to two decimals.

    Each step adds a normally distributed delta with mean ``drift`` and
    standard deviation ``volatility`` to the running price, starting at
    ``base``. Uses the module-level generator of :mod:`random`.
    """
    if n < 0:
        raise ValueError("n must not be negative")
    if volatility < 0 or not math.isfinite(volatility):
        raise ValueError("volatility must be a finite, non-negative number")

    prices: list[float] = []
    price = float(base)
    for _ in range(n):
        price += random.gauss(drift, volatility)
        prices.append(_round_half_away(price * 100.0) / 100.0)
    return prices