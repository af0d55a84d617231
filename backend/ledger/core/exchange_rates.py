"""Exchange Rate Table — country → factor lookup that never fails to produce a factor.

Invariants:
    - rate() returns the configured factor when the country is present (even 0.0), else 1.0
    - Table is immutable after construction (backed by MappingProxyType)
    - convert_amount rounds to cents with ties toward +∞ on the float product:
      -0.005 → 0.0, 0.125 → 0.13, 1.005 → 1.0 (1.005 is just below the tie as a float)

Design Decisions:
    - floor(x * 100 + 0.5) / 100 rather than round() or Decimal quantize: existing
      clients compute amountConverted the same way, so both sides agree to the cent
    - Fallback table lives here so the loader and tests share one copy
"""

import math
from collections.abc import Mapping
from types import MappingProxyType

from ledger.core.domain_types import RateFactor

DEFAULT_FACTOR = RateFactor(1.0)
CENTS_PER_UNIT = 100

FALLBACK_RATES: Mapping[str, float] = MappingProxyType({
    "Argentina": 0.0028,
    "Brasil": 0.19,
    "Chile": 0.0012,
    "Colombia": 0.00024,
    "México": 0.056,
    "Perú": 0.27,
    "Uruguay": 0.026,
    "Ecuador": 1.0,
    "España": 1.1,
    "Estados Unidos": 1.0,
})


class ExchangeRateTable:
    """Read-only country → factor mapping with a 1.0 default."""

    def __init__(self, rates: Mapping[str, float], source: str = "file"):
        self._rates = MappingProxyType(
            {country: float(factor) for country, factor in rates.items()},
        )
        self.source = source

    @classmethod
    def fallback(cls) -> "ExchangeRateTable":
        return cls(FALLBACK_RATES, source="fallback")

    def rate(self, country: str) -> RateFactor:
        """Factor for `country`, or 1.0 when the country is unknown."""
        if country in self._rates:
            return RateFactor(self._rates[country])
        return DEFAULT_FACTOR

    def __contains__(self, country: object) -> bool:
        return country in self._rates

    def __len__(self) -> int:
        return len(self._rates)

    def as_dict(self) -> dict[str, float]:
        return dict(self._rates)


def convert_amount(amount: float, factor: float) -> float:
    """amount * factor, rounded to cents with halves going up."""
    return math.floor(amount * factor * CENTS_PER_UNIT + 0.5) / CENTS_PER_UNIT
