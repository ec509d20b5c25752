from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from .models import Rating

STAR_VALUES = tuple(range(Rating.MIN_RATING, Rating.MAX_RATING + 1))


def empty_distribution() -> dict[int, int]:
    return {star: 0 for star in STAR_VALUES}


@dataclass(frozen=True)
class RatingAggregate:
    average: float = 0
    distribution: dict[int, int] = field(default_factory=empty_distribution)
    total: int = 0

    def as_meta(self) -> dict:
        return {
            "total": self.total,
            "average": self.average,
            "distribution": dict(self.distribution),
        }


def _rounded_mean(total_stars: int, count: int) -> float:
    mean = Decimal(total_stars) / Decimal(count)
    return float(mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def aggregate_ratings(values: Iterable[int]) -> RatingAggregate:
    """
    Summarise star values into a one-decimal average and a 1-5 histogram.

    Order-insensitive. Values outside 1-5 are counted in the average and total
    but have no bucket (the store never holds them).
    """
    distribution = empty_distribution()
    total_stars = 0
    count = 0
    for value in values:
        total_stars += value
        count += 1
        if value in distribution:
            distribution[value] += 1

    if count == 0:
        return RatingAggregate()
    return RatingAggregate(
        average=_rounded_mean(total_stars, count),
        distribution=distribution,
        total=count,
    )
