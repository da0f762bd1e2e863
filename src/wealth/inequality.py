"""Distribution-wide inequality statistics.

Mean and median use bucket midpoints (the open bucket's midpoint sits halfway
to its effective ceiling). Percentile lookups interpolate inside buckets while
these two do not. Both approximations are kept as-is so results stay
comparable with earlier reports.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from loguru import logger

from config.settings import settings
from src.wealth.exceptions import InvalidInputError
from src.wealth.models import Distribution, WealthRange
from src.wealth.range_locator import effective_ceiling
from src.wealth.validator import validate_distribution


@dataclass(frozen=True)
class DistributionStatistics:
    """Summary statistics of a validated distribution."""

    mean: float
    median: float
    gini: float
    hhi: float
    concentration_ratios: Mapping[float, float]  # top K% of addresses -> % of supply held
    total_addresses: int
    total_supply: float
    range_count: int

    def top_percent_wealth(self, top_percent: float) -> float | None:
        return self.concentration_ratios.get(top_percent)


def bucket_midpoint(bucket: WealthRange) -> float:
    return (bucket.min + effective_ceiling(bucket)) / 2


def mean_amount(distribution: Distribution) -> float:
    """Address-weighted mean of bucket midpoints."""
    weighted = 0.0
    addresses = 0
    for bucket in distribution.ranges:
        weighted += bucket_midpoint(bucket) * bucket.address_count
        addresses += bucket.address_count
    if addresses == 0:
        return 0.0
    return weighted / addresses


def median_amount(distribution: Distribution) -> float:
    """Midpoint of the bucket where cumulative address share first reaches 50%."""
    ordered = distribution.sorted_ranges()
    cumulative = 0.0
    for bucket in ordered:
        cumulative += bucket.pct_addresses
        if cumulative >= 50:
            return bucket_midpoint(bucket)
    return bucket_midpoint(ordered[-1])


def gini_coefficient(distribution: Distribution) -> float:
    """Gini via trapezoidal integration of the Lorenz curve, clamped to [0, 1]."""
    area = 0.0
    cumulative_wealth = 0.0
    for bucket in distribution.sorted_ranges():
        address_share = bucket.pct_addresses / 100
        wealth_share = bucket.pct_supply / 100
        area += address_share * (cumulative_wealth + wealth_share / 2)
        cumulative_wealth += wealth_share
    return max(0.0, min(1.0, 1 - 2 * area))


def concentration_ratio(distribution: Distribution, top_percent: float) -> float:
    """Percent of supply held by the wealthiest ``top_percent`` % of addresses.

    The bucket that straddles the cut-off contributes a linear share of its supply.
    """
    if not 0 <= top_percent <= 100:
        raise InvalidInputError(f"Concentration level must be within [0, 100], got {top_percent}")

    cumulative_addresses = 0.0
    cumulative_supply = 0.0
    for bucket in sorted(distribution.ranges, key=lambda r: r.min, reverse=True):
        new_cumulative = cumulative_addresses + bucket.pct_addresses
        if new_cumulative <= top_percent:
            cumulative_supply += bucket.pct_supply
            cumulative_addresses = new_cumulative
            continue
        remaining = top_percent - cumulative_addresses
        cumulative_supply += bucket.pct_supply * (remaining / bucket.pct_addresses)
        break
    return cumulative_supply


def herfindahl_index(distribution: Distribution) -> float:
    """HHI over supply shares, on the 0-10000 scale."""
    return sum((r.pct_supply / 100) ** 2 for r in distribution.ranges) * 10000


def lorenz_curve(distribution: Distribution) -> list[tuple[float, float, float]]:
    """Cumulative ``(upper_bound, address_pct, supply_pct)`` points, ascending."""
    points: list[tuple[float, float, float]] = []
    cum_addresses = 0.0
    cum_supply = 0.0
    for bucket in distribution.sorted_ranges():
        cum_addresses += bucket.pct_addresses
        cum_supply += bucket.pct_supply
        points.append((bucket.max, cum_addresses, cum_supply))
    return points


def compute_statistics(
    distribution: Distribution,
    *,
    levels: list[float] | None = None,
) -> DistributionStatistics:
    """Validate ``distribution`` and compute its summary statistics."""
    validate_distribution(distribution)
    return summarize(distribution, levels=levels)


def summarize(
    distribution: Distribution,
    *,
    levels: list[float] | None = None,
) -> DistributionStatistics:
    """Same as ``compute_statistics`` for an already validated distribution."""
    levels = settings.concentration_levels if levels is None else levels
    stats = DistributionStatistics(
        mean=mean_amount(distribution),
        median=median_amount(distribution),
        gini=gini_coefficient(distribution),
        hhi=herfindahl_index(distribution),
        concentration_ratios=MappingProxyType(
            {k: concentration_ratio(distribution, k) for k in levels}
        ),
        total_addresses=distribution.total_addresses,
        total_supply=distribution.total_supply,
        range_count=len(distribution.ranges),
    )
    logger.debug(
        f"[STATS] mean={stats.mean:.6f} median={stats.median:.6f} "
        f"gini={stats.gini:.4f} hhi={stats.hhi:.1f}"
    )
    return stats
