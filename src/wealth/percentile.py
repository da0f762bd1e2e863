"""Percentile, rank and tier of a single holding within a distribution."""

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from loguru import logger

from config.settings import settings
from src.wealth.exceptions import RangeNotFoundError
from src.wealth.inequality import mean_amount, median_amount
from src.wealth.models import Distribution, WealthCategory
from src.wealth.range_locator import locate_range, position_in_range
from src.wealth.validator import validate_amount, validate_distribution


@dataclass(frozen=True)
class PercentileResult:
    """Where a holding ranks. Built per query, never updated."""

    amount: float
    percentile: float  # 0-100, share of addresses holding strictly less
    rank: int  # 1 = wealthiest slot
    addresses_below: float  # interpolated, so fractional
    addresses_above: float
    category: WealthCategory
    comparison_metrics: Mapping[str, float] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def top_percent(self) -> float:
        return 100 - self.percentile


def calculate_percentile(
    amount: float,
    distribution: Distribution,
    *,
    price_usd: float | None = None,
) -> PercentileResult:
    """Rank ``amount`` against ``distribution``.

    Raises InvalidInputError for a bad amount, DistributionValidationError
    for a broken distribution, RangeNotFoundError when no bucket covers
    the amount (gaps, or above the last closed bucket).
    """
    validate_amount(amount)
    validate_distribution(distribution)

    bucket = locate_range(amount, distribution)
    if bucket is None:
        raise RangeNotFoundError(
            f"Amount {amount} does not fit in any of {len(distribution.ranges)} ranges"
        )

    below_bucket = sum(
        r.address_count
        for r in distribution.ranges
        if not r.is_open and r.max <= bucket.min
    )
    position = position_in_range(amount, bucket)
    total = distribution.total_addresses
    # bucket counts may overshoot the declared total (only a soft warning)
    addresses_below = min(max(below_bucket + bucket.address_count * position, 0.0), float(total))

    percentile = addresses_below / total * 100
    # round first so float noise (55.0000000001) does not push the rank down a slot
    rank = max(1, math.ceil(round(total - addresses_below, 9)))

    result = PercentileResult(
        amount=amount,
        percentile=percentile,
        rank=rank,
        addresses_below=addresses_below,
        addresses_above=total - addresses_below,
        category=WealthCategory.from_amount(amount),
        comparison_metrics=MappingProxyType(
            comparison_metrics(amount, distribution, price_usd=price_usd)
        ),
    )
    logger.debug(
        f"[PERCENTILE] amount={amount} bucket=[{bucket.min}, {bucket.max}) "
        f"position={position:.4f} percentile={percentile:.4f} rank={rank}"
    )
    return result


def comparison_metrics(
    amount: float,
    distribution: Distribution,
    *,
    price_usd: float | None = None,
) -> dict[str, float]:
    """Informational comparisons against the distribution's typical holder."""
    median = median_amount(distribution)
    mean = mean_amount(distribution)
    price = settings.btc_price_usd if price_usd is None else price_usd

    metrics: dict[str, float] = {
        "vs_median_ratio": amount / median if median > 0 else 0.0,
        "vs_mean_ratio": amount / mean if mean > 0 else 0.0,
        "supply_share_percent": amount / distribution.total_supply * 100,
        "equivalent_median_addresses": amount / median if median > 0 else 0.0,
    }
    for rate in settings.accumulation_daily_rates:
        if rate <= 0:
            continue
        metrics[f"years_to_accumulate_at_{rate:g}_btc_per_day"] = amount / rate / 365
    metrics["estimated_usd_value"] = amount * price
    return metrics
