"""Inverse lookup: the minimum holding needed to reach a percentile.

Uses the same interpolation as the forward percentile path (linear in closed
buckets, log scale up to the effective ceiling in the open one), so
``calculate_percentile(amount_at_percentile(p)).percentile`` comes back to ``p``.
"""

import math
from collections.abc import Iterable

from loguru import logger

from config.settings import settings
from src.wealth.exceptions import InvalidInputError
from src.wealth.models import Distribution
from src.wealth.range_locator import amount_at_position, effective_ceiling
from src.wealth.validator import validate_distribution


def _check_percentile(percentile: float) -> None:
    if not math.isfinite(percentile) or not 0 <= percentile <= 100:
        raise InvalidInputError(f"Percentile must be within [0, 100], got {percentile}")


def solve_amount(percentile: float, distribution: Distribution) -> float:
    """Amount at ``percentile`` for an already validated distribution."""
    ordered = distribution.sorted_ranges()
    cumulative = 0.0
    for bucket in ordered:
        if bucket.pct_addresses <= 0:
            continue
        new_cumulative = cumulative + bucket.pct_addresses
        if new_cumulative >= percentile:
            position = (percentile - cumulative) / bucket.pct_addresses
            return amount_at_position(position, bucket)
        cumulative = new_cumulative

    # percentages summed to less than the target
    return max(effective_ceiling(r) for r in ordered)


def amount_at_percentile(percentile: float, distribution: Distribution) -> float:
    _check_percentile(percentile)
    validate_distribution(distribution)
    return solve_amount(percentile, distribution)


def thresholds(
    distribution: Distribution,
    percentiles: Iterable[float] | None = None,
) -> list[tuple[float, float]]:
    """``(percentile, amount)`` pairs, validating the distribution once."""
    targets = list(settings.threshold_percentiles if percentiles is None else percentiles)
    for p in targets:
        _check_percentile(p)
    validate_distribution(distribution)

    result = [(p, solve_amount(p, distribution)) for p in targets]
    logger.debug(f"[THRESHOLDS] {len(result)} percentiles solved")
    return result
