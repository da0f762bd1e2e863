"""Bucket lookup and intra-bucket interpolation.

Closed buckets interpolate linearly. The open top bucket has no upper bound,
so it is modelled on a log scale up to an effective ceiling of
``open_bucket_ceiling_multiplier * min`` (100x by default), and the forward
position is capped at ``open_bucket_max_position`` (0.99) so no holding ever
reports the very top of the bucket. The 100x span is a tunable heuristic,
not a property of real holder distributions.
"""

import math
from collections.abc import Iterable

from config.settings import settings
from src.wealth.models import Distribution, WealthRange, sort_by_floor
from src.wealth.validator import validate_amount


def merge_ranges(ranges: Iterable[WealthRange]) -> list[WealthRange]:
    """Merge overlapping buckets, summing their counts, amounts and shares."""
    ordered = sort_by_floor(ranges)
    if not ordered:
        return []

    merged: list[WealthRange] = []
    current = ordered[0]
    for bucket in ordered[1:]:
        if current.max > bucket.min:
            current = WealthRange(
                min=current.min,
                max=max(current.max, bucket.max),
                address_count=current.address_count + bucket.address_count,
                total_amount=current.total_amount + bucket.total_amount,
                pct_addresses=current.pct_addresses + bucket.pct_addresses,
                pct_supply=current.pct_supply + bucket.pct_supply,
            )
        else:
            merged.append(current)
            current = bucket
    merged.append(current)
    return merged


def effective_ceiling(bucket: WealthRange, *, ceiling_multiplier: float | None = None) -> float:
    """Upper bound used for interpolation: ``max``, or the assumed ceiling of an open bucket."""
    if not bucket.is_open:
        return bucket.max
    mult = settings.open_bucket_ceiling_multiplier if ceiling_multiplier is None else ceiling_multiplier
    return bucket.min * mult


def contains(bucket: WealthRange, amount: float) -> bool:
    if bucket.is_open:
        return amount >= bucket.min
    return bucket.min <= amount < bucket.max


def locate_range(amount: float, distribution: Distribution) -> WealthRange | None:
    """Find the bucket holding ``amount``, or None if no bucket covers it.

    Raises InvalidInputError for negative, non-finite or over-cap amounts.
    """
    validate_amount(amount)
    for bucket in distribution.sorted_ranges():
        if contains(bucket, amount):
            return bucket
    return None


def position_in_range(
    amount: float,
    bucket: WealthRange,
    *,
    ceiling_multiplier: float | None = None,
    max_position: float | None = None,
) -> float:
    """Fractional progress of ``amount`` through ``bucket``, in [0, 1).

    Closed: ``(amount - min) / (max - min)``.
    Open: ``(ln(amount) - ln(min)) / (ln(ceiling) - ln(min))`` capped at 0.99.
    """
    if not bucket.is_open:
        return (amount - bucket.min) / bucket.width

    cap = settings.open_bucket_max_position if max_position is None else max_position
    # log scale is undefined for a floor of 0, and amounts at the floor sit at 0
    if bucket.min <= 0 or amount <= bucket.min:
        return 0.0

    ceiling = effective_ceiling(bucket, ceiling_multiplier=ceiling_multiplier)
    log_min = math.log(bucket.min)
    position = (math.log(amount) - log_min) / (math.log(ceiling) - log_min)
    return min(position, cap)


def amount_at_position(
    position: float,
    bucket: WealthRange,
    *,
    ceiling_multiplier: float | None = None,
) -> float:
    """Inverse of ``position_in_range`` (without the forward cap)."""
    if not bucket.is_open:
        return bucket.min + position * bucket.width
    if bucket.min <= 0:
        return bucket.min

    ceiling = effective_ceiling(bucket, ceiling_multiplier=ceiling_multiplier)
    log_min = math.log(bucket.min)
    return math.exp(log_min + position * (math.log(ceiling) - log_min))
