"""Tests for the amount-at-percentile inverse lookup."""

import math

import pytest

from src.wealth.exceptions import DistributionValidationError, InvalidInputError
from src.wealth.models import Distribution, WealthRange
from src.wealth.percentile import calculate_percentile
from src.wealth.thresholds import amount_at_percentile, thresholds

CANONICAL = [1.0, 5.0, 10.0, 25.0, 50.0, 75.0, 90.0, 95.0, 99.0, 99.9]


def test_inverse_of_linear_case(two_bucket):
    assert amount_at_percentile(45, two_bucket) == pytest.approx(0.5)


def test_open_bucket_log_inverse(two_bucket):
    # 95th: halfway through the open bucket on a log scale -> 10x the floor
    assert amount_at_percentile(95, two_bucket) == pytest.approx(10.0)


def test_zero_percentile_is_lowest_floor(two_bucket):
    assert amount_at_percentile(0, two_bucket) == 0.0


def test_hundredth_percentile_is_effective_ceiling(two_bucket):
    assert amount_at_percentile(100, two_bucket) == pytest.approx(100.0)


def test_percentages_short_of_target_return_max_bound():
    short = Distribution.model_validate({
        "ranges": [
            {"min": 0, "max": 1, "addressCount": 45, "totalAmount": 10,
             "pctAddresses": 45, "pctSupply": 10},
            {"min": 1, "max": 5, "addressCount": 45, "totalAmount": 90,
             "pctAddresses": 45, "pctSupply": 90},
        ],
        "totalAddresses": 90,
        "totalSupply": 100,
    })
    assert amount_at_percentile(95, short) == 5.0


@pytest.mark.parametrize("p", CANONICAL)
def test_round_trip_mock(mock, p):
    amount = amount_at_percentile(p, mock)
    assert calculate_percentile(amount, mock).percentile == pytest.approx(p, abs=0.5)


@pytest.mark.parametrize("p", [1, 30, 45, 89.9, 90.5, 95, 99.9])
def test_round_trip_two_bucket(two_bucket, p):
    amount = amount_at_percentile(p, two_bucket)
    assert calculate_percentile(amount, two_bucket).percentile == pytest.approx(p, abs=0.5)


def test_thresholds_canonical_set(mock):
    result = thresholds(mock)
    assert [p for p, _ in result] == CANONICAL
    amounts = [a for _, a in result]
    assert amounts == sorted(amounts)
    assert all(math.isfinite(a) for a in amounts)


def test_thresholds_custom_percentiles(two_bucket):
    assert thresholds(two_bucket, [45, 95]) == [
        (45, pytest.approx(0.5)),
        (95, pytest.approx(10.0)),
    ]


@pytest.mark.parametrize("p", [-0.1, 100.1, math.nan])
def test_invalid_percentile(two_bucket, p):
    with pytest.raises(InvalidInputError):
        amount_at_percentile(p, two_bucket)
    with pytest.raises(InvalidInputError):
        thresholds(two_bucket, [50, p])


def test_invalid_distribution():
    with pytest.raises(DistributionValidationError):
        amount_at_percentile(50, Distribution(ranges=(), total_addresses=1, total_supply=1.0))


def test_open_bucket_from_zero_collapses_to_floor():
    """With no positive floor the open tail has no scale, so every query lands on 0."""
    whole = Distribution(
        ranges=(
            WealthRange(
                min=0.0, max=math.inf, address_count=100, total_amount=100.0,
                pct_addresses=100.0, pct_supply=100.0,
            ),
        ),
        total_addresses=100,
        total_supply=100.0,
    )
    assert amount_at_percentile(50, whole) == 0.0
    assert calculate_percentile(0.0, whole).percentile == 0.0
    assert calculate_percentile(5.0, whole).percentile == 0.0
