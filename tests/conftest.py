"""Shared test fixtures."""

import math

import pytest

from src.wealth.datasets import mock_distribution
from src.wealth.models import Distribution, WealthRange


def make_range(
    lo: float,
    hi: float,
    count: int,
    amount: float,
    pct_addresses: float,
    pct_supply: float,
) -> WealthRange:
    return WealthRange(
        min=lo,
        max=hi,
        address_count=count,
        total_amount=amount,
        pct_addresses=pct_addresses,
        pct_supply=pct_supply,
    )


@pytest.fixture
def two_bucket() -> Distribution:
    """[0,1) 90 addresses / 10 BTC, [1,inf) 10 addresses / 90 BTC."""
    return Distribution(
        ranges=(
            make_range(0.0, 1.0, 90, 10.0, 90.0, 10.0),
            make_range(1.0, math.inf, 10, 90.0, 10.0, 90.0),
        ),
        total_addresses=100,
        total_supply=100.0,
        source="test",
    )


@pytest.fixture
def equal_shares() -> Distribution:
    """Every bucket has the same share of addresses and of supply."""
    return Distribution(
        ranges=tuple(
            make_range(float(i), float(i + 1), 25, 25.0, 25.0, 25.0) for i in range(4)
        ),
        total_addresses=100,
        total_supply=100.0,
        source="equal",
    )


@pytest.fixture
def all_in_top() -> Distribution:
    """1% of addresses hold the entire supply."""
    return Distribution(
        ranges=(
            make_range(0.0, 1.0, 990, 0.0, 99.0, 0.0),
            make_range(1.0, math.inf, 10, 1000.0, 1.0, 100.0),
        ),
        total_addresses=1000,
        total_supply=1000.0,
        source="concentrated",
    )


@pytest.fixture
def mock() -> Distribution:
    return mock_distribution()
