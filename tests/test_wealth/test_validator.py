"""Tests for distribution and amount validation."""

import math

import pytest

from src.wealth.exceptions import DistributionValidationError, InvalidInputError
from src.wealth.models import Distribution, WealthRange
from src.wealth.validator import validate_amount, validate_distribution


def _r(lo, hi, count=10, amount=10.0, pct_a=50.0, pct_s=50.0) -> WealthRange:
    return WealthRange(
        min=lo, max=hi, address_count=count, total_amount=amount,
        pct_addresses=pct_a, pct_supply=pct_s,
    )


def _dist(*ranges, total_addresses=20, total_supply=20.0) -> Distribution:
    return Distribution(ranges=ranges, total_addresses=total_addresses, total_supply=total_supply)


# ── Hard failures ──────────────────────────────────────────────────────


class TestHardFailures:
    def test_empty_ranges(self):
        with pytest.raises(DistributionValidationError, match="at least one range"):
            validate_distribution(_dist())

    def test_zero_total_addresses(self):
        with pytest.raises(DistributionValidationError, match="Total addresses"):
            validate_distribution(_dist(_r(0, 1), _r(1, math.inf), total_addresses=0))

    @pytest.mark.parametrize("supply", [0.0, -5.0, math.nan])
    def test_non_positive_supply(self, supply):
        with pytest.raises(DistributionValidationError, match="Total supply"):
            validate_distribution(_dist(_r(0, 1), _r(1, math.inf), total_supply=supply))

    def test_supply_over_cap(self):
        with pytest.raises(DistributionValidationError, match="exceeds cap"):
            validate_distribution(_dist(_r(0, 1), total_supply=21_000_001.0))

    def test_custom_cap(self):
        with pytest.raises(DistributionValidationError):
            validate_distribution(_dist(_r(0, 1), _r(1, math.inf)), supply_cap=10.0)

    def test_negative_minimum_reports_index(self):
        with pytest.raises(DistributionValidationError) as exc:
            validate_distribution(_dist(_r(0, 1), _r(-1, 2)))
        assert exc.value.index == 1

    def test_inverted_bounds(self):
        with pytest.raises(DistributionValidationError, match="invalid bounds") as exc:
            validate_distribution(_dist(_r(2, 1), _r(1, math.inf)))
        assert exc.value.index == 0

    def test_first_offending_bucket_wins(self):
        with pytest.raises(DistributionValidationError) as exc:
            validate_distribution(_dist(_r(0, 1), _r(1, 2, count=-1), _r(3, 2)))
        assert exc.value.index == 1

    def test_negative_amount(self):
        with pytest.raises(DistributionValidationError, match="total amount"):
            validate_distribution(_dist(_r(0, 1, amount=-1.0), _r(1, math.inf)))

    @pytest.mark.parametrize("field", ["pct_a", "pct_s"])
    def test_percentage_out_of_range(self, field):
        bad = _r(0, 1, **{field: 100.5})
        with pytest.raises(DistributionValidationError, match="percentage"):
            validate_distribution(_dist(bad, _r(1, math.inf)))


# ── Soft warnings ──────────────────────────────────────────────────────


class TestSoftWarnings:
    def test_clean_distribution_has_no_warnings(self, two_bucket):
        report = validate_distribution(two_bucket)
        assert report.clean
        assert report.warnings == []

    def test_mock_dataset_is_clean(self, mock):
        assert validate_distribution(mock).clean

    def test_address_total_mismatch_is_warning(self):
        report = validate_distribution(_dist(_r(0, 1), _r(1, math.inf), total_addresses=50))
        assert "address_total" in report.kinds
        assert not report.clean

    def test_supply_total_mismatch_is_warning(self):
        report = validate_distribution(_dist(_r(0, 1), _r(1, math.inf), total_supply=40.0))
        assert report.kinds == {"supply_total"}

    def test_small_mismatch_within_tolerance(self):
        # 20.1 vs 20 is within 1%
        report = validate_distribution(_dist(_r(0, 1), _r(1, math.inf), total_supply=20.1))
        assert report.clean

    def test_percentage_sums(self):
        report = validate_distribution(
            _dist(_r(0, 1, pct_a=40.0, pct_s=30.0), _r(1, math.inf, pct_a=40.0, pct_s=30.0))
        )
        assert {"address_pct", "supply_pct"} <= report.kinds

    def test_gap_between_ranges(self):
        report = validate_distribution(_dist(_r(0, 1), _r(2, math.inf)))
        assert report.kinds == {"gap"}

    def test_float_rounding_is_contiguous(self):
        report = validate_distribution(_dist(_r(0, 0.1 + 0.2), _r(0.3, math.inf)))
        assert report.clean

    def test_unsorted_input(self):
        report = validate_distribution(_dist(_r(1, math.inf), _r(0, 1)))
        assert report.kinds == {"order"}

    def test_open_bucket_not_on_top(self):
        report = validate_distribution(_dist(_r(0, math.inf), _r(1, 2)))
        assert "open_bucket" in report.kinds

    def test_open_bucket_from_zero(self):
        only = _r(0, math.inf, count=20, amount=20.0, pct_a=100.0, pct_s=100.0)
        report = validate_distribution(_dist(only))
        assert report.kinds == {"open_bucket_zero_floor"}

    def test_warnings_do_not_fail_validation(self):
        # a report is only returned once every hard check has passed
        report = validate_distribution(_dist(_r(0, 1), _r(2, math.inf)))
        assert not report.clean
        assert len(report.warnings) == 1


# ── validate_amount ────────────────────────────────────────────────────


@pytest.mark.parametrize("amount", [-1.0, -0.00000001, math.nan, math.inf, 21_000_000.01])
def test_invalid_amounts(amount):
    with pytest.raises(InvalidInputError):
        validate_amount(amount)


@pytest.mark.parametrize("amount", [0.0, 0.5, 21_000_000.0])
def test_valid_amounts(amount):
    validate_amount(amount)
