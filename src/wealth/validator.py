"""Distribution validation: hard structural checks + soft consistency checks.

Hard failures raise DistributionValidationError and stop the calculation.
Soft findings (totals off by more than the tolerance, gaps between buckets)
are returned as warnings and logged. Real-world histograms are statistical
approximations, so they must not block a calculation.
"""

import math
from dataclasses import dataclass, field

from loguru import logger

from config.settings import settings
from src.wealth.exceptions import DistributionValidationError, InvalidInputError
from src.wealth.models import Distribution, WealthRange

# Bucket bounds that differ by less than this are treated as contiguous
_CONTINUITY_REL_TOL = 1e-9
_CONTINUITY_ABS_TOL = 1e-12


@dataclass(frozen=True)
class ValidationWarning:
    # "address_total", "supply_total", "address_pct", "supply_pct",
    # "order", "gap", "open_bucket", "open_bucket_zero_floor"
    kind: str
    message: str


@dataclass
class ValidationReport:
    """Outcome of a successful validation, with any soft findings."""

    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def clean(self) -> bool:
        """True when validation passed without any soft findings."""
        return not self.warnings

    @property
    def kinds(self) -> set[str]:
        return {w.kind for w in self.warnings}


def validate_amount(amount: float, *, supply_cap: float | None = None) -> None:
    """Reject amounts no holder could have: negative, NaN/inf, above the cap."""
    cap = settings.supply_cap if supply_cap is None else supply_cap
    if math.isnan(amount) or math.isinf(amount):
        raise InvalidInputError(f"Invalid amount: {amount}")
    if amount < 0:
        raise InvalidInputError(f"Amount cannot be negative: {amount}")
    if amount > cap:
        raise InvalidInputError(f"Amount {amount} exceeds total supply cap {cap:,.0f}")


def validate_distribution(
    distribution: Distribution,
    *,
    supply_cap: float | None = None,
    tolerance: float | None = None,
) -> ValidationReport:
    """Validate a distribution snapshot.

    Raises DistributionValidationError on the first hard failure.
    Returns a report carrying the soft warnings otherwise.
    """
    cap = settings.supply_cap if supply_cap is None else supply_cap
    tol = settings.validation_tolerance if tolerance is None else tolerance

    if not distribution.ranges:
        raise DistributionValidationError("Distribution must have at least one range")
    if distribution.total_addresses <= 0:
        raise DistributionValidationError(
            f"Total addresses must be positive, got {distribution.total_addresses}"
        )
    if not math.isfinite(distribution.total_supply) or distribution.total_supply <= 0:
        raise DistributionValidationError(
            f"Total supply must be positive, got {distribution.total_supply}"
        )
    if distribution.total_supply > cap:
        raise DistributionValidationError(
            f"Total supply {distribution.total_supply:,.2f} exceeds cap {cap:,.0f}"
        )

    for i, bucket in enumerate(distribution.ranges):
        _check_bucket(i, bucket)

    report = ValidationReport()
    report.warnings.extend(_check_totals(distribution, tol))
    report.warnings.extend(_check_continuity(distribution))

    for w in report.warnings:
        logger.warning(f"[VALIDATE] {w.message}")
    logger.debug(
        f"[VALIDATE] source={distribution.source or '?'} ranges={len(distribution.ranges)} "
        f"warnings={len(report.warnings)}"
    )
    return report


def _check_bucket(index: int, bucket: WealthRange) -> None:
    if not math.isfinite(bucket.min) or bucket.min < 0:
        raise DistributionValidationError(
            f"Range {index} has invalid minimum {bucket.min}", index=index
        )
    if math.isnan(bucket.max) or (not bucket.is_open and bucket.max <= bucket.min):
        raise DistributionValidationError(
            f"Range {index} has invalid bounds [{bucket.min}, {bucket.max})", index=index
        )
    if bucket.address_count < 0:
        raise DistributionValidationError(
            f"Range {index} has negative address count", index=index
        )
    if not math.isfinite(bucket.total_amount) or bucket.total_amount < 0:
        raise DistributionValidationError(
            f"Range {index} has invalid total amount {bucket.total_amount}", index=index
        )
    if not 0 <= bucket.pct_addresses <= 100:
        raise DistributionValidationError(
            f"Range {index} has invalid address percentage {bucket.pct_addresses}", index=index
        )
    if not 0 <= bucket.pct_supply <= 100:
        raise DistributionValidationError(
            f"Range {index} has invalid supply percentage {bucket.pct_supply}", index=index
        )


def _check_totals(distribution: Distribution, tol: float) -> list[ValidationWarning]:
    warnings: list[ValidationWarning] = []

    address_sum = sum(r.address_count for r in distribution.ranges)
    amount_sum = sum(r.total_amount for r in distribution.ranges)
    address_pct_sum = sum(r.pct_addresses for r in distribution.ranges)
    supply_pct_sum = sum(r.pct_supply for r in distribution.ranges)

    if abs(address_sum - distribution.total_addresses) > distribution.total_addresses * tol:
        warnings.append(ValidationWarning(
            "address_total",
            f"Address count mismatch: {address_sum} vs {distribution.total_addresses}",
        ))
    if abs(amount_sum - distribution.total_supply) > distribution.total_supply * tol:
        warnings.append(ValidationWarning(
            "supply_total",
            f"Amount mismatch: {amount_sum:,.2f} vs {distribution.total_supply:,.2f}",
        ))
    if abs(address_pct_sum - 100) > 100 * tol:
        warnings.append(ValidationWarning(
            "address_pct", f"Address percentage sum: {address_pct_sum:.4f}%",
        ))
    if abs(supply_pct_sum - 100) > 100 * tol:
        warnings.append(ValidationWarning(
            "supply_pct", f"Supply percentage sum: {supply_pct_sum:.4f}%",
        ))
    return warnings


def _check_continuity(distribution: Distribution) -> list[ValidationWarning]:
    warnings: list[ValidationWarning] = []
    ordered = distribution.sorted_ranges()

    if list(distribution.ranges) != ordered:
        warnings.append(ValidationWarning("order", "Ranges are not sorted ascending by minimum"))

    for current, nxt in zip(ordered, ordered[1:]):
        if current.is_open:
            warnings.append(ValidationWarning(
                "open_bucket",
                f"Open range starting at {current.min} is not the topmost range",
            ))
            continue
        if not math.isclose(
            current.max, nxt.min, rel_tol=_CONTINUITY_REL_TOL, abs_tol=_CONTINUITY_ABS_TOL
        ):
            warnings.append(ValidationWarning(
                "gap",
                f"Range discontinuity detected between {current.max} and {nxt.min}",
            ))

    if any(r.is_open and r.min <= 0 and r.address_count > 0 for r in ordered):
        warnings.append(ValidationWarning(
            "open_bucket_zero_floor",
            "Open range starts at 0, holdings inside it cannot be interpolated "
            "and all rank at its floor",
        ))
    return warnings
