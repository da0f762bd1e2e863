from src.wealth.exceptions import (
    DistributionValidationError,
    InvalidInputError,
    RangeNotFoundError,
    WealthEngineError,
)
from src.wealth.inequality import DistributionStatistics, compute_statistics
from src.wealth.models import Distribution, WealthCategory, WealthRange
from src.wealth.percentile import PercentileResult, calculate_percentile
from src.wealth.thresholds import amount_at_percentile, thresholds
from src.wealth.validator import ValidationReport, ValidationWarning, validate_distribution

__all__ = [
    "Distribution",
    "WealthRange",
    "WealthCategory",
    "PercentileResult",
    "DistributionStatistics",
    "ValidationReport",
    "ValidationWarning",
    "WealthEngineError",
    "DistributionValidationError",
    "InvalidInputError",
    "RangeNotFoundError",
    "validate_distribution",
    "calculate_percentile",
    "compute_statistics",
    "amount_at_percentile",
    "thresholds",
]
