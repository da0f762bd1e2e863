"""Bundled distributions and JSON snapshot loading.

``mock_distribution`` is the fallback dataset used when no snapshot is
available. ``estimated_distribution`` spreads real network totals over a
fixed holder profile when only aggregate stats are known.
"""

import math
import time
from pathlib import Path

from loguru import logger
from pydantic import ValidationError

from src.wealth.exceptions import DistributionValidationError, WealthEngineError
from src.wealth.models import Distribution, WealthRange
from src.wealth.validator import validate_distribution

MOCK_SOURCE = "mock_data_for_development"
ESTIMATED_SOURCE = "network stats + estimated distribution"

# (min, max, address_count, total_btc, pct_addresses, pct_supply)
_MOCK_RANGES: list[tuple[float, float, int, float, float, float]] = [
    (0.0, 0.001, 25_000_000, 2_500.0, 62.5, 0.012),
    (0.001, 0.01, 8_000_000, 40_000.0, 20.0, 0.19),
    (0.01, 0.1, 4_000_000, 200_000.0, 10.0, 0.95),
    (0.1, 1.0, 2_000_000, 1_000_000.0, 5.0, 4.76),
    (1.0, 10.0, 800_000, 4_000_000.0, 2.0, 19.05),
    (10.0, 100.0, 150_000, 7_500_000.0, 0.375, 35.71),
    (100.0, 1000.0, 40_000, 4_000_000.0, 0.1, 19.05),
    (1000.0, 10000.0, 2_000, 2_000_000.0, 0.005, 9.52),
    (10000.0, math.inf, 100, 2_257_500.0, 0.00025, 10.75),
]

# (min, max, share of addresses, share of supply)
_ESTIMATED_PROFILE: list[tuple[float, float, float, float]] = [
    (0.0, 0.001, 0.40, 0.001),
    (0.001, 0.01, 0.25, 0.002),
    (0.01, 0.1, 0.20, 0.005),
    (0.1, 1.0, 0.10, 0.015),
    (1.0, 10.0, 0.035, 0.05),
    (10.0, 100.0, 0.012, 0.12),
    (100.0, 1000.0, 0.002, 0.20),
    (1000.0, 10000.0, 0.001, 0.25),
    (10000.0, math.inf, 0.0001, 0.357),
]


def _now_ms() -> int:
    return int(time.time() * 1000)


def mock_distribution() -> Distribution:
    """40M addresses holding the full 21M BTC supply."""
    return Distribution(
        ranges=tuple(
            WealthRange(
                min=lo,
                max=hi,
                address_count=count,
                total_amount=amount,
                pct_addresses=pct_addr,
                pct_supply=pct_supply,
            )
            for lo, hi, count, amount, pct_addr, pct_supply in _MOCK_RANGES
        ),
        total_addresses=40_000_000,
        total_supply=21_000_000.0,
        timestamp=_now_ms(),
        source=MOCK_SOURCE,
    )


def estimated_distribution(total_supply: float, total_addresses: int) -> Distribution:
    """Scale the fixed holder profile to the given network totals."""
    return Distribution(
        ranges=tuple(
            WealthRange(
                min=lo,
                max=hi,
                address_count=int(total_addresses * addr_share),
                total_amount=total_supply * supply_share,
                pct_addresses=addr_share * 100,
                pct_supply=supply_share * 100,
            )
            for lo, hi, addr_share, supply_share in _ESTIMATED_PROFILE
        ),
        total_addresses=total_addresses,
        total_supply=total_supply,
        timestamp=_now_ms(),
        source=ESTIMATED_SOURCE,
    )


def load_distribution(path: str | Path) -> Distribution:
    """Parse a JSON snapshot and validate it.

    Raises OSError if the file can't be read, DistributionValidationError
    if it doesn't parse or fails the hard checks.
    """
    raw = Path(path).read_text(encoding="utf-8")
    try:
        distribution = Distribution.model_validate_json(raw)
    except ValidationError as e:
        raise DistributionValidationError(
            f"Malformed distribution in {path}: {e.error_count()} errors"
        ) from e

    validate_distribution(distribution)
    logger.info(
        f"[DATA] Loaded {len(distribution.ranges)} ranges from {path} "
        f"(source={distribution.source or '?'})"
    )
    return distribution


def load_distribution_or_default(path: str | Path | None) -> Distribution:
    """Load a snapshot, falling back to the mock dataset on any failure."""
    if not path:
        logger.info("[DATA] No snapshot configured, using mock distribution")
        return mock_distribution()
    try:
        return load_distribution(path)
    except (OSError, WealthEngineError) as e:
        logger.warning(f"[DATA] Failed to load {path}: {e}, using mock distribution")
        return mock_distribution()


def dump_distribution(distribution: Distribution, path: str | Path) -> None:
    Path(path).write_text(
        distribution.model_dump_json(by_alias=True, indent=2), encoding="utf-8"
    )
