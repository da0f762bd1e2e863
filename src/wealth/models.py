"""Pydantic models for address-balance distribution snapshots.

Shape matches the JSON handed over by the data fetcher:
``{"ranges": [{"min", "max", "addressCount", "totalAmount", "pctAddresses",
"pctSupply"}], "totalAddresses", "totalSupply", "timestamp", "source"}``.
Legacy snake_case keys (``min_btc``, ``percentage_of_supply``, ...) are accepted too.
The open top bucket carries ``"Infinity"`` (or null) as its upper bound.
"""

import math
from collections.abc import Iterable
from enum import IntEnum

from pydantic import AliasChoices, BaseModel, Field, field_serializer, field_validator

OPEN_BOUND_SENTINELS = frozenset({"infinity", "+infinity", "inf", "+inf"})


class WealthCategory(IntEnum):
    """Holder tier by balance. Upper bounds are exclusive."""

    DUST = 0  # < 0.001
    SHRIMP = 1  # 0.001 - 0.01
    CRAB = 2  # 0.01 - 0.1
    FISH = 3  # 0.1 - 1
    DOLPHIN = 4  # 1 - 10
    SHARK = 5  # 10 - 100
    WHALE = 6  # 100 - 1000
    HUMPBACK = 7  # 1000+

    @classmethod
    def from_amount(cls, amount: float) -> "WealthCategory":
        for category, upper in CATEGORY_UPPER_BOUNDS.items():
            if amount < upper:
                return category
        return cls.HUMPBACK

    @property
    def label(self) -> str:
        return self.name.title()

    @property
    def emoji(self) -> str:
        return _EMOJI[self]

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @property
    def amount_range(self) -> str:
        lower = _LOWER_BOUNDS[self]
        upper = CATEGORY_UPPER_BOUNDS.get(self)
        if lower == 0:
            return f"< {upper:g} BTC"
        if upper is None:
            return f"{lower:g}+ BTC"
        return f"{lower:g} - {upper:g} BTC"


CATEGORY_UPPER_BOUNDS: dict[WealthCategory, float] = {
    WealthCategory.DUST: 0.001,
    WealthCategory.SHRIMP: 0.01,
    WealthCategory.CRAB: 0.1,
    WealthCategory.FISH: 1.0,
    WealthCategory.DOLPHIN: 10.0,
    WealthCategory.SHARK: 100.0,
    WealthCategory.WHALE: 1000.0,
}

_LOWER_BOUNDS: dict[WealthCategory, float] = {
    WealthCategory.DUST: 0.0,
    WealthCategory.SHRIMP: 0.001,
    WealthCategory.CRAB: 0.01,
    WealthCategory.FISH: 0.1,
    WealthCategory.DOLPHIN: 1.0,
    WealthCategory.SHARK: 10.0,
    WealthCategory.WHALE: 100.0,
    WealthCategory.HUMPBACK: 1000.0,
}

_EMOJI: dict[WealthCategory, str] = {
    WealthCategory.DUST: "🟫",
    WealthCategory.SHRIMP: "🦐",
    WealthCategory.CRAB: "🦀",
    WealthCategory.FISH: "🐟",
    WealthCategory.DOLPHIN: "🐬",
    WealthCategory.SHARK: "🦈",
    WealthCategory.WHALE: "🐋",
    WealthCategory.HUMPBACK: "🐳",
}

_DESCRIPTIONS: dict[WealthCategory, str] = {
    WealthCategory.DUST: "Minimal holdings - every satoshi counts",
    WealthCategory.SHRIMP: "Small but steady stack",
    WealthCategory.CRAB: "Solid foundation",
    WealthCategory.FISH: "Meaningful accumulation",
    WealthCategory.DOLPHIN: "Significant holder",
    WealthCategory.SHARK: "Top-tier holder",
    WealthCategory.WHALE: "Holdings that move markets",
    WealthCategory.HUMPBACK: "Largest holders on the network",
}


class WealthRange(BaseModel):
    """One histogram bucket: ``[min, max)`` with its address count and supply share."""

    min: float = Field(validation_alias=AliasChoices("min", "min_btc"))
    max: float = Field(default=math.inf, validation_alias=AliasChoices("max", "max_btc"))
    address_count: int = Field(
        validation_alias=AliasChoices("addressCount", "address_count"),
        serialization_alias="addressCount",
    )
    total_amount: float = Field(
        validation_alias=AliasChoices("totalAmount", "total_amount", "total_btc"),
        serialization_alias="totalAmount",
    )
    pct_addresses: float = Field(
        validation_alias=AliasChoices("pctAddresses", "pct_addresses", "percentage_of_addresses"),
        serialization_alias="pctAddresses",
    )
    pct_supply: float = Field(
        validation_alias=AliasChoices("pctSupply", "pct_supply", "percentage_of_supply"),
        serialization_alias="pctSupply",
    )

    model_config = {"frozen": True, "populate_by_name": True}

    @field_validator("max", mode="before")
    @classmethod
    def _parse_open_bound(cls, value: object) -> object:
        if value is None:
            return math.inf
        if isinstance(value, str) and value.strip().lower() in OPEN_BOUND_SENTINELS:
            return math.inf
        return value

    @field_serializer("max")
    def _serialize_open_bound(self, value: float) -> float | str:
        if math.isinf(value) and value > 0:
            return "Infinity"
        return value

    @property
    def is_open(self) -> bool:
        return math.isinf(self.max) and self.max > 0

    @property
    def width(self) -> float:
        return self.max - self.min


def sort_by_floor(ranges: Iterable[WealthRange]) -> list[WealthRange]:
    """Buckets ascending by lower bound (stable for equal bounds)."""
    return sorted(ranges, key=lambda r: r.min)


class Distribution(BaseModel):
    """Address-balance histogram snapshot.

    Immutable. Validate with ``src.wealth.validator.validate_distribution``
    before trusting it. Every engine entry point does so on each call.
    """

    ranges: tuple[WealthRange, ...]
    total_addresses: int = Field(
        validation_alias=AliasChoices("totalAddresses", "total_addresses"),
        serialization_alias="totalAddresses",
    )
    total_supply: float = Field(
        validation_alias=AliasChoices("totalSupply", "total_supply"),
        serialization_alias="totalSupply",
    )
    timestamp: int = 0  # ms since epoch
    source: str = Field(default="", validation_alias=AliasChoices("source", "data_source"))

    model_config = {"frozen": True, "populate_by_name": True}

    def sorted_ranges(self) -> list[WealthRange]:
        return sort_by_floor(self.ranges)
