"""Plain-text and JSON wealth reports built on the engine entry points."""

from typing import Any

from src.utils.formatters import (
    format_btc,
    format_large_number,
    format_rank,
    format_usd,
)
from src.wealth.inequality import compute_statistics
from src.wealth.models import Distribution
from src.wealth.percentile import PercentileResult, calculate_percentile
from src.wealth.thresholds import thresholds


def generate_wealth_report(
    amount: float,
    distribution: Distribution,
    *,
    price_usd: float | None = None,
) -> str:
    """Render a holder's standing as a multi-line text report."""
    result = calculate_percentile(amount, distribution, price_usd=price_usd)
    key_thresholds = thresholds(distribution)
    metrics = result.comparison_metrics

    lines = [
        "Bitcoin Wealth Report",
        "=" * 40,
        f"Holding:    {format_btc(amount)}",
        f"Percentile: {result.percentile:.2f}%",
        f"Rank:       {format_rank(result.rank)} of "
        f"{format_large_number(distribution.total_addresses)}",
        f"Category:   {result.category.emoji} {result.category.label} "
        f"({result.category.amount_range})",
        "",
        "Comparison:",
        f"- {format_large_number(result.addresses_below)} addresses hold less",
        f"- {format_large_number(result.addresses_above)} addresses hold more",
    ]
    if "vs_median_ratio" in metrics:
        lines.append(f"- {metrics['vs_median_ratio']:.1f}x the median holding")
    if "supply_share_percent" in metrics:
        lines.append(f"- {metrics['supply_share_percent']:.6f}% of total supply")
    if "estimated_usd_value" in metrics:
        lines.append(f"- worth about {format_usd(metrics['estimated_usd_value'])}")

    lines += ["", "Key thresholds:"]
    for percentile, threshold in key_thresholds:
        lines.append(f"- {percentile:g}th percentile: {format_btc(threshold)}")

    return "\n".join(lines)


def _result_to_dict(result: PercentileResult) -> dict[str, Any]:
    return {
        "amount": result.amount,
        "percentile": result.percentile,
        "rank": result.rank,
        "addresses_below": result.addresses_below,
        "addresses_above": result.addresses_above,
        "category": result.category.label,
        "comparison_metrics": dict(result.comparison_metrics),
    }


def wealth_summary(
    distribution: Distribution,
    amount: float | None = None,
    *,
    price_usd: float | None = None,
) -> dict[str, Any]:
    """JSON-ready summary: statistics, thresholds and (optionally) a holder's result."""
    stats = compute_statistics(distribution)
    summary: dict[str, Any] = {
        "source": distribution.source,
        "timestamp": distribution.timestamp,
        "statistics": {
            "mean": stats.mean,
            "median": stats.median,
            "gini": stats.gini,
            "hhi": stats.hhi,
            "concentration_ratios": {
                f"top_{level:g}_percent": share
                for level, share in stats.concentration_ratios.items()
            },
        },
        "thresholds": [
            {"percentile": p, "amount": a} for p, a in thresholds(distribution)
        ],
    }
    if amount is not None:
        summary["holding"] = _result_to_dict(
            calculate_percentile(amount, distribution, price_usd=price_usd)
        )
    return summary
