"""Where does a holding rank among all Bitcoin addresses?

Loads a distribution snapshot (JSON) or the bundled mock dataset and prints
a wealth report for the given amount, or distribution statistics only.

Usage:
    poetry run python scripts/wealth_report.py --amount 0.5
    poetry run python scripts/wealth_report.py --file snapshot.json --amount 12 --json
    poetry run python scripts/wealth_report.py --stats-only
"""

import argparse
import json
import sys
from pathlib import Path

# Ensure project root is in path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from loguru import logger  # noqa: E402

from config.settings import settings  # noqa: E402
from src.utils.formatters import format_btc  # noqa: E402
from src.utils.logger import setup_logger  # noqa: E402
from src.wealth.datasets import load_distribution_or_default  # noqa: E402
from src.wealth.exceptions import WealthEngineError  # noqa: E402
from src.wealth.inequality import compute_statistics  # noqa: E402
from src.wealth.report import generate_wealth_report, wealth_summary  # noqa: E402


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Bitcoin wealth percentile report")
    parser.add_argument("--amount", type=float, default=None, help="Holding in BTC")
    parser.add_argument(
        "--file",
        default=settings.distribution_path,
        help="Distribution snapshot JSON (default: bundled mock data)",
    )
    parser.add_argument("--price", type=float, default=None, help="BTC price in USD")
    parser.add_argument("--json", action="store_true", help="Print JSON instead of text")
    parser.add_argument(
        "--stats-only",
        action="store_true",
        help="Print distribution statistics without ranking a holding",
    )
    return parser


def print_statistics(distribution) -> None:
    stats = compute_statistics(distribution)
    print(f"Source: {distribution.source or '?'}")
    print(f"Mean:   {format_btc(stats.mean)}")
    print(f"Median: {format_btc(stats.median)}")
    print(f"Gini:   {stats.gini:.4f}")
    print(f"HHI:    {stats.hhi:.1f}")
    for level, share in stats.concentration_ratios.items():
        print(f"Top {level:g}% hold {share:.2f}% of supply")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logger(json_logs=settings.json_logs, level=settings.log_level, log_file=settings.log_file)

    if args.amount is None and not args.stats_only:
        print("Nothing to do: pass --amount or --stats-only")
        return 2

    distribution = load_distribution_or_default(args.file)
    amount = None if args.stats_only else args.amount

    try:
        if args.json:
            print(json.dumps(wealth_summary(distribution, amount, price_usd=args.price), indent=2))
        elif amount is None:
            print_statistics(distribution)
        else:
            print(generate_wealth_report(amount, distribution, price_usd=args.price))
    except WealthEngineError as e:
        logger.error(f"[REPORT] {e}")
        print(f"Error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
