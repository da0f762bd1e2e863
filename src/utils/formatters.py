"""Number formatting for reports."""


def format_number_with_commas(number: float) -> str:
    return f"{number:,.0f}"


def format_large_number(number: float) -> str:
    """1_234_567 -> '1.2M'. Below a thousand, plain integer."""
    magnitude = abs(number)
    if magnitude >= 1_000_000_000:
        return f"{number / 1_000_000_000:.1f}B"
    if magnitude >= 1_000_000:
        return f"{number / 1_000_000:.1f}M"
    if magnitude >= 1_000:
        return f"{number / 1_000:.1f}K"
    return f"{number:.0f}"


def format_rank(rank: int) -> str:
    """1 -> '1st', 12 -> '12th', 1023 -> '1,023rd'."""
    if rank % 100 in (11, 12, 13):
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(rank % 10, "th")
    return f"{format_number_with_commas(rank)}{suffix}"


def format_btc(amount: float) -> str:
    return f"{amount:.8f} BTC"


def format_usd(amount: float) -> str:
    return f"${amount:,.2f}"
