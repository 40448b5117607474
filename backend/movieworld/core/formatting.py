"""Human readable strings for numeric catalog fields."""

NOT_AVAILABLE = "N/A"


def format_runtime(minutes: int | None) -> str:
    if not minutes:
        return NOT_AVAILABLE
    hours, mins = divmod(minutes, 60)
    if hours == 0:
        return f"{mins}m"
    if mins == 0:
        return f"{hours}h"
    return f"{hours}h {mins}m"


def format_box_office(amount: str | None) -> str:
    """Shorten an OMDb box office string such as `$292,587,330` to `$292.6M`."""
    if not amount or amount == NOT_AVAILABLE:
        return NOT_AVAILABLE
    try:
        value = float(amount.replace("$", "").replace(",", ""))
    except ValueError:
        return amount
    if value >= 1_000_000_000:
        return f"${value / 1_000_000_000:.1f}B"
    if value >= 1_000_000:
        return f"${value / 1_000_000:.1f}M"
    if value >= 1_000:
        return f"${value / 1_000:.1f}K"
    return f"${value:,.0f}"


def format_vote_count(count: int | None) -> str:
    if not count:
        return "0"
    if count >= 1_000_000:
        return f"{count / 1_000_000:.1f}M"
    if count >= 1_000:
        return f"{count / 1_000:.1f}K"
    return f"{count:,}"
