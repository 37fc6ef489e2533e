"""Formatting helpers shared by the CLI and the MCP server."""

import math
from collections.abc import Iterator
from decimal import Decimal


def format_money(
    amount: Decimal | float, use_color: bool = True, currency_symbol: str = "$"
) -> str:
    """
    Format money in accounting style with alignment.

    Negative amounts use parentheses: ($85.02)
    Positive amounts have spaces:      $85.02
    The spaces ensure decimal points align in tables.
    """
    abs_amount = abs(amount)
    if amount < 0:
        if use_color:
            formatted = f"({currency_symbol}[red]{abs_amount:,.2f}[/red])"
        else:
            formatted = f"({currency_symbol}{abs_amount:,.2f})"
    else:
        if use_color:
            formatted = f" [green]{currency_symbol}{abs_amount:,.2f}[/green] "
        else:
            formatted = f" {currency_symbol}{abs_amount:,.2f} "
    return formatted


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'}"


def format_minutes(total_minutes: float) -> str:
    """
    Format a minute count as ``"1 hour, 30 minutes"``.

    Zero-valued parts are dropped; rounds to the nearest minute.
    """
    minutes = int(round(total_minutes))
    hours, minutes = divmod(minutes, 60)
    parts = []
    if hours:
        parts.append(_plural(hours, "hour"))
    if minutes or not parts:
        parts.append(_plural(minutes, "minute"))
    return ", ".join(parts)


def format_hours(time_in_hours: float) -> str:
    """
    Format a fractional hour count as ``"1 day, 2 hours, 5 minutes"``.

    Returns ``"Less than a minute"`` for tiny positive durations.
    """
    # Round once so a carry can reach days as well as hours
    days, remaining = divmod(round(time_in_hours * 60), 24 * 60)
    hours, minutes = divmod(remaining, 60)

    parts = []
    if days > 0:
        parts.append(_plural(days, "day"))
    if hours > 0:
        parts.append(_plural(hours, "hour"))
    if minutes > 0:
        parts.append(_plural(minutes, "minute"))

    if not parts:
        return "Less than a minute" if time_in_hours > 0 else "0 minutes"
    return ", ".join(parts)


# ============================================================================
# Count-up animation
# ============================================================================


def ease_out_expo(t: float) -> float:
    """Exponential ease-out on [0, 1]: fast start, gentle landing on 1."""
    return 1.0 if t >= 1 else 1 - math.pow(2, -10 * t)


def count_up_frames(
    end_value: float,
    duration_ms: int = 2000,
    decimal_places: int = 2,
    frame_rate: int = 60,
) -> Iterator[str]:
    """
    Yield the successive values of a count-up animation from 0 to ``end_value``.

    Frames whose rounded value would not change are skipped. The final frame
    is always exactly ``end_value`` at ``decimal_places``.
    """
    total_frames = max(round(duration_ms / (1000 / frame_rate)), 1)
    previous: str | None = None
    for frame in range(1, total_frames + 1):
        value = ease_out_expo(frame / total_frames) * end_value
        text = f"{value:.{decimal_places}f}"
        if text != previous:
            previous = text
            yield text
    final = f"{end_value:.{decimal_places}f}"
    if previous != final:
        yield final
