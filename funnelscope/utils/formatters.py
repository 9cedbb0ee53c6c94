# funnelscope/utils/formatters.py
"""Display formatting for reports and exports (Indian Rupee conventions)."""
import math
from typing import Optional

from funnelscope.utils.math import round_half_up

RUPEE = "₹"
DASH = "—"

# (threshold, divisor, suffix), largest first
COMPACT_UNITS = [
    (10_000_000, 10_000_000, "Cr"),
    (100_000,    100_000,    "L"),
    (1_000,      1_000,      "K"),
]


def _missing(value) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def group_indian(n: int) -> str:
    """12345678 -> '1,23,45,678' (last three digits, then pairs)."""
    sign = "-" if n < 0 else ""
    s = str(abs(n))
    if len(s) <= 3:
        return sign + s
    head, tail = s[:-3], s[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return sign + ",".join(pairs + [tail])


def format_currency(amount: Optional[float], compact: bool = False, show_symbol: bool = True) -> str:
    symbol = RUPEE if show_symbol else ""
    if _missing(amount):
        return f"{symbol}0"
    if compact:
        for threshold, divisor, suffix in COMPACT_UNITS:
            if amount >= threshold:
                return f"{symbol}{amount / divisor:.1f}{suffix}"
    return f"{symbol}{group_indian(int(round_half_up(amount)))}"


def format_percentage(value: Optional[float], decimals: int = 0) -> str:
    if _missing(value):
        return DASH
    return f"{value:.{decimals}f}%"


def format_roi(value: Optional[float]) -> str:
    if _missing(value):
        return DASH
    return f"{value:.2f}x"


def format_number(value: Optional[float], decimals: int = 0) -> str:
    """Indian digit grouping with up to `decimals` fraction digits, trailing zeros dropped."""
    if _missing(value):
        return DASH
    rounded = round_half_up(value, decimals)
    whole = int(rounded) if rounded >= 0 else -int(-rounded)
    out = group_indian(whole)
    if decimals > 0:
        frac = f"{abs(rounded):.{decimals}f}".split(".")[1].rstrip("0")
        if frac:
            out = f"{out}.{frac}"
    if rounded < 0 and whole == 0:
        out = "-" + out
    return out
