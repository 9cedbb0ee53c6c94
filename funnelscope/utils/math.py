# funnelscope/utils/math.py
import math
from typing import Optional


def is_positive(x: Optional[float]) -> bool:
    """True for real numbers > 0; None, NaN and non-numbers are not positive."""
    if x is None or isinstance(x, bool) or not isinstance(x, (int, float)):
        return False
    return not math.isnan(x) and x > 0


def safe_div(n: Optional[float], d: Optional[float]) -> Optional[float]:
    if n is None or d in (None, 0):
        return None
    try:
        return n / d
    except ZeroDivisionError:
        return None


def round_half_up(x: float, ndigits: int = 0) -> float:
    """
    Round halves toward +inf, the way the dashboard's display layer does.
    Python's round() uses banker's rounding, which would disagree on .5 cases
    (e.g. 2.5 -> 2 instead of 3).
    """
    factor = 10 ** ndigits
    return math.floor(x * factor + 0.5) / factor


def r0(x):
    return None if x is None else int(round_half_up(float(x)))

def r1(x):
    return None if x is None else round_half_up(float(x), 1)

def r2(x):
    return None if x is None else round_half_up(float(x), 2)


def pct_change(new: float, base: float) -> int:
    """Integer percentage change of new vs base; 0 when base is not positive."""
    if not is_positive(base):
        return 0
    return r0(((new / base) - 1) * 100)
