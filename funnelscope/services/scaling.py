# funnelscope/services/scaling.py
import math
from typing import Optional

from funnelscope.config import DEFAULT_SCALING_FREQUENCY_DAYS, DEFAULT_SCALING_INCREMENT_PERCENT
from funnelscope.models.io import ScalingStep, ScalingTimeline
from funnelscope.utils.math import is_positive, r0


def plan_scaling_timeline(current_spend: Optional[float],
                          target_spend: Optional[float],
                          increment_percent: float = DEFAULT_SCALING_INCREMENT_PERCENT,
                          frequency_days: int = DEFAULT_SCALING_FREQUENCY_DAYS) -> ScalingTimeline:
    """
    Compounding budget increases from current to target daily spend.

    Records a step, grows the budget by increment_percent, advances
    frequency_days, and repeats while the budget is under target. The final
    step (is_target) holds the first budget at or over the target; it is not
    clamped. Budgets are rounded when recorded; compounding uses the
    unrounded running total.
    """
    if not is_positive(current_spend) or not is_positive(target_spend) or current_spend >= target_spend:
        return ScalingTimeline()
    if not is_positive(increment_percent):
        raise ValueError(f"increment_percent must be > 0, got {increment_percent!r}")
    if frequency_days is None or frequency_days < 0:
        raise ValueError(f"frequency_days must be >= 0, got {frequency_days!r}")

    growth = 1 + increment_percent / 100
    steps = []
    budget = float(current_spend)
    step = 0
    day = 0
    while budget < target_spend:
        steps.append(ScalingStep(step=step, day=day, budget=r0(budget)))
        budget *= growth
        step += 1
        day += frequency_days

    steps.append(ScalingStep(step=step, day=day, budget=r0(budget), is_target=True))

    return ScalingTimeline(
        steps=steps,
        total_steps=step,
        total_days=day,
        total_weeks=math.ceil(day / 7),
    )
