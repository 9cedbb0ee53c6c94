# funnelscope/services/funnel.py
"""
Stage-walk engine shared by the current-metrics and projection calculators.

run_funnel() works on fully resolved inputs and returns unrounded figures;
report_fields() applies the display rounding, which the projection reuses
before comparing against the baseline report.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from funnelscope.config import DAYS_PER_MONTH, GENERIC_STAGE_NAMES, ROI_BREAK_EVEN, ROI_HEALTHY
from funnelscope.funnels.registry import lookup_funnel_type
from funnelscope.models.io import MetricsReport
from funnelscope.utils.math import is_positive, r0, r1, r2, safe_div

STAGE_KEYS = ("stage1", "stage2", "stage3", "stage4")
REVENUE_STAGES = ("stage1", "stage2", "stage3")   # stage 4 never charges


@dataclass(frozen=True)
class ResolvedFunnelInputs:
    daily_spend: Optional[float]
    cpa_stage1: Optional[float]
    stage2_rate: Optional[float]
    stage3_rate: Optional[float]
    stage4_rate: Optional[float]
    conversion_rate: Optional[float]
    high_ticket_price: Optional[float]
    stage3_enabled: bool
    stage4_enabled: bool
    stage_names: Tuple[str, str, str, str]
    stage_prices: Tuple[float, float, float, float]   # 0 where the stage does not charge


@dataclass
class FunnelRun:
    monthly_spend: float
    stage1_volume: float
    volumes: List[float] = field(default_factory=list)
    cpas: List[float] = field(default_factory=list)
    rates: List[Optional[float]] = field(default_factory=list)
    prices: List[float] = field(default_factory=list)
    stage_names: List[str] = field(default_factory=list)
    sales: float = 0.0
    cpa_customer: float = 0.0
    revenue: float = 0.0
    profit: float = 0.0
    roi: float = 0.0
    overall_conversion_rate: float = 0.0


def stage_names_for(prospect) -> Tuple[str, str, str, str]:
    """Prospect override, else the funnel type's default name, else the generic name."""
    definition = lookup_funnel_type(prospect.funnel_type) if prospect.funnel_type else None
    names = []
    for key in STAGE_KEYS:
        custom = getattr(prospect, f"{key}_name", None)
        stage_def = definition.stage(key) if definition else None
        names.append(custom or (stage_def.default_name if stage_def else GENERIC_STAGE_NAMES[key]))
    return tuple(names)


def charging_prices_for(prospect) -> Tuple[float, float, float, float]:
    """
    Per-stage price that counts toward revenue.
    A stage charges when its price is positive, its paid flag is not explicitly
    False, and (for a known funnel type) its definition allows a price.
    Records saved before the paid flag existed leave it None and still charge.
    """
    definition = lookup_funnel_type(prospect.funnel_type) if prospect.funnel_type else None
    prices = []
    for key in STAGE_KEYS:
        price = getattr(prospect, f"{key}_price", None)
        is_paid = getattr(prospect, f"{key}_is_paid", None)
        stage_def = definition.stage(key) if definition else None
        charges = (
            key in REVENUE_STAGES
            and is_positive(price)
            and is_paid is not False
            and (stage_def is None or stage_def.can_be_paid)
        )
        prices.append(float(price) if charges else 0.0)
    return tuple(prices)


def roi_status(roi: float) -> str:
    if roi >= ROI_HEALTHY:
        return "healthy"
    if roi >= ROI_BREAK_EVEN:
        return "break_even"
    return "losing"


def _push_stage(run: FunnelRun, idx: int, rate: float, inputs: ResolvedFunnelInputs) -> None:
    prev_vol = run.volumes[-1]
    prev_cpa = run.cpas[-1]
    run.volumes.append(prev_vol * (rate / 100))
    run.cpas.append(prev_cpa / (rate / 100))
    run.rates.append(rate)
    run.prices.append(inputs.stage_prices[idx])
    run.stage_names.append(inputs.stage_names[idx])


def run_funnel(inputs: ResolvedFunnelInputs) -> Optional[FunnelRun]:
    """
    Size the funnel from ad spend down to sales.
    Returns None when daily spend or stage-1 CPA is missing or not positive.
    A stage whose rate is absent or zero is skipped (funnel not measured at
    that depth), and later stages are skipped with it.
    """
    if not is_positive(inputs.daily_spend) or not is_positive(inputs.cpa_stage1):
        return None

    monthly_spend = inputs.daily_spend * DAYS_PER_MONTH
    stage1_volume = monthly_spend / inputs.cpa_stage1

    run = FunnelRun(monthly_spend=monthly_spend, stage1_volume=stage1_volume)
    run.volumes.append(stage1_volume)
    run.cpas.append(inputs.cpa_stage1)
    run.rates.append(None)
    run.prices.append(inputs.stage_prices[0])
    run.stage_names.append(inputs.stage_names[0])

    if is_positive(inputs.stage2_rate):
        _push_stage(run, 1, inputs.stage2_rate, inputs)

        if inputs.stage3_enabled and is_positive(inputs.stage3_rate):
            _push_stage(run, 2, inputs.stage3_rate, inputs)

            if inputs.stage4_enabled and is_positive(inputs.stage4_rate):
                _push_stage(run, 3, inputs.stage4_rate, inputs)

    # Final stage -> purchase
    if is_positive(inputs.conversion_rate):
        run.sales = run.volumes[-1] * (inputs.conversion_rate / 100)
        run.cpa_customer = run.cpas[-1] / (inputs.conversion_rate / 100)

    revenue = run.sales * (inputs.high_ticket_price or 0)
    for vol, price in zip(run.volumes, run.prices):
        if price > 0:
            revenue += vol * price
    run.revenue = revenue

    run.roi = safe_div(revenue, monthly_spend) or 0.0
    run.profit = revenue - monthly_spend
    run.overall_conversion_rate = (safe_div(run.sales, stage1_volume) or 0.0) * 100
    return run


def report_fields(run: FunnelRun) -> dict:
    """Rounded report fields: volumes/sales 1dp, money integer, roi/conversion 2dp."""
    return {
        "monthly_spend": run.monthly_spend,
        "volumes": [r1(v) for v in run.volumes],
        "cpas": [r0(c) for c in run.cpas],
        "rates": list(run.rates),
        "prices": list(run.prices),
        "stage_names": list(run.stage_names),
        "sales": r1(run.sales),
        "cpa_customer": r0(run.cpa_customer),
        "revenue": r0(run.revenue),
        "profit": r0(run.profit),
        "roi": r2(run.roi),
        "overall_conversion_rate": r2(run.overall_conversion_rate),
        "is_profitable": run.profit > 0,
        "roi_status": roi_status(run.roi),
    }


def to_report(run: FunnelRun) -> MetricsReport:
    return MetricsReport(**report_fields(run))
