# funnelscope/services/projections.py
from typing import Any, Dict, Optional, Union

from funnelscope.models.io import ProjectionInputs, ProjectionReport, Prospect
from funnelscope.services.funnel import (
    ResolvedFunnelInputs, charging_prices_for, report_fields, run_funnel, stage_names_for,
)
from funnelscope.services.metrics import compute_current_metrics
from funnelscope.utils.math import pct_change, r2

# projected field -> current field it falls back to
FALLBACKS = {
    "projected_daily_spend":       "current_daily_spend",
    "projected_cpa_stage1":        "current_cpa_stage1",
    "projected_stage2_rate":       "current_stage2_rate",
    "projected_stage3_rate":       "current_stage3_rate",
    "projected_stage4_rate":       "current_stage4_rate",
    "projected_conversion_rate":   "current_conversion_rate",
    "projected_high_ticket_price": "high_ticket_price",
}


def _first_not_none(*values):
    for v in values:
        if v is not None:
            return v
    return None


def merge_projection_inputs(prospect: Prospect,
                            overrides: Union[ProjectionInputs, Dict[str, Any], None] = None) -> ResolvedFunnelInputs:
    """
    Resolve the inputs of a projected funnel, field by field:
      override (non-null) -> prospect's saved projected_* -> prospect's current value.
    An override of 0 is a value, not an absence: a 0% rate skips that stage.
    Stage names, prices, paid flags and enabled flags always come from the prospect.
    """
    if overrides is None:
        overrides = ProjectionInputs()
    elif isinstance(overrides, dict):
        overrides = ProjectionInputs(**overrides)

    resolved = {
        proj: _first_not_none(getattr(overrides, proj), getattr(prospect, proj), getattr(prospect, cur))
        for proj, cur in FALLBACKS.items()
    }
    return ResolvedFunnelInputs(
        daily_spend=resolved["projected_daily_spend"],
        cpa_stage1=resolved["projected_cpa_stage1"],
        stage2_rate=resolved["projected_stage2_rate"],
        stage3_rate=resolved["projected_stage3_rate"],
        stage4_rate=resolved["projected_stage4_rate"],
        conversion_rate=resolved["projected_conversion_rate"],
        high_ticket_price=resolved["projected_high_ticket_price"],
        stage3_enabled=bool(prospect.stage3_enabled),
        stage4_enabled=bool(prospect.stage4_enabled),
        stage_names=stage_names_for(prospect),
        stage_prices=charging_prices_for(prospect),
    )


def compute_projection(prospect: Prospect,
                       overrides: Union[ProjectionInputs, Dict[str, Any], None] = None) -> Optional[ProjectionReport]:
    """
    Funnel report for a hypothetical funnel, plus deltas vs the current report.
    The baseline is recomputed on every call so the function stays pure.
    """
    inputs = merge_projection_inputs(prospect, overrides)
    run = run_funnel(inputs)
    if run is None:
        return None

    fields = report_fields(run)
    sales_increase = revenue_increase = 0
    roi_change = 0.0
    current = compute_current_metrics(prospect)
    if current is not None:
        # rounded vs rounded, so an unchanged funnel shows no movement
        sales_increase = pct_change(fields["sales"], current.sales)
        revenue_increase = pct_change(fields["revenue"], current.revenue)
        roi_change = r2(fields["roi"] - current.roi)

    return ProjectionReport(
        **fields,
        daily_spend=inputs.daily_spend,
        sales_increase=sales_increase,
        revenue_increase=revenue_increase,
        roi_change=roi_change,
    )
