# funnelscope/services/metrics.py
from typing import Optional

from funnelscope.models.io import MetricsReport, Prospect
from funnelscope.services.funnel import (
    ResolvedFunnelInputs, charging_prices_for, run_funnel, stage_names_for, to_report,
)


def resolve_current_inputs(prospect: Prospect) -> ResolvedFunnelInputs:
    """The prospect's entered current_* values, as the stage walk expects them."""
    return ResolvedFunnelInputs(
        daily_spend=prospect.current_daily_spend,
        cpa_stage1=prospect.current_cpa_stage1,
        stage2_rate=prospect.current_stage2_rate,
        stage3_rate=prospect.current_stage3_rate,
        stage4_rate=prospect.current_stage4_rate,
        conversion_rate=prospect.current_conversion_rate,
        high_ticket_price=prospect.high_ticket_price,
        stage3_enabled=bool(prospect.stage3_enabled),
        stage4_enabled=bool(prospect.stage4_enabled),
        stage_names=stage_names_for(prospect),
        stage_prices=charging_prices_for(prospect),
    )


def compute_current_metrics(prospect: Prospect) -> Optional[MetricsReport]:
    """
    Funnel report for the prospect's current performance.
    None ("no metrics yet") when current daily spend or stage-1 CPA is missing.
    """
    run = run_funnel(resolve_current_inputs(prospect))
    if run is None:
        return None
    return to_report(run)
