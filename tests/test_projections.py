# tests/test_projections.py
import pytest

from funnelscope.models.io import ProjectionInputs, Prospect
from funnelscope.services.metrics import compute_current_metrics
from funnelscope.services.projections import compute_projection, merge_projection_inputs

def _mk(row, **kw): return Prospect(**{**row, **kw})

REPORT_FIELDS = ["monthly_spend", "volumes", "cpas", "rates", "prices", "stage_names", "sales",
                 "cpa_customer", "revenue", "profit", "roi", "overall_conversion_rate",
                 "is_profitable", "roi_status"]


@pytest.mark.parametrize("overrides", [None, {}, ProjectionInputs()])
def test_empty_overrides_reproduce_current(webinar_row, overrides):
    p = _mk(webinar_row)
    cur = compute_current_metrics(p)
    proj = compute_projection(p, overrides)
    for f in REPORT_FIELDS:
        assert getattr(proj, f) == getattr(cur, f), f
    assert proj.daily_spend == 4000
    assert (proj.sales_increase, proj.revenue_increase, proj.roi_change) == (0, 0, 0.0)


# figures that lose precision when rounded for display
@pytest.mark.parametrize("row", [
    {"current_daily_spend": 10, "current_cpa_stage1": 100,
     "current_conversion_rate": 4.5, "high_ticket_price": 10},
    {"current_daily_spend": 1000, "current_cpa_stage1": 700, "current_stage2_rate": 33,
     "current_conversion_rate": 7, "high_ticket_price": 5000},
    {"current_daily_spend": 2500, "current_cpa_stage1": 333, "current_stage2_rate": 41.5,
     "current_conversion_rate": 12.5, "high_ticket_price": 47999, "stage1_price": 99},
])
def test_empty_overrides_give_zero_deltas_on_uneven_figures(row):
    p = Prospect(funnel_type="webinar", **row)
    proj = compute_projection(p, {})
    assert proj.sales == compute_current_metrics(p).sales
    assert (proj.sales_increase, proj.revenue_increase, proj.roi_change) == (0, 0, 0.0)


def test_doubling_spend_doubles_sales_and_revenue(webinar_row):
    proj = compute_projection(_mk(webinar_row), {"projected_daily_spend": 8000})
    assert proj.daily_spend == 8000
    assert proj.monthly_spend == 240000
    assert proj.volumes == [400.0, 280.0]
    assert proj.sales == 84.0
    assert proj.sales_increase == 100
    assert proj.revenue_increase == 100
    assert proj.roi_change == 0.0


def test_better_close_rate(webinar_row):
    proj = compute_projection(_mk(webinar_row), {"projected_conversion_rate": 45})
    assert proj.sales == 63.0
    assert proj.revenue == 5607000
    assert proj.sales_increase == 50
    assert proj.revenue_increase == 50
    # 46.73 (5607000 / 120000 rounded half-up) - 31.15
    assert proj.roi == 46.73
    assert proj.roi_change == 15.58


def test_zero_rate_override_is_a_value_not_absence(webinar_row):
    # 0% attendance drops stage 2 instead of falling back to the current 70%
    proj = compute_projection(_mk(webinar_row), {"projected_stage2_rate": 0})
    assert proj.volumes == [200.0]
    assert proj.rates == [None]
    assert proj.sales == 60.0


def test_merge_order_override_then_saved_then_current(webinar_row):
    p = _mk(webinar_row, projected_daily_spend=6000, projected_cpa_stage1=750)
    resolved = merge_projection_inputs(p, {"projected_cpa_stage1": 500, "projected_stage2_rate": None})
    assert resolved.daily_spend == 6000          # saved projection
    assert resolved.cpa_stage1 == 500            # override beats saved
    assert resolved.stage2_rate == 70            # None override falls back to current
    assert resolved.conversion_rate == 30
    assert resolved.high_ticket_price == 89000
    assert resolved.stage_names == ("Registration", "Attendance", "Call Booking", "Call Attendance")


def test_saved_projection_inputs_are_used(webinar_row):
    proj = compute_projection(_mk(webinar_row, projected_high_ticket_price=120000))
    assert proj.revenue == 42 * 120000


def test_no_baseline_means_zero_deltas(webinar_row):
    p = _mk(webinar_row, current_daily_spend=None, projected_daily_spend=5000)
    assert compute_current_metrics(p) is None
    proj = compute_projection(p)
    assert proj.monthly_spend == 150000
    assert (proj.sales_increase, proj.revenue_increase, proj.roi_change) == (0, 0, 0.0)


def test_baseline_without_sales_gives_zero_increase(webinar_row):
    p = _mk(webinar_row, current_conversion_rate=None)
    proj = compute_projection(p, {"projected_conversion_rate": 20})
    assert proj.sales == 28.0
    assert proj.sales_increase == 0
    assert proj.revenue_increase == 0
    assert proj.roi_change == proj.roi


def test_unresolvable_projection_is_none(webinar_row):
    p = _mk(webinar_row, current_cpa_stage1=None)
    assert compute_projection(p) is None
    assert compute_projection(_mk(webinar_row), {"projected_daily_spend": 0}) is None


def test_projection_does_not_mutate_prospect(webinar_row):
    p = _mk(webinar_row)
    before = p.model_dump()
    compute_projection(p, {"projected_daily_spend": 9000, "projected_stage2_rate": 80})
    assert p.model_dump() == before
    assert compute_projection(p, {"projected_daily_spend": 9000}) == compute_projection(p, {"projected_daily_spend": 9000})
