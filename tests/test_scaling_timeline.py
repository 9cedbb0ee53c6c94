# tests/test_scaling_timeline.py
import pytest

from funnelscope.services.scaling import plan_scaling_timeline


@pytest.mark.parametrize("current,target", [
    (1000, 1000), (0, 5000), (None, 5000), (1000, None), (2000, 1000), (-500, 1000),
])
def test_no_plan_unless_spend_increases(current, target):
    t = plan_scaling_timeline(current, target)
    assert t.steps == []
    assert (t.total_steps, t.total_days, t.total_weeks) == (0, 0, 0)


def test_default_twenty_percent_every_three_days():
    t = plan_scaling_timeline(1000, 2000, 20, 3)
    assert [s.budget for s in t.steps] == [1000, 1200, 1440, 1728, 2074]
    assert [s.day for s in t.steps] == [0, 3, 6, 9, 12]
    assert [s.step for s in t.steps] == [0, 1, 2, 3, 4]
    assert [s.is_target for s in t.steps] == [False, False, False, False, True]
    assert t.total_steps == 4
    assert t.total_days == 3 * t.total_steps
    assert t.total_weeks == 2


def test_defaults_match_explicit_arguments():
    assert plan_scaling_timeline(1000, 2000) == plan_scaling_timeline(1000, 2000, 20, 3)


def test_target_step_overshoots_instead_of_clamping():
    t = plan_scaling_timeline(1000, 1001)
    assert [s.budget for s in t.steps] == [1000, 1200]
    assert t.steps[-1].is_target
    assert (t.total_steps, t.total_days, t.total_weeks) == (1, 3, 1)


def test_compounding_uses_unrounded_budget():
    # 1001 * 1.5 = 1501.5 -> shows 1502; next step compounds 1501.5, not 1502
    t = plan_scaling_timeline(1001, 3000, 50, 7)
    assert [s.budget for s in t.steps] == [1001, 1502, 2252, 3378]
    assert t.total_days == 21
    assert t.total_weeks == 3


def test_same_day_scaling():
    t = plan_scaling_timeline(100, 150, 25, 0)
    assert [s.day for s in t.steps] == [0, 0, 0]
    assert t.total_days == 0
    assert t.total_weeks == 0


@pytest.mark.parametrize("increment,frequency", [(0, 3), (-10, 3), (20, -1)])
def test_invalid_growth_rule_raises(increment, frequency):
    with pytest.raises(ValueError):
        plan_scaling_timeline(1000, 2000, increment, frequency)


def test_idempotent():
    assert plan_scaling_timeline(500, 10000, 30, 2) == plan_scaling_timeline(500, 10000, 30, 2)
