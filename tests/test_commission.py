"""Tests for the BDM commission schedules."""

import pytest

from cm_calculators.calculators.commission import calculate_commission, commission_rate, find_tier
from cm_calculators.schemas.calculators import CommissionInputs


def test_tier_two_at_target_gp():
    result = calculate_commission(CommissionInputs(revenue=1_500_000, gp_percent=0.35))
    assert result.tier == 2
    assert result.commissionable_revenue == 500_000
    assert result.commission_rate == pytest.approx(0.040)
    assert result.base_commission == pytest.approx(20_000)
    assert result.bonus == 0
    assert result.total_commission == pytest.approx(20_000)
    assert result.gross_profit == pytest.approx(525_000)
    assert result.profit_after_commission == pytest.approx(505_000)
    assert result.threshold_met


def test_tier_zero_pays_nothing():
    result = calculate_commission(CommissionInputs(revenue=800_000, gp_percent=0.40))
    assert result.tier == 0
    assert result.total_commission == 0
    assert result.calculation_details[0] == "Tier 0: No commission for revenue up to $1,000,000"


def test_tier_boundaries_are_lower_inclusive():
    assert find_tier(999_999.99).tier == 0
    assert find_tier(1_000_000).tier == 1
    assert find_tier(4_000_000).tier == 3
    assert find_tier(6_000_000).tier == 4


def test_fixed_bonus_when_gp_just_below_minimum():
    result = calculate_commission(CommissionInputs(revenue=1_200_000, gp_percent=0.335))
    assert result.tier == 1
    assert not result.threshold_met
    assert result.commission_rate == 0
    assert result.bonus == 3500
    assert result.total_commission == 3500
    assert any("Fixed bonus of $3,500" in line for line in result.calculation_details)


def test_higher_gp_earns_higher_rate():
    assert commission_rate(find_tier(2_000_000), 0.40) == pytest.approx(0.045)
    # Past the end of the table the tier base rate applies
    assert commission_rate(find_tier(2_000_000), 0.60) == pytest.approx(0.04)


def test_v2_schedule_rates():
    result = calculate_commission(CommissionInputs(revenue=1_500_000, gp_percent=0.35, schedule="v2"))
    assert result.commission_rate == pytest.approx(0.035)
    assert result.total_commission == pytest.approx(17_500)


def test_v3_bonus_is_a_rate_on_revenue_above_threshold():
    result = calculate_commission(CommissionInputs(revenue=2_000_000, gp_percent=0.345, schedule="v3"))
    assert result.tier == 2
    assert result.commission_rate == 0
    assert result.bonus == pytest.approx(3_500)


def test_zero_revenue_has_no_percentages():
    result = calculate_commission(CommissionInputs(revenue=0, gp_percent=0.3))
    assert result.commission_percent_of_revenue == 0
    assert result.after_commission_gp_percent == 0
