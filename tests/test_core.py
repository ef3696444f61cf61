"""Unit tests for the cashflow engine.

These tests verify the numerical contract of the calculator: cashflow
construction, present value and NPV, cumulative sums, the bisection IRR
search (including its bracket widening and failure cases) and the
interpolated payback period.
"""

import math

import pytest

from core.cashflow import build_cashflows
from core.economics import Failure, cumulative_sum, irr, npv, payback_period, present_value
from core.params import ProjectParameters


def test_build_cashflows_default_scenario():
    params = ProjectParameters()
    cfs = build_cashflows(params)
    assert len(cfs) == 26
    # 4314 + 2331 + 0 capex, 4818 tax benefit
    assert cfs[0] == -1827.0
    assert all(cf == 337.0 for cf in cfs[1:])


@pytest.mark.parametrize("years", [1, 2, 7, 40])
def test_build_cashflows_length_with_zero_inputs(years):
    params = ProjectParameters(
        capex_geothermal=0, capex_indoor_unit=0, capex_pv=0, tax_benefit=0, energy_benefit=0, years=years
    )
    cfs = build_cashflows(params)
    assert len(cfs) == years + 1
    assert all(cf == 0.0 for cf in cfs)


def test_build_cashflows_accepts_negative_inputs():
    params = ProjectParameters(capex_geothermal=-10, capex_indoor_unit=5, capex_pv=1, tax_benefit=-3, energy_benefit=-2, years=2)
    assert build_cashflows(params) == [1.0, -2.0, -2.0]


def test_present_value_first_element_undiscounted():
    series = [-1827.0, 337.0, 337.0]
    for rate in (0.0, 0.045, -0.5, 3.0, -1.0, -2.0):
        assert present_value(rate, series)[0] == series[0]


def test_present_value_discounts_each_period():
    pv = present_value(0.1, [100.0, 110.0, 121.0])
    assert math.isclose(pv[1], 100.0)
    assert math.isclose(pv[2], 100.0)


def test_present_value_rate_minus_one_is_non_finite():
    pv = present_value(-1.0, [5.0, 10.0, 0.0])
    assert pv[0] == 5.0
    assert math.isinf(pv[1])
    assert math.isnan(pv[2])


def test_npv_zero_rate_is_plain_sum():
    series = [-100.0, 40.5, 40.25, 19.125]
    assert npv(0.0, series) == sum(series)


def test_npv_reference_scenario():
    cfs = build_cashflows(ProjectParameters())
    expected = -1827.0 + sum(337.0 / 1.045 ** t for t in range(1, 26))
    assert abs(npv(0.045, cfs) - expected) < 1e-6
    assert npv(0.045, cfs) == pytest.approx(3170.1064, abs=1e-3)


def test_npv_propagates_nan():
    assert math.isnan(npv(0.05, [-100.0, float("nan"), 50.0]))


def test_cumulative_sum():
    series = [-100.0, 40.0, 40.0, 40.0]
    cum = cumulative_sum(series)
    assert cum == [-100.0, -60.0, -20.0, 20.0]
    assert len(cum) == len(series)
    assert cum[-1] == sum(series)
    assert cumulative_sum([]) == []


def test_irr_round_trip_single_sign_change():
    cfs = build_cashflows(ProjectParameters())
    res = irr(cfs)
    assert res.ok
    assert 0.15 < res.value < 0.20
    assert abs(npv(res.value, cfs)) < 1e-6


def test_irr_simple_two_period():
    res = irr([-100.0, 110.0])
    assert res.ok
    assert res.value == pytest.approx(0.10, abs=1e-6)


def test_irr_widens_bracket_beyond_1000_percent():
    # root at 1900%: npv is positive at both -99.99% and 1000%
    res = irr([-1.0, 20.0])
    assert res.ok
    assert res.value == pytest.approx(19.0, abs=1e-6)


def test_irr_fails_without_sign_change():
    res = irr([100.0, 50.0, 50.0])
    assert not res.ok
    assert res.failure is Failure.NO_SIGN_CHANGE
    assert math.isnan(float(res))

    assert irr([-100.0, -50.0]).failure is Failure.NO_SIGN_CHANGE


def test_irr_exact_zero_at_lower_bound():
    res = irr([0.0, 0.0, 0.0])
    assert res.ok
    assert res.value == -0.9999


def test_irr_non_finite_npv_fails():
    assert irr([-100.0, float("nan")]).failure is Failure.NON_FINITE
    # (1 - 0.9999) ** t underflows to zero for long horizons
    long_horizon = [-1827.0] + [337.0] * 100
    assert irr(long_horizon).failure is Failure.NON_FINITE


def test_payback_immediate():
    res = payback_period([100.0, 50.0])
    assert res.ok
    assert res.value == 0.0
    assert payback_period([0.0, -5.0]).value == 0.0


def test_payback_interpolates_within_year():
    res = payback_period([-100.0, 40.0, 40.0, 40.0])
    assert res.ok
    assert math.isclose(res.value, 2.5)


def test_payback_exact_recovery_at_year_end():
    assert math.isclose(payback_period([-100.0, 100.0]).value, 1.0)


def test_payback_reference_scenario():
    cfs = build_cashflows(ProjectParameters())
    # 1827 / 337 = 5.42 years
    assert math.isclose(payback_period(cfs).value, 1827.0 / 337.0)


def test_payback_never_recovered():
    res = payback_period([-100.0, 10.0, 10.0])
    assert not res.ok
    assert res.failure is Failure.NEVER_RECOVERED
    assert res.value is None


def test_payback_empty_series():
    assert payback_period([]).failure is Failure.EMPTY_SERIES
