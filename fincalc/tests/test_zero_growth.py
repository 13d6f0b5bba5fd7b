from __future__ import annotations

from math import isclose

from fincalc.core.accumulation import accumulate, accumulate_tax_tracks
from fincalc.core.retirement import calculate_401k
from fincalc.core.savings import calculate_college_cost, calculate_savings
from fincalc.domain.accumulation import AccumulationInput
from fincalc.schemas.retirement import Retirement401kRequest
from fincalc.schemas.savings import CollegeCostRequest, SavingsRequest


def test_zero_growth_accumulates_contributions_only():
    """
    With zero return, savings should equal starting balance plus cumulative contributions (no growth boost)
    """
    rows = accumulate(
        AccumulationInput(initial_balance=1000.0, periodic_contribution=100.0, annual_rate_percent=0.0, years=3)
    )

    expected_totals = [2200.0, 3400.0, 4600.0]
    prev = 0.0
    for row, expected_total in zip(rows, expected_totals):
        assert isclose(row.contribution, 1200.0, abs_tol=0.01)
        assert isclose(row.interest_earned, 0.0, abs_tol=1e-9)
        assert isclose(row.ending_balance, expected_total, abs_tol=0.01)
        assert row.ending_balance >= prev, "savings should not decrease without withdrawals"
        prev = row.ending_balance


def test_zero_rate_is_used_not_replaced_by_default():
    response = calculate_savings(SavingsRequest.model_validate({"interest_rate": 0}))

    assert isclose(response.end_balance, 20000.0 + 500.0 * 12 * 10, abs_tol=1e-6)
    assert isclose(response.total_interest, 0.0, abs_tol=1e-6)
    assert isclose(
        response.percent_initial + response.percent_contributions + response.percent_interest,
        100.0,
        abs_tol=1e-9,
    )


def test_zero_growth_tax_tracks_only_differ_by_contribution_tax():
    rows = accumulate_tax_tracks(
        initial_balance=1000.0,
        annual_contribution=1000.0,
        annual_rate_percent=0.0,
        years=2,
        current_tax_percent=25.0,
        start_age=40,
        start_year=2025,
    )

    assert isclose(rows[-1].traditional, 3000.0, abs_tol=1e-9)
    assert isclose(rows[-1].roth, 2500.0, abs_tol=1e-9)
    assert isclose(rows[-1].taxable, rows[-1].roth, abs_tol=1e-9)


def test_zero_return_401k_is_contributions_plus_match():
    request = Retirement401kRequest.model_validate(
        {
            "current_age": 30,
            "retirement_age": 31,
            "life_expectancy": 32,
            "annual_salary": 100000,
            "current_balance": 0,
            "contribution_percent": 10,
            "employer_match": 50,
            "employer_match_limit": 6,
            "annual_return": 0,
            "inflation_rate": 0,
        }
    )

    response = calculate_401k(request)

    assert response.years_to_retirement == 1
    assert isclose(response.total_contributions, 10000.0, abs_tol=1e-9)
    assert isclose(response.employer_contributions, 3000.0, abs_tol=1e-9)
    assert isclose(response.retirement_balance, 13000.0, abs_tol=1e-9)
    assert isclose(response.investment_gains, 0.0, abs_tol=1e-9)
    assert isclose(response.monthly_retirement_income, 13000.0 / 12, abs_tol=1e-9)


def test_zero_return_college_savings_are_drawn_down():
    request = CollegeCostRequest.model_validate(
        {
            "college_type": "custom",
            "custom_cost": 10000,
            "cost_increase_rate": 0,
            "years_to_college": 0,
            "college_duration": 4,
            "current_savings": 20000,
            "percent_from_savings": 100,
            "investment_return": 0,
            "current_year": 2025,
        }
    )

    response = calculate_college_cost(request)

    assert [row.savings_used for row in response.yearly_breakdown] == [10000.0, 10000.0, 0.0, 0.0]
    assert [row.start_year for row in response.yearly_breakdown] == [2025, 2026, 2027, 2028]
    assert isclose(response.future_total_cost, 40000.0, abs_tol=1e-9)
    assert isclose(response.savings_gap, 20000.0, abs_tol=1e-9)
    assert isclose(response.percent_covered_by_savings, 50.0, abs_tol=1e-9)
    assert isclose(response.amount_needed, 20000.0, abs_tol=1e-9)
