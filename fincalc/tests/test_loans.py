from __future__ import annotations

from datetime import date
from math import ceil, isclose

import pytest

from fincalc.core.loans import (
    approximate_apr,
    calculate_amortization,
    calculate_auto_loan,
    calculate_payment,
    calculate_personal_loan,
    real_apr,
)
from fincalc.domain.common import InvalidInputError, Status
from fincalc.schemas.loans import (
    AmortizationRequest,
    AutoLoanRequest,
    PaymentRequest,
    PersonalLoanRequest,
)


def test_default_mortgage_page():
    response = calculate_amortization(AmortizationRequest())

    assert response.status == Status.CONVERGED
    assert isclose(response.monthly_payment, 1580.17, abs_tol=0.01)
    assert response.periods == 360
    assert response.payoff_date == date(2054, 12, 1)
    assert len(response.annual_schedule) == 30
    assert response.interest_saved is None


def test_extra_payments_report_savings():
    response = calculate_amortization(
        AmortizationRequest(extra_monthly_payment=100, extra_yearly_payment=5000, extra_yearly_start=1)
    )

    assert response.schedule[0].extra == 5100.0
    assert response.schedule[12].extra == 5100.0
    assert response.schedule[1].extra == 100.0
    assert response.interest_saved > 0
    assert response.periods_saved > 0


def test_zero_term_is_rejected():
    with pytest.raises(InvalidInputError):
        calculate_amortization(AmortizationRequest(loan_term_years=0, loan_term_months=0))


def test_auto_loan_rolls_taxes_into_the_loan():
    response = calculate_auto_loan(AutoLoanRequest())

    assert response.sales_tax == 2400.0
    assert response.loan_amount == 30000.0 - 6000.0 + 2400.0 + 300.0
    assert response.upfront_payment == 6000.0
    assert len(response.schedule) == 60
    assert isclose(response.principal_percentage + response.interest_percentage, 100.0, abs_tol=1e-9)
    assert isclose(response.total_cost, response.upfront_payment + response.total_of_payments, abs_tol=1e-9)


def test_auto_loan_taxes_paid_upfront_and_trade_in():
    response = calculate_auto_loan(
        AutoLoanRequest(include_taxes_in_loan=False, trade_in_value=5000, amount_owed_on_trade_in=1000)
    )

    # tax applies to the price net of the trade-in
    assert isclose(response.sales_tax, 2000.0, abs_tol=1e-9)
    assert response.loan_amount == 30000.0 - 6000.0 - 5000.0 + 1000.0
    assert response.upfront_payment == 6000.0 + 5000.0 - 1000.0 + 2000.0 + 300.0


def test_auto_loan_with_nothing_to_finance_is_rejected():
    with pytest.raises(InvalidInputError) as excinfo:
        calculate_auto_loan(AutoLoanRequest(down_payment=30000, include_taxes_in_loan=False))

    assert "nothing to finance" in excinfo.value.errors[0]


def test_real_apr_matches_nominal_rate_without_fees():
    response = calculate_personal_loan(
        PersonalLoanRequest(origination_fee_percent=0, start_date=date(2025, 6, 20))
    )

    assert response.origination_fee == 0.0
    assert isclose(response.real_apr, 7.5, abs_tol=1e-6)
    assert response.schedule[0].payment_date == date(2025, 7, 1)
    assert response.payoff_date == date(2030, 6, 1)


def test_origination_fee_raises_real_apr():
    response = calculate_personal_loan(PersonalLoanRequest(insurance_premium=15))

    assert response.origination_fee == 400.0
    assert response.total_insurance == 15.0 * 60
    assert isclose(
        response.total_with_fees,
        response.total_payment + 400.0 + 900.0,
        abs_tol=1e-9,
    )
    assert response.real_apr > 7.5
    assert response.approximate_apr is not None


def test_real_apr_edge_cases():
    assert real_apr(0.0, 100.0, 12) is None
    assert real_apr(1000.0, 50.0, 12) is None
    assert isclose(real_apr(1200.0, 100.0, 12), 0.0, abs_tol=1e-6)
    assert approximate_apr(1000.0, 1000.0, 1200.0, 12) is None


def test_fixed_term_payment():
    response = calculate_payment(PaymentRequest())

    assert response.status == Status.CONVERGED
    assert isclose(response.monthly_payment, 1687.71, abs_tol=0.01)
    assert response.years_to_payoff == 15
    assert response.months_remaining == 0


def test_fixed_payment_round_trips_fixed_term():
    fixed_term = calculate_payment(PaymentRequest())
    fixed_payment = calculate_payment(
        PaymentRequest(mode="fixed_payment", monthly_payment=fixed_term.monthly_payment)
    )

    assert fixed_payment.status == Status.CONVERGED
    assert isclose(fixed_payment.payoff_periods, 180.0, abs_tol=1e-6)
    assert fixed_payment.years_to_payoff == 15
    assert fixed_payment.months_remaining == 0
    assert isclose(fixed_payment.total_interest, fixed_term.total_interest, abs_tol=0.01)


def test_fixed_payment_schedule_length():
    response = calculate_payment(PaymentRequest(mode="fixed_payment", monthly_payment=2000))

    assert response.status == Status.CONVERGED
    assert len(response.schedule) == ceil(response.payoff_periods)
    assert response.schedule[-1].ending_balance == 0.0
    assert response.schedule[-1].payment <= 2000.0 + 0.01


def test_zero_rate_fixed_payment():
    response = calculate_payment(
        PaymentRequest(mode="fixed_payment", interest_rate=0, loan_amount=200000, monthly_payment=2000)
    )

    assert response.payoff_periods == 100.0
    assert len(response.schedule) == 100
    assert response.years_to_payoff == 8
    assert response.months_remaining == 4
    assert response.total_interest == 0.0


def test_payment_that_never_amortizes():
    response = calculate_payment(PaymentRequest(mode="fixed_payment", monthly_payment=1000))

    assert response.status == Status.NOT_CONVERGED
    assert response.reason
    assert response.total_payment is None
    assert response.total_interest is None
    assert response.schedule == []


def test_payment_beyond_cap_is_not_converged():
    response = calculate_payment(
        PaymentRequest(mode="fixed_payment", monthly_payment=1100),
        max_periods=120,
    )

    assert response.status == Status.NOT_CONVERGED
    assert "120" in response.reason
    assert response.payoff_periods is None
