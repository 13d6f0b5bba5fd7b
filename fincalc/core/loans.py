"""Loan page calculators built on the amortization engine."""

from __future__ import annotations

import logging
import math
from datetime import date
from typing import Optional

from fincalc.core.amortization import (
    add_months,
    amortize,
    annual_summary,
    periodic_rate,
    solve_periods,
)
from fincalc.domain.amortization import ExtraPayments, LoanInput
from fincalc.domain.common import MAX_PERIODS, InvalidInputError, Status
from fincalc.schemas.loans import (
    AmortizationRequest,
    AmortizationResponse,
    AutoLoanRequest,
    AutoLoanResponse,
    PaymentRequest,
    PaymentResponse,
    PersonalLoanRequest,
    PersonalLoanResponse,
)

logger = logging.getLogger(__name__)

MAX_APR_ITERATIONS = 200


def _term_in_months(years: int, months: int) -> int:
    total = years * 12 + months
    if total <= 0:
        raise InvalidInputError(["loan term must be at least one month"])
    return total


def calculate_amortization(
    request: AmortizationRequest,
    max_periods: int = MAX_PERIODS,
) -> AmortizationResponse:
    term = _term_in_months(request.loan_term_years, request.loan_term_months)
    extra = ExtraPayments(
        monthly=request.extra_monthly_payment,
        monthly_start=request.extra_monthly_start,
        yearly=request.extra_yearly_payment,
        yearly_start=request.extra_yearly_start,
        one_time=request.extra_one_time_payment,
        one_time_period=request.extra_one_time_period,
    )
    loan = LoanInput(
        principal=request.loan_amount,
        annual_rate_percent=request.interest_rate,
        term_periods=term,
        extra=extra,
        start=date(request.start_year, request.start_month, 1),
    )
    schedule = amortize(loan, max_periods=max_periods)

    interest_saved: Optional[float] = None
    periods_saved: Optional[int] = None
    if extra.has_any and schedule.converged:
        baseline = amortize(loan.model_copy(update={"extra": None}), max_periods=max_periods)
        interest_saved = baseline.total_interest - schedule.total_interest
        periods_saved = baseline.periods - schedule.periods

    return AmortizationResponse(
        status=schedule.status,
        reason=schedule.reason,
        monthly_payment=schedule.payment,
        total_payment=schedule.total_payment,
        total_interest=schedule.total_interest,
        periods=schedule.periods,
        payoff_date=schedule.payoff_date,
        interest_saved=interest_saved,
        periods_saved=periods_saved,
        schedule=schedule.rows,
        annual_schedule=annual_summary(schedule.rows, start_year=request.start_year),
    )


def calculate_auto_loan(
    request: AutoLoanRequest,
    max_periods: int = MAX_PERIODS,
) -> AutoLoanResponse:
    """Finance a vehicle purchase.

    Sales tax applies to the price net of the trade-in. Taxes and fees are
    either rolled into the loan or paid upfront.
    """
    taxable = max(0.0, request.auto_price - request.trade_in_value)
    sales_tax = taxable * request.sales_tax_rate / 100.0
    taxes_and_fees = sales_tax + request.title_fees

    loan_amount = (
        request.auto_price
        - request.down_payment
        - request.trade_in_value
        + request.amount_owed_on_trade_in
        - request.cash_incentives
    )
    if request.include_taxes_in_loan:
        loan_amount += taxes_and_fees
    upfront = (
        request.down_payment
        + request.trade_in_value
        - request.amount_owed_on_trade_in
        + (0.0 if request.include_taxes_in_loan else taxes_and_fees)
    )

    if loan_amount <= 0:
        raise InvalidInputError(
            [f"nothing to finance: down payment, trade-in and incentives cover the price ({loan_amount:.2f})"]
        )

    schedule = amortize(
        LoanInput(
            principal=loan_amount,
            annual_rate_percent=request.interest_rate,
            term_periods=request.loan_term_months,
        ),
        max_periods=max_periods,
    )
    total_of_payments = schedule.total_payment
    total_interest = schedule.total_interest

    return AutoLoanResponse(
        status=schedule.status,
        reason=schedule.reason,
        loan_amount=loan_amount,
        sales_tax=sales_tax,
        upfront_payment=upfront,
        monthly_payment=schedule.payment,
        total_of_payments=total_of_payments,
        total_interest=total_interest,
        total_cost=upfront + total_of_payments,
        principal_percentage=loan_amount / total_of_payments * 100.0 if total_of_payments else 0.0,
        interest_percentage=total_interest / total_of_payments * 100.0 if total_of_payments else 0.0,
        schedule=schedule.rows,
        annual_schedule=annual_summary(schedule.rows),
    )


def real_apr(
    net_proceeds: float,
    payment: float,
    periods: int,
    periods_per_year: int = 12,
    max_iterations: int = MAX_APR_ITERATIONS,
) -> Optional[float]:
    """Annual percentage rate at which ``periods`` payments are worth ``net_proceeds``.

    Solved by bisection on the per-period rate. Returns None when no
    non-negative rate exists (payments total less than the proceeds) or the
    bracket cannot be established.
    """
    if net_proceeds <= 0 or payment <= 0 or periods <= 0:
        return None
    if payment * periods < net_proceeds:
        return None

    def present_value(rate: float) -> float:
        if rate == 0:
            return payment * periods
        return payment * (1.0 - (1.0 + rate) ** -periods) / rate

    low, high = 0.0, 1.0
    for _ in range(64):
        if present_value(high) <= net_proceeds:
            break
        low, high = high, high * 2.0
    else:
        logger.warning("real APR bracket not found for proceeds %.2f", net_proceeds)
        return None

    for _ in range(max_iterations):
        middle = (low + high) / 2.0
        if present_value(middle) > net_proceeds:
            low = middle
        else:
            high = middle
        if high - low < 1e-12:
            break

    return (low + high) / 2.0 * periods_per_year * 100.0


def approximate_apr(
    principal: float,
    origination_fee: float,
    total_cost: float,
    periods: int,
) -> Optional[float]:
    """Average-balance estimate: mean monthly cost over half the net proceeds.

    This overstates the true APR for ordinary loans and is only reported
    alongside ``real_apr`` for comparison.
    """
    effective_principal = principal - origination_fee
    if effective_principal <= 0 or periods <= 0:
        return None
    average_monthly_cost = (total_cost - effective_principal) / periods
    return average_monthly_cost / (effective_principal / 2.0) * 12.0 * 100.0


def calculate_personal_loan(
    request: PersonalLoanRequest,
    max_periods: int = MAX_PERIODS,
) -> PersonalLoanResponse:
    term = _term_in_months(request.loan_term_years, request.loan_term_months)
    if request.origination_fee_type == "percentage":
        origination_fee = request.loan_amount * request.origination_fee_percent / 100.0
    else:
        origination_fee = request.origination_fee_fixed

    # first payment is due one month after the loan starts
    start = (request.start_date or date.today()).replace(day=1)
    schedule = amortize(
        LoanInput(
            principal=request.loan_amount,
            annual_rate_percent=request.interest_rate,
            term_periods=term,
            start=add_months(start, 1),
        ),
        max_periods=max_periods,
    )

    total_payment = schedule.total_payment
    total_insurance = request.insurance_premium * schedule.periods

    return PersonalLoanResponse(
        status=schedule.status,
        reason=schedule.reason,
        monthly_payment=schedule.payment,
        total_payment=total_payment,
        total_interest=schedule.total_interest,
        loan_amount=request.loan_amount,
        origination_fee=origination_fee,
        total_insurance=total_insurance,
        total_with_fees=total_payment + origination_fee + total_insurance,
        real_apr=real_apr(
            request.loan_amount - origination_fee,
            schedule.payment + request.insurance_premium,
            schedule.periods,
        ),
        approximate_apr=approximate_apr(
            request.loan_amount,
            origination_fee,
            total_payment + total_insurance,
            schedule.periods,
        ),
        payoff_date=schedule.payoff_date,
        schedule=schedule.rows,
    )


def calculate_payment(
    request: PaymentRequest,
    max_periods: int = MAX_PERIODS,
) -> PaymentResponse:
    """Level payment for a term, or the term for a level payment."""
    rate = periodic_rate(request.interest_rate)

    if request.mode == "fixed_term":
        schedule = amortize(
            LoanInput(
                principal=request.loan_amount,
                annual_rate_percent=request.interest_rate,
                term_periods=request.loan_term * 12,
            ),
            max_periods=max_periods,
        )
        return PaymentResponse(
            mode=request.mode,
            status=schedule.status,
            reason=schedule.reason,
            principal=request.loan_amount,
            monthly_payment=schedule.payment,
            total_payment=schedule.total_payment,
            total_interest=schedule.total_interest,
            payoff_periods=float(schedule.periods),
            years_to_payoff=schedule.periods // 12,
            months_remaining=schedule.periods % 12,
            schedule=schedule.rows,
            annual_schedule=annual_summary(schedule.rows),
        )

    solution = solve_periods(request.loan_amount, request.monthly_payment, rate)
    if solution.status == Status.CONVERGED and solution.periods is not None and solution.periods > max_periods:
        solution = solution.model_copy(
            update={
                "status": Status.NOT_CONVERGED,
                "reason": f"payoff would take {solution.periods:.1f} months, more than {max_periods}",
                "periods": None,
            }
        )
    if solution.status != Status.CONVERGED or solution.periods is None:
        logger.warning("fixed payment %.2f never retires %.2f: %s", request.monthly_payment, request.loan_amount, solution.reason)
        return PaymentResponse(
            mode=request.mode,
            status=Status.NOT_CONVERGED,
            reason=solution.reason,
            principal=request.loan_amount,
            monthly_payment=request.monthly_payment,
            schedule=[],
            annual_schedule=[],
        )

    periods = solution.periods
    schedule = amortize(
        LoanInput(
            principal=request.loan_amount,
            annual_rate_percent=request.interest_rate,
            term_periods=max(1, math.ceil(periods - 1e-9)),
        ),
        payment=request.monthly_payment,
        max_periods=max_periods,
    )

    years, months = divmod(periods, 12)
    months = round(months)
    if months == 12:
        years, months = years + 1, 0

    return PaymentResponse(
        mode=request.mode,
        status=schedule.status,
        reason=schedule.reason,
        principal=request.loan_amount,
        monthly_payment=request.monthly_payment,
        total_payment=schedule.total_payment,
        total_interest=schedule.total_interest,
        payoff_periods=periods,
        years_to_payoff=int(years),
        months_remaining=months,
        schedule=schedule.rows,
        annual_schedule=annual_summary(schedule.rows),
    )
