"""Fixed-payment loan schedules.

Conventions:
  - ``rate`` arguments are per-period decimals (6% a year paid monthly is 0.005).
  - Interest for a period accrues on the balance carried into that period.
  - The last payment absorbs any residual at or below ``EPSILON`` so the final
    ending balance is exactly zero.
"""

from __future__ import annotations

import logging
import math
from datetime import MAXYEAR, date
from typing import Iterable, List, Optional

from fincalc.domain.amortization import (
    AmortizationRow,
    AmortizationSchedule,
    AnnualAmortizationRow,
    ExtraPayments,
    LoanInput,
    PeriodSolution,
)
from fincalc.domain.common import EPSILON, MAX_PERIODS, InvalidInputError, Status

logger = logging.getLogger(__name__)


def periodic_rate(annual_rate_percent: float, periods_per_year: int = 12) -> float:
    return annual_rate_percent / 100.0 / periods_per_year


def level_payment(principal: float, rate: float, periods: int) -> float:
    """Payment that retires ``principal`` in exactly ``periods`` equal installments."""
    if periods <= 0:
        raise InvalidInputError([f"number of periods must be positive, got {periods}"])
    if rate == 0:
        return principal / periods
    growth = (1.0 + rate) ** periods
    return principal * rate * growth / (growth - 1.0)


def solve_periods(principal: float, payment: float, rate: float) -> PeriodSolution:
    """Solve n = -ln(1 - r*P/M) / ln(1 + r) for a fixed payment M."""
    if principal <= 0:
        return PeriodSolution(status=Status.CONVERGED, periods=0.0)
    if payment <= 0:
        return PeriodSolution(
            status=Status.NOT_CONVERGED,
            reason="payment must be greater than zero",
        )
    if rate == 0:
        return PeriodSolution(status=Status.CONVERGED, periods=principal / payment)

    interest = principal * rate
    if payment <= interest:
        return PeriodSolution(
            status=Status.NOT_CONVERGED,
            reason=(
                f"payment {payment:.2f} does not exceed the first period's "
                f"interest {interest:.2f}; the loan never amortizes"
            ),
        )
    periods = -math.log(1.0 - rate * principal / payment) / math.log(1.0 + rate)
    return PeriodSolution(status=Status.CONVERGED, periods=periods)


def add_months(start: date, months: int) -> date:
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    if year > MAXYEAR:
        raise InvalidInputError([f"schedule runs past the year {MAXYEAR}; choose an earlier start"])
    return date(year, month_index % 12 + 1, 1)


def amortize(
    loan: LoanInput,
    payment: Optional[float] = None,
    max_periods: int = MAX_PERIODS,
) -> AmortizationSchedule:
    """Run ``loan`` to payoff at ``payment`` (the level payment when omitted).

    Order of operations per period:
      1) interest = balance * rate
      2) principal = payment - interest + extra for this period
      3) principal is clamped to the balance; a residual <= EPSILON is folded in
    """
    if loan.term_periods > max_periods:
        raise InvalidInputError(
            [f"term of {loan.term_periods} periods exceeds the limit of {max_periods}"]
        )

    rate = periodic_rate(loan.annual_rate_percent, loan.periods_per_year)
    if payment is None:
        payment = level_payment(loan.principal, rate, loan.term_periods)
    extra = loan.extra or ExtraPayments()

    # without extras a payment at or below the first interest charge never shrinks the balance
    if not extra.has_any and loan.principal > EPSILON and payment <= loan.principal * rate:
        reason = (
            f"payment {payment:.2f} does not cover interest of "
            f"{loan.principal * rate:.2f} per period"
        )
        logger.warning("amortization did not converge: %s", reason)
        return AmortizationSchedule(status=Status.NOT_CONVERGED, reason=reason, payment=payment)

    rows: List[AmortizationRow] = []
    balance = float(loan.principal)
    period = 0

    while balance > EPSILON:
        if period >= max_periods:
            reason = f"balance {balance:.2f} remains after {max_periods} periods"
            logger.warning("amortization did not converge: %s", reason)
            return AmortizationSchedule(status=Status.NOT_CONVERGED, reason=reason, payment=payment)

        period += 1
        interest = balance * rate
        scheduled = payment - interest
        extra_amount = extra.for_period(period)
        principal = scheduled + extra_amount

        if principal >= balance - EPSILON:
            principal = balance
            extra_amount = max(0.0, min(extra_amount, principal - scheduled))

        balance -= principal
        if balance < 0:
            balance = 0.0

        rows.append(
            AmortizationRow(
                period=period,
                payment=interest + principal,
                principal=principal,
                interest=interest,
                extra=extra_amount,
                ending_balance=balance,
                payment_date=add_months(loan.start, period - 1) if loan.start else None,
            )
        )

    schedule = AmortizationSchedule(status=Status.CONVERGED, payment=payment, rows=rows)
    logger.debug(
        "amortized %.2f at %.4f%% in %d periods, interest %.2f",
        loan.principal,
        loan.annual_rate_percent,
        schedule.periods,
        schedule.total_interest,
    )
    return schedule


def annual_summary(
    rows: Iterable[AmortizationRow],
    start_year: Optional[int] = None,
) -> List[AnnualAmortizationRow]:
    """Collapse a monthly schedule into 12-period buckets.

    Buckets follow the loan year, so ``year`` is ``start_year`` plus the
    bucket index when given and the 1-based loan year otherwise.
    """
    rows = list(rows)
    summary: List[AnnualAmortizationRow] = []
    for index in range(0, len(rows), 12):
        bucket = rows[index:index + 12]
        offset = index // 12
        summary.append(
            AnnualAmortizationRow(
                year=(start_year + offset) if start_year is not None else offset + 1,
                payment=sum(row.payment for row in bucket),
                principal=sum(row.principal for row in bucket),
                interest=sum(row.interest for row in bucket),
                ending_balance=bucket[-1].ending_balance,
            )
        )
    return summary
