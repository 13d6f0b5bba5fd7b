"""Debt avalanche simulation.

Each month:
  1) every open debt accrues interest and receives its minimum payment
  2) the month's extra budget goes to the highest-rate open debt, with any
     remainder rolling down to the next one
  3) debts that reached zero this month get a PayoffEvent

The baseline run uses the same monthly step with no extra budget.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional

from fincalc.core.amortization import add_months
from fincalc.domain.common import EPSILON, MAX_PERIODS, InvalidInputError, Status
from fincalc.domain.debt import (
    Debt,
    DebtMonthRow,
    ExtraBudget,
    PayoffEvent,
    PayoffSimulation,
)
from fincalc.schemas.debt import DebtPayoffRequest, DebtPayoffResponse

logger = logging.getLogger(__name__)


@dataclass
class DebtState:
    """Working copy of a Debt; the caller's list is never touched."""

    name: str
    original_balance: float
    min_payment: float
    annual_rate_percent: float
    balance: float
    interest_paid: float = 0.0
    payoff_month: Optional[int] = None

    @classmethod
    def from_debt(cls, debt: Debt) -> "DebtState":
        return cls(
            name=debt.name,
            original_balance=debt.balance,
            min_payment=debt.min_payment,
            annual_rate_percent=debt.annual_rate_percent,
            balance=debt.balance,
        )

    @property
    def monthly_rate(self) -> float:
        return self.annual_rate_percent / 100.0 / 12.0

    @property
    def is_open(self) -> bool:
        return self.balance > 0


def _settle(balance: float) -> float:
    return 0.0 if balance <= EPSILON else balance


def avalanche_order(debts: Iterable[Debt]) -> List[Debt]:
    """Highest rate first; equal rates keep their input order."""
    return sorted(debts, key=lambda debt: debt.annual_rate_percent, reverse=True)


def apply_minimums(states: List[DebtState]) -> tuple[float, float]:
    """Accrue one month of interest and pay minimums. Returns (interest, paid)."""
    interest_total = 0.0
    paid_total = 0.0
    for state in states:
        if not state.is_open:
            continue
        interest = state.balance * state.monthly_rate
        state.interest_paid += interest
        principal = min(state.min_payment - interest, state.balance)
        state.balance = _settle(max(0.0, state.balance - principal))
        interest_total += interest
        paid_total += interest + principal
    return interest_total, paid_total


def allocate_extra(states: List[DebtState], available: float) -> float:
    """Pour ``available`` into open debts in order. Returns the amount used."""
    used = 0.0
    for state in states:
        if available <= 0:
            break
        if not state.is_open:
            continue
        payment = min(available, state.balance)
        state.balance = _settle(state.balance - payment)
        available -= payment
        used += payment
    return used


def simulate_payoff(
    debts: Iterable[Debt],
    budget: Optional[ExtraBudget] = None,
    rollover_minimums: bool = False,
    max_months: int = MAX_PERIODS,
) -> PayoffSimulation:
    """Simulate month-by-month payoff of ``debts`` in avalanche order.

    With ``rollover_minimums`` the minimum payment of every debt already paid
    off joins the extra budget in later months.
    """
    states = [DebtState.from_debt(debt) for debt in avalanche_order(debts)]
    rows: List[DebtMonthRow] = []
    events: List[PayoffEvent] = []
    month = 0

    while any(state.is_open for state in states):
        if month >= max_months:
            remaining = sum(state.balance for state in states)
            reason = f"payoff not achievable within {max_months} months; {remaining:.2f} still owed"
            logger.warning("debt payoff did not converge: %s", reason)
            return PayoffSimulation(status=Status.NOT_CONVERGED, reason=reason)

        month += 1
        interest, paid = apply_minimums(states)

        available = budget.for_month(month) if budget else 0.0
        if rollover_minimums:
            available += sum(state.min_payment for state in states if state.payoff_month is not None)
        extra_used = allocate_extra(states, available)

        for state in states:
            if not state.is_open and state.payoff_month is None:
                state.payoff_month = month
                events.append(
                    PayoffEvent(
                        debt_name=state.name,
                        balance=state.original_balance,
                        annual_rate_percent=state.annual_rate_percent,
                        payoff_period=month,
                        total_interest=state.interest_paid,
                    )
                )

        rows.append(
            DebtMonthRow(
                month=month,
                interest=interest,
                payment=paid + extra_used,
                extra_applied=extra_used,
                remaining_balance=sum(state.balance for state in states),
            )
        )

    simulation = PayoffSimulation(status=Status.CONVERGED, events=events, rows=rows)
    logger.debug(
        "paid off %d debts in %d months, interest %.2f",
        len(states),
        simulation.months,
        simulation.total_interest,
    )
    return simulation


def calculate_debt_payoff(
    request: DebtPayoffRequest,
    max_periods: int = MAX_PERIODS,
    today: Optional[date] = None,
) -> DebtPayoffResponse:
    """Avalanche payoff against the minimum-only baseline."""
    debts = [
        Debt(
            name=entry.name.strip() or "Unnamed Debt",
            balance=entry.balance,
            min_payment=entry.min_payment,
            annual_rate_percent=entry.interest_rate,
        )
        for entry in request.debts
        if entry.balance > 0 and entry.min_payment > 0
    ]
    if not debts:
        raise InvalidInputError(["at least one debt with a positive balance and minimum payment is required"])

    budget = ExtraBudget(
        monthly=request.extra_monthly,
        yearly=request.extra_yearly,
        yearly_month=request.extra_yearly_month,
        one_time=request.one_time_payment,
        one_time_month=request.one_time_month,
    )

    plan = simulate_payoff(debts, budget, request.rollover_minimums, max_periods)
    baseline = simulate_payoff(debts, None, False, max_periods)

    months_saved: Optional[int] = None
    interest_saved: Optional[float] = None
    if plan.converged and baseline.converged:
        months_saved = max(0, baseline.months - plan.months)
        interest_saved = max(0.0, baseline.total_interest - plan.total_interest)

    start = (today or date.today()).replace(day=1)
    return DebtPayoffResponse(
        status=plan.status,
        reason=plan.reason,
        total_debt=sum(debt.balance for debt in debts),
        total_min_payment=sum(debt.min_payment for debt in debts),
        payoff_months=plan.months if plan.converged else None,
        payoff_date=add_months(start, plan.months) if plan.converged else None,
        total_interest=plan.total_interest if plan.converged else None,
        total_paid=plan.total_paid if plan.converged else None,
        baseline_status=baseline.status,
        baseline_reason=baseline.reason,
        baseline_months=baseline.months if baseline.converged else None,
        baseline_interest=baseline.total_interest if baseline.converged else None,
        months_saved=months_saved,
        interest_saved=interest_saved,
        events=plan.events,
        schedule=plan.rows,
    )
