"""Savings and college-cost calculators built on the accumulation engine."""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import List

from fincalc.core.accumulation import accumulate
from fincalc.domain.accumulation import COMPOUNDING_FREQUENCIES, AccumulationInput
from fincalc.schemas.savings import (
    COLLEGE_COSTS,
    CollegeCostRequest,
    CollegeCostResponse,
    CollegeYearRow,
    SavingsRequest,
    SavingsResponse,
)

logger = logging.getLogger(__name__)


def _share(part: float, whole: float) -> float:
    return part / whole * 100.0 if whole else 0.0


def calculate_savings(request: SavingsRequest) -> SavingsResponse:
    """Monthly contributions compounded at the chosen frequency."""
    rows = accumulate(
        AccumulationInput(
            initial_balance=request.initial_deposit,
            periodic_contribution=request.monthly_contribution,
            annual_rate_percent=request.interest_rate,
            years=request.years_to_save,
            compounding_per_year=request.compounding_frequency,
            contributions_per_year=12,
            contribution_growth_percent=request.contribution_increase,
        )
    )

    end_balance = rows[-1].ending_balance if rows else request.initial_deposit
    total_contributions = sum(row.contribution for row in rows)
    total_interest = sum(row.interest_earned for row in rows)

    return SavingsResponse(
        end_balance=end_balance,
        initial_deposit=request.initial_deposit,
        total_contributions=total_contributions,
        total_interest=total_interest,
        percent_initial=_share(request.initial_deposit, end_balance),
        percent_contributions=_share(total_contributions, end_balance),
        percent_interest=_share(total_interest, end_balance),
        compounding=COMPOUNDING_FREQUENCIES[request.compounding_frequency],
        schedule=rows,
    )


def calculate_college_cost(request: CollegeCostRequest) -> CollegeCostResponse:
    """Project tuition inflation against a savings pot drawn down each year.

    Each college year draws the smaller of the remaining savings and the
    target share of that year's cost. Savings stop growing once college starts.
    """
    if request.college_type == "custom":
        annual_cost = request.custom_cost
    else:
        annual_cost = COLLEGE_COSTS[request.college_type]

    inflation = request.cost_increase_rate / 100.0
    share_from_savings = request.percent_from_savings / 100.0
    after_tax_return = request.investment_return / 100.0 * (1.0 - request.tax_rate / 100.0)
    years_until = request.years_to_college

    future_savings = request.current_savings * (1.0 + after_tax_return) ** years_until
    current_year = request.current_year or datetime.now().year

    rows: List[CollegeYearRow] = []
    remaining = future_savings
    future_total = 0.0
    for year in range(request.college_duration):
        cost = annual_cost * (1.0 + inflation) ** (years_until + year)
        future_total += cost

        used = min(remaining, cost * share_from_savings)
        remaining -= used
        rows.append(
            CollegeYearRow(
                year=year + 1,
                start_year=current_year + math.floor(years_until) + year,
                annual_cost=cost,
                savings_used=used,
                remaining_needed=cost - used,
                savings_balance=remaining,
            )
        )

    covered = min(future_savings, future_total * share_from_savings)
    logger.debug(
        "college cost %.2f over %d years, savings cover %.2f",
        future_total,
        request.college_duration,
        covered,
    )

    return CollegeCostResponse(
        annual_cost_today=annual_cost,
        total_cost=annual_cost * request.college_duration,
        future_total_cost=future_total,
        current_savings=request.current_savings,
        future_savings=future_savings,
        savings_gap=max(0.0, future_total - future_savings),
        percent_covered_by_savings=_share(covered, future_total),
        amount_needed=future_total - covered,
        yearly_breakdown=rows,
    )
