"""Retirement account calculators (401(k) and IRA)."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List

from fincalc.core.accumulation import accumulate_tax_tracks, grow_year
from fincalc.domain.common import InvalidInputError
from fincalc.schemas.retirement import (
    IRARequest,
    IRAResponse,
    Retirement401kRequest,
    Retirement401kResponse,
    RetirementYearRow,
)

logger = logging.getLogger(__name__)


def _years_until_retirement(current_age: int, retirement_age: int) -> int:
    if retirement_age <= current_age:
        raise InvalidInputError(
            [f"retirement age {retirement_age} must be greater than current age {current_age}"]
        )
    return retirement_age - current_age


def monthly_income(balance: float, annual_real_rate: float, months: int) -> float:
    """Level monthly withdrawal that exhausts ``balance`` over ``months``."""
    if months <= 0:
        return 0.0
    rate = annual_real_rate / 12.0
    if rate > 0:
        return balance * rate / (1.0 - (1.0 + rate) ** -months)
    return balance / months


def calculate_401k(request: Retirement401kRequest) -> Retirement401kResponse:
    """Accumulate salary deferrals plus employer match until retirement.

    Per year: contributions are added at the start of the year, the year's
    return is applied, then the salary gets its raise for the next year.
    Retirement income is the level monthly withdrawal over the years from
    retirement to life expectancy at the inflation-adjusted return.
    """
    years = _years_until_retirement(request.current_age, request.retirement_age)
    growth = 1.0 + request.annual_return / 100.0

    salary = request.annual_salary
    balance = request.current_balance
    total_employee = 0.0
    total_employer = 0.0
    rows: List[RetirementYearRow] = []

    for year in range(years):
        employee = salary * request.contribution_percent / 100.0
        matched = min(salary * request.employer_match_limit / 100.0, employee)
        employer = matched * request.employer_match / 100.0
        contribution = employee + employer

        starting = balance
        balance = grow_year(balance, contribution, 1, growth)
        total_employee += employee
        total_employer += employer

        rows.append(
            RetirementYearRow(
                period=year + 1,
                age=request.current_age + year,
                salary=salary,
                employee_contribution=employee,
                employer_contribution=employer,
                starting_balance=starting,
                contribution=contribution,
                interest_earned=balance - starting - contribution,
                ending_balance=balance,
            )
        )
        salary *= 1.0 + request.salary_increase / 100.0

    real_return = (1.0 + request.annual_return / 100.0) / (1.0 + request.inflation_rate / 100.0) - 1.0
    months_in_retirement = max(0, request.life_expectancy - request.retirement_age) * 12
    income = monthly_income(balance, real_return, months_in_retirement)

    logger.debug("401k balance %.2f at age %d", balance, request.retirement_age)
    return Retirement401kResponse(
        years_to_retirement=years,
        retirement_balance=balance,
        total_contributions=total_employee,
        employer_contributions=total_employer,
        investment_gains=balance - request.current_balance - total_employee - total_employer,
        monthly_retirement_income=income,
        total_retirement_withdrawals=income * months_in_retirement,
        schedule=rows,
    )


def calculate_ira(request: IRARequest) -> IRAResponse:
    """Compare traditional, Roth and taxable growth of the same contribution."""
    years = _years_until_retirement(request.current_age, request.retirement_age)
    rows = accumulate_tax_tracks(
        initial_balance=request.current_balance,
        annual_contribution=request.annual_contribution,
        annual_rate_percent=request.expected_return,
        years=years,
        current_tax_percent=request.current_tax_rate,
        start_age=request.current_age,
        start_year=request.current_year or datetime.now().year,
    )
    final = rows[-1]
    retirement_tax = request.retirement_tax_rate / 100.0
    total_contributions = request.current_balance + request.annual_contribution * years

    return IRAResponse(
        years_to_retirement=years,
        traditional_balance=final.traditional,
        traditional_after_tax=final.traditional * (1.0 - retirement_tax),
        roth_balance=final.roth,
        taxable_balance=final.taxable,
        total_contributions=total_contributions,
        investment_growth=final.traditional - total_contributions,
        tax_savings=final.traditional * retirement_tax,
        schedule=rows,
    )
