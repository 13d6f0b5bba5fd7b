"""Data contracts for the 401(k) and IRA calculators."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from fincalc.domain.accumulation import AccumulationRow, TaxTrackRow
from fincalc.schemas.base import NON_NEGATIVE, PERCENT, POSITIVE, CalculatorRequest


class Retirement401kRequest(CalculatorRequest):
    current_age: int = Field(30, json_schema_extra=POSITIVE)
    annual_salary: float = Field(75000.0, json_schema_extra=POSITIVE)
    current_balance: float = Field(50000.0, json_schema_extra=NON_NEGATIVE)
    contribution_percent: float = Field(6.0, json_schema_extra=PERCENT)
    employer_match: float = Field(50.0, json_schema_extra=NON_NEGATIVE, description="Percent of matched pay.")
    employer_match_limit: float = Field(6.0, json_schema_extra=PERCENT, description="Percent of salary matched.")
    retirement_age: int = Field(65, json_schema_extra=POSITIVE)
    life_expectancy: int = Field(85, json_schema_extra=POSITIVE)
    salary_increase: float = Field(2.5, json_schema_extra=NON_NEGATIVE)
    annual_return: float = Field(7.0, json_schema_extra=NON_NEGATIVE)
    inflation_rate: float = Field(2.5, json_schema_extra=NON_NEGATIVE)


class RetirementYearRow(AccumulationRow):
    # inherits period, starting_balance, contribution, interest_earned, ending_balance
    age: int
    salary: float
    employee_contribution: float
    employer_contribution: float


class Retirement401kResponse(BaseModel):
    years_to_retirement: int
    retirement_balance: float
    total_contributions: float
    employer_contributions: float
    investment_gains: float
    monthly_retirement_income: float
    total_retirement_withdrawals: float
    schedule: List[RetirementYearRow]


class IRARequest(CalculatorRequest):
    current_balance: float = Field(50000.0, json_schema_extra=NON_NEGATIVE)
    annual_contribution: float = Field(6500.0, json_schema_extra=NON_NEGATIVE)
    expected_return: float = Field(7.0, json_schema_extra=NON_NEGATIVE)
    current_age: int = Field(35, json_schema_extra=POSITIVE)
    retirement_age: int = Field(65, json_schema_extra=POSITIVE)
    current_tax_rate: float = Field(24.0, json_schema_extra=PERCENT)
    retirement_tax_rate: float = Field(22.0, json_schema_extra=PERCENT)
    current_year: Optional[int] = None


class IRAResponse(BaseModel):
    years_to_retirement: int
    traditional_balance: float
    traditional_after_tax: float
    roth_balance: float
    taxable_balance: float
    total_contributions: float
    investment_growth: float
    tax_savings: float
    schedule: List[TaxTrackRow]
