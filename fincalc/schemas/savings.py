"""Data contracts for the savings and college-cost calculators."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from fincalc.domain.accumulation import AccumulationRow
from fincalc.schemas.base import NON_NEGATIVE, PERCENT, POSITIVE, CalculatorRequest

# average annual cost in today's dollars
COLLEGE_COSTS = {
    "public-4-year-instate": 29910.0,
    "public-4-year-outstate": 49080.0,
    "private-4-year": 62990.0,
    "public-2-year": 20570.0,
}

CollegeType = Literal[
    "public-4-year-instate",
    "public-4-year-outstate",
    "private-4-year",
    "public-2-year",
    "custom",
]


class SavingsRequest(CalculatorRequest):
    initial_deposit: float = Field(20000.0, json_schema_extra=NON_NEGATIVE)
    monthly_contribution: float = Field(500.0, json_schema_extra=NON_NEGATIVE)
    interest_rate: float = Field(4.5, json_schema_extra=NON_NEGATIVE)
    years_to_save: int = Field(10, json_schema_extra=POSITIVE)
    compounding_frequency: int = Field(12, json_schema_extra=POSITIVE, description="Compounding periods per year.")
    contribution_increase: float = Field(0.0, json_schema_extra=NON_NEGATIVE, description="Yearly raise in percent.")


class SavingsResponse(BaseModel):
    end_balance: float
    initial_deposit: float
    total_contributions: float
    total_interest: float
    percent_initial: float
    percent_contributions: float
    percent_interest: float
    compounding: str
    schedule: List[AccumulationRow]


class CollegeCostRequest(CalculatorRequest):
    college_type: CollegeType = "public-4-year-instate"
    custom_cost: float = Field(29910.0, json_schema_extra=POSITIVE)
    cost_increase_rate: float = Field(5.0, json_schema_extra=NON_NEGATIVE)
    years_to_college: float = Field(10.0, json_schema_extra=NON_NEGATIVE)
    college_duration: int = Field(4, json_schema_extra=POSITIVE)
    current_savings: float = Field(50000.0, json_schema_extra=NON_NEGATIVE)
    percent_from_savings: float = Field(75.0, json_schema_extra=PERCENT)
    investment_return: float = Field(6.0, json_schema_extra=NON_NEGATIVE)
    tax_rate: float = Field(0.0, json_schema_extra=PERCENT, description="Tax on investment returns.")
    current_year: Optional[int] = None


class CollegeYearRow(BaseModel):
    year: int
    start_year: int
    annual_cost: float
    savings_used: float
    remaining_needed: float
    savings_balance: float


class CollegeCostResponse(BaseModel):
    annual_cost_today: float
    total_cost: float
    future_total_cost: float
    current_savings: float
    future_savings: float
    savings_gap: float
    percent_covered_by_savings: float
    amount_needed: float
    yearly_breakdown: List[CollegeYearRow]
