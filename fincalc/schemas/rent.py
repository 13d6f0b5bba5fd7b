"""Data contracts for the rent affordability calculator."""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field

from fincalc.schemas.base import NON_NEGATIVE, CalculatorRequest


class DtiBand(str, Enum):
    HEALTHY = "healthy"
    MODERATE = "moderate"
    HIGH = "high"


class RentRequest(CalculatorRequest):
    income: float = Field(75000.0, json_schema_extra=NON_NEGATIVE)
    income_type: Literal["annual", "monthly"] = "annual"
    monthly_debt: float = Field(500.0, json_schema_extra=NON_NEGATIVE)


class RentResponse(BaseModel):
    monthly_income: float
    monthly_debt: float
    income_after_debt: float
    max_rent_at_25_percent: float
    max_rent_at_30_percent: float
    max_rent_at_33_percent: float
    remaining_income_at_25: float
    remaining_income_at_30: float
    remaining_income_at_33: float
    debt_to_income_ratio: float
    debt_to_income_band: DtiBand
