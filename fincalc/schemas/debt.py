"""Data contracts for the debt payoff calculator."""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field

from fincalc.domain.common import Status
from fincalc.domain.debt import DebtMonthRow, PayoffEvent
from fincalc.schemas.base import NON_NEGATIVE, POSITIVE, CalculatorRequest


class DebtEntry(CalculatorRequest):
    """One row of the debt form. Rows without a balance or minimum are skipped."""

    name: str = ""
    balance: float = Field(0.0, json_schema_extra=NON_NEGATIVE)
    min_payment: float = Field(0.0, json_schema_extra=NON_NEGATIVE)
    interest_rate: float = Field(0.0, json_schema_extra=NON_NEGATIVE, description="Annual rate in percent.")


def _default_debts() -> List[DebtEntry]:
    return [
        DebtEntry(name="Credit Card 1", balance=5000, min_payment=150, interest_rate=18.99),
        DebtEntry(name="Credit Card 2", balance=3500, min_payment=100, interest_rate=15.5),
        DebtEntry(name="Personal Loan", balance=8000, min_payment=200, interest_rate=12.0),
    ]


class DebtPayoffRequest(CalculatorRequest):
    debts: List[DebtEntry] = Field(default_factory=_default_debts)
    extra_monthly: float = Field(200.0, json_schema_extra=NON_NEGATIVE)
    extra_yearly: float = Field(1000.0, json_schema_extra=NON_NEGATIVE)
    extra_yearly_month: int = Field(1, json_schema_extra=POSITIVE)
    one_time_payment: float = Field(0.0, json_schema_extra=NON_NEGATIVE)
    one_time_month: int = Field(0, json_schema_extra=NON_NEGATIVE, description="0 means no one-time payment.")
    rollover_minimums: bool = False


class DebtPayoffResponse(BaseModel):
    status: Status
    reason: Optional[str] = None
    total_debt: float
    total_min_payment: float
    payoff_months: Optional[int] = None
    payoff_date: Optional[date] = None
    total_interest: Optional[float] = None
    total_paid: Optional[float] = None
    baseline_status: Status
    baseline_reason: Optional[str] = None
    baseline_months: Optional[int] = None
    baseline_interest: Optional[float] = None
    months_saved: Optional[int] = None
    interest_saved: Optional[float] = None
    events: List[PayoffEvent]
    schedule: List[DebtMonthRow]
