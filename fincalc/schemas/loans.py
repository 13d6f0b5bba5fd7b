"""Data contracts for the loan calculators (amortization, auto, personal, payment)."""

from __future__ import annotations

from datetime import date
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from fincalc.domain.amortization import AmortizationRow, AnnualAmortizationRow
from fincalc.domain.common import Status
from fincalc.schemas.base import NON_NEGATIVE, PERCENT, POSITIVE, CalculatorRequest


class AmortizationRequest(CalculatorRequest):
    loan_amount: float = Field(250000.0, json_schema_extra=POSITIVE)
    loan_term_years: int = Field(30, json_schema_extra=NON_NEGATIVE)
    loan_term_months: int = Field(0, json_schema_extra=NON_NEGATIVE)
    interest_rate: float = Field(6.5, json_schema_extra=NON_NEGATIVE, description="Annual rate in percent.")
    start_month: int = Field(1, json_schema_extra={"positive": True, "at_most": 12})
    start_year: int = Field(2025, json_schema_extra={"positive": True, "at_most": 9999})

    extra_monthly_payment: float = Field(0.0, json_schema_extra=NON_NEGATIVE)
    extra_monthly_start: int = Field(1, json_schema_extra=POSITIVE)
    extra_yearly_payment: float = Field(0.0, json_schema_extra=NON_NEGATIVE)
    extra_yearly_start: int = Field(1, json_schema_extra=POSITIVE)
    extra_one_time_payment: float = Field(0.0, json_schema_extra=NON_NEGATIVE)
    extra_one_time_period: int = Field(1, json_schema_extra=POSITIVE)


class AmortizationResponse(BaseModel):
    status: Status
    reason: Optional[str] = None
    monthly_payment: float
    total_payment: float
    total_interest: float
    periods: int
    payoff_date: Optional[date] = None
    interest_saved: Optional[float] = None
    periods_saved: Optional[int] = None
    schedule: List[AmortizationRow]
    annual_schedule: List[AnnualAmortizationRow]


class AutoLoanRequest(CalculatorRequest):
    auto_price: float = Field(30000.0, json_schema_extra=POSITIVE)
    down_payment: float = Field(6000.0, json_schema_extra=NON_NEGATIVE)
    trade_in_value: float = Field(0.0, json_schema_extra=NON_NEGATIVE)
    amount_owed_on_trade_in: float = Field(0.0, json_schema_extra=NON_NEGATIVE)
    sales_tax_rate: float = Field(8.0, json_schema_extra=PERCENT)
    title_fees: float = Field(300.0, json_schema_extra=NON_NEGATIVE)
    interest_rate: float = Field(6.0, json_schema_extra=NON_NEGATIVE)
    loan_term_months: int = Field(60, json_schema_extra=POSITIVE)
    cash_incentives: float = Field(0.0, json_schema_extra=NON_NEGATIVE)
    include_taxes_in_loan: bool = True


class AutoLoanResponse(BaseModel):
    status: Status
    reason: Optional[str] = None
    loan_amount: float
    sales_tax: float
    upfront_payment: float
    monthly_payment: float
    total_of_payments: float
    total_interest: float
    total_cost: float
    principal_percentage: float
    interest_percentage: float
    schedule: List[AmortizationRow]
    annual_schedule: List[AnnualAmortizationRow]


class PersonalLoanRequest(CalculatorRequest):
    loan_amount: float = Field(20000.0, json_schema_extra=POSITIVE)
    interest_rate: float = Field(7.5, json_schema_extra=NON_NEGATIVE)
    loan_term_years: int = Field(5, json_schema_extra=NON_NEGATIVE)
    loan_term_months: int = Field(0, json_schema_extra=NON_NEGATIVE)
    origination_fee_type: Literal["percentage", "fixed"] = "percentage"
    origination_fee_percent: float = Field(2.0, json_schema_extra=PERCENT)
    origination_fee_fixed: float = Field(0.0, json_schema_extra=NON_NEGATIVE)
    insurance_premium: float = Field(0.0, json_schema_extra=NON_NEGATIVE, description="Monthly premium.")
    start_date: Optional[date] = None


class PersonalLoanResponse(BaseModel):
    status: Status
    reason: Optional[str] = None
    monthly_payment: float
    total_payment: float
    total_interest: float
    loan_amount: float
    origination_fee: float
    total_insurance: float
    total_with_fees: float
    real_apr: Optional[float] = Field(
        None,
        description="Annual rate equating net proceeds with payments plus insurance (IRR).",
    )
    approximate_apr: Optional[float] = Field(
        None,
        description="Average-balance estimate of the real APR; an approximation, not an IRR.",
    )
    payoff_date: Optional[date] = None
    schedule: List[AmortizationRow]


class PaymentRequest(CalculatorRequest):
    mode: Literal["fixed_term", "fixed_payment"] = "fixed_term"
    loan_amount: float = Field(200000.0, json_schema_extra=POSITIVE)
    loan_term: int = Field(15, json_schema_extra=POSITIVE, description="Years, fixed-term mode only.")
    interest_rate: float = Field(6.0, json_schema_extra=NON_NEGATIVE)
    monthly_payment: float = Field(2000.0, json_schema_extra=POSITIVE, description="Fixed-payment mode only.")


class PaymentResponse(BaseModel):
    mode: Literal["fixed_term", "fixed_payment"]
    status: Status
    reason: Optional[str] = None
    principal: float
    monthly_payment: float
    total_payment: Optional[float] = None
    total_interest: Optional[float] = None
    payoff_periods: Optional[float] = None
    years_to_payoff: Optional[int] = None
    months_remaining: Optional[int] = None
    schedule: List[AmortizationRow]
    annual_schedule: List[AnnualAmortizationRow]
