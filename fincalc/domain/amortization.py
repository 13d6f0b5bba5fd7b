from __future__ import annotations

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from fincalc.domain.common import Status


class ExtraPayments(BaseModel):
    """Extra principal on top of the level payment.

    Periods are 1-based. The yearly lump sum lands in ``yearly_start`` and
    every 12 periods after it, which is the same calendar month each year.
    """

    model_config = ConfigDict(extra="forbid")

    monthly: float = Field(0.0, ge=0)
    monthly_start: int = Field(1, ge=1)
    yearly: float = Field(0.0, ge=0)
    yearly_start: int = Field(1, ge=1)
    one_time: float = Field(0.0, ge=0)
    one_time_period: int = Field(1, ge=1)

    def for_period(self, period: int) -> float:
        amount = 0.0
        if self.monthly > 0 and period >= self.monthly_start:
            amount += self.monthly
        if self.yearly > 0 and period >= self.yearly_start and (period - self.yearly_start) % 12 == 0:
            amount += self.yearly
        if self.one_time > 0 and period == self.one_time_period:
            amount += self.one_time
        return amount

    @property
    def has_any(self) -> bool:
        return self.monthly > 0 or self.yearly > 0 or self.one_time > 0


class LoanInput(BaseModel):
    model_config = ConfigDict(extra="forbid")

    principal: float = Field(ge=0)
    annual_rate_percent: float = Field(ge=0)
    term_periods: int = Field(gt=0)
    periods_per_year: int = Field(12, gt=0)
    extra: Optional[ExtraPayments] = None
    start: Optional[date] = None


class AmortizationRow(BaseModel):
    model_config = ConfigDict(extra="forbid")

    period: int
    payment: float
    principal: float
    interest: float
    extra: float = 0.0
    ending_balance: float
    payment_date: Optional[date] = None


class AnnualAmortizationRow(BaseModel):
    model_config = ConfigDict(extra="forbid")

    year: int
    payment: float
    principal: float
    interest: float
    ending_balance: float


class AmortizationSchedule(BaseModel):
    """Outcome of running a loan to payoff.

    When ``status`` is ``not_converged`` the loan never amortizes within the
    iteration cap, ``reason`` says why and ``rows`` is empty.
    """

    model_config = ConfigDict(extra="forbid")

    status: Status
    reason: Optional[str] = None
    payment: float
    rows: List[AmortizationRow] = Field(default_factory=list)

    @property
    def converged(self) -> bool:
        return self.status == Status.CONVERGED

    @property
    def periods(self) -> int:
        return len(self.rows)

    @property
    def total_payment(self) -> float:
        return sum(row.payment for row in self.rows)

    @property
    def total_interest(self) -> float:
        return sum(row.interest for row in self.rows)

    @property
    def total_principal(self) -> float:
        return sum(row.principal for row in self.rows)

    @property
    def payoff_date(self) -> Optional[date]:
        return self.rows[-1].payment_date if self.rows else None


class PeriodSolution(BaseModel):
    """Number of periods needed to retire a loan at a fixed payment."""

    model_config = ConfigDict(extra="forbid")

    status: Status
    reason: Optional[str] = None
    periods: Optional[float] = None
