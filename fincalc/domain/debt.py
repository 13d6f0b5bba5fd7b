from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from fincalc.domain.common import Status


class Debt(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = "Unnamed Debt"
    balance: float
    min_payment: float
    annual_rate_percent: float = Field(0.0, ge=0)


class ExtraBudget(BaseModel):
    """Money available each month beyond the minimum payments.

    Months are 1-based. The yearly amount arrives in ``yearly_month`` and every
    12 months after; the one-time amount only in ``one_time_month`` (0 = never).
    """

    model_config = ConfigDict(extra="forbid")

    monthly: float = Field(0.0, ge=0)
    yearly: float = Field(0.0, ge=0)
    yearly_month: int = Field(1, ge=1)
    one_time: float = Field(0.0, ge=0)
    one_time_month: int = Field(0, ge=0)

    def for_month(self, month: int) -> float:
        amount = self.monthly
        if self.yearly > 0 and month >= self.yearly_month and (month - self.yearly_month) % 12 == 0:
            amount += self.yearly
        if self.one_time > 0 and month == self.one_time_month:
            amount += self.one_time
        return amount


class PayoffEvent(BaseModel):
    model_config = ConfigDict(extra="forbid")

    debt_name: str
    balance: float
    annual_rate_percent: float
    payoff_period: int
    total_interest: float


class DebtMonthRow(BaseModel):
    model_config = ConfigDict(extra="forbid")

    month: int
    interest: float
    payment: float
    extra_applied: float
    remaining_balance: float


class PayoffSimulation(BaseModel):
    model_config = ConfigDict(extra="forbid")

    status: Status
    reason: Optional[str] = None
    events: List[PayoffEvent] = Field(default_factory=list)
    rows: List[DebtMonthRow] = Field(default_factory=list)

    @property
    def converged(self) -> bool:
        return self.status == Status.CONVERGED

    @property
    def months(self) -> int:
        return len(self.rows)

    @property
    def total_interest(self) -> float:
        return sum(row.interest for row in self.rows)

    @property
    def total_paid(self) -> float:
        return sum(row.payment for row in self.rows)
