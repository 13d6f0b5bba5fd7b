from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field

# periods per year -> label
COMPOUNDING_FREQUENCIES = {
    1: "annually",
    2: "semi-annually",
    4: "quarterly",
    12: "monthly",
    24: "semi-monthly",
    26: "bi-weekly",
    52: "weekly",
    365: "daily",
}


class AccumulationInput(BaseModel):
    """Inputs for a compound-growth schedule.

    ``periodic_contribution`` is the amount added each contribution period
    (``contributions_per_year`` times a year) during the first year; later
    years scale it by ``(1 + contribution_growth_percent/100) ** (year - 1)``.
    """

    model_config = ConfigDict(extra="forbid")

    initial_balance: float = Field(0.0, ge=0)
    periodic_contribution: float = Field(0.0, ge=0)
    annual_rate_percent: float = Field(0.0, ge=0)
    years: int = Field(ge=0)
    compounding_per_year: int = Field(12, gt=0)
    contributions_per_year: int = Field(12, gt=0)
    contribution_growth_percent: float = Field(0.0, ge=0)


class AccumulationRow(BaseModel):
    model_config = ConfigDict(extra="forbid")

    period: int
    starting_balance: float
    contribution: float
    interest_earned: float
    ending_balance: float


class TaxTrackRow(BaseModel):
    """Balances of the three tax treatments at the start of a year."""

    model_config = ConfigDict(extra="forbid")

    period: int
    age: int
    year: int
    traditional: float
    roth: float
    taxable: float


@dataclass
class TaxTracks:
    # pre-tax deferred, after-tax tax-free, after-tax taxed yearly
    traditional: float
    roth: float
    taxable: float

