"""Compound-growth schedules.

Order of operations per contribution period:
  1) Add the period's contribution.
  2) Apply growth for the period.

So every contribution earns a full period of growth in the period it is made
(an annuity-due). Compounding-then-contributing would give materially smaller
balances; callers that want that must model it themselves.
"""

from __future__ import annotations

import logging
from typing import List

from fincalc.domain.accumulation import (
    COMPOUNDING_FREQUENCIES,
    AccumulationInput,
    AccumulationRow,
    TaxTrackRow,
    TaxTracks,
)
from fincalc.domain.common import InvalidInputError

logger = logging.getLogger(__name__)


def sub_period_growth(
    annual_rate_percent: float,
    compounding_per_year: int,
    contributions_per_year: int = 12,
) -> float:
    """Growth factor over one contribution period.

    The periodic rate is always ``annual / compounding_per_year``; a
    contribution period spans ``compounding_per_year / contributions_per_year``
    compounding periods (fractional for annual or quarterly compounding).
    """
    rate = annual_rate_percent / 100.0 / compounding_per_year
    return (1.0 + rate) ** (compounding_per_year / contributions_per_year)


def grow_year(balance: float, contribution: float, periods: int, growth: float) -> float:
    for _ in range(periods):
        balance += contribution
        balance *= growth
    return balance


def accumulate(inputs: AccumulationInput) -> List[AccumulationRow]:
    """Return one row per year of contributions and growth."""
    if inputs.compounding_per_year not in COMPOUNDING_FREQUENCIES:
        raise InvalidInputError(
            [
                f"unsupported compounding frequency {inputs.compounding_per_year}; "
                f"expected one of {sorted(COMPOUNDING_FREQUENCIES)}"
            ]
        )

    growth = sub_period_growth(
        inputs.annual_rate_percent,
        inputs.compounding_per_year,
        inputs.contributions_per_year,
    )
    contribution_growth = 1.0 + inputs.contribution_growth_percent / 100.0

    balance = float(inputs.initial_balance)
    rows: List[AccumulationRow] = []
    for year in range(1, inputs.years + 1):
        # this year's raise is applied before any of this year's contributions
        per_period = inputs.periodic_contribution * contribution_growth ** (year - 1)
        contribution = per_period * inputs.contributions_per_year

        starting = balance
        balance = grow_year(balance, per_period, inputs.contributions_per_year, growth)

        rows.append(
            AccumulationRow(
                period=year,
                starting_balance=starting,
                contribution=contribution,
                interest_earned=balance - starting - contribution,
                ending_balance=balance,
            )
        )

    logger.debug(
        "accumulated %d years at %.4f%% (%s compounding), ending balance %.2f",
        inputs.years,
        inputs.annual_rate_percent,
        COMPOUNDING_FREQUENCIES[inputs.compounding_per_year],
        balance,
    )
    return rows


def accumulate_tax_tracks(
    initial_balance: float,
    annual_contribution: float,
    annual_rate_percent: float,
    years: int,
    current_tax_percent: float,
    start_age: int,
    start_year: int,
) -> List[TaxTrackRow]:
    """Grow the same savings under three tax treatments in lockstep.

    Rows run from year 0 (starting balances) through ``years`` inclusive.

      - traditional: full pre-tax contribution, tax deferred
      - roth: contribution reduced by the current tax rate, growth tax free
      - taxable: contribution reduced by the current tax rate, and each year's
        gain taxed at the current rate before it compounds
    """
    rate = annual_rate_percent / 100.0
    tax = current_tax_percent / 100.0
    after_tax_contribution = annual_contribution * (1.0 - tax)

    tracks = TaxTracks(
        traditional=float(initial_balance),
        roth=float(initial_balance),
        taxable=float(initial_balance),
    )
    rows: List[TaxTrackRow] = []

    for step in range(years + 1):
        rows.append(
            TaxTrackRow(
                period=step,
                age=start_age + step,
                year=start_year + step,
                traditional=tracks.traditional,
                roth=tracks.roth,
                taxable=tracks.taxable,
            )
        )
        if step == years:
            break

        tracks.traditional = (tracks.traditional + annual_contribution) * (1.0 + rate)
        tracks.roth = (tracks.roth + after_tax_contribution) * (1.0 + rate)
        invested = tracks.taxable + after_tax_contribution
        tracks.taxable = invested + invested * rate * (1.0 - tax)

    return rows
