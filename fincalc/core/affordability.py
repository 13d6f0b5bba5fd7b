"""Rent affordability ratios."""

from __future__ import annotations

from typing import Tuple

from fincalc.domain.common import InvalidInputError
from fincalc.schemas.rent import DtiBand, RentRequest, RentResponse

RENT_SHARES = (0.25, 0.30, 0.33)

# (upper bound in percent, band); above the last bound is HIGH
DTI_BANDS: Tuple[Tuple[float, DtiBand], ...] = (
    (36.0, DtiBand.HEALTHY),
    (43.0, DtiBand.MODERATE),
)


def classify_dti(ratio_percent: float) -> DtiBand:
    for upper, band in DTI_BANDS:
        if ratio_percent <= upper:
            return band
    return DtiBand.HIGH


def monthly_income(income: float, income_type: str) -> float:
    return income / 12.0 if income_type == "annual" else income


def calculate_rent(request: RentRequest) -> RentResponse:
    if request.income <= 0:
        raise InvalidInputError(["income must be greater than zero"])

    income = monthly_income(request.income, request.income_type)
    debt = request.monthly_debt
    rent_25, rent_30, rent_33 = (income * share for share in RENT_SHARES)
    ratio = debt / income * 100.0

    return RentResponse(
        monthly_income=income,
        monthly_debt=debt,
        income_after_debt=income - debt,
        max_rent_at_25_percent=rent_25,
        max_rent_at_30_percent=rent_30,
        max_rent_at_33_percent=rent_33,
        remaining_income_at_25=income - rent_25 - debt,
        remaining_income_at_30=income - rent_30 - debt,
        remaining_income_at_33=income - rent_33 - debt,
        debt_to_income_ratio=ratio,
        debt_to_income_band=classify_dti(ratio),
    )
