from __future__ import annotations

from enum import Enum
from typing import List


class Status(str, Enum):
    CONVERGED = "converged"
    NOT_CONVERGED = "not_converged"


class CalculationError(ValueError):
    """Base class for errors raised by the calculators."""


class InvalidInputError(CalculationError):
    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


# Iteration cap shared by every schedule or simulation loop (100 years of months).
MAX_PERIODS = 1200

# Balances at or below this amount count as paid off.
EPSILON = 0.01
