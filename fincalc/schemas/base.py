"""Shared request behaviour: turning raw form values into numbers.

Every numeric field on a ``CalculatorRequest`` follows the same policy:

  - missing, blank or non-numeric values fall back to the field default
  - integer fields are truncated before any other rule applies
  - fields marked ``POSITIVE`` also fall back when the value is <= 0
  - fields marked ``NON_NEGATIVE`` clamp negative values to 0
  - ``at_most`` clamps values above the given bound

Form strings such as ``"$1,200"`` or ``"6.5%"`` are accepted.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, model_validator

logger = logging.getLogger(__name__)

POSITIVE: Dict[str, Any] = {"positive": True}
NON_NEGATIVE: Dict[str, Any] = {"non_negative": True}
PERCENT: Dict[str, Any] = {"non_negative": True, "at_most": 100}


def parse_number(value: Any) -> Optional[float]:
    """Return ``value`` as a finite float, or None when it is not a number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip().replace(",", "").replace("$", "").replace("%", "")
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


class CalculatorRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def apply_input_defaults(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data

        cleaned = dict(data)
        for name, field in cls.model_fields.items():
            if name not in cleaned or field.annotation not in (int, float, "int", "float"):
                continue

            rules = field.json_schema_extra if isinstance(field.json_schema_extra, dict) else {}
            number = parse_number(cleaned[name])
            if number is None:
                del cleaned[name]
                continue
            is_int = field.annotation in (int, "int")
            if is_int:
                number = float(int(number))
            if rules.get("positive") and number <= 0:
                logger.debug("%s.%s=%r is not positive, using default", cls.__name__, name, number)
                del cleaned[name]
                continue
            if rules.get("non_negative") and number < 0:
                logger.warning("%s.%s=%r is negative, clamping to 0", cls.__name__, name, number)
                number = 0.0
            upper = rules.get("at_most")
            if upper is not None and number > upper:
                logger.warning("%s.%s=%r is above %s, clamping", cls.__name__, name, number, upper)
                number = float(upper)

            cleaned[name] = int(number) if is_int else number

        return cleaned
