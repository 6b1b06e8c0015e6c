# funnel_roi/services/validation.py
import math
from typing import List

from funnel_roi.config import PERCENT_FIELDS
from funnel_roi.models.io import FunnelInputs, FieldError, ValidationResult

class InvalidInputError(ValueError):
    """Structurally invalid Inputs; carries the per-field ValidationResult."""

    def __init__(self, result: ValidationResult):
        self.result = result
        fields = ", ".join(sorted({e.alias for e in result.errors})) or "?"
        super().__init__(f"Invalid funnel inputs: {fields}")

def _alias(field: str) -> str:
    return FunnelInputs.model_fields[field].alias or field

def _err(field: str, code: str, message: str) -> FieldError:
    return FieldError(field=field, alias=_alias(field), code=code, message=message)

def validate(inputs: FunnelInputs) -> ValidationResult:
    """
    Structural checks only; degenerate-but-valid values (zero budget, 0% rates)
    pass and are handled by the projection guards.
      - non_finite:   NaN / +-inf anywhere
      - negative:     any value < 0
      - out_of_range: percentage > 100
      - not_positive: cost_per_click <= 0 (clicks divide by it)
    One error per field, first failing rule wins.
    """
    errors: List[FieldError] = []
    for field in FunnelInputs.model_fields:
        v = getattr(inputs, field)
        if not math.isfinite(v):
            errors.append(_err(field, "non_finite", f"{_alias(field)} must be a finite number"))
        elif v < 0:
            errors.append(_err(field, "negative", f"{_alias(field)} cannot be negative"))
        elif field in PERCENT_FIELDS and v > 100:
            errors.append(_err(field, "out_of_range", f"{_alias(field)} must be between 0 and 100"))
        elif field == "cost_per_click" and v <= 0:
            errors.append(_err(field, "not_positive", "costPerClick must be greater than 0"))
    return ValidationResult(errors=errors)

def ensure_valid(inputs: FunnelInputs) -> None:
    result = validate(inputs)
    if not result.ok:
        raise InvalidInputError(result)
