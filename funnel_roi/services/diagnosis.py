# funnel_roi/services/diagnosis.py
import math
from typing import Any, Dict, Optional
from funnel_roi.config import ACQUISITION_CEILING_DIVISOR, DAYS_PER_MONTH
from funnel_roi.models.io import FunnelInputs
from funnel_roi.utils.math import ceil_units

def acquisition_ceiling(avg_lifetime_value: float) -> float:
    """Max acceptable cost to win one client: 1/3 of lifetime value."""
    return avg_lifetime_value / ACQUISITION_CEILING_DIVISOR

def clamp_client_spend(client_spend: float, avg_lifetime_value: float) -> float:
    """Pull client_spend down to the ceiling; a lower user value is kept as-is."""
    return min(client_spend, acquisition_ceiling(avg_lifetime_value))

def _usable(v: float) -> bool:
    return math.isfinite(v) and v >= 0

def _resolve_field(field: str) -> str:
    if field in FunnelInputs.model_fields:
        return field
    for name, info in FunnelInputs.model_fields.items():
        if info.alias == field:
            return name
    raise KeyError(f"Unknown input field: {field}")

def edit_inputs(inputs: FunnelInputs, field: str, value: float) -> FunnelInputs:
    """
    Copy-on-write single-field edit; field may be the attribute or record name.
      - avg_lifetime_value: recompute the ceiling and clamp client_spend to it
      - client_spend:       clamped to the current ceiling
      - anything else:      plain replacement
    The clamp only runs against a finite, non-negative lifetime value and on a
    finite, non-negative client_spend, so an invalid edit never rewrites the
    other field.
    """
    field = _resolve_field(field)
    value = float(value)
    update: Dict[str, float] = {field: value}
    if field == "avg_lifetime_value" and _usable(value) and _usable(inputs.client_spend):
        update["client_spend"] = clamp_client_spend(inputs.client_spend, value)
    elif field == "client_spend" and _usable(value) and _usable(inputs.avg_lifetime_value):
        update["client_spend"] = clamp_client_spend(value, inputs.avg_lifetime_value)
    return inputs.model_copy(update=update)

def budget_planner(client_spend: float,
                   lead_to_sale: float,
                   est_leads: int) -> Dict[str, Any]:
    """
    Spend plan to feed the required lead volume at the acquisition budget.
      expected_daily_leads = ceil(est_leads / 30)
      cost_per_lead_target = client_spend * lead_to_sale
      daily_budget         = expected_daily_leads * cost_per_lead_target
      monthly_budget       = daily_budget * 30
    Budgets are 0 when there is no lead-to-sale ratio or no lead requirement.
    """
    daily_leads = ceil_units(est_leads / DAYS_PER_MONTH)
    cpl_target = client_spend * lead_to_sale
    if lead_to_sale <= 0 or est_leads <= 0:
        daily = 0.0
    else:
        daily = daily_leads * cpl_target
    return {
        "expected_daily_leads": daily_leads,
        "cost_per_lead_target": cpl_target,
        "daily_budget": daily,
        "monthly_budget": daily * DAYS_PER_MONTH,
    }

def acquisition_band(cost_per_acquisition: Optional[float], client_spend: float) -> str:
    if cost_per_acquisition is None or client_spend <= 0:
        return "unknown"
    return "within_ceiling" if cost_per_acquisition <= client_spend else "over_ceiling"
