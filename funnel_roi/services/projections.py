# funnel_roi/services/projections.py
from typing import Any, Dict, List, Optional
import numpy as np
import pandas as pd

from funnel_roi.config import PROJECTION_MONTHS, SCALING_STEPS, CPC_VARIANTS, STAGES
from funnel_roi.models.io import FunnelInputs, Metrics, ProjectionOptions
from funnel_roi.services.analysis import derive_forward
from funnel_roi.utils.math import r2, safe_div

def roi_projection_frame(inputs: FunnelInputs,
                         metrics: Metrics,
                         months: int = PROJECTION_MONTHS,
                         include_management_fee: bool = False) -> pd.DataFrame:
    """Cumulative revenue / cost / profit per month at the current run rate."""
    m = np.arange(1, months + 1)
    revenue = metrics.new_clients * inputs.avg_lifetime_value
    cost = inputs.monthly_marketing_budget + (inputs.management_fee if include_management_fee else 0.0)
    return pd.DataFrame({
        "month": m,
        "label": [f"Month {i}" for i in m],
        "revenue": revenue * m,
        "cost": cost * m,
        "profit": (revenue - cost) * m,
    })

def scaling_preview(inputs: FunnelInputs,
                    stages: List[str],
                    options: Optional[ProjectionOptions] = None) -> Optional[Dict[str, Any]]:
    """Return simple +20%/+50% budget scenarios with flat/+10%/+20% CPC."""
    options = options or ProjectionOptions()
    if inputs.cost_per_click <= 0:
        return None
    out = []
    for s in SCALING_STEPS:
        nb = inputs.monthly_marketing_budget * (1.0 + s)
        proj = []
        for label, upl in CPC_VARIANTS:
            variant = inputs.model_copy(update={
                "monthly_marketing_budget": nb,
                "cost_per_click": inputs.cost_per_click * (1.0 + upl),
            })
            fwd = derive_forward(variant, stages, options)
            proj.append({
                "scenario": label,
                "cpc": r2(variant.cost_per_click),
                "clicks": r2(fwd["clicks"]),
                "new_clients": r2(fwd["new_clients"]),
                "revenue": r2(fwd["estimated_revenue"]),
                "roas": r2(fwd["roas"]),
            })
        out.append({"budget_increase": f"+{int(s*100)}%", "new_budget": r2(nb), "client_projections": proj})
    return {"scenarios": out, "disclaimer": "Projections assume conversion rates hold at higher spend; actuals may vary."}

def funnel_stages(metrics: Metrics, stages: List[str]) -> List[Dict[str, Any]]:
    """
    Diagram rows from clicks down to new clients.
    conversion_rate is the % of the previous row that reached this one (0 when the previous row is 0).
    """
    rows = [("clicks", "Clicks", metrics.clicks)]
    for rate_field in stages:
        key, _, label = STAGES[rate_field]
        rows.append((key, label, getattr(metrics, key) or 0.0))

    out: List[Dict[str, Any]] = []
    prev: Optional[float] = None
    for key, label, value in rows:
        out.append({
            "key": key,
            "label": label,
            "value": value,
            "rounded": int(round(value)),
            "conversion_rate": None if prev is None else r2(safe_div(value, prev) * 100.0),
        })
        prev = value
    return out
