# funnel_roi/services/analysis.py
from typing import Any, Dict, List, Optional
from ..config import STAGES, MONTHS_PER_YEAR
from ..models.io import FunnelInputs, ProjectionOptions
from ..utils.math import safe_div

def total_spend(inputs: FunnelInputs, include_management_fee: bool = False) -> float:
    """Monthly spend used in every ROI denominator. The fee never buys clicks."""
    fee = inputs.management_fee if include_management_fee else 0.0
    return inputs.monthly_marketing_budget + fee

def forward_chain(inputs: FunnelInputs, stages: List[str]) -> Dict[str, float]:
    """
    Realized volumes under current performance.
    clicks = budget / cpc
    each stage = previous stage * (rate / 100), reduced over the template's
    ordered rate fields; a 0% rate zeroes everything after it.
    """
    clicks = safe_div(inputs.monthly_marketing_budget, inputs.cost_per_click)
    out: Dict[str, float] = {"clicks": clicks}
    prev = clicks
    for rate_field in stages:
        prev = prev * (getattr(inputs, rate_field) / 100.0)
        out[STAGES[rate_field][0]] = prev
    return out

def derive_forward(inputs: FunnelInputs,
                   stages: List[str],
                   options: ProjectionOptions) -> Dict[str, Any]:
    """
    Forward projection: volumes, revenue and ROAS.
    gross revenue     = new_clients * lifetime value
    estimated_revenue = gross (or gross - spend with options.net_revenue)
    roas              = estimated_revenue / spend, 0 when spend is 0
    """
    volumes = forward_chain(inputs, stages)
    spend = total_spend(inputs, options.include_management_fee_in_spend)
    gross = volumes["new_clients"] * inputs.avg_lifetime_value
    revenue = gross - spend if options.net_revenue else gross
    return {
        **volumes,
        "gross_revenue": gross,
        "spend": spend,
        "estimated_revenue": revenue,
        "roas": safe_div(revenue, spend),
    }

def derive_ratios(leads: float,
                  new_clients: float,
                  gross_revenue: float,
                  spend: float) -> Dict[str, Optional[float]]:
    """
    Secondary indicators from the forward projection.
    lead_to_sale     = new_clients / leads              (fraction 0..1)
    monthly_profit   = gross_revenue - spend
    profit_margin    = monthly_profit / gross_revenue * 100
    break_even_point = spend / monthly_profit            (months, only if profit > 0)
    payback_period   = spend / (gross_revenue / 12)      (months)
    annual_roi       = 12 * monthly_profit / (12 * spend) * 100
    cost_per_acq     = spend / new_clients               (None when no clients)
    """
    monthly_profit = gross_revenue - spend
    return {
        "lead_to_sale": safe_div(new_clients, leads),
        "monthly_profit": monthly_profit,
        "profit_margin": safe_div(monthly_profit, gross_revenue) * 100.0,
        "break_even_point": safe_div(spend, monthly_profit) if monthly_profit > 0 else 0.0,
        "payback_period": safe_div(spend, gross_revenue / MONTHS_PER_YEAR),
        "annual_roi": safe_div(monthly_profit * MONTHS_PER_YEAR, spend * MONTHS_PER_YEAR) * 100.0,
        "cost_per_acquisition": safe_div(spend, new_clients, default=None),
    }
