# funnel_roi/services/goal.py
import logging
from typing import Any, Dict, List, Optional
from funnel_roi.config import STAGES, GOAL_BUFFER
from funnel_roi.models.io import FunnelInputs
from funnel_roi.utils.math import required_units

log = logging.getLogger("funnel")

def reverse_chain(inputs: FunnelInputs, stages: List[str]) -> Dict[str, Any]:
    """
    Walk the funnel backward from target_new_clients.
    Each upstream stage = ceil(downstream / (rate / 100)); the ceiling is
    applied at EVERY stage so the estimate never under-counts whole units.
    A rate <= 0 makes that stage and everything upstream 0 and marks the
    goal unreachable.
    Returns est_* keys for the template's stages plus est_clicks/est_budget.
    """
    out: Dict[str, Any] = {}
    required: float = inputs.target_new_clients
    reachable = True

    # stages[i] converts stages[i-1]'s volume into stages[i]'s volume
    for i in range(len(stages) - 1, 0, -1):
        rate = getattr(inputs, stages[i])
        est_key = STAGES[stages[i - 1]][1]
        if not reachable or rate <= 0:
            reachable = False
            out[est_key] = 0
            continue
        required = required_units(required, rate)
        out[est_key] = required

    landing = inputs.landing_page_conversion
    if reachable and landing > 0:
        est_clicks = required_units(out["est_leads"], landing)
    else:
        est_clicks = 0
        if landing <= 0:
            reachable = False

    if not reachable and inputs.target_new_clients > 0:
        log.warning("Goal of %s clients unreachable: a funnel rate is 0%%", inputs.target_new_clients)

    out["est_clicks"] = est_clicks
    out["est_budget"] = est_clicks * inputs.cost_per_click
    out["est_revenue"] = inputs.target_new_clients * inputs.avg_lifetime_value
    out["goal_reachable"] = reachable
    return out

def goal_status(new_clients: Optional[float],
                target: Optional[float],
                buffer: float = GOAL_BUFFER) -> str:
    """
    Classify forward volume vs. client goal using an absolute buffer.
      - unknown:  no goal set
      - achieved: new_clients >= target
      - on_track: within buffer below target
      - behind:   new_clients <= target - buffer
    """
    if new_clients is None or not target:
        return "unknown"
    if new_clients >= target:
        return "achieved"
    if new_clients > target - buffer:
        return "on_track"
    return "behind"
