import logging
from typing import Any, Dict, Optional

from funnel_roi.models.io import FunnelInputs, Metrics, ProjectionOptions, ValidationResult, FunnelTemplate
from funnel_roi.templates.registry import load_template
from funnel_roi.services.validation import validate as _validate, ensure_valid, InvalidInputError
import funnel_roi.services.analysis as analysis_svc
import funnel_roi.services.goal as goal_svc
import funnel_roi.services.diagnosis as diag_svc

log = logging.getLogger("funnel")

__all__ = [
    "validate", "project", "derive_acquisition_ceiling", "apply_edit",
    "InvalidInputError", "resolve_template",
]

def validate(inputs: FunnelInputs) -> ValidationResult:
    return _validate(inputs)

def derive_acquisition_ceiling(avg_lifetime_value: float) -> float:
    return diag_svc.acquisition_ceiling(avg_lifetime_value)

def apply_edit(inputs: FunnelInputs, field: str, value: float) -> FunnelInputs:
    """Single-field copy-on-write edit with the lifetime-value ceiling clamp."""
    return diag_svc.edit_inputs(inputs, field, value)

def resolve_template(template: Optional[Any] = None) -> FunnelTemplate:
    if isinstance(template, FunnelTemplate):
        return template
    return load_template(template or ProjectionOptions().template)

def project(inputs: FunnelInputs,
            options: Optional[ProjectionOptions] = None,
            template: Optional[FunnelTemplate] = None) -> Metrics:
    """
    Forward + reverse projection and ratios for one Inputs snapshot.
    Raises InvalidInputError on structurally invalid input; degenerate
    values (zero budget, 0% rates) resolve to 0 / None, never NaN.
    """
    options = options or ProjectionOptions()
    ensure_valid(inputs)
    stages = resolve_template(template or options.template).stages

    fwd = analysis_svc.derive_forward(inputs, stages, options)
    rev = goal_svc.reverse_chain(inputs, stages)
    ratios = analysis_svc.derive_ratios(fwd["leads"], fwd["new_clients"], fwd["gross_revenue"], fwd["spend"])
    plan = diag_svc.budget_planner(inputs.client_spend, ratios["lead_to_sale"], rev["est_leads"])

    out: Dict[str, Any] = {k: v for k, v in fwd.items() if k not in ("gross_revenue", "spend")}
    out.update(rev)
    out.update(ratios)
    out.update(plan)
    out["goal_status"] = goal_svc.goal_status(fwd["new_clients"], inputs.target_new_clients)
    out["acquisition_band"] = diag_svc.acquisition_band(ratios["cost_per_acquisition"], inputs.client_spend)

    log.debug("Projected %s-stage funnel: clicks=%.2f new_clients=%.4f roas=%.4f",
              len(stages), fwd["clicks"], fwd["new_clients"], fwd["roas"])
    return Metrics(**out)
