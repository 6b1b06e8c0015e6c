from typing import Optional, Dict, Any, List, Literal
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from funnel_roi.config import STAGES, FIRST_STAGE, LAST_STAGE, MIN_STAGES, MAX_STAGES, DEFAULT_TEMPLATE

GoalStatus = Literal["achieved", "on_track", "behind", "unknown"]
AcquisitionBand = Literal["within_ceiling", "over_ceiling", "unknown"]
ErrorCode = Literal["non_finite", "negative", "not_positive", "out_of_range"]

class FunnelInputs(BaseModel):
    """
    One flat record of user-supplied funnel assumptions.
    Percentages are stored as 0..100. Ranges are NOT enforced here;
    run services.validation.validate() to get per-field errors.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True,
                              frozen=True, extra="ignore")

    avg_lifetime_value: float = 0.0
    monthly_marketing_budget: float = 0.0
    cost_per_click: float = 0.0
    management_fee: float = 0.0
    landing_page_conversion: float = 0.0
    discovery_call_rate: float = 0.0
    sales_call_rate: float = 0.0
    proposal_rate: float = 0.0
    client_won_rate: float = 0.0
    target_new_clients: float = 0.0
    client_spend: float = 0.0

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "FunnelInputs":
        return cls.model_validate(record)

    def to_record(self) -> Dict[str, float]:
        return self.model_dump(by_alias=True)

class ProjectionOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    template: str = DEFAULT_TEMPLATE
    include_management_fee_in_spend: bool = False
    net_revenue: bool = False  # report estimated_revenue minus spend

class FunnelTemplate(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    label: str
    stages: List[str]          # ordered rate fields, landing page first, client won last
    defaults: FunnelInputs

    @field_validator("stages")
    @classmethod
    def _check_stages(cls, v: List[str]) -> List[str]:
        unknown = [s for s in v if s not in STAGES]
        if unknown:
            raise ValueError(f"Unknown funnel stage(s): {unknown}")
        if len(set(v)) != len(v):
            raise ValueError("Funnel stages must be unique")
        if not (MIN_STAGES <= len(v) <= MAX_STAGES):
            raise ValueError(f"Funnel must have {MIN_STAGES}-{MAX_STAGES} stages, got {len(v)}")
        if v[0] != FIRST_STAGE or v[-1] != LAST_STAGE:
            raise ValueError(f"Funnel must start at {FIRST_STAGE} and end at {LAST_STAGE}")
        return v

class FieldError(BaseModel):
    field: str      # python attribute, e.g. cost_per_click
    alias: str      # record name, e.g. costPerClick
    code: ErrorCode
    message: str

class ValidationResult(BaseModel):
    errors: List[FieldError] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def for_field(self, field: str) -> List[FieldError]:
        return [e for e in self.errors if field in (e.field, e.alias)]

class Metrics(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    # forward chain (None = stage not in the active template)
    clicks: float = 0.0
    leads: float = 0.0
    discovery_calls: Optional[float] = None
    sales_calls: Optional[float] = None
    proposals_sent: Optional[float] = None
    new_clients: float = 0.0
    estimated_revenue: float = 0.0
    roas: float = 0.0

    # reverse chain
    est_proposals: Optional[int] = None
    est_sales_calls: Optional[int] = None
    est_discovery_calls: Optional[int] = None
    est_leads: int = 0
    est_clicks: int = 0
    est_budget: float = 0.0
    est_revenue: float = 0.0
    goal_reachable: bool = True

    # ratios
    lead_to_sale: float = 0.0  # fraction 0..1
    monthly_profit: float = 0.0
    profit_margin: float = 0.0
    break_even_point: float = 0.0
    payback_period: float = 0.0
    annual_roi: float = 0.0
    cost_per_acquisition: Optional[float] = None

    # budget planner
    expected_daily_leads: int = 0
    cost_per_lead_target: float = 0.0
    daily_budget: float = 0.0
    monthly_budget: float = 0.0

    goal_status: GoalStatus = "unknown"
    acquisition_band: AcquisitionBand = "unknown"

    def to_record(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)

class Scenario(BaseModel):
    name: str
    inputs: FunnelInputs
    metrics: Optional[Metrics] = None           # last good projection
    errors: ValidationResult = Field(default_factory=ValidationResult)
