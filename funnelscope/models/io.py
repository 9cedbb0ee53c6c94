from typing import Optional, Dict, Any, List, Literal
from pydantic import BaseModel, ConfigDict, Field, confloat, conint, field_validator

from funnelscope.config import DEFAULT_SCALING_FREQUENCY_DAYS, DEFAULT_SCALING_INCREMENT_PERCENT
from funnelscope.funnels.types import FunnelType

Status = Literal["new", "contacted", "call_scheduled", "call_completed", "proposal_sent", "won", "lost"]
RoiStatus = Literal["healthy", "break_even", "losing"]

Money = confloat(ge=0)
Rate = confloat(ge=0, le=100)   # percent; None means "not measured yet", 0 means measured at 0%


class FunnelInputs(BaseModel):
    """Funnel fields shared by stored prospects and create/update payloads."""
    model_config = ConfigDict(extra="ignore", use_enum_values=False)

    funnel_type: Optional[FunnelType] = None

    current_daily_spend: Optional[Money] = None
    current_cpa_stage1: Optional[Money] = None
    current_stage2_rate: Optional[Rate] = None
    current_stage3_rate: Optional[Rate] = None
    current_stage4_rate: Optional[Rate] = None
    current_conversion_rate: Optional[Rate] = None
    high_ticket_price: Optional[Money] = None

    stage1_name: Optional[str] = None
    stage2_name: Optional[str] = None
    stage3_name: Optional[str] = None
    stage4_name: Optional[str] = None
    stage1_price: Optional[Money] = None
    stage2_price: Optional[Money] = None
    stage3_price: Optional[Money] = None
    stage4_price: Optional[Money] = None
    stage1_is_paid: Optional[bool] = None
    stage2_is_paid: Optional[bool] = None
    stage3_is_paid: Optional[bool] = None
    stage4_is_paid: Optional[bool] = None
    stage3_enabled: bool = False
    stage4_enabled: bool = False


class ProjectionInputs(BaseModel):
    """Override values for a projected funnel. Every field is optional."""
    model_config = ConfigDict(extra="ignore")

    projected_daily_spend: Optional[Money] = None
    projected_cpa_stage1: Optional[Money] = None
    projected_stage2_rate: Optional[Rate] = None
    projected_stage3_rate: Optional[Rate] = None
    projected_stage4_rate: Optional[Rate] = None
    projected_conversion_rate: Optional[Rate] = None
    projected_high_ticket_price: Optional[Money] = None

    optimization_event: Optional[str] = None
    layer1_creatives: Optional[str] = None
    layer2_enabled: Optional[bool] = None
    layer2_creatives: Optional[str] = None

    scaling_increment_percent: Optional[confloat(gt=0)] = None
    scaling_frequency_days: Optional[conint(ge=0)] = None


class ProspectIn(FunnelInputs, ProjectionInputs):
    """Create/update payload; identity fields plus everything the funnel needs."""
    name: Optional[str] = None
    business_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    status: Optional[Status] = None


class Prospect(ProspectIn):
    id: Optional[str] = None
    user_id: Optional[str] = None
    status: Status = "new"
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    scaling_increment_percent: confloat(gt=0) = DEFAULT_SCALING_INCREMENT_PERCENT
    scaling_frequency_days: conint(ge=0) = DEFAULT_SCALING_FREQUENCY_DAYS

    @field_validator("scaling_increment_percent", "scaling_frequency_days", mode="before")
    @classmethod
    def _scaling_default(cls, v, info):
        # stored rows may carry an explicit null after a cleared form field
        if v is None:
            return cls.model_fields[info.field_name].default
        return v


class MetricsReport(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    monthly_spend: float
    volumes: List[float]
    cpas: List[int]
    rates: List[Optional[float]]          # rates[0] is always None
    prices: List[float]
    stage_names: List[str] = Field(serialization_alias="stageNames")
    sales: float
    cpa_customer: int
    revenue: int
    profit: int
    roi: float
    overall_conversion_rate: float
    is_profitable: bool
    roi_status: RoiStatus


class ProjectionReport(MetricsReport):
    daily_spend: float
    sales_increase: int = 0
    revenue_increase: int = 0
    roi_change: float = 0.0


class ScalingStep(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    step: int
    day: int
    budget: int
    is_target: bool = Field(False, serialization_alias="isTarget")


class ScalingTimeline(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    steps: List[ScalingStep] = Field(default_factory=list)
    total_steps: int = Field(0, serialization_alias="totalSteps")
    total_days: int = Field(0, serialization_alias="totalDays")
    total_weeks: int = Field(0, serialization_alias="totalWeeks")


class ProjectionRequest(BaseModel):
    prospect: Prospect
    overrides: ProjectionInputs = Field(default_factory=ProjectionInputs)


class ScalingRequest(BaseModel):
    current_spend: Optional[Money] = None
    target_spend: Optional[Money] = None
    increment_percent: confloat(gt=0) = DEFAULT_SCALING_INCREMENT_PERCENT
    frequency_days: conint(ge=0) = DEFAULT_SCALING_FREQUENCY_DAYS


class ProspectMetricsOut(BaseModel):
    prospect_id: str
    current: Optional[MetricsReport] = None
    projection: Optional[ProjectionReport] = None
    scaling: ScalingTimeline
    meta: Dict[str, Any]
