from typing import Optional
from fastapi import APIRouter, HTTPException

from funnelscope.models.io import (
    MetricsReport, ProjectionReport, ProjectionRequest, Prospect, ScalingRequest, ScalingTimeline,
)
from funnelscope.services.metrics import compute_current_metrics
from funnelscope.services.projections import compute_projection
from funnelscope.services.scaling import plan_scaling_timeline

router = APIRouter(prefix="/api/metrics", tags=["metrics"])


@router.post("/current", response_model=Optional[MetricsReport])
def current_metrics(prospect: Prospect):
    """Current funnel report; null until daily spend and stage-1 CPA are entered."""
    return compute_current_metrics(prospect)


@router.post("/projection", response_model=Optional[ProjectionReport])
def projection(req: ProjectionRequest):
    return compute_projection(req.prospect, req.overrides)


@router.post("/scaling", response_model=ScalingTimeline)
def scaling(req: ScalingRequest):
    try:
        return plan_scaling_timeline(req.current_spend, req.target_spend,
                                     req.increment_percent, req.frequency_days)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
