from __future__ import annotations
from typing import Optional, Dict, Any, List
from fastapi import APIRouter, HTTPException, Query

from funnelscope.config import ALGO_VERSION
from funnelscope.models.io import ProjectionInputs, Prospect, ProspectIn, ProspectMetricsOut
from funnelscope.services.metrics import compute_current_metrics
from funnelscope.services.pipeline import summarize_pipeline
from funnelscope.services.projections import compute_projection
from funnelscope.services.scaling import plan_scaling_timeline
from funnelscope.store import prospects as store

router = APIRouter(prefix="/api/prospects", tags=["prospects"])

# user_id is supplied by the identity layer in front of this service; omitting
# it is the superadmin view over every user's prospects.


def _load_or_404(prospect_id: str) -> Prospect:
    row = store.get_prospect(prospect_id)
    if row is None:
        raise HTTPException(status_code=404, detail="Prospect not found")
    return Prospect(**row)


@router.get("", response_model=List[Prospect])
def list_prospects(user_id: Optional[str] = Query(None)):
    return store.list_prospects(user_id=user_id)


@router.get("/search", response_model=List[Prospect])
def search_prospects(
    q: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    user_id: Optional[str] = Query(None),
):
    return store.search_prospects(q, status, user_id=user_id)


@router.get("/summary")
def pipeline_summary(user_id: Optional[str] = Query(None)) -> Dict[str, Any]:
    return summarize_pipeline(store.list_prospects(user_id=user_id))


@router.post("", response_model=Prospect, status_code=201)
def create_prospect(payload: ProspectIn, user_id: Optional[str] = Query(None)):
    if not (payload.name or "").strip() or not (payload.business_name or "").strip():
        raise HTTPException(status_code=422, detail="name and business_name are required")
    return store.create_prospect(payload.model_dump(mode="json", exclude_none=True), user_id=user_id)


@router.get("/{prospect_id}", response_model=Prospect)
def get_prospect(prospect_id: str):
    return _load_or_404(prospect_id)


@router.patch("/{prospect_id}", response_model=Prospect)
def update_prospect(prospect_id: str, payload: ProspectIn):
    row = store.update_prospect(prospect_id, payload.model_dump(mode="json", exclude_unset=True))
    if row is None:
        raise HTTPException(status_code=404, detail="Prospect not found")
    return row


@router.delete("/{prospect_id}")
def delete_prospect(prospect_id: str) -> Dict[str, Any]:
    if not store.delete_prospect(prospect_id):
        raise HTTPException(status_code=404, detail="Prospect not found")
    return {"status": "deleted", "id": prospect_id}


@router.put("/{prospect_id}/projection", response_model=Prospect)
def save_projection(prospect_id: str, payload: ProjectionInputs):
    row = store.save_projection_inputs(prospect_id, payload.model_dump(mode="json", exclude_unset=True))
    if row is None:
        raise HTTPException(status_code=404, detail="Prospect not found")
    return row


@router.get("/{prospect_id}/metrics", response_model=ProspectMetricsOut)
def prospect_metrics(prospect_id: str):
    """Current report, projection from the saved inputs, and the scaling plan toward the projected spend."""
    prospect = _load_or_404(prospect_id)
    return {
        "prospect_id": prospect_id,
        "current": compute_current_metrics(prospect),
        "projection": compute_projection(prospect),
        "scaling": plan_scaling_timeline(
            prospect.current_daily_spend,
            prospect.projected_daily_spend,
            prospect.scaling_increment_percent,
            prospect.scaling_frequency_days,
        ),
        "meta": {
            "algo_version": ALGO_VERSION,
            "funnel_type": prospect.funnel_type.value if prospect.funnel_type else None,
        },
    }
