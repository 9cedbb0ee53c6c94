import logging
from fastapi import APIRouter, HTTPException
from fastapi.responses import StreamingResponse

from funnelscope.exporters.ppt import build_ppt
from funnelscope.models.io import Prospect
from funnelscope.services.metrics import compute_current_metrics
from funnelscope.services.projections import compute_projection
from funnelscope.services.scaling import plan_scaling_timeline
from funnelscope.store import prospects as store

router = APIRouter(prefix="/api/export", tags=["export"])
log = logging.getLogger("export")


@router.get("/pptx/{prospect_id}")
def export_pptx(prospect_id: str):
    row = store.get_prospect(prospect_id)
    if row is None:
        raise HTTPException(status_code=404, detail="Prospect not found")
    prospect = Prospect(**row)

    try:
        deck = build_ppt(
            prospect,
            compute_current_metrics(prospect),
            compute_projection(prospect),
            plan_scaling_timeline(prospect.current_daily_spend, prospect.projected_daily_spend,
                                  prospect.scaling_increment_percent, prospect.scaling_frequency_days),
        )
    except Exception:
        log.exception("Failed to build report deck for prospect %s", prospect_id)
        raise HTTPException(status_code=500, detail="Could not build report")

    label = prospect.business_name or prospect.name or prospect_id
    filename = f"funnel_{label}.pptx".replace(" ", "_")
    return StreamingResponse(
        deck,
        media_type="application/vnd.openxmlformats-officedocument.presentationml.presentation",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )
