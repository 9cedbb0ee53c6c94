from typing import Any, Dict, List
from fastapi import APIRouter, HTTPException

from funnelscope.config import STATUS_LABELS
from funnelscope.funnels.registry import (
    default_stage_names_for, list_funnel_types, lookup_funnel_type, optimization_events_for,
)
from funnelscope.funnels.types import FunnelTypeDefinition

router = APIRouter(prefix="/api/funnels", tags=["funnels"])


def _definition_out(d: FunnelTypeDefinition) -> Dict[str, Any]:
    return {
        "id": d.id.value,
        "name": d.name,
        "description": d.description,
        "stages": [
            {"key": s.key, "name": s.name, "defaultName": s.default_name, "canBePaid": s.can_be_paid}
            for s in d.stages
        ],
        "stage3_enabled": d.stage3_enabled,
        "stage4_enabled": d.stage4_enabled,
    }


@router.get("")
def funnel_types() -> List[Dict[str, Any]]:
    return [_definition_out(d) for d in list_funnel_types()]


@router.get("/statuses")
def statuses() -> List[Dict[str, str]]:
    return [{"id": k, "label": v} for k, v in STATUS_LABELS.items()]


@router.get("/{funnel_type_id}")
def funnel_type(funnel_type_id: str) -> Dict[str, Any]:
    d = lookup_funnel_type(funnel_type_id)
    if d is None:
        raise HTTPException(status_code=404, detail=f"Unknown funnel type '{funnel_type_id}'")
    return _definition_out(d)


@router.get("/{funnel_type_id}/optimization-events")
def optimization_events(funnel_type_id: str) -> List[str]:
    # Unknown ids get the generic pair rather than a 404; the form still needs options.
    return optimization_events_for(funnel_type_id)


@router.get("/{funnel_type_id}/default-names")
def default_names(funnel_type_id: str) -> Dict[str, str]:
    if lookup_funnel_type(funnel_type_id) is None:
        raise HTTPException(status_code=404, detail=f"Unknown funnel type '{funnel_type_id}'")
    return default_stage_names_for(funnel_type_id)
