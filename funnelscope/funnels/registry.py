"""
Funnel type registry.

Funnel shapes are static configuration (catalog.yaml), loaded once into frozen
dataclasses. Lookups by an unknown id return None/empty results and are logged,
never silently mapped onto another shape.
"""
from __future__ import annotations
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from .types import ActiveStage, FunnelType, FunnelTypeDefinition, StageDefinition

ROOT = Path(__file__).resolve().parent
CATALOG_PATH = ROOT / "catalog.yaml"

FALLBACK_OPTIMIZATION_EVENTS = ("Registration", "Purchase")

log = logging.getLogger("funnels")


def _build(fid: FunnelType, data: Dict[str, Any]) -> FunnelTypeDefinition:
    stages = tuple(StageDefinition(**s) for s in data["stages"])
    return FunnelTypeDefinition(
        id=fid,
        name=data["name"],
        description=data["description"],
        stages=stages,
        stage3_enabled=bool(data.get("stage3_enabled", False)),
        stage4_enabled=bool(data.get("stage4_enabled", False)),
        optimization_events=tuple(data.get("optimization_events") or FALLBACK_OPTIMIZATION_EVENTS),
    )


def load_catalog(path: Path = CATALOG_PATH) -> Dict[FunnelType, FunnelTypeDefinition]:
    if not path.exists():
        raise FileNotFoundError(f"Funnel catalog not found: {path}")
    raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    catalog: Dict[FunnelType, FunnelTypeDefinition] = {}
    for fid in FunnelType:
        if fid.value not in raw:
            raise ValueError(f"Funnel catalog missing entry for '{fid.value}'")
        catalog[fid] = _build(fid, raw[fid.value])
    extra = set(raw) - {f.value for f in FunnelType}
    if extra:
        raise ValueError(f"Funnel catalog has unregistered ids: {sorted(extra)}")
    return catalog


FUNNEL_TYPES = load_catalog()


def _coerce(funnel_type_id: Union[str, FunnelType, None]) -> Optional[FunnelType]:
    if funnel_type_id is None:
        return None
    try:
        return FunnelType(funnel_type_id)
    except ValueError:
        log.warning("Unknown funnel type id: %r", funnel_type_id)
        return None


def list_funnel_types() -> List[FunnelTypeDefinition]:
    return [FUNNEL_TYPES[f] for f in FunnelType]


def lookup_funnel_type(funnel_type_id: Union[str, FunnelType, None]) -> Optional[FunnelTypeDefinition]:
    fid = _coerce(funnel_type_id)
    return FUNNEL_TYPES.get(fid) if fid is not None else None


def optimization_events_for(funnel_type_id: Union[str, FunnelType, None]) -> List[str]:
    """Ordered optimization checkpoints for a funnel shape; generic pair if unknown."""
    definition = lookup_funnel_type(funnel_type_id)
    if definition is None:
        return list(FALLBACK_OPTIMIZATION_EVENTS)
    return list(definition.optimization_events)


def default_stage_names_for(funnel_type_id: Union[str, FunnelType, None]) -> Dict[str, str]:
    """{"stage1_name": "Registration", ...} for pre-filling forms."""
    definition = lookup_funnel_type(funnel_type_id)
    if definition is None:
        return {}
    return {f"{s.key}_name": s.default_name for s in definition.stages}


def active_stages_for(prospect) -> List[ActiveStage]:
    """
    Stages of the prospect's funnel that the prospect has switched on.
    Stage 3 and 4 are gated by the prospect's own enabled flags; names use the
    prospect's override when set.
    """
    definition = lookup_funnel_type(prospect.funnel_type)
    if definition is None:
        return []

    out: List[ActiveStage] = []
    for s in definition.stages:
        if s.key == "stage3" and not prospect.stage3_enabled:
            continue
        if s.key == "stage4" and not prospect.stage4_enabled:
            continue
        custom = getattr(prospect, f"{s.key}_name", None)
        out.append(ActiveStage(
            key=s.key,
            name=custom or s.default_name,
            default_name=s.default_name,
            can_be_paid=s.can_be_paid,
        ))
    return out
