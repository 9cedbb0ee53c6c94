# funnelscope/store/prospects.py
"""
JSON-file prospect store.

Stands in for the remote data store: create/read/update/delete/search over
plain dict rows keyed by prospect id. Rows are validated by the routers
(pydantic) before they get here.
"""
from __future__ import annotations
import json
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from funnelscope import config
from funnelscope.models.io import ProjectionInputs

log = logging.getLogger("prospects")

PROJECTION_FIELDS = tuple(ProjectionInputs.model_fields)


def _store_file() -> Path:
    return Path(config.DATA_DIR) / "prospects.json"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")


def _load() -> Dict[str, Dict[str, Any]]:
    path = _store_file()
    if not path.exists():
        return {}
    txt = path.read_text(encoding="utf-8")
    try:
        return json.loads(txt)
    except json.JSONDecodeError:
        log.warning("Corrupt prospect store at %s; treating as empty", path)
        return {}


def _save(obj: Dict[str, Dict[str, Any]]) -> None:
    path = _store_file()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(obj, indent=2, ensure_ascii=False), encoding="utf-8")


def _newest_first(rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return sorted(rows, key=lambda r: r.get("created_at") or "", reverse=True)


def list_prospects(user_id: Optional[str] = None) -> List[Dict[str, Any]]:
    """All prospects, newest first; restricted to one owner when user_id is given."""
    rows = list(_load().values())
    if user_id is not None:
        rows = [r for r in rows if r.get("user_id") == user_id]
    return _newest_first(rows)


def get_prospect(prospect_id: str) -> Optional[Dict[str, Any]]:
    return _load().get(str(prospect_id))


def create_prospect(data: Dict[str, Any], user_id: Optional[str] = None) -> Dict[str, Any]:
    state = _load()
    pid = str(uuid.uuid4())
    now = _now()
    row = {k: v for k, v in data.items() if v is not None}
    row.setdefault("status", "new")
    row.update({"id": pid, "user_id": user_id, "created_at": now, "updated_at": now})
    state[pid] = row
    _save(state)
    log.info("Created prospect %s (%s)", pid, row.get("business_name") or row.get("name"))
    return row


def update_prospect(prospect_id: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    state = _load()
    pid = str(prospect_id)
    if pid not in state:
        return None
    row = state[pid]
    row.update({k: v for k, v in data.items() if k not in ("id", "user_id", "created_at")})
    row["updated_at"] = _now()
    state[pid] = row
    _save(state)
    log.info("Updated prospect %s: %s", pid, sorted(data))
    return row


def delete_prospect(prospect_id: str) -> bool:
    state = _load()
    pid = str(prospect_id)
    if state.pop(pid, None) is None:
        return False
    _save(state)
    log.info("Deleted prospect %s", pid)
    return True


def search_prospects(query: Optional[str] = None,
                     status: Optional[str] = None,
                     user_id: Optional[str] = None) -> List[Dict[str, Any]]:
    """
    Case-insensitive substring match on name or business name, optionally
    narrowed to one status ("all" or empty means any status).
    """
    rows = list_prospects(user_id=user_id)
    q = (query or "").strip().lower()
    if q:
        rows = [
            r for r in rows
            if q in (r.get("name") or "").lower() or q in (r.get("business_name") or "").lower()
        ]
    if status and status != "all":
        rows = [r for r in rows if r.get("status") == status]
    return rows


def save_projection_inputs(prospect_id: str, inputs: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """Persist only the projection fields of `inputs` onto the prospect."""
    payload = {k: v for k, v in inputs.items() if k in PROJECTION_FIELDS}
    return update_prospect(prospect_id, payload)
