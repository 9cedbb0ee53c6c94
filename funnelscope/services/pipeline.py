# funnelscope/services/pipeline.py
from __future__ import annotations
from typing import Any, Dict, List
import logging

import numpy as np
import pandas as pd
from pydantic import ValidationError

from funnelscope.config import CLOSED_STATUSES, STATUS_LABELS
from funnelscope.models.io import Prospect
from funnelscope.services.metrics import compute_current_metrics
from funnelscope.utils.math import r2

log = logging.getLogger("pipeline")


def _metrics_frame(rows: List[Dict[str, Any]]) -> pd.DataFrame:
    """One row per prospect with its status and current-metrics headline figures."""
    records = []
    for row in rows:
        try:
            prospect = Prospect(**row)
        except ValidationError:
            log.warning("Skipping invalid prospect row id=%r", row.get("id"))
            continue
        m = compute_current_metrics(prospect)
        records.append({
            "id": prospect.id,
            "status": prospect.status,
            "monthly_spend": m.monthly_spend if m else np.nan,
            "revenue": m.revenue if m else np.nan,
            "profit": m.profit if m else np.nan,
            "roi": m.roi if m else np.nan,
            "roi_status": m.roi_status if m else None,
            "is_profitable": m.is_profitable if m else False,
        })
    return pd.DataFrame(records, columns=[
        "id", "status", "monthly_spend", "revenue", "profit", "roi", "roi_status", "is_profitable",
    ])


def summarize_pipeline(rows: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Headline stats over a list of prospect rows (dashboard / admin view).
    Money totals only include prospects with enough data for metrics.
    """
    df = _metrics_frame(rows)

    by_status = {s: 0 for s in STATUS_LABELS}
    by_status.update({str(k): int(v) for k, v in df["status"].value_counts().items()})

    with_metrics = df[df["monthly_spend"].notna()]
    roi_breakdown = {"healthy": 0, "break_even": 0, "losing": 0}
    roi_breakdown.update({str(k): int(v) for k, v in with_metrics["roi_status"].value_counts().items()})

    avg_roi = with_metrics["roi"].mean() if not with_metrics.empty else None

    return {
        "counts": {
            "total": int(len(df)),
            "won": int((df["status"] == "won").sum()),
            "active": int((~df["status"].isin(CLOSED_STATUSES)).sum()),
            "with_metrics": int(len(with_metrics)),
            "profitable": int(with_metrics["is_profitable"].sum()),
        },
        "by_status": by_status,
        "roi_status": roi_breakdown,
        "totals": {
            "monthly_spend": float(with_metrics["monthly_spend"].fillna(0).sum()),
            "monthly_revenue": float(with_metrics["revenue"].fillna(0).sum()),
            "monthly_profit": float(with_metrics["profit"].fillna(0).sum()),
        },
        "avg_roi": None if avg_roi is None or pd.isna(avg_roi) else r2(avg_roi),
    }
