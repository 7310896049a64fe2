"""
Enrollment overview — headline counts and the four KPI cards.
"""
from __future__ import annotations

from app.analytics.common import round_half_up, safe_divide
from app.config import ACTIVE_STATUS, COMPLETED_STATUS, KPI_CARDS
from app.data.schemas import Snapshot


def overview_metrics(snapshot: Snapshot) -> dict:
    """Total / active / completed counts and mean progress (0 when empty)."""
    df = snapshot.frame
    total = len(df)
    return {
        "totalEnrollments": total,
        "activeStudents": int((df["status"] == ACTIVE_STATUS).sum()),
        "completedCourses": int((df["status"] == COMPLETED_STATUS).sum()),
        "avgProgress": float(safe_divide(df["progress"].astype(float).sum(), total)),
    }


def _format_kpi(value, fmt: str) -> str:
    if fmt == "percent":
        return f"{int(round_half_up(value, 0))}%"
    return f"{value:,}"


def overview_kpis(snapshot: Snapshot) -> dict:
    metrics = overview_metrics(snapshot)
    kpis = []
    for key, title, icon, subtitle, fmt in KPI_CARDS:
        kpis.append({
            "title": title,
            "value": _format_kpi(metrics[key], fmt),
            "rawValue": metrics[key],
            "icon": icon,
            "subtitle": subtitle,
        })
    return {"kpis": kpis, "metrics": metrics}
