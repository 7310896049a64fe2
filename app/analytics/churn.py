"""
Churn and retention over enrollment status.
"""
from __future__ import annotations

from app.analytics.common import pct_of_total, round_half_up
from app.config import ACTIVE_STATUS
from app.data.schemas import Snapshot


def churn_analysis(snapshot: Snapshot, category: str = "all") -> dict:
    """Every non-Active enrollment counts as churned.

    ``category`` narrows to one course category (case-insensitive); "all" keeps everything.
    """
    df = snapshot.frame
    category = (category or "all").strip() or "all"
    if category.lower() != "all":
        df = df[df["category"].astype(str).str.lower() == category.lower()]

    total = len(df)
    active = int((df["status"] == ACTIVE_STATUS).sum())
    churned = total - active
    churn_rate = pct_of_total(churned, total)

    return {
        "category": category,
        "churnRate": round_half_up(churn_rate, 2),
        "activeCustomers": active,
        "churnedCustomers": churned,
        "totalCustomers": total,
        "retentionRate": round_half_up(100 - churn_rate, 2),
    }
