"""
Dashboard breakdowns — categories, monthly trends, revenue, payment status, period analytics.
"""
from __future__ import annotations

import datetime as dt

import pandas as pd

from app.analytics.common import safe_divide, pct_of_total, round_half_up
from app.config import (
    ANALYTICS_RECORD_LIMIT, CATEGORY_COLORS, PAID_STATUS, TREND_MONTHS,
)
from app.data.query import parse_dates
from app.data.schemas import PeriodFilter, Snapshot


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------

def category_distribution(snapshot: Snapshot) -> list[dict]:
    """Enrollment count per category in first-seen order, with chart colors."""
    df = snapshot.frame
    if df.empty:
        return []
    names = df["category"].replace("", "Other")
    counts = names.groupby(names, sort=False).size()
    total = len(df)
    return [
        {
            "name": name,
            "value": int(value),
            "color": CATEGORY_COLORS[i % len(CATEGORY_COLORS)],
            "percentage": round_half_up(pct_of_total(value, total), 1),
        }
        for i, (name, value) in enumerate(counts.items())
    ]


# ---------------------------------------------------------------------------
# Trends
# ---------------------------------------------------------------------------

def monthly_trends(snapshot: Snapshot, months: int = TREND_MONTHS) -> list[dict]:
    """Enrollments per calendar month for the latest ``months`` months with data."""
    df = snapshot.frame
    if df.empty:
        return []
    dates = parse_dates(df["enrollment_date"]).dropna()
    if dates.empty:
        return []

    grouped = dates.groupby(dates.dt.to_period("M")).size().sort_index()
    rows = []
    for period, count in grouped.tail(months).items():
        rows.append({
            "month": f"{period.start_time:%b %Y}",
            "key": str(period),
            "enrollments": int(count),
        })
    return rows


# ---------------------------------------------------------------------------
# Revenue
# ---------------------------------------------------------------------------

def revenue_metrics(snapshot: Snapshot) -> dict:
    """Total collected, revenue per paying student, and payment completion."""
    df = snapshot.frame
    total = len(df)
    total_revenue = float(df["paid_value"].astype(float).sum())
    paid = int((df["payment_status"] == PAID_STATUS).sum())

    metrics = {
        "totalRevenue": total_revenue,
        "avgRevenuePerStudent": safe_divide(total_revenue, paid),
        "paymentSuccessRate": round_half_up(pct_of_total(paid, total), 0),
        "paidStudents": paid,
        "pendingPayments": total - paid,
    }
    kpis = [
        {"title": "Total Revenue", "value": f"${total_revenue:,.0f}", "icon": "DollarSign"},
        {"title": "Avg Revenue/Student", "value": f"${round_half_up(metrics['avgRevenuePerStudent'], 0):,.0f}", "icon": "TrendingUp"},
        {"title": "Payment Success Rate", "value": f"{metrics['paymentSuccessRate']:.0f}%", "icon": "CreditCard"},
        {"title": "Pending Payments", "value": str(metrics["pendingPayments"]), "icon": "Clock"},
    ]
    return {"kpis": kpis, "metrics": metrics}


def payment_status_counts(snapshot: Snapshot) -> dict[str, int]:
    df = snapshot.frame
    if df.empty:
        return {}
    status = df["payment_status"].replace("", "Unknown")
    return {k: int(v) for k, v in status.groupby(status, sort=False).size().items()}


# ---------------------------------------------------------------------------
# Period analytics
# ---------------------------------------------------------------------------

def period_analytics(snapshot: Snapshot, period: PeriodFilter, today: dt.date) -> dict:
    """Coarse "today" / "this month" view: revenue, category mix, first records."""
    df = snapshot.frame
    start = period.resolve(today)
    if start is not None and not df.empty:
        dates = parse_dates(df["enrollment_date"])
        df = df[dates >= pd.Timestamp(start)]

    total = len(df)
    total_revenue = float(df["paid_value"].astype(float).sum()) if total else 0.0
    breakdown: dict[str, int] = {}
    for category in df["category"]:
        key = category or "Other"
        breakdown[key] = breakdown.get(key, 0) + 1

    return {
        "period": period.period_type.value,
        "label": period.label,
        "totalEnrollments": total,
        "totalRevenue": total_revenue,
        "categoryBreakdown": breakdown,
        "enrollments": [
            snapshot.enrollments[pos].to_dict() for pos in df.index[:ANALYTICS_RECORD_LIMIT]
        ],
        "summary": {
            "avgRevenuePerEnrollment": safe_divide(total_revenue, total),
            "topCategory": max(breakdown, key=breakdown.get) if breakdown else "None",
        },
    }
