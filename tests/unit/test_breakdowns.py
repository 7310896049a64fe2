from __future__ import annotations

import datetime as dt

from app.analytics.breakdowns import (
    category_distribution,
    monthly_trends,
    payment_status_counts,
    period_analytics,
    revenue_metrics,
)
from app.data.schemas import PeriodFilter, PeriodType, Snapshot
from tests.conftest import make_enrollment, make_snapshot

TODAY = dt.date(2025, 3, 15)


def test_categories_first_seen_order(store):
    cats = category_distribution(store.snapshot)
    assert [(c["name"], c["value"], c["percentage"]) for c in cats] == [
        ("Design", 1, 25.0),
        ("Programming", 2, 50.0),
        ("Marketing", 1, 25.0),
    ]
    assert all(c["color"].startswith("#") for c in cats)


def test_monthly_trends(store):
    trends = monthly_trends(store.snapshot)
    assert [t["key"] for t in trends] == ["2024-12", "2025-01", "2025-02", "2025-03"]
    assert trends[0]["month"] == "Dec 2024"
    assert all(t["enrollments"] == 1 for t in trends)


def test_monthly_trends_keeps_latest_months(store):
    assert [t["key"] for t in monthly_trends(store.snapshot, months=2)] == ["2025-02", "2025-03"]


def test_revenue_metrics(store):
    revenue = revenue_metrics(store.snapshot)
    assert revenue["metrics"] == {
        "totalRevenue": 4900.0,
        "avgRevenuePerStudent": 2450.0,
        "paymentSuccessRate": 50.0,
        "paidStudents": 2,
        "pendingPayments": 2,
    }
    assert revenue["kpis"][0]["value"] == "$4,900"


def test_payment_status_counts(store):
    assert payment_status_counts(store.snapshot) == {"Paid": 2, "Pending": 2}


def test_period_all(store):
    result = period_analytics(store.snapshot, PeriodFilter(), TODAY)
    assert result["period"] == "all"
    assert result["label"] == "All Time"
    assert result["totalEnrollments"] == 4
    assert result["totalRevenue"] == 4900.0
    assert result["categoryBreakdown"] == {"Design": 1, "Programming": 2, "Marketing": 1}
    assert result["summary"]["topCategory"] == "Programming"
    assert len(result["enrollments"]) == 4


def test_period_this_month(store):
    result = period_analytics(store.snapshot, PeriodFilter(PeriodType.THIS_MONTH), TODAY)
    assert result["totalEnrollments"] == 1
    assert result["enrollments"][0]["studentName"] == "Jane Smith"
    assert result["summary"]["avgRevenuePerEnrollment"] == 1500.0


def test_period_today_no_records(store):
    result = period_analytics(store.snapshot, PeriodFilter(PeriodType.TODAY), TODAY)
    assert result["totalEnrollments"] == 0
    assert result["totalRevenue"] == 0.0
    assert result["summary"] == {"avgRevenuePerEnrollment": 0.0, "topCategory": "None"}


def test_empty_snapshot_breakdowns():
    empty = Snapshot()
    assert category_distribution(empty) == []
    assert monthly_trends(empty) == []
    assert payment_status_counts(empty) == {}
    assert revenue_metrics(empty)["metrics"]["paymentSuccessRate"] == 0
    assert period_analytics(empty, PeriodFilter(PeriodType.THIS_MONTH), TODAY)["totalEnrollments"] == 0


def test_period_this_month_with_offset_dates():
    snap = make_snapshot(
        make_enrollment(1, enrollment_date="2025-03-02T10:00:00Z", category="Design"),
        make_enrollment(2, enrollment_date="2025-02-27T23:00:00+00:00", category="Design"),
        make_enrollment(3, enrollment_date="2025-03-05", category="Marketing"),
    )
    result = period_analytics(snap, PeriodFilter(PeriodType.THIS_MONTH), TODAY)
    assert [e["id"] for e in result["enrollments"]] == [1, 3]


def test_trends_with_offset_dates():
    snap = make_snapshot(
        make_enrollment(1, enrollment_date="2025-01-31T23:30:00-02:00"),
        make_enrollment(2, enrollment_date="2025-01-15"),
    )
    # 23:30-02:00 on Jan 31 is Feb 1 in UTC
    assert [(t["key"], t["enrollments"]) for t in monthly_trends(snap)] == [
        ("2025-01", 1), ("2025-02", 1),
    ]


def test_period_this_month_all_dates_with_offsets():
    snap = make_snapshot(make_enrollment(1, enrollment_date="2025-03-02T10:00:00Z", fees_paid=250.0))
    result = period_analytics(snap, PeriodFilter(PeriodType.THIS_MONTH), TODAY)
    assert result["totalEnrollments"] == 1
    assert result["totalRevenue"] == 250.0
