"""
Customer lifetime value — per-email revenue ranking and summary.
"""
from __future__ import annotations

from typing import Optional

import pandas as pd

from app.analytics.common import safe_divide
from app.data.schemas import Snapshot


def customer_ltv(snapshot: Snapshot) -> pd.DataFrame:
    """One row per email in first-seen order, ranked by total paid (stable)."""
    df = snapshot.frame
    if df.empty:
        return pd.DataFrame(columns=[
            "email", "student_name", "total_paid", "enrollment_count",
            "course_count", "first_enrollment", "last_activity", "avg_revenue_per_course",
        ])

    cust = df.groupby("email", sort=False).agg(
        student_name=("student_name", "first"),
        total_paid=("paid_value", "sum"),
        enrollment_count=("id", "count"),
        course_count=("course", "nunique"),
        first_enrollment=("enrollment_date", "first"),
        last_activity=("enrollment_date", "last"),
    ).reset_index()

    cust["avg_revenue_per_course"] = cust["total_paid"] / cust["enrollment_count"]
    return cust.sort_values("total_paid", ascending=False, kind="stable").reset_index(drop=True)


def _customer_record(row: dict) -> dict:
    return {
        "studentName": row["student_name"],
        "email": row["email"],
        "totalPaid": float(row["total_paid"]),
        "enrollmentCount": int(row["enrollment_count"]),
        "courseCount": int(row["course_count"]),
        "firstEnrollment": row["first_enrollment"],
        "lastActivity": row["last_activity"],
        "avgRevenuePerCourse": float(row["avg_revenue_per_course"]),
    }


def ltv_ranking(snapshot: Snapshot, limit: Optional[int] = None) -> dict:
    """Ranked customers (optionally truncated) plus a summary over all of them."""
    cust = customer_ltv(snapshot)
    customers = [_customer_record(r) for r in cust.to_dict("records")]

    total_customers = len(customers)
    total_ltv = float(sum(c["totalPaid"] for c in customers))

    return {
        "customers": customers[:limit] if limit is not None else customers,
        "summary": {
            "totalCustomers": total_customers,
            "totalLTV": total_ltv,
            "avgLTV": safe_divide(total_ltv, total_customers),
            "topCustomer": customers[0] if customers else None,
        },
    }
