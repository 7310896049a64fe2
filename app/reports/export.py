"""
Enrollment export — quoted CSV, JSON, and a styled Excel workbook.
"""
from __future__ import annotations

import csv

import pandas as pd

from app.analytics.common import sanitize_for_json
from app.analytics.overview import overview_metrics
from app.analytics.ltv import ltv_ranking
from app.analytics.breakdowns import category_distribution
from app.config import EXPORT_COLUMNS, LTV_DEFAULT_LIMIT, PAID_STATUS, COMPLETED_STATUS
from app.data.schemas import Snapshot
from app.excel.writer import ExcelWriter


ENROLLMENT_COLS = [
    ("studentName", "text", "Student Name"),
    ("email", "text", "Email"),
    ("course", "text", "Course"),
    ("category", "text", "Category"),
    ("enrollmentDate", "text", "Enrollment Date"),
    ("status", "text", "Status"),
    ("progress", "number", "Progress %"),
    ("paymentStatus", "text", "Payment Status"),
    ("paidValue", "currency", "Amount"),
]

LTV_COLS = [
    ("studentName", "text", "Student Name"),
    ("email", "text", "Email"),
    ("enrollmentCount", "number", "Enrollments"),
    ("totalPaid", "currency", "Total LTV"),
    ("avgRevenuePerCourse", "currency", "Avg/Course"),
]

CATEGORY_COLS = [
    ("name", "text", "Category"),
    ("value", "number", "Enrollments"),
    ("percentage", "percent", "Share"),
]


def _export_rows(snapshot: Snapshot) -> list[dict]:
    rows = []
    for enrollment in snapshot.enrollments:
        row = enrollment.to_dict()
        row["paidValue"] = enrollment.paid_value
        rows.append(row)
    return rows


def export_frame(snapshot: Snapshot) -> pd.DataFrame:
    """The fixed export column set, one row per enrollment."""
    headers = [header for header, _ in EXPORT_COLUMNS]
    rows = _export_rows(snapshot)
    return pd.DataFrame(
        [[row.get(key, "") for _, key in EXPORT_COLUMNS] for row in rows],
        columns=headers,
    )


def export_csv(snapshot: Snapshot) -> str:
    """CSV text with every field quoted."""
    return export_frame(snapshot).to_csv(index=False, quoting=csv.QUOTE_ALL, lineterminator="\n")


def export_json(snapshot: Snapshot) -> dict:
    return sanitize_for_json({"enrollments": [e.to_dict() for e in snapshot.enrollments]})


def _highlight(row: dict) -> str | None:
    if row.get("status") == COMPLETED_STATUS:
        return "green"
    if row.get("paymentStatus") != PAID_STATUS:
        return "warning"
    return None


def export_workbook(snapshot: Snapshot) -> bytes:
    """Two sheets: an overview (KPI cards, top customers, categories) and every enrollment."""
    metrics = overview_metrics(snapshot)
    ltv = ltv_ranking(snapshot, limit=LTV_DEFAULT_LIMIT)
    synced = snapshot.last_sync.strftime("%Y-%m-%d %H:%M UTC") if snapshot.last_sync else "never"

    writer = ExcelWriter()

    writer.add_sheet("Overview")
    writer.write_title("Enrollment Overview", f"Last sync: {synced} ({snapshot.origin})")
    writer.write_kpi_row([
        (metrics["totalEnrollments"], "Total Enrollments", "number"),
        (metrics["activeStudents"], "Active Students", "number"),
        (metrics["completedCourses"], "Completed Courses", "number"),
        (metrics["avgProgress"], "Average Progress", "percent"),
    ])
    writer.write_section("Top Customers by Lifetime Value")
    writer.write_table(LTV_COLS, ltv["customers"])
    writer.write_section("Categories")
    writer.write_table(CATEGORY_COLS, category_distribution(snapshot))

    writer.add_sheet("Enrollments")
    writer.write_table(ENROLLMENT_COLS, _export_rows(snapshot), highlight_fn=_highlight, freeze=True)

    return writer.to_bytes()
