"""
Enrollment record, snapshot, query result, and coarse period filter schemas.
"""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property
from typing import Optional

import pandas as pd


# Canonical attribute → JSON key served to the dashboard
JSON_KEYS = {
    "id": "id",
    "student_name": "studentName",
    "email": "email",
    "phone": "phone",
    "country_code": "countryCode",
    "address": "address",
    "age": "age",
    "gender": "gender",
    "course": "course",
    "category": "category",
    "enrollment_date": "enrollmentDate",
    "timestamp": "timestamp",
    "status": "status",
    "progress": "progress",
    "payment_status": "paymentStatus",
    "fees_paid": "feesPaid",
    "fees_remaining": "feesRemaining",
    "amount": "amount",
    "schedule": "schedule",
    "source": "source",
}

FRAME_COLUMNS = [
    "id", "student_name", "email", "course", "category", "enrollment_date",
    "status", "progress", "payment_status", "fees_paid", "fees_remaining",
    "amount", "paid_value",
]


@dataclass
class Enrollment:
    """One student's course registration, normalized from a sheet row."""
    id: int
    student_name: str
    email: str
    course: str = "Unknown Course"
    category: str = "General"
    enrollment_date: str = ""
    status: str = "Active"
    progress: int = 0
    payment_status: str = "Pending"
    fees_paid: float = 0.0
    fees_remaining: float = 0.0
    amount: float = 0.0
    phone: str = ""
    country_code: str = ""
    address: str = ""
    age: str = ""
    gender: str = ""
    timestamp: str = ""
    schedule: str = ""
    source: str = "Direct"
    raw: dict[str, str] = field(default_factory=dict, repr=False)

    @property
    def paid_value(self) -> float:
        """Fees paid, or the listed amount when nothing is recorded as paid."""
        return self.fees_paid or self.amount

    def to_dict(self) -> dict:
        """Canonical JSON keys first, then every raw column not shadowed by one."""
        out = {key: getattr(self, attr) for attr, key in JSON_KEYS.items()}
        for key, value in self.raw.items():
            out.setdefault(key, value)
        return out

    def frame_row(self) -> dict:
        row = {col: getattr(self, col) for col in FRAME_COLUMNS if col != "paid_value"}
        row["paid_value"] = self.paid_value
        return row


@dataclass(frozen=True)
class Snapshot:
    """Immutable view of the store: replaced wholesale, never edited in place."""
    enrollments: tuple[Enrollment, ...] = ()
    last_sync: Optional[dt.datetime] = None
    origin: str = "empty"           # "sheets" | "sample" | "empty"

    def __len__(self) -> int:
        return len(self.enrollments)

    @cached_property
    def frame(self) -> pd.DataFrame:
        """Canonical columns as a DataFrame, positional index = enrollment order."""
        return pd.DataFrame(
            [e.frame_row() for e in self.enrollments],
            columns=FRAME_COLUMNS,
        )

    def fields(self) -> list[str]:
        if not self.enrollments:
            return []
        return list(self.enrollments[0].to_dict().keys())


@dataclass
class QueryResult:
    items: list[Enrollment]
    total: int          # snapshot size, before filtering
    filtered: int       # after filtering, before limit
    limit: int

    def to_dict(self) -> dict:
        return {
            "enrollments": [e.to_dict() for e in self.items],
            "total": self.total,
            "filtered": self.filtered,
            "page": 1,
            "limit": self.limit,
        }


class PeriodType(str, Enum):
    ALL = "all"
    TODAY = "today"
    THIS_MONTH = "thisMonth"


@dataclass
class PeriodFilter:
    """Coarse lower-bound date filter used by the analytics endpoint."""
    period_type: PeriodType = PeriodType.ALL

    def resolve(self, today: dt.date) -> Optional[dt.date]:
        """Return the earliest included date, or None for no bound."""
        if self.period_type == PeriodType.TODAY:
            return today
        if self.period_type == PeriodType.THIS_MONTH:
            return today.replace(day=1)
        return None

    @property
    def label(self) -> str:
        if self.period_type == PeriodType.TODAY:
            return "Today"
        if self.period_type == PeriodType.THIS_MONTH:
            return "This Month"
        return "All Time"
