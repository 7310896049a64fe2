"""
Search, status filtering, and date ordering over a snapshot.
"""
from __future__ import annotations

import pandas as pd

from app.config import RECENT_DEFAULT_LIMIT, SEARCH_RESULT_LIMIT
from app.data.schemas import Enrollment, QueryResult, Snapshot
from app.errors import NotFoundError, ValidationError

_SEARCH_COLUMNS = ["student_name", "email", "course"]


def parse_limit(value) -> int:
    """Accept a positive int (or decimal digit string); reject everything else."""
    if isinstance(value, bool):
        raise ValidationError(f"limit must be a positive integer, got {value!r}")
    if isinstance(value, int):
        number = value
    else:
        text = str(value).strip() if value is not None else ""
        if not text.removeprefix("+").isdecimal():
            raise ValidationError(f"limit must be a positive integer, got {value!r}")
        try:
            number = int(text)
        except ValueError as exc:
            raise ValidationError(f"limit must be a positive integer, got {value!r}") from exc
    if number <= 0:
        raise ValidationError(f"limit must be a positive integer, got {value!r}")
    return number


def parse_dates(values: pd.Series) -> pd.Series:
    """Parse enrollment dates as naive UTC; anything unreadable becomes NaT.

    Offsets are converted to UTC and dropped, offset-free values are taken as
    UTC, so a column mixing both still compares and sorts.
    """
    parsed = pd.to_datetime(values, errors="coerce", format="mixed", utc=True)
    return parsed.dt.tz_localize(None)


def _search_mask(df: pd.DataFrame, search: str) -> pd.Series:
    term = search.strip().lower()
    mask = pd.Series(False, index=df.index)
    for col in _SEARCH_COLUMNS:
        mask |= df[col].astype(str).str.lower().str.contains(term, regex=False)
    return mask


def _ordered_positions(df: pd.DataFrame) -> list[int]:
    """Row positions newest-first; NaT dates last; ties keep snapshot order."""
    dates = parse_dates(df["enrollment_date"])
    ordered = dates.sort_values(ascending=False, na_position="last", kind="stable")
    return ordered.index.tolist()


def query_enrollments(
    snapshot: Snapshot,
    limit=RECENT_DEFAULT_LIMIT,
    search: str = "",
    status: str = "all",
) -> QueryResult:
    """Filter by search text and status, newest first, truncated to ``limit``."""
    limit = parse_limit(limit)
    df = snapshot.frame

    if search and search.strip():
        df = df[_search_mask(df, search)]

    status = (status or "").strip()
    if status and status.lower() != "all":
        df = df[df["status"].astype(str).str.lower() == status.lower()]

    positions = _ordered_positions(df) if not df.empty else []
    items = [snapshot.enrollments[pos] for pos in positions[:limit]]
    return QueryResult(items=items, total=len(snapshot), filtered=len(positions), limit=limit)


def search_students(snapshot: Snapshot, q: str, limit: int = SEARCH_RESULT_LIMIT) -> list[Enrollment]:
    """Name/email/course matches in snapshot order; empty query → no results."""
    if not q or not q.strip():
        return []
    df = snapshot.frame
    matches = df[_search_mask(df, q)]
    return [snapshot.enrollments[pos] for pos in matches.index[:limit]]


def get_enrollment(snapshot: Snapshot, enrollment_id: int) -> Enrollment:
    for enrollment in snapshot.enrollments:
        if enrollment.id == enrollment_id:
            return enrollment
    raise NotFoundError(f"Student {enrollment_id} not found")
