"""
FastAPI dependencies — DataStore lookup, snapshot capture, period parsing.
"""
from __future__ import annotations

from fastapi import HTTPException, Query, Request

from app.data.store import DataStore
from app.data.schemas import PeriodFilter, PeriodType, Snapshot


def get_store(request: Request) -> DataStore:
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise HTTPException(503, "Server not initialized yet")
    return store


def get_snapshot(request: Request) -> Snapshot:
    """The snapshot current at request start; later syncs don't affect this request."""
    return get_store(request).snapshot


def parse_period(
    period: str = Query("all", description="all|today|thisMonth"),
) -> PeriodFilter:
    try:
        return PeriodFilter(PeriodType(period))
    except ValueError:
        raise HTTPException(400, f"Invalid period: {period}")
