"""
Meta endpoints: health and data stats.
"""
from __future__ import annotations

import datetime as dt

from fastapi import APIRouter, Depends

from app.data.store import DataStore
from app.api.dependencies import get_store
from app.api.response_models import HealthResponse, DataStatsResponse

router = APIRouter(prefix="/api", tags=["meta"])


@router.get("/health", response_model=HealthResponse)
def health(store: DataStore = Depends(get_store)):
    return HealthResponse(
        status="ok",
        timestamp=dt.datetime.now(dt.timezone.utc).isoformat(),
        **store.state(),
    )


@router.get("/data/stats", response_model=DataStatsResponse)
def data_stats(store: DataStore = Depends(get_store)):
    snap = store.snapshot
    state = store.state()
    return DataStatsResponse(
        totalRecords=state["totalRecords"],
        lastSync=state["lastSync"],
        isLoading=state["isLoading"],
        availableFields=snap.fields(),
        firstFewRecords=[
            {"id": e.id, "studentName": e.student_name, "email": e.email,
             "course": e.course, "category": e.category}
            for e in snap.enrollments[:5]
        ],
    )
