"""
Sync endpoint — re-fetch the sheet and swap in a fresh snapshot.
"""
from __future__ import annotations

import datetime as dt
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.data.store import DataStore
from app.api.dependencies import get_store
from app.api.response_models import ErrorResponse, SyncResponse
from app.analytics.common import sanitize_for_json
from app.errors import SYNC_ERRORS

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["sync"])


@router.post(
    "/sync",
    response_model=SyncResponse,
    responses={502: {"model": ErrorResponse}, 504: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
def sync_sheet(store: DataStore = Depends(get_store)):
    """Reload every row from the sheet. On failure the previous data stays in place."""
    logger.info("Manual sync requested")
    try:
        snap = store.sync()
    except SYNC_ERRORS as exc:
        logger.error("Manual sync failed: %s", exc)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": "Failed to sync Google Sheets data", "details": exc.message},
        )

    first = snap.enrollments[0].to_dict() if snap.enrollments else None
    return SyncResponse(
        message="Google Sheets sync completed successfully",
        recordsProcessed=len(snap),
        timestamp=dt.datetime.now(dt.timezone.utc).isoformat(),
        dataFields=snap.fields(),
        sampleRecord=sanitize_for_json(first) if first else None,
    )
