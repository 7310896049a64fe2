"""
Enrollment endpoints — recent listing, lookup by id, student search, export.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse, Response

from app.config import EXPORT_FILENAME, RECENT_DEFAULT_LIMIT
from app.data.schemas import Snapshot
from app.data.query import get_enrollment, query_enrollments, search_students
from app.api.dependencies import get_snapshot
from app.analytics.common import sanitize_for_json
from app.reports.export import export_csv, export_json, export_workbook

router = APIRouter(prefix="/api", tags=["enrollments"])

_XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@router.get("/enrollments")
def recent_enrollments(
    limit: str = Query(str(RECENT_DEFAULT_LIMIT), description="Positive integer"),
    search: str = Query(""),
    status: str = Query("all", description="Status name or 'all'"),
    snapshot: Snapshot = Depends(get_snapshot),
):
    """Newest enrollments first, filtered by search text and status."""
    result = query_enrollments(snapshot, limit=limit, search=search, status=status)
    return JSONResponse(content=sanitize_for_json(result.to_dict()))


@router.get("/enrollments/{enrollment_id}")
def enrollment_detail(enrollment_id: int, snapshot: Snapshot = Depends(get_snapshot)):
    student = get_enrollment(snapshot, enrollment_id)
    return JSONResponse(content=sanitize_for_json({"student": student.to_dict()}))


@router.get("/students/search")
def student_search(q: str = Query(""), snapshot: Snapshot = Depends(get_snapshot)):
    students = search_students(snapshot, q)
    return JSONResponse(content=sanitize_for_json({"students": [s.to_dict() for s in students]}))


@router.get("/export")
def export_enrollments(
    format: str = Query("csv", description="csv|json|xlsx"),
    snapshot: Snapshot = Depends(get_snapshot),
):
    """Download the current snapshot."""
    fmt = format.lower()
    if fmt == "csv":
        return Response(
            content=export_csv(snapshot),
            media_type="text/csv",
            headers={"Content-Disposition": f"attachment; filename={EXPORT_FILENAME}.csv"},
        )
    if fmt == "xlsx":
        return Response(
            content=export_workbook(snapshot),
            media_type=_XLSX_MEDIA_TYPE,
            headers={"Content-Disposition": f"attachment; filename={EXPORT_FILENAME}.xlsx"},
        )
    if fmt == "json":
        return JSONResponse(content=export_json(snapshot))
    raise HTTPException(400, f"Unknown export format: {format}. Valid: ['csv', 'json', 'xlsx']")
