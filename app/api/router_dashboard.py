"""
Dashboard endpoints — Overview KPIs, LTV, Churn, and chart breakdowns.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from app.config import LTV_DEFAULT_LIMIT
from app.data.store import DataStore
from app.data.schemas import PeriodFilter, Snapshot
from app.data.query import parse_limit
from app.api.dependencies import get_snapshot, get_store, parse_period
from app.api.response_models import ChurnResponse
from app.analytics.common import sanitize_for_json
from app.analytics.overview import overview_kpis
from app.analytics.ltv import ltv_ranking
from app.analytics.churn import churn_analysis
from app.analytics.breakdowns import (
    category_distribution,
    monthly_trends,
    payment_status_counts,
    period_analytics,
    revenue_metrics,
)

router = APIRouter(prefix="/api", tags=["dashboard"])


def _safe_json(data: dict) -> JSONResponse:
    return JSONResponse(content=sanitize_for_json(data))


@router.get("/overview")
def overview(snapshot: Snapshot = Depends(get_snapshot)):
    """The four enrollment KPI cards."""
    return _safe_json(overview_kpis(snapshot))


@router.get("/ltv")
def ltv(
    limit: str = Query(str(LTV_DEFAULT_LIMIT), description="Customers to return"),
    snapshot: Snapshot = Depends(get_snapshot),
):
    """Customers ranked by lifetime value; the summary covers all of them."""
    return _safe_json(ltv_ranking(snapshot, limit=parse_limit(limit)))


@router.get("/churn", response_model=ChurnResponse)
def churn(
    category: str = Query("all"),
    snapshot: Snapshot = Depends(get_snapshot),
):
    return ChurnResponse(**churn_analysis(snapshot, category))


@router.get("/categories")
def categories(snapshot: Snapshot = Depends(get_snapshot)):
    return _safe_json({"categories": category_distribution(snapshot)})


@router.get("/trends")
def trends(snapshot: Snapshot = Depends(get_snapshot)):
    """Enrollments per month, latest six months with data."""
    return _safe_json({"trends": monthly_trends(snapshot)})


@router.get("/revenue/metrics")
def revenue(snapshot: Snapshot = Depends(get_snapshot)):
    return _safe_json(revenue_metrics(snapshot))


@router.get("/revenue/payment-status")
def payment_status(snapshot: Snapshot = Depends(get_snapshot)):
    return _safe_json({"paymentStatus": payment_status_counts(snapshot)})


@router.get("/analytics")
def analytics(
    period: PeriodFilter = Depends(parse_period),
    store: DataStore = Depends(get_store),
):
    """Coarse period view (all / today / thisMonth) of revenue and categories."""
    snapshot = store.snapshot
    return _safe_json(period_analytics(snapshot, period, store.clock().date()))
