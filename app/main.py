"""
Enrollment Analytics — FastAPI app factory with startup sheet sync.
"""
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import CORS_ORIGINS, ENROLLMENT_CSV_URL
from app.data.store import DataStore
from app.errors import DashboardError
from app.log import setup_logging
from app.api.router_meta import router as meta_router
from app.api.router_sync import router as sync_router
from app.api.router_enrollments import router as enrollments_router
from app.api.router_dashboard import router as dashboard_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Sync the sheet at startup (sample data on failure); drop the snapshot on exit."""
    setup_logging()
    store: DataStore = app.state.store
    if app.state.load_on_startup:
        print(f"  ENROLLMENT_CSV_URL = {ENROLLMENT_CSV_URL}")
        store.load()
        state = store.state()
        print(f"\nEnrollment Analytics ready — {state['totalRecords']:,} records "
              f"({state['origin']}), last sync {state['lastSync']}\n")
    yield
    store.teardown()


async def dashboard_error_handler(request: Request, exc: DashboardError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


def create_app(store: Optional[DataStore] = None, load_on_startup: bool = True) -> FastAPI:
    app = FastAPI(
        title="Enrollment Analytics API",
        description="Enrollment, lifetime value, and churn analytics over a Google Sheets export",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.store = store if store is not None else DataStore()
    app.state.load_on_startup = load_on_startup

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(DashboardError, dashboard_error_handler)

    app.include_router(meta_router)
    app.include_router(sync_router)
    app.include_router(enrollments_router)
    app.include_router(dashboard_router)

    return app


app = create_app()
