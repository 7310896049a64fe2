"""
Pydantic response schemas for the API.
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    totalRecords: int
    lastSync: Optional[str]
    isLoading: bool
    origin: str


class DataStatsResponse(BaseModel):
    totalRecords: int
    lastSync: Optional[str]
    isLoading: bool
    availableFields: list[str]
    firstFewRecords: list[dict[str, Any]]


class SyncResponse(BaseModel):
    message: str
    recordsProcessed: int
    timestamp: str
    dataFields: list[str]
    sampleRecord: Optional[dict[str, Any]]


class ChurnResponse(BaseModel):
    category: str
    churnRate: float
    activeCustomers: int
    churnedCustomers: int
    totalCustomers: int
    retentionRate: float


class ErrorResponse(BaseModel):
    error: str
    details: str
