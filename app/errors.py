"""
Error taxonomy shared by ingestion, query, and API layers.
"""
from __future__ import annotations


class DashboardError(Exception):
    """Base class for every error the service raises on purpose."""

    status_code = 500
    label = "Internal server error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_payload(self) -> dict:
        return {"error": self.label, "details": self.message}


class FetchError(DashboardError):
    """The CSV source could not be reached or answered with a non-2xx status."""

    status_code = 502
    label = "Failed to fetch enrollment source"


class FetchTimeoutError(DashboardError, TimeoutError):
    """The CSV source did not answer within FETCH_TIMEOUT_SECONDS."""

    status_code = 504
    label = "Enrollment source timed out"


class ParseError(DashboardError):
    status_code = 422
    label = "Malformed enrollment CSV"


class ValidationError(DashboardError):
    status_code = 400
    label = "Invalid query parameter"


class NotFoundError(DashboardError):
    status_code = 404
    label = "Not found"


# Raised by ingestion; absorbed at startup, surfaced on manual sync
SYNC_ERRORS = (FetchError, FetchTimeoutError, ParseError)
