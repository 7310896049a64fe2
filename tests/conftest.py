from __future__ import annotations

import datetime as dt
import random

import pytest
from fastapi.testclient import TestClient

from app.data.schemas import Enrollment, Snapshot
from app.data.store import DataStore
from app.errors import FetchError
from app.main import create_app

FIXED_NOW = dt.datetime(2025, 3, 15, 9, 30, tzinfo=dt.timezone.utc)

SHEET_CSV = (
    "Timestamp,Student Name,Email Address,Package,Activity,Start Date,Status,Progress,Fees Paid Amount,Amount\r\n"
    "3/1/2025 10:00:00,Jane Smith,jane@example.com,UI/UX Design,Design,2025-03-01,Active,60,1500,1500\r\n"
    '3/2/2025 11:00:00,"Doe, John",john@example.com,React Development,Programming,2025-02-10,Completed,100,"2,000",2000\r\n'
    "\r\n"
    "3/3/2025 12:00:00,Jane Smith,jane@example.com,Data Science,Programming,2025-01-05,Active,40,0,800\r\n"
    ",,,,,,,,,\r\n"
    "3/4/2025 09:00:00,Ali Khan,ali@example.com,Digital Marketing,Marketing,2024-12-20,Dropped,15,,600\r\n"
)


def make_enrollment(id: int, **kwargs) -> Enrollment:
    defaults = {
        "student_name": f"Student {id}",
        "email": f"student{id}@email.com",
        "enrollment_date": "2025-01-01",
    }
    defaults.update(kwargs)
    return Enrollment(id=id, **defaults)


def make_snapshot(*enrollments: Enrollment) -> Snapshot:
    return Snapshot(tuple(enrollments), last_sync=FIXED_NOW, origin="sheets")


@pytest.fixture(autouse=True)
def _no_stdout_log_handler(monkeypatch):
    # app stdout handler stays detached under test capture
    monkeypatch.setattr("app.log._configured", True)


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def rng() -> random.Random:
    return random.Random(42)


@pytest.fixture
def sheet_csv() -> str:
    return SHEET_CSV


@pytest.fixture
def fetch_calls():
    return []


@pytest.fixture
def fake_fetcher(fetch_calls):
    def _fetch(url: str, timeout: float) -> str:
        fetch_calls.append((url, timeout))
        return SHEET_CSV
    return _fetch


@pytest.fixture
def failing_fetcher():
    def _fetch(url: str, timeout: float) -> str:
        raise FetchError("HTTP error! status: 500")
    return _fetch


@pytest.fixture
def store(fake_fetcher, fixed_clock, rng) -> DataStore:
    store = DataStore(fetcher=fake_fetcher, source_url="https://sheets.test/export.csv",
                      timeout=5, clock=fixed_clock, rng=rng)
    store.sync()
    return store


@pytest.fixture
def client(store) -> TestClient:
    return TestClient(create_app(store=store, load_on_startup=False))
