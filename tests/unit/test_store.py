from __future__ import annotations

import datetime as dt
import random

import pytest

from app.data.store import DataStore
from app.errors import FetchError, FetchTimeoutError, ParseError
from tests.conftest import FIXED_NOW


def _store(fetcher, clock=lambda: FIXED_NOW):
    return DataStore(fetcher=fetcher, source_url="https://sheets.test/export.csv",
                     timeout=5, clock=clock, rng=random.Random(1))


def test_new_store_is_empty():
    store = DataStore(fetcher=lambda url, timeout: "")
    assert store.record_count() == 0
    assert store.last_sync is None
    assert store.snapshot.origin == "empty"
    assert not store.is_loading


def test_sync_populates_snapshot(store, fetch_calls):
    assert store.record_count() == 4
    assert store.last_sync == FIXED_NOW
    assert store.snapshot.origin == "sheets"
    assert fetch_calls == [("https://sheets.test/export.csv", 5)]


def test_state(store):
    assert store.state() == {
        "totalRecords": 4,
        "lastSync": FIXED_NOW.isoformat(),
        "isLoading": False,
        "origin": "sheets",
    }


def test_ids_unique_within_snapshot(store):
    ids = [e.id for e in store.snapshot.enrollments]
    assert len(ids) == len(set(ids))


@pytest.mark.parametrize("error", [
    FetchError("HTTP error! status: 500"),
    FetchTimeoutError("No response"),
    ParseError("bad"),
])
def test_failed_sync_leaves_snapshot_untouched(store, error):
    before = store.snapshot

    def _fail(url, timeout):
        raise error

    store.fetcher = _fail
    with pytest.raises(type(error)):
        store.sync()

    assert store.snapshot is before
    assert store.record_count() == 4
    assert store.last_sync == FIXED_NOW
    assert not store.is_loading


def test_loading_flag_set_during_fetch(sheet_csv):
    seen = []
    store = None

    def _fetch(url, timeout):
        seen.append(store.is_loading)
        return sheet_csv

    store = _store(_fetch)
    store.sync()
    assert seen == [True]
    assert not store.is_loading


def test_resync_replaces_snapshot(store):
    first = store.snapshot
    later = FIXED_NOW + dt.timedelta(minutes=5)
    store.clock = lambda: later
    store.fetcher = lambda url, timeout: "Student Name,Email\nSolo,solo@example.com"

    store.sync()

    assert store.snapshot is not first
    assert store.record_count() == 1
    assert store.last_sync == later
    assert len(first) == 4


def test_load_falls_back_to_sample(failing_fetcher):
    store = _store(failing_fetcher).load()
    assert store.snapshot.origin == "sample"
    assert [e.student_name for e in store.snapshot.enrollments] == [
        "John Doe", "Jane Smith", "Mike Johnson",
    ]
    assert store.last_sync == FIXED_NOW


def test_load_uses_sheet_when_available(fake_fetcher):
    store = _store(fake_fetcher).load()
    assert store.snapshot.origin == "sheets"
    assert store.record_count() == 4


def test_teardown_empties(store):
    store.teardown()
    assert store.record_count() == 0
    assert store.last_sync is None
