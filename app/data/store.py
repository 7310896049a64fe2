"""
DataStore — in-memory enrollment snapshot rebuilt from the sheet export.

Loaded once at startup, re-synced on demand, queried on every request.
Readers take ``store.snapshot`` once and compute against that reference; a sync
builds a complete new Snapshot and swaps it in with a single assignment.
"""
from __future__ import annotations

import datetime as dt
import logging
import random
import threading
from typing import Callable, Optional

from app.config import ENROLLMENT_CSV_URL, FETCH_TIMEOUT_SECONDS
from app.data.loader import build_enrollments, fetch_csv_text
from app.data.sample import sample_enrollments
from app.data.schemas import Snapshot
from app.errors import SYNC_ERRORS

logger = logging.getLogger(__name__)

Fetcher = Callable[[str, float], str]
Clock = Callable[[], dt.datetime]


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class DataStore:
    """Current enrollment snapshot plus sync state."""

    def __init__(
        self,
        fetcher: Fetcher = fetch_csv_text,
        source_url: str = ENROLLMENT_CSV_URL,
        timeout: float = FETCH_TIMEOUT_SECONDS,
        clock: Clock = _utcnow,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.fetcher = fetcher
        self.source_url = source_url
        self.timeout = timeout
        self.clock = clock
        self.rng = rng or random.Random()
        self._snapshot = Snapshot()
        self._in_flight = 0
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    @property
    def is_loading(self) -> bool:
        return self._in_flight > 0

    @property
    def last_sync(self) -> Optional[dt.datetime]:
        return self._snapshot.last_sync

    def record_count(self) -> int:
        return len(self._snapshot.enrollments)

    def state(self) -> dict:
        snap = self._snapshot
        return {
            "totalRecords": len(snap.enrollments),
            "lastSync": snap.last_sync.isoformat() if snap.last_sync else None,
            "isLoading": self.is_loading,
            "origin": snap.origin,
        }

    def replace(self, enrollments, origin: str = "sheets") -> Snapshot:
        """Swap in a new snapshot built from ``enrollments``."""
        snap = Snapshot(tuple(enrollments), last_sync=self.clock(), origin=origin)
        self._snapshot = snap
        return snap

    # ------------------------------------------------------------------
    # Sync
    # ------------------------------------------------------------------

    def sync(self) -> Snapshot:
        """Fetch, parse, and normalize the sheet, then swap the snapshot.

        On failure the current snapshot is left as it was and the error propagates.
        """
        with self._lock:
            self._in_flight += 1
        try:
            csv_text = self.fetcher(self.source_url, self.timeout)
            records = build_enrollments(csv_text, today=self.clock().date(), rng=self.rng)
            snap = self.replace(records, origin="sheets")
            logger.info("Loaded %d enrollment records from sheet", len(records))
            return snap
        finally:
            with self._lock:
                self._in_flight -= 1

    def load(self) -> "DataStore":
        """Startup sync; falls back to the built-in sample records on failure."""
        try:
            self.sync()
        except SYNC_ERRORS as exc:
            logger.warning("Initial sheet sync failed (%s); using sample data", exc)
            self.replace(sample_enrollments(), origin="sample")
        return self

    def teardown(self) -> None:
        self._snapshot = Snapshot()
