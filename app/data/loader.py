"""
Fetching the sheet export and turning it into Enrollment records.
"""
from __future__ import annotations

import datetime as dt
import logging
import random
import time

import requests

from app.config import ENROLLMENT_CSV_URL, FETCH_TIMEOUT_SECONDS, FETCH_USER_AGENT
from app.data.csv_parser import parse_csv
from app.data.normalize import is_blank_row, normalize_row
from app.data.schemas import Enrollment
from app.errors import FetchError, FetchTimeoutError

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 64 * 1024


# ---------------------------------------------------------------------------
# Fetch
# ---------------------------------------------------------------------------

def fetch_csv_text(
    url: str = ENROLLMENT_CSV_URL,
    timeout: float = FETCH_TIMEOUT_SECONDS,
    session: requests.Session | None = None,
) -> str:
    """GET the CSV export within ``timeout`` seconds overall.

    ``requests`` only bounds the connect and each socket read, so the body is
    streamed and the total elapsed time is checked between chunks.
    Raises FetchTimeoutError or FetchError.
    """
    logger.info("Fetching enrollment sheet %s", url[:80])
    getter = session.get if session is not None else requests.get
    deadline = time.monotonic() + timeout
    try:
        resp = getter(url, timeout=timeout, stream=True, headers={"User-Agent": FETCH_USER_AGENT})
    except requests.Timeout as exc:
        raise FetchTimeoutError(f"No response from source within {timeout:g}s") from exc
    except requests.RequestException as exc:
        raise FetchError(f"Could not reach source: {exc}") from exc

    try:
        if not resp.ok:
            raise FetchError(f"HTTP error! status: {resp.status_code}")
        chunks = []
        for chunk in resp.iter_content(chunk_size=_CHUNK_SIZE):
            if time.monotonic() > deadline:
                raise FetchTimeoutError(f"Source body not received within {timeout:g}s")
            chunks.append(chunk)
    except requests.Timeout as exc:
        raise FetchTimeoutError(f"Source stalled after {timeout:g}s") from exc
    except requests.RequestException as exc:
        raise FetchError(f"Download interrupted: {exc}") from exc
    finally:
        resp.close()

    text = b"".join(chunks).decode(resp.encoding or "utf-8", errors="replace")
    logger.info("  Raw CSV length: %d characters", len(text))
    return text


# ---------------------------------------------------------------------------
# CSV text → records
# ---------------------------------------------------------------------------

def build_enrollments(
    csv_text: str,
    today: dt.date | None = None,
    rng: random.Random | None = None,
) -> list[Enrollment]:
    """Parse, drop blank rows, and normalize with 1-based ids."""
    raw_rows = parse_csv(csv_text)
    logger.info("  Parsed %d rows from CSV", len(raw_rows))

    valid_rows = [row for row in raw_rows if not is_blank_row(row)]
    logger.info("  Found %d valid data rows", len(valid_rows))

    return [
        normalize_row(row, position, today=today, rng=rng)
        for position, row in enumerate(valid_rows, 1)
    ]
