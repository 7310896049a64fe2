from __future__ import annotations

import datetime as dt
import random
from unittest.mock import MagicMock, patch

import pytest
import requests

from app.data.loader import build_enrollments, fetch_csv_text
from app.errors import FetchError, FetchTimeoutError


def _response(status_code=200, text="", chunks=None, encoding="utf-8"):
    resp = MagicMock()
    resp.status_code = status_code
    resp.ok = status_code < 400
    resp.encoding = encoding
    resp.iter_content.return_value = chunks if chunks is not None else [text.encode(encoding)]
    return resp


# ---------------------------------------------------------------------------
# fetch_csv_text
# ---------------------------------------------------------------------------

@patch("app.data.loader.requests.get")
def test_fetch_returns_body(mock_get):
    mock_get.return_value = _response(text="Name\nAlice")
    assert fetch_csv_text("https://sheets.test/x.csv", timeout=3) == "Name\nAlice"

    args, kwargs = mock_get.call_args
    assert args == ("https://sheets.test/x.csv",)
    assert kwargs["timeout"] == 3
    assert kwargs["stream"] is True
    assert "User-Agent" in kwargs["headers"]


@patch("app.data.loader.requests.get")
def test_fetch_http_error_status(mock_get):
    mock_get.return_value = _response(status_code=404)
    with pytest.raises(FetchError, match="status: 404"):
        fetch_csv_text("https://sheets.test/x.csv")


@patch("app.data.loader.requests.get")
def test_fetch_timeout(mock_get):
    mock_get.side_effect = requests.Timeout("slow")
    with pytest.raises(FetchTimeoutError):
        fetch_csv_text("https://sheets.test/x.csv", timeout=1)


@patch("app.data.loader.requests.get")
def test_fetch_connection_error(mock_get):
    mock_get.side_effect = requests.ConnectionError("refused")
    with pytest.raises(FetchError):
        fetch_csv_text("https://sheets.test/x.csv")


def test_fetch_timeout_is_also_builtin_timeout():
    assert issubclass(FetchTimeoutError, TimeoutError)


def test_fetch_uses_given_session():
    session = MagicMock()
    session.get.return_value = _response(text="A\n1")
    assert fetch_csv_text("https://sheets.test/x.csv", session=session) == "A\n1"
    session.get.assert_called_once()


@patch("app.data.loader.requests.get")
def test_fetch_joins_chunks_and_closes(mock_get):
    resp = _response(chunks=["Student Name\nRen".encode(), "é\n".encode()])
    mock_get.return_value = resp
    assert fetch_csv_text("https://sheets.test/x.csv") == "Student Name\nRené\n"
    resp.close.assert_called_once()


@patch("app.data.loader.time")
@patch("app.data.loader.requests.get")
def test_fetch_slow_body_hits_total_deadline(mock_get, mock_time):
    # each chunk arrives within the per-read timeout but the download overruns
    mock_get.return_value = _response(chunks=[b"Name\n", b"Alice\n", b"Bob\n"])
    mock_time.monotonic.side_effect = [0.0, 2.0, 4.0, 6.0]
    with pytest.raises(FetchTimeoutError):
        fetch_csv_text("https://sheets.test/x.csv", timeout=5)
    mock_get.return_value.close.assert_called_once()


@patch("app.data.loader.requests.get")
def test_fetch_broken_stream(mock_get):
    resp = _response()
    resp.iter_content.side_effect = requests.exceptions.ChunkedEncodingError("reset")
    mock_get.return_value = resp
    with pytest.raises(FetchError, match="interrupted"):
        fetch_csv_text("https://sheets.test/x.csv")


# ---------------------------------------------------------------------------
# build_enrollments
# ---------------------------------------------------------------------------

def test_build_skips_blank_rows_and_numbers_ids(sheet_csv):
    records = build_enrollments(sheet_csv, today=dt.date(2025, 3, 15), rng=random.Random(0))
    assert [r.id for r in records] == [1, 2, 3, 4]
    assert [r.student_name for r in records] == ["Jane Smith", "Doe, John", "Jane Smith", "Ali Khan"]


def test_build_payment_status_from_fees(sheet_csv):
    records = build_enrollments(sheet_csv, today=dt.date(2025, 3, 15), rng=random.Random(0))
    assert [r.payment_status for r in records] == ["Paid", "Paid", "Pending", "Pending"]
    assert records[1].fees_paid == 2000.0


def test_build_empty_text():
    assert build_enrollments("") == []


def test_build_header_only():
    assert build_enrollments("Student Name,Email\n") == []
