"""Sheet ingestion, normalization, and the in-memory enrollment store."""
from .csv_parser import parse_csv, parse_csv_line
from .normalize import normalize_row, parse_number, resolve_alias
from .loader import build_enrollments, fetch_csv_text
from .store import DataStore
from .schemas import Enrollment, Snapshot, PeriodFilter
from .query import query_enrollments
