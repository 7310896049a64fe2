"""
Alias resolution, numeric coercion, and row → Enrollment normalization.
"""
from __future__ import annotations

import datetime as dt
import math
import random

from app.config import (
    FIELD_ALIASES, FIELD_DEFAULTS, MONEY_FIELDS, CURRENCY_STRIP,
    PAID_STATUS, PENDING_STATUS,
)
from app.data.schemas import Enrollment


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def resolve_alias(row: dict[str, str], aliases: list[str]) -> str | None:
    """Return the first non-blank value among ``aliases``, or None."""
    for name in aliases:
        value = row.get(name)
        if value is not None and str(value).strip():
            return str(value).strip()
    return None


def parse_number(value, default: float = 0.0) -> float:
    """Parse a sheet cell as a float; blanks, garbage, NaN and inf give ``default``."""
    if value is None:
        return default
    text = str(value).strip()
    for char in CURRENCY_STRIP:
        text = text.replace(char, "")
    if not text:
        return default
    try:
        number = float(text)
    except ValueError:
        return default
    if math.isnan(number) or math.isinf(number):
        return default
    return number


def parse_progress(value, rng: random.Random) -> int:
    """Completion percentage in [0, 100]; missing or unparseable → random 0-99."""
    text = "" if value is None else str(value).strip().rstrip("%").strip()
    number = parse_number(text, default=math.nan)
    if math.isnan(number):
        return rng.randrange(100)
    return int(min(max(number, 0), 100))


def derive_payment_status(row: dict[str, str]) -> str:
    """Paid when a non-zero fee payment is recorded, else the sheet's own status."""
    paid = resolve_alias(row, FIELD_ALIASES["fees_paid"])
    if paid is not None and parse_number(paid) != 0:
        return PAID_STATUS
    return resolve_alias(row, FIELD_ALIASES["payment_status"]) or PENDING_STATUS


def is_blank_row(row: dict[str, str]) -> bool:
    return not any(value and str(value).strip() for value in row.values())


# ---------------------------------------------------------------------------
# Row normalization
# ---------------------------------------------------------------------------

def normalize_row(
    row: dict[str, str],
    position: int,
    *,
    today: dt.date | None = None,
    rng: random.Random | None = None,
) -> Enrollment:
    """Map one raw sheet row onto an Enrollment. Never raises.

    ``position`` is the 1-based index among valid rows and becomes the id.
    ``today`` and ``rng`` fill in a missing enrollment date and progress.
    """
    today = today or dt.date.today()
    rng = rng or random.Random()

    values = {
        attr: resolve_alias(row, FIELD_ALIASES[attr]) or default
        for attr, default in FIELD_DEFAULTS.items()
    }
    for attr in MONEY_FIELDS:
        values[attr] = parse_number(resolve_alias(row, FIELD_ALIASES[attr]))

    return Enrollment(
        id=position,
        student_name=resolve_alias(row, FIELD_ALIASES["student_name"]) or f"Student {position}",
        email=resolve_alias(row, FIELD_ALIASES["email"]) or f"student{position}@email.com",
        enrollment_date=resolve_alias(row, FIELD_ALIASES["enrollment_date"]) or today.isoformat(),
        progress=parse_progress(resolve_alias(row, FIELD_ALIASES["progress"]), rng),
        payment_status=derive_payment_status(row),
        raw=dict(row),
        **values,
    )
