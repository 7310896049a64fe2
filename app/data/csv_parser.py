"""
Line-oriented CSV parsing for Google Sheets exports.

Quotes toggle a "quoted" state rather than being escaped, commas split fields only
outside quotes, and every field is stripped. Rows are keyed by the header line.
"""
from __future__ import annotations

from app.errors import ParseError


def parse_csv_line(line: str) -> list[str]:
    """Split one CSV line into stripped fields, honoring quoted commas.

    A doubled quote inside a quoted field toggles twice and is dropped, so
    `"He said ""hi""\"` reads as `He said hi`.
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False

    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)

    fields.append("".join(current).strip())
    return fields


def parse_csv(text: str) -> list[dict[str, str]]:
    """Parse CSV text into one header-keyed dict per non-blank data line.

    Short rows get "" for the missing trailing headers. Empty input yields [].
    """
    if not isinstance(text, str):
        raise ParseError(f"CSV body must be text, got {type(text).__name__}")

    lines = text.split("\n")
    headers = parse_csv_line(lines[0])
    data_lines = [line for line in lines[1:] if line.strip()]

    if data_lines and not any(headers):
        raise ParseError(f"Header line is blank but {len(data_lines)} data line(s) follow")

    rows: list[dict[str, str]] = []
    for line in data_lines:
        values = parse_csv_line(line)
        row = {}
        for index, header in enumerate(headers):
            row[header] = values[index] if index < len(values) else ""
        rows.append(row)
    return rows
