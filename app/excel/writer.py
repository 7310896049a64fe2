"""
ExcelWriter — builds the styled enrollment workbook one sheet section at a time.

Each sheet keeps its own write cursor, so callers append blocks (title, KPI
cards, section headers, tables) without tracking row numbers themselves.
"""
from __future__ import annotations

import io
from typing import Callable, Optional

from openpyxl import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from app.excel.styles import TITLE_FONT, SUBTITLE_FONT, SECTION_FONT
from app.excel.formatters import (
    format_header_row,
    format_data_cell,
    auto_column_width,
    add_kpi_card,
)


ColSpec = tuple[str, str, str]  # (row key, col_type, header label)
HighlightFn = Callable[[dict], Optional[str]]


class ExcelWriter:
    """Workbook builder with a per-sheet row cursor."""

    def __init__(self) -> None:
        self.wb = Workbook()
        self._cursor: dict[str, int] = {}
        self._active: Optional[Worksheet] = None

    @property
    def ws(self) -> Worksheet:
        if self._active is None:
            raise RuntimeError("call add_sheet() before writing")
        return self._active

    @property
    def row(self) -> int:
        return self._cursor[self.ws.title]

    def _advance(self, rows: int) -> None:
        self._cursor[self.ws.title] = self.row + rows

    def add_sheet(self, title: str) -> Worksheet:
        """Start a sheet and make it the write target (the default sheet is reused first)."""
        if not self._cursor:
            ws = self.wb.active
            ws.title = title
        else:
            ws = self.wb.create_sheet(title=title)
        self._cursor[title] = 1
        self._active = ws
        return ws

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def write_title(self, title: str, subtitle: str, width: int = 8) -> None:
        ws, row = self.ws, self.row
        for offset, (text, font) in enumerate(((title, TITLE_FONT), (subtitle, SUBTITLE_FONT))):
            cell = ws.cell(row=row + offset, column=1, value=text)
            cell.font = font
            ws.merge_cells(start_row=row + offset, start_column=1,
                           end_row=row + offset, end_column=width)
        self._advance(3)

    def write_section(self, title: str) -> None:
        self.ws.cell(row=self.row, column=1, value=title).font = SECTION_FONT
        self._advance(1)

    def write_kpi_row(self, kpis: list[tuple], spacing: int = 2) -> None:
        """Cards left to right; each kpi is (value, label, format_type)."""
        for index, (value, label, fmt) in enumerate(kpis):
            add_kpi_card(self.ws, self.row, 1 + index * spacing, value, label, fmt)
        self._advance(3)

    def write_table(
        self,
        columns: list[ColSpec],
        rows: list[dict],
        highlight_fn: Optional[HighlightFn] = None,
        freeze: bool = False,
    ) -> None:
        """Header row plus one row per dict; missing keys render as blanks."""
        ws, header_row = self.ws, self.row
        for col_num, (_, _, label) in enumerate(columns, 1):
            ws.cell(row=header_row, column=col_num, value=label)
        format_header_row(ws, header_row, len(columns))

        for offset, row_data in enumerate(rows, 1):
            hl = highlight_fn(row_data) if highlight_fn else None
            for col_num, (key, col_type, _) in enumerate(columns, 1):
                format_data_cell(ws, header_row + offset, col_num, row_data.get(key, ""),
                                 col_type, highlight=hl)

        if freeze:
            ws.freeze_panes = f"A{header_row + 1}"
        self._advance(len(rows) + 2)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def to_bytes(self) -> bytes:
        """Fit column widths on every sheet and serialize the workbook."""
        for ws in self.wb.worksheets:
            auto_column_width(ws)
        buf = io.BytesIO()
        self.wb.save(buf)
        return buf.getvalue()
