"""
sheetcursor/engine.py — Render a LayoutConfig into a workbook.

Responsible for:
  - Opening or creating the destination workbook
  - Creating sheets named by the layout (dropping the blank default sheet)
  - Running each block through a fresh SpreadsheetCell
  - Saving the workbook and reporting per-sheet results

Fail-fast: the first AppError stops rendering; it is recorded in the report
and whatever was written before it is still saved.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from openpyxl import Workbook, load_workbook
from openpyxl.worksheet.worksheet import Worksheet

from .columns import parse_address
from .cursor import SpreadsheetCell
from .errors import AppError, FILE_LOCKED, INVALID_ARGUMENT, OPEN_FAILED, SAVE_FAILED
from .layout import BlockConfig, LayoutConfig, SheetLayout
from .styles import border_box


logger = logging.getLogger(__name__)


@dataclass
class SheetResult:
    sheet_name: str
    blocks_written: int
    end_address: str = ""               # cursor address after the last block
    error_code: Optional[str] = None
    error_message: Optional[str] = None
    error_details: Optional[Dict[str, Any]] = None


@dataclass
class RenderReport:
    ok: bool
    dest_file: str = ""
    results: List[SheetResult] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return any(r.error_code for r in self.results)


# ── Private helpers ───────────────────────────────────────────────────────────

def _open_or_create_dest(dest_path: Optional[str]) -> Workbook:
    try:
        if dest_path and os.path.exists(dest_path):
            return load_workbook(dest_path)
        return Workbook()
    except PermissionError:
        raise AppError(FILE_LOCKED, f"Destination file is locked: {dest_path}", {"path": dest_path})
    except Exception as e:
        raise AppError(OPEN_FAILED, f"Could not open destination file: {e}", {"path": dest_path})


def _get_or_create_sheet(wb: Workbook, name: str) -> Worksheet:
    """Return the named sheet, creating it if absent. Cleans up the default blank sheet."""
    if name in wb.sheetnames:
        return wb[name]
    ws = wb.create_sheet(title=name)
    if len(wb.sheetnames) > 1 and "Sheet" in wb.sheetnames:
        default = wb["Sheet"]
        if default.max_row == 1 and default.max_column == 1 and default["A1"].value in (None, ""):
            wb.remove(default)
    return ws


def _save(wb: Workbook, dest_path: str) -> None:
    try:
        wb.save(dest_path)
    except PermissionError:
        raise AppError(
            FILE_LOCKED,
            f"Destination file is open in another program: {dest_path}",
            {"path": dest_path},
        )
    except OSError as e:
        raise AppError(SAVE_FAILED, str(e), {"path": dest_path})
    logger.info("Saved workbook to %s", dest_path)


# ── Public API ────────────────────────────────────────────────────────────────

def render_block(ws: Worksheet, block: BlockConfig) -> SpreadsheetCell:
    """Apply one block with a cursor anchored at block.start. Returns that cursor."""
    column, row = parse_address(block.start)
    cursor = SpreadsheetCell(column, row, ws)
    fmt = block.format or None

    if block.kind == "row":
        cursor.fill_row(block.values, fmt, block.exclude)
    elif block.kind == "column":
        cursor.fill_columns(block.values, fmt)
    elif block.kind == "table":
        cursor.fill_table(block.data, fmt, block.exclude)
    elif block.kind == "merge":
        if block.value is not None:
            cursor.set_and_apply_format(block.value, fmt)
        cursor.merge_cells(columns=block.columns, rows=block.rows)
    elif block.kind == "border":
        border_box(ws, block.start, block.end, block.border_style, block.inner_border_style)
    else:
        raise AppError(INVALID_ARGUMENT, f"Unknown block kind: {block.kind!r}")

    logger.debug("Rendered %s block at %s, cursor now at %s", block.kind, block.start, cursor.cell_address)
    return cursor


def render_sheet(wb: Workbook, sheet: SheetLayout) -> SheetResult:
    ws = _get_or_create_sheet(wb, sheet.name)
    end_address = ""
    for block in sheet.blocks:
        end_address = render_block(ws, block).cell_address
    return SheetResult(sheet_name=sheet.name, blocks_written=len(sheet.blocks), end_address=end_address)


def render_layout(
    layout: LayoutConfig,
    dest_path: Optional[str] = None,
    wb: Optional[Workbook] = None,
) -> RenderReport:
    """
    Render every sheet of layout into the workbook at dest_path (created if
    missing). With no dest_path nothing is saved; pass wb to render into
    an in-memory workbook instead.
    """
    if wb is None:
        wb = _open_or_create_dest(dest_path)
    results: List[SheetResult] = []
    ok = True

    for sheet in layout.sheets:
        try:
            result = render_sheet(wb, sheet)
        except AppError as e:
            logger.debug("Rendering sheet %s failed: %s", sheet.name, e)
            results.append(SheetResult(
                sheet_name=sheet.name,
                blocks_written=0,
                error_code=e.code,
                error_message=e.message,
                error_details=e.details,
            ))
            ok = False
            break
        results.append(result)

    if dest_path:
        _save(wb, dest_path)

    return RenderReport(ok=ok, dest_file=dest_path or "", results=results)
