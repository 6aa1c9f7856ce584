"""
sheetcursor/cursor.py — Stateful write cursor over an openpyxl worksheet.

The cursor tracks a current cell (column letters + 1-based row) and writes
values and styles through to the worksheet at that address.

Column state is an anchor column plus an offset counter: the current column
is always column_at(anchor, offset). Moving right bumps the offset; every
re-anchor resets it to zero.

Row-advance policy:
  - move_to_next_row() starts the new row at the anchor column (row fill).
  - move_to_previous_row() keeps the current column.
  - Absolute placement (set_row, position, cell_address) never touches the
    column unless a column is given, and a given column always becomes the
    new anchor.

All validation happens before any state changes, so a failed call leaves the
cursor exactly where it was.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence

from openpyxl.cell.cell import Cell
from openpyxl.worksheet.worksheet import Worksheet

from .columns import (
    column_at,
    column_to_number,
    format_address,
    increment_column,
    is_column,
    number_to_column,
    parse_address,
)
from .errors import AppError, DETACHED_STATE, INVALID_ARGUMENT, INVALID_FORMAT, OUT_OF_RANGE
from .styles import Format, coerce_format


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Position:
    column: str
    row: int


def _is_capable(ws: Any) -> bool:
    return callable(getattr(ws, "cell", None)) and callable(getattr(ws, "merge_cells", None))


def _check_column(column: Any) -> str:
    if not is_column(column):
        raise AppError(INVALID_FORMAT, f"Bad column: {column!r}")
    return column


def _check_row(row: Any) -> int:
    if isinstance(row, bool) or not isinstance(row, int):
        raise AppError(INVALID_ARGUMENT, f"Row must be an integer: {row!r}")
    if row < 1:
        raise AppError(OUT_OF_RANGE, f"Row must be >= 1 (got {row})")
    return row


def _check_times(times: int) -> int:
    if times < 0:
        raise AppError(INVALID_ARGUMENT, f"Move count must be >= 0 (got {times})")
    return times


class SpreadsheetCell:
    """
    Cursor anchored at a starting cell of a worksheet.

    Example:
      cur = SpreadsheetCell("C", 3, ws)
      cur.fill_row([1, 2])        # C3=1, D3=2
      cur.cell_address            → 'E3'
    """

    def __init__(self, column: str, row: int, worksheet: Worksheet):
        _check_column(column)
        _check_row(row)
        if worksheet is None or not _is_capable(worksheet):
            raise AppError(INVALID_ARGUMENT, "A worksheet with cell() and merge_cells() is required")

        self._anchor: Optional[str] = column
        self._offset = 0
        self._row: Optional[int] = row
        self._formatting: Optional[Dict[str, Any]] = {}
        self._worksheet: Optional[Worksheet] = worksheet

    # ── Codec passthroughs ───────────────────────────────────────────────────

    column_to_number = staticmethod(column_to_number)
    number_to_column = staticmethod(number_to_column)

    # ── Worksheet ────────────────────────────────────────────────────────────

    @property
    def worksheet(self) -> Optional[Worksheet]:
        return self._worksheet

    @worksheet.setter
    def worksheet(self, ws: Optional[Worksheet]) -> None:
        # None detaches the cursor from its worksheet.
        if ws is not None and not _is_capable(ws):
            raise AppError(INVALID_ARGUMENT, "Worksheet must provide cell() and merge_cells(), or be None")
        self._worksheet = ws

    @property
    def cell(self) -> Cell:
        """The worksheet cell at the current address."""
        if self._worksheet is None:
            raise AppError(DETACHED_STATE, "No worksheet attached")
        return self._worksheet.cell(row=self.row, column=column_to_number(self.column))

    # ── Position ─────────────────────────────────────────────────────────────

    @property
    def column(self) -> str:
        if self._anchor is None:
            raise AppError(DETACHED_STATE, "Cursor has been destroyed")
        return column_at(self._anchor, self._offset)

    @property
    def row(self) -> int:
        if self._row is None:
            raise AppError(DETACHED_STATE, "Cursor has been destroyed")
        return self._row

    @property
    def initial_column(self) -> str:
        if self._anchor is None:
            raise AppError(DETACHED_STATE, "Cursor has been destroyed")
        return self._anchor

    @property
    def position(self) -> Position:
        return Position(column=self.column, row=self.row)

    @position.setter
    def position(self, pos: Position) -> None:
        self.set_position(column=pos.column, row=pos.row)

    def set_position(self, column: Optional[str] = None, row: Optional[int] = None) -> None:
        """
        Place the cursor absolutely. A given column becomes the new anchor;
        a given row is set as-is and leaves the column alone.
        """
        if column is not None:
            _check_column(column)
        if row is not None:
            _check_row(row)
        if column is not None:
            self.set_initial_column(column)
        if row is not None:
            self._row = row

    def set_column(self, column: str) -> None:
        self.set_initial_column(column)

    def set_row(self, row: int) -> None:
        self._row = _check_row(row)

    def set_initial_column(self, column: str) -> None:
        """Re-anchor at column. The single primitive every column placement goes through."""
        self._anchor = _check_column(column)
        self._offset = 0

    @property
    def cell_address(self) -> str:
        return format_address(self.column, self.row)

    @cell_address.setter
    def cell_address(self, address: str) -> None:
        column, row = parse_address(address)
        self.set_position(column=column, row=row)

    def increment_column_value(self, value: int, column: Optional[str] = None) -> str:
        """Return column (default: current) shifted by value. Does not move the cursor."""
        return increment_column(column if column is not None else self.column, value)

    # ── Movement ─────────────────────────────────────────────────────────────

    def _previous_column(self, times: int) -> str:
        n = column_to_number(self.column) - _check_times(times)
        if n < 1:
            raise AppError(OUT_OF_RANGE, "No column before 'A'", {"column": self.column, "times": times})
        return number_to_column(n)

    def _previous_row(self, times: int) -> int:
        n = self.row - _check_times(times)
        if n < 1:
            raise AppError(OUT_OF_RANGE, f"Row must be >= 1 (got {n})", {"row": self.row, "times": times})
        return n

    def move_to_next_column(self, times: int = 1) -> None:
        self._offset += _check_times(times)

    def move_to_previous_column(self, times: int = 1) -> None:
        # Stepping back re-anchors: later next-column moves continue from here.
        self.set_initial_column(self._previous_column(times))

    def move_to_next_row(self, times: int = 1) -> None:
        self._row = self.row + _check_times(times)
        self._offset = 0

    def move_to_previous_row(self, times: int = 1) -> None:
        self._row = self._previous_row(times)

    def move_to(self, columns: int = 0, rows: int = 0) -> None:
        """
        Relative move. Negative counts go backwards. Columns are applied
        first, then rows; a zero count leaves that axis alone.
        """
        if columns < 0:
            self._previous_column(-columns)
        if rows < 0:
            self._previous_row(-rows)

        if columns < 0:
            self.move_to_previous_column(-columns)
        elif columns > 0:
            self.move_to_next_column(columns)
        if rows < 0:
            self.move_to_previous_row(-rows)
        elif rows > 0:
            self.move_to_next_row(rows)

    # ── Formatting overlay ───────────────────────────────────────────────────

    @property
    def formatting(self) -> Dict[str, Any]:
        return dict(self._formatting) if self._formatting is not None else {}

    @formatting.setter
    def formatting(self, fmt: Format) -> None:
        coerce_format(fmt)
        self._formatting = dict(fmt)

    def unset_formatting(self) -> None:
        self._formatting = {}

    def add_formatting(self, fmt: Format) -> None:
        coerce_format(fmt)
        self._formatting = {**self.formatting, **fmt}

    def apply_formatting(self, fmt: Optional[Format] = None) -> None:
        """Write fmt merged with the overlay onto the current cell. The overlay wins on clashes."""
        self._write_styles(coerce_format({**(fmt or {}), **self.formatting}))

    def overwrite_formatting(self, fmt: Format) -> None:
        """Write fmt onto the current cell, ignoring the overlay."""
        self._write_styles(coerce_format(fmt))

    def _write_styles(self, styles: Mapping[str, Any]) -> None:
        cell = self.cell
        for name, style in styles.items():
            setattr(cell, name, style)

    # ── Writes ───────────────────────────────────────────────────────────────

    @property
    def value(self) -> Any:
        return self.cell.value

    @value.setter
    def value(self, value: Any) -> None:
        self.cell.value = value

    def set_and_apply_format(self, value: Any, fmt: Optional[Format] = None) -> None:
        self.apply_formatting(fmt)
        self.cell.value = value

    def set_and_move_to_next_column(self, value: Any, fmt: Optional[Format] = None) -> None:
        self.set_and_apply_format(value, fmt)
        self.move_to_next_column()

    def set_and_move_to_next_row(self, value: Any, fmt: Optional[Format] = None) -> None:
        self.set_and_apply_format(value, fmt)
        self.move_to_next_row()

    def set_and_move_to_previous_column(self, value: Any, fmt: Optional[Format] = None) -> None:
        target = self._previous_column(1)
        self.set_and_apply_format(value, fmt)
        self.set_initial_column(target)

    def set_and_move_to_previous_row(self, value: Any, fmt: Optional[Format] = None) -> None:
        target = self._previous_row(1)
        self.set_and_apply_format(value, fmt)
        self._row = target

    def merge_cells(self, columns: int = 0, rows: int = 0) -> None:
        """
        Merge from the current cell to the cell shifted by (columns, rows),
        then move there and re-anchor.
        """
        if self._worksheet is None:
            raise AppError(DETACHED_STATE, "No worksheet attached")
        target_col = self.increment_column_value(columns)
        target_row = self.row + rows
        if target_row < 1:
            raise AppError(OUT_OF_RANGE, f"Row must be >= 1 (got {target_row})")

        lo_col, hi_col = sorted((column_to_number(self.column), column_to_number(target_col)))
        lo_row, hi_row = sorted((self.row, target_row))
        cell_range = (
            f"{format_address(number_to_column(lo_col), lo_row)}:"
            f"{format_address(number_to_column(hi_col), hi_row)}"
        )
        self._worksheet.merge_cells(cell_range)
        logger.debug("Merged %s", cell_range)

        self.set_initial_column(target_col)
        self._row = target_row

    # ── Bulk fills ───────────────────────────────────────────────────────────

    def fill_row_from_sequence(self, values: Iterable[Any], fmt: Optional[Format] = None) -> None:
        """Write values left to right starting at the current cell."""
        for value in values:
            self.set_and_move_to_next_column(value, fmt)

    def fill_row_from_mapping(
        self,
        values: Mapping[str, Any],
        fmt: Optional[Format] = None,
        exclude: Iterable[str] = (),
    ) -> None:
        """Write the mapping's values in key order, skipping excluded keys."""
        skip = set(exclude)
        self.fill_row_from_sequence([v for k, v in values.items() if k not in skip], fmt)

    def fill_row(
        self,
        values: Any,
        fmt: Optional[Format] = None,
        exclude: Iterable[str] = (),
    ) -> None:
        if isinstance(values, Mapping):
            self.fill_row_from_mapping(values, fmt, exclude)
        else:
            self.fill_row_from_sequence(values, fmt)

    def fill_columns(self, values: Iterable[Any], fmt: Optional[Format] = None) -> None:
        """
        Write values top to bottom. Each step returns to the anchor column,
        so this fills the anchor column only.
        """
        for value in values:
            self.set_and_move_to_next_row(value, fmt)

    def fill_table(
        self,
        data: Sequence[Any],
        fmt: Optional[Format] = None,
        exclude: Iterable[str] = (),
    ) -> None:
        """One fill_row per entry, each starting on a new row at the anchor column."""
        exclude = list(exclude)
        for row_values in data:
            self.fill_row(row_values, fmt, exclude)
            self.move_to_next_row()

    # ── Lifecycle ────────────────────────────────────────────────────────────

    def clone(self) -> "SpreadsheetCell":
        """New cursor at the same address sharing the same worksheet."""
        return SpreadsheetCell(self.column, self.row, self._worksheet)

    def destroy(self) -> None:
        """Drop every reference held by the cursor. It is unusable afterwards."""
        self._worksheet = None
        self._formatting = None
        self._anchor = None
        self._row = None
        self._offset = 0
