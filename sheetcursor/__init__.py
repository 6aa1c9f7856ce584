from sheetcursor.columns import (
    column_at,
    column_range,
    column_sequence,
    column_to_number,
    increment_column,
    number_to_column,
    parse_address,
)
from sheetcursor.cursor import Position, SpreadsheetCell
from sheetcursor.errors import AppError
from sheetcursor.styles import border_box

__all__ = [
    "AppError",
    "Position",
    "SpreadsheetCell",
    "border_box",
    "column_at",
    "column_range",
    "column_sequence",
    "column_to_number",
    "increment_column",
    "number_to_column",
    "parse_address",
]
