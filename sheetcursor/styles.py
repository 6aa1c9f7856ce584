"""
sheetcursor/styles.py — Cell style conversion and box borders.

A cursor format is a mapping of openpyxl cell style attributes to either a
ready openpyxl style object or a dict of its keyword arguments:

  {"font": {"bold": True}, "border": {"top": {"style": "thin"}}}
  {"font": Font(bold=True), "number_format": "0.00"}
"""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from openpyxl.styles import Alignment, Border, Font, PatternFill, Protection, Side
from openpyxl.styles.fills import Fill
from openpyxl.worksheet.worksheet import Worksheet

from .columns import column_to_number, column_range, parse_address
from .errors import AppError, INVALID_FORMAT


Format = Mapping[str, Any]

_FACTORIES = {
    "font": Font,
    "fill": PatternFill,
    "alignment": Alignment,
    "protection": Protection,
}

_BORDER_SIDES = ("left", "right", "top", "bottom", "diagonal")

# Ready-made objects must be instances of these.
_TYPES = {
    "font": Font,
    "fill": Fill,
    "alignment": Alignment,
    "protection": Protection,
    "border": Border,
}

# Attributes assigned as plain strings (no style class behind them).
_PLAIN = ("number_format", "style", "hyperlink")


def _side(value: Any) -> Any:
    if isinstance(value, str):
        return Side(style=value)
    if isinstance(value, Mapping):
        return Side(**value)
    return value


def _border(value: Mapping[str, Any]) -> Border:
    kwargs = dict(value)
    for side in _BORDER_SIDES:
        if side in kwargs:
            kwargs[side] = _side(kwargs[side])
    return Border(**kwargs)


def coerce_style(name: str, value: Any) -> Any:
    """Turn one format entry into the object openpyxl expects for that attribute."""
    if name == "border" or name in _FACTORIES:
        if isinstance(value, Mapping):
            try:
                if name == "border":
                    return _border(value)
                return _FACTORIES[name](**value)
            except (TypeError, ValueError) as e:
                raise AppError(INVALID_FORMAT, f"Bad {name} style: {e}", {"value": dict(value)})
        if not isinstance(value, _TYPES[name]):
            raise AppError(
                INVALID_FORMAT,
                f"Bad {name} style: expected {_TYPES[name].__name__} or a dict, got {type(value).__name__}",
            )
        return value
    if name in _PLAIN:
        if not isinstance(value, str):
            raise AppError(INVALID_FORMAT, f"Bad {name}: expected a string, got {type(value).__name__}")
        return value
    raise AppError(INVALID_FORMAT, f"Unknown style attribute: {name!r}")


def coerce_format(fmt: Optional[Format]) -> Dict[str, Any]:
    """Convert a whole format mapping. Validates every entry before returning."""
    return {name: coerce_style(name, value) for name, value in (fmt or {}).items()}


def border_box(
    ws: Worksheet,
    start: str = "A1",
    end: str = "C3",
    border_style: str = "thin",
    inner_border_style: str = "dotted",
) -> None:
    """
    Draw a box over the inclusive rectangle start..end.

    Each side of each cell gets border_style when that side lies on the
    rectangle's boundary, inner_border_style otherwise. Every existing border
    in the rectangle is replaced.
    """
    start_col, start_row = parse_address(start)
    end_col, end_row = parse_address(end)
    top, bottom = sorted((start_row, end_row))
    cols = column_range(start_col, end_col)
    first = column_to_number(cols[0])
    last = column_to_number(cols[-1])
    try:
        outer = Side(style=border_style)
        inner = Side(style=inner_border_style)
    except (TypeError, ValueError) as e:
        raise AppError(
            INVALID_FORMAT,
            f"Bad border style: {e}",
            {"border_style": border_style, "inner_border_style": inner_border_style},
        )

    for r in range(top, bottom + 1):
        for c in range(first, last + 1):
            ws.cell(row=r, column=c).border = Border(
                top=outer if r == top else inner,
                left=outer if c == first else inner,
                bottom=outer if r == bottom else inner,
                right=outer if c == last else inner,
            )
