"""
sheetcursor/columns.py — Column letter arithmetic.

Column letters are a bijective base-26 numeral: there is no zero digit, so
Z (26) is followed by AA (27), not by a two-letter value with a leading zero.

Public API:
  column_to_number("AA")          -> 27
  number_to_column(27)            -> "AA"
  increment_column("C", -2)       -> "A"
  column_sequence("Y")            -> Y, Z, AA, AB, ...   (infinite)
  column_at("Y", 2)               -> "AA"
  column_range("B", "D")          -> ["B", "C", "D"]
  parse_address("C3")             -> ("C", 3)
  format_address("C", 3)          -> "C3"
"""
from __future__ import annotations

import itertools
import re
from typing import Iterator, List, Tuple

from .errors import AppError, INVALID_FORMAT, OUT_OF_RANGE


_COL_RE = re.compile(r"^[A-Z]+$")
_ADDRESS_RE = re.compile(r"^([A-Z]+)(\d+)$")


def is_column(col: object) -> bool:
    return isinstance(col, str) and _COL_RE.fullmatch(col) is not None


def column_to_number(col: str) -> int:
    """
    Convert column letters to a 1-based number (A->1, Z->26, AA->27).
    """
    if not is_column(col):
        raise AppError(INVALID_FORMAT, f"Bad column: {col!r}")
    n = 0
    for ch in col:
        n = n * 26 + (ord(ch) - ord("A") + 1)
    return n


def number_to_column(n: int) -> str:
    """
    Convert a 1-based number to column letters (1->A).
    """
    if n <= 0:
        raise AppError(OUT_OF_RANGE, f"Bad column number: {n}")
    out = []
    x = n
    while x:
        x, rem = divmod(x - 1, 26)
        out.append(chr(ord("A") + rem))
    return "".join(reversed(out))


def increment_column(col: str, delta: int) -> str:
    return number_to_column(column_to_number(col) + delta)


def column_sequence(start: str) -> Iterator[str]:
    """
    Infinite lazy sequence of columns beginning at start.
    Each draw advances it; build a new one to restart from another column.
    """
    for n in itertools.count(column_to_number(start)):
        yield number_to_column(n)


def column_at(anchor: str, offset: int) -> str:
    """Positional form of column_sequence: the offset-th column drawn after anchor."""
    return increment_column(anchor, offset)


def column_range(start: str, end: str) -> List[str]:
    """Inclusive run of columns from start to end (reversed bounds normalize)."""
    lo, hi = sorted((column_to_number(start), column_to_number(end)))
    return list(itertools.islice(column_sequence(number_to_column(lo)), hi - lo + 1))


def parse_address(address: str) -> Tuple[str, int]:
    """
    Split an address like 'C3' into ('C', 3).
    """
    m = _ADDRESS_RE.fullmatch(address) if isinstance(address, str) else None
    if not m:
        raise AppError(INVALID_FORMAT, f"Bad address: {address!r}")
    row = int(m.group(2))
    if row < 1:
        raise AppError(OUT_OF_RANGE, f"Row must be >= 1: {address!r}")
    return m.group(1), row


def format_address(col: str, row: int) -> str:
    return f"{col}{row}"
