from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class AppError(Exception):
    """
    Error with a short stable code and structured details.
    Raised by every sheetcursor module; callers branch on .code.
    """
    code: str
    message: str
    details: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        if self.details:
            return f"{self.code}: {self.message} ({self.details})"
        return f"{self.code}: {self.message}"


# ── Error codes (keep stable for tests and callers) ───────────────────────────

INVALID_FORMAT   = "INVALID_FORMAT"
INVALID_ARGUMENT = "INVALID_ARGUMENT"
OUT_OF_RANGE     = "OUT_OF_RANGE"
DETACHED_STATE   = "DETACHED_STATE"
FILE_LOCKED      = "FILE_LOCKED"
SAVE_FAILED      = "SAVE_FAILED"
OPEN_FAILED      = "OPEN_FAILED"


# ── Friendly message lookup ───────────────────────────────────────────────────

def friendly_message(e: AppError) -> str:
    """
    Return a plain-English one-liner suitable for showing to a user.
    Never exposes raw tracebacks or internal code paths.
    """
    code = e.code
    msg  = e.message or ""

    if code == INVALID_FORMAT:
        if "address" in msg.lower():
            return f"Invalid cell address. Use column letters followed by a row number, like C3.\n({msg})"
        if "column" in msg.lower():
            return f"Invalid column. Use uppercase letters like A, Z or AA.\n({msg})"
        return f"Invalid format — please check the value.\n({msg})"

    if code == OUT_OF_RANGE:
        if "row" in msg.lower():
            return f"Row must be 1 or higher.\n({msg})"
        return f"There is no column before A.\n({msg})"

    if code == INVALID_ARGUMENT:
        return f"Invalid argument.\n({msg})"

    if code == DETACHED_STATE:
        return "The cursor has no worksheet attached. Attach one before reading or writing cells."

    if code == FILE_LOCKED:
        fname = ""
        if e.details and "path" in e.details:
            fname = f" ({os.path.basename(e.details['path'])})"
        return f"File is open in another program{fname}. Close it and try again."

    if code == SAVE_FAILED:
        fname = ""
        if e.details and "path" in e.details:
            fname = f" ({os.path.basename(e.details['path'])})"
        return f"Could not save the workbook{fname}. Check that the path is valid and the folder exists."

    if code == OPEN_FAILED:
        return f"Could not open the workbook. Check that it is a valid XLSX file.\n({msg})"

    # Fallback — first line only, never a traceback
    clean = msg.splitlines()[0] if msg else "An unexpected error occurred."
    return clean
