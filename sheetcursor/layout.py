"""
sheetcursor/layout.py — JSON-backed description of what to write where.

A layout is a list of sheets; each sheet is a list of blocks rendered in order
by sheetcursor.engine. Every block starts a fresh cursor at its own start
address.

Block kinds:
  row     values (list, or dict filtered by exclude) written left to right
  column  values written top to bottom
  table   data rows, one fill_row per entry
  merge   merge start..start+(columns, rows); value goes into the start cell
  border  border_box over start..end
"""
from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

from .errors import AppError, INVALID_ARGUMENT


ENV_LAYOUT_PATH = "SHEETCURSOR_LAYOUT_PATH"

BLOCK_KINDS = ("row", "column", "table", "merge", "border")


@dataclass
class BlockConfig:
    kind: Literal["row", "column", "table", "merge", "border"] = "row"
    start: str = "A1"
    values: Any = field(default_factory=list)           # row / column
    data: List[Any] = field(default_factory=list)       # table
    format: Dict[str, Any] = field(default_factory=dict)
    exclude: List[str] = field(default_factory=list)
    columns: int = 0                                    # merge extent
    rows: int = 0
    value: Any = None                                   # merge: top-left value
    end: str = "C3"                                     # border
    border_style: str = "thin"
    inner_border_style: str = "dotted"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BlockConfig":
        kind = data.get("kind", "row")
        if kind not in BLOCK_KINDS:
            raise AppError(INVALID_ARGUMENT, f"Unknown block kind: {kind!r}", {"kinds": list(BLOCK_KINDS)})
        try:
            return cls(**data)
        except TypeError as e:
            raise AppError(INVALID_ARGUMENT, f"Bad block: {e}")


@dataclass
class SheetLayout:
    name: str = "Sheet1"
    blocks: List[BlockConfig] = field(default_factory=list)


@dataclass
class LayoutConfig:
    sheets: List[SheetLayout] = field(default_factory=list)

    # ---------- Serialization ----------

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LayoutConfig":
        sheets: List[SheetLayout] = []
        for sh in data.get("sheets", []):
            blocks = [BlockConfig.from_dict(b) for b in sh.get("blocks", [])]
            sheets.append(SheetLayout(name=sh.get("name", "Sheet1"), blocks=blocks))
        return cls(sheets=sheets)

    # ---------- File IO ----------

    def save_json(self, path: str) -> None:
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")

    @classmethod
    def load_json(cls, path: str) -> "LayoutConfig":
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return cls.from_dict(data)


def resolve_layout_path(project_root: Optional[str] = None) -> str:
    """Resolve the default layout path.

    Priority:
    1) SHEETCURSOR_LAYOUT_PATH env var (absolute or relative)
    2) User-home scoped default: ~/.sheetcursor/layout.json
    """
    env = os.getenv(ENV_LAYOUT_PATH)
    if env:
        p = Path(env)
        if not p.is_absolute():
            base = Path(project_root) if project_root else Path.cwd()
            p = base / p
        return str(p)

    return str(Path.home() / ".sheetcursor" / "layout.json")


def load_layout_if_exists(path: Optional[str] = None) -> Optional[LayoutConfig]:
    p = Path(path or resolve_layout_path())
    if not p.exists():
        return None
    return LayoutConfig.load_json(str(p))
