import pytest
from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill

from sheetcursor.errors import AppError, INVALID_FORMAT
from sheetcursor.styles import border_box, coerce_format, coerce_style


SIDES = ("top", "left", "bottom", "right")


def _styles(ws, address):
    b = ws[address].border
    return {side: getattr(b, side).style for side in SIDES}


# ── border_box ────────────────────────────────────────────────────────────────

def test_border_box_two_by_two_uses_outer_style_on_every_boundary_edge():
    ws = Workbook().active
    border_box(ws, "B2", "C3", border_style="thick", inner_border_style="dotted")

    assert _styles(ws, "B2") == {"top": "thick", "left": "thick", "bottom": "dotted", "right": "dotted"}
    assert _styles(ws, "C2") == {"top": "thick", "left": "dotted", "bottom": "dotted", "right": "thick"}
    assert _styles(ws, "B3") == {"top": "dotted", "left": "thick", "bottom": "thick", "right": "dotted"}
    assert _styles(ws, "C3") == {"top": "dotted", "left": "dotted", "bottom": "thick", "right": "thick"}


def test_border_box_never_puts_inner_style_on_boundary():
    ws = Workbook().active
    border_box(ws, "A1", "D5", border_style="medium", inner_border_style="hair")
    for r in range(1, 6):
        for c in "ABCD":
            s = _styles(ws, f"{c}{r}")
            if r == 1:
                assert s["top"] == "medium"
            if r == 5:
                assert s["bottom"] == "medium"
            if c == "A":
                assert s["left"] == "medium"
            if c == "D":
                assert s["right"] == "medium"
    assert _styles(ws, "B3") == {side: "hair" for side in SIDES}


def test_border_box_default_is_three_by_three():
    ws = Workbook().active
    border_box(ws)
    assert _styles(ws, "A1")["top"] == "thin"
    assert _styles(ws, "B2") == {side: "dotted" for side in SIDES}
    assert _styles(ws, "C3")["right"] == "thin"
    assert ws["D4"].border.top.style is None


def test_border_box_single_cell_is_all_outer():
    ws = Workbook().active
    border_box(ws, "E5", "E5")
    assert _styles(ws, "E5") == {side: "thin" for side in SIDES}


def test_border_box_reversed_corners_normalize():
    ws = Workbook().active
    border_box(ws, "C3", "B2", border_style="thick")
    assert _styles(ws, "B2")["top"] == "thick"
    assert _styles(ws, "C3")["bottom"] == "thick"


def test_border_box_rejects_bad_address():
    ws = Workbook().active
    with pytest.raises(AppError) as ei:
        border_box(ws, "2B", "C3")
    assert ei.value.code == INVALID_FORMAT


# ── coerce ────────────────────────────────────────────────────────────────────

def test_coerce_style_builds_openpyxl_objects():
    assert coerce_style("font", {"bold": True}) == Font(bold=True)
    assert coerce_style("alignment", {"horizontal": "center"}) == Alignment(horizontal="center")
    fill = coerce_style("fill", {"fill_type": "solid", "fgColor": "FFFF00"})
    assert isinstance(fill, PatternFill)
    assert fill.fill_type == "solid"


def test_coerce_style_passes_objects_and_plain_values_through():
    f = Font(italic=True)
    assert coerce_style("font", f) is f
    assert coerce_style("number_format", "0.00") == "0.00"


def test_coerce_border_sides():
    b = coerce_style("border", {"left": "thin", "right": {"style": "double"}})
    assert isinstance(b, Border)
    assert b.left.style == "thin"
    assert b.right.style == "double"


def test_coerce_format_rejects_unknown_name():
    with pytest.raises(AppError) as ei:
        coerce_format({"font": {"bold": True}, "shadow": True})
    assert ei.value.code == INVALID_FORMAT


def test_coerce_format_empty():
    assert coerce_format(None) == {}
    assert coerce_format({}) == {}


def test_border_box_rejects_bad_style_before_touching_cells():
    ws = Workbook().active
    with pytest.raises(AppError) as ei:
        border_box(ws, "A1", "B2", border_style="bogus")
    assert ei.value.code == INVALID_FORMAT
    assert ws["A1"].border.top.style is None

    with pytest.raises(AppError) as ei:
        border_box(ws, "A1", "B2", inner_border_style="squiggly")
    assert ei.value.code == INVALID_FORMAT
    assert ws["A1"].border.top.style is None


@pytest.mark.parametrize("name, value", [
    ("font", "bold"),
    ("alignment", "center"),
    ("fill", 3),
    ("protection", True),
    ("border", "thin"),
    ("font", Alignment(horizontal="left")),
    ("number_format", 2),
])
def test_coerce_style_rejects_wrong_value_type(name, value):
    with pytest.raises(AppError) as ei:
        coerce_style(name, value)
    assert ei.value.code == INVALID_FORMAT


def test_coerce_border_rejects_bad_side():
    with pytest.raises(AppError) as ei:
        coerce_style("border", {"top": "bogus"})
    assert ei.value.code == INVALID_FORMAT
