import itertools
import string

import pytest

from sheetcursor.errors import AppError, INVALID_FORMAT, OUT_OF_RANGE
from sheetcursor.columns import (
    column_at,
    column_range,
    column_sequence,
    column_to_number,
    format_address,
    increment_column,
    is_column,
    number_to_column,
    parse_address,
)


def test_column_to_number_basic():
    assert column_to_number("A") == 1
    assert column_to_number("Z") == 26
    assert column_to_number("AA") == 27
    assert column_to_number("AZ") == 52
    assert column_to_number("BA") == 53
    assert column_to_number("ZZ") == 702
    assert column_to_number("AAA") == 703


def test_number_to_column_basic():
    assert number_to_column(1) == "A"
    assert number_to_column(26) == "Z"
    assert number_to_column(27) == "AA"
    assert number_to_column(52) == "AZ"
    assert number_to_column(53) == "BA"
    assert number_to_column(702) == "ZZ"
    assert number_to_column(703) == "AAA"


def test_number_roundtrip():
    for n in range(1, 20001):
        assert column_to_number(number_to_column(n)) == n


def test_letters_roundtrip_up_to_three_letters():
    for length in (1, 2, 3):
        for letters in itertools.product(string.ascii_uppercase, repeat=length):
            s = "".join(letters)
            assert number_to_column(column_to_number(s)) == s


def test_four_letter_columns_roundtrip():
    for s in ("AAAA", "ABCD", "ZZZZ", "QWER", "AZZZ", "BAAA"):
        assert number_to_column(column_to_number(s)) == s


@pytest.mark.parametrize("bad", ["", "a", "A1", " A", "Ä", None, 3])
def test_column_to_number_rejects_bad_input(bad):
    with pytest.raises(AppError) as ei:
        column_to_number(bad)
    assert ei.value.code == INVALID_FORMAT


@pytest.mark.parametrize("n", [0, -1, -27])
def test_number_to_column_rejects_nonpositive(n):
    with pytest.raises(AppError) as ei:
        number_to_column(n)
    assert ei.value.code == OUT_OF_RANGE


def test_increment_column():
    assert increment_column("A", 1) == "B"
    assert increment_column("Z", 1) == "AA"
    assert increment_column("AA", -1) == "Z"
    assert increment_column("C", 0) == "C"
    assert increment_column("C", -2) == "A"


def test_increment_column_below_a_raises():
    with pytest.raises(AppError) as ei:
        increment_column("C", -3)
    assert ei.value.code == OUT_OF_RANGE


def test_is_column():
    assert is_column("A")
    assert is_column("XFD")
    assert not is_column("")
    assert not is_column("a")
    assert not is_column("A1")
    assert not is_column(None)


# ── Sequence ──────────────────────────────────────────────────────────────────

def test_column_sequence_crosses_z():
    seq = column_sequence("Y")
    assert list(itertools.islice(seq, 4)) == ["Y", "Z", "AA", "AB"]


def test_column_sequence_is_stateful():
    seq = column_sequence("A")
    assert next(seq) == "A"
    assert next(seq) == "B"
    assert next(seq) == "C"


def test_column_sequence_draws_consecutive_numbers():
    for start in ("A", "Z", "AZ", "ZZ"):
        k = 60
        drawn = list(itertools.islice(column_sequence(start), k))
        first = column_to_number(start)
        assert [column_to_number(c) for c in drawn] == list(range(first, first + k))


def test_column_sequence_restart_is_independent():
    a = column_sequence("C")
    next(a)
    next(a)
    b = column_sequence("C")
    assert next(b) == "C"
    assert next(a) == "E"


def test_column_at_matches_sequence():
    drawn = list(itertools.islice(column_sequence("X"), 10))
    assert [column_at("X", i) for i in range(10)] == drawn


def test_column_sequence_rejects_bad_start():
    with pytest.raises(AppError) as ei:
        next(column_sequence("x"))
    assert ei.value.code == INVALID_FORMAT


def test_column_range_inclusive_and_normalized():
    assert column_range("B", "D") == ["B", "C", "D"]
    assert column_range("D", "B") == ["B", "C", "D"]
    assert column_range("Y", "AB") == ["Y", "Z", "AA", "AB"]
    assert column_range("C", "C") == ["C"]


# ── Addresses ─────────────────────────────────────────────────────────────────

def test_parse_address():
    assert parse_address("C3") == ("C", 3)
    assert parse_address("AB120") == ("AB", 120)


@pytest.mark.parametrize("bad", ["", "3C", "C", "12", "c3", "C-1", "C3:D4", None])
def test_parse_address_rejects_bad_tokens(bad):
    with pytest.raises(AppError) as ei:
        parse_address(bad)
    assert ei.value.code == INVALID_FORMAT


def test_parse_address_rejects_row_zero():
    with pytest.raises(AppError) as ei:
        parse_address("A0")
    assert ei.value.code == OUT_OF_RANGE


def test_format_address():
    assert format_address("C", 3) == "C3"
