"""
Unit tests for row value classification.
"""
import pytest
import numpy as np
import pandas as pd
from datetime import date, datetime
from decimal import Decimal
from chartwise.services.values import (
    Cell,
    ValueKind,
    classify_value,
    is_absent,
    datetime_text_mask,
    looks_datetime,
    looks_numeric,
    numeric_text_mask,
    to_cell,
)


@pytest.mark.unit
@pytest.mark.parametrize("value", [None, '', float('nan'), np.nan, pd.NaT, pd.NA, Decimal('NaN')])
def test_absent_values(value):
    """Test that missing markers are classified as absent."""
    assert classify_value(value) is ValueKind.ABSENT
    assert is_absent(value)


@pytest.mark.unit
def test_whitespace_is_text():
    """Whitespace-only strings are defined values, not blanks."""
    assert to_cell("  ") == Cell(ValueKind.TEXT, "  ")


@pytest.mark.unit
def test_booleans_are_not_numbers():
    """Test that Python and numpy booleans get their own kind."""
    assert to_cell(True) == Cell(ValueKind.BOOLEAN, True)
    assert to_cell(np.bool_(False)) == Cell(ValueKind.BOOLEAN, False)


@pytest.mark.unit
@pytest.mark.parametrize("value", [3, 2.5, np.int64(7), np.float64(1.25), Decimal("1.5")])
def test_numbers(value):
    assert classify_value(value) is ValueKind.NUMBER


@pytest.mark.unit
def test_native_dates_become_iso_text():
    """Test that dates and timestamps are converted to ISO text."""
    assert to_cell(date(2024, 1, 2)) == Cell(ValueKind.TEXT, "2024-01-02")
    assert to_cell(datetime(2024, 1, 2, 3, 4)) == Cell(ValueKind.TEXT, "2024-01-02T03:04:00")
    assert to_cell(pd.Timestamp("2024-01-02")).kind is ValueKind.TEXT


@pytest.mark.unit
@pytest.mark.parametrize("value", [5, 2.5, "12", " -3.5 ", ".5", "1e3", "+7", np.int32(4)])
def test_looks_numeric_true(value):
    assert looks_numeric(value) is True


@pytest.mark.unit
@pytest.mark.parametrize(
    "value",
    [True, False, None, "", "inf", "nan", "Infinity", "1_000", "12abc", "0x1f", float('inf'), "1e999", "North"]
)
def test_looks_numeric_false(value):
    assert looks_numeric(value) is False


@pytest.mark.unit
@pytest.mark.parametrize(
    "value",
    ["2024-01-15", "2025-01-01T00:00:00.000Z", "2024/03/05", datetime(2024, 1, 1), date(2023, 6, 30), "2025",
     "June 2025", "5 Jan 2024", "March 3, 2021"]
)
def test_looks_datetime_true(value):
    assert looks_datetime(value) is True


@pytest.mark.unit
@pytest.mark.parametrize("value", ["Electronics", "hello world", 2024, 3.5, True, None, "", "   ",
                                   "Jan", "May", "Dec", "12:30", "today", "1st", "cust-000123"])
def test_looks_datetime_false(value):
    """Numbers, booleans and free text are never date-like."""
    assert looks_datetime(value) is False


@pytest.mark.unit
def test_predicates_accept_cells():
    """Test that predicates give the same answer for a raw value and its cell."""
    for value in ["42", "2024-01-01", "abc", 3, None]:
        cell = to_cell(value)
        assert looks_numeric(cell) == looks_numeric(value)
        assert looks_datetime(cell) == looks_datetime(value)


@pytest.mark.unit
def test_month_names_are_not_dates():
    """Month abbreviations on their own are labels, not calendar dates."""
    months = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

    assert not datetime_text_mask(pd.Series(months, dtype=object)).any()


@pytest.mark.unit
def test_datetime_text_mask():
    """Test the column-wise date check against the single-value predicate."""
    texts = pd.Series(["2024-01-15", "North", "12:30", "June 2025", "2024-01-15", "today"], dtype=object)

    mask = datetime_text_mask(texts)

    assert mask.tolist() == [True, False, False, True, True, False]
    assert mask.tolist() == [looks_datetime(text) for text in texts]


@pytest.mark.unit
def test_numeric_text_mask():
    texts = pd.Series(["12", "-3.5", "1e999", "inf", "abc", ".5"], dtype=object)

    assert numeric_text_mask(texts).tolist() == [True, True, False, False, False, True]


@pytest.mark.unit
def test_masks_on_empty_series():
    empty = pd.Series([], dtype=object)

    assert numeric_text_mask(empty).empty
    assert datetime_text_mask(empty).empty
