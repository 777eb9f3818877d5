"""
Row value classification.

Raw row values arrive loosely typed (numbers, strings, dates, booleans,
blanks). Every value is classified once into a Cell so the profiler and the
predicates below agree on what "empty", "numeric" and "date-like" mean.
"""
import math
import numbers
import re
from datetime import date, time
from decimal import Decimal
from enum import Enum
from typing import Any, NamedTuple

import numpy as np
import pandas as pd


class ValueKind(str, Enum):
    ABSENT = "absent"
    BOOLEAN = "boolean"
    NUMBER = "number"
    TEXT = "text"


class Cell(NamedTuple):
    kind: ValueKind
    value: Any


ABSENT_CELL = Cell(ValueKind.ABSENT, None)

# Plain decimal literals only: "12", "-3.5", ".5", "1e3". No "inf", "nan", "0x1f" or "1_000".
_NUMERIC_TEXT = re.compile(r'^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$')

# Calendar-date shapes. Non-capturing groups so Series.str.contains stays quiet.
_MONTH_NAME = (
    r'\b(?:jan|feb|mar|apr|may|jun|jul|aug|sep|sept|oct|nov|dec|january|february|march'
    r'|april|june|july|august|september|october|november|december)\b'
)
_YEAR = r'\b\d{4}\b'
_NUMERIC_DATE = r'\b\d{1,4}[-/.]\d{1,2}(?:[-/.]\d{1,4})?\b'


def to_cell(value: Any) -> Cell:
    """
    Classify a raw row value.

    None, the empty string, NaN and NaT are absent. Whitespace-only strings
    are text. Native dates and timestamps become ISO-8601 text.
    """
    if isinstance(value, Cell):
        return value
    if value is None:
        return ABSENT_CELL
    if isinstance(value, str):
        return ABSENT_CELL if value == '' else Cell(ValueKind.TEXT, value)
    if isinstance(value, (bool, np.bool_)):
        return Cell(ValueKind.BOOLEAN, bool(value))
    if value is pd.NaT or value is pd.NA:
        return ABSENT_CELL
    if isinstance(value, Decimal):
        return ABSENT_CELL if value.is_nan() else Cell(ValueKind.NUMBER, value)
    if isinstance(value, numbers.Integral):
        return Cell(ValueKind.NUMBER, value)
    if isinstance(value, numbers.Real):
        return ABSENT_CELL if math.isnan(value) else Cell(ValueKind.NUMBER, value)
    if isinstance(value, np.datetime64):
        if np.isnat(value):
            return ABSENT_CELL
        return Cell(ValueKind.TEXT, pd.Timestamp(value).isoformat())
    if isinstance(value, (date, time)):
        return Cell(ValueKind.TEXT, value.isoformat())
    return Cell(ValueKind.TEXT, str(value))


def classify_value(value: Any) -> ValueKind:
    return to_cell(value).kind


def is_absent(value: Any) -> bool:
    return to_cell(value).kind is ValueKind.ABSENT


def looks_numeric(value: Any) -> bool:
    """True for finite numbers and for text holding a plain finite decimal literal."""
    cell = to_cell(value)
    if cell.kind is ValueKind.NUMBER:
        number = cell.value
        if isinstance(number, numbers.Integral):
            return True
        if isinstance(number, Decimal):
            return number.is_finite()
        return math.isfinite(number)
    if cell.kind is ValueKind.TEXT:
        text = cell.value.strip()
        if not _NUMERIC_TEXT.match(text):
            return False
        return math.isfinite(float(text))
    return False


def looks_datetime(value: Any) -> bool:
    """True for text (including converted native dates) that parses as a calendar date."""
    cell = to_cell(value)
    if cell.kind is not ValueKind.TEXT:
        return False
    return bool(datetime_text_mask(pd.Series([cell.value], dtype=object)).iloc[0])


def text_values(values: pd.Series) -> pd.Series:
    """Stripped text of defined TEXT values; native dates come back as ISO text."""
    return values.map(lambda value: to_cell(value).value).astype(str).str.strip()


def numeric_text_mask(texts: pd.Series) -> pd.Series:
    """Vectorized looks_numeric for a Series of stripped strings."""
    if texts.empty:
        return pd.Series(False, index=texts.index, dtype=bool)

    matched = texts.str.fullmatch(_NUMERIC_TEXT.pattern).astype(bool)
    finite = np.isfinite(texts[matched].astype(float))
    return matched & finite.reindex(texts.index, fill_value=False).astype(bool)


def datetime_text_mask(texts: pd.Series) -> pd.Series:
    """
    Vectorized looks_datetime for a Series of strings.

    Only text shaped like a calendar date is handed to pandas: it must carry
    a digit and a month name, a four-digit year or a d/m/y style group.
    Bare month names, times, ordinals and words like "today" are rejected
    even though dateutil would resolve them against the current date.
    """
    if texts.empty:
        return pd.Series(False, index=texts.index, dtype=bool)

    texts = texts.astype(str).str.strip()
    shaped = texts.str.contains(r'\d') & (
        texts.str.contains(_MONTH_NAME, flags=re.IGNORECASE)
        | texts.str.contains(_YEAR)
        | texts.str.contains(_NUMERIC_DATE)
    )
    shaped = shaped.astype(bool)
    if not shaped.any():
        return shaped

    candidates = pd.Series(texts[shaped].unique(), dtype=object)
    parsed = pd.to_datetime(candidates, format="mixed", errors="coerce", utc=True)
    parseable = set(candidates[parsed.notna().to_numpy()])
    return shaped & texts.isin(parseable)
