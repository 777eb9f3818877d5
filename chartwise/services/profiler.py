import logging
from collections import Counter
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

import pandas as pd

from chartwise.core.config import Settings, get_settings
from chartwise.core.sanitization import sanitize_for_logging
from chartwise.core.schemas import ColumnProfile, ColumnType
from chartwise.services.values import (
    Cell,
    ValueKind,
    classify_value,
    datetime_text_mask,
    is_absent,
    looks_numeric,
    numeric_text_mask,
    text_values,
    to_cell,
)

logger = logging.getLogger(__name__)


def defined_cells(values: Sequence[Any]) -> List[Cell]:
    """Classify values and drop the absent ones (None, '', NaN, NaT)."""
    return [to_cell(value) for value in values if not is_absent(value)]


def count_unique(cells: Sequence[Cell]) -> int:
    # Keyed by kind so True and 1, or "1" and 1, stay distinct
    return len({(cell.kind, cell.value) for cell in cells})


def infer_column_type(
    values: Union[pd.Series, Sequence[Any]],
    settings: Optional[Settings] = None
) -> ColumnType:
    """
    Infer the semantic type of a column.

    Accepts raw values or cells; absent values are ignored. Numeric and date
    shares are computed on the whole column at once.

    Priority order:
    1. numeric when more than the threshold share parses as a finite number
    2. datetime when more than the threshold share parses as a date AND
       date-like values outnumber numeric-like ones ("2025" stays numeric)
    3. boolean when every value is a native boolean (if enabled)
    4. categorical otherwise, including columns with no defined values
    """
    settings = settings or get_settings()
    series = values if isinstance(values, pd.Series) else pd.Series(list(values), dtype=object)
    if series.empty:
        return ColumnType.CATEGORICAL

    kinds = series.map(classify_value)
    defined = kinds != ValueKind.ABSENT
    total = int(defined.sum())
    if total == 0:
        return ColumnType.CATEGORICAL

    threshold = settings.type_ratio_threshold
    numbers = series[(kinds == ValueKind.NUMBER).to_numpy()]
    texts = text_values(series[(kinds == ValueKind.TEXT).to_numpy()])

    numeric_count = int(numbers.map(looks_numeric).sum()) + int(numeric_text_mask(texts).sum())
    if numeric_count / total > threshold:
        return ColumnType.NUMERIC

    datetime_count = int(datetime_text_mask(texts).sum())
    if datetime_count / total > threshold and datetime_count > numeric_count:
        return ColumnType.DATETIME

    if settings.infer_boolean_columns and bool((kinds[defined] == ValueKind.BOOLEAN).all()):
        return ColumnType.BOOLEAN

    return ColumnType.CATEGORICAL


def profile_columns(rows: Sequence[Mapping[str, Any]], settings: Optional[Settings] = None) -> Dict[str, ColumnProfile]:
    """
    Profile every column of a dataset.

    Columns are taken from the first row's keys, in order. Rows missing a
    column count as an empty value for it. The input rows are not modified.

    Args:
        rows: Sequence of row mappings
        settings: Optional settings override (defaults to the process settings)

    Returns:
        Mapping of column name to ColumnProfile, in column order.
        An empty dataset yields an empty mapping.
    """
    if not rows:
        return {}

    settings = settings or get_settings()
    columns = list(rows[0].keys())
    # object dtype keeps ints, strings and booleans exactly as supplied
    frame = pd.DataFrame([dict(row) for row in rows], columns=columns, dtype=object)

    profiles: Dict[str, ColumnProfile] = {}
    for position, column in enumerate(columns):
        values = frame.iloc[:, position]
        profiles[column] = ColumnProfile(
            name=column,
            type=infer_column_type(values, settings),
            unique_count=count_unique(defined_cells(values)),
        )

    type_counts = Counter(profile.type.value for profile in profiles.values())
    logger.debug(
        f"Profiled {len(rows)} rows, {len(columns)} columns: {dict(type_counts)}",
        extra={"columns": [sanitize_for_logging(str(c)) for c in columns[:50]]}
    )
    return profiles
