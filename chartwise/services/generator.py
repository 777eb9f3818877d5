"""
Vega-Lite chart specification helpers.

This module assembles the declarative specs embedded in chart suggestions:
a base spec with title and data reference, marks, and encoding channels.
"""
from typing import Any, Dict, List, Mapping, Optional, Sequence

VEGA_LITE_SCHEMA = "https://vega.github.io/schema/vega-lite/v5.json"

# Named data source used when rows are not inlined
NAMED_DATA_SOURCE = "table"

# Fixed accent colors for charts without a color field
ACCENT_COLORS = {
    'boxplot': '#10b981',   # Emerald
    'histogram': '#8b5cf6', # Violet
    'density': '#ec4899',   # Pink
}

MAX_TITLE_LENGTH = 60


def sanitize_field_name(field: str) -> str:
    """
    Escape a column name for Vega-Lite field references.

    Vega-Lite reads field strings with a path accessor syntax that breaks on:
    - Newlines and carriage returns
    - Backslashes (\\)
    - Apostrophes (')
    - Dots (.) and brackets ([ ]) - treated as nested paths

    Newlines are replaced with spaces, the rest are backslash-escaped.
    """
    if not field:
        return field

    result = field.replace('\n', ' ').replace('\r', ' ')
    # Escape backslashes first so later escapes are not doubled
    result = result.replace('\\', '\\\\')
    for char in ("'", '.', '[', ']'):
        result = result.replace(char, '\\' + char)

    return result


def data_reference(rows: Sequence[Mapping[str, Any]], inline: bool = True) -> Dict[str, Any]:
    """Inline the rows as the spec's data source, or point at the named 'table' source."""
    if inline:
        return {"values": list(rows)}
    return {"name": NAMED_DATA_SOURCE}


def mark(mark_type: str, **options: Any) -> Dict[str, Any]:
    return {"type": mark_type, **options}


def field_channel(field: str, field_type: Optional[str] = None, **options: Any) -> Dict[str, Any]:
    """
    Build an encoding channel bound to a data field.

    Args:
        field: Raw column name (escaped here)
        field_type: 'quantitative', 'nominal' or 'temporal'
        **options: aggregate, bin, stack, sort, scale, legend, ...
    """
    channel: Dict[str, Any] = {"field": sanitize_field_name(field)}
    if field_type:
        channel["type"] = field_type
    channel.update(options)
    return channel


def value_channel(value: Any) -> Dict[str, Any]:
    return {"value": value}


def build_spec(
    title: str,
    data: Dict[str, Any],
    chart_mark: Dict[str, Any],
    encoding: Dict[str, Any],
    transform: Optional[List[Dict[str, Any]]] = None
) -> Dict[str, Any]:
    """
    Assemble a top-level Vega-Lite specification.

    Channels set to None are left out of the encoding so optional channels
    (e.g. color when no categorical column exists) can be passed inline.
    """
    # Truncate very long titles to prevent overflow
    display_title = title if len(title) <= MAX_TITLE_LENGTH else title[:MAX_TITLE_LENGTH - 3] + "..."

    spec: Dict[str, Any] = {
        "$schema": VEGA_LITE_SCHEMA,
        "title": {
            "text": display_title,
            "anchor": "start",
        },
        "width": "container",
        "height": 400,
        "data": data,
    }
    if transform:
        spec["transform"] = transform
    spec["mark"] = chart_mark
    spec["encoding"] = {channel: definition for channel, definition in encoding.items() if definition is not None}
    return spec
