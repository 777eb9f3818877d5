"""
Unit tests for the Vega-Lite spec helpers.
"""
import pytest
from chartwise.services.generator import (
    VEGA_LITE_SCHEMA,
    build_spec,
    data_reference,
    field_channel,
    mark,
    sanitize_field_name,
    value_channel,
)


@pytest.mark.unit
@pytest.mark.parametrize("raw, escaped", [
    ("Sales", "Sales"),
    ("Sales.Amount", "Sales\\.Amount"),
    ("O'Brien", "O\\'Brien"),
    ("items[0]", "items\\[0\\]"),
    ("a\\b", "a\\\\b"),
    ("Line one\nLine two", "Line one Line two"),
    ("", ""),
])
def test_sanitize_field_name(raw, escaped):
    assert sanitize_field_name(raw) == escaped


@pytest.mark.unit
def test_data_reference_inline():
    """Test that rows are inlined as data values."""
    rows = [{'a': 1}, {'a': 2}]

    data = data_reference(rows)

    assert data == {"values": [{'a': 1}, {'a': 2}]}
    assert data["values"] is not rows


@pytest.mark.unit
def test_data_reference_named():
    assert data_reference([{'a': 1}], inline=False) == {"name": "table"}


@pytest.mark.unit
def test_field_channel_options():
    """Test building encoding channels with aggregation and sort directives."""
    channel = field_channel("Revenue.Total", "quantitative", aggregate="sum", sort="-y")

    assert channel == {
        "field": "Revenue\\.Total",
        "type": "quantitative",
        "aggregate": "sum",
        "sort": "-y",
    }


@pytest.mark.unit
def test_field_channel_without_type():
    assert field_channel("value") == {"field": "value"}


@pytest.mark.unit
def test_mark_and_value_channel():
    assert mark("arc", innerRadius=50) == {"type": "arc", "innerRadius": 50}
    assert value_channel("#10b981") == {"value": "#10b981"}


@pytest.mark.unit
def test_build_spec_structure():
    """Test generating a complete spec."""
    spec = build_spec(
        "Revenue by Region",
        {"values": []},
        mark("bar"),
        {"x": field_channel("Region", "nominal"), "y": field_channel("Revenue", "quantitative"), "color": None},
    )

    assert spec["$schema"] == VEGA_LITE_SCHEMA
    assert spec["title"]["text"] == "Revenue by Region"
    assert spec["data"] == {"values": []}
    assert spec["mark"] == {"type": "bar"}
    assert set(spec["encoding"]) == {"x", "y"}
    assert "transform" not in spec


@pytest.mark.unit
def test_build_spec_transform_and_long_title():
    """Test that transforms are kept and long titles truncated."""
    title = "A" * 80
    spec = build_spec(title, {"name": "table"}, mark("area"), {}, transform=[{"density": "x"}])

    assert spec["transform"] == [{"density": "x"}]
    assert len(spec["title"]["text"]) == 60
    assert spec["title"]["text"].endswith("...")
