"""
Chart rule table.

Each rule pairs a column-type prerequisite with a builder that turns the
profiled columns into a suggestion draft. CHART_RULES is evaluated in order:
multivariate charts first, simple single-column charts last. The order is
the ranking, so do not reorder it.
"""
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, NamedTuple

from chartwise.core.config import Settings
from chartwise.core.schemas import ColumnProfile, ColumnType
from chartwise.services.generator import (
    ACCENT_COLORS,
    build_spec,
    field_channel,
    mark,
    sanitize_field_name,
    value_channel,
)

# Suggestion fields without 'id'; the generator assigns ids on acceptance
SuggestionDraft = Dict[str, Any]


class ColumnGroups(NamedTuple):
    numeric: List[ColumnProfile]
    categorical: List[ColumnProfile]
    datetime: List[ColumnProfile]

    @classmethod
    def from_profiles(cls, profiles: Iterable[ColumnProfile]) -> "ColumnGroups":
        """Partition profiles by type, keeping column order. Boolean columns are left out."""
        profiles = list(profiles)
        return cls(
            numeric=[p for p in profiles if p.type == ColumnType.NUMERIC],
            categorical=[p for p in profiles if p.type == ColumnType.CATEGORICAL],
            datetime=[p for p in profiles if p.type == ColumnType.DATETIME],
        )


class RuleContext(NamedTuple):
    groups: ColumnGroups
    data: Dict[str, Any]  # Vega-Lite data reference shared by every spec
    settings: Settings


@dataclass(frozen=True)
class ChartRule:
    chart_type: str
    build: Callable[[RuleContext], SuggestionDraft]
    min_numeric: int = 0
    min_categorical: int = 0
    min_datetime: int = 0

    def applies(self, groups: ColumnGroups) -> bool:
        return (
            len(groups.numeric) >= self.min_numeric
            and len(groups.categorical) >= self.min_categorical
            and len(groups.datetime) >= self.min_datetime
        )

    def draft(self, context: RuleContext) -> SuggestionDraft:
        return {"chart_type": self.chart_type, **self.build(context)}


def _bubble_chart(ctx: RuleContext) -> SuggestionDraft:
    num, cat = ctx.groups.numeric, ctx.groups.categorical
    x, y, color = num[0].name, num[1].name, cat[0].name
    has_size_column = len(num) > 2
    size = num[2].name if has_size_column else x
    title = f"Multivariate Analysis: {x} vs {y}"
    return {
        "title": title,
        "rationale": f"High-dimensional view relating {x}, {y} and {color}, with bubble size showing {size}.",
        "columns_used": [x, y, size, color],
        "alternative_chart_types": ["Scatter Plot"],
        "chart_spec": build_spec(title, ctx.data, mark("circle", tooltip=True), {
            "x": field_channel(x, "quantitative"),
            "y": field_channel(y, "quantitative"),
            "size": field_channel(size, "quantitative"),
            "color": field_channel(color, "nominal"),
        }),
        "caveats": None if has_size_column else f"Only two numeric columns are available, so bubble size repeats {x}.",
    }


def _heatmap(ctx: RuleContext) -> SuggestionDraft:
    value = ctx.groups.numeric[0].name
    rows, cols = ctx.groups.categorical[0].name, ctx.groups.categorical[1].name
    title = f"Heatmap of {value}"
    return {
        "title": title,
        "rationale": f"Intensity of average {value} across {rows} and {cols}.",
        "columns_used": [rows, cols, value],
        "alternative_chart_types": ["Grouped Bar Chart"],
        "chart_spec": build_spec(title, ctx.data, mark("rect", tooltip=True), {
            "x": field_channel(rows, "nominal"),
            "y": field_channel(cols, "nominal"),
            "color": field_channel(value, "quantitative", aggregate="mean"),
        }),
    }


def _stacked_bar_chart(ctx: RuleContext) -> SuggestionDraft:
    value = ctx.groups.numeric[0].name
    group, part = ctx.groups.categorical[0].name, ctx.groups.categorical[1].name
    title = f"Composition by {group}"
    return {
        "title": title,
        "rationale": f"Breakdown of total {value} for each {group}, split by {part}.",
        "columns_used": [group, part, value],
        "alternative_chart_types": ["Grouped Bar Chart"],
        "chart_spec": build_spec(title, ctx.data, mark("bar", tooltip=True), {
            "x": field_channel(group, "nominal"),
            "y": field_channel(value, "quantitative", aggregate="sum", stack="zero"),
            "color": field_channel(part, "nominal"),
        }),
    }


def _line_chart(ctx: RuleContext) -> SuggestionDraft:
    when, value = ctx.groups.datetime[0].name, ctx.groups.numeric[0].name
    series = ctx.groups.categorical[0].name if ctx.groups.categorical else None
    title = f"{value} over Time"
    return {
        "title": title,
        "rationale": f"Temporal evolution of {value} along {when}" + (f", one line per {series}." if series is not None else "."),
        "columns_used": [when, value] + ([series] if series is not None else []),
        "alternative_chart_types": ["Area Chart"],
        "chart_spec": build_spec(title, ctx.data, mark("line", point=True, tooltip=True), {
            "x": field_channel(when, "temporal"),
            "y": field_channel(value, "quantitative"),
            "color": field_channel(series, "nominal") if series is not None else None,
        }),
    }


def _grouped_bar_chart(ctx: RuleContext) -> SuggestionDraft:
    value = ctx.groups.numeric[0].name
    group, subgroup = ctx.groups.categorical[0].name, ctx.groups.categorical[1].name
    title = f"{value} by {group} and {subgroup}"
    return {
        "title": title,
        "rationale": f"Side-by-side comparison of total {value} for each {subgroup} within every {group}.",
        "columns_used": [group, subgroup, value],
        "alternative_chart_types": ["Stacked Bar Chart"],
        "chart_spec": build_spec(title, ctx.data, mark("bar", tooltip=True), {
            "x": field_channel(group, "nominal"),
            "y": field_channel(value, "quantitative", aggregate="sum"),
            "xOffset": field_channel(subgroup, "nominal"),
            "color": field_channel(subgroup, "nominal"),
        }),
    }


def _scatter_plot(ctx: RuleContext) -> SuggestionDraft:
    x, y = ctx.groups.numeric[0].name, ctx.groups.numeric[1].name
    color = ctx.groups.categorical[0].name if ctx.groups.categorical else None
    title = f"{x} vs {y}"
    return {
        "title": title,
        "rationale": f"Correlation between {x} and {y}.",
        "columns_used": [x, y] + ([color] if color is not None else []),
        "alternative_chart_types": ["Bubble Chart"],
        "chart_spec": build_spec(title, ctx.data, mark("point", filled=True, tooltip=True), {
            "x": field_channel(x, "quantitative", scale={"zero": False}),
            "y": field_channel(y, "quantitative", scale={"zero": False}),
            "color": field_channel(color, "nominal") if color is not None else None,
        }),
    }


def _boxplot(ctx: RuleContext) -> SuggestionDraft:
    value = ctx.groups.numeric[0].name
    group = ctx.groups.categorical[0].name if ctx.groups.categorical else None
    title = f"Statistical Distribution of {value}"
    return {
        "title": title,
        "rationale": f"Quartiles, median and extremes of {value}" + (f" for each {group}." if group is not None else "."),
        "columns_used": [value] + ([group] if group is not None else []),
        "alternative_chart_types": ["Violin Plot"],
        "chart_spec": build_spec(title, ctx.data, mark("boxplot", extent="min-max"), {
            "x": field_channel(group, "nominal") if group is not None else None,
            "y": field_channel(value, "quantitative"),
            "color": field_channel(group, "nominal", legend=None) if group is not None else value_channel(ACCENT_COLORS['boxplot']),
        }),
    }


def _donut_chart(ctx: RuleContext) -> SuggestionDraft:
    value = ctx.groups.numeric[0].name
    limit = ctx.settings.donut_max_cardinality
    categorical = ctx.groups.categorical
    slices = next((c for c in categorical if c.unique_count < limit), categorical[0])
    title = f"{slices.name} Share"
    return {
        "title": title,
        "rationale": f"Proportion of total {value} contributed by each {slices.name}.",
        "columns_used": [slices.name, value],
        "alternative_chart_types": ["Bar Chart"],
        "chart_spec": build_spec(title, ctx.data, mark("arc", innerRadius=50, tooltip=True), {
            "theta": field_channel(value, "quantitative", aggregate="sum"),
            "color": field_channel(slices.name, "nominal"),
        }),
        "caveats": (
            f"{slices.name} has {slices.unique_count} categories; small slices may be hard to compare."
            if slices.unique_count >= limit else None
        ),
    }


def _histogram(ctx: RuleContext) -> SuggestionDraft:
    # The second numeric column gets the spotlight when the first already leads other charts
    numeric = ctx.groups.numeric
    target = (numeric[1] if len(numeric) > 1 else numeric[0]).name
    title = f"Frequency of {target}"
    return {
        "title": title,
        "rationale": f"Distribution spread of {target} across value ranges.",
        "columns_used": [target],
        "alternative_chart_types": ["Density Plot"],
        "chart_spec": build_spec(title, ctx.data, mark("bar", tooltip=True), {
            "x": field_channel(target, "quantitative", bin=True),
            "y": {"aggregate": "count", "type": "quantitative"},
            "color": value_channel(ACCENT_COLORS['histogram']),
        }),
    }


def _stacked_area_chart(ctx: RuleContext) -> SuggestionDraft:
    when, value = ctx.groups.datetime[0].name, ctx.groups.numeric[0].name
    group = ctx.groups.categorical[0].name
    title = f"{value} Share by {group} over Time"
    return {
        "title": title,
        "rationale": f"Evolution of each {group}'s share of {value} along {when}.",
        "columns_used": [when, value, group],
        "alternative_chart_types": ["Streamgraph"],
        "chart_spec": build_spec(title, ctx.data, mark("area", tooltip=True), {
            "x": field_channel(when, "temporal"),
            "y": field_channel(value, "quantitative", stack="normalize"),
            "color": field_channel(group, "nominal"),
        }),
    }


def _bar_chart(ctx: RuleContext) -> SuggestionDraft:
    value, group = ctx.groups.numeric[0].name, ctx.groups.categorical[0].name
    title = f"{value} by {group}"
    return {
        "title": title,
        "rationale": f"Simple comparison of {value} across {group}, largest first.",
        "columns_used": [group, value],
        "alternative_chart_types": ["Lollipop Chart"],
        "chart_spec": build_spec(title, ctx.data, mark("bar", cornerRadiusEnd=4, tooltip=True), {
            "x": field_channel(group, "nominal", sort="-y"),
            "y": field_channel(value, "quantitative"),
            "color": field_channel(group, "nominal", legend=None),
        }),
    }


def _density_plot(ctx: RuleContext) -> SuggestionDraft:
    value = ctx.groups.numeric[0].name
    title = f"{value} Density Curve"
    return {
        "title": title,
        "rationale": f"Smoothed probability distribution of {value}.",
        "columns_used": [value],
        "alternative_chart_types": ["Histogram"],
        "chart_spec": build_spec(
            title,
            ctx.data,
            mark("area", opacity=0.7),
            {
                "x": field_channel("value", "quantitative", title=value),
                "y": field_channel("density", "quantitative"),
                "color": value_channel(ACCENT_COLORS['density']),
            },
            transform=[{"density": sanitize_field_name(value)}],
        ),
    }


CHART_RULES = (
    ChartRule("Bubble Chart", _bubble_chart, min_numeric=2, min_categorical=1),
    ChartRule("Heatmap", _heatmap, min_numeric=1, min_categorical=2),
    ChartRule("Stacked Bar Chart", _stacked_bar_chart, min_numeric=1, min_categorical=2),
    ChartRule("Line Chart", _line_chart, min_numeric=1, min_datetime=1),
    ChartRule("Grouped Bar Chart", _grouped_bar_chart, min_numeric=1, min_categorical=2),
    ChartRule("Scatter Plot", _scatter_plot, min_numeric=2),
    ChartRule("Boxplot", _boxplot, min_numeric=1),
    ChartRule("Donut Chart", _donut_chart, min_numeric=1, min_categorical=1),
    ChartRule("Histogram", _histogram, min_numeric=1),
    ChartRule("Stacked Area Chart", _stacked_area_chart, min_numeric=1, min_categorical=1, min_datetime=1),
    ChartRule("Bar Chart", _bar_chart, min_numeric=1, min_categorical=1),
    ChartRule("Density Plot", _density_plot, min_numeric=1),
)

CHART_TYPES = tuple(rule.chart_type for rule in CHART_RULES)
