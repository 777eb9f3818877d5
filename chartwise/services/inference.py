"""
Chart suggestion service.

This module profiles a dataset and walks the chart rule table in priority
order, turning every rule whose column prerequisites hold into a chart
suggestion. A diversity policy keeps repeated chart types out once enough
suggestions have been collected.
"""
import logging
from functools import reduce
from typing import Any, Dict, FrozenSet, List, Mapping, NamedTuple, Optional, Sequence, Tuple

from chartwise.core.config import Settings, get_settings
from chartwise.core.schemas import ChartSuggestion, ColumnProfile
from chartwise.services.generator import data_reference
from chartwise.services.profiler import profile_columns
from chartwise.services.rules import CHART_RULES, ChartRule, ColumnGroups, RuleContext, SuggestionDraft

logger = logging.getLogger(__name__)


class _Accepted(NamedTuple):
    suggestions: Tuple[ChartSuggestion, ...]
    seen_types: FrozenSet[str]


def _accept(accepted: _Accepted, draft: SuggestionDraft, diversity_threshold: int) -> _Accepted:
    """
    Add a draft unless the diversity policy rejects it.

    A chart type that is already present is dropped once more than
    `diversity_threshold` suggestions have been accepted.
    """
    chart_type = draft["chart_type"]
    if chart_type in accepted.seen_types and len(accepted.suggestions) > diversity_threshold:
        logger.debug(f"Skipping repeated chart type '{chart_type}' after {len(accepted.suggestions)} suggestions")
        return accepted

    suggestion = ChartSuggestion(id=f"chart-{len(accepted.suggestions) + 1}", **draft)
    return _Accepted(accepted.suggestions + (suggestion,), accepted.seen_types | {chart_type})


def generate_suggestions(
    rows: Sequence[Mapping[str, Any]],
    settings: Optional[Settings] = None,
    rules: Sequence[ChartRule] = CHART_RULES,
    profiles: Optional[Dict[str, ColumnProfile]] = None
) -> List[ChartSuggestion]:
    """
    Generate chart suggestions for a dataset.

    Args:
        rows: Sequence of row mappings (column name -> loosely typed value)
        settings: Optional settings override (defaults to the process settings)
        rules: Rule table to evaluate, in priority order
        profiles: Column profiles already computed for these rows, if any

    Returns:
        Accepted suggestions in rule order, with ids chart-1, chart-2, ...
        An empty dataset, or one without numeric/categorical/datetime
        columns, yields an empty list.
    """
    settings = settings or get_settings()
    if profiles is None:
        profiles = profile_columns(rows, settings)
    if not profiles:
        return []

    groups = ColumnGroups.from_profiles(profiles.values())
    context = RuleContext(
        groups=groups,
        data=data_reference(rows, inline=settings.inline_chart_data),
        settings=settings,
    )

    drafts = (rule.draft(context) for rule in rules if rule.applies(groups))
    accepted = reduce(
        lambda acc, draft: _accept(acc, draft, settings.diversity_threshold),
        drafts,
        _Accepted((), frozenset()),
    )

    logger.debug(
        f"Generated {len(accepted.suggestions)} suggestions "
        f"({len(groups.numeric)} numeric, {len(groups.categorical)} categorical, {len(groups.datetime)} datetime columns)"
    )
    return list(accepted.suggestions)
