from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Any, Dict


class ColumnType(str, Enum):
    NUMERIC = "numeric"
    CATEGORICAL = "categorical"
    DATETIME = "datetime"
    BOOLEAN = "boolean"  # only for columns holding native booleans; no chart rule consumes it


class ColumnProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    type: ColumnType
    unique_count: int = Field(ge=0)  # distinct non-empty values


class ChartSuggestion(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str  # 'chart-1', 'chart-2', ... restarting on every call
    title: str
    chart_type: str  # one of CHART_TYPES
    rationale: str
    columns_used: List[str]
    alternative_chart_types: List[str] = []
    chart_spec: Dict[str, Any]  # The Vega-Lite spec
    sound_cue: Optional[str] = None
    caveats: Optional[str] = None


class RowsRequest(BaseModel):
    rows: List[Dict[str, Any]]


class ProfileResult(BaseModel):
    row_count: int
    columns: List[ColumnProfile]


class SuggestionResult(BaseModel):
    row_count: int
    profile: List[ColumnProfile]
    suggestions: List[ChartSuggestion]
