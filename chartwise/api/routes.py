import logging
from typing import Any, Dict, List
from fastapi import APIRouter, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address
from chartwise.services.profiler import profile_columns
from chartwise.services.inference import generate_suggestions
from chartwise.core.schemas import RowsRequest, ProfileResult, SuggestionResult
from chartwise.core.errors import ErrorCodes, get_error_response
from chartwise.core.config import Settings, get_settings
from chartwise.core.sanitization import sanitize_for_logging, validate_column_name
from chartwise.core.performance import track_performance

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)

router = APIRouter()


def _rate_limit() -> str:
    return f"{get_settings().rate_limit_per_minute}/minute"


def _raise_error(request: Request, status_code: int, error_code: str, additional_detail: str = None):
    correlation_id = getattr(request.state, 'correlation_id', 'unknown')
    error_info = get_error_response(error_code, additional_detail)
    error_info['correlation_id'] = correlation_id
    raise HTTPException(status_code=status_code, detail=error_info)


def _validate_rows(request: Request, rows: List[Dict[str, Any]], settings: Settings) -> None:
    """Reject datasets over the configured size limits or with unusable column names."""
    if len(rows) > settings.max_dataset_rows:
        _raise_error(
            request, 413, ErrorCodes.DATASET_TOO_LARGE,
            f"Maximum is {settings.max_dataset_rows} rows. You sent {len(rows)}."
        )
    if not rows:
        return

    columns = list(rows[0].keys())
    if len(columns) > settings.max_dataset_columns:
        _raise_error(
            request, 413, ErrorCodes.DATASET_TOO_LARGE,
            f"Maximum is {settings.max_dataset_columns} columns. You sent {len(columns)}."
        )

    invalid = [name for name in columns if not validate_column_name(name)]
    if invalid:
        _raise_error(
            request, 400, ErrorCodes.INVALID_COLUMN_NAME,
            f"Invalid column: '{sanitize_for_logging(invalid[0], max_length=80)}'."
        )


@router.get("/health")
async def health_check():
    return {"status": "ok"}


@router.post("/profile", response_model=ProfileResult)
@limiter.limit(_rate_limit)
@track_performance("profile_request")
async def profile_dataset(request: Request, body: RowsRequest):
    """
    Infer the semantic type and cardinality of every column.

    Rate limited per client address (RATE_LIMIT_PER_MINUTE).
    """
    settings = get_settings()
    _validate_rows(request, body.rows, settings)

    try:
        profiles = profile_columns(body.rows, settings)
    except Exception as e:
        logger.error(f"Profiling failed for {len(body.rows)} rows: {e}", exc_info=True)
        _raise_error(request, 500, ErrorCodes.PROCESSING_ERROR)

    logger.info(f"Profiled {len(profiles)} columns from {len(body.rows)} rows")
    return ProfileResult(row_count=len(body.rows), columns=list(profiles.values()))


@router.post("/suggestions", response_model=SuggestionResult)
@limiter.limit(_rate_limit)
@track_performance("suggestions_request")
async def suggest_charts(request: Request, body: RowsRequest):
    """
    Profile the rows and return chart suggestions in priority order.

    Each suggestion embeds a Vega-Lite spec ready for rendering.
    Rate limited per client address (RATE_LIMIT_PER_MINUTE).
    """
    settings = get_settings()
    _validate_rows(request, body.rows, settings)

    try:
        profiles = profile_columns(body.rows, settings)
        suggestions = generate_suggestions(body.rows, settings, profiles=profiles)
    except Exception as e:
        logger.error(f"Suggestion generation failed for {len(body.rows)} rows: {e}", exc_info=True)
        _raise_error(request, 500, ErrorCodes.PROCESSING_ERROR)

    logger.info(
        f"Generated {len(suggestions)} suggestions for {len(body.rows)} rows",
        extra={"chart_types": [s.chart_type for s in suggestions]}
    )
    return SuggestionResult(
        row_count=len(body.rows),
        profile=list(profiles.values()),
        suggestions=suggestions
    )
