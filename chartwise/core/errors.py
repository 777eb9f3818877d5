"""
Error message constants and utilities for user-friendly error handling.
"""
from typing import Dict, Optional

# Error codes
class ErrorCodes:
    DATASET_TOO_LARGE = "DATASET_TOO_LARGE"
    INVALID_COLUMN_NAME = "INVALID_COLUMN_NAME"
    PROCESSING_ERROR = "PROCESSING_ERROR"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"

# User-friendly error messages
ERROR_MESSAGES: Dict[str, Dict[str, str]] = {
    ErrorCodes.DATASET_TOO_LARGE: {
        "message": "Your dataset is a bit too large",
        "detail": "The rows you sent exceed the size we analyze in a single request.",
        "suggestion": "💡 Send a sample of your rows or only the columns you want to chart. Most patterns show up in a few thousand rows!"
    },
    ErrorCodes.INVALID_COLUMN_NAME: {
        "message": "One of your column names can't be used",
        "detail": "Column names must be non-empty text without control characters.",
        "suggestion": "💡 Rename the affected column in your spreadsheet header row and try again."
    },
    ErrorCodes.PROCESSING_ERROR: {
        "message": "Something went wrong while analyzing your data",
        "detail": "We hit a snag while profiling your columns or building chart suggestions.",
        "suggestion": "💡 Check that every row is a set of column/value pairs with the same headers, then try again."
    },
    ErrorCodes.RATE_LIMIT_EXCEEDED: {
        "message": "Whoa there! Slow down a bit",
        "detail": "You're sending requests faster than we can keep up! We limit requests to keep the service fast for everyone.",
        "suggestion": "💡 Take a quick break and try again in about a minute."
    },
    ErrorCodes.UNKNOWN_ERROR: {
        "message": "Hmm, something unexpected happened",
        "detail": "We encountered an issue we weren't expecting. Don't worry - it's not your fault!",
        "suggestion": "💡 Give it another try in a moment. If the problem keeps happening, try a smaller sample of your data."
    }
}

def get_error_response(error_code: str, additional_detail: Optional[str] = None) -> Dict[str, str]:
    """
    Get user-friendly error response for an error code.

    Args:
        error_code: One of the ErrorCodes constants
        additional_detail: Optional additional detail to append

    Returns:
        Dictionary with code, message, detail, and suggestion
    """
    error_info = ERROR_MESSAGES.get(error_code, ERROR_MESSAGES[ErrorCodes.UNKNOWN_ERROR])

    response = {
        "code": error_code,
        "message": error_info["message"],
        "detail": error_info["detail"],
        "suggestion": error_info["suggestion"]
    }

    if additional_detail:
        response["detail"] = f"{response['detail']} {additional_detail}"

    return response
