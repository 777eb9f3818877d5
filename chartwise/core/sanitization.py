"""
Sanitization utilities for user-provided column names and values.
"""
import re


def sanitize_for_logging(value: str, max_length: int = 500) -> str:
    """
    Sanitize value for safe logging (prevents log injection).

    Args:
        value: Value to sanitize
        max_length: Maximum length

    Returns:
        Sanitized value safe for logging
    """
    if not value:
        return ""

    # Remove newlines and carriage returns
    value = re.sub(r'[\r\n]', ' ', value)

    # Remove other control characters
    value = re.sub(r'[\x00-\x1f\x7f-\x9f]', '', value)

    if len(value) > max_length:
        value = value[:max_length] + "..."

    return value


def validate_column_name(name: str, max_length: int = 1000) -> bool:
    """
    Validate that a column name is safe to echo back inside chart specs.

    Newlines and tabs are allowed since spreadsheet headers often contain
    them; other control characters and empty names are not.
    """
    if not isinstance(name, str) or not name.strip() or len(name) > max_length:
        return False

    if re.search(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]', name):
        return False

    return True
