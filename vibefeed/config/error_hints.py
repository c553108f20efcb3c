"""Error hints for configuration validation errors.

Provides user-friendly hints with actionable remediation steps
for common validation errors.
"""

from typing import Final


# Mapping of error types to user-friendly hints
ERROR_HINTS: Final[dict[str, str]] = {
    "missing": "This field is required. Please add it to your configuration.",
    "extra_forbidden": "Unknown field. Remove it or check its spelling.",
    "int_type": "This field must be an integer (whole number).",
    "int_parsing": "This field must be an integer (whole number).",
    "float_type": "This field must be a number.",
    "float_parsing": "This field must be a number.",
    "string_type": "This field must be a text string.",
    "dict_type": "This field must be an object/mapping.",
    "model_type": "This section must be an object/mapping.",
    "greater_than": "The value is too small. It must be strictly positive.",
    "greater_than_equal": "The value is too small. Check the minimum allowed.",
    "less_than_equal": "The value is too large. Check the maximum allowed.",
    "string_pattern_mismatch": "The format is invalid. Check the expected pattern.",
    "value_error": "The combination of values is invalid. Read the message above.",
    "file_not_found": "The file does not exist. Check the file path.",
    "yaml_parse_error": "Invalid YAML syntax. Check for proper indentation and formatting.",
}

# Field-specific hints for more context
FIELD_HINTS: Final[dict[str, str]] = {
    "version": "Use a 'major.minor' string such as '1.0'.",
    "gravity": "Must be greater than 0 and at most 10 (default 1.8).",
    "age_offset_hours": "Must be greater than 0 and at most 48 (default 2).",
    "min_popularity": "Must be a non-negative integer (default 1).",
    "max_age_hours": "Must be a non-negative number of hours (default 168).",
    "default_page_size": "Must be between 1 and 100 and not above max_page_size.",
    "max_page_size": "Must be between 1 and 100.",
    "candidate_multiplier": "Must be between 1 and 20 (default 3).",
    "min_candidate_window": "Must be between 0 and 10000 (default 50).",
}


def get_error_hint(error_type: str, field_name: str | None = None) -> str:
    """Get a user-friendly hint for a validation error.

    Args:
        error_type: The Pydantic error type (e.g., 'missing', 'greater_than').
        field_name: Optional field name for field-specific hints.

    Returns:
        A user-friendly hint string.
    """
    if field_name:
        # 'trending.gravity' -> 'gravity'
        simple_field = field_name.split(".")[-1]
        if simple_field in FIELD_HINTS:
            return FIELD_HINTS[simple_field]

    return ERROR_HINTS.get(
        error_type, "Check the configuration documentation for valid values."
    )


def format_validation_error(
    location: str,
    message: str,
    error_type: str,
    *,
    include_hint: bool = True,
) -> str:
    """Format a validation error with optional hint.

    Args:
        location: The error location (e.g., 'trending.gravity').
        message: The original error message.
        error_type: The error type.
        include_hint: Whether to include a hint.

    Returns:
        Formatted error string.
    """
    base = f"{location}: {message}"
    if include_hint:
        hint = get_error_hint(error_type, location)
        return f"{base}\n    Hint: {hint}"
    return base
