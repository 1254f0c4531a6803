"""Structlog processors used by the formatter's logging pipeline.

Usage:
    from infrastructure.logging.formatters import add_app_info, mask_sensitive_data
"""

import re
from typing import Any


def add_app_info(app_name: str, app_version: str = "unknown"):
    """Create a processor that stamps every entry with the app name and version."""

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        event_dict["app_name"] = app_name
        event_dict["app_version"] = app_version
        return event_dict

    return processor


# Bot tokens travel through the formatter context, never log them
SENSITIVE_PATTERNS = frozenset(
    {
        "password",
        "secret",
        "token",
        "api_key",
        "authorization",
        "credential",
        "cookie",
        "bearer",
    }
)

# Slack tokens can also show up inside rendered text or error messages
SLACK_TOKEN_PATTERN = re.compile(r"\bxox[abposre]-[A-Za-z0-9-]+")


def mask_sensitive_data(
    mask_value: str = "***REDACTED***",
    additional_patterns: frozenset[str] | None = None,
):
    """Create a processor that hides credentials in log entries.

    A value is replaced entirely when its key contains one of the sensitive
    patterns (case-insensitive). Any other string value has embedded Slack
    tokens replaced in place.

    Args:
        mask_value: The string to replace sensitive values with.
        additional_patterns: Extra key patterns to consider sensitive.

    Returns:
        A structlog processor function.
    """
    patterns = SENSITIVE_PATTERNS
    if additional_patterns:
        patterns = patterns | additional_patterns

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        masked_dict = {}
        for key, value in event_dict.items():
            key_lower = key.lower()
            if value is not None and any(p in key_lower for p in patterns):
                masked_dict[key] = mask_value
            elif isinstance(value, str):
                masked_dict[key] = SLACK_TOKEN_PATTERN.sub(mask_value, value)
            else:
                masked_dict[key] = value
        return masked_dict

    return processor


def truncate_large_values(max_length: int = 500, max_items: int = 20):
    """Create a processor that keeps log lines bounded.

    Rendered responses can be long and attachment batches large. Strings
    longer than ``max_length`` are cut; lists and tuples longer than
    ``max_items`` are replaced by a short summary.
    """

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        for key, value in event_dict.items():
            if isinstance(value, str) and len(value) > max_length:
                event_dict[key] = (
                    value[:max_length] + f"...[truncated, {len(value)} chars total]"
                )
            elif isinstance(value, (list, tuple)) and len(value) > max_items:
                event_dict[key] = f"[{len(value)} items]"
        return event_dict

    return processor
