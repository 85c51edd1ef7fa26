"""Structlog processors for submission engine log entries.

Usage:
    from infrastructure.logging.formatters import mask_sensitive_data

Dependencies:
    - structlog processors
"""

from typing import Any

# Keys holding signing material or paymaster credentials.
# Matching is by substring on the lowercased key, so keep these specific:
# "authorization_id" and "token_address" must stay visible.
SENSITIVE_PATTERNS = frozenset(
    {
        "signature",
        "secret",
        "private_key",
        "mnemonic",
        "password",
        "api_key",
        "apikey",
        "paymaster_url",
        "bearer",
        "credential",
    }
)


def add_app_info(app_name: str, app_version: str = "unknown"):
    """Create a processor that stamps the application name and version.

    Example:
        configure_logging(extra_processors=[add_app_info("engine", "0.1.0")])
    """

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        event_dict["app_name"] = app_name
        event_dict["app_version"] = app_version
        return event_dict

    return processor


def mask_sensitive_data(
    mask_value: str = "***REDACTED***",
    additional_patterns: frozenset[str] | None = None,
):
    """Create a processor that redacts signing material from log entries.

    A key is sensitive when any pattern occurs in its lowercased name.
    ``None`` values are left alone so missing fields stay recognisable.

    Args:
        mask_value: Replacement for sensitive values.
        additional_patterns: Extra key fragments to treat as sensitive.

    Returns:
        A structlog processor function.
    """
    patterns = SENSITIVE_PATTERNS
    if additional_patterns:
        patterns = patterns | additional_patterns

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        return {
            key: (
                mask_value
                if value is not None
                and any(pattern in key.lower() for pattern in patterns)
                else value
            )
            for key, value in event_dict.items()
        }

    return processor


def truncate_large_values(max_length: int = 500):
    """Create a processor that shortens oversized string values.

    Encoded call data can run to many kilobytes; anything longer than
    ``max_length`` is cut and annotated with its original size.
    """

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        for key, value in event_dict.items():
            if isinstance(value, str) and len(value) > max_length:
                event_dict[key] = (
                    value[:max_length] + f"...[truncated, {len(value)} chars total]"
                )
        return event_dict

    return processor
