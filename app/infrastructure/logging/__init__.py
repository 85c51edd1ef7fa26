"""Structured logging infrastructure.

Centralized structlog configuration for the submission engine.

Public API:
    - configure_logging(): Initialize logging for the process
    - get_module_logger(): Get a logger bound to the calling module
    - bind_operation_context(): Context manager for operation-scoped logging
    - get_correlation_id(): Current correlation id from context
    - clear_operation_context(): Clear all bound context

Formatters:
    - add_app_info(): Processor to add app name/version
    - mask_sensitive_data(): Processor to redact signing material
    - truncate_large_values(): Processor to limit string lengths
"""

from infrastructure.logging.setup import (
    configure_logging,
    get_module_logger,
)
from infrastructure.logging.context import (
    bind_operation_context,
    get_correlation_id,
    clear_operation_context,
)
from infrastructure.logging.formatters import (
    add_app_info,
    mask_sensitive_data,
    truncate_large_values,
    SENSITIVE_PATTERNS,
)

__all__ = [
    "configure_logging",
    "get_module_logger",
    "bind_operation_context",
    "get_correlation_id",
    "clear_operation_context",
    "add_app_info",
    "mask_sensitive_data",
    "truncate_large_values",
    "SENSITIVE_PATTERNS",
]
