"""Operation context binding for structured logging.

Binds identifiers of the submission in progress (correlation id,
authorization id, chain id) to structlog's context variables so every
entry logged while handling it carries them.

Usage:
    from infrastructure.logging import bind_operation_context

    with bind_operation_context(authorization_id="0xabc", chain_id=8453):
        logger.info("charge_started")

Dependencies:
    - structlog.contextvars
"""

import uuid
from contextlib import contextmanager
from typing import Any, Generator, Optional

import structlog


@contextmanager
def bind_operation_context(
    correlation_id: Optional[str] = None,
    authorization_id: Optional[str] = None,
    chain_id: Optional[int] = None,
    **extra_context: Any,
) -> Generator[str, None, None]:
    """Bind operation-scoped context to all logs within the block.

    Args:
        correlation_id: Identifier for this operation. Generated if omitted.
        authorization_id: Hash of the recurring authorization being acted on.
        chain_id: Network the operation is submitted to.
        **extra_context: Additional key-value pairs to include in logs.

    Yields:
        The correlation id in effect for the block.
    """
    context: dict[str, Any] = {"correlation_id": correlation_id or str(uuid.uuid4())}
    if authorization_id is not None:
        context["authorization_id"] = authorization_id
    if chain_id is not None:
        context["chain_id"] = chain_id
    context.update(extra_context)

    structlog.contextvars.bind_contextvars(**context)
    try:
        yield context["correlation_id"]
    finally:
        structlog.contextvars.unbind_contextvars(*context.keys())


def get_correlation_id() -> Optional[str]:
    """Return the correlation id bound to the current context, if any."""
    return structlog.contextvars.get_contextvars().get("correlation_id")


def clear_operation_context() -> None:
    """Drop every context variable bound so far."""
    structlog.contextvars.clear_contextvars()
