"""Failure classifier for submission errors.

Reduces anything a network client, paymaster or wallet can raise into a
``FailureAnalysis``. All free-text inspection of error messages happens
here; callers branch on ``FailureKind`` only.

Resolution order:
1. Errors that already carry a ``failure_kind`` attribute
2. Message patterns for unrecoverable kinds, with paymaster reverts
   ahead of the generic revert
3. Message patterns for recoverable kinds
4. Exception types (timeouts, connection errors)
5. Numeric error codes (EIP-1193 / JSON-RPC / HTTP)
6. ``FailureKind.UNKNOWN``

Usage:
    from infrastructure.operations.classifiers import classify_failure

    try:
        handle = await client.send_operation(calls, options)
    except Exception as exc:
        analysis = classify_failure(exc)
"""

import asyncio
import re
from typing import Any, Optional

from infrastructure.operations.failures import FailureAnalysis, FailureKind

# Checked first, in order. Spend-permission and paymaster reverts precede
# the generic revert pattern so they keep their specific kind.
UNRECOVERABLE_PATTERNS: list[tuple[FailureKind, list[re.Pattern]]] = [
    (
        FailureKind.USER_REJECTED,
        [
            re.compile(r"user rejected", re.I),
            re.compile(r"user denied", re.I),
            re.compile(r"user cancel+ed", re.I),
            re.compile(r"rejected by user", re.I),
            re.compile(r"action_rejected", re.I),
        ],
    ),
    (
        FailureKind.PERMISSION_REVOKED,
        [
            re.compile(r"permission (?:has been |was )?revoked", re.I),
            re.compile(r"spend ?permission.*revoked", re.I),
        ],
    ),
    (
        FailureKind.INSUFFICIENT_ALLOWANCE,
        [
            re.compile(r"exceeded ?spend ?permission", re.I),
            re.compile(r"exceeds? (?:the )?(?:remaining )?allowance", re.I),
            re.compile(r"insufficient allowance", re.I),
        ],
    ),
    (
        FailureKind.INVALID_AUTHORIZATION,
        [
            re.compile(r"unauthorized ?spend ?permission", re.I),
            re.compile(r"(?:before|after) ?spend ?permission ?(?:start|end)", re.I),
            re.compile(r"invalid signature", re.I),
            re.compile(r"permission denied", re.I),
            re.compile(r"not authorized", re.I),
            re.compile(r"unauthorized", re.I),
            re.compile(r"access denied", re.I),
            re.compile(r"forbidden", re.I),
        ],
    ),
    (
        FailureKind.NETWORK_MISMATCH,
        [
            re.compile(r"chain ?id mismatch", re.I),
            re.compile(r"wrong (?:network|chain)", re.I),
            re.compile(r"unsupported chain", re.I),
        ],
    ),
    (
        FailureKind.INSUFFICIENT_BALANCE,
        [
            re.compile(r"insufficient token balance", re.I),
            re.compile(r"transfer amount exceeds balance", re.I),
        ],
    ),
    (
        FailureKind.INVALID_PARAMS,
        [
            re.compile(r"invalid params", re.I),
            re.compile(r"invalid argument", re.I),
            re.compile(r"invalid address", re.I),
            re.compile(r"invalid input", re.I),
        ],
    ),
    (
        FailureKind.SPONSOR_REJECTED,
        [
            re.compile(r"paymaster", re.I),
            re.compile(r"\bAA3\d\b"),
        ],
    ),
    (
        FailureKind.CONTRACT_REVERT,
        [
            re.compile(r"execution reverted", re.I),
            re.compile(r"vm exception", re.I),
            re.compile(r"call revert exception", re.I),
            re.compile(r"revert", re.I),
        ],
    ),
]

RECOVERABLE_PATTERNS: list[tuple[FailureKind, list[re.Pattern]]] = [
    (
        FailureKind.INSUFFICIENT_GAS,
        [
            re.compile(r"\bout of gas\b", re.I),
            re.compile(r"\bgas too low\b", re.I),
            re.compile(r"gas limit reached", re.I),
            re.compile(r"replacement transaction underpriced", re.I),
            re.compile(r"transaction underpriced", re.I),
            re.compile(r"gas price too low", re.I),
        ],
    ),
    (
        FailureKind.NONCE_CONFLICT,
        [
            re.compile(r"nonce too (?:low|high)", re.I),
            re.compile(r"nonce has already been used", re.I),
            re.compile(r"invalid (?:account )?nonce", re.I),
            re.compile(r"nonce gap", re.I),
            re.compile(r"\bAA25\b"),
        ],
    ),
    (
        FailureKind.INSUFFICIENT_FUNDS_FOR_GAS,
        [
            re.compile(r"insufficient funds for gas", re.I),
            re.compile(r"insufficient balance for transfer", re.I),
            re.compile(r"sender doesn't have enough funds", re.I),
            re.compile(r"didn't pay prefund", re.I),
            re.compile(r"\bAA21\b"),
        ],
    ),
    (
        FailureKind.SPONSOR_REJECTED,
        [
            re.compile(r"paymaster", re.I),
            re.compile(r"sponsorship (?:denied|rejected|failed)", re.I),
            re.compile(r"\bAA3\d\b"),
        ],
    ),
    (
        FailureKind.NETWORK_TIMEOUT,
        [
            re.compile(r"timeout", re.I),
            re.compile(r"timed out", re.I),
            re.compile(r"deadline exceeded", re.I),
        ],
    ),
    (
        FailureKind.TRANSIENT_NETWORK,
        [
            re.compile(r"network error", re.I),
            re.compile(r"connection refused", re.I),
            re.compile(r"ECONNREFUSED|ECONNRESET|ENOTFOUND"),
            re.compile(r"fetch failed", re.I),
            re.compile(r"network request failed", re.I),
            re.compile(r"rpc error", re.I),
            re.compile(r"internal json-rpc error", re.I),
            re.compile(r"server error", re.I),
            re.compile(r"bad gateway", re.I),
            re.compile(r"service unavailable", re.I),
            re.compile(r"too many requests", re.I),
            re.compile(r"user operation failed", re.I),
            re.compile(r"no transaction hash", re.I),
            re.compile(r"receipt (?:reported|status) failed", re.I),
        ],
    ),
]

CODE_KINDS = {
    4001: FailureKind.USER_REJECTED,
    4100: FailureKind.INVALID_AUTHORIZATION,
    -32602: FailureKind.INVALID_PARAMS,
    -32000: FailureKind.TRANSIENT_NETWORK,
    -32603: FailureKind.TRANSIENT_NETWORK,
    429: FailureKind.TRANSIENT_NETWORK,
}

_CODE_IN_MESSAGE = re.compile(r"(?<![\w])-?\d{4,5}(?![\w])")


def _extract_message(error: Any) -> str:
    if error is None:
        return ""
    if isinstance(error, str):
        return error
    if isinstance(error, dict):
        return str(error.get("message", "") or "")
    message = getattr(error, "message", None)
    if isinstance(message, str) and message:
        return message
    if isinstance(error, BaseException):
        return str(error)
    return ""


def _extract_code(error: Any, message: str) -> Optional[int]:
    """Find a numeric code on the error, a nested error, or in the text."""
    if isinstance(error, dict):
        nested = error.get("error")
        candidates = [
            error.get("code"),
            nested.get("code") if isinstance(nested, dict) else None,
        ]
    else:
        nested = getattr(error, "error", None)
        candidates = [
            getattr(error, "code", None),
            getattr(nested, "code", None) if nested is not None else None,
        ]
    for candidate in candidates:
        if isinstance(candidate, int) and not isinstance(candidate, bool):
            return candidate

    match = _CODE_IN_MESSAGE.search(message)
    if match:
        return int(match.group(0))
    return None


def _match_patterns(
    table: list[tuple[FailureKind, list[re.Pattern]]], text: str
) -> Optional[FailureKind]:
    for kind, patterns in table:
        if any(pattern.search(text) for pattern in patterns):
            return kind
    return None


def _kind_for_code(code: Optional[int]) -> Optional[FailureKind]:
    if code is None:
        return None
    if code in CODE_KINDS:
        return CODE_KINDS[code]
    if 500 <= code < 600:
        return FailureKind.TRANSIENT_NETWORK
    return None


def classify_failure(error: Any) -> FailureAnalysis:
    """Classify an error into a ``FailureAnalysis``.

    Deterministic and side-effect free. Anything that matches no rule is
    ``FailureKind.UNKNOWN``, which is unrecoverable.

    Args:
        error: An exception, a plain message, a JSON-RPC style error dict,
            or any object exposing ``message`` / ``code`` attributes.

    Returns:
        FailureAnalysis describing the failure.

    Example:
        >>> classify_failure("nonce too low").kind
        <FailureKind.NONCE_CONFLICT: 'nonce_conflict'>
    """
    message = _extract_message(error)
    code = _extract_code(error, message)

    declared = getattr(error, "failure_kind", None)
    if isinstance(declared, FailureKind):
        return FailureAnalysis.of(declared, message, code)

    # str(exc) of wrapped errors sometimes carries more context than .message
    texts = [message]
    if isinstance(error, BaseException) and str(error) != message:
        texts.append(str(error))

    for table in (UNRECOVERABLE_PATTERNS, RECOVERABLE_PATTERNS):
        for text in texts:
            kind = _match_patterns(table, text)
            if kind is not None:
                return FailureAnalysis.of(kind, message, code)

    if isinstance(error, (TimeoutError, asyncio.TimeoutError)):
        return FailureAnalysis.of(FailureKind.NETWORK_TIMEOUT, message, code)
    if isinstance(error, (ConnectionError, OSError)):
        return FailureAnalysis.of(FailureKind.TRANSIENT_NETWORK, message, code)

    kind = _kind_for_code(code)
    if kind is not None:
        return FailureAnalysis.of(kind, message, code)

    return FailureAnalysis.of(FailureKind.UNKNOWN, message, code)
