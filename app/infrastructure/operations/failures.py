"""Failure taxonomy for transaction submissions.

Every failure seen by the engine is reduced to one ``FailureKind``. Code
outside ``infrastructure.operations.classifiers`` branches on the kind
only, never on error text.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class FailureKind(Enum):
    """Closed set of failure categories."""

    # Recoverable
    INSUFFICIENT_GAS = "insufficient_gas"
    NONCE_CONFLICT = "nonce_conflict"
    NETWORK_TIMEOUT = "network_timeout"
    TRANSIENT_NETWORK = "transient_network"
    SPONSOR_REJECTED = "sponsor_rejected"
    INSUFFICIENT_FUNDS_FOR_GAS = "insufficient_funds_for_gas"

    # Unrecoverable
    INVALID_AUTHORIZATION = "invalid_authorization"
    INSUFFICIENT_ALLOWANCE = "insufficient_allowance"
    PERMISSION_REVOKED = "permission_revoked"
    NETWORK_MISMATCH = "network_mismatch"
    ASSET_MISMATCH = "asset_mismatch"
    USER_REJECTED = "user_rejected"
    INVALID_PARAMS = "invalid_params"
    CONTRACT_REVERT = "contract_revert"
    INSUFFICIENT_BALANCE = "insufficient_balance"
    UNKNOWN = "unknown"

    @property
    def is_recoverable(self) -> bool:
        return self in RECOVERABLE_KINDS

    @property
    def description(self) -> str:
        return FAILURE_DESCRIPTIONS[self]


RECOVERABLE_KINDS = frozenset(
    {
        FailureKind.INSUFFICIENT_GAS,
        FailureKind.NONCE_CONFLICT,
        FailureKind.NETWORK_TIMEOUT,
        FailureKind.TRANSIENT_NETWORK,
        FailureKind.SPONSOR_REJECTED,
        FailureKind.INSUFFICIENT_FUNDS_FOR_GAS,
    }
)

FAILURE_DESCRIPTIONS = {
    FailureKind.INSUFFICIENT_GAS: "Transaction ran out of gas during execution",
    FailureKind.NONCE_CONFLICT: "Transaction nonce conflicts with the account's sequence",
    FailureKind.NETWORK_TIMEOUT: "Timed out waiting for the network",
    FailureKind.TRANSIENT_NETWORK: "Network or RPC provider returned a temporary error",
    FailureKind.SPONSOR_REJECTED: "Paymaster refused to sponsor the operation",
    FailureKind.INSUFFICIENT_FUNDS_FOR_GAS: "Insufficient funds to pay for gas",
    FailureKind.INVALID_AUTHORIZATION: "Recurring authorization is missing, invalid or not active",
    FailureKind.INSUFFICIENT_ALLOWANCE: "Charge exceeds the allowance remaining in this period",
    FailureKind.PERMISSION_REVOKED: "Recurring authorization has been revoked",
    FailureKind.NETWORK_MISMATCH: "Authorization belongs to a different network",
    FailureKind.ASSET_MISMATCH: "Authorization is for a different token",
    FailureKind.USER_REJECTED: "User rejected the transaction",
    FailureKind.INVALID_PARAMS: "Invalid transaction parameters",
    FailureKind.CONTRACT_REVERT: "Smart contract reverted the transaction",
    FailureKind.INSUFFICIENT_BALANCE: "Insufficient token balance for transfer",
    FailureKind.UNKNOWN: "An unknown error occurred",
}

# What the engine does about a recoverable failure on the next attempt.
SUGGESTED_ACTIONS = {
    FailureKind.INSUFFICIENT_GAS: "Increasing gas budget",
    FailureKind.NONCE_CONFLICT: "Refreshing nonce from network",
    FailureKind.NETWORK_TIMEOUT: "Retrying after delay",
    FailureKind.TRANSIENT_NETWORK: "Retrying with backoff",
    FailureKind.SPONSOR_REJECTED: "Attempting sponsored transaction",
    FailureKind.INSUFFICIENT_FUNDS_FOR_GAS: "Attempting sponsored transaction",
}

# What a caller can do about a terminal failure.
USER_ACTIONS = {
    FailureKind.USER_REJECTED: ["Please approve the transaction in your wallet"],
    FailureKind.INSUFFICIENT_BALANCE: [
        "Ensure you have sufficient token balance",
        "Check that you are using the correct wallet",
    ],
    FailureKind.CONTRACT_REVERT: [
        "The smart contract rejected the transaction",
        "Check the transaction parameters",
    ],
    FailureKind.INVALID_AUTHORIZATION: [
        "Verify the subscription is active and was approved on this network",
    ],
    FailureKind.PERMISSION_REVOKED: ["Ask the subscriber to subscribe again"],
    FailureKind.INSUFFICIENT_ALLOWANCE: [
        "Charge at most the remaining allowance, or wait for the next period",
    ],
    FailureKind.NETWORK_MISMATCH: ["Charge on the network the subscription was created on"],
    FailureKind.ASSET_MISMATCH: ["Only USDC subscriptions can be charged"],
    FailureKind.INVALID_PARAMS: ["Check the charge amount and addresses"],
}


@dataclass(frozen=True)
class FailureAnalysis:
    """Classification of a single failure.

    Attributes:
        kind: FailureKind -- category of the failure
        message: str -- original error text, for logs
        code: Optional[int] -- numeric error code when one was found
        description: str -- human description of the kind
        suggested_action: Optional[str] -- what a retry will do, for recoverable kinds
    """

    kind: FailureKind
    message: str = ""
    code: Optional[int] = None
    description: str = ""
    suggested_action: Optional[str] = None

    @property
    def is_recoverable(self) -> bool:
        return self.kind.is_recoverable

    @classmethod
    def of(
        cls, kind: FailureKind, message: str = "", code: Optional[int] = None
    ) -> "FailureAnalysis":
        """Build an analysis with the kind's description and suggested action."""
        return cls(
            kind=kind,
            message=message,
            code=code,
            description=kind.description,
            suggested_action=SUGGESTED_ACTIONS.get(kind),
        )
