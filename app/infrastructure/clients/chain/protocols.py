"""Protocols and value types for chain network clients.

The engine never talks to an RPC endpoint itself. A ``NetworkClient``
implementation (bundler, wallet, test double) is injected and the engine
only relies on the two calls below.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional, Protocol, Sequence, runtime_checkable

if TYPE_CHECKING:
    from infrastructure.resilience.retry.models import SubmissionOptions

RECEIPT_SUCCESS = "success"
RECEIPT_FAILED = "failed"


@dataclass(frozen=True)
class ContractCall:
    """One contract invocation inside a batched operation.

    ABI encoding is left to the network client; calls are described by
    function name and ordered arguments.
    """

    to: str
    function: str
    args: tuple = field(default_factory=tuple)
    value: int = 0


@dataclass(frozen=True)
class OperationHandle:
    """Reference to an operation accepted by the network."""

    id: str
    chain_id: int


@dataclass(frozen=True)
class OperationReceipt:
    """Network receipt for a submitted operation."""

    status: str
    transaction_hash: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.status == RECEIPT_SUCCESS


@runtime_checkable
class NetworkClient(Protocol):
    """Client able to submit batched calls to one chain."""

    chain_id: int

    async def send_operation(
        self, calls: Sequence[ContractCall], options: "SubmissionOptions"
    ) -> OperationHandle:  # pragma: no cover - typing helper
        ...

    async def wait_for_operation(
        self, handle: OperationHandle, timeout_seconds: float
    ) -> OperationReceipt:  # pragma: no cover - typing helper
        ...

