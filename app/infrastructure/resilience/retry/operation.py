"""Operations the retry orchestrator can drive."""

from typing import Any, Optional, Protocol, Sequence

from infrastructure.clients.chain.identifiers import encode_transaction_id
from infrastructure.clients.chain.protocols import (
    ContractCall,
    NetworkClient,
    OperationHandle,
    OperationReceipt,
)
from infrastructure.resilience.retry.models import SubmissionOptions


class SubmittableOperation(Protocol):
    """A value-transfer operation that can be sent and confirmed.

    ``send`` is called once per attempt with the options as adjusted by the
    orchestrator. ``confirm`` waits for the network receipt of that send.
    """

    async def send(self, options: SubmissionOptions) -> Any:  # pragma: no cover
        ...

    async def confirm(
        self, handle: Any, timeout_seconds: float
    ) -> OperationReceipt:  # pragma: no cover
        ...

    def transaction_id(self, receipt: OperationReceipt) -> str:  # pragma: no cover
        ...


class CallBatchOperation:
    """Submits a fixed batch of contract calls through a network client.

    Attributes:
        client: Network client for the target chain
        calls: Calls executed atomically, in order
        confirmation_timeout_seconds: Upper bound on a single receipt wait
    """

    def __init__(
        self,
        client: NetworkClient,
        calls: Sequence[ContractCall],
        confirmation_timeout_seconds: Optional[float] = None,
    ):
        if not calls:
            raise ValueError("calls must not be empty")
        self.client = client
        self.calls = tuple(calls)
        self.confirmation_timeout_seconds = confirmation_timeout_seconds

    async def send(self, options: SubmissionOptions) -> OperationHandle:
        return await self.client.send_operation(self.calls, options)

    async def confirm(
        self, handle: OperationHandle, timeout_seconds: float
    ) -> OperationReceipt:
        if self.confirmation_timeout_seconds is not None:
            timeout_seconds = min(timeout_seconds, self.confirmation_timeout_seconds)
        return await self.client.wait_for_operation(handle, timeout_seconds)

    def transaction_id(self, receipt: OperationReceipt) -> str:
        return encode_transaction_id(self.client.chain_id, receipt.transaction_hash)
