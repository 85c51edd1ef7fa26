"""Factory functions for retry orchestrator test data."""

import copy
from typing import Any, List, Optional

from infrastructure.clients.chain.identifiers import encode_transaction_id
from infrastructure.clients.chain.networks import BASE_CHAIN_ID
from infrastructure.clients.chain.protocols import (
    RECEIPT_FAILED,
    RECEIPT_SUCCESS,
    OperationHandle,
    OperationReceipt,
)
from infrastructure.resilience.retry.models import SubmissionOptions

TX_HASH = "0x" + "ab" * 32


def make_receipt(
    status: str = RECEIPT_SUCCESS, transaction_hash: Optional[str] = TX_HASH
) -> OperationReceipt:
    """Create an OperationReceipt (successful by default)."""
    return OperationReceipt(status=status, transaction_hash=transaction_hash)


def make_failed_receipt() -> OperationReceipt:
    return OperationReceipt(status=RECEIPT_FAILED, transaction_hash=TX_HASH)


class ScriptedOperation:
    """Operation whose attempts follow a script.

    Each script entry is consumed by one attempt: an exception is raised by
    ``send``, a receipt is returned by ``confirm``. Once the script runs out
    the last entry repeats.

    Attributes:
        sent_options: Copy of the options passed to every ``send``
        confirm_timeouts: Timeout passed to every ``confirm``
    """

    def __init__(self, script: List[Any], chain_id: int = BASE_CHAIN_ID):
        self.script = list(script)
        self.chain_id = chain_id
        self.sent_options: List[SubmissionOptions] = []
        self.confirm_timeouts: List[float] = []
        self._index = 0

    @property
    def send_count(self) -> int:
        return len(self.sent_options)

    def _next(self) -> Any:
        entry = self.script[min(self._index, len(self.script) - 1)]
        self._index += 1
        return entry

    async def send(self, options: SubmissionOptions) -> OperationHandle:
        self.sent_options.append(copy.copy(options))
        entry = self._next()
        if isinstance(entry, BaseException):
            raise entry
        return OperationHandle(id=f"op-{self.send_count}", chain_id=self.chain_id)

    async def confirm(
        self, handle: OperationHandle, timeout_seconds: float
    ) -> OperationReceipt:
        self.confirm_timeouts.append(timeout_seconds)
        return self.script[min(self._index - 1, len(self.script) - 1)]

    def transaction_id(self, receipt: OperationReceipt) -> str:
        return encode_transaction_id(self.chain_id, receipt.transaction_hash)
