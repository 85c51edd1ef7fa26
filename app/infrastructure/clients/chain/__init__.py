"""Chain network clients.

Protocols the engine submits through, the supported network table and
chain-scoped transaction identifiers.
"""

from infrastructure.clients.chain.identifiers import (
    DecodedTransactionId,
    TransactionIdFormatError,
    decode_transaction_id,
    encode_transaction_id,
    is_chain_scoped,
)
from infrastructure.clients.chain.networks import (
    BASE_CHAIN_ID,
    BASE_SEPOLIA_CHAIN_ID,
    CHAIN_SHORT_NAMES,
    SUPPORTED_NETWORKS,
    NetworkSpec,
    format_units,
    get_expected_network,
    get_network,
    parse_units,
)
from infrastructure.clients.chain.protocols import (
    ContractCall,
    NetworkClient,
    OperationHandle,
    OperationReceipt,
)
from infrastructure.clients.chain.registry import NetworkClientRegistry

__all__ = [
    "BASE_CHAIN_ID",
    "BASE_SEPOLIA_CHAIN_ID",
    "CHAIN_SHORT_NAMES",
    "SUPPORTED_NETWORKS",
    "ContractCall",
    "DecodedTransactionId",
    "NetworkClient",
    "NetworkClientRegistry",
    "NetworkSpec",
    "OperationHandle",
    "OperationReceipt",
    "TransactionIdFormatError",
    "decode_transaction_id",
    "encode_transaction_id",
    "format_units",
    "get_expected_network",
    "get_network",
    "is_chain_scoped",
    "parse_units",
]
