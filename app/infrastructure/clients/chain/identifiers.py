"""Chain-scoped transaction identifiers (ERC-3770).

A charge's transaction id is ``"<short name>:<hash>"``, e.g.
``"base:0xabc123"``, so the id alone says which network to look on. Bare
hashes are the legacy format and carry no chain.
"""

import re
from dataclasses import dataclass
from typing import Optional

from infrastructure.clients.chain.networks import (
    get_chain_id_from_short_name,
    get_chain_short_name,
)

_HEX_HASH = re.compile(r"^0x[a-fA-F0-9]+$")


class TransactionIdFormatError(ValueError):
    """A transaction id or hash is malformed or names an unknown chain."""


@dataclass(frozen=True)
class DecodedTransactionId:
    chain_id: int
    transaction_hash: str


def encode_transaction_id(chain_id: int, transaction_hash: str) -> str:
    """Build the chain-scoped id for a transaction.

    Raises:
        TransactionIdFormatError: If the hash is not ``0x``-prefixed hex or
            the chain has no known short name.
    """
    if not transaction_hash or not _HEX_HASH.match(transaction_hash):
        raise TransactionIdFormatError(
            "Invalid transaction hash: must be a valid hex string starting with 0x"
        )
    short_name = get_chain_short_name(chain_id)
    if short_name is None:
        raise TransactionIdFormatError(
            f"Unsupported chain ID: {chain_id}. Cannot encode transaction ID."
        )
    return f"{short_name}:{transaction_hash}"


def decode_transaction_id(transaction_id: str) -> Optional[DecodedTransactionId]:
    """Split a chain-scoped id into chain id and hash.

    Returns:
        The decoded id, or None for a legacy bare hash.

    Raises:
        TransactionIdFormatError: For an empty id or short name, a malformed
            hash, or an unknown short name.
    """
    if not transaction_id:
        raise TransactionIdFormatError("Invalid transaction ID: must be a non-empty string")

    short_name, separator, transaction_hash = transaction_id.partition(":")
    if not separator:
        return None
    if not short_name:
        raise TransactionIdFormatError("Invalid ERC-3770 format: short name is required")
    if not _HEX_HASH.match(transaction_hash):
        raise TransactionIdFormatError(
            "Invalid ERC-3770 format: transaction hash must be a valid hex string "
            "starting with 0x"
        )

    chain_id = get_chain_id_from_short_name(short_name)
    if chain_id is None:
        raise TransactionIdFormatError(f"Unknown chain short name: {short_name}")
    return DecodedTransactionId(chain_id=chain_id, transaction_hash=transaction_hash)


def is_chain_scoped(transaction_id: str) -> bool:
    return isinstance(transaction_id, str) and ":" in transaction_id
