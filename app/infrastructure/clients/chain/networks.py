"""Supported networks, token constants and unit conversion."""

import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

BASE_CHAIN_ID = 8453
BASE_SEPOLIA_CHAIN_ID = 84532

USDC_DECIMALS = 6


@dataclass(frozen=True)
class NetworkSpec:
    """A network recurring charges can run on, with its USDC deployment."""

    chain_id: int
    name: str
    usdc_address: str
    testnet: bool
    usdc_decimals: int = USDC_DECIMALS


SUPPORTED_NETWORKS = {
    BASE_CHAIN_ID: NetworkSpec(
        chain_id=BASE_CHAIN_ID,
        name="Base",
        usdc_address="0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913",
        testnet=False,
    ),
    BASE_SEPOLIA_CHAIN_ID: NetworkSpec(
        chain_id=BASE_SEPOLIA_CHAIN_ID,
        name="Base Sepolia",
        usdc_address="0x036CbD53842c5426634e7929541eC2318f3dCF7e",
        testnet=True,
    ),
}

# ERC-3770 short names, from ethereum-lists/chains
CHAIN_SHORT_NAMES = {
    1: "eth",
    11155111: "sep",
    BASE_CHAIN_ID: "base",
    BASE_SEPOLIA_CHAIN_ID: "base-sepolia",
    10: "oeth",
    11155420: "oeth-sepolia",
    42161: "arb1",
    137: "matic",
    43114: "avax",
    56: "bnb",
    7777777: "zora",
}

_DECIMAL_AMOUNT = re.compile(r"^-?\d+(?:\.\d+)?$")


def get_expected_network(testnet: bool) -> NetworkSpec:
    """Network a caller expects: Base Sepolia for testnet, Base otherwise."""
    return SUPPORTED_NETWORKS[BASE_SEPOLIA_CHAIN_ID if testnet else BASE_CHAIN_ID]


def get_network(chain_id: int) -> Optional[NetworkSpec]:
    return SUPPORTED_NETWORKS.get(chain_id)


def get_chain_short_name(chain_id: int) -> Optional[str]:
    return CHAIN_SHORT_NAMES.get(chain_id)


def get_chain_id_from_short_name(short_name: str) -> Optional[int]:
    wanted = short_name.lower()
    for chain_id, name in CHAIN_SHORT_NAMES.items():
        if name == wanted:
            return chain_id
    return None


def parse_units(value: str, decimals: int) -> int:
    """Convert a decimal string in token units to the smallest unit.

    Args:
        value: Amount such as ``"9.99"`` or ``"-1"``
        decimals: Token decimals

    Returns:
        Integer amount in the smallest unit (``"9.99"`` -> ``9990000`` for USDC).

    Raises:
        ValueError: If the string is not a plain decimal number or has more
            fractional digits than the token supports.
    """
    text = value.strip()
    if not _DECIMAL_AMOUNT.match(text):
        raise ValueError(f"Invalid amount: {value!r}")
    amount = Decimal(text)
    fraction = text.split(".", 1)[1] if "." in text else ""
    if len(fraction.rstrip("0")) > decimals:
        raise ValueError(f"Amount {value!r} has more than {decimals} decimal places")
    return int(amount.scaleb(decimals))


def format_units(value: int, decimals: int) -> str:
    """Render a smallest-unit amount as a decimal string without trailing zeros.

    Example:
        >>> format_units(9990000, 6)
        '9.99'
    """
    sign = "-" if value < 0 else ""
    whole, fraction = divmod(abs(value), 10**decimals)
    fraction_text = str(fraction).rjust(decimals, "0").rstrip("0")
    if fraction_text:
        return f"{sign}{whole}.{fraction_text}"
    return f"{sign}{whole}"
