"""Chain network integration settings (RPC endpoints, contracts)."""

from typing import Optional

from pydantic import Field, field_validator

from infrastructure.configuration.base import IntegrationSettings

BASE_CHAIN_ID = 8453
BASE_SEPOLIA_CHAIN_ID = 84532


class NetworkSettings(IntegrationSettings):
    """Chain network configuration settings.

    Environment Variables:
        BASE_RPC_URL: RPC endpoint for Base mainnet
        BASE_SEPOLIA_RPC_URL: RPC endpoint for Base Sepolia
        PAYMASTER_URL: Paymaster used for sponsored execution by default
        SPEND_PERMISSION_MANAGER_ADDRESS: Spend permission manager contract

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        rpc_url = settings.networks.RPC_URLS[8453]
        manager = settings.networks.SPEND_PERMISSION_MANAGER_ADDRESS
        ```
    """

    BASE_RPC_URL: str = Field(default="https://mainnet.base.org", alias="BASE_RPC_URL")
    BASE_SEPOLIA_RPC_URL: str = Field(
        default="https://sepolia.base.org", alias="BASE_SEPOLIA_RPC_URL"
    )
    PAYMASTER_URL: Optional[str] = Field(default=None, alias="PAYMASTER_URL")
    SPEND_PERMISSION_MANAGER_ADDRESS: str = Field(
        default="0xf85210B21cC50302F477BA56686d2019dC9b67Ad",
        alias="SPEND_PERMISSION_MANAGER_ADDRESS",
    )

    @field_validator("PAYMASTER_URL", mode="before")
    @classmethod
    def empty_paymaster_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return v

    @property
    def RPC_URLS(self) -> dict[int, str]:
        """Mapping of chain IDs to their configured RPC endpoints.

        Returns:
            Dict mapping chain ID to RPC URL
        """
        return {
            BASE_CHAIN_ID: self.BASE_RPC_URL,
            BASE_SEPOLIA_CHAIN_ID: self.BASE_SEPOLIA_RPC_URL,
        }
