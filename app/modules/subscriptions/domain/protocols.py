"""Collaborator protocols for the subscriptions module."""

from typing import Optional, Protocol, runtime_checkable

from infrastructure.clients.chain.protocols import NetworkClient
from modules.subscriptions.domain.models import RecurringAuthorization, SpendState


@runtime_checkable
class AuthorizationSource(Protocol):
    """Looks up recurring authorizations by id (permission hash)."""

    async def fetch(
        self, authorization_id: str
    ) -> Optional[RecurringAuthorization]:  # pragma: no cover - typing helper
        ...


@runtime_checkable
class SpendPermissionClient(NetworkClient, Protocol):
    """Network client that can also read spend-permission state."""

    async def read_on_chain_state(
        self, authorization: RecurringAuthorization
    ) -> SpendState:  # pragma: no cover - typing helper
        ...
