"""In-memory authorization source.

Holds recurring authorizations keyed by permission hash. Intended for
development and tests; production deployments look authorizations up in
an indexer behind the same ``AuthorizationSource`` protocol.
"""

import threading
from typing import Dict, List, Optional

from infrastructure.logging import get_module_logger
from modules.subscriptions.domain.models import RecurringAuthorization

logger = get_module_logger()


class InMemoryAuthorizationStore:
    """Thread-safe in-memory ``AuthorizationSource``.

    Lookups are case-insensitive on the permission hash.
    """

    def __init__(self, authorizations: Optional[List[RecurringAuthorization]] = None):
        self._authorizations: Dict[str, RecurringAuthorization] = {}
        self._lock = threading.Lock()
        for authorization in authorizations or []:
            self.add(authorization)

    def add(self, authorization: RecurringAuthorization) -> None:
        with self._lock:
            self._authorizations[authorization.permission_hash.lower()] = authorization
        logger.debug(
            "authorization_stored",
            authorization_id=authorization.permission_hash,
            chain_id=authorization.chain_id,
        )

    def remove(self, authorization_id: str) -> bool:
        """Remove an authorization. Returns False if it was not stored."""
        with self._lock:
            return self._authorizations.pop(authorization_id.lower(), None) is not None

    async def fetch(self, authorization_id: str) -> Optional[RecurringAuthorization]:
        with self._lock:
            return self._authorizations.get(authorization_id.lower())

    def __len__(self) -> int:
        with self._lock:
            return len(self._authorizations)
