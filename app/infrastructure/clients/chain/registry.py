"""Registry of network clients keyed by chain id.

Provides thread-safe, lazy creation of one client per chain.
"""

import threading
from typing import Callable, Dict

import structlog

from infrastructure.clients.chain.protocols import NetworkClient

logger = structlog.get_logger()


class NetworkClientRegistry:
    """Thread-safe registry of network clients.

    Clients are built by ``factory`` on first use of a chain id and reused
    afterwards. Concurrent first requests for the same chain create exactly
    one client. The registry is passed explicitly to whoever needs it.

    Attributes:
        _factory: Callable building a client for a chain id.
        _clients: Dict mapping chain id to its client.
        _lock: Threading lock guarding client creation.

    Example:
        registry = NetworkClientRegistry(lambda chain_id: BundlerClient(chain_id))
        client = registry.get(8453)
    """

    def __init__(self, factory: Callable[[int], NetworkClient]):
        self._factory = factory
        self._clients: Dict[int, NetworkClient] = {}
        self._lock = threading.Lock()

    def get(self, chain_id: int) -> NetworkClient:
        """Get the client for a chain, creating it on first use.

        Raises:
            Whatever the factory raises; nothing is cached in that case.
        """
        client = self._clients.get(chain_id)
        if client is not None:
            return client

        with self._lock:
            # Double-check locking pattern
            client = self._clients.get(chain_id)
            if client is None:
                client = self._factory(chain_id)
                self._clients[chain_id] = client
                logger.info("network_client_created", chain_id=chain_id)
            return client

    def register(self, chain_id: int, client: NetworkClient) -> None:
        """Install a pre-built client for a chain.

        Raises:
            ValueError: If a client for the chain already exists.
        """
        with self._lock:
            if chain_id in self._clients:
                raise ValueError(f"Client for chain_id '{chain_id}' is already registered")
            self._clients[chain_id] = client
            logger.info("network_client_registered", chain_id=chain_id)

    def has_client(self, chain_id: int) -> bool:
        with self._lock:
            return chain_id in self._clients

    def count(self) -> int:
        with self._lock:
            return len(self._clients)
