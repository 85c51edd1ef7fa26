"""Infrastructure modules for the recurring payments engine.

Centralized infrastructure components:
- configuration: Settings management (Settings, ResilienceSettings, ...)
- logging: Structured logging (configure_logging, get_module_logger)
- operations: Submission results and failure classification
- resilience: Backoff scheduling and the retry orchestrator
- clients.chain: Network client protocols, networks, transaction ids
- services: Application-scoped providers (get_settings)
"""

from infrastructure.services import get_settings

__all__ = [
    "get_settings",
]
