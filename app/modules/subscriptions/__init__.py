"""Recurring subscriptions module.

Charges recurring authorizations (signed USDC spend permissions on Base)
period by period, with every charge re-validated against on-chain state and
submitted through the retry orchestrator.

Features:
- Period and remaining-allowance accounting
- Charge, status and revoke operations
- Chain-scoped transaction ids for completed charges
"""

from modules.subscriptions.domain.errors import (
    ChargeValidationError,
    SubscriptionNotFoundError,
)
from modules.subscriptions.domain.models import (
    AuthorizationStatus,
    Expired,
    Period,
    RecurringAuthorization,
    SpendState,
    SubscriptionStatus,
)
from modules.subscriptions.periods import PeriodNotStartedError, current_period
from modules.subscriptions.service import (
    MAX_REMAINING,
    PreparedCharge,
    SubscriptionService,
)
from modules.subscriptions.status import resolve_status
from modules.subscriptions.store import InMemoryAuthorizationStore

__all__ = [
    "AuthorizationStatus",
    "ChargeValidationError",
    "Expired",
    "InMemoryAuthorizationStore",
    "MAX_REMAINING",
    "Period",
    "PeriodNotStartedError",
    "PreparedCharge",
    "RecurringAuthorization",
    "SpendState",
    "SubscriptionNotFoundError",
    "SubscriptionService",
    "SubscriptionStatus",
    "current_period",
    "resolve_status",
]
