"""Service layer for the subscriptions module.

Entry points for charging, inspecting and revoking recurring
authorizations. Every charge re-validates the authorization against its
current on-chain state before anything is submitted, then hands the
prepared call batch to the retry orchestrator.

Validation failures never reach the network: ``charge`` and ``revoke``
return them as UNRECOVERABLE results with zero attempts, while the
``prepare_*`` functions raise ``ChargeValidationError``.
"""

import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional, Union

from infrastructure.clients.chain.networks import (
    NetworkSpec,
    format_units,
    get_expected_network,
    get_network,
    parse_units,
)
from infrastructure.clients.chain.protocols import ContractCall
from infrastructure.clients.chain.registry import NetworkClientRegistry
from infrastructure.logging import bind_operation_context, get_module_logger
from infrastructure.operations.classifiers import classify_failure
from infrastructure.operations.failures import FailureKind
from infrastructure.operations.result import SubmissionResult
from infrastructure.resilience.retry import (
    CallBatchOperation,
    ResilienceConfig,
    RetryOrchestrator,
    create_resilience_config,
)
from infrastructure.services.providers import get_settings
from modules.subscriptions.calls import prepare_charge_calls, prepare_revoke_call
from modules.subscriptions.domain.errors import (
    ChargeValidationError,
    SubscriptionNotFoundError,
)
from modules.subscriptions.domain.models import (
    AuthorizationStatus,
    RecurringAuthorization,
    SpendState,
    SubscriptionStatus,
)
from modules.subscriptions.domain.protocols import (
    AuthorizationSource,
    SpendPermissionClient,
)
from modules.subscriptions.periods import PeriodNotStartedError
from modules.subscriptions.status import resolve_status

logger = get_module_logger()

MAX_REMAINING = "max-remaining"

ChargeAmount = Union[int, str]

__all__ = [
    "MAX_REMAINING",
    "PreparedCharge",
    "SubscriptionService",
]


@dataclass(frozen=True)
class PreparedCharge:
    """A validated charge, ready for submission.

    Attributes:
        authorization: The authorization being charged
        amount: Resolved amount in the token's smallest unit
        calls: Call batch to submit
        status: Authorization status the charge was validated against
    """

    authorization: RecurringAuthorization
    amount: int
    calls: tuple[ContractCall, ...]
    status: AuthorizationStatus


def _to_datetime(timestamp: Optional[int]) -> Optional[datetime]:
    if timestamp is None:
        return None
    return datetime.fromtimestamp(timestamp, tz=timezone.utc)


def _network_mismatch_message(chain_id: int, testnet: bool, expected: NetworkSpec) -> str:
    actual = get_network(chain_id)
    if actual is not None and actual.testnet != testnet:
        requested = "testnet" if testnet else "mainnet"
        found = "testnet" if actual.testnet else "mainnet"
        return (
            f"The subscription was requested on {requested} but is actually a "
            f"{found} subscription"
        )
    return (
        f"Subscription is on chain {chain_id}, expected {expected.chain_id} "
        f"({expected.name})"
    )


class SubscriptionService:
    """Charges, inspects and revokes recurring authorizations.

    Attributes:
        source: Where authorizations are looked up
        registry: Network clients per chain id
        orchestrator: Retry orchestrator used for submissions
        manager_address: Spend permission manager contract
        confirmation_timeout_seconds: Upper bound on one receipt wait
        default_testnet: Network expected when callers pass ``testnet=None``

    Example:
        service = SubscriptionService(store, registry)
        result = await service.charge("0x71319c...", "9.99")
        if result.is_success:
            print(result.transaction_id)  # "base:0x..."
    """

    def __init__(
        self,
        source: AuthorizationSource,
        registry: NetworkClientRegistry,
        orchestrator: Optional[RetryOrchestrator] = None,
        manager_address: Optional[str] = None,
        confirmation_timeout_seconds: Optional[float] = None,
        default_testnet: Optional[bool] = None,
        config_factory: Callable[[], ResilienceConfig] = create_resilience_config,
        clock: Callable[[], float] = time.time,
    ):
        settings = get_settings()
        self.source = source
        self.registry = registry
        self.orchestrator = orchestrator or RetryOrchestrator()
        self.manager_address = (
            manager_address or settings.networks.SPEND_PERMISSION_MANAGER_ADDRESS
        )
        self.confirmation_timeout_seconds = (
            confirmation_timeout_seconds
            if confirmation_timeout_seconds is not None
            else settings.subscriptions.confirmation_timeout_seconds
        )
        self.default_testnet = (
            settings.subscriptions.default_testnet
            if default_testnet is None
            else default_testnet
        )
        self.config_factory = config_factory
        self.clock = clock

    async def prepare_charge(
        self,
        authorization_id: str,
        amount: ChargeAmount,
        testnet: Optional[bool] = None,
        recipient: Optional[str] = None,
        now: Optional[float] = None,
    ) -> PreparedCharge:
        """Validate a charge and build its call batch without submitting it.

        Args:
            authorization_id: Permission hash of the authorization
            amount: Smallest-unit int, decimal string in token units
                (``"9.99"``), or ``MAX_REMAINING``
            testnet: Expect Base Sepolia instead of Base
            recipient: Forward the charged amount to this address
            now: Evaluation time in epoch seconds (defaults to the clock)

        Returns:
            PreparedCharge with the resolved amount and calls.

        Raises:
            ChargeValidationError: If the authorization cannot be charged.
        """
        authorization, network = await self._load(authorization_id, testnet)
        spend_state = await self._read_state(authorization)
        status = self._resolve_active_status(authorization, spend_state, now)
        value = self._resolve_amount(amount, status.remaining, network)
        calls = prepare_charge_calls(
            authorization, value, self.manager_address, recipient=recipient
        )
        return PreparedCharge(
            authorization=authorization,
            amount=value,
            calls=tuple(calls),
            status=status,
        )

    async def charge(
        self,
        authorization_id: str,
        amount: ChargeAmount,
        config: Optional[ResilienceConfig] = None,
        testnet: Optional[bool] = None,
        recipient: Optional[str] = None,
        now: Optional[float] = None,
    ) -> SubmissionResult:
        """Charge a recurring authorization for the current period.

        Returns:
            SUCCESS with the chain-scoped transaction id, or a failure
            result. Validation failures have zero attempts.
        """
        with bind_operation_context(authorization_id=authorization_id):
            try:
                prepared = await self.prepare_charge(
                    authorization_id, amount, testnet=testnet, recipient=recipient, now=now
                )
            except ChargeValidationError as e:
                return self._rejected("charge_validation_failed", e)
            except Exception as e:
                return self._state_read_failed(e)

            client = self.registry.get(prepared.authorization.chain_id)
            operation = CallBatchOperation(
                client, prepared.calls, self.confirmation_timeout_seconds
            )
            logger.info(
                "charge_submitting",
                chain_id=prepared.authorization.chain_id,
                amount=prepared.amount,
                remaining=prepared.status.remaining,
                call_count=len(prepared.calls),
                has_recipient=recipient is not None,
            )
            result = await self.orchestrator.submit(
                operation, config or self.config_factory()
            )
            self._log_result("charge", result)
            return result

    async def get_status(
        self,
        authorization_id: str,
        testnet: Optional[bool] = None,
        now: Optional[float] = None,
    ) -> SubscriptionStatus:
        """Report a subscription's status in token units.

        An unknown id is reported as not subscribed rather than raised.

        Raises:
            ChargeValidationError: On a network or asset mismatch.
            PeriodNotStartedError: If the subscription has not started yet.
        """
        authorization = await self.source.fetch(authorization_id)
        if authorization is None:
            logger.info("subscription_not_found", authorization_id=authorization_id)
            return SubscriptionStatus(is_subscribed=False, recurring_charge="0")

        network = self._check_network(authorization, testnet)
        spend_state = await self._read_state(authorization)
        status = resolve_status(authorization, spend_state, self._now(now))
        decimals = network.usdc_decimals

        return SubscriptionStatus(
            is_subscribed=status.is_subscribed,
            recurring_charge=format_units(authorization.allowance, decimals),
            remaining_charge_in_period=format_units(status.remaining, decimals),
            spent_in_current_period=format_units(
                status.spent_in_current_period, decimals
            ),
            current_period_start=_to_datetime(status.period_start),
            next_period_start=_to_datetime(status.next_period_start),
            period_in_days=authorization.period_in_days,
            subscription_owner=authorization.spender,
        )

    async def prepare_revoke(
        self, authorization_id: str, testnet: Optional[bool] = None
    ) -> ContractCall:
        """Validate a revoke request and build its call.

        Raises:
            ChargeValidationError: If the authorization is unknown or on the
                wrong network or asset.
        """
        authorization, _ = await self._load(authorization_id, testnet)
        return prepare_revoke_call(authorization, self.manager_address)

    async def revoke(
        self,
        authorization_id: str,
        config: Optional[ResilienceConfig] = None,
        testnet: Optional[bool] = None,
    ) -> SubmissionResult:
        """Revoke a recurring authorization as its spender."""
        with bind_operation_context(authorization_id=authorization_id):
            try:
                authorization, _ = await self._load(authorization_id, testnet)
            except ChargeValidationError as e:
                return self._rejected("revoke_validation_failed", e)

            call = prepare_revoke_call(authorization, self.manager_address)
            client = self.registry.get(authorization.chain_id)
            operation = CallBatchOperation(
                client, [call], self.confirmation_timeout_seconds
            )
            logger.info("revoke_submitting", chain_id=authorization.chain_id)
            result = await self.orchestrator.submit(
                operation, config or self.config_factory()
            )
            self._log_result("revoke", result)
            return result

    async def _load(
        self, authorization_id: str, testnet: Optional[bool]
    ) -> tuple[RecurringAuthorization, NetworkSpec]:
        authorization = await self.source.fetch(authorization_id)
        if authorization is None:
            raise SubscriptionNotFoundError(authorization_id)
        return authorization, self._check_network(authorization, testnet)

    def _check_network(
        self, authorization: RecurringAuthorization, testnet: Optional[bool]
    ) -> NetworkSpec:
        testnet = self.default_testnet if testnet is None else testnet
        expected = get_expected_network(testnet)

        if authorization.chain_id != expected.chain_id:
            raise ChargeValidationError(
                FailureKind.NETWORK_MISMATCH,
                _network_mismatch_message(authorization.chain_id, testnet, expected),
            )
        if authorization.token.lower() != expected.usdc_address.lower():
            raise ChargeValidationError(
                FailureKind.ASSET_MISMATCH,
                f"Subscription is not for USDC token. Got {authorization.token}, "
                f"expected {expected.usdc_address}",
            )
        return expected

    async def _read_state(self, authorization: RecurringAuthorization) -> SpendState:
        client: SpendPermissionClient = self.registry.get(authorization.chain_id)
        return await client.read_on_chain_state(authorization)

    def _now(self, now: Optional[float]) -> float:
        return self.clock() if now is None else now

    def _resolve_active_status(
        self,
        authorization: RecurringAuthorization,
        spend_state: SpendState,
        now: Optional[float],
    ) -> AuthorizationStatus:
        try:
            status = resolve_status(authorization, spend_state, self._now(now))
        except PeriodNotStartedError as e:
            raise ChargeValidationError(
                FailureKind.INVALID_AUTHORIZATION,
                "Subscription has not started yet. It will begin at "
                f"{_to_datetime(authorization.start).isoformat()}",
            ) from e

        if status.is_revoked:
            raise ChargeValidationError(
                FailureKind.PERMISSION_REVOKED, "Subscription has been revoked"
            )
        if status.is_expired:
            raise ChargeValidationError(
                FailureKind.INVALID_AUTHORIZATION, "Subscription has expired"
            )
        if not status.is_subscribed:
            raise ChargeValidationError(
                FailureKind.INVALID_AUTHORIZATION, "Subscription is not active"
            )
        return status

    @staticmethod
    def _resolve_amount(amount: ChargeAmount, remaining: int, network: NetworkSpec) -> int:
        decimals = network.usdc_decimals
        if amount == MAX_REMAINING:
            if remaining <= 0:
                raise ChargeValidationError(
                    FailureKind.INSUFFICIENT_ALLOWANCE,
                    "No allowance remaining in the current period",
                )
            return remaining

        if isinstance(amount, int) and not isinstance(amount, bool):
            value = amount
        elif isinstance(amount, str):
            try:
                value = parse_units(amount, decimals)
            except ValueError as e:
                raise ChargeValidationError(FailureKind.INVALID_PARAMS, str(e)) from e
        else:
            raise ChargeValidationError(
                FailureKind.INVALID_PARAMS,
                f"Unsupported charge amount: {amount!r}",
            )

        if value == 0:
            raise ChargeValidationError(
                FailureKind.INVALID_PARAMS, "Spend amount cannot be 0"
            )
        if value < 0:
            raise ChargeValidationError(
                FailureKind.INVALID_PARAMS, "Charge amount must be positive"
            )
        if value > remaining:
            raise ChargeValidationError(
                FailureKind.INSUFFICIENT_ALLOWANCE,
                f"Charge amount {format_units(value, decimals)} exceeds remaining "
                f"allowance {format_units(remaining, decimals)}",
            )
        return value

    @staticmethod
    def _rejected(event: str, error: ChargeValidationError) -> SubmissionResult:
        analysis = classify_failure(error)
        logger.warning(event, failure_kind=analysis.kind.value, error=error.message)
        return SubmissionResult.unrecoverable(analysis, message=error.message)

    @staticmethod
    def _state_read_failed(error: Exception) -> SubmissionResult:
        analysis = classify_failure(error)
        logger.error(
            "charge_state_read_failed",
            failure_kind=analysis.kind.value,
            error=str(error),
        )
        if analysis.is_recoverable:
            return SubmissionResult.exhausted(analysis, message=str(error))
        return SubmissionResult.unrecoverable(analysis, message=str(error))

    @staticmethod
    def _log_result(operation: str, result: SubmissionResult) -> None:
        if result.is_success:
            logger.info(
                f"{operation}_succeeded",
                transaction_id=result.transaction_id,
                attempts=result.attempts,
            )
        else:
            logger.warning(
                f"{operation}_failed",
                status=result.status.value,
                failure_kind=result.classification.kind.value
                if result.classification
                else None,
                attempts=result.attempts,
                recovery=result.recovery_summary(),
            )
