"""Retry orchestrator driving one submission to a terminal result.

State machine per submission:

    Idle -> Submitting -> Success
                       -> Classifying -> Unrecoverable
                                      -> Exhausted
                                      -> RetryWait -> Submitting
                                      -> Fallback  -> Submitting

The whole loop runs under a single deadline (``timeout_seconds``). Every
transition is reported to the configured progress sink.
"""

import asyncio
import time
from typing import Any, Awaitable, Callable, Optional

import structlog

from infrastructure.operations.classifiers import classify_failure
from infrastructure.operations.failures import FailureAnalysis, FailureKind
from infrastructure.operations.result import SubmissionResult
from infrastructure.resilience.backoff import RandomSource, compute_delay
from infrastructure.resilience.retry.config import ResilienceConfig
from infrastructure.resilience.retry.models import (
    AttemptOutcome,
    CorrectiveAction,
    ProgressEvent,
    ProgressStage,
    SubmissionAttempt,
    SubmissionOptions,
)
from infrastructure.resilience.retry.operation import SubmittableOperation

logger = structlog.get_logger()

_FALLBACK_KINDS = (
    FailureKind.INSUFFICIENT_FUNDS_FOR_GAS,
    FailureKind.SPONSOR_REJECTED,
)


class ReceiptFailedError(Exception):
    """The network receipt does not show a confirmed transaction."""

    failure_kind = FailureKind.TRANSIENT_NETWORK


class RetryOrchestrator:
    """Submits an operation with classification-driven retries.

    Attributes:
        sleep: Awaitable sleep used for backoff waits
        rng: Random source for backoff jitter
        clock: Monotonic clock used for the deadline and elapsed time

    Example:
        orchestrator = RetryOrchestrator()
        result = await orchestrator.submit(
            CallBatchOperation(client, calls),
            ResilienceConfig(max_retries=3),
        )
        if result.is_success:
            print(result.transaction_id)
    """

    def __init__(
        self,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        rng: Optional[RandomSource] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.sleep = sleep
        self.rng = rng
        self.clock = clock
        self.log = logger.bind(component="retry_orchestrator")

    async def submit(
        self,
        operation: SubmittableOperation,
        config: Optional[ResilienceConfig] = None,
    ) -> SubmissionResult:
        """Drive ``operation`` until it succeeds or fails terminally.

        Never raises for submission failures; they are returned as
        EXHAUSTED or UNRECOVERABLE results.

        Args:
            operation: Operation to send and confirm
            config: Retry behavior. Library defaults when omitted.

        Returns:
            SubmissionResult with the transaction id or the failure history.
        """
        config = config or ResilienceConfig()
        options = SubmissionOptions()
        history: list[SubmissionAttempt] = []
        started = self.clock()
        deadline = started + config.timeout_seconds
        action = CorrectiveAction.NONE
        fell_back = False
        attempt = 0

        while True:
            attempt += 1
            remaining = deadline - self.clock()
            if remaining <= 0:
                return self._timed_out(config, attempt - 1, history, started)

            self._emit(
                config,
                ProgressEvent(
                    stage=ProgressStage.ATTEMPT_STARTED,
                    attempt=attempt,
                    max_attempts=config.max_attempts,
                    action=action,
                ),
            )
            self.log.info(
                "submission_attempt_started",
                attempt=attempt,
                max_attempts=config.max_attempts,
                action=action.value,
            )

            try:
                transaction_id, error = await asyncio.wait_for(
                    self._attempt(operation, options, deadline), timeout=remaining
                )
            except asyncio.TimeoutError:
                history.append(
                    SubmissionAttempt(
                        attempt=attempt,
                        action=action,
                        outcome=AttemptOutcome.FAILED,
                        failure=self._timeout_analysis(config),
                    )
                )
                return self._timed_out(config, attempt, history, started)

            if error is None:
                elapsed = self.clock() - started
                self._emit(
                    config,
                    ProgressEvent(
                        stage=ProgressStage.SUCCEEDED,
                        attempt=attempt,
                        max_attempts=config.max_attempts,
                        action=action,
                        transaction_id=transaction_id,
                    ),
                )
                self.log.info(
                    "submission_succeeded",
                    attempt=attempt,
                    transaction_id=transaction_id,
                    elapsed_seconds=round(elapsed, 3),
                )
                return SubmissionResult.success(
                    transaction_id, attempts=attempt, elapsed_seconds=elapsed
                )

            analysis = classify_failure(error)
            history.append(
                SubmissionAttempt(
                    attempt=attempt,
                    action=action,
                    outcome=AttemptOutcome.FAILED,
                    failure=analysis,
                )
            )
            self._emit(
                config,
                ProgressEvent(
                    stage=ProgressStage.ATTEMPT_FAILED,
                    attempt=attempt,
                    max_attempts=config.max_attempts,
                    action=action,
                    failure=analysis,
                ),
            )
            self.log.warning(
                "submission_attempt_failed",
                attempt=attempt,
                failure_kind=analysis.kind.value,
                recoverable=analysis.is_recoverable,
                error=analysis.message,
            )

            if not analysis.is_recoverable:
                return self._finish(
                    config,
                    SubmissionResult.unrecoverable(
                        analysis,
                        history=tuple(history),
                        elapsed_seconds=self.clock() - started,
                    ),
                    ProgressStage.UNRECOVERABLE,
                )

            if attempt >= config.max_attempts:
                return self._finish(
                    config,
                    SubmissionResult.exhausted(
                        analysis,
                        history=tuple(history),
                        elapsed_seconds=self.clock() - started,
                    ),
                    ProgressStage.EXHAUSTED,
                )

            action = self._decide_action(analysis.kind, config, fell_back)
            fell_back = fell_back or action == CorrectiveAction.FALLBACK_SPONSORED
            self._apply_action(action, options, config)

            delay = compute_delay(
                config.backoff_strategy,
                attempt,
                config.base_delay_seconds,
                config.max_delay_seconds,
                jitter=config.jitter,
                rng=self.rng,
            )
            remaining = deadline - self.clock()
            if remaining <= 0:
                return self._timed_out(config, attempt, history, started)
            delay = min(delay, remaining)

            self._emit(
                config,
                ProgressEvent(
                    stage=ProgressStage.RETRY_SCHEDULED,
                    attempt=attempt + 1,
                    max_attempts=config.max_attempts,
                    action=action,
                    failure=analysis,
                    delay_seconds=delay,
                ),
            )
            self.log.info(
                "submission_retry_scheduled",
                next_attempt=attempt + 1,
                action=action.value,
                delay_seconds=round(delay, 3),
            )
            await self.sleep(delay)

    async def _attempt(
        self,
        operation: SubmittableOperation,
        options: SubmissionOptions,
        deadline: float,
    ) -> tuple[Optional[str], Optional[Exception]]:
        """Send and confirm once. Failures are returned, not raised."""
        try:
            handle = await operation.send(options)
            receipt = await operation.confirm(
                handle, max(deadline - self.clock(), 0.0)
            )
            if not receipt.succeeded:
                raise ReceiptFailedError("Operation receipt reported failed")
            if not receipt.transaction_hash:
                raise ReceiptFailedError("No transaction hash in operation receipt")
        except Exception as e:
            return None, e

        # The receipt is confirmed from here on; never report it as a failure.
        try:
            return operation.transaction_id(receipt), None
        except Exception as e:
            self.log.warning(
                "transaction_id_encoding_failed",
                transaction_hash=receipt.transaction_hash,
                error=str(e),
            )
            return receipt.transaction_hash, None

    @staticmethod
    def _decide_action(
        kind: FailureKind, config: ResilienceConfig, fell_back: bool
    ) -> CorrectiveAction:
        if kind == FailureKind.INSUFFICIENT_GAS and config.auto_gas_adjust:
            return CorrectiveAction.INCREASE_BUDGET
        if kind == FailureKind.NONCE_CONFLICT and config.auto_nonce_refresh:
            return CorrectiveAction.REFRESH_NONCE
        if kind in _FALLBACK_KINDS and config.fallback_to_sponsored and not fell_back:
            return CorrectiveAction.FALLBACK_SPONSORED
        return CorrectiveAction.NONE

    def _apply_action(
        self,
        action: CorrectiveAction,
        options: SubmissionOptions,
        config: ResilienceConfig,
    ) -> None:
        options.refresh_nonce = action == CorrectiveAction.REFRESH_NONCE
        if action == CorrectiveAction.INCREASE_BUDGET:
            options.gas_multiplier *= config.gas_multiplier
            self.log.info(
                "submission_gas_budget_increased",
                gas_multiplier=round(options.gas_multiplier, 4),
            )
        elif action == CorrectiveAction.FALLBACK_SPONSORED:
            options.paymaster_url = config.fallback_paymaster_url
            self.log.info("submission_fallback_to_sponsored")

    @staticmethod
    def _timeout_analysis(config: ResilienceConfig) -> FailureAnalysis:
        return FailureAnalysis.of(
            FailureKind.NETWORK_TIMEOUT,
            f"Submission timed out after {config.timeout_seconds}s",
        )

    def _timed_out(
        self,
        config: ResilienceConfig,
        attempt: int,
        history: list[SubmissionAttempt],
        started: float,
    ) -> SubmissionResult:
        analysis = self._timeout_analysis(config)
        self.log.warning(
            "submission_deadline_exceeded",
            attempts=attempt,
            timeout_seconds=config.timeout_seconds,
        )
        return self._finish(
            config,
            SubmissionResult.exhausted(
                analysis,
                history=tuple(history),
                message=analysis.message,
                elapsed_seconds=self.clock() - started,
            ),
            ProgressStage.EXHAUSTED,
        )

    def _finish(
        self,
        config: ResilienceConfig,
        result: SubmissionResult,
        stage: ProgressStage,
    ) -> SubmissionResult:
        last = result.history[-1] if result.history else None
        self._emit(
            config,
            ProgressEvent(
                stage=stage,
                attempt=result.attempts,
                max_attempts=config.max_attempts,
                action=last.action if last else CorrectiveAction.NONE,
                failure=result.classification,
            ),
        )
        log_method = (
            self.log.error
            if stage == ProgressStage.UNRECOVERABLE
            else self.log.warning
        )
        log_method(
            f"submission_{stage.value}",
            attempts=result.attempts,
            failure_kind=result.classification.kind.value
            if result.classification
            else None,
            message=result.message,
        )
        return result

    def _emit(self, config: ResilienceConfig, event: ProgressEvent) -> None:
        if config.progress_sink is None:
            return
        try:
            config.progress_sink(event)
        except Exception as e:
            self.log.error(
                "progress_sink_failed",
                stage=event.stage.value,
                attempt=event.attempt,
                error=str(e),
                exc_info=True,
            )
