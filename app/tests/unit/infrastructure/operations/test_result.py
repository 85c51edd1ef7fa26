"""Unit tests for SubmissionResult and FailureAnalysis."""

import pytest

from infrastructure.operations import (
    FailureAnalysis,
    FailureKind,
    SubmissionResult,
    SubmissionStatus,
)
from infrastructure.resilience.retry.models import (
    AttemptOutcome,
    CorrectiveAction,
    SubmissionAttempt,
)


def _failed(attempt, action=CorrectiveAction.NONE, kind=FailureKind.NONCE_CONFLICT):
    return SubmissionAttempt(
        attempt=attempt,
        action=action,
        outcome=AttemptOutcome.FAILED,
        failure=FailureAnalysis.of(kind, "nonce too low"),
    )


@pytest.mark.unit
class TestFailureAnalysis:
    """Tests for FailureAnalysis.of."""

    def test_recoverable_analysis_has_suggested_action(self):
        analysis = FailureAnalysis.of(FailureKind.INSUFFICIENT_GAS, "out of gas")

        assert analysis.is_recoverable
        assert analysis.description == "Transaction ran out of gas during execution"
        assert analysis.suggested_action == "Increasing gas budget"

    def test_unrecoverable_analysis_has_no_suggested_action(self):
        analysis = FailureAnalysis.of(FailureKind.USER_REJECTED)

        assert not analysis.is_recoverable
        assert analysis.suggested_action is None

    def test_every_kind_has_description(self):
        for kind in FailureKind:
            assert kind.description


@pytest.mark.unit
class TestSubmissionResult:
    """Tests for SubmissionResult constructors and helpers."""

    def test_success(self):
        result = SubmissionResult.success("base:0xabc", attempts=2, elapsed_seconds=1.5)

        assert result.is_success
        assert result.status == SubmissionStatus.SUCCESS
        assert result.transaction_id == "base:0xabc"
        assert result.attempts == 2
        assert result.classification is None
        assert result.suggested_actions() == []

    def test_exhausted_counts_history(self):
        history = (_failed(1), _failed(2, CorrectiveAction.REFRESH_NONCE))
        analysis = history[-1].failure

        result = SubmissionResult.exhausted(analysis, history=history)

        assert result.status == SubmissionStatus.EXHAUSTED
        assert not result.is_success
        assert result.attempts == 2
        assert result.message == "Transaction failed after 2 attempts: nonce too low"
        assert result.suggested_actions() == ["Wait a moment and try again"]

    def test_exhausted_message_override(self):
        analysis = FailureAnalysis.of(FailureKind.NETWORK_TIMEOUT)

        result = SubmissionResult.exhausted(analysis, message="Submission timed out after 5s")

        assert result.message == "Submission timed out after 5s"
        assert result.attempts == 0

    def test_unrecoverable_without_history(self):
        """Test a validation failure reported before any submission."""
        analysis = FailureAnalysis.of(FailureKind.PERMISSION_REVOKED, "revoked")

        result = SubmissionResult.unrecoverable(analysis)

        assert result.status == SubmissionStatus.UNRECOVERABLE
        assert result.attempts == 0
        assert result.history == ()
        assert result.message == (
            "Unrecoverable transaction error: Recurring authorization has been revoked"
        )
        assert result.suggested_actions() == ["Ask the subscriber to subscribe again"]

    def test_unrecoverable_unknown_has_generic_suggestion(self):
        result = SubmissionResult.unrecoverable(FailureAnalysis.of(FailureKind.UNKNOWN))

        assert result.suggested_actions() == ["Please try again or contact support"]

    def test_recovery_summary_lists_corrective_actions(self):
        history = (
            _failed(1),
            _failed(2, CorrectiveAction.REFRESH_NONCE),
            _failed(3, CorrectiveAction.INCREASE_BUDGET),
        )
        result = SubmissionResult.exhausted(history[-1].failure, history=history)

        assert result.recovery_summary() == (
            "- Attempt 2: Refreshed nonce from network\n"
            "- Attempt 3: Increased gas budget"
        )

    def test_recovery_summary_without_actions(self):
        result = SubmissionResult.exhausted(
            FailureAnalysis.of(FailureKind.TRANSIENT_NETWORK), history=(_failed(1),)
        )

        assert result.recovery_summary() == "No recovery actions were attempted."

    def test_result_is_immutable(self):
        result = SubmissionResult.success("base:0xabc", attempts=1)

        with pytest.raises(AttributeError):
            result.status = SubmissionStatus.EXHAUSTED
