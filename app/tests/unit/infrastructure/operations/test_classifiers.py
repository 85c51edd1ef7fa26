"""Unit tests for the failure classifier."""

import asyncio

import pytest

from infrastructure.operations import FailureKind, classify_failure


class RpcError(Exception):
    """Error shaped like a JSON-RPC client exception."""

    def __init__(self, message, code=None):
        super().__init__(message)
        self.message = message
        self.code = code


@pytest.mark.unit
class TestMessagePatterns:
    """Tests for classification by error text."""

    @pytest.mark.parametrize(
        "message,expected",
        [
            ("nonce too low", FailureKind.NONCE_CONFLICT),
            ("AA25 invalid account nonce", FailureKind.NONCE_CONFLICT),
            ("out of gas", FailureKind.INSUFFICIENT_GAS),
            ("replacement transaction underpriced", FailureKind.INSUFFICIENT_GAS),
            ("insufficient funds for gas * price + value", FailureKind.INSUFFICIENT_FUNDS_FOR_GAS),
            ("AA21 didn't pay prefund", FailureKind.INSUFFICIENT_FUNDS_FOR_GAS),
            ("paymaster rejected the operation", FailureKind.SPONSOR_REJECTED),
            ("request timed out", FailureKind.NETWORK_TIMEOUT),
            ("503 Service Unavailable", FailureKind.TRANSIENT_NETWORK),
            ("connect ECONNREFUSED 127.0.0.1:8545", FailureKind.TRANSIENT_NETWORK),
            ("User rejected the request.", FailureKind.USER_REJECTED),
            ("execution reverted", FailureKind.CONTRACT_REVERT),
            ("ERC20: transfer amount exceeds balance", FailureKind.INSUFFICIENT_BALANCE),
            ("invalid params", FailureKind.INVALID_PARAMS),
        ],
    )
    def test_classifies_known_messages(self, message, expected):
        """Test that well-known error texts map to their kind."""
        assert classify_failure(message).kind == expected

    def test_spend_permission_revert_keeps_specific_kind(self):
        """Test that spend-permission reverts are not reported as generic reverts."""
        analysis = classify_failure("execution reverted: ExceededSpendPermission")

        assert analysis.kind == FailureKind.INSUFFICIENT_ALLOWANCE
        assert not analysis.is_recoverable

    def test_unauthorized_spend_permission(self):
        analysis = classify_failure("reverted: UnauthorizedSpendPermission()")

        assert analysis.kind == FailureKind.INVALID_AUTHORIZATION

    @pytest.mark.parametrize(
        "message",
        ["AA33 reverted (or OOG)", "execution reverted: paymaster validation failed"],
    )
    def test_paymaster_revert_is_sponsor_rejected(self, message):
        """Test that paymaster reverts stay retryable instead of contract reverts."""
        analysis = classify_failure(message)

        assert analysis.kind == FailureKind.SPONSOR_REJECTED
        assert analysis.is_recoverable

    def test_unrecoverable_patterns_take_precedence(self):
        """Test that an unrecoverable match wins over a recoverable one."""
        analysis = classify_failure("user rejected the request after timeout")

        assert analysis.kind == FailureKind.USER_REJECTED

    def test_matching_is_case_insensitive(self):
        assert classify_failure("NONCE TOO HIGH").kind == FailureKind.NONCE_CONFLICT

    def test_unmatched_message_is_unknown(self):
        analysis = classify_failure("something odd happened")

        assert analysis.kind == FailureKind.UNKNOWN
        assert not analysis.is_recoverable
        assert analysis.message == "something odd happened"


@pytest.mark.unit
class TestErrorShapes:
    """Tests for the different error shapes accepted."""

    def test_exception_message(self):
        analysis = classify_failure(RuntimeError("nonce too low"))

        assert analysis.kind == FailureKind.NONCE_CONFLICT
        assert analysis.message == "nonce too low"

    def test_dict_error_with_code(self):
        analysis = classify_failure({"message": "denied", "code": 4001})

        assert analysis.kind == FailureKind.USER_REJECTED
        assert analysis.code == 4001

    def test_nested_error_code(self):
        analysis = classify_failure({"message": "oops", "error": {"code": -32602}})

        assert analysis.kind == FailureKind.INVALID_PARAMS
        assert analysis.code == -32602

    @pytest.mark.parametrize(
        "error",
        [{"error": "boom"}, {"error": ["x"], "message": "m"}],
    )
    def test_non_dict_nested_error_is_unknown(self, error):
        """Test that a nested error which is not a dict carries no code."""
        analysis = classify_failure(error)

        assert analysis.kind == FailureKind.UNKNOWN
        assert analysis.code is None

    def test_code_attribute(self):
        analysis = classify_failure(RpcError("provider failure", code=4100))

        assert analysis.kind == FailureKind.INVALID_AUTHORIZATION

    def test_code_embedded_in_message(self):
        analysis = classify_failure("request failed with code -32603")

        assert analysis.code == -32603
        assert analysis.kind == FailureKind.TRANSIENT_NETWORK

    def test_http_5xx_code_is_transient(self):
        analysis = classify_failure(RpcError("upstream", code=502))

        assert analysis.kind == FailureKind.TRANSIENT_NETWORK
        assert analysis.is_recoverable

    def test_unknown_code_is_unknown(self):
        assert classify_failure(RpcError("eh", code=1234)).kind == FailureKind.UNKNOWN

    def test_boolean_code_is_ignored(self):
        assert classify_failure({"message": "eh", "code": True}).code is None

    def test_declared_failure_kind_wins(self):
        """Test that an error carrying failure_kind is taken at its word."""

        class SponsorError(Exception):
            failure_kind = FailureKind.SPONSOR_REJECTED

        analysis = classify_failure(SponsorError("execution reverted"))

        assert analysis.kind == FailureKind.SPONSOR_REJECTED

    def test_timeout_exception_type(self):
        assert classify_failure(asyncio.TimeoutError()).kind == FailureKind.NETWORK_TIMEOUT

    def test_connection_error_type(self):
        analysis = classify_failure(ConnectionResetError("peer went away"))

        assert analysis.kind == FailureKind.TRANSIENT_NETWORK

    def test_none_is_unknown(self):
        analysis = classify_failure(None)

        assert analysis.kind == FailureKind.UNKNOWN
        assert analysis.message == ""

    def test_classification_is_deterministic(self):
        first = classify_failure("gas too low")
        second = classify_failure("gas too low")

        assert first == second


@pytest.mark.unit
class TestRecoverability:
    """Tests for the recoverable partition of kinds."""

    @pytest.mark.parametrize(
        "kind",
        [
            FailureKind.INSUFFICIENT_GAS,
            FailureKind.NONCE_CONFLICT,
            FailureKind.NETWORK_TIMEOUT,
            FailureKind.TRANSIENT_NETWORK,
            FailureKind.SPONSOR_REJECTED,
            FailureKind.INSUFFICIENT_FUNDS_FOR_GAS,
        ],
    )
    def test_recoverable_kinds(self, kind):
        assert kind.is_recoverable

    def test_everything_else_is_unrecoverable(self):
        unrecoverable = [kind for kind in FailureKind if not kind.is_recoverable]

        assert len(unrecoverable) == 10
        assert FailureKind.UNKNOWN in unrecoverable
        assert FailureKind.ASSET_MISMATCH in unrecoverable
