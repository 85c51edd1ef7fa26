"""Unit tests for charge and revoke call preparation."""

import pytest

from infrastructure.operations import FailureKind
from modules.subscriptions.calls import (
    prepare_charge_calls,
    prepare_revoke_call,
    spend_permission_args,
)
from modules.subscriptions.domain.errors import ChargeValidationError
from tests.factories.subscriptions import make_authorization

MANAGER = "0xf85210B21cC50302F477BA56686d2019dC9b67Ad"
RECIPIENT = "0x" + "99" * 20


@pytest.mark.unit
class TestPrepareChargeCalls:
    """Tests for prepare_charge_calls."""

    def test_approve_then_spend(self):
        authorization = make_authorization()
        args = spend_permission_args(authorization)

        calls = prepare_charge_calls(authorization, 500_000, MANAGER)

        assert [call.function for call in calls] == ["approveWithSignature", "spend"]
        assert all(call.to == MANAGER for call in calls)
        assert calls[0].args == (args, authorization.signature)
        assert calls[1].args == (args, 500_000)

    def test_recipient_adds_transfer(self):
        authorization = make_authorization()

        calls = prepare_charge_calls(authorization, 500_000, MANAGER, recipient=RECIPIENT)

        assert len(calls) == 3
        assert calls[2].to == authorization.token
        assert calls[2].function == "transfer"
        assert calls[2].args == (RECIPIENT, 500_000)

    def test_zero_amount_rejected(self):
        with pytest.raises(ChargeValidationError, match="Spend amount cannot be 0") as exc_info:
            prepare_charge_calls(make_authorization(), 0, MANAGER)

        assert exc_info.value.failure_kind == FailureKind.INVALID_PARAMS

    def test_args_follow_contract_order(self):
        authorization = make_authorization(salt=7, extra_data="0x1234")

        args = spend_permission_args(authorization)

        assert args == (
            authorization.account,
            authorization.spender,
            authorization.token,
            authorization.allowance,
            authorization.period_seconds,
            authorization.start,
            authorization.end,
            7,
            "0x1234",
        )


@pytest.mark.unit
def test_prepare_revoke_call():
    authorization = make_authorization()

    call = prepare_revoke_call(authorization, MANAGER)

    assert call.to == MANAGER
    assert call.function == "revokeAsSpender"
    assert call.args == (spend_permission_args(authorization),)
