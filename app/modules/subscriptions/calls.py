"""Contract calls for charging and revoking recurring authorizations.

A charge is one atomic batch: activate the signed authorization
(``approveWithSignature``, a no-op once approved), then ``spend`` against
it, optionally followed by a token ``transfer`` that forwards the charged
amount to another recipient.
"""

from typing import Optional

from infrastructure.clients.chain.protocols import ContractCall
from infrastructure.operations.failures import FailureKind
from modules.subscriptions.domain.errors import ChargeValidationError
from modules.subscriptions.domain.models import RecurringAuthorization


def spend_permission_args(authorization: RecurringAuthorization) -> tuple:
    """Authorization fields in the order the manager contract expects."""
    return (
        authorization.account,
        authorization.spender,
        authorization.token,
        authorization.allowance,
        authorization.period_seconds,
        authorization.start,
        authorization.end,
        authorization.salt,
        authorization.extra_data,
    )


def prepare_charge_calls(
    authorization: RecurringAuthorization,
    amount: int,
    manager_address: str,
    recipient: Optional[str] = None,
) -> list[ContractCall]:
    """Build the call batch that charges ``amount`` against an authorization.

    Raises:
        ChargeValidationError: If the amount is not positive (invalid_params).
    """
    if amount <= 0:
        raise ChargeValidationError(
            FailureKind.INVALID_PARAMS, "Spend amount cannot be 0"
        )

    args = spend_permission_args(authorization)
    calls = [
        ContractCall(
            to=manager_address,
            function="approveWithSignature",
            args=(args, authorization.signature),
        ),
        ContractCall(to=manager_address, function="spend", args=(args, amount)),
    ]
    if recipient:
        calls.append(
            ContractCall(
                to=authorization.token,
                function="transfer",
                args=(recipient, amount),
            )
        )
    return calls


def prepare_revoke_call(
    authorization: RecurringAuthorization, manager_address: str
) -> ContractCall:
    """Build the call that revokes an authorization as its spender."""
    return ContractCall(
        to=manager_address,
        function="revokeAsSpender",
        args=(spend_permission_args(authorization),),
    )
