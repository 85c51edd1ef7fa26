"""Status resolution for recurring authorizations."""

from typing import Union

from modules.subscriptions.domain.models import (
    AuthorizationStatus,
    Expired,
    RecurringAuthorization,
    SpendState,
)
from modules.subscriptions.periods import current_period


def resolve_status(
    authorization: RecurringAuthorization,
    spend_state: SpendState,
    now: Union[int, float],
) -> AuthorizationStatus:
    """Combine an authorization, its on-chain state and the time into a status.

    Pure: the same inputs always give the same status.

    An authorization that has never been charged has no on-chain record, so
    the contract does not report it valid yet. Zero spend in the current
    period is therefore treated like a valid record; only revocation and
    expiry make it inactive.

    Raises:
        PeriodNotStartedError: If ``now`` is before the authorization starts.
    """
    period = current_period(authorization, now)
    spent = spend_state.spend_in_current_period
    remaining = max(authorization.allowance - spent, 0)
    no_on_chain_record = spent == 0

    if isinstance(period, Expired):
        return AuthorizationStatus(
            is_subscribed=False,
            remaining=remaining,
            period_start=None,
            period_end=None,
            next_period_start=None,
            spent_in_current_period=spent,
            allowance=authorization.allowance,
            is_revoked=spend_state.is_revoked,
            is_expired=True,
            is_approved_onchain=spend_state.is_valid,
        )

    is_subscribed = not spend_state.is_revoked and (
        spend_state.is_valid or no_on_chain_record
    )
    return AuthorizationStatus(
        is_subscribed=is_subscribed,
        remaining=remaining,
        period_start=period.start,
        period_end=period.end,
        next_period_start=period.end if period.end < authorization.end else None,
        spent_in_current_period=spent,
        allowance=authorization.allowance,
        is_revoked=spend_state.is_revoked,
        is_expired=False,
        is_approved_onchain=spend_state.is_valid,
    )
