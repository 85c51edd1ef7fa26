"""Data models for the subscriptions module.

Lightweight frozen dataclasses describing a recurring authorization (a
signed spend permission), its on-chain spend state and the statuses
derived from them. None of these are mutated after construction.

Amounts are integers in the token's smallest unit. Times are epoch seconds.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

SECONDS_PER_DAY = 86400


@dataclass(frozen=True)
class RecurringAuthorization:
    """A signed permission letting ``spender`` pull up to ``allowance`` of
    ``token`` from ``account`` once per period between ``start`` and ``end``.

    Attributes:
        account: Subscriber's account address
        spender: Address allowed to charge
        token: Token contract address
        allowance: Maximum spend per period (smallest unit)
        period_seconds: Length of one period
        start: First second the authorization is usable
        end: First second it is no longer usable
        salt: Disambiguates otherwise identical authorizations
        signature: Opaque subscriber signature over the fields above
        chain_id: Network the authorization was signed for
        permission_hash: Identifier of the authorization (the subscription id)
        extra_data: Opaque extra payload passed through to the contract
    """

    account: str
    spender: str
    token: str
    allowance: int
    period_seconds: int
    start: int
    end: int
    salt: Union[int, str]
    signature: str
    chain_id: int
    permission_hash: str
    extra_data: str = "0x"

    def __post_init__(self) -> None:
        if self.period_seconds <= 0:
            raise ValueError("period_seconds must be positive")
        if self.end <= self.start:
            raise ValueError("end must be after start")
        if self.allowance < 0:
            raise ValueError("allowance must not be negative")

    @property
    def period_in_days(self) -> int:
        return self.period_seconds // SECONDS_PER_DAY


@dataclass(frozen=True)
class Period:
    """One charging window, half-open: ``[start, end)``."""

    start: int
    end: int
    index: int

    def contains(self, now: int) -> bool:
        return self.start <= now < self.end


@dataclass(frozen=True)
class Expired:
    """Returned instead of a period once the authorization has ended."""

    ended_at: int


@dataclass(frozen=True)
class SpendState:
    """Snapshot of an authorization's on-chain state.

    Attributes:
        spend_in_current_period: Amount already charged this period
        is_revoked: The subscriber or spender revoked the authorization
        is_valid: The contract considers the authorization approved and usable
    """

    spend_in_current_period: int = 0
    is_revoked: bool = False
    is_valid: bool = False

    def __post_init__(self) -> None:
        if self.spend_in_current_period < 0:
            raise ValueError("spend_in_current_period must not be negative")


@dataclass(frozen=True)
class AuthorizationStatus:
    """Derived status of an authorization at a point in time.

    Period fields are None once the authorization has expired.
    ``next_period_start`` is None when the current period is the last one.
    """

    is_subscribed: bool
    remaining: int
    period_start: Optional[int]
    period_end: Optional[int]
    next_period_start: Optional[int]
    spent_in_current_period: int
    allowance: int
    is_revoked: bool
    is_expired: bool
    is_approved_onchain: bool


@dataclass(frozen=True)
class SubscriptionStatus:
    """Subscription status in token units, for callers outside the engine.

    Amounts are decimal strings (``"9.99"``). Only ``is_subscribed`` and
    ``recurring_charge`` are set for an unknown subscription.
    """

    is_subscribed: bool
    recurring_charge: str
    remaining_charge_in_period: Optional[str] = None
    spent_in_current_period: Optional[str] = None
    current_period_start: Optional[datetime] = None
    next_period_start: Optional[datetime] = None
    period_in_days: Optional[int] = None
    subscription_owner: Optional[str] = None
