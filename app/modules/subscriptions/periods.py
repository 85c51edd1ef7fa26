"""Period calculation for recurring authorizations.

Periods tile ``[authorization.start, authorization.end)`` back to back,
each ``period_seconds`` long, with the last one cut short at ``end``.
"""

from typing import Union

from modules.subscriptions.domain.models import (
    Expired,
    Period,
    RecurringAuthorization,
)


class PeriodNotStartedError(ValueError):
    """The authorization's first period has not begun yet."""

    def __init__(self, start: int, now: int):
        super().__init__(f"Authorization starts at {start}, current time is {now}")
        self.start = start
        self.now = now


def current_period(
    authorization: RecurringAuthorization, now: Union[int, float]
) -> Union[Period, Expired]:
    """Return the period containing ``now``.

    Args:
        authorization: The recurring authorization
        now: Current time in epoch seconds (fractions are floored)

    Returns:
        The active Period, or Expired once ``now >= authorization.end``.

    Raises:
        PeriodNotStartedError: If ``now < authorization.start``.
    """
    now = int(now)
    if now < authorization.start:
        raise PeriodNotStartedError(authorization.start, now)
    if now >= authorization.end:
        return Expired(ended_at=authorization.end)

    index = (now - authorization.start) // authorization.period_seconds
    start = authorization.start + index * authorization.period_seconds
    end = min(start + authorization.period_seconds, authorization.end)
    return Period(start=start, end=end, index=index)
