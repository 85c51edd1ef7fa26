"""Unit tests for period calculation."""

import pytest

from modules.subscriptions.domain.models import Expired, Period
from modules.subscriptions.periods import PeriodNotStartedError, current_period
from tests.factories.subscriptions import DAY, START, make_authorization


@pytest.mark.unit
class TestCurrentPeriod:
    """Tests for current_period."""

    def test_first_period(self):
        authorization = make_authorization()

        period = current_period(authorization, START)

        assert period == Period(start=START, end=START + DAY, index=0)

    def test_period_containing_now(self):
        authorization = make_authorization()

        period = current_period(authorization, START + 3 * DAY + 100)

        assert period.index == 3
        assert period.start == START + 3 * DAY
        assert period.end == START + 4 * DAY
        assert period.contains(START + 3 * DAY + 100)

    def test_boundary_belongs_to_next_period(self):
        """Test that periods are half-open."""
        authorization = make_authorization()

        period = current_period(authorization, START + DAY)

        assert period.index == 1
        assert period.start == START + DAY
        assert not Period(START, START + DAY, 0).contains(START + DAY)

    def test_last_period_is_cut_at_end(self):
        authorization = make_authorization(end=START + 2 * DAY + 600)

        period = current_period(authorization, START + 2 * DAY + 10)

        assert period == Period(start=START + 2 * DAY, end=START + 2 * DAY + 600, index=2)

    def test_fractional_now_is_floored(self):
        authorization = make_authorization()

        assert current_period(authorization, START + DAY - 0.5).index == 0

    def test_expired_at_end(self):
        authorization = make_authorization(end=START + 10 * DAY)

        result = current_period(authorization, START + 10 * DAY)

        assert result == Expired(ended_at=START + 10 * DAY)

    def test_not_started(self):
        authorization = make_authorization()

        with pytest.raises(PeriodNotStartedError) as exc_info:
            current_period(authorization, START - 1)

        assert exc_info.value.start == START
        assert exc_info.value.now == START - 1

    @pytest.mark.parametrize("offset", [0, 1, DAY - 1, DAY, 5 * DAY + 7, 364 * DAY])
    def test_period_always_contains_now(self, offset):
        authorization = make_authorization()
        now = START + offset

        period = current_period(authorization, now)

        assert period.start <= now < period.end
        assert period.end - period.start <= authorization.period_seconds


@pytest.mark.unit
class TestRecurringAuthorization:
    """Tests for RecurringAuthorization validation."""

    def test_period_in_days(self):
        assert make_authorization(period_seconds=30 * DAY).period_in_days == 30

    @pytest.mark.parametrize(
        "overrides,message",
        [
            ({"period_seconds": 0}, "period_seconds must be positive"),
            ({"end": START}, "end must be after start"),
            ({"allowance": -1}, "allowance must not be negative"),
        ],
    )
    def test_invalid_authorization(self, overrides, message):
        with pytest.raises(ValueError, match=message):
            make_authorization(**overrides)
