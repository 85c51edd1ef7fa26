"""Errors for the subscriptions module."""

from infrastructure.operations.failures import FailureKind


class ChargeValidationError(Exception):
    """Raised when a charge or revoke request fails validation.

    The failure kind travels with the error so the classifier maps it
    without inspecting the message.

    Attributes:
        failure_kind: FailureKind describing the rejection
        message: human-friendly message
    """

    def __init__(self, failure_kind: FailureKind, message: str):
        super().__init__(message)
        self.failure_kind = failure_kind
        self.message = message


class SubscriptionNotFoundError(ChargeValidationError):
    """No recurring authorization exists for the given id."""

    def __init__(self, authorization_id: str):
        super().__init__(
            FailureKind.INVALID_AUTHORIZATION,
            f"Subscription with ID {authorization_id} not found",
        )
        self.authorization_id = authorization_id
