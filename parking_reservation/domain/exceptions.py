"""Errors raised by the booking and slot services.

Rule violations subclass ``ValueError`` so the routers can answer them with a
400 unless a more specific status applies.
"""


class NotFoundError(ValueError):
    """A slot, booking or user does not exist."""


class SlotNotAvailableError(ValueError):
    pass


class BookingOverlapError(ValueError):
    pass


class InvalidTimeRangeError(ValueError):
    pass


class BookingNotCancellableError(ValueError):
    pass


class DuplicateSlotError(ValueError):
    pass


class SlotInUseError(ValueError):
    pass


class PaymentFailedError(ValueError):
    """The gateway declined or did not complete a charge or refund."""


class NotBookingOwnerError(Exception):
    """The caller tried to act on another user's booking."""


class PaymentGatewayError(Exception):
    """The gateway could not be reached or answered with an unexpected error."""

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.original_error = original_error
