"""
Error taxonomy for the registration core.

Failures coming back from the ordering API are classified by status code
before they leave a service boundary:

  Timeout            -> RequestTimeoutError       (never escalated)
  404                -> NotFoundError
  403                -> ForbiddenError
  412                -> PreconditionFailedError   (inventory taken, promo code exhausted)
  500                -> ServerError
  anything else      -> AuthFailureError          (handed to the auth-error handler)

Local errors (no API call involved) derive directly from RegistrationError.
"""

from typing import Any, Optional


class RegistrationError(Exception):
    """Base class for every error raised by the registration core."""


class ApiError(RegistrationError):
    status_code: Optional[int] = None

    def __init__(self, message: str = "", status_code: Optional[int] = None, body: Any = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.body = body

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(status={self.status_code}, message={self.message!r})>"


class RequestTimeoutError(ApiError):
    pass


class NotFoundError(ApiError):
    status_code = 404


class ForbiddenError(ApiError):
    status_code = 403


class PreconditionFailedError(ApiError):
    status_code = 412


class ServerError(ApiError):
    status_code = 500


class AuthFailureError(ApiError):
    pass


class UnknownPaymentProviderError(RegistrationError):
    """Configuration error: no payment provider registered under this name."""

    def __init__(self, provider: str):
        super().__init__(f"Unknown payment provider: {provider!r}")
        self.provider = provider


class PaymentDeclinedError(RegistrationError):
    """The payment back-end refused the charge."""

    def __init__(self, provider: str, message: str):
        super().__init__(message)
        self.provider = provider
        self.message = message


class NoActiveReservationError(RegistrationError):
    pass


class ReservationAlreadyActiveError(RegistrationError):
    pass


class NoPendingChallengeError(RegistrationError):
    pass


class InvalidTicketQuantityError(RegistrationError):
    pass
