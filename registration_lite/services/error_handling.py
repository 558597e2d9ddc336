"""
Status-code driven failure classification.

classify_failure() turns an ApiFailure into a typed ApiError. The call-site
handlers below decide which side effects (notification, escalation to the
auth-error handler) a classified failure triggers; callers always raise the
returned error afterwards.
"""

import inspect
from typing import Any

from registration_lite.core.errors import (
    ApiError,
    AuthFailureError,
    ForbiddenError,
    NotFoundError,
    PreconditionFailedError,
    RequestTimeoutError,
    ServerError,
)
from registration_lite.core.logging import get_logger
from registration_lite.infrastructure.api_client import ApiFailure

logger = get_logger(__name__)

_BY_STATUS = {
    403: ForbiddenError,
    404: NotFoundError,
    412: PreconditionFailedError,
    500: ServerError,
}

# Failures a caller can act on without re-authenticating
NON_FATAL_ERRORS = (RequestTimeoutError, NotFoundError, ServerError)


def classify_failure(failure: ApiFailure) -> ApiError:
    if failure.timeout:
        return RequestTimeoutError("Request timed out", body=failure.body)
    error_class = _BY_STATUS.get(failure.status_code, AuthFailureError)
    return error_class(failure.message, status_code=failure.status_code, body=failure.body)


async def maybe_await(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


async def escalate_auth_error(ctx, error: ApiError, failure: ApiFailure) -> None:
    logger.warning("auth_error_escalated", status_code=failure.status_code)
    await maybe_await(ctx.auth_error_handler(error, failure))


def notify_server_error(ctx, error: ApiError) -> None:
    ctx.notifier("Server Error", error.message, "error")


async def handle_api_failure(ctx, failure: ApiFailure, notify_server_errors: bool = False) -> ApiError:
    """
    Shared policy for catalog, deletion and checkout calls.

    Timeouts, 404 and 500 stay local. Everything else is handed to the
    auth-error handler.
    """
    error = classify_failure(failure)
    if isinstance(error, NON_FATAL_ERRORS):
        if notify_server_errors and isinstance(error, ServerError):
            notify_server_error(ctx, error)
        return error

    await escalate_auth_error(ctx, error, failure)
    return error
