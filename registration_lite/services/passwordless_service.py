"""
Passwordless (one-time code) login.

The code is sent and redeemed by functions the host supplies; this module
only keeps the challenge state in step with those calls.
"""

from typing import Any, Awaitable, Callable, Optional

from registration_lite.core.errors import NoPendingChallengeError
from registration_lite.core.logging import get_logger
from registration_lite.schemas.events import WidgetEvent
from registration_lite.schemas.passwordless import PasswordlessChallenge
from registration_lite.services.busy_gate import widget_loading
from registration_lite.services.context import WidgetContext

logger = get_logger(__name__)

GetPasswordlessCode = Callable[[str], Awaitable[Any]]
LoginWithCode = Callable[[str, str], Awaitable[Any]]


def _is_error_payload(response: Any) -> bool:
    return isinstance(response, dict) and bool(response.get("error"))


async def get_login_code(ctx: WidgetContext, email: str, get_passwordless_code: GetPasswordlessCode) -> Any:
    """Ask the server to email a one-time code. Failures propagate unchanged."""
    challenge = PasswordlessChallenge(email=email)
    ctx.dispatch(WidgetEvent.PASSWORDLESS_CODE_REQUESTED, challenge.email)

    with widget_loading(ctx.dispatch, "passwordless_code"):
        response = await get_passwordless_code(challenge.email)

    code_length = response.get("response") if isinstance(response, dict) else None
    ctx.dispatch(WidgetEvent.PASSWORDLESS_CODE_LENGTH_SET, code_length)
    logger.info("passwordless_code_requested", code_length=code_length)
    return response


async def passwordless_login(
    ctx: WidgetContext,
    challenge: Optional[PasswordlessChallenge],
    code: str,
    login_with_code: LoginWithCode,
) -> Any:
    """
    Redeem `code` for the pending challenge's email.

    Returns the redemption response, or None when the call itself failed.
    Failures only flag the challenge; login is not on the purchase path.
    """
    if challenge is None or not challenge.email:
        raise NoPendingChallengeError("No passwordless code has been requested")

    with widget_loading(ctx.dispatch, "passwordless_login"):
        try:
            response = await login_with_code(code, challenge.email)
        except Exception as e:
            logger.warning("passwordless_login_failed", error=repr(e))
            ctx.dispatch(WidgetEvent.PASSWORDLESS_ERROR)
            return None

    if _is_error_payload(response):
        logger.info("passwordless_code_rejected")
        ctx.dispatch(WidgetEvent.PASSWORDLESS_ERROR)
    return response
