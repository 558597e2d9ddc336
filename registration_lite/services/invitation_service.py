"""
Registration invitation lookup for the current user.

Having no invitation (404) or no scope to read it (403) is normal and
bypassed silently.
"""

from typing import Optional

from registration_lite.core.errors import ForbiddenError, NotFoundError, RequestTimeoutError, ServerError
from registration_lite.core.logging import get_logger
from registration_lite.infrastructure.api_client import ApiFailure
from registration_lite.schemas.events import WidgetEvent
from registration_lite.services.busy_gate import widget_loading
from registration_lite.services.context import WidgetContext
from registration_lite.services.error_handling import (
    classify_failure,
    escalate_auth_error,
    notify_server_error,
)

logger = get_logger(__name__)


async def get_my_invitation(ctx: WidgetContext, summit_id: int) -> Optional[dict]:
    with widget_loading(ctx.dispatch, "load_invitation"):
        access_token = await ctx.get_access_token()
        ctx.dispatch(WidgetEvent.INVITATION_CLEARED)

        result = await ctx.api.get(
            ctx.api_url(f"/summits/{summit_id}/registration-invitations/me"),
            {"access_token": access_token},
        )
        if isinstance(result, ApiFailure):
            error = classify_failure(result)
            if isinstance(error, ServerError):
                notify_server_error(ctx, error)
            elif not isinstance(error, (NotFoundError, ForbiddenError, RequestTimeoutError)):
                await escalate_auth_error(ctx, error, result)
            logger.info("invitation_unavailable", summit_id=summit_id, status_code=result.status_code)
            return None

        ctx.dispatch(WidgetEvent.INVITATION_LOADED, result.body)

    logger.info("invitation_loaded", summit_id=summit_id)
    return result.body
