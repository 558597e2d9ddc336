"""
Reservation manager: creates and deletes the session's single reservation.

CREATE
======
  1. Build the outbound entity: one line item per requested ticket, each
     carrying the promo code, affiliation collapsed to one field.
  2. POST /summits/{id}/orders/reserve
  3. Route on the amount due:
       0       -> straight into the chosen payment provider (nothing to pay,
                  so there is no payment step)
       > 0     -> step machine moves to PAYMENT

  Failure classification:
       412     -> caller's on_error(error, response); no step change
       404     -> "Validation Error" notification with the server message
       500     -> "Server Error" notification with the server message
       timeout -> raised as is
       other   -> auth-error handler

DELETE
======
  DELETE /summits/{id}/orders/{hash}, then back to SELECT_TICKET whatever
  the outcome. The local reservation is only dropped once the server has
  confirmed the deletion, so a failed delete keeps the hash for a retry.

Every failure is raised to the caller after classification, and the busy
gate is always released first. Neither operation checks whether another
reservation is active; the widget facade only offers "create" while none is.
"""

from typing import Any, Callable, Optional

from registration_lite.core.errors import (
    ApiError,
    NoActiveReservationError,
    NotFoundError,
    PreconditionFailedError,
    RequestTimeoutError,
    ServerError,
)
from registration_lite.core.logging import get_logger
from registration_lite.core.metrics import record_reservation_attempt
from registration_lite.infrastructure.api_client import ApiFailure
from registration_lite.schemas.events import PurchaseStep, WidgetEvent
from registration_lite.schemas.reservation import PaymentCompleted, Reservation, ReservationRequest
from registration_lite.services.busy_gate import widget_loading
from registration_lite.services.context import WidgetContext
from registration_lite.services.error_handling import (
    classify_failure,
    escalate_auth_error,
    handle_api_failure,
    maybe_await,
    notify_server_error,
)
from registration_lite.services.provider_registry import pay_ticket_with_provider
from registration_lite.services.step_machine import change_step

logger = get_logger(__name__)

OnError = Callable[[ApiError, ApiFailure], Any]

_OUTCOMES = {
    PreconditionFailedError: "precondition_failed",
    NotFoundError: "not_found",
    ServerError: "server_error",
    RequestTimeoutError: "timeout",
}


async def _handle_create_failure(
    ctx: WidgetContext,
    failure: ApiFailure,
    on_error: Optional[OnError],
) -> ApiError:
    error = classify_failure(failure)
    record_reservation_attempt(_OUTCOMES.get(type(error), "auth_failure"))

    if isinstance(error, PreconditionFailedError) and on_error is not None:
        await maybe_await(on_error(error, failure))
    elif isinstance(error, NotFoundError):
        ctx.notifier("Validation Error", error.message, "warning")
    elif isinstance(error, ServerError):
        notify_server_error(ctx, error)
    elif not isinstance(error, RequestTimeoutError):
        await escalate_auth_error(ctx, error, failure)
    return error


async def create_reservation(
    ctx: WidgetContext,
    summit_id: int,
    request: ReservationRequest,
    provider: str,
    on_error: Optional[OnError] = None,
    user_profile: Optional[dict] = None,
) -> Reservation:
    """
    Reserve the requested tickets.

    Returns the created reservation. When nothing is owed, payment through
    `provider` has already completed by the time this returns.
    """
    promo_code = request.personal_information.promo_code or None
    entity = request.to_entity()

    with widget_loading(ctx.dispatch, "create_reservation"):
        try:
            access_token = await ctx.get_access_token()
            params = {
                "access_token": access_token,
                "expand": ctx.settings.RESERVATION_EXPAND,
            }
            ctx.dispatch(WidgetEvent.RESERVATION_REQUESTED, entity)

            result = await ctx.api.post(ctx.api_url(f"/summits/{summit_id}/orders/reserve"), entity, params)
            if isinstance(result, ApiFailure):
                raise await _handle_create_failure(ctx, result, on_error)

            reservation = Reservation.model_validate(result.body)
            reservation = reservation.model_copy(update={"promo_code": promo_code})
        except Exception as e:
            ctx.dispatch(WidgetEvent.RESERVATION_CREATE_FAILED, e)
            logger.warning("reservation_create_failed", summit_id=summit_id, error=repr(e))
            raise

        ctx.dispatch(WidgetEvent.RESERVATION_CREATED, reservation)

    record_reservation_attempt("created")
    logger.info(
        "reservation_created",
        summit_id=summit_id,
        reservation=reservation.hash,
        tickets=len(reservation.tickets),
        amount=reservation.amount,
    )

    if reservation.is_free:
        await pay_ticket_with_provider(ctx, reservation, summit_id, provider, user_profile=user_profile)
        return reservation

    change_step(ctx.dispatch, PurchaseStep.PAYMENT)
    return reservation


async def remove_reserved_ticket(
    ctx: WidgetContext,
    summit_id: int,
    reservation: Optional[Reservation],
) -> Any:
    """Delete the active reservation and restart the flow at SELECT_TICKET."""
    if reservation is None:
        raise NoActiveReservationError("There is no active reservation to delete")

    with widget_loading(ctx.dispatch, "delete_reservation"):
        try:
            access_token = await ctx.get_access_token()
            params = {
                "access_token": access_token,
                "expand": ctx.settings.DELETE_RESERVATION_EXPAND,
            }
            ctx.dispatch(WidgetEvent.RESERVATION_DELETE_REQUESTED, reservation.hash)

            result = await ctx.api.delete(ctx.api_url(f"/summits/{summit_id}/orders/{reservation.hash}"), params)
            if isinstance(result, ApiFailure):
                raise await handle_api_failure(ctx, result, notify_server_errors=True)
        except Exception as e:
            ctx.dispatch(WidgetEvent.RESERVATION_DELETE_FAILED, e)
            change_step(ctx.dispatch, PurchaseStep.SELECT_TICKET)
            logger.warning("reservation_delete_failed", reservation=reservation.hash, error=repr(e))
            raise

        ctx.dispatch(WidgetEvent.RESERVATION_DELETED, result.body)

    change_step(ctx.dispatch, PurchaseStep.SELECT_TICKET)
    logger.info("reservation_deleted", reservation=reservation.hash)
    return result.body


async def pay_reservation(
    ctx: WidgetContext,
    summit_id: int,
    reservation: Optional[Reservation],
    provider: str,
    user_profile: Optional[dict] = None,
    params: Optional[dict] = None,
) -> PaymentCompleted:
    """Explicit payment action from the PAYMENT step."""
    if reservation is None:
        raise NoActiveReservationError("There is no active reservation to pay for")
    return await pay_ticket_with_provider(
        ctx, reservation, summit_id, provider, user_profile=user_profile, params=params,
    )
