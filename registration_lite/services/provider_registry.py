"""
Payment provider factory.

Builds exactly one provider for the requested name and immediately asks it
to collect payment. An unknown name is a configuration error and fails
before anything is sent.
"""

from typing import Optional

from registration_lite.core.logging import get_logger
from registration_lite.core.metrics import record_payment_dispatch
from registration_lite.schemas.reservation import PaymentCompleted, Reservation
from registration_lite.services import providers  # noqa: F401  (registers built-ins)
from registration_lite.services.busy_gate import widget_loading
from registration_lite.services.context import WidgetContext
from registration_lite.services.interfaces.payment_provider import (
    PaymentProvider,
    ProviderContext,
    get_provider_class,
)

logger = get_logger(__name__)


def build(provider: str, context: ProviderContext) -> PaymentProvider:
    """Instantiate the provider registered under `provider`."""
    return get_provider_class(provider)(context)


async def pay_ticket_with_provider(
    ctx: WidgetContext,
    reservation: Reservation,
    summit_id: int,
    provider: str,
    user_profile: Optional[dict] = None,
    params: Optional[dict] = None,
) -> PaymentCompleted:
    """Collect payment for `reservation` through the named provider."""
    with widget_loading(ctx.dispatch, "pay_reservation"):
        access_token = await ctx.get_access_token()
        current_provider = build(provider, ProviderContext(
            reservation=reservation,
            summit_id=summit_id,
            user_profile=user_profile,
            access_token=access_token,
            api_base_url=ctx.api.base_url,
            dispatch=ctx.dispatch,
            widget=ctx,
        ))
        logger.info("payment_dispatched", provider=provider, reservation=reservation.hash)

        try:
            completed = await current_provider.pay_ticket(**(params or {}))
        except Exception as e:
            record_payment_dispatch(provider, completed=False)
            logger.warning("payment_failed", provider=provider, error=repr(e))
            raise

    record_payment_dispatch(provider, completed=True)
    return completed
