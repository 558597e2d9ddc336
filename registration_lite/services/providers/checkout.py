"""
Order checkout shared by every provider.

Once the vendor side has accepted the payment (or nothing is owed), the
reservation is checked out against the ordering API and the normalized
completion event is emitted.
"""

from typing import Optional

from registration_lite.core.logging import get_logger
from registration_lite.infrastructure.api_client import ApiFailure
from registration_lite.schemas.events import WidgetEvent
from registration_lite.schemas.reservation import PaymentCompleted
from registration_lite.services.error_handling import handle_api_failure
from registration_lite.services.interfaces.payment_provider import PaymentProvider

logger = get_logger(__name__)


class CheckoutPaymentProvider(PaymentProvider):

    async def checkout(self, body: dict, provider_reference: Optional[str] = None) -> PaymentCompleted:
        ctx = self.context
        widget = ctx.widget
        reservation = ctx.reservation
        params = {
            "access_token": ctx.access_token,
            "expand": widget.settings.CHECKOUT_EXPAND,
        }
        url = widget.api_url(f"/summits/{ctx.summit_id}/orders/{reservation.hash}/checkout")

        result = await widget.api.put(url, body, params)
        if isinstance(result, ApiFailure):
            logger.warning("checkout_failed", provider=self.name, status_code=result.status_code)
            raise await handle_api_failure(widget, result, notify_server_errors=True)

        order = result.body if isinstance(result.body, dict) else {}
        completed = PaymentCompleted(
            provider=self.name,
            amount=order.get("amount", reservation.amount),
            provider_reference=provider_reference or order.get("number"),
            order=order,
        )
        ctx.dispatch(WidgetEvent.RESERVATION_PAID, completed)
        logger.info(
            "reservation_paid",
            provider=self.name,
            reservation=reservation.hash,
            amount=completed.amount,
        )
        return completed
