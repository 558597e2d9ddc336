"""
Stripe payment provider.

Card collection and 3-D Secure happen in Stripe's own client (out of our
hands); the host passes a `confirm_payment` coroutine that confirms the
reservation's payment intent and returns the resulting intent, or a dict
carrying an `error`. Only a `succeeded` intent proceeds to checkout.
"""

from typing import Any, Awaitable, Callable, Optional

from registration_lite.core.errors import PaymentDeclinedError
from registration_lite.core.logging import get_logger
from registration_lite.schemas.reservation import PaymentCompleted
from registration_lite.services.interfaces.payment_provider import register_provider
from registration_lite.services.providers.checkout import CheckoutPaymentProvider

logger = get_logger(__name__)

ConfirmPayment = Callable[[str, dict], Awaitable[dict]]


@register_provider("stripe")
class StripeProvider(CheckoutPaymentProvider):

    async def pay_ticket(
        self,
        confirm_payment: Optional[ConfirmPayment] = None,
        zip_code: Optional[str] = None,
        **params: Any,
    ) -> PaymentCompleted:
        reservation = self.context.reservation
        body = {"billing_address_zip_code": zip_code} if zip_code else {}

        if reservation.is_free:
            return await self.checkout(body)

        if confirm_payment is None:
            raise ValueError("stripe payments with an amount due need a confirm_payment callback")

        billing = {"billing_details": {"address": {"postal_code": zip_code}}}
        intent = await confirm_payment(reservation.payment_gateway_client_token, billing)

        error = intent.get("error")
        if error:
            message = error.get("message", "") if isinstance(error, dict) else str(error)
            logger.warning("stripe_payment_declined", reservation=reservation.hash, message=message)
            self.context.widget.notifier("Payment Error", message, "error")
            raise PaymentDeclinedError(self.name, message)

        if intent.get("status") != "succeeded":
            raise PaymentDeclinedError(self.name, f"Payment intent is {intent.get('status')}")

        return await self.checkout(body, provider_reference=intent.get("id"))
