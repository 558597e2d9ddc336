"""
LawPay payment provider.

The LawPay hosted fields tokenize the card in the browser; the resulting
one-time token is the payment method sent with the checkout call.
"""

from typing import Any, Optional

from registration_lite.schemas.reservation import PaymentCompleted
from registration_lite.services.interfaces.payment_provider import register_provider
from registration_lite.services.providers.checkout import CheckoutPaymentProvider


@register_provider("lawpay")
class LawPayProvider(CheckoutPaymentProvider):

    async def pay_ticket(
        self,
        token: Optional[str] = None,
        zip_code: Optional[str] = None,
        **params: Any,
    ) -> PaymentCompleted:
        body = {"billing_address_zip_code": zip_code} if zip_code else {}

        if self.context.reservation.is_free:
            return await self.checkout(body)

        if not token:
            raise ValueError("lawpay payments with an amount due need a card token")

        body["payment_method_id"] = token
        return await self.checkout(body, provider_reference=token)
