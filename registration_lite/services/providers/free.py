"""
Provider for orders with nothing to pay.
"""

from registration_lite.core.errors import PaymentDeclinedError
from registration_lite.schemas.reservation import PaymentCompleted
from registration_lite.services.interfaces.payment_provider import register_provider
from registration_lite.services.providers.checkout import CheckoutPaymentProvider


@register_provider("free")
class FreeProvider(CheckoutPaymentProvider):

    async def pay_ticket(self, **params) -> PaymentCompleted:
        if not self.context.reservation.is_free:
            raise PaymentDeclinedError(self.name, "This order has an amount due")
        return await self.checkout({})
