"""
Tests for the payment provider registry and the built-in providers.
"""

import json

import pytest

from conftest import SUMMIT_PATH, make_request, reservation_body
from registration_lite.core.errors import (
    NoActiveReservationError,
    PaymentDeclinedError,
    ServerError,
    UnknownPaymentProviderError,
)
from registration_lite.schemas.events import PurchaseStep, WidgetEvent
from registration_lite.schemas.reservation import PaymentCompleted
from registration_lite.services.interfaces import payment_provider
from registration_lite.services.interfaces.payment_provider import (
    PaymentProvider,
    get_provider_class,
    register_provider,
    registered_providers,
)

RESERVE_PATH = f"{SUMMIT_PATH}/orders/reserve"
CHECKOUT_PATH = f"{SUMMIT_PATH}/orders/a1b2c3/checkout"


async def reserve_paid(widget, fake_api, amount=20):
    fake_api.add("POST", RESERVE_PATH, json=reservation_body(amount=amount))
    return await widget.reserve_ticket(make_request())


@pytest.fixture
def scoped_registry(monkeypatch):
    """Registrations made by a test are dropped when it finishes."""
    monkeypatch.setattr(payment_provider, "_registry", dict(payment_provider._registry))


def test_builtin_providers_are_registered():
    import registration_lite.services.provider_registry  # noqa: F401

    assert {"free", "lawpay", "stripe"} <= set(registered_providers())


def test_unknown_provider_fails_fast():
    with pytest.raises(UnknownPaymentProviderError) as exc_info:
        get_provider_class("paypal")
    assert exc_info.value.provider == "paypal"


@pytest.mark.asyncio
async def test_unknown_provider_on_free_reservation(widget, fake_api):
    fake_api.add("POST", RESERVE_PATH, json=reservation_body(amount=0))

    with pytest.raises(UnknownPaymentProviderError):
        await widget.reserve_ticket(make_request(provider="paypal"))

    assert fake_api.calls("PUT", CHECKOUT_PATH) == []
    assert widget.state.widget_loading is False


@pytest.mark.asyncio
async def test_registered_provider_receives_context(widget, fake_api, scoped_registry):
    seen = []

    @register_provider("test-invoice")
    class InvoiceProvider(PaymentProvider):
        async def pay_ticket(self, **params):
            seen.append((self.context, params))
            completed = PaymentCompleted(provider=self.name, amount=self.context.reservation.amount)
            self.context.dispatch(WidgetEvent.RESERVATION_PAID, completed)
            return completed

    await reserve_paid(widget, fake_api)
    completed = await widget.pay_ticket("test-invoice", po_number="PO-77")

    context, params = seen[0]
    assert context.reservation.hash == "a1b2c3"
    assert context.summit_id == 31
    assert context.user_profile == {"email": "jane@example.com"}
    assert context.access_token == "test-access-token"
    assert context.api_base_url == "https://api.test"
    assert params == {"po_number": "PO-77"}
    assert completed.amount == 20
    assert widget.state.reservation is None


def test_scoped_registration_is_removed_afterwards():
    assert "test-invoice" not in registered_providers()
    assert "stripe" in registered_providers()


@pytest.mark.asyncio
async def test_stripe_confirms_then_checks_out(widget, fake_api):
    fake_api.add("PUT", CHECKOUT_PATH, json={"id": 501, "number": "ORD-9", "amount": 20})
    await reserve_paid(widget, fake_api)
    confirmations = []

    async def confirm_payment(client_secret, billing):
        confirmations.append((client_secret, billing))
        return {"id": "pi_123", "status": "succeeded"}

    completed = await widget.pay_ticket("stripe", confirm_payment=confirm_payment, zip_code="94105")

    assert confirmations[0][0] == "pi_123_secret_456"
    assert confirmations[0][1]["billing_details"]["address"]["postal_code"] == "94105"
    assert completed.provider == "stripe"
    assert completed.provider_reference == "pi_123"
    assert completed.amount == 20
    assert widget.state.checkout == completed
    assert widget.state.reservation is None


@pytest.mark.asyncio
async def test_stripe_decline_keeps_reservation(widget, fake_api, notifications):
    await reserve_paid(widget, fake_api)

    async def confirm_payment(client_secret, billing):
        return {"error": {"message": "Your card was declined."}}

    with pytest.raises(PaymentDeclinedError):
        await widget.pay_ticket("stripe", confirm_payment=confirm_payment)

    assert notifications == [("Payment Error", "Your card was declined.", "error")]
    assert fake_api.calls("PUT", CHECKOUT_PATH) == []
    assert widget.state.reservation.hash == "a1b2c3"
    assert widget.state.step == PurchaseStep.PAYMENT
    assert widget.state.widget_loading is False


@pytest.mark.asyncio
async def test_lawpay_sends_card_token(widget, fake_api):
    fake_api.add("PUT", CHECKOUT_PATH, json={"id": 501, "amount": 20})
    await reserve_paid(widget, fake_api)

    completed = await widget.pay_ticket("lawpay", token="lp_tok_1", zip_code="10001")

    request = fake_api.calls("PUT", CHECKOUT_PATH)[0]
    assert json.loads(request.content) == {"payment_method_id": "lp_tok_1", "billing_address_zip_code": "10001"}
    assert completed.provider_reference == "lp_tok_1"


@pytest.mark.asyncio
async def test_lawpay_requires_token_for_amount_due(widget, fake_api):
    await reserve_paid(widget, fake_api)

    with pytest.raises(ValueError):
        await widget.pay_ticket("lawpay")


@pytest.mark.asyncio
async def test_free_provider_rejects_amount_due(widget, fake_api):
    await reserve_paid(widget, fake_api)

    with pytest.raises(PaymentDeclinedError):
        await widget.pay_ticket("free")


@pytest.mark.asyncio
async def test_checkout_server_error_surfaces_message(widget, fake_api, notifications, auth_errors):
    fake_api.add("PUT", CHECKOUT_PATH, status=500, json={"message": "Checkout unavailable"})
    await reserve_paid(widget, fake_api)

    with pytest.raises(ServerError):
        await widget.pay_ticket("lawpay", token="lp_tok_1")

    assert ("Server Error", "Checkout unavailable", "error") in notifications
    assert auth_errors == []


@pytest.mark.asyncio
async def test_pay_without_reservation(widget):
    with pytest.raises(NoActiveReservationError):
        await widget.pay_ticket("stripe")
