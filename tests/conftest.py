"""
Pytest fixtures: a fake ordering API, the widget under test, and recorders
for emitted events, notifications and auth-error escalations.

The fake API sits behind the real ApiClient through httpx.MockTransport, so
every test exercises the actual request/response handling.
"""

import asyncio
from typing import AsyncGenerator

import httpx
import pytest
import pytest_asyncio

from registration_lite.schemas.reservation import Company, PersonalInformation, ReservationRequest
from registration_lite.widget import RegistrationWidget

SUMMIT_ID = 31
API_BASE_URL = "https://api.test"
SUMMIT_PATH = f"/api/v1/summits/{SUMMIT_ID}"
ACCESS_TOKEN = "test-access-token"


class FakeOrderingApi:
    """Route table keyed by (method, path); records every request it serves."""

    def __init__(self):
        self.routes: dict = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, status: int = 200, json=None, raises=None, delay: float = 0):
        self.routes[(method, path)] = (status, json, raises, delay)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    def __call__(self, request: httpx.Request):
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": f"No route for {request.url.path}"})
        status, body, raises, delay = route
        if delay:
            # MockTransport awaits a coroutine result on the async client
            return self._respond_later(request, delay, status, body, raises)
        return self._respond(request, status, body, raises)

    async def _respond_later(self, request, delay, status, body, raises) -> httpx.Response:
        await asyncio.sleep(delay)
        return self._respond(request, status, body, raises)

    def _respond(self, request, status, body, raises) -> httpx.Response:
        if raises is not None:
            raise raises("simulated failure", request=request)
        return httpx.Response(status, json=body)


def reservation_body(amount: float = 0, quantity: int = 1, hash: str = "a1b2c3") -> dict:
    return {
        "id": 501,
        "hash": hash,
        "owner_email": "jane@example.com",
        "owner_first_name": "Jane",
        "owner_last_name": "Doe",
        "amount": amount,
        "currency": "USD",
        "payment_gateway_client_token": "pi_123_secret_456",
        "tickets": [
            {"id": 900 + i, "number": f"TICKET-{i}", "ticket_type": {"id": 7, "cost": amount / quantity}}
            for i in range(quantity)
        ],
    }


def make_request(quantity: int = 1, promo_code=None, company=None, provider=None) -> ReservationRequest:
    return ReservationRequest(
        personal_information=PersonalInformation(
            email="jane@example.com",
            first_name="Jane",
            last_name="Doe",
            company=company if company is not None else Company(name="Acme"),
            promo_code=promo_code,
        ),
        ticket_type_id=7,
        ticket_quantity=quantity,
        provider=provider,
    )


@pytest.fixture
def fake_api() -> FakeOrderingApi:
    return FakeOrderingApi()


@pytest.fixture
def auth_errors() -> list:
    return []


@pytest.fixture
def notifications() -> list:
    return []


@pytest_asyncio.fixture
async def widget(fake_api, auth_errors, notifications) -> AsyncGenerator[RegistrationWidget, None]:
    """Widget with a loaded session for SUMMIT_ID, talking to the fake API."""

    async def get_access_token():
        return ACCESS_TOKEN

    widget = RegistrationWidget(
        get_access_token,
        api_base_url=API_BASE_URL,
        auth_error_handler=lambda error, response: auth_errors.append((error, response)),
        notifier=lambda title, message, level: notifications.append((title, message, level)),
        transport=httpx.MockTransport(fake_api),
    )
    widget.load_session(summit_data={"id": SUMMIT_ID}, profile_data={"email": "jane@example.com"})
    yield widget
    await widget.aclose()


@pytest.fixture
def events(widget) -> list:
    """Every action dispatched after the fixture is requested, in order."""
    recorded = []
    widget.subscribe(lambda action, state: recorded.append(action))
    return recorded
