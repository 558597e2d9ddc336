"""
Registration widget facade.

What the UI layer talks to. It owns the store, wires a WidgetContext around
the host's collaborators, and feeds each operation the state slices it needs.

It also sequences the flow: "create reservation" is only offered while no
reservation is active, which is what keeps the session at one reservation.
"""

from typing import Any, Awaitable, Callable, Optional, Union

import httpx

from registration_lite.core.config import get_settings
from registration_lite.core.errors import (
    InvalidTicketQuantityError,
    RegistrationError,
    ReservationAlreadyActiveError,
)
from registration_lite.core.logging import get_logger, setup_logging
from registration_lite.infrastructure.api_client import ApiClient
from registration_lite.schemas.catalog import CatalogSnapshot, get_ticket_max_quantity
from registration_lite.schemas.events import PurchaseStep, WidgetEvent
from registration_lite.schemas.reservation import PaymentCompleted, Reservation, ReservationRequest
from registration_lite.services import catalog_service, invitation_service, passwordless_service
from registration_lite.services import reservation_service
from registration_lite.services.context import (
    AuthErrorHandler,
    Notifier,
    WidgetContext,
    default_auth_error_handler,
    log_notifier,
)
from registration_lite.services.error_handling import maybe_await
from registration_lite.services.step_machine import change_step
from registration_lite.state import Listener, WidgetState, WidgetStore

logger = get_logger(__name__)

AccessTokenProvider = Callable[[], Union[str, Awaitable[str]]]


class RegistrationWidget:
    """
    Usage:
        async with RegistrationWidget(get_access_token, api_base_url=url) as widget:
            widget.load_session(summit_data=summit)
            await widget.load_catalog()
            await widget.reserve_ticket(request)
    """

    def __init__(
        self,
        get_access_token: AccessTokenProvider,
        *,
        api_base_url: Optional[str] = None,
        auth_error_handler: AuthErrorHandler = default_auth_error_handler,
        notifier: Notifier = log_notifier,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        store: Optional[WidgetStore] = None,
    ):
        self.settings = get_settings()
        self.store = store or WidgetStore()
        self.api = ApiClient(base_url=api_base_url, transport=transport)
        self._get_access_token = get_access_token
        self.context = WidgetContext(
            api=self.api,
            get_access_token=self._access_token,
            dispatch=self.store.dispatch,
            auth_error_handler=auth_error_handler,
            notifier=notifier,
            settings=self.settings,
        )

    async def __aenter__(self) -> "RegistrationWidget":
        setup_logging()
        logger.info(
            "widget_starting",
            app=self.settings.APP_NAME,
            version=self.settings.APP_VERSION,
            environment=self.settings.ENVIRONMENT,
            api_base_url=self.api.base_url,
        )
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.api.aclose()

    async def _access_token(self) -> str:
        # Fetched fresh for every call; the host handles refresh
        return await maybe_await(self._get_access_token())

    @property
    def state(self) -> WidgetState:
        return self.store.state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        return self.store.subscribe(listener)

    def _summit_id(self) -> int:
        summit_id = self.state.settings.summit_id
        if summit_id is None:
            raise RegistrationError("Session not loaded: no summit id")
        return summit_id

    # Session

    def load_session(
        self,
        summit_data: dict,
        marketing_data: Optional[dict] = None,
        profile_data: Optional[dict] = None,
    ) -> None:
        self.store.dispatch(WidgetEvent.INITIAL_SETTINGS_LOADED, {
            "summit_data": summit_data,
            "marketing_data": marketing_data,
            "profile_data": profile_data,
            "api_base_url": self.api.base_url,
        })
        logger.info("session_loaded", summit_id=summit_data.get("id"))

    def load_profile_data(self, profile_data: dict) -> None:
        self.store.dispatch(WidgetEvent.PROFILE_DATA_LOADED, profile_data)

    def clear_widget_state(self) -> None:
        self.store.dispatch(WidgetEvent.WIDGET_STATE_CLEARED)

    def clear_reservation(self) -> None:
        self.store.dispatch(WidgetEvent.RESERVATION_CLEARED)

    def go_to_login(self) -> None:
        self.store.dispatch(WidgetEvent.LOGIN_REQUESTED)

    def update_clock(self, timestamp: int) -> None:
        self.store.dispatch(WidgetEvent.CLOCK_UPDATED, timestamp)

    # Purchase flow

    def change_step(self, step: Union[PurchaseStep, int]) -> PurchaseStep:
        return change_step(self.store.dispatch, step)

    async def load_catalog(self) -> CatalogSnapshot:
        return await catalog_service.get_ticket_types_and_taxes(self.context, self._summit_id())

    def _check_quantity(self, request: ReservationRequest) -> None:
        ticket_types = self.state.settings.ticket_types or ()
        ticket_type = next((t for t in ticket_types if t.id == request.ticket_type_id), None)
        if ticket_type is None:
            return
        max_quantity = get_ticket_max_quantity(ticket_type)
        if max_quantity is None:
            return
        if max_quantity < 1:
            raise InvalidTicketQuantityError(f"Ticket type {ticket_type.id} is sold out")
        if request.ticket_quantity > max_quantity:
            raise InvalidTicketQuantityError(
                f"Requested {request.ticket_quantity} tickets, at most {max_quantity} allowed"
            )

    async def reserve_ticket(
        self,
        request: ReservationRequest,
        on_error: Optional[reservation_service.OnError] = None,
    ) -> Reservation:
        if self.state.reservation is not None:
            raise ReservationAlreadyActiveError(
                f"Reservation {self.state.reservation.hash} is still active"
            )
        self._check_quantity(request)
        return await reservation_service.create_reservation(
            self.context,
            self._summit_id(),
            request,
            provider=request.provider or self.settings.DEFAULT_PAYMENT_PROVIDER,
            on_error=on_error,
            user_profile=self.state.settings.user_profile,
        )

    async def remove_reserved_ticket(self) -> Any:
        return await reservation_service.remove_reserved_ticket(
            self.context, self._summit_id(), self.state.reservation,
        )

    async def pay_ticket(self, provider: Optional[str] = None, **params: Any) -> PaymentCompleted:
        return await reservation_service.pay_reservation(
            self.context,
            self._summit_id(),
            self.state.reservation,
            provider or self.settings.DEFAULT_PAYMENT_PROVIDER,
            user_profile=self.state.settings.user_profile,
            params=params,
        )

    # Login and invitations

    async def get_login_code(self, email: str, get_passwordless_code) -> Any:
        return await passwordless_service.get_login_code(self.context, email, get_passwordless_code)

    async def passwordless_login(self, code: str, login_with_code) -> Any:
        return await passwordless_service.passwordless_login(
            self.context, self.state.passwordless, code, login_with_code,
        )

    async def get_my_invitation(self) -> Optional[dict]:
        return await invitation_service.get_my_invitation(self.context, self._summit_id())
