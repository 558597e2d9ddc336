"""
Widget session state.

The state is an immutable snapshot. `reduce` applies one emitted event and
returns the next snapshot; `WidgetStore` owns the current snapshot and fans
every action out to its subscribers (the UI layer).
"""

from typing import Any, Callable, Optional
from pydantic import BaseModel, Field

from registration_lite.schemas.catalog import TaxType, TicketType
from registration_lite.schemas.events import Action, PurchaseStep, WidgetEvent
from registration_lite.schemas.passwordless import PasswordlessChallenge
from registration_lite.schemas.reservation import PaymentCompleted, Reservation


class WidgetSettings(BaseModel):
    api_base_url: Optional[str] = None
    summit_id: Optional[int] = None
    marketing_data: Optional[dict] = None
    user_profile: Optional[dict] = None
    ticket_types: Optional[tuple[TicketType, ...]] = None
    tax_types: Optional[tuple[TaxType, ...]] = None

    model_config = {"frozen": True}


class WidgetState(BaseModel):
    reservation: Optional[Reservation] = None
    checkout: Optional[PaymentCompleted] = None
    step: PurchaseStep = PurchaseStep.SELECT_TICKET
    widget_loading: bool = False
    settings: WidgetSettings = Field(default_factory=WidgetSettings)
    passwordless: PasswordlessChallenge = Field(default_factory=PasswordlessChallenge)
    invitation: Optional[dict] = None
    now: Optional[int] = None

    model_config = {"frozen": True}


def _with_settings(state: WidgetState, **changes) -> WidgetState:
    return state.model_copy(update={"settings": state.settings.model_copy(update=changes)})


def _load_initial_vars(state: WidgetState, payload: dict) -> WidgetState:
    summit_data = payload.get("summit_data") or {}
    ticket_types = summit_data.get("ticket_types")
    return _with_settings(
        state,
        marketing_data=payload.get("marketing_data"),
        summit_id=summit_data.get("id"),
        ticket_types=tuple(TicketType.model_validate(t) for t in ticket_types) if ticket_types is not None else None,
        user_profile=payload.get("profile_data"),
        api_base_url=payload.get("api_base_url"),
    )


def reduce(state: WidgetState, action: Action) -> WidgetState:
    """Apply one action. Events without a state effect return the same snapshot."""
    event, payload = action.type, action.payload

    if event == WidgetEvent.LOADING_START:
        return state.model_copy(update={"widget_loading": True})
    if event == WidgetEvent.LOADING_STOP:
        return state.model_copy(update={"widget_loading": False})
    if event == WidgetEvent.INITIAL_SETTINGS_LOADED:
        return _load_initial_vars(state, payload)
    if event == WidgetEvent.PROFILE_DATA_LOADED:
        return _with_settings(state, user_profile=payload)
    if event == WidgetEvent.STEP_CHANGED:
        return state.model_copy(update={"step": PurchaseStep(payload)})

    # Catalog lists are replaced wholesale, never merged
    if event == WidgetEvent.TICKET_TYPES_LOADED:
        return _with_settings(state, ticket_types=tuple(payload or ()))
    if event == WidgetEvent.TAX_TYPES_LOADED:
        return _with_settings(state, tax_types=tuple(payload or ()))

    if event == WidgetEvent.RESERVATION_CREATED:
        return state.model_copy(update={"reservation": payload})
    if event in (WidgetEvent.RESERVATION_DELETED, WidgetEvent.RESERVATION_CLEARED):
        return state.model_copy(update={"reservation": None})
    if event == WidgetEvent.RESERVATION_PAID:
        return state.model_copy(update={"checkout": payload, "reservation": None})

    # A new code request overwrites the prior challenge
    if event == WidgetEvent.PASSWORDLESS_CODE_REQUESTED:
        return state.model_copy(update={"passwordless": PasswordlessChallenge(email=payload)})
    if event == WidgetEvent.PASSWORDLESS_CODE_LENGTH_SET:
        return state.model_copy(update={
            "passwordless": state.passwordless.model_copy(update={"code_length": payload}),
        })
    if event == WidgetEvent.PASSWORDLESS_ERROR:
        return state.model_copy(update={
            "passwordless": state.passwordless.model_copy(update={"error": True}),
        })

    if event == WidgetEvent.INVITATION_CLEARED:
        return state.model_copy(update={"invitation": None})
    if event == WidgetEvent.INVITATION_LOADED:
        return state.model_copy(update={"invitation": payload})

    if event == WidgetEvent.WIDGET_STATE_CLEARED:
        return WidgetState(settings=state.settings)
    if event == WidgetEvent.CLOCK_UPDATED:
        return state.model_copy(update={"now": payload})

    return state


Listener = Callable[[Action, WidgetState], Any]


class WidgetStore:
    """Holds the current WidgetState and applies dispatched events to it."""

    def __init__(self, state: Optional[WidgetState] = None):
        self._state = state if state is not None else WidgetState()
        self._listeners: list[Listener] = []

    @property
    def state(self) -> WidgetState:
        return self._state

    def dispatch(self, event: WidgetEvent, payload: Any = None) -> Action:
        action = Action(type=event, payload=payload)
        self._state = reduce(self._state, action)
        for listener in list(self._listeners):
            listener(action, self._state)
        return action

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
