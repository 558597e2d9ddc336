"""
Events emitted by the registration core, and the purchase step ordinal.

The store applies each event to the widget state; the UI observes the result.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Callable


class PurchaseStep(IntEnum):
    SELECT_TICKET = 0
    ENTER_DETAILS = 1
    PAYMENT = 2


class WidgetEvent(str, Enum):
    LOADING_START = "LOADING_START"
    LOADING_STOP = "LOADING_STOP"
    INITIAL_SETTINGS_LOADED = "INITIAL_SETTINGS_LOADED"
    PROFILE_DATA_LOADED = "PROFILE_DATA_LOADED"
    STEP_CHANGED = "STEP_CHANGED"

    TICKET_TYPES_REQUESTED = "TICKET_TYPES_REQUESTED"
    TICKET_TYPES_LOADED = "TICKET_TYPES_LOADED"
    TAX_TYPES_LOADED = "TAX_TYPES_LOADED"

    RESERVATION_REQUESTED = "RESERVATION_REQUESTED"
    RESERVATION_CREATED = "RESERVATION_CREATED"
    RESERVATION_CREATE_FAILED = "RESERVATION_CREATE_FAILED"
    RESERVATION_DELETE_REQUESTED = "RESERVATION_DELETE_REQUESTED"
    RESERVATION_DELETED = "RESERVATION_DELETED"
    RESERVATION_DELETE_FAILED = "RESERVATION_DELETE_FAILED"
    RESERVATION_CLEARED = "RESERVATION_CLEARED"
    RESERVATION_PAID = "RESERVATION_PAID"

    PASSWORDLESS_CODE_REQUESTED = "PASSWORDLESS_CODE_REQUESTED"
    PASSWORDLESS_CODE_LENGTH_SET = "PASSWORDLESS_CODE_LENGTH_SET"
    PASSWORDLESS_ERROR = "PASSWORDLESS_ERROR"
    LOGIN_REQUESTED = "LOGIN_REQUESTED"

    INVITATION_CLEARED = "INVITATION_CLEARED"
    INVITATION_LOADED = "INVITATION_LOADED"

    WIDGET_STATE_CLEARED = "WIDGET_STATE_CLEARED"
    CLOCK_UPDATED = "CLOCK_UPDATED"


@dataclass(frozen=True)
class Action:
    type: WidgetEvent
    payload: Any = None


Dispatch = Callable[..., Any]
