"""
Payment provider strategy interface and registration.

A provider is selected by name at reservation time. New providers register
themselves with @register_provider("name"); nothing else has to change.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

from registration_lite.core.errors import UnknownPaymentProviderError
from registration_lite.schemas.events import Dispatch
from registration_lite.schemas.reservation import PaymentCompleted, Reservation

if TYPE_CHECKING:
    from registration_lite.services.context import WidgetContext


@dataclass(frozen=True)
class ProviderContext:
    """Everything a provider needs to collect payment for one reservation."""

    reservation: Reservation
    summit_id: int
    user_profile: Optional[dict]
    access_token: str
    api_base_url: str
    dispatch: Dispatch
    widget: "WidgetContext"


class PaymentProvider(ABC):
    """
    Interface for payment collection strategies.

    Implementations:
    - FreeProvider: zero-due orders, checkout only
    - StripeProvider: confirm a payment intent with Stripe, then checkout
    - LawPayProvider: checkout with a LawPay card token
    """

    name: str = ""

    def __init__(self, context: ProviderContext):
        self.context = context

    @abstractmethod
    async def pay_ticket(self, **params) -> PaymentCompleted:
        """
        Collect payment for the context's reservation.

        Emits RESERVATION_PAID through the context's dispatch sink and
        returns the same normalized completion event.
        """
        pass


_registry: dict[str, type[PaymentProvider]] = {}


def register_provider(name: str):
    """Class decorator adding a provider to the registry under `name`."""

    def decorator(cls: type[PaymentProvider]) -> type[PaymentProvider]:
        cls.name = name
        _registry[name] = cls
        return cls

    return decorator


def get_provider_class(name: str) -> type[PaymentProvider]:
    try:
        return _registry[name]
    except KeyError:
        raise UnknownPaymentProviderError(name) from None


def registered_providers() -> list[str]:
    return sorted(_registry)
