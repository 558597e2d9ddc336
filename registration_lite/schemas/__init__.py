from .catalog import BadgeType, CatalogSnapshot, TaxType, TicketType
from .events import Action, PurchaseStep, WidgetEvent
from .passwordless import PasswordlessChallenge
from .reservation import (
    Company,
    PaymentCompleted,
    PersonalInformation,
    Reservation,
    ReservationRequest,
)

__all__ = [
    'Action', 'BadgeType', 'CatalogSnapshot', 'Company', 'PasswordlessChallenge',
    'PaymentCompleted', 'PersonalInformation', 'PurchaseStep', 'Reservation',
    'ReservationRequest', 'TaxType', 'TicketType', 'WidgetEvent',
]
